# gradverify/services/verification_engine.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy.orm import Session

from gradverify.core.config import Settings, get_settings
from gradverify.core.errors import (
    AggregateRecomputeFailed,
    InvalidArgument,
    NotFound,
    Unauthorized,
    VerificationError,
)
from gradverify.models.award import Award
from gradverify.models.document import Document
from gradverify.models.enums import (
    CATEGORY_FOR_DOCUMENT_TYPE,
    Category,
    Decision,
    DocumentType,
    VerificationStatus,
)
from gradverify.services.aggregate import (
    StudentVerificationAggregate,
    is_profile_complete,
    recompute,
)
from gradverify.services.notification_service import (
    DbNotificationSink,
    NotificationMessage,
    NotificationSink,
)
from gradverify.services.repository import SqlVerificationRepository, VerificationRepository

logger = logging.getLogger(__name__)

Artifact = Union[Document, Award]

CATEGORY_LABELS = {
    Category.PSA: "PSA birth certificate",
    Category.PHOTO: "graduation photo",
    Category.AWARDS: "award",
}


@dataclass(frozen=True)
class DecisionResult:
    artifact: Artifact
    aggregate: StudentVerificationAggregate
    notification: NotificationMessage


class VerificationEngine:
    """
    Single entry point for reviewer decisions on documents and awards.

    Rules:
    - approve / reject are allowed from any current state (re-review is normal)
    - a rejection always carries feedback; blank feedback gets a default
    - the owning student's aggregate is re-derived from persisted artifacts
      after every decision, never adjusted in place
    - exactly one notification per decision, delivered best-effort
    """

    def __init__(
        self,
        repository: VerificationRepository,
        notification_sink: NotificationSink,
        settings: Optional[Settings] = None,
    ):
        self.repository = repository
        self.notification_sink = notification_sink
        self.settings = settings or get_settings()

    # ─────────────────────────────────────────────
    # INPUT COERCION
    # ─────────────────────────────────────────────

    @staticmethod
    def _coerce_decision(decision) -> Decision:
        try:
            return Decision(decision)
        except ValueError:
            raise InvalidArgument(f"Unsupported decision: {decision!r}. Use 'approve' or 'reject'.")

    @staticmethod
    def _coerce_category(category) -> Category:
        try:
            return Category(category)
        except ValueError:
            raise InvalidArgument(f"Unsupported category: {category!r}.")

    def _default_rejection_feedback(self, category: Category) -> str:
        if category == Category.PSA:
            return self.settings.default_psa_rejection_feedback
        if category == Category.PHOTO:
            return self.settings.default_photo_rejection_feedback
        return self.settings.default_award_rejection_feedback

    def _load_document(self, document_id: int) -> Document:
        """
        Only the authoritative (newest) document of its type is reviewable;
        deciding on an older upload would not move the aggregate.
        """
        doc = self.repository.get_document(document_id)
        if not doc:
            raise NotFound("Document not found.")

        current = self.repository.get_authoritative_document(
            doc.student_id, DocumentType(doc.document_type)
        )
        if current is not None and current.id != doc.id:
            raise InvalidArgument("Document has been superseded by a newer upload.")
        return doc

    def _load_artifact(self, artifact_id: int, category: Category) -> Artifact:
        if category == Category.AWARDS:
            award = self.repository.get_award(artifact_id)
            if not award:
                raise NotFound("Award not found.")
            return award

        doc = self._load_document(artifact_id)
        if CATEGORY_FOR_DOCUMENT_TYPE[DocumentType(doc.document_type)] != category:
            raise InvalidArgument(
                f"Document {artifact_id} is a {doc.document_type} document, not {category.value}."
            )
        return doc

    # ─────────────────────────────────────────────
    # AGGREGATE
    # ─────────────────────────────────────────────

    def derive_for_student(self, student_id: int) -> StudentVerificationAggregate:
        """
        Read-only derivation from the artifacts as currently stored.
        """
        profile = self.repository.get_profile(student_id)
        if not profile:
            raise NotFound("Student profile not found.")

        statuses = recompute(
            self.repository.get_authoritative_document(student_id, DocumentType.PSA),
            self.repository.get_authoritative_document(student_id, DocumentType.PHOTO),
            self.repository.list_awards(student_id),
        )
        return StudentVerificationAggregate.build(
            student_id,
            is_profile_complete(profile.student_number, profile.program, profile.department),
            statuses,
        )

    def recompute_for_student(self, student_id: int) -> StudentVerificationAggregate:
        """
        Re-derive and persist the student's aggregate from the current stored
        artifacts. Idempotent; safe to call as a repair after a failed decision.
        """
        return self.repository.save_aggregate(self.derive_for_student(student_id))

    def refresh_aggregate(
        self, student_id: int, artifact: Optional[Artifact] = None
    ) -> StudentVerificationAggregate:
        """
        Recompute after a committed artifact write, retrying transient
        failures. Raises AggregateRecomputeFailed once attempts run out; the
        artifact write stands either way.
        """
        attempts = max(1, self.settings.recompute_max_attempts)
        last_exc: Optional[BaseException] = None

        for attempt in range(1, attempts + 1):
            try:
                return self.recompute_for_student(student_id)
            except VerificationError:
                raise
            except Exception as exc:
                last_exc = exc
                logger.warning(
                    "aggregate recompute failed",
                    extra={"student_id": student_id, "attempt": attempt, "error": str(exc)},
                )

        raise AggregateRecomputeFailed(student_id, artifact=artifact, cause=last_exc) from last_exc

    # ─────────────────────────────────────────────
    # NOTIFICATION
    # ─────────────────────────────────────────────

    @staticmethod
    def build_notification(
        recipient_user_id: int,
        category: Category,
        artifact: Artifact,
        status: VerificationStatus,
        feedback: Optional[str],
    ) -> NotificationMessage:
        label = CATEGORY_LABELS[category]
        if category == Category.AWARDS:
            subject = f'award "{artifact.name}"'
        else:
            subject = label

        tail = f": {feedback}" if feedback else "."
        return NotificationMessage(
            recipient_user_id=recipient_user_id,
            title=f"{label[:1].upper()}{label[1:]} {status.value}",
            message=f"Your {subject} has been {status.value}{tail}",
        )

    def _dispatch(self, message: NotificationMessage) -> None:
        try:
            self.notification_sink.send(message)
        except Exception:
            # delivery is best-effort; the decision stands
            logger.exception(
                "notification delivery failed",
                extra={"user_id": message.recipient_user_id, "title": message.title},
            )

    # ─────────────────────────────────────────────
    # DECISIONS
    # ─────────────────────────────────────────────

    @staticmethod
    def _require_reviewer(reviewer_id: Optional[int]) -> None:
        if reviewer_id is None:
            raise Unauthorized("A reviewer identity is required to review submissions.")

    def apply_decision(
        self,
        artifact_id: int,
        category: Union[Category, str],
        decision: Union[Decision, str],
        feedback: Optional[str],
        reviewer_id: Optional[int],
    ) -> DecisionResult:
        self._require_reviewer(reviewer_id)
        decision = self._coerce_decision(decision)
        category = self._coerce_category(category)

        artifact = self._load_artifact(artifact_id, category)
        return self._decide(artifact, category, decision, feedback, reviewer_id)

    def apply_document_decision(
        self,
        document_id: int,
        decision: Union[Decision, str],
        feedback: Optional[str],
        reviewer_id: Optional[int],
    ) -> DecisionResult:
        """Same as apply_decision, with the category taken from the document type."""
        self._require_reviewer(reviewer_id)
        decision = self._coerce_decision(decision)

        doc = self._load_document(document_id)
        category = CATEGORY_FOR_DOCUMENT_TYPE[DocumentType(doc.document_type)]
        return self._decide(doc, category, decision, feedback, reviewer_id)

    def _decide(
        self,
        artifact: Artifact,
        category: Category,
        decision: Decision,
        feedback: Optional[str],
        reviewer_id: int,
    ) -> DecisionResult:
        profile = self.repository.get_profile(artifact.student_id)
        if not profile:
            raise NotFound("Student profile not found.")

        feedback = (feedback or "").strip() or None
        if decision == Decision.APPROVE:
            status = VerificationStatus.APPROVED
        else:
            status = VerificationStatus.REJECTED
            feedback = feedback or self._default_rejection_feedback(category)
            if not feedback:
                raise InvalidArgument("Rejection requires feedback.")

        artifact.status = status.value
        artifact.feedback = feedback
        artifact.verified_by = reviewer_id

        if category == Category.AWARDS:
            artifact = self.repository.save_award(artifact)
        else:
            artifact = self.repository.save_document(artifact)

        logger.info(
            "review decision applied",
            extra={
                "category": category.value,
                "artifact_id": artifact.id,
                "student_id": artifact.student_id,
                "status": status.value,
                "reviewer_id": reviewer_id,
            },
        )

        # The artifact write is durable from here on, so the student hears
        # about it even if the derived view below has to be repaired.
        notification = self.build_notification(profile.user_id, category, artifact, status, feedback)
        self._dispatch(notification)

        aggregate = self.refresh_aggregate(artifact.student_id, artifact)

        return DecisionResult(artifact=artifact, aggregate=aggregate, notification=notification)


def engine_for_session(db: Session, settings: Optional[Settings] = None) -> VerificationEngine:
    """Engine wired to the SQL repository and the notifications table."""
    return VerificationEngine(
        SqlVerificationRepository(db),
        DbNotificationSink(db),
        settings=settings,
    )
