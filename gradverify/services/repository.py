# gradverify/services/repository.py
"""
Persistence port used by the verification engine.

The engine only needs a handful of reads and writes; keeping them behind an
abstract base lets the engine run against any store (the SQL one below in the
service, a dict-backed fake in tests).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from gradverify.core.errors import NotFound
from gradverify.models.award import Award
from gradverify.models.document import Document
from gradverify.models.enums import DocumentType
from gradverify.models.student_profile import StudentProfile
from gradverify.services.aggregate import StudentVerificationAggregate


class VerificationRepository(ABC):

    @abstractmethod
    def get_profile(self, student_id: int) -> Optional[StudentProfile]:
        ...

    @abstractmethod
    def get_document(self, document_id: int) -> Optional[Document]:
        ...

    @abstractmethod
    def get_award(self, award_id: int) -> Optional[Award]:
        ...

    @abstractmethod
    def get_authoritative_document(
        self, student_id: int, document_type: DocumentType
    ) -> Optional[Document]:
        """
        The single document per (student, type) that counts for status.
        """
        ...

    @abstractmethod
    def list_awards(self, student_id: int) -> List[Award]:
        ...

    @abstractmethod
    def save_document(self, document: Document) -> Document:
        ...

    @abstractmethod
    def save_award(self, award: Award) -> Award:
        ...

    @abstractmethod
    def save_aggregate(self, aggregate: StudentVerificationAggregate) -> StudentVerificationAggregate:
        ...


class SqlVerificationRepository(VerificationRepository):
    """
    SQLAlchemy-backed repository. Every save commits so a persisted artifact
    decision survives a later aggregate failure.
    """

    def __init__(self, db: Session):
        self.db = db

    # ---------------------------
    # READS
    # ---------------------------

    def get_profile(self, student_id: int) -> Optional[StudentProfile]:
        return self.db.execute(
            select(StudentProfile).where(StudentProfile.id == student_id)
        ).scalar_one_or_none()

    def get_document(self, document_id: int) -> Optional[Document]:
        return self.db.execute(
            select(Document).where(Document.id == document_id)
        ).scalar_one_or_none()

    def get_award(self, award_id: int) -> Optional[Award]:
        return self.db.execute(
            select(Award).where(Award.id == award_id)
        ).scalar_one_or_none()

    def get_authoritative_document(
        self, student_id: int, document_type: DocumentType
    ) -> Optional[Document]:
        return (
            self.db.execute(
                select(Document)
                .where(
                    Document.student_id == student_id,
                    Document.document_type == DocumentType(document_type).value,
                )
                .order_by(Document.created_at.desc(), Document.id.desc())
                .limit(1)
            )
            .scalars()
            .first()
        )

    def list_awards(self, student_id: int) -> List[Award]:
        return list(
            self.db.execute(
                select(Award).where(Award.student_id == student_id).order_by(Award.id)
            ).scalars().all()
        )

    # ---------------------------
    # WRITES
    # ---------------------------

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def save_document(self, document: Document) -> Document:
        self.db.add(document)
        self._commit()
        self.db.refresh(document)
        return document

    def save_award(self, award: Award) -> Award:
        self.db.add(award)
        self._commit()
        self.db.refresh(award)
        return award

    def save_aggregate(self, aggregate: StudentVerificationAggregate) -> StudentVerificationAggregate:
        profile = self.get_profile(aggregate.student_id)
        if profile is None:
            raise NotFound(f"Student profile {aggregate.student_id} not found.")

        profile.psa_status = aggregate.psa_status.value
        profile.photo_status = aggregate.photo_status.value
        profile.awards_status = aggregate.awards_status.value
        profile.overall_status = aggregate.overall_status.value

        self._commit()
        return aggregate
