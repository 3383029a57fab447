from gradverify.schemas.artifacts import DocumentResponse, AwardResponse
from gradverify.schemas.profile import (
    ProfileUpsertRequest,
    ProfilePatchRequest,
    ProfileResponse,
    AggregateResponse,
    SubmissionStatusResponse,
)
from gradverify.schemas.review import (
    DecisionRequest,
    DocumentDecisionResponse,
    AwardDecisionResponse,
    VerificationLogResponse,
)
from gradverify.schemas.dashboard import DashboardStats, DepartmentProgress, RecentSubmission
from gradverify.schemas.notifications import NotificationResponse, NotificationListResponse
