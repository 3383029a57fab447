from gradverify.models.user import User  # noqa: F401
from gradverify.models.student_profile import StudentProfile  # noqa: F401
from gradverify.models.document import Document  # noqa: F401
from gradverify.models.award import Award  # noqa: F401
from gradverify.models.notification import Notification  # noqa: F401
from gradverify.models.verification_log import VerificationLog  # noqa: F401
