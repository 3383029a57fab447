from conftest import make_profile, make_user
from gradverify.models.document import Document
from gradverify.models.enums import DocumentType, VerificationStatus
from gradverify.services.dashboard_service import DashboardService
from gradverify.services.verification_engine import engine_for_session


def _student(db, n, department, overall="pending"):
    u = make_user(db, email=f"s{n}@example.edu", name=f"Student {n}")
    p = make_profile(db, u, student_number=f"2021-{n:05d}", department=department)
    p.overall_status = overall
    db.commit()
    return p


def test_stats_counts_by_overall_status(db):
    _student(db, 1, "CCS", "approved")
    _student(db, 2, "CCS", "pending")
    _student(db, 3, "CON", "rejected")
    _student(db, 4, "CON", "pending")

    assert DashboardService().stats(db) == {
        "total_students": 4,
        "pending_verifications": 2,
        "approved_records": 1,
        "rejected_records": 1,
    }


def test_stats_on_empty_database(db):
    assert DashboardService().stats(db)["total_students"] == 0


def test_department_progress(db):
    _student(db, 1, "CCS", "approved")
    _student(db, 2, "CCS", "pending")
    _student(db, 3, "CCS", "approved")
    _student(db, 4, "CON", "pending")

    rows = DashboardService().department_progress(db)

    assert rows == [
        {"department": "CCS", "total": 3, "approved": 2, "percent_complete": 67},
        {"department": "CON", "total": 1, "approved": 0, "percent_complete": 0},
    ]


def test_recent_submissions_include_name(db):
    _student(db, 1, "CCS")

    rows = DashboardService().recent_submissions(db, limit=5)

    assert len(rows) == 1
    assert rows[0]["full_name"] == "Student 1"
    assert rows[0]["student_number"] == "2021-00001"


def test_list_students_filters_department(db):
    _student(db, 1, "CCS")
    _student(db, 2, "CON")

    svc = DashboardService()
    assert len(svc.list_students(db)) == 2
    assert [p.department for p in svc.list_students(db, department="CON")] == ["CON"]


def test_documents_queue_by_status(db):
    p = _student(db, 1, "CCS")
    repo = engine_for_session(db).repository
    for kind, status in [(DocumentType.PSA, "pending"), (DocumentType.PHOTO, "approved")]:
        repo.save_document(
            Document(
                student_id=p.id,
                document_type=kind.value,
                file_name="f.png",
                file_size=10,
                mime_type="image/png",
                status=status,
            )
        )

    svc = DashboardService()
    assert [d.document_type for d in svc.documents_by_status(db)] == ["psa"]
    assert svc.documents_by_status(db, status=VerificationStatus.APPROVED, document_type=DocumentType.PSA) == []
    assert svc.awards_by_status(db) == []
