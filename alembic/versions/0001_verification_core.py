"""verification core tables

Revision ID: 0001_verification_core
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_verification_core"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _review_columns():
    return [
        sa.Column("status", sa.String(length=16), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("feedback", sa.Text(), nullable=True),
        sa.Column("verified_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
    ]


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(length=256), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=256), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("department", sa.String(length=128), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "student_profiles",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("student_number", sa.String(length=64), nullable=False, unique=True),
        sa.Column("program", sa.String(length=128), nullable=False),
        sa.Column("department", sa.String(length=128), nullable=False),
        sa.Column("date_of_birth", sa.String(length=32), nullable=True),
        sa.Column("place_of_birth", sa.String(length=256), nullable=True),
        sa.Column("sex", sa.String(length=16), nullable=True),
        sa.Column("contact_number", sa.String(length=32), nullable=True),
        sa.Column("psa_status", sa.String(length=16), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("photo_status", sa.String(length=16), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("awards_status", sa.String(length=16), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("overall_status", sa.String(length=16), nullable=False, server_default=sa.text("'pending'")),
        *_timestamps(),
    )
    op.create_index("ix_student_profiles_department", "student_profiles", ["department"])
    op.create_index("ix_student_profiles_overall_status", "student_profiles", ["overall_status"])

    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "student_id",
            sa.Integer(),
            sa.ForeignKey("student_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("document_type", sa.String(length=16), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=False),
        sa.Column("mime_type", sa.String(length=128), nullable=False),
        *_review_columns(),
        *_timestamps(),
    )
    op.create_index("ix_documents_student_type", "documents", ["student_id", "document_type"])
    op.create_index("ix_documents_status", "documents", ["status"])

    op.create_table(
        "awards",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "student_id",
            sa.Integer(),
            sa.ForeignKey("student_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("award_type", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("proof_file_name", sa.String(length=255), nullable=True),
        sa.Column("proof_file_size", sa.Integer(), nullable=True),
        sa.Column("proof_mime_type", sa.String(length=128), nullable=True),
        *_review_columns(),
        *_timestamps(),
    )
    op.create_index("ix_awards_student", "awards", ["student_id"])
    op.create_index("ix_awards_status", "awards", ["status"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(length=256), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_notifications_user_created", "notifications", ["user_id", "created_at"])

    op.create_table(
        "verification_logs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("reviewer_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "student_id",
            sa.Integer(),
            sa.ForeignKey("student_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("target_kind", sa.String(length=16), nullable=False),
        sa.Column("target_id", sa.Integer(), nullable=False),
        sa.Column("action", sa.String(length=32), nullable=False),
        sa.Column("request_id", sa.String(length=128), nullable=True),
        sa.Column("details_json", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_verification_logs_target", "verification_logs", ["target_kind", "target_id"])
    op.create_index("ix_verification_logs_student", "verification_logs", ["student_id"])
    op.create_index("ix_verification_logs_created_at", "verification_logs", ["created_at"])


def downgrade():
    op.drop_index("ix_verification_logs_created_at", table_name="verification_logs")
    op.drop_index("ix_verification_logs_student", table_name="verification_logs")
    op.drop_index("ix_verification_logs_target", table_name="verification_logs")
    op.drop_table("verification_logs")

    op.drop_index("ix_notifications_user_created", table_name="notifications")
    op.drop_table("notifications")

    op.drop_index("ix_awards_status", table_name="awards")
    op.drop_index("ix_awards_student", table_name="awards")
    op.drop_table("awards")

    op.drop_index("ix_documents_status", table_name="documents")
    op.drop_index("ix_documents_student_type", table_name="documents")
    op.drop_table("documents")

    op.drop_index("ix_student_profiles_overall_status", table_name="student_profiles")
    op.drop_index("ix_student_profiles_department", table_name="student_profiles")
    op.drop_table("student_profiles")

    op.drop_index("ix_users_role", table_name="users")
    op.drop_table("users")
