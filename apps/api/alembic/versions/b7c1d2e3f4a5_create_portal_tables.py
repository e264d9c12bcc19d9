"""create portal tables

Revision ID: b7c1d2e3f4a5
Revises:
Create Date: 2026-10-17 09:00:00.000000

This migration creates:
1. Lookup tables: posts, districts
2. applicants, with the submission_status enum
3. qualifications and experiences, deleted together with their applicant
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "b7c1d2e3f4a5"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create all portal tables."""
    op.create_table(
        "posts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "districts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    submission_status_enum = postgresql.ENUM(
        "DRAFT",
        "SUBMITTED",
        name="submission_status",
        create_type=False,
    )
    submission_status_enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "applicants",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        # Identity
        sa.Column("full_name", sa.String(length=200), nullable=False),
        sa.Column("father_name", sa.String(length=200), nullable=True),
        sa.Column("cnic", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        # Personal details
        sa.Column("cell_no", sa.String(length=20), nullable=True),
        sa.Column("dob", sa.Date(), nullable=True),
        sa.Column("gender", sa.String(length=20), nullable=True),
        sa.Column("address", sa.String(length=500), nullable=True),
        # Post and domicile
        sa.Column("post_id", sa.Integer(), nullable=True),
        sa.Column("district_id", sa.Integer(), nullable=True),
        sa.Column("other_district", sa.String(length=100), nullable=True),
        # Documents
        sa.Column("url_profile_pic", sa.String(length=500), nullable=True),
        sa.Column("url_cv", sa.String(length=500), nullable=True),
        sa.Column("url_cnic", sa.String(length=500), nullable=True),
        sa.Column("url_academic_certs", sa.String(length=500), nullable=True),
        sa.Column("url_experience_certs", sa.String(length=500), nullable=True),
        # Status
        sa.Column("submission_status", submission_status_enum, nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        # Audit
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["district_id"], ["districts.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("cnic"),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("username"),
    )
    op.create_index("ix_applicants_submission_status", "applicants", ["submission_status"])

    op.create_table(
        "qualifications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("applicant_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("degree_type", sa.String(length=50), nullable=False),
        sa.Column("degree_type_other", sa.String(length=200), nullable=True),
        sa.Column("field_of_study", sa.String(length=100), nullable=False),
        sa.Column("field_of_study_other", sa.String(length=200), nullable=True),
        sa.Column("institution_name", sa.String(length=300), nullable=False),
        sa.Column("institution_country", sa.String(length=100), nullable=False),
        sa.Column("institution_country_other", sa.String(length=200), nullable=True),
        sa.Column("graduation_year", sa.Integer(), nullable=False),
        sa.Column("grade", sa.String(length=50), nullable=False),
        sa.Column("duration_months", sa.Integer(), nullable=False),
        sa.Column("is_foreign", sa.Boolean(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["applicant_id"], ["applicants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_qualifications_applicant_id", "qualifications", ["applicant_id"])

    op.create_table(
        "experiences",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("applicant_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("organization_name", sa.String(length=300), nullable=False),
        sa.Column("organization_type", sa.String(length=50), nullable=False),
        sa.Column("department", sa.String(length=200), nullable=False),
        sa.Column("designation", sa.String(length=200), nullable=False),
        sa.Column("grade", sa.String(length=50), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("is_current", sa.Boolean(), nullable=False),
        sa.Column("duties_summary", sa.Text(), nullable=True),
        sa.Column("achievements", sa.Text(), nullable=True),
        sa.Column("district_id", sa.Integer(), nullable=True),
        sa.Column("country", sa.String(length=100), nullable=False),
        sa.Column("country_other", sa.String(length=200), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["applicant_id"], ["applicants.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["district_id"], ["districts.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_experiences_applicant_id", "experiences", ["applicant_id"])


def downgrade() -> None:
    """Drop all portal tables."""
    op.drop_index("ix_experiences_applicant_id", table_name="experiences")
    op.drop_table("experiences")
    op.drop_index("ix_qualifications_applicant_id", table_name="qualifications")
    op.drop_table("qualifications")
    op.drop_index("ix_applicants_submission_status", table_name="applicants")
    op.drop_table("applicants")
    postgresql.ENUM(name="submission_status").drop(op.get_bind(), checkfirst=True)
    op.drop_table("districts")
    op.drop_table("posts")
