"""
Initial FreshGrad schema: users, candidates and their owned rows, mentors,
courses, corrections, notifications, audit log and the reference tables.

Revision ID: 7a3c1e5d9b20
Revises:
Create Date: 2025-06-02
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "7a3c1e5d9b20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


CANDIDATE_STATUSES = [
    # status, display_order, stage_index, color_class
    ("Imported", 1, 0, "bg-slate-100 text-slate-800"),
    ("Eligible", 2, 0, "bg-sky-100 text-sky-800"),
    ("Assigned", 3, 1, "bg-indigo-100 text-indigo-800"),
    ("In Training", 4, 2, "bg-amber-100 text-amber-800"),
    ("Courses Completed", 5, 2, "bg-emerald-100 text-emerald-800"),
    ("Assessed", 6, 2, "bg-teal-100 text-teal-800"),
    ("Graduated", 7, 3, "bg-green-100 text-green-800"),
    ("Ready for Hiring", 8, 4, "bg-lime-100 text-lime-800"),
    ("Hired/Closed", 9, 4, "bg-gray-200 text-gray-800"),
    ("On Hold", 10, 1, "bg-orange-100 text-orange-800"),
    ("Withdrawn", 11, 0, "bg-rose-100 text-rose-800"),
    ("Rejected", 12, 0, "bg-red-100 text-red-800"),
]

TRACKS = [
    ("t1", "STEM Core", 70),
    ("t2", "Languages", 75),
    ("t3", "ICT", 70),
]


def _enum(*values: str, name: str, length: int) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False, length=length)


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    # ------------------------------------------------------------------
    # Reference tables
    # ------------------------------------------------------------------
    tracks = op.create_table(
        "tracks",
        sa.Column("id", sa.String(length=10), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("min_average", sa.Integer(), nullable=False, server_default="70"),
    )
    statuses = op.create_table(
        "candidate_statuses",
        sa.Column("status", sa.String(length=50), primary_key=True),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("stage_index", sa.Integer(), nullable=False),
        sa.Column("color_class", sa.String(length=100), nullable=True),
    )
    op.bulk_insert(
        tracks,
        [{"id": i, "name": n, "min_average": m} for i, n, m in TRACKS],
    )
    op.bulk_insert(
        statuses,
        [
            {"status": s, "display_order": o, "stage_index": st, "color_class": c}
            for s, o, st, c in CANDIDATE_STATUSES
        ],
    )

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column(
            "role",
            _enum(
                "Admin",
                "ECAE Manager",
                "ECAE Trainer",
                "Auditor",
                "Teacher",
                name="user_role_enum",
                length=50,
            ),
            nullable=False,
            server_default="Teacher",
        ),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("applicant_status", sa.String(length=50), nullable=False, server_default="None"),
        sa.Column("docs", sa.JSON(), nullable=False),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])
    op.create_index("ix_users_created_at", "users", ["created_at"])
    op.create_index("idx_users_role_created", "users", ["role", "created_at"])

    # ------------------------------------------------------------------
    # Mentors / courses
    # ------------------------------------------------------------------
    op.create_table(
        "mentors",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("contact", sa.String(length=50), nullable=True),
        sa.Column("subject", sa.String(length=100), nullable=True),
        sa.Column("school", sa.String(length=255), nullable=True),
        sa.Column("emirate", sa.String(length=100), nullable=True),
        *_timestamps(),
    )
    for column in ("name", "subject", "school", "emirate"):
        op.create_index(f"ix_mentors_{column}", "mentors", [column])

    op.create_table(
        "courses",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=False, server_default="1.0"),
        sa.Column("pass_threshold", sa.Integer(), nullable=False, server_default="70"),
        sa.Column("is_required", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("tracks", sa.JSON(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_courses_code", "courses", ["code"], unique=True)
    op.create_index("ix_courses_active", "courses", ["active"])

    # ------------------------------------------------------------------
    # Candidates and owned rows
    # ------------------------------------------------------------------
    op.create_table(
        "candidates",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("mobile", sa.String(length=50), nullable=True),
        sa.Column("national_id", sa.String(length=50), nullable=True),
        sa.Column("emirate", sa.String(length=100), nullable=True),
        sa.Column("subject", sa.String(length=100), nullable=True),
        sa.Column("gpa", sa.Float(), nullable=True, server_default="0"),
        sa.Column(
            "track_id",
            _enum("t1", "t2", "t3", name="track_id_enum", length=2),
            nullable=False,
            server_default="t1",
        ),
        sa.Column(
            "status",
            _enum(*(s for s, _, _, _ in CANDIDATE_STATUSES), name="candidate_status_enum", length=50),
            nullable=False,
            server_default="Imported",
        ),
        sa.Column(
            "sponsor",
            _enum("MOE", "Mawaheb", "MBZUH", name="sponsor_enum", length=7),
            nullable=True,
        ),
        sa.Column("extensions", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    for column in ("emirate", "subject", "track_id", "status", "sponsor", "created_at"):
        op.create_index(f"ix_candidates_{column}", "candidates", [column])
    op.create_index("ix_candidates_status_created", "candidates", ["status", "created_at"])

    op.create_table(
        "candidate_enrollments",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column(
            "candidate_id",
            sa.String(length=64),
            sa.ForeignKey("candidates.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("course_code", sa.String(length=50), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("cohort", sa.String(length=100), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column(
            "status",
            _enum(
                "Enrolled",
                "In Progress",
                "Completed",
                "Withdrawn",
                name="enrollment_status_enum",
                length=11,
            ),
            nullable=False,
            server_default="Enrolled",
        ),
        sa.Column("assigned_by", sa.String(length=255), nullable=True),
        sa.Column("assigned_ts", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_internship", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "required",
            _enum("Required", "Optional", name="requirement_level_enum", length=8),
            nullable=False,
            server_default="Optional",
        ),
        sa.Column("type", sa.String(length=50), nullable=True),
        sa.Column(
            "mentor_id",
            sa.String(length=64),
            sa.ForeignKey("mentors.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("mentor_name", sa.String(length=255), nullable=True),
        sa.Column("mentor_email", sa.String(length=255), nullable=True),
        sa.Column("mentor_contact", sa.String(length=50), nullable=True),
        sa.Column("school_name", sa.String(length=255), nullable=True),
        sa.Column("school_emirate", sa.String(length=100), nullable=True),
        sa.Column(
            "pass_state",
            _enum(
                "Not Started",
                "In Progress",
                "Passed",
                "Failed",
                name="pass_state_enum",
                length=11,
            ),
            nullable=False,
            server_default="Not Started",
        ),
        *_timestamps(),
    )
    for column in ("candidate_id", "course_code", "status", "is_internship", "mentor_id"):
        op.create_index(f"ix_candidate_enrollments_{column}", "candidate_enrollments", [column])

    op.create_table(
        "candidate_course_results",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column(
            "candidate_id",
            sa.String(length=64),
            sa.ForeignKey("candidates.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("course_code", sa.String(length=50), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("score", sa.Float(), nullable=True),
        sa.Column("pass", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("result_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_candidate_course_results_candidate_id", "candidate_course_results", ["candidate_id"]
    )
    op.create_index(
        "ix_candidate_course_results_course_code", "candidate_course_results", ["course_code"]
    )

    op.create_table(
        "candidate_notes",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column(
            "candidate_id",
            sa.String(length=64),
            sa.ForeignKey("candidates.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("by_user", sa.String(length=255), nullable=False),
        sa.Column("by_role", sa.String(length=50), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_candidate_notes_candidate_id", "candidate_notes", ["candidate_id"])

    # ------------------------------------------------------------------
    # Corrections / notifications / audit
    # ------------------------------------------------------------------
    op.create_table(
        "corrections",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column(
            "candidate_id",
            sa.String(length=64),
            sa.ForeignKey("candidates.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("by_user", sa.String(length=255), nullable=False),
        sa.Column("by_role", sa.String(length=50), nullable=False),
        sa.Column("for_role", sa.String(length=50), nullable=False),
        sa.Column(
            "status",
            _enum(
                "Pending",
                "Responded",
                "Resolved",
                "Rejected",
                name="correction_status_enum",
                length=20,
            ),
            nullable=False,
            server_default="Pending",
        ),
        sa.Column("reject_reason", sa.Text(), nullable=True),
        sa.Column("response", sa.JSON(), nullable=True),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rejected_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_corrections_candidate_id", "corrections", ["candidate_id"])
    op.create_index("ix_corrections_status", "corrections", ["status"])
    op.create_index("ix_corrections_created_at", "corrections", ["created_at"])
    op.create_index("ix_corrections_for_role_status", "corrections", ["for_role", "status"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("to_email", sa.String(length=255), nullable=True),
        sa.Column("to_role", sa.String(length=50), nullable=True),
        sa.Column("type", sa.String(length=100), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("target", sa.JSON(), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    for column in ("to_email", "to_role", "read", "created_at"):
        op.create_index(f"ix_notifications_{column}", "notifications", [column])
    op.create_index("ix_notifications_role_created", "notifications", ["to_role", "created_at"])

    op.create_table(
        "audit_log",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("event_type", sa.String(length=100), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_audit_log_event_type", "audit_log", ["event_type"])
    op.create_index("ix_audit_log_created_at", "audit_log", ["created_at"])
    op.create_index("ix_audit_log_type_created", "audit_log", ["event_type", "created_at"])
    op.create_index("ix_audit_log_created_desc", "audit_log", [sa.text("created_at DESC")])


def downgrade() -> None:
    op.drop_table("audit_log")
    op.drop_table("notifications")
    op.drop_table("corrections")
    op.drop_table("candidate_notes")
    op.drop_table("candidate_course_results")
    op.drop_table("candidate_enrollments")
    op.drop_table("candidates")
    op.drop_table("courses")
    op.drop_table("mentors")
    op.drop_table("users")
    op.drop_table("candidate_statuses")
    op.drop_table("tracks")
