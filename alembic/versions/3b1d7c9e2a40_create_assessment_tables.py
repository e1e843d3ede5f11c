"""create assessment tables

Revision ID: 3b1d7c9e2a40
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3b1d7c9e2a40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "questions",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("language", sa.String(length=32), nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.Column("kind", sa.String(length=32), nullable=False),
        sa.Column("topic", sa.String(length=255), nullable=False),
        sa.Column("difficulty", sa.String(length=16), nullable=False),
        sa.Column("prompt", sa.Text(), nullable=False),
        sa.Column("code_snippet", sa.Text(), nullable=True),
        sa.Column("options", postgresql.ARRAY(sa.Text()), nullable=False),
        sa.Column("correct_answer", sa.Text(), nullable=False),
        sa.Column("explanation", sa.Text(), nullable=True),
        sa.UniqueConstraint("language", "order_index", name="uq_questions_language_order"),
    )

    op.create_table(
        "assessment_attempts",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("language", sa.String(length=32), nullable=False),
        sa.Column("attempt_number", sa.Integer(), nullable=False),
        sa.Column("answers", postgresql.JSONB(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("total_questions", sa.Integer(), nullable=False),
        sa.Column("percentage", sa.Integer(), nullable=False),
        sa.Column("proficiency_level", sa.String(length=16), nullable=False),
        sa.Column("topic_breakdown", postgresql.JSONB(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("time_taken_seconds", sa.Integer(), nullable=True),
    )
    op.create_index(
        "ix_attempts_user_language_number",
        "assessment_attempts",
        ["user_id", "language", "attempt_number"],
    )
    op.create_index(
        "ix_attempts_user_completed",
        "assessment_attempts",
        ["user_id", "completed_at"],
    )

    op.create_table(
        "user_profiles",
        sa.Column("user_id", sa.String(length=64), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("email", sa.String(length=320), nullable=False, server_default=""),
        sa.Column(
            "has_completed_assessment",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column("assessment_language", sa.String(length=32), nullable=True),
        sa.Column("proficiency_level", sa.String(length=16), nullable=True),
        sa.Column("last_assessment_date", sa.DateTime(timezone=True), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("user_profiles")
    op.drop_index("ix_attempts_user_completed", table_name="assessment_attempts")
    op.drop_index("ix_attempts_user_language_number", table_name="assessment_attempts")
    op.drop_table("assessment_attempts")
    op.drop_table("questions")
