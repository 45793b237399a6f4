"""create learning progress tables

Revision ID: 3a7c41e9b2d0
Revises:
Create Date: 2026-10-19 10:12:44.518230

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3a7c41e9b2d0"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    # Catalog and profiles
    op.create_table(
        "formations",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "chapters",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "formation_id",
            sa.String(36),
            sa.ForeignKey("formations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_chapters_formation_id", "chapters", ["formation_id"])

    op.create_table(
        "lessons",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "chapter_id",
            sa.String(36),
            sa.ForeignKey("chapters.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_lessons_chapter_id", "lessons", ["chapter_id"])

    op.create_table(
        "quizzes",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "lesson_id",
            sa.String(36),
            sa.ForeignKey("lessons.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "exercises",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "lesson_id",
            sa.String(36),
            sa.ForeignKey("lessons.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("username", sa.String(100), nullable=True),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
    )

    # Attempt logs
    op.create_table(
        "quiz_attempts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "quiz_id",
            sa.String(36),
            sa.ForeignKey("quizzes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("lesson_id", sa.String(36), nullable=True),
        sa.Column("score", sa.Float(), nullable=False),
        sa.Column("max_score", sa.Float(), nullable=False),
        sa.Column("answers", JSON_TYPE, nullable=False),
        sa.Column("correct_count", sa.Integer(), nullable=True),
        sa.Column("total_questions", sa.Integer(), nullable=True),
        sa.Column("time_spent", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_quiz_attempts_quiz_id", "quiz_attempts", ["quiz_id"])
    op.create_index("ix_quiz_attempts_user_id", "quiz_attempts", ["user_id"])
    op.create_index("ix_quiz_attempts_lesson_id", "quiz_attempts", ["lesson_id"])
    op.create_index("ix_quiz_attempts_created_at", "quiz_attempts", ["created_at"])

    op.create_table(
        "exercise_attempts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "exercise_id",
            sa.String(36),
            sa.ForeignKey("exercises.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("lesson_id", sa.String(36), nullable=False),
        sa.Column("score", sa.Float(), nullable=False),
        sa.Column("max_score", sa.Float(), nullable=False),
        sa.Column("answers", JSON_TYPE, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_exercise_attempts_exercise_id", "exercise_attempts", ["exercise_id"]
    )
    op.create_index("ix_exercise_attempts_user_id", "exercise_attempts", ["user_id"])
    op.create_index(
        "ix_exercise_attempts_lesson_id", "exercise_attempts", ["lesson_id"]
    )
    op.create_index(
        "ix_exercise_attempts_created_at", "exercise_attempts", ["created_at"]
    )

    # Lesson engagement
    op.create_table(
        "user_lesson_tracking",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("lesson_id", sa.String(36), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("total_time_seconds", sa.Integer(), nullable=True),
        sa.Column(
            "progress_percentage", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column(
            "completed", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("last_position", sa.String(255), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_user_lesson_tracking_user_id", "user_lesson_tracking", ["user_id"]
    )
    op.create_index(
        "ix_user_lesson_tracking_lesson_id", "user_lesson_tracking", ["lesson_id"]
    )
    op.create_index(
        "ix_user_lesson_tracking_user_lesson",
        "user_lesson_tracking",
        ["user_id", "lesson_id"],
    )

    op.create_table(
        "lesson_statistics",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("lesson_id", sa.String(36), nullable=False),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("unique_users", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "completion_count", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column("avg_time_spent", sa.Float(), nullable=True),
        sa.Column(
            "exercise_completions", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_lesson_statistics_lesson_id",
        "lesson_statistics",
        ["lesson_id"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index("ix_lesson_statistics_lesson_id", table_name="lesson_statistics")
    op.drop_table("lesson_statistics")

    op.drop_index(
        "ix_user_lesson_tracking_user_lesson", table_name="user_lesson_tracking"
    )
    op.drop_index("ix_user_lesson_tracking_lesson_id", table_name="user_lesson_tracking")
    op.drop_index("ix_user_lesson_tracking_user_id", table_name="user_lesson_tracking")
    op.drop_table("user_lesson_tracking")

    op.drop_index("ix_exercise_attempts_created_at", table_name="exercise_attempts")
    op.drop_index("ix_exercise_attempts_lesson_id", table_name="exercise_attempts")
    op.drop_index("ix_exercise_attempts_user_id", table_name="exercise_attempts")
    op.drop_index("ix_exercise_attempts_exercise_id", table_name="exercise_attempts")
    op.drop_table("exercise_attempts")

    op.drop_index("ix_quiz_attempts_created_at", table_name="quiz_attempts")
    op.drop_index("ix_quiz_attempts_lesson_id", table_name="quiz_attempts")
    op.drop_index("ix_quiz_attempts_user_id", table_name="quiz_attempts")
    op.drop_index("ix_quiz_attempts_quiz_id", table_name="quiz_attempts")
    op.drop_table("quiz_attempts")

    op.drop_table("profiles")
    op.drop_table("exercises")
    op.drop_table("quizzes")
    op.drop_index("ix_lessons_chapter_id", table_name="lessons")
    op.drop_table("lessons")
    op.drop_index("ix_chapters_formation_id", table_name="chapters")
    op.drop_table("chapters")
    op.drop_table("formations")
