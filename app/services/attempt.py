# app/services/attempt.py
import logging
import math
from typing import List, Optional

from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.models.exercise_attempt import ExerciseAttempt
from app.models.quiz_attempt import QuizAttempt
from app.repositories.attempt_repo import (
    ExerciseAttemptRepository,
    QuizAttemptRepository,
)
from app.repositories.catalog_repo import CatalogRepository
from app.schemas.attempt import ExerciseAttemptCreate, QuizAttemptCreate

logger = logging.getLogger(__name__)

QUIZ_REQUIRED_FIELDS = ("quiz_id", "score", "max_score", "answers", "total_questions")
EXERCISE_REQUIRED_FIELDS = ("exercise_id", "score", "max_score", "lesson_id")


def derive_correct_count(score: float, max_score: float, total_questions: int) -> int:
    """
    Estimate how many questions were answered correctly from the score ratio.

    Rounds half up and stays within ``[0, total_questions]``. This does not
    re-grade the submitted answers.
    """
    estimate = math.floor(score / max_score * total_questions + 0.5)
    return max(0, min(total_questions, estimate))


def _check_required(payload, fields) -> None:
    missing = [field for field in fields if getattr(payload, field) is None]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


def _check_scores(score: float, max_score: float) -> None:
    if max_score <= 0:
        raise ValidationError("max_score must be greater than 0")
    if score < 0:
        raise ValidationError("score must not be negative")


class AttemptRecorder:
    """Validates and appends quiz and exercise attempts."""

    def __init__(
        self,
        quiz_attempts: QuizAttemptRepository,
        exercise_attempts: ExerciseAttemptRepository,
        catalog: CatalogRepository,
        lesson_statistics=None,
    ):
        self.quiz_attempts = quiz_attempts
        self.exercise_attempts = exercise_attempts
        self.catalog = catalog
        # LessonStatisticsService, notified after exercise attempts
        self.lesson_statistics = lesson_statistics

    def record_quiz_attempt(
        self, user_id: str, attempt_in: QuizAttemptCreate
    ) -> QuizAttempt:
        """Append one quiz attempt. Repeated submissions create distinct rows."""
        _check_required(attempt_in, QUIZ_REQUIRED_FIELDS)
        _check_scores(attempt_in.score, attempt_in.max_score)

        total_questions = attempt_in.total_questions
        if total_questions < 0:
            raise ValidationError("total_questions must not be negative")
        if attempt_in.time_spent is not None and attempt_in.time_spent < 0:
            raise ValidationError("time_spent must not be negative")

        correct_count = attempt_in.correct_count
        if correct_count is None:
            correct_count = derive_correct_count(
                attempt_in.score, attempt_in.max_score, total_questions
            )
        elif not 0 <= correct_count <= total_questions:
            raise ValidationError(
                f"correct_count must be between 0 and {total_questions}"
            )

        if self.catalog.get_quiz(attempt_in.quiz_id) is None:
            raise NotFoundError("Quiz not found")
        lesson_id = attempt_in.lesson_id
        if lesson_id and self.catalog.get_lesson(lesson_id) is None:
            raise NotFoundError("Lesson not found")

        attempt = self.quiz_attempts.create(
            quiz_id=attempt_in.quiz_id,
            user_id=user_id,
            lesson_id=lesson_id,
            score=attempt_in.score,
            max_score=attempt_in.max_score,
            answers=attempt_in.answers,
            total_questions=total_questions,
            correct_count=correct_count,
            time_spent=attempt_in.time_spent,
        )
        logger.info(
            f"Quiz attempt {attempt.id} recorded: user={user_id} "
            f"quiz={attempt.quiz_id} score={attempt.score}/{attempt.max_score}"
        )
        return attempt

    def record_exercise_attempt(
        self, user_id: str, attempt_in: ExerciseAttemptCreate
    ) -> ExerciseAttempt:
        """Append one exercise attempt, then notify lesson statistics (best effort)."""
        _check_required(attempt_in, EXERCISE_REQUIRED_FIELDS)
        _check_scores(attempt_in.score, attempt_in.max_score)

        if self.catalog.get_exercise(attempt_in.exercise_id) is None:
            raise NotFoundError("Exercise not found")
        if self.catalog.get_lesson(attempt_in.lesson_id) is None:
            raise NotFoundError("Lesson not found")

        attempt = self.exercise_attempts.create(
            exercise_id=attempt_in.exercise_id,
            user_id=user_id,
            lesson_id=attempt_in.lesson_id,
            score=attempt_in.score,
            max_score=attempt_in.max_score,
            answers=attempt_in.answers,
        )
        logger.info(
            f"Exercise attempt {attempt.id} recorded: user={user_id} "
            f"exercise={attempt.exercise_id} lesson={attempt.lesson_id}"
        )

        self._notify_exercise_complete(attempt.lesson_id)
        return attempt

    def _notify_exercise_complete(self, lesson_id: str) -> None:
        if self.lesson_statistics is None:
            return
        try:
            self.lesson_statistics.register_exercise_completion(lesson_id)
        except Exception as e:
            # Never fails the attempt that was already stored
            logger.error(
                f"Failed to update lesson statistics for lesson {lesson_id}: {e}",
                exc_info=True,
            )

    def list_quiz_attempts(
        self,
        user_id: str,
        quiz_id: Optional[str] = None,
        lesson_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[QuizAttempt]:
        """A user's quiz attempts, newest first."""
        if limit is None:
            limit = settings.attempt_list_default_limit
        if limit < 1:
            raise ValidationError("limit must be at least 1")
        limit = min(limit, settings.max_page_size)

        return self.quiz_attempts.list_for_user(
            user_id, quiz_id=quiz_id, lesson_id=lesson_id, limit=limit
        )

    def list_exercise_attempts(
        self, user_id: str, lesson_id: Optional[str]
    ) -> List[ExerciseAttempt]:
        if not lesson_id:
            raise ValidationError("lesson_id is required")
        return self.exercise_attempts.list_for_user_lesson(user_id, lesson_id)
