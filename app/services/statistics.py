# app/services/statistics.py
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from app.core.exceptions import NotFoundError
from app.models.quiz import Quiz
from app.models.quiz_attempt import QuizAttempt
from app.repositories.attempt_repo import QuizAttemptRepository
from app.repositories.catalog_repo import CatalogRepository
from app.repositories.profile_repo import ProfileRepository
from app.schemas.statistics import QuizStatistic, UserQuizStatistic

logger = logging.getLogger(__name__)


def _mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def summarize_quiz(
    quiz_id: str, attempts: Sequence[QuizAttempt], quiz: Optional[Quiz] = None
) -> QuizStatistic:
    """
    Aggregate all attempts of one quiz.

    With no attempts the count is 0 and every average is None.
    """
    ratios = [a.score / a.max_score for a in attempts]
    times = [a.time_spent for a in attempts if a.time_spent is not None]

    return QuizStatistic(
        quiz_id=quiz_id,
        quiz_title=quiz.title if quiz else None,
        category=quiz.category if quiz else None,
        attempt_count=len(ratios),
        average_score_percentage=_mean(ratios) * 100 if ratios else None,
        min_score_percentage=min(ratios) * 100 if ratios else None,
        max_score_percentage=max(ratios) * 100 if ratios else None,
        average_time_spent=_mean(times),
    )


def summarize_by_user_and_quiz(
    attempts: Iterable[QuizAttempt],
    profiles: Optional[Dict] = None,
    quizzes: Optional[Dict] = None,
) -> List[UserQuizStatistic]:
    """One row per (user, quiz) pair found in ``attempts``, ordered by user then quiz."""
    profiles = profiles or {}
    quizzes = quizzes or {}

    groups = defaultdict(list)
    for attempt in attempts:
        groups[(attempt.user_id, attempt.quiz_id)].append(attempt)

    rows = []
    for (user_id, quiz_id), group in sorted(groups.items()):
        ratios = [a.score / a.max_score for a in group]
        dates = [a.created_at for a in group]
        profile = profiles.get(user_id)
        quiz = quizzes.get(quiz_id)

        rows.append(
            UserQuizStatistic(
                user_id=user_id,
                username=profile.username if profile else None,
                full_name=profile.full_name if profile else None,
                quiz_id=quiz_id,
                quiz_title=quiz.title if quiz else None,
                attempt_count=len(group),
                best_score_percentage=max(ratios) * 100,
                average_score_percentage=_mean(ratios) * 100,
                first_attempt_date=min(dates),
                last_attempt_date=max(dates),
            )
        )
    return rows


class StatisticsAggregator:
    """Read-side aggregates over the quiz attempt log. Nothing is cached."""

    def __init__(
        self,
        quiz_attempts: QuizAttemptRepository,
        catalog: CatalogRepository,
        profiles: ProfileRepository,
    ):
        self.quiz_attempts = quiz_attempts
        self.catalog = catalog
        self.profiles = profiles

    def compute_quiz_statistics(self, quiz_id: str) -> QuizStatistic:
        quiz = self.catalog.get_quiz(quiz_id)
        if quiz is None:
            raise NotFoundError("Quiz not found")
        return summarize_quiz(quiz_id, self.quiz_attempts.list_for_quiz(quiz_id), quiz)

    def list_attempts_for_quiz(
        self, quiz_id: str, user_id: Optional[str] = None
    ) -> List[QuizAttempt]:
        """Raw attempts of a quiz, newest first, optionally for one user."""
        if self.catalog.get_quiz(quiz_id) is None:
            raise NotFoundError("Quiz not found")
        return self.quiz_attempts.list_for_quiz(quiz_id, user_id=user_id)

    def compute_all_quiz_statistics(self) -> List[QuizStatistic]:
        """One row per catalog quiz, including quizzes nobody attempted."""
        by_quiz = defaultdict(list)
        for attempt in self.quiz_attempts.list_matching():
            by_quiz[attempt.quiz_id].append(attempt)

        return [
            summarize_quiz(quiz.id, by_quiz.get(quiz.id, []), quiz)
            for quiz in self.catalog.list_quizzes()
        ]

    def compute_user_quiz_statistics(
        self, user_id: Optional[str] = None, quiz_id: Optional[str] = None
    ) -> List[UserQuizStatistic]:
        attempts = self.quiz_attempts.list_matching(user_id=user_id, quiz_id=quiz_id)
        if not attempts:
            return []

        profiles = self.profiles.get_many(a.user_id for a in attempts)
        quizzes = self.catalog.quizzes_by_id(a.quiz_id for a in attempts)
        return summarize_by_user_and_quiz(attempts, profiles, quizzes)
