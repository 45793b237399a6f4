# app/services/leaderboard.py
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from app.core.exceptions import NotFoundError
from app.models.quiz_attempt import QuizAttempt
from app.repositories.attempt_repo import QuizAttemptRepository
from app.repositories.catalog_repo import CatalogRepository
from app.repositories.profile_repo import ProfileRepository
from app.schemas.statistics import LeaderboardEntry
from app.utils.timeutils import make_aware

logger = logging.getLogger(__name__)


def _best_of(user_id: str, attempts: List[QuizAttempt]) -> dict:
    times = [a.time_spent for a in attempts if a.time_spent is not None]
    return {
        "user_id": user_id,
        "best_score": max(a.score for a in attempts),
        "best_score_percentage": max(a.score / a.max_score for a in attempts) * 100,
        "attempt_count": len(attempts),
        "best_time_spent": min(times) if times else None,
        "last_attempt_date": max(a.created_at for a in attempts),
    }


def _ranking_key(row: dict):
    # score% desc, fastest best time (missing times last), fewest attempts,
    # earliest last attempt; user id only makes full ties deterministic
    return (
        -row["best_score_percentage"],
        row["best_time_spent"] is None,
        row["best_time_spent"] or 0,
        row["attempt_count"],
        make_aware(row["last_attempt_date"]),
        row["user_id"],
    )


def rank_attempts(
    attempts: Iterable[QuizAttempt], profiles: Optional[Dict] = None
) -> List[LeaderboardEntry]:
    """
    Build a quiz leaderboard from its attempts.

    Each user contributes one row built from their best values. Ranks run
    1..N in sort order; rows equal on every key still get distinct ranks.
    """
    profiles = profiles or {}

    by_user = defaultdict(list)
    for attempt in attempts:
        by_user[attempt.user_id].append(attempt)

    rows = sorted(
        (_best_of(user_id, group) for user_id, group in by_user.items()),
        key=_ranking_key,
    )

    entries = []
    for rank, row in enumerate(rows, start=1):
        profile = profiles.get(row["user_id"])
        entries.append(
            LeaderboardEntry(
                rank=rank,
                username=profile.username if profile else None,
                full_name=profile.full_name if profile else None,
                **row,
            )
        )
    return entries


class LeaderboardRanker:
    def __init__(
        self,
        quiz_attempts: QuizAttemptRepository,
        catalog: CatalogRepository,
        profiles: ProfileRepository,
    ):
        self.quiz_attempts = quiz_attempts
        self.catalog = catalog
        self.profiles = profiles

    def get_leaderboard(self, quiz_id: str) -> List[LeaderboardEntry]:
        """Ranked best attempts of a quiz; empty when nobody attempted it."""
        if self.catalog.get_quiz(quiz_id) is None:
            raise NotFoundError("Quiz not found")

        attempts = self.quiz_attempts.list_for_quiz(quiz_id)
        if not attempts:
            return []

        profiles = self.profiles.get_many(a.user_id for a in attempts)
        entries = rank_attempts(attempts, profiles)
        logger.debug(f"Leaderboard for quiz {quiz_id}: {len(entries)} entries")
        return entries
