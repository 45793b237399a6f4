import logging

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import jwt_manager
from app.repositories import (
    CatalogRepository,
    ExerciseAttemptRepository,
    LessonStatisticRepository,
    ProfileRepository,
    QuizAttemptRepository,
    TrackingRepository,
)
from app.services.attempt import AttemptRecorder
from app.services.leaderboard import LeaderboardRanker
from app.services.lesson_statistics import LessonStatisticsService
from app.services.progress import ProgressTracker
from app.services.statistics import StatisticsAggregator

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


# ==================== Identity ====================


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
) -> str:
    """
    Dependency that requires a valid Bearer token and returns the user id
    (the token subject). Raises 401 when the token is missing or invalid.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = jwt_manager.verify_token(credentials.credentials)
    return str(payload["sub"])


async def get_current_admin_id(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> str:
    """Dependency that additionally requires the user's profile role to be admin."""
    if not ProfileRepository(db).is_admin(user_id):
        logger.warning(f"User {user_id} denied access to an admin endpoint")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required"
        )
    return user_id


# ==================== Services ====================


def get_lesson_statistics_service(
    db: Session = Depends(get_db),
) -> LessonStatisticsService:
    return LessonStatisticsService(
        LessonStatisticRepository(db), TrackingRepository(db), CatalogRepository(db)
    )


def get_attempt_recorder(
    db: Session = Depends(get_db),
    lesson_statistics: LessonStatisticsService = Depends(get_lesson_statistics_service),
) -> AttemptRecorder:
    return AttemptRecorder(
        QuizAttemptRepository(db),
        ExerciseAttemptRepository(db),
        CatalogRepository(db),
        lesson_statistics=lesson_statistics,
    )


def get_progress_tracker(
    db: Session = Depends(get_db),
    lesson_statistics: LessonStatisticsService = Depends(get_lesson_statistics_service),
) -> ProgressTracker:
    return ProgressTracker(
        TrackingRepository(db),
        CatalogRepository(db),
        lesson_statistics=lesson_statistics,
    )


def get_statistics_aggregator(db: Session = Depends(get_db)) -> StatisticsAggregator:
    return StatisticsAggregator(
        QuizAttemptRepository(db), CatalogRepository(db), ProfileRepository(db)
    )


def get_leaderboard_ranker(db: Session = Depends(get_db)) -> LeaderboardRanker:
    return LeaderboardRanker(
        QuizAttemptRepository(db), CatalogRepository(db), ProfileRepository(db)
    )
