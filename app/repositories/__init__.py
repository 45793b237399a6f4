from app.repositories.attempt_repo import (
    ExerciseAttemptRepository,
    QuizAttemptRepository,
)
from app.repositories.base import BaseRepository
from app.repositories.catalog_repo import CatalogRepository
from app.repositories.lesson_statistic_repo import LessonStatisticRepository
from app.repositories.profile_repo import ProfileRepository
from app.repositories.tracking_repo import TrackingRepository

__all__ = [
    "BaseRepository",
    "CatalogRepository",
    "ExerciseAttemptRepository",
    "LessonStatisticRepository",
    "ProfileRepository",
    "QuizAttemptRepository",
    "TrackingRepository",
]
