# app/schemas/statistics.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class QuizStatistic(BaseModel):
    """Aggregates over every attempt of one quiz"""

    quiz_id: str
    quiz_title: Optional[str] = None
    category: Optional[str] = None
    attempt_count: int = 0
    average_score_percentage: Optional[float] = None
    min_score_percentage: Optional[float] = None
    max_score_percentage: Optional[float] = None
    average_time_spent: Optional[float] = None


class UserQuizStatistic(BaseModel):
    """Aggregates over one user's attempts of one quiz"""

    user_id: str
    username: Optional[str] = None
    full_name: Optional[str] = None
    quiz_id: str
    quiz_title: Optional[str] = None
    attempt_count: int
    best_score_percentage: float
    average_score_percentage: float
    first_attempt_date: datetime
    last_attempt_date: datetime


class LeaderboardEntry(BaseModel):
    rank: int
    user_id: str
    username: Optional[str] = None
    full_name: Optional[str] = None
    best_score: float
    best_score_percentage: float
    attempt_count: int
    best_time_spent: Optional[int] = None
    last_attempt_date: datetime


class LessonStatisticResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    lesson_id: str
    views: int = 0
    unique_users: int = 0
    completion_count: int = 0
    avg_time_spent: Optional[float] = None
    exercise_completions: int = 0
    updated_at: Optional[datetime] = None
