# app/schemas/attempt.py
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# ==================== Quiz Attempt Schemas ====================


class QuizAttemptCreate(BaseModel):
    """
    Submit a quiz attempt.

    Required fields are checked by the attempt service so that a missing
    field is reported like any other invalid submission.
    """

    quiz_id: Optional[str] = None
    score: Optional[float] = None
    max_score: Optional[float] = None
    answers: Optional[Any] = None
    total_questions: Optional[int] = None
    correct_count: Optional[int] = Field(
        None, description="Derived from the score ratio when omitted"
    )
    time_spent: Optional[int] = Field(None, description="Time spent in seconds")
    lesson_id: Optional[str] = None


class QuizSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    category: Optional[str] = None


class QuizAttemptResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    quiz_id: str
    user_id: str
    lesson_id: Optional[str] = None
    score: float
    max_score: float
    answers: Any = None
    total_questions: Optional[int] = None
    correct_count: Optional[int] = None
    time_spent: Optional[int] = None
    created_at: datetime


class QuizAttemptWithQuizResponse(QuizAttemptResponse):
    quiz: Optional[QuizSummary] = None


# ==================== Exercise Attempt Schemas ====================


class ExerciseAttemptCreate(BaseModel):
    """Submit an exercise attempt (lesson-bound)"""

    exercise_id: Optional[str] = None
    score: Optional[float] = None
    max_score: Optional[float] = None
    answers: Optional[Any] = None
    lesson_id: Optional[str] = None


class ExerciseAttemptResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    exercise_id: str
    user_id: str
    lesson_id: str
    score: float
    max_score: float
    answers: Any = None
    created_at: datetime


class ExerciseAttemptListResponse(BaseModel):
    attempts: List[ExerciseAttemptResponse]
    total: int
