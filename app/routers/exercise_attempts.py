# app/routers/exercise_attempts.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from app.core.config import settings
from app.core.dependencies import get_attempt_recorder, get_current_user_id
from app.core.limiter import limiter
from app.schemas.attempt import (
    ExerciseAttemptCreate,
    ExerciseAttemptListResponse,
    ExerciseAttemptResponse,
)
from app.schemas.envelope import ApiResponse
from app.services.attempt import AttemptRecorder

router = APIRouter(
    prefix="/exercise-attempts",
    tags=["Exercise Attempts"],
    responses={401: {"description": "Not authenticated"}},
)


@router.post(
    "",
    response_model=ApiResponse[ExerciseAttemptResponse],
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.attempt_rate_limit)
def record_exercise_attempt(
    request: Request,
    attempt_in: ExerciseAttemptCreate,
    user_id: str = Depends(get_current_user_id),
    recorder: AttemptRecorder = Depends(get_attempt_recorder),
):
    attempt = recorder.record_exercise_attempt(user_id, attempt_in)
    return ApiResponse(
        data=ExerciseAttemptResponse.model_validate(attempt),
        message="Attempt recorded",
    )


@router.get("", response_model=ApiResponse[ExerciseAttemptListResponse])
def list_exercise_attempts(
    lesson_id: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    recorder: AttemptRecorder = Depends(get_attempt_recorder),
):
    """The current user's exercise attempts on a lesson, newest first"""
    attempts = recorder.list_exercise_attempts(user_id, lesson_id)
    return ApiResponse(
        data=ExerciseAttemptListResponse(
            attempts=[ExerciseAttemptResponse.model_validate(a) for a in attempts],
            total=len(attempts),
        )
    )
