# app/routers/quiz_attempts.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from app.core.config import settings
from app.core.dependencies import get_attempt_recorder, get_current_user_id
from app.core.limiter import limiter
from app.schemas.attempt import (
    QuizAttemptCreate,
    QuizAttemptResponse,
    QuizAttemptWithQuizResponse,
)
from app.schemas.envelope import ApiResponse
from app.services.attempt import AttemptRecorder

router = APIRouter(
    prefix="/quiz-attempts",
    tags=["Quiz Attempts"],
    responses={401: {"description": "Not authenticated"}},
)


@router.post(
    "",
    response_model=ApiResponse[QuizAttemptResponse],
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.attempt_rate_limit)
def record_quiz_attempt(
    request: Request,
    attempt_in: QuizAttemptCreate,
    user_id: str = Depends(get_current_user_id),
    recorder: AttemptRecorder = Depends(get_attempt_recorder),
):
    """
    Record a quiz attempt for the current user.
    ``correct_count`` is estimated from the score ratio when omitted.
    """
    attempt = recorder.record_quiz_attempt(user_id, attempt_in)
    return ApiResponse(
        data=QuizAttemptResponse.model_validate(attempt),
        message="Attempt recorded",
    )


@router.get("", response_model=ApiResponse[List[QuizAttemptWithQuizResponse]])
def list_quiz_attempts(
    quiz_id: Optional[str] = Query(None),
    lesson_id: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1),
    user_id: str = Depends(get_current_user_id),
    recorder: AttemptRecorder = Depends(get_attempt_recorder),
):
    """The current user's attempts, newest first"""
    attempts = recorder.list_quiz_attempts(
        user_id, quiz_id=quiz_id, lesson_id=lesson_id, limit=limit
    )
    return ApiResponse(
        data=[QuizAttemptWithQuizResponse.model_validate(a) for a in attempts],
        message="Attempts retrieved",
    )
