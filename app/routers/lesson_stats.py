# app/routers/lesson_stats.py
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query

from app.core.dependencies import (
    get_current_admin_id,
    get_current_user_id,
    get_lesson_statistics_service,
    get_progress_tracker,
)
from app.core.exceptions import ValidationError
from app.schemas.envelope import ApiResponse
from app.schemas.statistics import LessonStatisticResponse
from app.schemas.tracking import (
    LessonEventCreate,
    LessonEventResponse,
    LessonTrackingResponse,
)
from app.services.lesson_statistics import LessonStatisticsService
from app.services.progress import ProgressTracker

router = APIRouter(
    prefix="/lesson-stats",
    tags=["Lesson Statistics"],
    responses={401: {"description": "Not authenticated"}},
)


@router.post("", response_model=LessonEventResponse)
def record_lesson_event(
    event: LessonEventCreate,
    user_id: str = Depends(get_current_user_id),
    tracker: ProgressTracker = Depends(get_progress_tracker),
):
    """
    Record a lesson engagement event.
    Actions: view, start, progress, complete.
    """
    tracking_id = tracker.record_lesson_event(
        user_id,
        event.lesson_id,
        event.action,
        time_spent=event.time_spent,
        progress=event.progress,
        position=event.position,
    )
    return LessonEventResponse(tracking_id=tracking_id)


@router.get(
    "",
    response_model=ApiResponse[
        Union[LessonStatisticResponse, List[LessonStatisticResponse]]
    ],
)
def get_lesson_statistics(
    lesson_id: Optional[str] = Query(None),
    formation_id: Optional[str] = Query(None),
    admin_id: str = Depends(get_current_admin_id),
    service: LessonStatisticsService = Depends(get_lesson_statistics_service),
):
    """
    Statistics of one lesson, or of every lesson of a formation.
    Admin only.
    """
    if lesson_id:
        return ApiResponse(data=service.get_lesson_statistics(lesson_id))
    if formation_id:
        return ApiResponse(data=service.get_formation_statistics(formation_id))
    raise ValidationError("lesson_id or formation_id is required")


@router.get(
    "/progress/{lesson_id}",
    response_model=ApiResponse[Optional[LessonTrackingResponse]],
)
def get_lesson_progress(
    lesson_id: str,
    user_id: str = Depends(get_current_user_id),
    tracker: ProgressTracker = Depends(get_progress_tracker),
):
    """The current user's latest session on the lesson (null if never opened)"""
    session = tracker.get_lesson_progress(user_id, lesson_id)
    return ApiResponse(
        data=LessonTrackingResponse.model_validate(session) if session else None
    )
