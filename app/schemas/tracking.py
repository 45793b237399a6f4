# app/schemas/tracking.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LessonEventCreate(BaseModel):
    """
    A lesson engagement event.

    ``action`` is validated by the progress service against
    view/start/progress/complete.
    """

    lesson_id: Optional[str] = None
    action: Optional[str] = None
    time_spent: Optional[int] = Field(None, description="Cumulative seconds on the lesson")
    progress: Optional[int] = Field(None, description="Progress percentage 0-100")
    position: Optional[str] = Field(None, description="Playback or scroll position")


class LessonEventResponse(BaseModel):
    success: bool = True
    tracking_id: str


class LessonTrackingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    lesson_id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    total_time_seconds: Optional[int] = None
    progress_percentage: int
    completed: bool
    last_position: Optional[str] = None
    updated_at: datetime
