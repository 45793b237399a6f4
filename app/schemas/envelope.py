from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope shared by every endpoint: ``{"success", "data", "message"}``"""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
