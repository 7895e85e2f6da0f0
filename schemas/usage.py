from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TokenUsage(BaseModel):
    count: int = Field(default=0, ge=0)
    # epoch ms at which the current window started
    lastUpdated: int


class ContentState(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    DONE = "done"


class ContentFill(BaseModel):
    """Outcome of a lazy content request for one sub-task or lesson."""
    state: ContentState
    content: Optional[str] = None
    tokensUsed: int = 0
