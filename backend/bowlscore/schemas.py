from typing import Any, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, field_validator

from .scoring.bowling import MAX_FRAMES


class FrameIn(BaseModel):
    frameNumber: int = Field(..., ge=1, le=MAX_FRAMES)
    throws: List[int] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @field_validator("throws", mode="before")
    @classmethod
    def _reject_booleans(cls, value: Any) -> Any:
        if isinstance(value, list) and any(isinstance(v, bool) for v in value):
            raise ValueError("throws must be integers (not booleans)")
        return value


class FrameSubmit(FrameIn):
    throws: List[int]


class ScoreRequest(BaseModel):
    frames: List[FrameIn] = Field(..., max_length=MAX_FRAMES)

    model_config = ConfigDict(extra="forbid")


class ThrowValidationIn(BaseModel):
    """Throws are left loosely typed so range problems come back as a report."""

    frameNumber: int
    throws: List[Any]

    model_config = ConfigDict(extra="forbid")


class ThrowValidationOut(BaseModel):
    valid: bool
    error: Optional[str] = None


class NextThrowIn(FrameIn):
    """Balls already rolled in the frame plus the candidate ball."""

    pins: Any


class NextThrowOut(BaseModel):
    allowed: bool
    error: Optional[str] = None


class FrameOut(BaseModel):
    frameNumber: int
    throws: List[int]
    marks: List[str] = Field(default_factory=list)
    cumulativeScore: int
    isComplete: bool


class FrameStatsOut(BaseModel):
    strikes: int
    spares: int
    opens: int


class ScoreOut(BaseModel):
    """A scored snapshot; totals of unfinished games are provisional."""

    frames: List[FrameOut]
    scores: List[int]
    total: int
    isComplete: bool
    stats: FrameStatsOut


class GameOut(BaseModel):
    id: str
    totalScore: int
    strikes: int
    spares: int
    isComplete: bool
    createdAt: Optional[datetime] = None
    frames: List[FrameOut] = Field(default_factory=list)
