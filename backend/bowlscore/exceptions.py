from fastapi import HTTPException
from pydantic import BaseModel
from typing import Optional


class ProblemDetail(BaseModel):
    """RFC 7807 compliant error response."""

    type: str = "about:blank"
    title: str
    detail: Optional[str] = None
    status: int
    instance: Optional[str] = None
    code: str


class DomainException(Exception):
    """Base class for domain-specific exceptions."""

    def __init__(
        self,
        status_code: int,
        title: str,
        *,
        code: str,
        detail: str | None = None,
        type_: str = "about:blank",
    ) -> None:
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type = type_
        self.code = code


class GameNotFound(DomainException):
    def __init__(self, game_id: str) -> None:
        super().__init__(
            status_code=404,
            title="Game not found",
            detail=f"game '{game_id}' not found",
            code="game_not_found",
        )


class FrameNotFound(DomainException):
    def __init__(self, game_id: str, frame_number: int) -> None:
        super().__init__(
            status_code=404,
            title="Frame not found",
            detail=f"frame {frame_number} of game '{game_id}' not found",
            code="frame_not_found",
        )


class GameAlreadyComplete(DomainException):
    def __init__(self, game_id: str) -> None:
        super().__init__(
            status_code=400,
            title="Game complete",
            detail=f"game '{game_id}' is complete and cannot be modified",
            code="game_complete",
        )


class UnscorableGame(DomainException):
    """Stored or submitted frames the scoring engine refused to score."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=422,
            title="Invalid frame data",
            detail=detail,
            code="invalid_frame_data",
        )


def http_problem(
    status_code: int,
    detail: str,
    code: str,
    *,
    headers: Optional[dict[str, str]] = None,
) -> HTTPException:
    """Create an HTTPException with an attached problem code."""

    exc = HTTPException(status_code=status_code, detail=detail, headers=headers)
    setattr(exc, "code", code)
    return exc
