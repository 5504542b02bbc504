from typing import Any, NamedTuple, Optional, Sequence

from ..scoring.bowling import (
    MAX_FRAMES,
    frame_prefix_error,
    is_frame_complete,
    is_pin_count,
)
from ..scoring.tenth_frame import MAX_PINS, TenthFrame


class ValidationError(Exception):
    """Raised when submitted frame throws are invalid."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ThrowValidation(NamedTuple):
    valid: bool
    error: Optional[str] = None


_OK = ThrowValidation(valid=True)


def _invalid(error: str) -> ThrowValidation:
    return ThrowValidation(valid=False, error=error)


def validate_throws(throws: Sequence[Any], frame_number: int) -> ThrowValidation:
    """Check a finished frame's throws and report the first rule broken.

    Rules:
    - Throws must be a non-empty sequence of integers in 0-10 (booleans are
      rejected)
    - Frames 1-9 have at most two throws, knock down at most 10 pins and
      stop after a strike
    - Frame 10 has two throws, or three after a strike or spare, with each
      ball bounded by the pins left standing

    Never raises; callers decide whether to reject the write.
    """

    if isinstance(frame_number, bool) or not isinstance(frame_number, int) or not (
        1 <= frame_number <= MAX_FRAMES
    ):
        return _invalid("Frame number must be between 1 and 10")
    if not isinstance(throws, Sequence) or isinstance(throws, (str, bytes)) or len(throws) == 0:
        return _invalid("Throws must be a non-empty array")
    if not all(is_pin_count(pins) for pins in throws):
        return _invalid("Each throw must be an integer between 0 and 10")

    if frame_number < MAX_FRAMES:
        error = frame_prefix_error(throws, frame_number)
        return _invalid(error) if error else _OK
    return _validate_tenth_frame(throws)


def _validate_tenth_frame(throws: Sequence[int]) -> ThrowValidation:
    if len(throws) < 2:
        return _invalid("10th frame must have at least 2 throws")
    if len(throws) > 3:
        return _invalid("10th frame can have at most 3 throws")

    frame = TenthFrame()
    for pins in throws:
        if frame.is_complete:
            return _invalid("10th frame without strike/spare should have only 2 throws")
        try:
            frame.roll(pins)
        except ValueError:
            # a rejected ball is never recorded
            if len(frame.throws) == 1:
                return _invalid("First two throws cannot exceed 10 pins")
            return _invalid("Invalid pin combination in 10th frame")

    if not frame.is_complete:
        if throws[0] == MAX_PINS:
            return _invalid("10th frame with strike needs 3 throws")
        return _invalid("10th frame with spare needs 3 throws")
    return _OK


def ensure_valid_throws(throws: Sequence[Any], frame_number: int) -> None:
    result = validate_throws(throws, frame_number)
    if not result.valid:
        raise ValidationError(result.error)


def validate_next_throw(
    frame_number: int, throws: Sequence[int], pins: Any
) -> Optional[str]:
    """Return why ``pins`` cannot be the next ball of the frame, or ``None``."""

    if not is_pin_count(pins):
        return "Pins must be between 0 and 10"
    if is_frame_complete(throws, frame_number):
        return "Frame is already complete"
    if frame_number < MAX_FRAMES:
        if sum(throws) + pins > MAX_PINS:
            return "Total pins cannot exceed 10 in a frame"
        return None
    try:
        TenthFrame.from_throws(throws).roll(pins)
    except ValueError as exc:
        return str(exc)
    return None
