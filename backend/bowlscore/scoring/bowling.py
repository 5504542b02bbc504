"""Ten-pin bowling scoring engine.

Scores are derived from a snapshot of a game's frames. Strike and spare
bonuses look ahead by frame number rather than list position, so a game that
is still in progress simply credits nothing for throws that have not been
recorded yet; those totals are provisional and change as later frames arrive.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from .tenth_frame import MAX_PINS, TenthFrame

logger = logging.getLogger(__name__)

MAX_FRAMES = 10


class InvalidFrameData(ValueError):
    """Raised when the frames handed to the scorer cannot belong to a legal game."""


@dataclass(frozen=True)
class Frame:
    frame_number: int
    throws: Tuple[int, ...] = ()
    cumulative_score: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "throws", tuple(self.throws))

    @property
    def is_strike(self) -> bool:
        return bool(self.throws) and self.throws[0] == MAX_PINS

    @property
    def is_spare(self) -> bool:
        return (
            not self.is_strike
            and len(self.throws) == 2
            and sum(self.throws) == MAX_PINS
        )


class FrameStats(NamedTuple):
    strikes: int
    spares: int
    opens: int


def is_pin_count(value) -> bool:
    # bool is a subclass of int; True must not count as one pin
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= MAX_PINS


def frame_prefix_error(throws: Sequence[int], frame_number: int) -> Optional[str]:
    """Return why ``throws`` cannot be the start of frame ``frame_number``.

    Unlike full validation this accepts frames that are still in progress
    (``[]``, ``[7]``, or ``[10]`` in the tenth frame).
    """

    if frame_number < MAX_FRAMES:
        if len(throws) > 2:
            return "Regular frame can have at most 2 throws"
        if throws and throws[0] == MAX_PINS and len(throws) > 1:
            return "Strike frame should have only one throw"
        if sum(throws) > MAX_PINS:
            return "Total pins cannot exceed 10 in a frame"
        return None
    try:
        TenthFrame.from_throws(throws)
    except ValueError as exc:
        return str(exc)
    return None


def _index_frames(frames: Iterable[Frame]) -> Dict[int, Frame]:
    by_number: Dict[int, Frame] = {}
    for frame in frames:
        number = frame.frame_number
        if isinstance(number, bool) or not isinstance(number, int):
            raise InvalidFrameData(f"frame number {number!r} must be an integer")
        if not 1 <= number <= MAX_FRAMES:
            raise InvalidFrameData(f"frame number {number} is out of range 1-{MAX_FRAMES}")
        if number in by_number:
            raise InvalidFrameData(f"duplicate frame number {number}")
        if not all(is_pin_count(pins) for pins in frame.throws):
            raise InvalidFrameData(
                f"frame {number}: each throw must be an integer between 0 and 10"
            )
        problem = frame_prefix_error(frame.throws, number)
        if problem:
            raise InvalidFrameData(f"frame {number}: {problem}")
        by_number[number] = frame
    return by_number


def _strike_bonus(frame_number: int, by_number: Dict[int, Frame]) -> int:
    following = by_number.get(frame_number + 1)
    if following is None or not following.throws:
        logger.debug("strike in frame %d has no following throws yet", frame_number)
        return 0

    if following.is_strike and following.frame_number < MAX_FRAMES:
        after = by_number.get(frame_number + 2)
        if after is None or not after.throws:
            # only the known strike is credited until the next ball is recorded
            return MAX_PINS
        return MAX_PINS + after.throws[0]

    return sum(following.throws[:2])


def _spare_bonus(frame_number: int, by_number: Dict[int, Frame]) -> int:
    following = by_number.get(frame_number + 1)
    if following is None or not following.throws:
        logger.debug("spare in frame %d has no following throw yet", frame_number)
        return 0
    return following.throws[0]


def _frame_score(frame: Frame, by_number: Dict[int, Frame]) -> int:
    if frame.frame_number == MAX_FRAMES:
        return sum(frame.throws)
    if frame.is_strike:
        return MAX_PINS + _strike_bonus(frame.frame_number, by_number)
    if frame.is_spare:
        return MAX_PINS + _spare_bonus(frame.frame_number, by_number)
    return sum(frame.throws)


def calculate_game_score(frames: Iterable[Frame]) -> List[Frame]:
    """Return new frames, ascending by number, with cumulative scores set.

    Any ``cumulative_score`` already present on the input is ignored. Raises
    ``InvalidFrameData`` when a frame number is out of range or repeated, or
    when a frame's throws could never have been bowled.
    """

    by_number = _index_frames(frames)
    cumulative = 0
    scored: List[Frame] = []
    for number in sorted(by_number):
        frame = by_number[number]
        cumulative += _frame_score(frame, by_number)
        scored.append(replace(frame, cumulative_score=cumulative))
    return scored


def is_frame_complete(throws: Sequence[int], frame_number: int) -> bool:
    if frame_number < MAX_FRAMES:
        return (bool(throws) and throws[0] == MAX_PINS) or len(throws) == 2

    if len(throws) < 2:
        return False
    first, second = throws[0], throws[1]
    if first == MAX_PINS or first + second == MAX_PINS:
        return len(throws) == 3
    return len(throws) == 2


def is_game_complete(frames: Iterable[Frame]) -> bool:
    completed = {
        frame.frame_number
        for frame in frames
        if is_frame_complete(frame.throws, frame.frame_number)
    }
    return completed >= set(range(1, MAX_FRAMES + 1))


def get_frame_stats(frames: Iterable[Frame]) -> FrameStats:
    """Count strikes, spares and open frames.

    Frame 10 can contribute up to two strikes or spares. It never counts as
    an open frame, so ``opens`` only reflects frames 1-9. Frames with no
    throws recorded are not counted at all.
    """

    strikes = spares = opens = 0
    for frame in frames:
        throws = frame.throws
        if not throws or frame.frame_number > MAX_FRAMES:
            continue

        if frame.frame_number < MAX_FRAMES:
            if throws[0] == MAX_PINS:
                strikes += 1
            elif sum(throws) == MAX_PINS:
                spares += 1
            else:
                opens += 1
            continue

        if throws[0] == MAX_PINS:
            strikes += 1
        if len(throws) >= 2 and throws[0] != MAX_PINS and throws[0] + throws[1] == MAX_PINS:
            spares += 1
        if len(throws) >= 3 and throws[1] == MAX_PINS:
            strikes += 1
        if len(throws) == 3 and throws[1] != MAX_PINS and throws[1] + throws[2] == MAX_PINS:
            spares += 1

    return FrameStats(strikes=strikes, spares=spares, opens=opens)


def empty_game() -> List[Frame]:
    return [Frame(frame_number=n) for n in range(1, MAX_FRAMES + 1)]


def throw_display(frame_number: int, index: int, throws: Sequence[int]) -> str:
    """Scorecard mark for one ball: ``X``, ``/``, ``-`` or the pin count."""

    if index >= len(throws):
        return "-"
    value = throws[index]

    if frame_number < MAX_FRAMES:
        if index == 0 and value == MAX_PINS:
            return "X"
        if index == 1 and throws[0] + value == MAX_PINS:
            return "/"
        return "-" if value == 0 else str(value)

    # tenth frame: replay the balls to know whether each one faced a full rack
    fresh_rack = True
    mark = ""
    for position, pins in enumerate(throws[: index + 1]):
        if fresh_rack:
            mark = "X" if pins == MAX_PINS else str(pins)
            fresh_rack = pins == MAX_PINS
        else:
            mark = "/" if throws[position - 1] + pins == MAX_PINS else str(pins)
            fresh_rack = True
    return "-" if mark == "0" else mark


def frame_marks(frame_number: int, throws: Sequence[int]) -> List[str]:
    return [throw_display(frame_number, i, throws) for i in range(len(throws))]


def summary(frames: Iterable[Frame]) -> Dict:
    scored = calculate_game_score(frames)
    scores = []
    previous = 0
    for frame in scored:
        scores.append(frame.cumulative_score - previous)
        previous = frame.cumulative_score
    return {
        "frames": scored,
        "scores": scores,
        "total": previous,
        "isComplete": is_game_complete(scored),
        "stats": get_frame_stats(scored)._asdict(),
    }
