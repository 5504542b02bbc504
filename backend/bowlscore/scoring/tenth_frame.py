"""Explicit state machine for the tenth frame."""
from __future__ import annotations

from enum import Enum
from typing import Iterable, List

MAX_PINS = 10


class TenthFrameState(str, Enum):
    AWAITING_T1 = "awaiting_t1"
    AWAITING_T2 = "awaiting_t2"
    AWAITING_T3 = "awaiting_t3"
    COMPLETE = "complete"


class TenthFrame:
    """Track throws in the final frame and the pins left standing.

    Pins are reset after a first-ball strike, after a second consecutive
    strike and after a spare; otherwise the next ball is bounded by what is
    still standing.
    """

    def __init__(self) -> None:
        self.state = TenthFrameState.AWAITING_T1
        self.throws: List[int] = []
        self.pins_standing = MAX_PINS

    @classmethod
    def from_throws(cls, throws: Iterable[int]) -> "TenthFrame":
        frame = cls()
        for pins in throws:
            frame.roll(pins)
        return frame

    @property
    def is_complete(self) -> bool:
        return self.state is TenthFrameState.COMPLETE

    def roll(self, pins: int) -> TenthFrameState:
        if self.state is TenthFrameState.COMPLETE:
            raise ValueError("no rolls left in final frame")
        if not 0 <= pins <= MAX_PINS:
            raise ValueError("pins out of range")
        if pins > self.pins_standing:
            raise ValueError(f"Only {self.pins_standing} pins are standing")
        self.throws.append(pins)

        if self.state is TenthFrameState.AWAITING_T1:
            self.state = TenthFrameState.AWAITING_T2
            self.pins_standing = MAX_PINS if pins == MAX_PINS else MAX_PINS - pins
        elif self.state is TenthFrameState.AWAITING_T2:
            first = self.throws[0]
            if first == MAX_PINS:
                self.state = TenthFrameState.AWAITING_T3
                # X-X resets the rack; X-n leaves 10 - n for the fill ball
                self.pins_standing = MAX_PINS if pins == MAX_PINS else MAX_PINS - pins
            elif first + pins == MAX_PINS:
                self.state = TenthFrameState.AWAITING_T3
                self.pins_standing = MAX_PINS
            else:
                self.state = TenthFrameState.COMPLETE
                self.pins_standing = 0
        else:
            self.state = TenthFrameState.COMPLETE
            self.pins_standing = 0
        return self.state
