"""Scoring engines for ten-pin bowling."""

from . import bowling, tenth_frame

__all__ = [
    "bowling",
    "tenth_frame",
]
