"""Internal application services (pure helpers, no I/O)."""

from .validation import (
    ThrowValidation,
    ValidationError,
    ensure_valid_throws,
    validate_next_throw,
    validate_throws,
)

__all__ = [
    "ThrowValidation",
    "ValidationError",
    "ensure_valid_throws",
    "validate_next_throw",
    "validate_throws",
]
