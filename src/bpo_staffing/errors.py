# src/bpo_staffing/errors.py
from __future__ import annotations


class DomainError(ValueError):
    """Raised when staffing inputs fall outside the domain of the Erlang-C model."""


class InvalidInterval(DomainError):
    """Non-positive handle time / interval length, or negative volume."""


class InvalidTarget(DomainError):
    """Service level target outside [0, 100] or negative answer time."""


class InvalidShrinkage(DomainError):
    """Shrinkage at or above 100% (or negative) cannot be converted to headcount."""


__all__ = [
    "DomainError",
    "InvalidInterval",
    "InvalidTarget",
    "InvalidShrinkage",
]
