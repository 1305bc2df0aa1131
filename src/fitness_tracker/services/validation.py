"""Boundary validation for user-entered numbers."""

import math


def require_non_negative(value: float, label: str) -> float:
    """Return ``value`` when it is a finite number >= 0, else raise ValueError."""
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{label} must be a non-negative finite number")
    return value


def require_positive(value: float, label: str) -> float:
    """Return ``value`` when it is a finite number > 0, else raise ValueError."""
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{label} must be a positive finite number")
    return value


def parse_number(raw: str) -> float:
    """Parse a typed number, raising ValueError with a readable message."""
    cleaned = raw.strip()
    try:
        return float(cleaned)
    except ValueError as exc:
        raise ValueError(f"Not a number: {cleaned}") from exc


def parse_optional_number(raw: str) -> float | None:
    """Parse a typed number where ``-`` or blank means not logged."""
    if raw.strip() in {"", "-"}:
        return None
    return parse_number(raw)
