"""Unit conversion helpers for WordprocessingML measurements."""
from __future__ import annotations

HALF_POINTS_PER_POINT = 2


def half_points_to_points(value: int) -> float:
    """Convert half-points (the unit of ``w:sz``) to points."""
    return value / HALF_POINTS_PER_POINT


