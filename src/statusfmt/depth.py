"""Nesting depth limits checked against the interpreter recursion limit."""

from __future__ import annotations

import logging
import sys

from statusfmt.constants import FRAMES_PER_LEVEL

__all__ = ["depth_clamp"]

logger = logging.getLogger(__name__)


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Clamp a requested nesting depth so parsing cannot hit RecursionError.

    Each nesting level costs FRAMES_PER_LEVEL Python frames; *reserve_frames*
    are kept for the caller's own stack. Logs a warning if clamping occurs.

    Args:
        requested_depth: Desired maximum nesting depth
        reserve_frames: Stack frames to reserve for call overhead

    Returns:
        Safe depth value, clamped if necessary (never below 1)
    """
    budget = (sys.getrecursionlimit() - reserve_frames) // FRAMES_PER_LEVEL
    safe_depth = max(1, budget)
    if requested_depth > safe_depth:
        logger.warning(
            "max_depth %d exceeds what the recursion limit (%d) allows; using %d",
            requested_depth,
            sys.getrecursionlimit(),
            safe_depth,
        )
        return safe_depth
    return requested_depth
