"""
Perimeter aggregation — runs the side layout over every enabled side and
merges the results into whole-job structural counts.

Corner sharing assumes an OPEN chain: each side after the first shares one
post with the side before it. A closed four-sided loop really shares four
corners, not three; that case stays on the open-chain rule
until the product decision is made.
"""

import logging
from typing import Iterable, Optional

from ..schemas import FenceSpecification, FenceType, PerimeterTotals, Side
from .base import apply_waste
from .side_layout import can_layout, layout_side

logger = logging.getLogger(__name__)

MAX_SIDES = 4


def active_sides(sides: Iterable[Side]) -> list:
    """Enabled sides with a positive length, in order. Only the first four sides count."""
    return [side for side in list(sides)[:MAX_SIDES] if side.enabled and side.length_mm > 0]


def shared_corner_count(enabled_side_count: int) -> int:
    return max(0, enabled_side_count - 1)


def aggregate(sides: Iterable[Side], fence_type, spec: FenceSpecification) -> Optional[PerimeterTotals]:
    """
    Lay out every active side and total the structure.

    Returns None (not an error) when no side has anything to build, or when
    the specification can't lay out the longest side (zero spacing or
    pitch, out-of-range dimensions, a run too long to list).
    Waste is applied to boards only; posts, panels and rails are exact.
    """
    fence_type = FenceType(fence_type)
    participating = active_sides(sides)
    if not participating:
        logger.debug("No enabled side with a positive length, no result")
        return None
    longest = max(side.length_mm for side in participating)
    if not can_layout(fence_type, spec, longest):
        logger.debug("Specification cannot lay out a %.0fmm %s run, no result",
                     longest, fence_type.value)
        return None

    layouts = tuple(
        layout_side(side.length_mm, fence_type, spec, side_number=i + 1)
        for i, side in enumerate(participating)
    )

    total_posts_raw = sum(s.posts for s in layouts)
    shared = shared_corner_count(len(layouts))
    net_posts = total_posts_raw - shared

    # Cut panels stay per side, never merged across a corner
    full_panels = sum(s.full_panel_count for s in layouts)
    cut_panels = sum(1 for s in layouts if s.cut_panel_width_mm > 0)

    raw_boards = sum(s.board_count for s in layouts)
    total_boards = apply_waste(raw_boards, spec.waste_percent)

    return PerimeterTotals(
        fence_type=fence_type,
        sides=layouts,
        enabled_side_count=len(layouts),
        total_length_mm=sum(s.length_mm for s in layouts),
        total_posts_raw=total_posts_raw,
        shared_corners=shared,
        net_posts=net_posts,
        full_panels=full_panels,
        cut_panels=cut_panels,
        total_panels=full_panels + cut_panels,
        raw_board_count=raw_boards,
        total_boards=total_boards,
        total_rails=sum(s.rail_count for s in layouts),
    )
