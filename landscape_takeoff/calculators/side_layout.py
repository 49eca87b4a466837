"""
Per-side fence layout.

Two strategies:
  Panel fences    — fixed-width pre-made panels, one post per bay, the last
                    panel cut down to fit the run.
  Board fences    — posts at (at most) the target spacing, evenly redistributed,
                    with boards and arris rails between them.

Each side is laid out on its own; corner sharing is the aggregator's job.
"""

import math

from ..schemas import FenceSpecification, FenceType, SideLayout
from .base import round_half_up, round_measure

MIN_CUT_PANEL_MM = 100   # narrower than this and a cut panel isn't worth fitting
HIT_MISS_GAP_MM = 20     # board pitch on each face = 2 × width − 20
MAX_INPUT_VALUE = 10_000_000   # 10km in mm; also bounds counts and percentages
MAX_UNITS_PER_SIDE = 1_000_000  # bays, post gaps or boards along one side


def layout_side(length_mm: float, fence_type, spec: FenceSpecification,
                side_number: int = 1) -> SideLayout:
    """Lay out one side. length_mm must be positive; the caller filters empty sides."""
    if FenceType(fence_type) == FenceType.PANEL:
        return _layout_panel_side(length_mm, spec, side_number)
    return _layout_board_side(length_mm, FenceType(fence_type), spec, side_number)


def _layout_panel_side(length: float, spec: FenceSpecification, side_number: int) -> SideLayout:
    panel_width = spec.panel_width_mm
    post_width = spec.post_width_mm
    bay_width = panel_width + post_width
    full_bays = math.floor(length / bay_width)
    remainder = length - full_bays * bay_width

    if remainder > post_width + MIN_CUT_PANEL_MM:
        # Room for a cut panel after the last full bay
        full_panels = full_bays
        cut_width = remainder - post_width
        panels = full_panels + 1
    elif full_bays > 0:
        # Too tight: give up one full bay and cut a wider panel instead
        full_panels = full_bays - 1
        cut_width = length - (full_panels + 2) * post_width - full_panels * panel_width
        if cut_width < MIN_CUT_PANEL_MM:
            full_panels = full_bays
            cut_width = 0
            panels = full_panels
        else:
            panels = full_panels + 1
    else:
        # Run shorter than one bay: a single panel between two posts
        full_panels = 0
        cut_width = length - 2 * post_width
        if cut_width < MIN_CUT_PANEL_MM:
            cut_width = length - post_width
        panels = 1

    posts = panels + 1

    # Left to right: full panels first, then the cut panel
    panel_widths = [int(panel_width)] * full_panels
    if cut_width > 0:
        panel_widths.append(int(round_half_up(cut_width)))

    return SideLayout(
        side_number=side_number,
        length_mm=length,
        posts=posts,
        actual_spacing_mm=round_measure(bay_width),
        panels=panels,
        full_panel_count=full_panels,
        cut_panel_width_mm=int(round_half_up(cut_width)),
        panel_widths=tuple(panel_widths),
    )


def _layout_board_side(length: float, fence_type: FenceType, spec: FenceSpecification,
                       side_number: int) -> SideLayout:
    posts = math.ceil(length / spec.post_spacing_target_mm) + 1
    actual_spacing = length / (posts - 1)

    if fence_type == FenceType.HIT_MISS:
        # Boards on both faces of the rails
        boards_per_metre = 1000 / (spec.board_width_mm * 2 - HIT_MISS_GAP_MM)
        boards = math.ceil((length / 1000) * boards_per_metre * 2)
    else:
        effective_width = spec.board_width_mm - spec.board_overlap_mm
        boards = math.ceil(length / effective_width)

    return SideLayout(
        side_number=side_number,
        length_mm=length,
        posts=posts,
        actual_spacing_mm=round_measure(actual_spacing),
        board_count=boards,
        rail_count=(posts - 1) * spec.rails_per_bay,
    )


def _fits(length_mm: float, pitch_mm: float) -> bool:
    if pitch_mm <= 0:
        return False
    units = length_mm / pitch_mm
    return math.isfinite(units) and units <= MAX_UNITS_PER_SIDE


def spec_in_range(spec: FenceSpecification) -> bool:
    """Every numeric field is finite and no bigger than MAX_INPUT_VALUE."""
    for value in spec.model_dump().values():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if abs(value) > MAX_INPUT_VALUE or not math.isfinite(value):
            return False
    return True


def can_layout(fence_type, spec: FenceSpecification, length_mm: float = 0.0) -> bool:
    """
    False when a run of length_mm can't be laid out with this specification:
    a zero or negative pitch, an out-of-range dimension, or more than
    MAX_UNITS_PER_SIDE bays or boards on the run.
    """
    fence_type = FenceType(fence_type)
    if not spec_in_range(spec) or not 0 <= length_mm <= MAX_INPUT_VALUE:
        return False
    if fence_type == FenceType.PANEL:
        return (spec.post_width_mm >= 0
                and spec.panel_width_mm > 0
                and _fits(length_mm, spec.panel_width_mm + spec.post_width_mm))
    if not _fits(length_mm, spec.post_spacing_target_mm):
        return False
    if fence_type == FenceType.HIT_MISS:
        return _fits(length_mm, spec.board_width_mm * 2 - HIT_MISS_GAP_MM)
    return _fits(length_mm, spec.board_width_mm - spec.board_overlap_mm)
