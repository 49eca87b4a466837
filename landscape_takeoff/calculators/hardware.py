"""
Quantity & hardware stage: turns perimeter totals into the final bill of
quantities (concrete, gravel, caps, fixings) and its cutting list.
"""

from typing import Optional

from ..schemas import (
    BillOfQuantities,
    BoardSummary,
    BudgetTier,
    FenceSpecification,
    FenceType,
    HardwareSummary,
    LineItem,
    PanelSummary,
    PerimeterTotals,
    PostSummary,
    RailSummary,
    SkillTier,
    TrellisSummary,
)
from .base import ceil_units, coerce_choice, round_half_up, round_measure
from .catalog import (
    CLIPS_PER_PANEL,
    CONCRETE_BAG_KG,
    GRAVEL_BAG_KG,
    GRAVEL_KG_PER_POST,
    NAILS_PER_BOARD,
    NAILS_PER_BOX,
    PANEL_SIZES,
    POST_TYPES,
    SCREWS_PER_BOX,
    SCREWS_PER_RAIL,
)


def format_mm(value: float) -> str:
    """1800 -> '1.80m', 600 -> '600mm'."""
    if value >= 1000:
        return "%.2fm" % round_measure(value / 1000)
    return "%dmm" % round_half_up(value)


def hardware_quantities(totals: PerimeterTotals, spec: FenceSpecification) -> HardwareSummary:
    """Fixings and consumables for the whole perimeter."""
    is_panel = totals.fence_type == FenceType.PANEL
    net_posts = totals.net_posts

    total_nails = 0 if is_panel else totals.total_boards * NAILS_PER_BOARD
    total_screws = totals.total_rails * SCREWS_PER_RAIL

    return HardwareSummary(
        post_caps=net_posts,  # one per post, shared corners included once
        concrete_bags=net_posts * spec.concrete_bags_per_post,
        gravel_kg=net_posts * GRAVEL_KG_PER_POST,
        panel_clips=totals.total_panels * CLIPS_PER_PANEL if is_panel else 0,
        total_nails=total_nails,
        nail_boxes=ceil_units(total_nails / NAILS_PER_BOX),
        total_screws=total_screws,
        screw_boxes=ceil_units(total_screws / SCREWS_PER_BOX),
    )


def trellis_summary(totals: PerimeterTotals, spec: FenceSpecification) -> Optional[TrellisSummary]:
    """
    Trellis topper, one panel per bay. Board fences have no panel count, so
    their bays are the gaps between posts on each side.
    """
    if not spec.add_trellis:
        return None
    panels = totals.total_panels or max(1, sum(s.posts - 1 for s in totals.sides))
    height = spec.trellis_height_mm
    return TrellisSummary(
        panels=panels,
        height_mm=height,
        post_extension_mm=height,
        post_length_mm=spec.fence_height_mm + spec.post_depth_mm + height,
    )


def price_out(totals: PerimeterTotals, spec: FenceSpecification,
              skill_tier=SkillTier.PRO, budget_tier=BudgetTier.FULL,
              locked_fields: Optional[dict] = None) -> BillOfQuantities:
    """Final bill of quantities, built once and never changed afterwards."""
    post_height = spec.fence_height_mm + spec.post_depth_mm

    posts = PostSummary(
        count=totals.net_posts,
        post_type=spec.post_type,
        width_mm=spec.post_width_mm,
        height_mm=post_height,
        depth_in_ground_mm=spec.post_depth_mm,
        above_ground_mm=spec.fence_height_mm,
        shared_corners=totals.shared_corners,
    )
    panels = PanelSummary(
        count=totals.total_panels,
        full_panels=totals.full_panels,
        cut_panels=totals.cut_panels,
        panel_size=spec.panel_size,
        width_mm=spec.panel_width_mm,
        height_mm=spec.panel_height_mm,
    )
    boards = BoardSummary(
        count=totals.total_boards,
        width_mm=spec.board_width_mm,
        thickness_mm=spec.board_thickness_mm,
        overlap_mm=spec.board_overlap_mm,
        height_mm=spec.fence_height_mm,
    )
    rails = RailSummary(
        count=totals.total_rails,
        depth_mm=spec.rail_depth_mm,
        thickness_mm=spec.rail_thickness_mm,
        rails_per_bay=spec.rails_per_bay,
    )
    hardware = hardware_quantities(totals, spec)
    trellis = trellis_summary(totals, spec)
    locked_fields = locked_fields or {}

    return BillOfQuantities(
        fence_type=totals.fence_type,
        skill_tier=coerce_choice(skill_tier, SkillTier, SkillTier.PRO),
        budget_tier=coerce_choice(budget_tier, BudgetTier, BudgetTier.FULL),
        total_length_m=round_measure(totals.total_length_mm / 1000),
        fence_height_mm=spec.fence_height_mm,
        sides=totals.sides,
        posts=posts,
        panels=panels,
        boards=boards,
        rails=rails,
        hardware=hardware,
        trellis=trellis,
        spec=spec,
        locked_fields=locked_fields,
        items=tuple(cutting_list(totals, spec, posts, hardware, trellis)),
        assumptions=tuple(build_assumptions(totals, spec, locked_fields, trellis)),
    )


# --- Cutting list ---

def make_line_item(section: str, description: str, quantity: float,
                   length_mm: Optional[float] = None, unit: str = "no.",
                   note: str = "") -> LineItem:
    """Build a cutting-list row."""
    return LineItem(
        section=section,
        description=description,
        quantity=quantity,
        unit=unit,
        length_mm=round_measure(length_mm) if length_mm is not None else None,
        note=note,
    )


def _post_description(spec: FenceSpecification):
    post = POST_TYPES.get(spec.post_type or "")
    if post:
        return "%s post %s" % (post["label"], post["size"]), post["size"]
    size = "%d×%dmm" % (spec.post_width_mm, spec.post_width_mm)
    return "Post %s" % size, size


def cutting_list(totals: PerimeterTotals, spec: FenceSpecification,
                 posts: PostSummary, hardware: HardwareSummary,
                 trellis: Optional[TrellisSummary] = None) -> list:
    items = []
    post_label, post_size = _post_description(spec)

    items.append(make_line_item(
        "POSTS", post_label, posts.count, length_mm=posts.height_mm,
        note="%s above ground + %s in ground" % (
            format_mm(posts.above_ground_mm), format_mm(posts.depth_in_ground_mm)),
    ))
    items.append(make_line_item("POSTS", "Post caps", hardware.post_caps, note=post_size))

    if totals.fence_type == FenceType.PANEL:
        if totals.full_panels > 0:
            size = PANEL_SIZES.get(spec.panel_size or "")
            label = size["label"] if size else "%d×%dmm" % (spec.panel_width_mm, spec.panel_height_mm)
            items.append(make_line_item(
                "PANELS", "Fence panel %s" % label, totals.full_panels,
                length_mm=spec.panel_width_mm,
                note="%s high, standard" % format_mm(spec.panel_height_mm),
            ))
        if totals.cut_panels > 0:
            widths = ", ".join(
                "side %d: %s" % (s.side_number, format_mm(s.cut_panel_width_mm))
                for s in totals.sides if s.cut_panel_width_mm > 0
            )
            items.append(make_line_item(
                "PANELS", "Cut panel(s)", totals.cut_panels,
                note="cut to fit (%s)" % widths,
            ))
    else:
        is_featheredge = totals.fence_type == FenceType.FEATHEREDGE
        items.append(make_line_item(
            "BOARDS",
            "%s board %d×%dmm" % ("Featheredge" if is_featheredge else "Fence",
                                  spec.board_width_mm, spec.board_thickness_mm),
            totals.total_boards,
            length_mm=spec.fence_height_mm,
            note=("%s overlap" % format_mm(spec.board_overlap_mm)) if is_featheredge
            else "alternating both sides",
        ))
        items.append(make_line_item(
            "RAILS",
            "Arris rail %d×%dmm" % (spec.rail_depth_mm, spec.rail_thickness_mm),
            totals.total_rails,
            length_mm=round_half_up(spec.post_spacing_target_mm),
            note="%d per bay" % spec.rails_per_bay,
        ))

    if trellis is not None:
        items.append(make_line_item(
            "TRELLIS", "Trellis panel", trellis.panels,
            length_mm=spec.panel_width_mm if totals.fence_type == FenceType.PANEL else None,
            note="%s high, posts +%s" % (format_mm(trellis.height_mm),
                                         format_mm(trellis.post_extension_mm)),
        ))

    hardware_rows = []
    if totals.fence_type == FenceType.PANEL:
        hardware_rows.append(("Panel clips", hardware.panel_clips, "no."))
    else:
        hardware_rows.append(("Nails (≈%d)" % hardware.total_nails, hardware.nail_boxes,
                              "boxes ×%d" % NAILS_PER_BOX))
    # Panel clips are screwed too, so there's always at least one box
    hardware_rows.append(("Screws (≈%d)" % hardware.total_screws, hardware.screw_boxes or 1,
                          "boxes ×%d" % SCREWS_PER_BOX))
    hardware_rows.append(("Postcrete/concrete", round_measure(hardware.concrete_bags),
                          "bags ×%dkg" % CONCRETE_BAG_KG))
    hardware_rows.append(("Drainage gravel", ceil_units(hardware.gravel_kg / GRAVEL_BAG_KG),
                          "bags ×%dkg" % GRAVEL_BAG_KG))

    for description, quantity, unit in hardware_rows:
        if quantity > 0:
            items.append(make_line_item("HARDWARE", description, quantity, unit=unit))
    return items


def build_assumptions(totals: PerimeterTotals, spec: FenceSpecification,
                      locked_fields: dict, trellis: Optional[TrellisSummary] = None) -> list:
    assumptions = []
    if totals.fence_type != FenceType.PANEL and spec.waste_percent:
        assumptions.append(
            "Board quantities include a %g%% waste allowance. Posts, panels and rails are exact."
            % spec.waste_percent)
    if totals.shared_corners:
        assumptions.append(
            "%d corner post(s) shared between adjacent sides (sides treated as an open run, "
            "not a closed loop)." % totals.shared_corners)
    if locked_fields:
        assumptions.append(
            "DIY mode: %s set automatically." % ", ".join(sorted(locked_fields)))
    if trellis is not None:
        assumptions.append(
            "Posts must be extended by the trellis height (%s) to %s. Order longer posts "
            "or add post extenders." % (format_mm(trellis.post_extension_mm),
                                        format_mm(trellis.post_length_mm)))
    assumptions.append(
        "Post depths assume standard soil conditions. Increase to 750mm for exposed or soft ground.")
    assumptions.append("Check local regulations for boundary fence heights.")
    return assumptions
