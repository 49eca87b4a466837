"""
Fence quantity takeoff.

Flow, top to bottom, nothing held between calls:
  tier override -> per-side layout -> perimeter totals -> hardware -> bill of quantities

Panel fences: pre-made panels with a cut panel to finish each run.
Featheredge / hit & miss: posts at the target spacing, boards and arris rails between.
"""

import logging
from typing import Optional

from ..config import settings
from ..schemas import (
    BillOfQuantities,
    BudgetTier,
    FenceInput,
    FenceSpecification,
    FenceType,
    Side,
    SkillTier,
)
from .base import BaseCalculator
from .catalog import get_panel_size, get_post_type
from .hardware import price_out
from .perimeter import MAX_SIDES, aggregate
from .tier_spec import effective_spec

logger = logging.getLogger(__name__)

DEFAULT_RAILS_PER_BAY = 3
DEFAULT_CONCRETE_BAGS_PER_POST = 2
DEFAULT_TRELLIS_HEIGHT_MM = 300


def compute_fence_bom(fence_input: FenceInput) -> Optional[BillOfQuantities]:
    """
    Compute the bill of quantities for a fence.

    Returns None when no enabled side has a positive length (or the spec
    can't be laid out); never raises for numeric input.
    """
    spec, override = effective_spec(fence_input.spec, fence_input.skill_tier,
                                    fence_input.budget_tier)

    totals = aggregate(fence_input.sides, spec.fence_type, spec)
    if totals is None:
        return None

    return price_out(
        totals, spec,
        skill_tier=fence_input.skill_tier,
        budget_tier=fence_input.budget_tier,
        locked_fields=override.locked_fields(),
    )


class FenceCalculator(BaseCalculator):

    job_type = "fence"

    def calculate(self, fields: dict) -> Optional[dict]:
        fence_input = self.parse_input(fields)
        bom = compute_fence_bom(fence_input)
        if bom is None:
            logger.info("Fence takeoff: nothing to build")
            return None

        logger.info(
            "Fence takeoff: %s, %d side(s), %.2fm, %d posts",
            bom.fence_type.value, len(bom.sides), bom.total_length_m, bom.posts.count)
        return bom.model_dump(mode="json")

    # --- Input parsing ---

    def parse_input(self, fields: dict) -> FenceInput:
        """Coerce raw form fields into an immutable FenceInput. Never raises."""
        fields = fields or {}
        skill_tier = self.parse_choice(fields.get("skill_tier", fields.get("user_mode")),
                                       SkillTier, SkillTier(settings.DEFAULT_SKILL_TIER))
        budget_tier = self.parse_choice(fields.get("budget_tier", fields.get("spec_tier")),
                                        BudgetTier, BudgetTier(settings.DEFAULT_BUDGET_TIER))
        return FenceInput(
            sides=tuple(self.parse_sides(fields)),
            spec=self.parse_spec(fields),
            skill_tier=skill_tier,
            budget_tier=budget_tier,
        )

    def parse_sides(self, fields: dict) -> list:
        """
        Sides come either as a list of {length_mm, enabled} records or as
        flat side1..side4 / side1_enabled..side4_enabled form fields.
        """
        sides = []
        raw_sides = fields.get("sides")
        if isinstance(raw_sides, (list, tuple)):
            for raw in raw_sides[:MAX_SIDES]:
                if not isinstance(raw, dict):
                    continue
                sides.append(Side(
                    length_mm=max(0.0, self.parse_mm(raw.get("length_mm", raw.get("length")))),
                    enabled=self.parse_bool(raw.get("enabled"), default=True),
                ))
            return sides

        for n in range(1, MAX_SIDES + 1):
            sides.append(Side(
                length_mm=max(0.0, self.parse_mm(fields.get("side%d" % n))),
                # Side 1 is on unless switched off; the others are opt-in
                enabled=self.parse_bool(fields.get("side%d_enabled" % n), default=(n == 1)),
            ))
        return sides

    def parse_spec(self, fields: dict) -> FenceSpecification:
        fence_type = self.parse_choice(fields.get("fence_type"), FenceType, FenceType.PANEL)

        panel_size_id = fields.get("panel_size") or None
        panel_size = get_panel_size(panel_size_id)
        post_type_id = fields.get("post_type") or None

        # Explicit dimensions win over catalogue lookups
        panel_width = self.parse_mm(fields.get("panel_width_mm")) or panel_size["width"]
        panel_height = self.parse_mm(fields.get("panel_height_mm")) or panel_size["height"]
        post_width = self.parse_mm(fields.get("post_width_mm")) or get_post_type(post_type_id)["width"]

        return FenceSpecification(
            fence_type=fence_type,
            fence_height_mm=self.parse_mm(fields.get("fence_height_mm")),
            post_spacing_target_mm=self.parse_mm(fields.get("post_spacing_target_mm",
                                                            fields.get("post_spacing_mm"))),
            panel_size=panel_size_id,
            panel_width_mm=panel_width,
            panel_height_mm=panel_height,
            post_type=post_type_id,
            post_width_mm=post_width,
            rails_per_bay=self.parse_int(fields.get("rails_per_bay")) or DEFAULT_RAILS_PER_BAY,
            rail_depth_mm=self.parse_mm(fields.get("rail_depth_mm")),
            rail_thickness_mm=self.parse_mm(fields.get("rail_thickness_mm")),
            board_width_mm=self.parse_mm(fields.get("board_width_mm")),
            board_thickness_mm=self.parse_mm(fields.get("board_thickness_mm")),
            board_overlap_mm=self.parse_mm(fields.get("board_overlap_mm")),
            post_depth_mm=self.parse_mm(fields.get("post_depth_mm")),
            concrete_bags_per_post=(self.parse_number(fields.get("concrete_bags_per_post"))
                                    or DEFAULT_CONCRETE_BAGS_PER_POST),
            waste_percent=self.parse_number(fields.get("waste_percent")),
            add_trellis=self.parse_bool(fields.get("add_trellis", fields.get("addTrellis"))),
            trellis_height_mm=(max(0.0, self.parse_mm(fields.get("trellis_height_mm")))
                               or DEFAULT_TRELLIS_HEIGHT_MM),
        )
