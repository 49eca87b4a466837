"""
Tier resolution tests — DIY/PRO skill tier, FULL/BUDGET spec tier.

Tests:
1-2.  PRO passes everything through
3-6.  DIY post depth + concrete derivation
7-9.  DIY constant sets per budget tier
10-12. merge_spec / effective_spec
13-15. Unknown tier names fall back to PRO / FULL; DIY switches the trellis off
"""

import pytest

from landscape_takeoff.calculators.tier_spec import (
    concrete_per_post,
    diy_post_depth,
    effective_spec,
    merge_spec,
    resolve_tier_override,
)
from landscape_takeoff.schemas import FenceSpecification, FenceType, TierOverride


def _user_spec(**overrides):
    values = dict(
        fence_type=FenceType.FEATHEREDGE,
        fence_height_mm=1800,
        post_spacing_target_mm=2400,
        post_type="concrete",
        post_width_mm=100,
        rails_per_bay=4,
        rail_depth_mm=90,
        rail_thickness_mm=40,
        board_width_mm=150,
        board_thickness_mm=18,
        board_overlap_mm=40,
        post_depth_mm=900,
        concrete_bags_per_post=3,
        waste_percent=10,
    )
    values.update(overrides)
    return FenceSpecification(**values)


# ============================================================
# PRO
# ============================================================

def test_pro_override_is_empty():
    override = resolve_tier_override("pro", "budget", 1800, FenceType.FEATHEREDGE)
    assert override.is_empty
    assert override.locked_fields() == {}


def test_pro_merge_leaves_user_spec_unchanged():
    spec = _user_spec()
    merged = merge_spec(spec, resolve_tier_override("pro", "full", 1800, FenceType.FEATHEREDGE))
    assert merged == spec


# ============================================================
# DIY derivation
# ============================================================

def test_diy_budget_1800_scenario():
    """1800mm fence → 600mm in the ground, 2 bags per post."""
    override = resolve_tier_override("diy", "budget", 1800, FenceType.FEATHEREDGE)
    assert override.post_depth_mm == 600
    assert override.concrete_bags_per_post == pytest.approx(2.0)


def test_diy_post_depth_rounds_to_nearest_50():
    assert diy_post_depth(1500) == 500   # 495 → 500
    assert diy_post_depth(900) == 300    # 297 → 300
    assert diy_post_depth(1200) == 400   # 396 → 400
    assert diy_post_depth(2000) == 650   # 660 → 650


def test_diy_post_depth_falls_back_to_standard_height():
    """A zero height is treated as a standard 1800mm fence."""
    assert diy_post_depth(0) == 600


def test_concrete_rounds_up_to_a_third_of_a_bag():
    assert concrete_per_post(300) == pytest.approx(1.0)
    assert concrete_per_post(500) == pytest.approx(5 / 3)
    assert concrete_per_post(650) == pytest.approx(7 / 3)   # 6.5 thirds → 7
    assert concrete_per_post(0) == 0


def test_diy_budget_constants():
    override = resolve_tier_override("diy", "budget", 1800, FenceType.HIT_MISS)
    assert override.post_type == "timber-75"
    assert override.post_width_mm == 75
    assert override.rail_depth_mm == 75
    assert override.rail_thickness_mm == 38
    assert override.board_overlap_mm == 25
    assert override.board_thickness_mm == 19
    assert override.rails_per_bay == 3


def test_diy_budget_featheredge_boards_are_thicker():
    override = resolve_tier_override("diy", "budget", 1800, FenceType.FEATHEREDGE)
    assert override.board_thickness_mm == 22


def test_diy_full_constants():
    override = resolve_tier_override("diy", "full", 1800, FenceType.FEATHEREDGE)
    assert override.post_type == "timber-100"
    assert override.post_width_mm == 100
    assert override.rail_depth_mm == 100
    assert override.rail_thickness_mm == 47
    assert override.board_overlap_mm == 30
    assert override.board_thickness_mm == 22
    assert override.rails_per_bay == 3


# ============================================================
# Merge
# ============================================================

def test_diy_override_wins_over_user_input():
    spec = _user_spec()
    merged = merge_spec(spec, resolve_tier_override("diy", "budget", 1800, FenceType.FEATHEREDGE))

    assert merged.post_depth_mm == 600          # user said 900
    assert merged.concrete_bags_per_post == pytest.approx(2.0)
    assert merged.post_width_mm == 75
    assert merged.rails_per_bay == 3
    # Not locked, passes through
    assert merged.board_width_mm == 150
    assert merged.waste_percent == 10
    assert merged.post_spacing_target_mm == 2400
    # Input snapshot untouched
    assert spec.post_depth_mm == 900


def test_effective_spec_diy_panel_uses_panel_height():
    spec = _user_spec(fence_type=FenceType.PANEL, panel_width_mm=1830, panel_height_mm=1200)
    merged, override = effective_spec(spec, "diy", "full")

    assert merged.fence_height_mm == 1200
    assert merged.post_depth_mm == 400
    assert "fence_height_mm" in override.locked_fields()


def test_effective_spec_pro_is_identity():
    spec = _user_spec()
    merged, override = effective_spec(spec, "pro", "full")
    assert merged == spec
    assert override == TierOverride()


# ============================================================
# Unknown tiers, extras
# ============================================================

def test_unknown_skill_tier_is_treated_as_pro():
    override = resolve_tier_override("expert", "full", 1800, FenceType.FEATHEREDGE)
    assert override.is_empty

    spec = _user_spec()
    merged, _ = effective_spec(spec, "expert", "full")
    assert merged == spec


def test_unknown_budget_tier_uses_full_constants():
    override = resolve_tier_override("diy", "luxury", 1800, FenceType.FEATHEREDGE)
    assert override.post_type == "timber-100"
    assert override.rail_depth_mm == 100
    assert override.board_overlap_mm == 30


def test_diy_switches_trellis_off():
    spec = _user_spec(add_trellis=True)
    merged, override = effective_spec(spec, "diy", "budget")
    assert merged.add_trellis is False
    assert override.locked_fields()["add_trellis"] is False
