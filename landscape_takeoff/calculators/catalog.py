"""
Product catalogue for the fence calculator.

Standard UK stock: 6ft-wide pre-made panels, concrete or timber posts,
arris rails, and the fixings sold alongside them. All dimensions in mm.
"""

import logging

logger = logging.getLogger(__name__)

FENCE_TYPES = {
    "panel": {"label": "Panel Fence", "desc": "Pre-made panels between posts"},
    "featheredge": {"label": "Featheredge", "desc": "Overlapping vertical boards"},
    "hit-miss": {"label": "Hit & Miss", "desc": "Alternating boards both sides"},
}

PANEL_SIZES = {
    "1830x1800": {"label": "6ft × 6ft", "width": 1830, "height": 1800},
    "1830x1500": {"label": "6ft × 5ft", "width": 1830, "height": 1500},
    "1830x1200": {"label": "6ft × 4ft", "width": 1830, "height": 1200},
    "1830x900": {"label": "6ft × 3ft", "width": 1830, "height": 900},
}
DEFAULT_PANEL_SIZE = "1830x1800"

POST_TYPES = {
    "concrete": {"label": "Concrete", "size": "100×100mm", "width": 100},
    "timber-75": {"label": "Timber 75mm", "size": "75×75mm", "width": 75},
    "timber-100": {"label": "Timber 100mm", "size": "100×100mm", "width": 100},
}
DEFAULT_POST_TYPE = "timber-100"

# Locked DIY specifications, keyed by budget tier
TIER_SPECS = {
    "full": {
        "post_type": "timber-100",
        "rail_depth_mm": 100,
        "rail_thickness_mm": 47,
        "board_thickness_mm": {"featheredge": 22, "default": 22},
        "board_overlap_mm": 30,
    },
    "budget": {
        "post_type": "timber-75",
        "rail_depth_mm": 75,
        "rail_thickness_mm": 38,
        "board_thickness_mm": {"featheredge": 22, "default": 19},
        "board_overlap_mm": 25,
    },
}
DIY_RAILS_PER_BAY = 3  # fixed for featheredge/hit-miss in DIY
DIY_FALLBACK_HEIGHT_MM = 1800

# Fixings and consumables
NAILS_PER_BOARD = 6
SCREWS_PER_RAIL = 4
NAILS_PER_BOX = 500
SCREWS_PER_BOX = 200
CLIPS_PER_PANEL = 4
GRAVEL_KG_PER_POST = 10
GRAVEL_BAG_KG = 25
CONCRETE_BAG_KG = 20


def get_panel_size(size_id):
    """Look up a panel size, falling back to the standard 6ft × 6ft panel."""
    if size_id in PANEL_SIZES:
        return PANEL_SIZES[size_id]
    if size_id:
        logger.warning("Unknown panel size %r, using %s", size_id, DEFAULT_PANEL_SIZE)
    return PANEL_SIZES[DEFAULT_PANEL_SIZE]


def get_post_type(post_type_id):
    """Look up a post type, falling back to 75mm timber like the calculator form does."""
    if post_type_id in POST_TYPES:
        return POST_TYPES[post_type_id]
    if post_type_id:
        logger.warning("Unknown post type %r, using timber-75", post_type_id)
    return POST_TYPES["timber-75"]


def catalog_summary() -> dict:
    """Everything a front end needs to build its pickers."""
    return {
        "fence_types": FENCE_TYPES,
        "panel_sizes": PANEL_SIZES,
        "post_types": POST_TYPES,
        "tier_specs": TIER_SPECS,
    }
