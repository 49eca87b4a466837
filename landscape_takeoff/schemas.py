"""
Records passed between the takeoff stages, plus the API request body.

Every engine record is frozen: a calculation receives a fresh snapshot
and returns a fresh result, nothing is mutated after construction.
"""

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class FenceType(str, enum.Enum):
    PANEL = "panel"
    FEATHEREDGE = "featheredge"
    HIT_MISS = "hit-miss"


class SkillTier(str, enum.Enum):
    DIY = "diy"
    PRO = "pro"


class BudgetTier(str, enum.Enum):
    FULL = "full"
    BUDGET = "budget"


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- Inputs ---

class Side(FrozenModel):
    length_mm: float = 0.0
    enabled: bool = False


class FenceSpecification(FrozenModel):
    fence_type: FenceType = FenceType.PANEL
    fence_height_mm: float = 0.0
    post_spacing_target_mm: float = 0.0  # board fences only
    panel_size: Optional[str] = None
    panel_width_mm: float = 0.0          # panel fences only
    panel_height_mm: float = 0.0
    post_type: Optional[str] = None
    post_width_mm: float = 0.0
    rails_per_bay: int = 3
    rail_depth_mm: float = 0.0
    rail_thickness_mm: float = 0.0
    board_width_mm: float = 0.0
    board_thickness_mm: float = 0.0
    board_overlap_mm: float = 0.0        # featheredge only
    post_depth_mm: float = 0.0
    concrete_bags_per_post: float = 2.0
    waste_percent: float = 0.0
    add_trellis: bool = False            # trellis topper above the fence line
    trellis_height_mm: float = 300.0

    @property
    def is_panel(self) -> bool:
        return self.fence_type == FenceType.PANEL


class TierOverride(FrozenModel):
    """Fields pinned by the skill tier. None means "use what the user entered"."""
    post_type: Optional[str] = None
    post_width_mm: Optional[float] = None
    rail_depth_mm: Optional[float] = None
    rail_thickness_mm: Optional[float] = None
    rails_per_bay: Optional[int] = None
    board_thickness_mm: Optional[float] = None
    board_overlap_mm: Optional[float] = None
    post_depth_mm: Optional[float] = None
    concrete_bags_per_post: Optional[float] = None
    fence_height_mm: Optional[float] = None
    add_trellis: Optional[bool] = None

    def locked_fields(self) -> dict:
        return self.model_dump(exclude_none=True)

    @property
    def is_empty(self) -> bool:
        return not self.locked_fields()


class FenceInput(FrozenModel):
    sides: tuple[Side, ...] = ()
    spec: FenceSpecification = FenceSpecification()
    skill_tier: SkillTier = SkillTier.PRO
    budget_tier: BudgetTier = BudgetTier.FULL


# --- Computed ---

class SideLayout(FrozenModel):
    side_number: int
    length_mm: float
    posts: int
    actual_spacing_mm: float
    panels: int = 0
    full_panel_count: int = 0
    cut_panel_width_mm: int = 0
    panel_widths: tuple[int, ...] = ()
    board_count: int = 0
    rail_count: int = 0


class PerimeterTotals(FrozenModel):
    """Structural counts for the whole perimeter, before hardware."""
    fence_type: FenceType
    sides: tuple[SideLayout, ...]
    enabled_side_count: int
    total_length_mm: float
    total_posts_raw: int
    shared_corners: int
    net_posts: int
    full_panels: int = 0
    cut_panels: int = 0
    total_panels: int = 0
    raw_board_count: int = 0
    total_boards: int = 0
    total_rails: int = 0


class PostSummary(FrozenModel):
    count: int
    post_type: Optional[str]
    width_mm: float
    height_mm: float
    depth_in_ground_mm: float
    above_ground_mm: float
    shared_corners: int


class PanelSummary(FrozenModel):
    count: int
    full_panels: int
    cut_panels: int
    panel_size: Optional[str]
    width_mm: float
    height_mm: float


class BoardSummary(FrozenModel):
    count: int
    width_mm: float
    thickness_mm: float
    overlap_mm: float
    height_mm: float


class RailSummary(FrozenModel):
    count: int
    depth_mm: float
    thickness_mm: float
    rails_per_bay: int


class HardwareSummary(FrozenModel):
    post_caps: int
    concrete_bags: float
    gravel_kg: float
    panel_clips: int
    total_nails: int
    nail_boxes: int
    total_screws: int
    screw_boxes: int


class TrellisSummary(FrozenModel):
    panels: int
    height_mm: float
    post_extension_mm: float
    post_length_mm: float   # post length once extended for the trellis


class LineItem(FrozenModel):
    section: str
    description: str
    quantity: float
    unit: str = "no."
    length_mm: Optional[float] = None
    note: str = ""


class BillOfQuantities(FrozenModel):
    job_type: str = "fence"
    fence_type: FenceType
    skill_tier: SkillTier
    budget_tier: BudgetTier
    total_length_m: float
    fence_height_mm: float
    sides: tuple[SideLayout, ...]
    posts: PostSummary
    panels: PanelSummary
    boards: BoardSummary
    rails: RailSummary
    hardware: HardwareSummary
    trellis: Optional[TrellisSummary] = None
    spec: FenceSpecification
    locked_fields: dict = {}
    items: tuple[LineItem, ...] = ()
    assumptions: tuple[str, ...] = ()


# --- API ---

class CalculateRequest(BaseModel):
    fields: dict  # raw form values, coerced by the calculator


class CalculateResponse(BaseModel):
    job_type: str
    result: Optional[dict] = None
