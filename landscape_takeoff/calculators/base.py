"""
Abstract base class for all takeoff calculators.

Input: raw form fields dict (strings, numbers, or missing)
Output: bill of quantities dict, or None when the input describes nothing to build
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)


# --- Rounding policy ---
# Things you buy in whole units round UP. Continuous measures round to 2dp.

def ceil_units(quantity: float) -> int:
    """Whole purchasable units (boards, bags, boxes, clips). Always rounds up."""
    return math.ceil(quantity)


def round_half_up(value: float, step: float = 1.0) -> float:
    """Round to the nearest multiple of step, halves going up (not banker's rounding)."""
    return math.floor(value / step + 0.5) * step


def round_measure(value: float) -> float:
    """Continuous physical measure (lengths, areas, weights) to 2 decimals."""
    return math.floor(value * 100 + 0.5) / 100


def apply_waste(quantity: float, waste_percent: float) -> int:
    """Apply a waste percentage to a quantity. Always round UP to next whole unit."""
    return ceil_units(quantity * (1 + waste_percent / 100))


def coerce_choice(value, enum_cls, default):
    """Coerce a string to an enum member, falling back to default for unknown values."""
    if isinstance(value, enum_cls):
        return value
    if value is None or str(value).strip() == "":
        return default
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        logger.warning("Unknown %s %r, using %s", enum_cls.__name__, value, default.value)
        return default


class BaseCalculator(ABC):
    """All takeoff calculators inherit from this."""

    job_type = ""

    @abstractmethod
    def calculate(self, fields: dict) -> Optional[dict]:
        """
        Takes the raw form fields.
        Returns the bill of quantities as a dict, or None if there is nothing to build.
        """
        pass

    # --- Helper methods for all calculators ---

    def apply_waste(self, quantity: float, waste_percent: float) -> int:
        """Apply a waste percentage to a quantity. Always round UP to next whole unit."""
        return apply_waste(quantity, waste_percent)

    def parse_number(self, value, default: float = 0.0) -> float:
        """Parse a numeric value from user input. Never raises."""
        if value is None or isinstance(value, bool):
            return default
        try:
            number = float(str(value).strip())
        except (ValueError, TypeError):
            return default
        if math.isnan(number) or math.isinf(number):
            return default
        return number

    def parse_mm(self, value, default: float = 0.0) -> float:
        """Parse a millimetre value. Handles strings like '1800', '1800mm'."""
        if isinstance(value, str):
            value = value.strip().lower().removesuffix("mm").strip()
        return self.parse_number(value, default)

    def parse_int(self, value, default: int = 0) -> int:
        """Parse an integer from user input."""
        number = self.parse_number(value, None)
        if number is None:
            return default
        return int(number)

    def parse_bool(self, value, default: bool = False) -> bool:
        """Parse a checkbox-style value: True, 'true', 'yes', 'on', '1'."""
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return value != 0
        return str(value).strip().lower() in ("true", "yes", "on", "1", "y")

    def parse_choice(self, value, enum_cls, default):
        """Coerce a string to an enum member, falling back to default for unknown values."""
        return coerce_choice(value, enum_cls, default)
