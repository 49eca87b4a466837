"""
Job types the takeoff API can quote, keyed by each calculator's job_type.
"""

from .base import BaseCalculator
from .fence import FenceCalculator

TAKEOFF_CALCULATORS: dict[str, type] = {
    calculator.job_type: calculator for calculator in (FenceCalculator,)
}


def get_calculator(job_type: str) -> BaseCalculator:
    """A fresh calculator for job_type. Unknown job types raise ValueError."""
    calculator_cls = TAKEOFF_CALCULATORS.get(job_type)
    if calculator_cls is None:
        raise ValueError(
            "Unknown takeoff job type %r; known job types: %s"
            % (job_type, ", ".join(sorted(TAKEOFF_CALCULATORS)))
        )
    return calculator_cls()


def has_calculator(job_type: str) -> bool:
    return job_type in TAKEOFF_CALCULATORS


def list_calculators() -> list[str]:
    """Job types in the order they were registered."""
    return list(TAKEOFF_CALCULATORS)
