"""
Takeoff API — runs a calculator over raw form fields.

GET  /api/takeoff/job-types      — registered job types
GET  /api/takeoff/fence/catalog  — panel sizes, post types, tier specs
POST /api/takeoff/{job_type}     — bill of quantities (or null) for the fields
"""

import logging

from fastapi import APIRouter, HTTPException

from ..calculators.catalog import catalog_summary
from ..calculators.registry import get_calculator, list_calculators
from ..schemas import CalculateRequest, CalculateResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/takeoff", tags=["takeoff"])


@router.get("/job-types")
def job_types():
    return {"job_types": list_calculators()}


@router.get("/fence/catalog")
def fence_catalog():
    return catalog_summary()


@router.post("/{job_type}", response_model=CalculateResponse)
def calculate(job_type: str, request: CalculateRequest):
    """
    Run the job type's calculator.

    result is null when the fields describe nothing to build
    (e.g. every side disabled or zero length). That is not an error.
    """
    try:
        calculator = get_calculator(job_type)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    result = calculator.calculate(request.fields)
    return CalculateResponse(job_type=job_type, result=result)
