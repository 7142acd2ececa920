"""Pay-debt-vs-invest comparison routes."""

from fastapi import APIRouter, HTTPException

from mortgage_analyzer.api.schemas import LoanRequest, ProjectionResponse
from mortgage_analyzer.engine.debt import build_schedule
from mortgage_analyzer.engine.opportunity_cost import project_opportunity_cost

router = APIRouter(prefix="/api/v1/comparison", tags=["comparison"])


@router.post("/opportunity-cost", response_model=ProjectionResponse)
async def opportunity_cost(req: LoanRequest):
    """Net worth projections: accelerated payoff vs investing the difference."""
    inputs = req.to_inputs()
    if not inputs.has_strategy:
        raise HTTPException(
            status_code=400,
            detail="Nothing to compare: set an extra payment or a non-monthly frequency.",
        )

    try:
        baseline = build_schedule(inputs, baseline=True)
        actual = build_schedule(inputs)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ProjectionResponse.from_projection(
        project_opportunity_cost(baseline, actual, inputs)
    )
