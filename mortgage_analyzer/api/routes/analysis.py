"""Analysis routes — the primary API entry point."""

from fastapi import APIRouter, HTTPException

from mortgage_analyzer.api.schemas import (
    AnalysisResponse,
    LoanRequest,
    PeriodResponse,
    ScheduleResponse,
    SummaryResponse,
)
from mortgage_analyzer.engine.analysis import run_analysis
from mortgage_analyzer.engine.debt import build_schedule

router = APIRouter(prefix="/api/v1", tags=["analysis"])


@router.post("/schedule", response_model=ScheduleResponse)
async def schedule(req: LoanRequest, baseline: bool = False):
    """Period-by-period schedule for the selected frequency and extra payment.

    With ?baseline=true, the standard monthly schedule without extra payment.
    """
    try:
        result = build_schedule(req.to_inputs(), baseline=baseline)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ScheduleResponse(
        summary=SummaryResponse.from_summary(result.summary, result.paid_off),
        records=[PeriodResponse.from_record(r) for r in result.records],
    )


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze(req: LoanRequest):
    """Full analysis: baseline vs actual schedules, savings, payoff time and projection."""
    try:
        result = run_analysis(req.to_inputs())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return AnalysisResponse.from_result(result)
