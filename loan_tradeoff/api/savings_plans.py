"""
Savings plan endpoints
"""

from fastapi import APIRouter, HTTPException

from .schemas import SavingsPlanRequest, SavingsPlanResponse
from ..exceptions import TradeoffError
from ..savings_plan import calculate_loan_with_savings


router = APIRouter()


@router.post("", response_model=SavingsPlanResponse)
async def calculate_savings_plan(request: SavingsPlanRequest):
    """Cost of a simple-interest loan paid from a savings account"""
    try:
        result = calculate_loan_with_savings(
            principal=request.principal,
            term_count=request.term_count,
            period=request.period,
            apr_percent=request.apr_percent,
            apy_percent=request.apy_percent
        )

        return SavingsPlanResponse.from_result(result)

    except TradeoffError as e:
        raise HTTPException(status_code=400, detail=str(e))
