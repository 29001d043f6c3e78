"""
Loan endpoints
"""

from fastapi import APIRouter, HTTPException

from .schemas import LoanQuoteRequest, LoanQuoteResponse
from ..exceptions import TradeoffError
from ..loans import LoanAccount


router = APIRouter()


@router.post("/quote", response_model=LoanQuoteResponse)
async def quote_loan(request: LoanQuoteRequest):
    """Quote payment, interest and amortization schedule for a loan"""
    try:
        loan = LoanAccount(
            period_count=request.period_count,
            period_type=request.period_type,
            rate=request.rate,
            principal=request.principal
        )
        schedule = loan.amortization_schedule(request.first_due_date) if request.include_schedule else []

        return LoanQuoteResponse.from_loan(loan, schedule)

    except TradeoffError as e:
        raise HTTPException(status_code=400, detail=str(e))
