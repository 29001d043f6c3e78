"""
Scenario endpoints
"""

from fastapi import APIRouter, HTTPException

from .schemas import SimulateScenarioRequest, ScenarioResponse
from ..exceptions import TradeoffError
from ..tradeoff import TradeoffComparison


router = APIRouter()


@router.post("/simulate", response_model=ScenarioResponse)
async def simulate_scenario(request: SimulateScenarioRequest):
    """Simulate financing a purchase while the cash stays invested"""
    try:
        comparison = TradeoffComparison(period_days=request.period_days)
        result = comparison.simulate_scenario(
            principal=request.principal,
            period_count=request.period_count,
            loan_rate=request.loan_rate,
            deposit_apy=request.deposit_apy,
            cc_rewards_rate=request.cc_rewards_rate,
            cc_rate=request.cc_rate,
            mode=request.mode,
            start_date=request.start_date
        )

        return ScenarioResponse.from_result(result)

    except TradeoffError as e:
        raise HTTPException(status_code=400, detail=str(e))
