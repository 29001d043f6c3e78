"""
Pydantic schemas for API requests and responses

Monetary values and rates are accepted as JSON numbers or decimal strings and
returned as decimal strings so no precision is lost in transit.
"""

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from ..amount import Amount, CONVENTIONAL_CENTS, FIXED_PRECISION
from ..constants import CENTS_PLACES
from ..loans import AmortizationEntry, LoanAccount
from ..savings_plan import LoanWithSavingsResult, SavingsScheduleEntry
from ..tradeoff import ScenarioResult


def amount_str(value: Amount) -> str:
    return value.to_precise_string()


def cents_str(value: Amount) -> str:
    precise = value.round(CONVENTIONAL_CENTS).to_precise_string()
    return precise[:CENTS_PLACES - FIXED_PRECISION]


# Scenario schemas
class SimulateScenarioRequest(BaseModel):
    principal: Decimal = Field(..., ge=0, allow_inf_nan=False, description="Purchase amount")
    period_count: int = Field(..., gt=0, description="Number of monthly loan periods")
    loan_rate: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False, description="Nominal annual loan rate (0.06 for 6%)")
    deposit_apy: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False, description="Deposit APY (0.042 for 4.2%)")
    cc_rewards_rate: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False)
    cc_rate: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False)
    mode: Optional[str] = Field(None, description="idealized or real-world")
    start_date: Optional[str] = None  # ISO date string, required for real-world mode
    period_days: Optional[int] = Field(None, gt=0, description="Idealized days per period")


class ScenarioResponse(BaseModel):
    mode: str
    net: str
    net_cost: str
    payment: str
    final_payment: str
    total_interest: str
    deposit_balance: str
    deposit_interest: str
    credit_card_rewards: str
    credit_card_interest: str
    payment_dates: List[str] = []

    @classmethod
    def from_result(cls, result: ScenarioResult) -> 'ScenarioResponse':
        loan = result.loan_account
        return cls(
            mode=result.mode.value,
            net=amount_str(result.net),
            net_cost=amount_str(result.net_cost),
            payment=amount_str(loan.payment()),
            final_payment=amount_str(loan.final_payment()),
            total_interest=amount_str(loan.total_interest()),
            deposit_balance=amount_str(result.deposit_account.balance),
            deposit_interest=amount_str(result.deposit_interest),
            credit_card_rewards=amount_str(result.credit_card_rewards),
            credit_card_interest=amount_str(result.credit_card_interest),
            payment_dates=[d.isoformat() for d in result.payment_dates]
        )


# Loan schemas
class LoanQuoteRequest(BaseModel):
    principal: Decimal = Field(..., ge=0, allow_inf_nan=False)
    period_count: int = Field(..., gt=0)
    rate: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False)
    period_type: str = "month"
    first_due_date: Optional[str] = None  # ISO date string
    include_schedule: bool = True


class AmortizationEntryModel(BaseModel):
    payment_number: int
    due_date: Optional[str] = None
    payment_amount: str
    principal_amount: str
    interest_amount: str
    remaining_balance: str

    @classmethod
    def from_entry(cls, entry: AmortizationEntry) -> 'AmortizationEntryModel':
        return cls(
            payment_number=entry.payment_number,
            due_date=entry.due_date.isoformat() if entry.due_date else None,
            payment_amount=amount_str(entry.payment_amount),
            principal_amount=amount_str(entry.principal_amount),
            interest_amount=amount_str(entry.interest_amount),
            remaining_balance=amount_str(entry.remaining_balance)
        )


class LoanQuoteResponse(BaseModel):
    principal: str
    period_count: int
    rate: str
    payment: str
    final_payment: str
    total_interest: str
    total_paid: str
    schedule: List[AmortizationEntryModel] = []

    @classmethod
    def from_loan(cls, loan: LoanAccount,
                  schedule: List[AmortizationEntry]) -> 'LoanQuoteResponse':
        return cls(
            principal=amount_str(loan.principal),
            period_count=loan.period_count,
            rate=amount_str(loan.nominal_annual_rate),
            payment=amount_str(loan.payment()),
            final_payment=amount_str(loan.final_payment()),
            total_interest=amount_str(loan.total_interest()),
            total_paid=amount_str(loan.total_paid()),
            schedule=[AmortizationEntryModel.from_entry(entry) for entry in schedule]
        )


# Savings plan schemas
class SavingsPlanRequest(BaseModel):
    principal: Decimal = Field(..., allow_inf_nan=False)
    term_count: int
    period: str = Field(..., description="monthly or weekly")
    apr_percent: Decimal = Field(Decimal("0"), allow_inf_nan=False, description="Loan APR in percent")
    apy_percent: Decimal = Field(Decimal("0"), allow_inf_nan=False, description="Savings APY in percent")


class SavingsScheduleEntryModel(BaseModel):
    period_number: int
    payment: str
    interest_accrued: str
    savings_balance: str
    external_contribution: str

    @classmethod
    def from_entry(cls, entry: SavingsScheduleEntry) -> 'SavingsScheduleEntryModel':
        return cls(
            period_number=entry.period_number,
            payment=cents_str(entry.payment),
            interest_accrued=cents_str(entry.interest_accrued),
            savings_balance=cents_str(entry.savings_balance),
            external_contribution=cents_str(entry.external_contribution)
        )


class SavingsPlanResponse(BaseModel):
    period: str
    periods_per_year: int
    total_loan_interest: str
    total_loan_paid: str
    payment_per_period: str
    total_savings_interest: str
    ending_savings_balance: str
    effective_cost_with_loan: str
    net_benefit_vs_cash: str
    additional_out_of_pocket: str
    schedule: List[SavingsScheduleEntryModel]

    @classmethod
    def from_result(cls, result: LoanWithSavingsResult) -> 'SavingsPlanResponse':
        return cls(
            period=result.period,
            periods_per_year=result.periods_per_year,
            total_loan_interest=cents_str(result.total_loan_interest),
            total_loan_paid=cents_str(result.total_loan_paid),
            payment_per_period=cents_str(result.payment_per_period),
            total_savings_interest=cents_str(result.total_savings_interest),
            ending_savings_balance=cents_str(result.ending_savings_balance),
            effective_cost_with_loan=cents_str(result.effective_cost_with_loan),
            net_benefit_vs_cash=cents_str(result.net_benefit_vs_cash),
            additional_out_of_pocket=cents_str(result.additional_out_of_pocket),
            schedule=[SavingsScheduleEntryModel.from_entry(entry) for entry in result.schedule]
        )
