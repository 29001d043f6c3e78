"""
Loan With Savings Calculator

Estimates the effective cost of buying with a simple-interest loan while the
purchase price stays in a daily compounding savings account that funds each
installment. When the savings run dry the shortfall is paid out of pocket.
"""

from dataclasses import dataclass
from typing import List

from .amount import Amount, ZERO, ONE, CONVENTIONAL_CENTS, coerce_amount
from .constants import DAYS_IN_YEAR, DAYS_IN_WEEK, MONTHS_IN_YEAR, WEEKS_IN_YEAR
from .exceptions import (
    InvalidPeriodCountError, InvalidPrincipalError, InvalidRateError, UnsupportedPeriodTypeError
)
from .logging_config import get_logger, log_action

PERIOD_MONTHLY = "monthly"
PERIOD_WEEKLY = "weekly"

PERIODS_PER_YEAR = {
    PERIOD_MONTHLY: MONTHS_IN_YEAR,
    PERIOD_WEEKLY: WEEKS_IN_YEAR,
}

# Balances this close to zero after a payment are treated as settled
SETTLED_EPSILON = Amount("0.000001")
HUNDRED = Amount(100)

logger = get_logger("loan_tradeoff.savings_plan")


@dataclass(frozen=True)
class SavingsScheduleEntry:
    """One repayment period"""
    period_number: int
    payment: Amount
    interest_accrued: Amount
    savings_balance: Amount
    external_contribution: Amount


@dataclass(frozen=True)
class LoanWithSavingsResult:
    """Loan totals, savings totals and comparison metrics, rounded to cents"""
    principal: Amount
    term_count: int
    period: str
    apr_percent: Amount
    apy_percent: Amount

    total_loan_interest: Amount
    total_loan_paid: Amount
    payment_per_period: Amount
    schedule: List[SavingsScheduleEntry]

    total_savings_interest: Amount
    ending_savings_balance: Amount
    savings_daily_rate: Amount

    effective_cost_with_loan: Amount
    net_benefit_vs_cash: Amount
    additional_out_of_pocket: Amount

    periods_per_year: int


def _to_cents(value: Amount) -> Amount:
    return value.round(CONVENTIONAL_CENTS)


def _coerce_percent(value, name: str) -> Amount:
    message = f"{name} must be a non-negative finite number"
    percent = coerce_amount(value, InvalidRateError, message)
    if percent.is_negative():
        raise InvalidRateError(message)
    return percent


def _validate_term_count(term_count) -> None:
    if isinstance(term_count, bool) or not isinstance(term_count, int) or term_count <= 0:
        raise InvalidPeriodCountError("term_count must be a positive integer")


def calculate_loan_with_savings(principal, term_count: int, period: str,
                                apr_percent, apy_percent) -> LoanWithSavingsResult:
    """
    Compare a simple-interest loan paid from savings against paying cash.

    Args:
        principal: Purchase price and loan principal (must be positive)
        term_count: Number of repayment periods
        period: "monthly" or "weekly"
        apr_percent: Simple-interest loan APR in percent (5 for 5%)
        apy_percent: Savings APY in percent, compounded daily

    Returns:
        LoanWithSavingsResult

    Raises:
        InvalidPrincipalError: Principal is not a positive finite number
        InvalidPeriodCountError: term_count is not a positive integer
        UnsupportedPeriodTypeError: period is not monthly or weekly
        InvalidRateError: A rate is negative or not finite
    """
    principal_amount = coerce_amount(principal, InvalidPrincipalError,
                                     "principal must be a positive finite number")
    if not principal_amount.is_positive():
        raise InvalidPrincipalError("principal must be a positive finite number")

    _validate_term_count(term_count)

    normalized_period = period.strip().lower() if isinstance(period, str) else ""
    if normalized_period not in PERIODS_PER_YEAR:
        raise UnsupportedPeriodTypeError(
            f"period must be one of: {', '.join(PERIODS_PER_YEAR)}"
        )

    apr = _coerce_percent(apr_percent, "apr_percent")
    apy = _coerce_percent(apy_percent, "apy_percent")

    periods_per_year = PERIODS_PER_YEAR[normalized_period]
    annual_rate = apr.divide(HUNDRED)
    annual_yield = apy.divide(HUNDRED)

    # Simple interest over the whole term
    total_loan_interest = (principal_amount
                           .multiply(annual_rate)
                           .multiply(Amount(term_count))
                           .divide(Amount(periods_per_year)))
    total_loan_paid = principal_amount.add(total_loan_interest)
    payment_per_period = total_loan_paid.divide(Amount(term_count))

    daily_rate = ONE.add(annual_yield).nth_root(DAYS_IN_YEAR).subtract(ONE)
    if normalized_period == PERIOD_MONTHLY:
        # (1 + daily)^(365/12) is the twelfth root of (1 + APY)
        growth_factor = ONE.add(annual_yield).nth_root(MONTHS_IN_YEAR)
    else:
        growth_factor = ONE.add(daily_rate).power(DAYS_IN_WEEK)

    savings_balance = principal_amount
    total_savings_interest = ZERO
    additional_out_of_pocket = ZERO
    schedule = []

    for period_number in range(1, term_count + 1):
        balance_after_interest = savings_balance.multiply(growth_factor)
        period_interest = balance_after_interest.subtract(savings_balance)
        total_savings_interest = total_savings_interest.add(period_interest)

        balance_after_payment = balance_after_interest.subtract(payment_per_period)
        if balance_after_payment < -SETTLED_EPSILON:
            contribution = abs(balance_after_payment)
            additional_out_of_pocket = additional_out_of_pocket.add(contribution)
            savings_balance = ZERO
        else:
            contribution = ZERO
            savings_balance = ZERO if abs(balance_after_payment) <= SETTLED_EPSILON else balance_after_payment

        schedule.append(SavingsScheduleEntry(
            period_number=period_number,
            payment=_to_cents(payment_per_period),
            interest_accrued=_to_cents(period_interest),
            savings_balance=_to_cents(savings_balance),
            external_contribution=_to_cents(contribution)
        ))

    net_benefit_vs_cash = total_savings_interest.subtract(total_loan_interest)
    effective_cost_with_loan = total_loan_paid.subtract(total_savings_interest)

    log_action(
        logger, "info", "Loan with savings calculated",
        action="calculate_loan_with_savings",
        extra={
            "principal": principal_amount,
            "term_count": term_count,
            "period": normalized_period,
            "net_benefit_vs_cash": net_benefit_vs_cash,
            "additional_out_of_pocket": additional_out_of_pocket
        }
    )

    return LoanWithSavingsResult(
        principal=principal_amount,
        term_count=term_count,
        period=normalized_period,
        apr_percent=apr,
        apy_percent=apy,
        total_loan_interest=_to_cents(total_loan_interest),
        total_loan_paid=_to_cents(total_loan_paid),
        payment_per_period=_to_cents(payment_per_period),
        schedule=schedule,
        total_savings_interest=_to_cents(total_savings_interest),
        ending_savings_balance=_to_cents(savings_balance),
        savings_daily_rate=daily_rate,
        effective_cost_with_loan=_to_cents(effective_cost_with_loan),
        net_benefit_vs_cash=_to_cents(net_benefit_vs_cash),
        additional_out_of_pocket=_to_cents(additional_out_of_pocket),
        periods_per_year=periods_per_year
    )
