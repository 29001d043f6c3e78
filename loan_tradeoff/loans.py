"""
Loan Module

Fixed-term, fixed-rate installment loans. A LoanAccount does not emulate a
banking system: it assumes every payment is made on its due date for exactly
the scheduled amount, so the payment and interest figures are pure functions
of the constructor inputs.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from .amount import Amount, ZERO, ONE, coerce_amount
from .constants import MONTHS_IN_YEAR
from .dates import DateLike, add_months_preserve_day, normalize_date
from .exceptions import (
    InvalidAmountError, InvalidPeriodCountError, UnsupportedPeriodTypeError,
    InvalidRateError, InvalidPrincipalError
)
from .logging_config import get_logger, log_action

PERIOD_MONTH = "MONTH"

# Interest floored to cents keeps the discarded fraction unless it is nearly a full cent
NEARLY_A_CENT = Amount("0.0095")

logger = get_logger("loan_tradeoff.loans")


@dataclass(frozen=True)
class AmortizationEntry:
    """Single entry in an amortization schedule"""
    payment_number: int
    due_date: Optional[date]
    payment_amount: Amount
    principal_amount: Amount
    interest_amount: Amount
    remaining_balance: Amount

    def __post_init__(self):
        # Validate that payment equals principal + interest
        calculated_payment = self.principal_amount + self.interest_amount
        if not calculated_payment.equals(self.payment_amount):
            raise InvalidAmountError(
                f"Payment amount {self.payment_amount} does not equal "
                f"principal {self.principal_amount} + interest {self.interest_amount}"
            )


class LoanAccount:
    """
    Immutable fixed-term installment loan.

    Interest is charged on the outstanding principal at the nominal annual rate
    divided by twelve, and the loan is repaid with level payments.
    """

    def __init__(self, period_count: int, period_type: str, rate, principal):
        """
        Args:
            period_count: Number of monthly periods (positive integer)
            period_type: Period unit, only "month" is supported
            rate: Nominal annual rate as a decimal (0.06 for 6%)
            principal: Amount borrowed

        Raises:
            InvalidPeriodCountError: Period count is not a positive integer
            UnsupportedPeriodTypeError: Period type is not "month"
            InvalidRateError: Rate is negative or not finite
            InvalidPrincipalError: Principal is negative or not finite
        """
        if isinstance(period_count, bool) or not isinstance(period_count, int) or period_count <= 0:
            raise InvalidPeriodCountError("Period count must be a positive integer")

        normalized_type = period_type.strip().upper() if isinstance(period_type, str) else ""
        if normalized_type != PERIOD_MONTH:
            raise UnsupportedPeriodTypeError(f"Unsupported period type: {period_type!r}")

        annual_rate = coerce_amount(rate, InvalidRateError, "Rate must be a non-negative finite number")
        if annual_rate.is_negative():
            raise InvalidRateError("Rate must be a non-negative finite number")

        principal_amount = coerce_amount(principal, InvalidPrincipalError, "Principal must be zero or greater")
        if principal_amount.is_negative():
            raise InvalidPrincipalError("Principal must be zero or greater")

        self._period_count = period_count
        self._period_type = normalized_type
        self._nominal_annual_rate = annual_rate
        self._principal = principal_amount
        self._periodic_rate = annual_rate.divide(Amount(MONTHS_IN_YEAR))
        self._payment: Optional[Amount] = None

    @property
    def period_count(self) -> int:
        return self._period_count

    @property
    def period_type(self) -> str:
        return self._period_type

    @property
    def nominal_annual_rate(self) -> Amount:
        return self._nominal_annual_rate

    @property
    def principal(self) -> Amount:
        return self._principal

    @property
    def periodic_rate(self) -> Amount:
        return self._periodic_rate

    def payment(self) -> Amount:
        """Level payment due each period"""
        if self._payment is None:
            self._payment = self._calculate_payment_amount()
            log_action(
                logger, "debug", "Loan payment calculated",
                action="calculate_payment",
                extra={
                    "principal": self._principal,
                    "annual_rate": self._nominal_annual_rate,
                    "period_count": self._period_count,
                    "payment": self._payment
                }
            )
        return self._payment

    def final_payment(self) -> Amount:
        """
        Amount due in the last period.

        Zero-rate payments are floored to the cent, so the last installment
        absorbs the remaining fraction of principal. Interest-bearing loans pay
        the level payment every period.
        """
        if self._periodic_rate.is_zero():
            paid_before_final = self.payment().multiply(Amount(self._period_count - 1))
            return self._principal.subtract(paid_before_final)
        return self.payment()

    def total_interest(self) -> Amount:
        """Total interest charged over the life of the loan"""
        if self._periodic_rate.is_zero():
            return ZERO

        total_paid = self.payment().multiply(Amount(self._period_count))
        raw_interest = total_paid.subtract(self._principal)
        if not raw_interest.is_positive():
            return ZERO

        floored_interest = raw_interest.round_down_to_cents()
        if raw_interest.subtract(floored_interest) >= NEARLY_A_CENT:
            return raw_interest

        return floored_interest

    def total_paid(self) -> Amount:
        return self._principal.add(self.total_interest())

    def amortization_schedule(self, first_due_date: Optional[DateLike] = None) -> List[AmortizationEntry]:
        """
        Generate the payment-by-payment schedule.

        Args:
            first_due_date: Due date of the first payment; later payments fall
                on the same day of following months. Entries carry no date
                when omitted.

        Returns:
            One AmortizationEntry per period. The last entry retires whatever
            principal is still outstanding.
        """
        anchor = normalize_date(first_due_date) if first_due_date is not None else None
        payment = self.payment()
        outstanding = self._principal
        schedule = []

        for payment_number in range(1, self._period_count + 1):
            interest = outstanding.multiply(self._periodic_rate)

            if payment_number == self._period_count:
                principal_portion = outstanding
                payment_amount = interest.add(outstanding)
            else:
                principal_portion = payment.subtract(interest)
                payment_amount = payment

            outstanding = outstanding.subtract(principal_portion)
            due_date = add_months_preserve_day(anchor, payment_number - 1) if anchor is not None else None

            schedule.append(AmortizationEntry(
                payment_number=payment_number,
                due_date=due_date,
                payment_amount=payment_amount,
                principal_amount=principal_portion,
                interest_amount=interest,
                remaining_balance=outstanding
            ))

        return schedule

    def _calculate_payment_amount(self) -> Amount:
        if self._principal.is_zero():
            return ZERO

        if self._periodic_rate.is_zero():
            # Zero interest loans round each payment down to the cent, favoring the borrower
            base_payment = self._principal.divide(Amount(self._period_count))
            return base_payment.round_down_to_cents()

        # Standard loan payment formula: P * [r(1+r)^n] / [(1+r)^n - 1]
        growth_factor = ONE.add(self._periodic_rate).power(self._period_count)
        numerator = self._principal.multiply(self._periodic_rate).multiply(growth_factor)
        denominator = growth_factor.subtract(ONE)

        return numerator.divide(denominator)

    def __repr__(self) -> str:
        return (f"LoanAccount(period_count={self._period_count}, period_type='{self._period_type}', "
                f"rate={self._nominal_annual_rate!r}, principal={self._principal!r})")
