"""
Deposit Account Module

Consumer deposit accounts that earn daily compounding interest on the full
daily balance. Rates are constant and there are no maintenance or transfer
fees. Two accrual styles are supported:

- accrue_for_days credits interest immediately (idealized model)
- accrue_for_days_with_monthly_posting holds interest as pending and only
  posts it to the balance on the last day of each calendar month
"""

from .amount import Amount, ZERO, ONE, BANKERS_CENTS, coerce_amount
from .constants import DAYS_IN_YEAR
from .dates import DateLike, add_days, is_last_day_of_month, normalize_date
from .exceptions import (
    InvalidAmountError, InvalidRateError, InvalidWithdrawalError, InvalidDayCountError
)
from .logging_config import get_logger, log_action

logger = get_logger("loan_tradeoff.deposits")


def _validate_day_count(days) -> None:
    if isinstance(days, bool) or not isinstance(days, int):
        raise InvalidDayCountError("Days must be an integer number")
    if days < 0:
        raise InvalidDayCountError("Days must be zero or greater")


class DepositAccount:
    """
    Balance earning daily compounded interest.

    The balance only changes through withdraw() and the accrual methods.
    """

    def __init__(self, opening_balance=0, apy=0):
        """
        "Opens" an account.

        Args:
            opening_balance: Opening balance, defaults to zero
            apy: Annual percentage yield as a decimal (0.042 for 4.2%), defaults to zero
        """
        self._balance = coerce_amount(opening_balance, InvalidAmountError,
                                      "Opening balance must be a finite number")
        self._apy = coerce_amount(apy, InvalidRateError, "APY must be a non-negative finite number")
        if self._apy.is_negative():
            raise InvalidRateError("APY must be a non-negative finite number")

        self._pending_interest = ZERO
        self._interest_accrued = ZERO
        # (1 + APY)^(1/365) - 1 compounds back to exactly the APY over a year
        self._daily_rate = ONE.add(self._apy).nth_root(DAYS_IN_YEAR).subtract(ONE)

    @property
    def apy(self) -> Amount:
        return self._apy

    @property
    def balance(self) -> Amount:
        """Posted balance"""
        return self._balance

    @property
    def daily_rate(self) -> Amount:
        return self._daily_rate

    @property
    def interest_accrued(self) -> Amount:
        """Total interest credited to the balance so far"""
        return self._interest_accrued

    @property
    def pending_interest(self) -> Amount:
        """Interest accrued in monthly posting mode but not yet posted"""
        return self._pending_interest

    def withdraw(self, withdrawal) -> "DepositAccount":
        """
        Withdraw funds. Overdrafts are allowed; the balance may go negative.

        Raises:
            InvalidWithdrawalError: If the amount is negative or not finite
        """
        amount = coerce_amount(withdrawal, InvalidWithdrawalError,
                               "Withdrawal must be a finite number")
        if amount.is_negative():
            raise InvalidWithdrawalError("Withdrawal must be zero or greater")

        self._balance = self._balance.subtract(amount)
        return self

    def accrue_for_days(self, days: int) -> "DepositAccount":
        """
        Compound interest daily for a number of days and credit it at once.

        The accrued interest is rounded to cents (bankers rounding) before it
        is added to the balance.
        """
        _validate_day_count(days)
        if days == 0:
            return self

        accrued = ZERO
        for _ in range(days):
            accrued = accrued.add(self._interest_on(self._balance.add(accrued)))

        posted = accrued.round(BANKERS_CENTS)
        self._balance = self._balance.add(posted)
        self._interest_accrued = self._interest_accrued.add(posted)

        return self

    def accrue_for_days_with_monthly_posting(self, days: int, start_date: DateLike) -> "DepositAccount":
        """
        Accrue interest day by day from start_date, posting at month end.

        Daily interest is earned on the posted balance plus pending interest,
        so pending interest compounds too. On the last day of each calendar
        month the pending interest is rounded to cents (bankers rounding) and
        posted; the unposted fraction of a cent is dropped and the next month
        starts from zero.

        Args:
            days: Number of days to accrue, the first being start_date
            start_date: Calendar date of the first accrual day

        Raises:
            InvalidDayCountError: If days is not a non-negative integer
            InvalidDateError: If start_date cannot be interpreted as a date
        """
        _validate_day_count(days)
        current_date = normalize_date(start_date)

        for _ in range(days):
            effective_balance = self._balance.add(self._pending_interest)
            daily_interest = self._interest_on(effective_balance)
            self._pending_interest = self._pending_interest.add(daily_interest)

            if is_last_day_of_month(current_date):
                self._post_pending_interest(current_date)

            current_date = add_days(current_date, 1)

        return self

    def _interest_on(self, balance: Amount) -> Amount:
        # An overdrawn balance neither earns nor is charged interest
        if not balance.is_positive():
            return ZERO
        return balance.multiply(self._daily_rate)

    def _post_pending_interest(self, posting_date) -> None:
        posted = self._pending_interest.round(BANKERS_CENTS)
        self._balance = self._balance.add(posted)
        self._interest_accrued = self._interest_accrued.add(posted)
        self._pending_interest = ZERO

        log_action(
            logger, "debug", "Monthly interest posted",
            action="post_interest",
            extra={
                "posting_date": posting_date.isoformat(),
                "posted_interest": posted,
                "balance": self._balance
            }
        )

    def __repr__(self) -> str:
        return f"DepositAccount(balance={self._balance!r}, apy={self._apy!r})"
