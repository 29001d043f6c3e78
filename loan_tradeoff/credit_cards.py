"""
Credit Card Module

Simplified credit card used for comparison: rewards earned on a purchase and
the interest an unpaid balance would accrue. The account keeps no running
balance; every call is independent of earlier calls.
"""

from .amount import Amount, ZERO, BANKERS_CENTS, coerce_amount
from .constants import DAYS_IN_YEAR, DAYS_IN_MONTH
from .exceptions import InvalidAmountError, InvalidRateError, InvalidDayCountError


class CreditCardAccount:
    """Rewards and daily compounded interest for a credit card"""

    def __init__(self, apr=0, rewards_rate=0):
        """
        Args:
            apr: Nominal annual percentage rate as a decimal
            rewards_rate: Rewards rate as a decimal (0.015 for 1.5%)
        """
        self._apr = coerce_amount(apr, InvalidRateError, "APR must be a non-negative finite number")
        if self._apr.is_negative():
            raise InvalidRateError("APR must be zero or greater")

        self._rewards_rate = coerce_amount(rewards_rate, InvalidRateError,
                                           "Rewards rate must be a non-negative finite number")
        if self._rewards_rate.is_negative():
            raise InvalidRateError("Rewards rate must be zero or greater")

        self._daily_rate = self._apr.divide(Amount(DAYS_IN_YEAR))

    @property
    def apr(self) -> Amount:
        return self._apr

    @property
    def rewards_rate(self) -> Amount:
        return self._rewards_rate

    @property
    def daily_rate(self) -> Amount:
        return self._daily_rate

    def calculate_rewards(self, purchase_amount) -> Amount:
        """Rewards earned on a purchase, rounded to cents (bankers rounding)"""
        amount = coerce_amount(purchase_amount, InvalidAmountError,
                               "Purchase amount must be a finite number")
        if amount.is_negative():
            raise InvalidAmountError("Purchase amount must be zero or greater")

        return amount.multiply(self._rewards_rate, rounding=BANKERS_CENTS)

    def interest_for_days(self, balance, days: int = DAYS_IN_MONTH) -> Amount:
        """
        Interest an unpaid balance accrues over a number of days.

        Interest compounds daily at APR / 365. Returns the accrued interest
        (not the new balance), rounded to cents with bankers rounding.
        """
        if isinstance(days, bool) or not isinstance(days, int) or days < 0:
            raise InvalidDayCountError("Days must be a non-negative integer")

        starting_balance = coerce_amount(balance, InvalidAmountError, "Balance must be a finite number")
        if starting_balance.is_negative():
            raise InvalidAmountError("Balance must be zero or greater")

        if starting_balance.is_zero() or days == 0 or self._daily_rate.is_zero():
            return ZERO

        accrued_balance = starting_balance
        for _ in range(days):
            accrued_balance = accrued_balance.add(accrued_balance.multiply(self._daily_rate))

        return accrued_balance.subtract(starting_balance, rounding=BANKERS_CENTS)

    def __repr__(self) -> str:
        return f"CreditCardAccount(apr={self._apr!r}, rewards_rate={self._rewards_rate!r})"
