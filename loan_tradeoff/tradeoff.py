"""
Tradeoff Simulator Module

Compares financing a purchase with keeping the purchase amount invested. The
buyer borrows the purchase price, deposits the same amount, and pays each loan
installment out of the deposit account. Whatever is left in the deposit
account at the end is the net benefit (positive) or cost (negative) of
financing.

Two timing models are available per call:

- idealized: every period is a fixed number of days and interest is
  credited at the end of each period
- real-world: payments fall on true monthly due dates and interest is posted
  on the last day of each calendar month
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Tuple

from .amount import Amount
from .config import get_config
from .credit_cards import CreditCardAccount
from .dates import DateLike, add_months_preserve_day, days_between, normalize_date
from .deposits import DepositAccount
from .exceptions import InvalidDayCountError, InvalidSimulationModeError, MissingStartDateError
from .loans import LoanAccount, PERIOD_MONTH
from .logging_config import get_logger, log_action


class SimulationMode(Enum):
    """Timing model used by a simulation"""
    IDEALIZED = "idealized"      # Fixed day count per period
    REAL_WORLD = "real-world"    # Calendar due dates, month-end posting

    @classmethod
    def parse(cls, value) -> "SimulationMode":
        """Accept a SimulationMode or one of its names ("real" and "real_world" included)"""
        if isinstance(value, SimulationMode):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower().replace("_", "-")
            if normalized == "idealized":
                return cls.IDEALIZED
            if normalized in ("real", "real-world"):
                return cls.REAL_WORLD
        raise InvalidSimulationModeError(f"Unsupported simulation mode: {value!r}")


@dataclass(frozen=True)
class ScenarioResult:
    """Outcome of one simulated scenario"""
    loan_account: LoanAccount
    deposit_account: DepositAccount
    credit_card_account: CreditCardAccount
    credit_card_rewards: Amount     # Rewards if the purchase went on the card instead
    credit_card_interest: Amount    # Card interest on the purchase over one period
    net: Amount                     # Terminal deposit balance after all loan payments
    mode: SimulationMode
    payment_dates: Tuple[date, ...] = ()

    @property
    def deposit_interest(self) -> Amount:
        return self.deposit_account.interest_accrued

    @property
    def net_cost(self) -> Amount:
        """Net cost of financing (positive when the loan costs more than the deposit earns)"""
        return -self.net


class TradeoffComparison:
    """
    Coordinates scenarios where a borrower keeps cash invested while paying a loan
    """

    def __init__(self, period_days: Optional[int] = None):
        """
        Args:
            period_days: Days between loan payments in idealized mode. Defaults
                to the configured default_period_days (31).
        """
        if period_days is None:
            period_days = get_config().default_period_days
        if isinstance(period_days, bool) or not isinstance(period_days, int) or period_days <= 0:
            raise InvalidDayCountError("Period days must be a positive integer")

        self.period_days = period_days
        self.logger = get_logger("loan_tradeoff.tradeoff")

    def simulate_scenario(
        self,
        principal,
        period_count: int,
        loan_rate=0,
        deposit_apy=0,
        cc_rewards_rate=0,
        cc_rate=0,
        mode=None,
        start_date: Optional[DateLike] = None
    ) -> ScenarioResult:
        """
        Simulate borrowing and investing the same purchase amount.

        Args:
            principal: Purchase amount, used as both loan principal and opening deposit
            period_count: Number of monthly loan periods
            loan_rate: Nominal annual loan rate as a decimal
            deposit_apy: Deposit APY as a decimal
            cc_rewards_rate: Credit card rewards rate as a decimal
            cc_rate: Credit card APR as a decimal
            mode: SimulationMode or its name; defaults to the configured default_mode
            start_date: First accrual day, required in real-world mode

        Returns:
            ScenarioResult with the account objects and the net comparison value

        Raises:
            MissingStartDateError: If real-world mode is used without start_date
            TradeoffError: Any validation failure of the constituent accounts
        """
        simulation_mode = SimulationMode.parse(mode if mode is not None else get_config().default_mode)

        loan_account = LoanAccount(period_count, PERIOD_MONTH, loan_rate, principal)
        deposit_account = DepositAccount(principal, deposit_apy)
        credit_card_account = CreditCardAccount(apr=cc_rate, rewards_rate=cc_rewards_rate)
        credit_card_rewards = credit_card_account.calculate_rewards(principal)
        credit_card_interest = credit_card_account.interest_for_days(principal, self.period_days)

        if simulation_mode is SimulationMode.REAL_WORLD:
            payment_dates = self._simulate_real_world(deposit_account, loan_account, start_date)
        else:
            self._simulate_idealized(deposit_account, loan_account)
            payment_dates = ()

        result = ScenarioResult(
            loan_account=loan_account,
            deposit_account=deposit_account,
            credit_card_account=credit_card_account,
            credit_card_rewards=credit_card_rewards,
            credit_card_interest=credit_card_interest,
            net=deposit_account.balance,
            mode=simulation_mode,
            payment_dates=payment_dates
        )

        log_action(
            self.logger, "info", f"Scenario simulated: {simulation_mode.value}",
            action="simulate_scenario",
            extra={
                "principal": loan_account.principal,
                "period_count": period_count,
                "loan_rate": loan_account.nominal_annual_rate,
                "deposit_apy": deposit_account.apy,
                "net": result.net,
                "deposit_interest": result.deposit_interest
            }
        )

        return result

    def estimate_savings_with_deposits(self, **scenario) -> Amount:
        """Net value left in the deposit account after paying off the loan"""
        return self.simulate_scenario(**scenario).net

    def estimate_net_loan_cost(self, **scenario) -> Amount:
        """Loan finance charge reduced by the deposit yield earned during repayment"""
        return self.simulate_scenario(**scenario).net_cost

    def _simulate_idealized(self, deposit_account: DepositAccount, loan_account: LoanAccount) -> None:
        for period_number in range(1, loan_account.period_count + 1):
            deposit_account.accrue_for_days(self.period_days)
            payment = self._payment_for_period(loan_account, period_number)
            deposit_account.withdraw(payment)
            self._log_period(period_number, self.period_days, payment, deposit_account)

    def _simulate_real_world(
        self,
        deposit_account: DepositAccount,
        loan_account: LoanAccount,
        start_date: Optional[DateLike]
    ) -> Tuple[date, ...]:
        if start_date is None or start_date == "":
            raise MissingStartDateError("start_date is required for real-world mode")

        anchor_date = normalize_date(start_date)
        schedule = self._build_payment_schedule(anchor_date, loan_account.period_count)

        accrual_start = anchor_date
        for period_number, due_date in enumerate(schedule, start=1):
            days_until_due = days_between(accrual_start, due_date)
            deposit_account.accrue_for_days_with_monthly_posting(days_until_due, accrual_start)
            payment = self._payment_for_period(loan_account, period_number)
            deposit_account.withdraw(payment)
            self._log_period(period_number, days_until_due, payment, deposit_account, due_date)
            accrual_start = due_date

        return tuple(schedule)

    @staticmethod
    def _build_payment_schedule(start_date: date, period_count: int) -> Tuple[date, ...]:
        # Every due date is measured from the start date so a clamped month
        # (Jan 31 -> Feb 29) does not pull later due dates earlier
        return tuple(add_months_preserve_day(start_date, i) for i in range(1, period_count + 1))

    @staticmethod
    def _payment_for_period(loan_account: LoanAccount, period_number: int) -> Amount:
        if period_number == loan_account.period_count:
            return loan_account.final_payment()
        return loan_account.payment()

    def _log_period(self, period_number: int, days: int, payment: Amount,
                    deposit_account: DepositAccount, due_date: Optional[date] = None) -> None:
        log_action(
            self.logger, "debug", f"Period {period_number} settled",
            action="settle_period",
            extra={
                "period": period_number,
                "days": days,
                "due_date": due_date.isoformat() if due_date else None,
                "payment": payment,
                "balance": deposit_account.balance
            }
        )
