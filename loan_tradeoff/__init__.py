"""
Loan Tradeoff Engine

Compares financing a purchase with an installment loan or credit card against
keeping the purchase amount invested in a daily-compounding deposit account.
All monetary math uses the fixed-precision Amount type, never float.
"""

from .amount import Amount, Rounding, RoundingMode
from .credit_cards import CreditCardAccount
from .deposits import DepositAccount
from .loans import AmortizationEntry, LoanAccount
from .savings_plan import LoanWithSavingsResult, calculate_loan_with_savings
from .tradeoff import ScenarioResult, SimulationMode, TradeoffComparison

__version__ = "1.0.0"

__all__ = [
    "Amount",
    "Rounding",
    "RoundingMode",
    "CreditCardAccount",
    "DepositAccount",
    "AmortizationEntry",
    "LoanAccount",
    "LoanWithSavingsResult",
    "calculate_loan_with_savings",
    "ScenarioResult",
    "SimulationMode",
    "TradeoffComparison",
]
