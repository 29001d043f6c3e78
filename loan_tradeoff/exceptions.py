"""
Engine Exceptions

Every failure in the engine is a deterministic input-validation failure raised
at the point of violation. All errors derive from TradeoffError, which is a
ValueError, so callers may catch either.
"""


class TradeoffError(ValueError):
    """Base exception for the tradeoff engine"""
    pass


# Amount errors
class InvalidValueError(TradeoffError):
    """Value is NaN, infinite, too large or cannot be parsed as a number"""
    pass


class TypeMismatchError(TradeoffError, TypeError):
    """Operand is not an Amount (or not a supported input type)"""
    pass


class DivisionByZeroError(TradeoffError, ZeroDivisionError):
    """Divisor Amount is zero"""
    pass


class InvalidExponentError(TradeoffError):
    """Exponent or root degree is not an allowed integer"""
    pass


class NegativeRadicandError(TradeoffError):
    """Root requested of a negative Amount"""
    pass


class InvalidRoundingModeError(TradeoffError):
    """Rounding directive has an unknown mode or bad decimal places"""
    pass


# Loan errors
class InvalidPeriodCountError(TradeoffError):
    pass


class UnsupportedPeriodTypeError(TradeoffError):
    pass


class InvalidRateError(TradeoffError):
    pass


class InvalidPrincipalError(TradeoffError):
    pass


# Deposit errors
class InvalidWithdrawalError(TradeoffError):
    pass


class InvalidDayCountError(TradeoffError):
    pass


class InvalidDateError(TradeoffError):
    pass


# Credit card errors
class InvalidAmountError(TradeoffError):
    pass


# Simulator errors
class MissingStartDateError(TradeoffError):
    """Real-world simulation requested without a start date"""
    pass


class InvalidSimulationModeError(TradeoffError):
    pass
