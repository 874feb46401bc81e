"""Error taxonomy raised by the projection engine."""

from typing import Optional


class CalculationError(ValueError):
    """Base class for every error the engine raises on purpose."""

    code = "calculation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        return {"error": self.code, "detail": self.message, "field": self.field}


class InvalidParameter(CalculationError):
    code = "invalid_parameter"


class PaymentTooLowError(CalculationError):
    """The periodic payment does not cover the first period's interest."""

    code = "payment_too_low"

    def __init__(self, payment: float, interest: float):
        super().__init__(
            f"payment {payment:.2f} does not cover first period interest {interest:.2f}",
            field="fixed_payment",
        )
        self.payment = payment
        self.interest = interest


class DidNotConverge(CalculationError):
    code = "did_not_converge"

    def __init__(self, max_periods: int, remaining: float):
        super().__init__(
            f"balance {remaining:.2f} still outstanding after {max_periods} periods",
        )
        self.max_periods = max_periods
        self.remaining = remaining


class SolverMismatch(CalculationError):
    """The closed-form period count and the simulated schedule disagree."""

    code = "solver_mismatch"

    def __init__(self, expected: int, actual: int):
        super().__init__(f"closed form gives {expected} periods, schedule has {actual}")
        self.expected = expected
        self.actual = actual
