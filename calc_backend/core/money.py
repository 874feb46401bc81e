"""Fixed-point money helpers.

The engine keeps every balance as an integer number of cents so that
zero-balance and totals checks are exact. Conversions happen only at the
edges: parameters come in as currency units, schemas go out as currency units.
"""

from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
_MICRO = Decimal("0.000001")


def _dec(value: float) -> Decimal:
    return Decimal(repr(float(value)))


def to_cents(amount: float) -> int:
    """Currency units -> cents, rounded half-up."""
    return int((_dec(amount) / CENT).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def ceil_cents(amount: float) -> int:
    """Currency units -> cents, rounded up.

    Float noise below a millionth of a unit is dropped first so an exact
    amount such as 1000.0000000001 does not gain a cent.
    """
    trimmed = _dec(amount).quantize(_MICRO, rounding=ROUND_HALF_UP)
    return int((trimmed / CENT).quantize(Decimal(1), rounding=ROUND_CEILING))


def from_cents(cents: int) -> float:
    return float(Decimal(cents) * CENT)


def apply_rate(cents: int, rate: float) -> int:
    """Interest on a cents balance at a periodic rate, rounded half-up to the cent."""
    if cents == 0 or rate == 0:
        return 0
    return int((Decimal(cents) * _dec(rate)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
