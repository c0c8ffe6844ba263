from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENTS = Decimal("0.01")
EPSILON = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: object) -> Decimal:
    """Convert a number-like value to Decimal without binary float artefacts.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``.
    Raises ``ValueError`` for anything non-numeric or non-finite.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a monetary value: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, (float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Not a monetary value: {value!r}") from exc
    else:
        raise ValueError(f"Not a monetary value: {value!r}")

    if not result.is_finite():
        raise ValueError(f"Not a finite monetary value: {value!r}")
    return result


def quantize(value: Decimal) -> Decimal:
    # ROUND_HALF_UP on Decimal rounds half away from zero, negatives included.
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def is_zero(value: Decimal, epsilon: Decimal = EPSILON) -> bool:
    return abs(value) < epsilon


def format_amount(value: Decimal) -> str:
    return str(quantize(value))
