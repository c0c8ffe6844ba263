from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from splitledger.utils.money import ZERO, quantize


DATE_FORMATS = ("%Y-%m-%d", "%d.%m.%Y", "%d/%m/%Y")

_NUMBER_RE = re.compile(r"\d+(\.\d{1,2})?")
_THOUSANDS_RE = re.compile(r"\d{1,3},\d{3}")


def parse_amount(text: str) -> Decimal:
    """
    Parse a user-typed positive amount.

    Supported inputs:
    - 12.50, 12,50
    - 1 234.50, 1,234.50, 1.234,50, 1,234
    - $12.50, 12.50 EUR

    More than two decimal places is an error, not rounded away.
    """
    cleaned = re.sub(r"[^\d,.\-]", "", text.strip())
    if cleaned.startswith("-"):
        raise ValueError("Amount must be positive")

    # The right-most separator is the decimal one when both appear.
    if "," in cleaned and "." in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    elif cleaned.count(",") == 1 and not _THOUSANDS_RE.fullmatch(cleaned):
        cleaned = cleaned.replace(",", ".")
    else:
        cleaned = cleaned.replace(",", "")

    if not _NUMBER_RE.fullmatch(cleaned):
        raise ValueError(f"Invalid amount: {text!r}")

    try:
        value = quantize(Decimal(cleaned))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {text!r}") from exc

    if value <= ZERO:
        raise ValueError("Amount must be positive")
    return value


def parse_date(text: str) -> date:
    value = text.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise ValueError("Expected a date as YYYY-MM-DD or DD.MM.YYYY")
