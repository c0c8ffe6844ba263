from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from splitledger.errors import (
    DuplicateParticipants,
    EmptyParticipants,
    InvalidAmount,
    InvalidPercentageSum,
    MissingSplitInputs,
    SplitCountMismatch,
    SplitSumMismatch,
    UnexpectedSplitInputs,
    UnknownSplitMode,
)
from splitledger.models import SplitDetail, SplitMode
from splitledger.utils.money import CENTS, EPSILON, ZERO, quantize, to_decimal

HUNDRED = Decimal("100")


def coerce_split_mode(mode: SplitMode | str) -> SplitMode:
    if isinstance(mode, SplitMode):
        return mode
    try:
        return SplitMode(str(mode).strip().lower())
    except ValueError as exc:
        raise UnknownSplitMode(mode) from exc


def coerce_amount(amount: object) -> Decimal:
    try:
        value = to_decimal(amount)
    except ValueError as exc:
        raise InvalidAmount(str(exc)) from exc
    value = quantize(value)
    if value <= ZERO:
        raise InvalidAmount(f"Amount must be positive, got {value}")
    return value


def check_participants(participants: Sequence[str]) -> list[str]:
    names = list(participants)
    if not names:
        raise EmptyParticipants()

    seen: set[str] = set()
    duplicates: list[str] = []
    for name in names:
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)
    if duplicates:
        raise DuplicateParticipants(duplicates)
    return names


def _split_inputs(
    values: Optional[Sequence[object]],
    mode: SplitMode,
    field: str,
    count: int,
) -> list[Decimal]:
    if values is None:
        raise MissingSplitInputs(mode.value, field)
    if len(values) != count:
        raise SplitCountMismatch(field, count, len(values))

    result: list[Decimal] = []
    for value in values:
        try:
            number = to_decimal(value)
        except ValueError as exc:
            raise InvalidAmount(f"Invalid {field} entry: {value!r}") from exc
        if number < ZERO:
            raise InvalidAmount(f"{field} must not be negative, got {number}")
        result.append(number)
    return result


def split_equal(amount: Decimal, participants: Sequence[str]) -> list[SplitDetail]:
    n = len(participants)
    per_person = quantize(amount / Decimal(n))

    shares = [per_person for _ in participants]
    remainder = amount - per_person * n

    if abs(remainder) <= CENTS:
        shares[-1] += remainder
    else:
        # Half-cent shares with four or more people: walk back from the last
        # participant a cent at a time so no two shares differ by more than 0.01.
        step = CENTS if remainder > 0 else -CENTS
        idx = n - 1
        while remainder != ZERO:
            shares[idx] += step
            remainder -= step
            idx = (idx - 1) % n

    return [SplitDetail(participant_name=name, amount=share) for name, share in zip(participants, shares)]


def split_custom(
    amount: Decimal,
    participants: Sequence[str],
    custom_amounts: Sequence[Decimal],
    epsilon: Decimal = EPSILON,
) -> list[SplitDetail]:
    total = sum(custom_amounts, ZERO)
    if abs(total - amount) > epsilon:
        raise SplitSumMismatch(expected=amount, actual=total, tolerance=epsilon)

    return [
        SplitDetail(participant_name=name, amount=quantize(value))
        for name, value in zip(participants, custom_amounts)
    ]


def split_percentage(
    amount: Decimal,
    participants: Sequence[str],
    percentages: Sequence[Decimal],
    epsilon: Decimal = EPSILON,
) -> list[SplitDetail]:
    total = sum(percentages, ZERO)
    if abs(total - HUNDRED) > epsilon:
        raise InvalidPercentageSum(actual=total, tolerance=epsilon)

    n = len(participants)
    details: list[SplitDetail] = []
    allocated = ZERO
    for index, (name, pct) in enumerate(zip(participants, percentages)):
        if index == n - 1:
            share = amount - allocated
            if share < ZERO:
                # Earlier shares overran the amount by the percentage tolerance.
                raise InvalidPercentageSum(actual=total, tolerance=epsilon)
        else:
            share = quantize(amount * pct / HUNDRED)
            allocated += share
        details.append(SplitDetail(participant_name=name, amount=share, percentage=pct))
    return details


def compute_split(
    amount: object,
    participants: Sequence[str],
    mode: SplitMode | str,
    custom_amounts: Optional[Sequence[object]] = None,
    percentages: Optional[Sequence[object]] = None,
    *,
    epsilon: Decimal = EPSILON,
) -> list[SplitDetail]:
    """Split ``amount`` across ``participants`` according to ``mode``.

    Every figure is rounded to cents as it is produced; the last participant
    in list order absorbs the rounding remainder in equal and percentage
    modes so the details always add up to the amount. Equal shares never
    differ by more than one cent.
    """
    split_mode = coerce_split_mode(mode)
    value = coerce_amount(amount)
    names = check_participants(participants)

    if custom_amounts is not None and split_mode is not SplitMode.CUSTOM:
        raise UnexpectedSplitInputs(split_mode.value, "custom amounts")
    if percentages is not None and split_mode is not SplitMode.PERCENTAGE:
        raise UnexpectedSplitInputs(split_mode.value, "percentages")

    if split_mode is SplitMode.EQUAL:
        return split_equal(value, names)

    if split_mode is SplitMode.CUSTOM:
        amounts = _split_inputs(custom_amounts, split_mode, "custom amounts", len(names))
        return split_custom(value, names, amounts, epsilon)

    shares = _split_inputs(percentages, split_mode, "percentages", len(names))
    return split_percentage(value, names, shares, epsilon)
