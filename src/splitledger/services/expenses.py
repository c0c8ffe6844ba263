from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from splitledger.config import get_settings
from splitledger.errors import ExpenseValidationError, InvalidAmount
from splitledger.logging import get_logger
from splitledger.models import Expense, Group, SplitMode
from splitledger.services.groups import group_members
from splitledger.services.split import check_participants, coerce_amount, coerce_split_mode, compute_split
from splitledger.utils.money import ZERO, quantize, to_decimal
from splitledger.utils.parse import parse_amount, parse_date

log = get_logger(__name__)


def _expense_amount(value: object) -> Decimal:
    if isinstance(value, str):
        try:
            return parse_amount(value)
        except ValueError as exc:
            raise InvalidAmount(str(exc)) from exc
    return coerce_amount(value)


def _check_members(payer: str, participants: Sequence[str], group: Optional[Group]) -> None:
    if not isinstance(payer, str) or not payer.strip():
        raise ExpenseValidationError("Payer is required")
    if group is None:
        return

    members = group_members(group)
    unknown: list[str] = []
    for name in [payer, *participants]:
        if name not in members and name not in unknown:
            unknown.append(name)
    if unknown:
        raise ExpenseValidationError(f"Not members of group '{group.name}': {', '.join(unknown)}")


def create_expense(
    amount: object,
    payer: str,
    participants: Sequence[str],
    split_mode: SplitMode | str,
    custom_amounts: Optional[Sequence[object]] = None,
    percentages: Optional[Sequence[object]] = None,
    *,
    description: str,
    date: Optional[datetime] = None,
    category: Optional[str] = None,
    group: Optional[Group] = None,
    expense_id: Optional[str] = None,
) -> Expense:
    """Validate a new expense and freeze its split.

    Nothing is persisted here; the caller stores the returned expense.
    """
    settings = get_settings()
    if not description or not description.strip():
        raise ExpenseValidationError("Description is required")

    value = _expense_amount(amount)
    names = check_participants(participants)
    _check_members(payer, names, group)
    mode = coerce_split_mode(split_mode)

    details = compute_split(value, names, mode, custom_amounts, percentages, epsilon=settings.epsilon)
    expense = Expense(
        id=expense_id,
        group_id=group.id if group is not None else None,
        amount=value,
        payer=payer,
        participants=names,
        split_mode=mode,
        split_details=details,
        description=description.strip(),
        date=date or datetime.now(timezone.utc),
        category=category or settings.default_category,
    )
    log.info(
        "expense.created",
        group_id=expense.group_id,
        split_mode=mode.value,
        participants=len(names),
        amount=str(value),
    )
    return expense


def edit_expense(
    expense: Expense,
    *,
    amount: Optional[object] = None,
    payer: Optional[str] = None,
    participants: Optional[Sequence[str]] = None,
    split_mode: Optional[SplitMode | str] = None,
    custom_amounts: Optional[Sequence[object]] = None,
    percentages: Optional[Sequence[object]] = None,
    description: Optional[str] = None,
    date: Optional[datetime] = None,
    category: Optional[str] = None,
    group: Optional[Group] = None,
) -> Expense:
    """Return a copy of ``expense`` with the given fields changed.

    The split is recomputed wholesale when the amount, the participants, the
    mode or any split input changes; a payer-only change keeps it as is.
    """
    changes: dict[str, object] = {}
    if amount is not None:
        changes["amount"] = _expense_amount(amount)
    if payer is not None:
        changes["payer"] = payer
    if participants is not None:
        changes["participants"] = check_participants(participants)
    if split_mode is not None:
        changes["split_mode"] = coerce_split_mode(split_mode)
    if description is not None:
        if not description.strip():
            raise ExpenseValidationError("Description is required")
        changes["description"] = description.strip()
    if date is not None:
        changes["date"] = date
    if category is not None:
        changes["category"] = category

    updated = replace(expense, **changes)
    _check_members(updated.payer, updated.participants, group)

    resplit = any(
        value is not None
        for value in (amount, participants, split_mode, custom_amounts, percentages)
    )
    if resplit:
        updated.split_details = compute_split(
            updated.amount,
            updated.participants,
            updated.split_mode,
            custom_amounts,
            percentages,
            epsilon=get_settings().epsilon,
        )

    log.info("expense.edited", expense_id=expense.id, resplit=resplit, fields=sorted(changes))
    return updated


def _as_date(value: date | str | None) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    return parse_date(value)


def _as_amount(value: object) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, str):
        return parse_amount(value)
    return to_decimal(value)


def filter_expenses(
    expenses: Iterable[Expense],
    *,
    participant: Optional[str] = None,
    start_date: date | str | None = None,
    end_date: date | str | None = None,
    min_amount: object = None,
    max_amount: object = None,
    search: Optional[str] = None,
) -> list[Expense]:
    """Select expenses matching every given criterion, newest first.

    Date and amount bounds are inclusive; ``search`` is a case-insensitive
    substring of the description. Expenses without a date never match a date
    bound.
    """
    start = _as_date(start_date)
    end = _as_date(end_date)
    low = _as_amount(min_amount)
    high = _as_amount(max_amount)
    needle = search.casefold() if search else None

    selected: list[Expense] = []
    for expense in expenses:
        if participant is not None and participant not in expense.participants:
            continue
        if start is not None or end is not None:
            if expense.date is None:
                continue
            day = expense.date.date()
            if start is not None and day < start:
                continue
            if end is not None and day > end:
                continue
        if low is not None and expense.amount < low:
            continue
        if high is not None and expense.amount > high:
            continue
        if needle is not None and needle not in expense.description.casefold():
            continue
        selected.append(expense)

    # Undated expenses keep their input order after the dated ones.
    dated = [e for e in selected if e.date is not None]
    undated = [e for e in selected if e.date is None]
    dated.sort(key=lambda e: e.date, reverse=True)
    return dated + undated


def group_totals(expenses: Iterable[Expense]) -> tuple[Decimal, int]:
    total = ZERO
    count = 0
    for expense in expenses:
        total += expense.amount
        count += 1
    return quantize(total), count
