"""Conversion between persisted records and ledger objects.

Records are plain mappings as a document store or a row-based driver hands
them out. Field names follow the stored layout (``splitMode``,
``splitDetails[].participantName``); anything that cannot be read back
faithfully raises :class:`DataIntegrityError` instead of being coerced.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from splitledger.config import get_settings
from splitledger.errors import DataIntegrityError
from splitledger.models import Expense, Group, SplitDetail, SplitMode
from splitledger.utils.money import ZERO, to_decimal


def expense_label(expense: Expense, index: int) -> str:
    return f"expense {expense.id}" if expense.id is not None else f"expense #{index}"


def checked_amount(value: object, where: str) -> Decimal:
    try:
        amount = to_decimal(value)
    except ValueError as exc:
        raise DataIntegrityError(f"{where}: {exc}") from exc
    if amount < ZERO:
        raise DataIntegrityError(f"{where}: negative amount {amount}")
    return amount


def checked_name(value: object, where: str) -> str:
    if not isinstance(value, str) or not value:
        raise DataIntegrityError(f"{where}: participant name must be a non-empty string, got {value!r}")
    return value


def _record_id(value: object) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, Mapping):
        value = value.get("_id", value.get("id"))
        if value is None:
            return None
    return str(value)


def _record_date(value: object, where: str) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as exc:
            raise DataIntegrityError(f"{where}: invalid date {value!r}") from exc
    raise DataIntegrityError(f"{where}: invalid date {value!r}")


def split_detail_from_record(row: Mapping[str, Any], where: str) -> SplitDetail:
    percentage = row.get("percentage")
    return SplitDetail(
        participant_name=checked_name(row.get("participantName"), where),
        amount=checked_amount(row.get("amount"), where),
        percentage=checked_amount(percentage, where) if percentage is not None else None,
    )


def expense_from_record(row: Mapping[str, Any]) -> Expense:
    expense_id = _record_id(row.get("_id", row.get("id")))
    where = f"expense {expense_id or '<new>'}"

    try:
        split_mode = SplitMode(row.get("splitMode", SplitMode.EQUAL.value))
    except ValueError as exc:
        raise DataIntegrityError(f"{where}: unknown split mode {row.get('splitMode')!r}") from exc

    participants = row.get("participants") or []
    details = row.get("splitDetails")
    if details is None:
        raise DataIntegrityError(f"{where}: missing splitDetails")

    return Expense(
        id=expense_id,
        group_id=_record_id(row.get("group")),
        amount=checked_amount(row.get("amount"), where),
        payer=checked_name(row.get("payer"), where),
        participants=[checked_name(name, where) for name in participants],
        split_mode=split_mode,
        split_details=[split_detail_from_record(detail, where) for detail in details],
        description=row.get("description") or "",
        date=_record_date(row.get("date"), where),
        category=row.get("category") or get_settings().default_category,
    )


def expenses_from_records(rows: Iterable[Mapping[str, Any]]) -> list[Expense]:
    return [expense_from_record(row) for row in rows]


def expense_to_record(expense: Expense) -> dict[str, Any]:
    record: dict[str, Any] = {
        "amount": str(expense.amount),
        "description": expense.description,
        "date": expense.date.isoformat() if expense.date else None,
        "payer": expense.payer,
        "participants": list(expense.participants),
        "splitMode": expense.split_mode.value,
        "splitDetails": [
            {
                "participantName": detail.participant_name,
                "amount": str(detail.amount),
                "percentage": str(detail.percentage) if detail.percentage is not None else None,
            }
            for detail in expense.split_details
        ],
        "category": expense.category,
    }
    if expense.id is not None:
        record["_id"] = expense.id
    if expense.group_id is not None:
        record["group"] = expense.group_id
    return record


def group_from_record(row: Mapping[str, Any], owner_name: str) -> Group:
    group_id = _record_id(row.get("_id", row.get("id")))
    if group_id is None:
        raise DataIntegrityError("group record without id")
    where = f"group {group_id}"

    names: list[str] = []
    for participant in row.get("participants") or []:
        name = participant.get("name") if isinstance(participant, Mapping) else participant
        names.append(checked_name(name, where))

    return Group(
        id=group_id,
        name=row.get("name") or "",
        owner_id=str(row.get("owner")),
        owner_name=owner_name,
        participants=names,
    )
