"""Owner-scoped balance views over a caller-supplied store.

The store is only read; each group's expenses are fetched once per call and
handed to the pure ledger functions as a snapshot.
"""

from __future__ import annotations

from typing import Any, Optional

from splitledger.config import get_settings
from splitledger.logging import get_logger
from splitledger.models import Group
from splitledger.services.authz import LedgerStore, fetch_owned_group
from splitledger.services.records import expenses_from_records, group_from_record
from splitledger.services.reports import get_group_balance, get_participant_breakdown

log = get_logger(__name__)


async def _owned_groups(
    store: LedgerStore,
    owner_id: str,
    owner_name: str,
    group_id: Optional[str],
) -> list[Group]:
    if group_id is not None:
        rows = [await fetch_owned_group(store, owner_id, group_id)]
    else:
        rows = await store.fetch_groups(owner_id)
    return [group_from_record(row, owner_name) for row in rows]


async def balance_summary(
    store: LedgerStore,
    owner_id: str,
    owner_name: str,
    group_id: Optional[str] = None,
) -> dict[str, dict[str, Any]]:
    epsilon = get_settings().epsilon
    summary: dict[str, dict[str, Any]] = {}

    for group in await _owned_groups(store, owner_id, owner_name, group_id):
        expenses = expenses_from_records(await store.fetch_expenses(group.id))
        report = get_group_balance(group.participants, expenses, owner=group.owner_name, epsilon=epsilon)
        summary[group.id] = {"groupName": group.name, **report.to_dict()}
        log.info(
            "summary.group",
            group_id=group.id,
            expenses=len(expenses),
            settlements=len(report.settlements),
            total=str(report.total_expenses),
        )

    return summary


async def participant_balances(
    store: LedgerStore,
    owner_id: str,
    owner_name: str,
    participant: str,
    group_id: Optional[str] = None,
) -> list[dict[str, Any]]:
    results: list[dict[str, Any]] = []

    for group in await _owned_groups(store, owner_id, owner_name, group_id):
        expenses = expenses_from_records(await store.fetch_expenses(group.id))
        breakdown = get_participant_breakdown(participant, expenses)
        results.append({"groupName": group.name, "groupId": group.id, **breakdown.to_dict()})

    log.info("summary.participant", participant_groups=len(results))
    return results
