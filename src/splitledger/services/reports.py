from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

from splitledger.models import Expense, GroupBalanceReport, ParticipantBreakdown
from splitledger.services.balance import compute_group_balances
from splitledger.services.ledger import participant_breakdown
from splitledger.services.settlement import match_transfers, partition
from splitledger.utils.money import EPSILON


def get_group_balance(
    roster: Iterable[str],
    expenses: Iterable[Expense],
    owner: Optional[str] = None,
    epsilon: Decimal = EPSILON,
) -> GroupBalanceReport:
    expenses = list(expenses)
    participants = list(dict.fromkeys(roster))
    if owner is not None and owner not in participants:
        participants.append(owner)

    result = compute_group_balances(participants, expenses)
    debts, credits = partition(result.balances, epsilon)
    # Matching works on copies, the partitions are reported as computed.
    settlements = match_transfers(debts, credits)

    return GroupBalanceReport(
        participants=participants,
        balances=result.balances,
        debts=debts,
        credits=credits,
        settlements=settlements,
        total_expenses=result.total_expenses,
    )


def get_participant_breakdown(participant: str, expenses: Iterable[Expense]) -> ParticipantBreakdown:
    return participant_breakdown(participant, expenses)
