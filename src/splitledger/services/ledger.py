from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from splitledger.models import Expense, ParticipantBreakdown
from splitledger.services.records import checked_amount, checked_name, expense_label
from splitledger.utils.money import ZERO, quantize


def _add(target: dict[str, Decimal], name: str, amount: Decimal) -> None:
    target[name] = target.get(name, ZERO) + amount


def participant_breakdown(participant: str, expenses: Iterable[Expense]) -> ParticipantBreakdown:
    """Who ``participant`` owes and who owes them, per counterparty.

    An expense paid by ``participant`` counts every other split entry as owed
    to them, whether or not the payer has a share of their own, so the net
    figure always matches the group balance for the same expenses.
    """
    net = ZERO
    owes_to: dict[str, Decimal] = {}
    owed_by: dict[str, Decimal] = {}

    for index, expense in enumerate(expenses):
        where = expense_label(expense, index)
        payer = checked_name(expense.payer, where)

        for detail in expense.split_details:
            name = checked_name(detail.participant_name, where)
            share = checked_amount(detail.amount, where)

            if payer == participant and name != participant:
                _add(owed_by, name, share)
                net -= share
            elif payer != participant and name == participant:
                _add(owes_to, payer, share)
                net += share

    return ParticipantBreakdown(
        participant=participant,
        net_balance=quantize(net),
        owes_to={name: quantize(value) for name, value in owes_to.items()},
        owed_by={name: quantize(value) for name, value in owed_by.items()},
    )
