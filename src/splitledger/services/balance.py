from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

from splitledger.models import Expense, GroupBalance
from splitledger.services.records import checked_amount, checked_name, expense_label
from splitledger.utils.money import ZERO, quantize


def accumulate_balances(
    expenses: Iterable[Expense],
    balances: dict[str, Decimal],
) -> Decimal:
    """Apply every expense to ``balances`` in place and return the total spend.

    Amounts are kept at full precision; callers round on output.
    """
    total = ZERO
    for index, expense in enumerate(expenses):
        where = expense_label(expense, index)
        total += checked_amount(expense.amount, where)
        payer = checked_name(expense.payer, where)
        balances.setdefault(payer, ZERO)

        for detail in expense.split_details:
            name = checked_name(detail.participant_name, where)
            share = checked_amount(detail.amount, where)
            balances.setdefault(name, ZERO)
            if name == payer:
                continue
            balances[name] += share
            balances[payer] -= share
    return total


def compute_group_balances(
    roster: Iterable[str],
    expenses: Iterable[Expense],
    owner: Optional[str] = None,
) -> GroupBalance:
    balances: dict[str, Decimal] = {}
    for name in roster:
        balances.setdefault(name, ZERO)
    if owner is not None:
        balances.setdefault(owner, ZERO)

    total = accumulate_balances(expenses, balances)

    return GroupBalance(
        balances={name: quantize(value) for name, value in balances.items()},
        total_expenses=quantize(total),
    )
