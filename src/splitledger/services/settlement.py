from __future__ import annotations

from decimal import Decimal
from typing import List, Mapping

from splitledger.models import PartyAmount, Transfer
from splitledger.utils.money import CENTS, EPSILON, ZERO, is_zero, quantize

HALF_CENT = CENTS / 2


def _by_amount_then_name(entry: PartyAmount) -> tuple[Decimal, str]:
    return (-entry.amount, entry.participant)


def partition(
    balances: Mapping[str, Decimal],
    epsilon: Decimal = EPSILON,
) -> tuple[list[PartyAmount], list[PartyAmount]]:
    """Split balances into (debtors, creditors), both holding absolute amounts.

    Each side is ordered by amount descending, then by name, so the matching
    below never depends on mapping order.
    """
    debts: list[PartyAmount] = []
    credits: list[PartyAmount] = []

    for name, balance in balances.items():
        if balance >= epsilon:
            debts.append(PartyAmount(participant=name, amount=balance))
        elif balance <= -epsilon:
            credits.append(PartyAmount(participant=name, amount=-balance))

    debts.sort(key=_by_amount_then_name)
    credits.sort(key=_by_amount_then_name)
    return debts, credits


def match_transfers(
    debts: List[PartyAmount],
    credits: List[PartyAmount],
) -> List[Transfer]:
    debtors = [[entry.participant, entry.amount] for entry in debts]
    creditors = [[entry.participant, entry.amount] for entry in credits]

    transfers: list[Transfer] = []
    i, j = 0, 0

    while i < len(debtors) and j < len(creditors):
        debt_name, debt_amount = debtors[i]
        cred_name, cred_amount = creditors[j]

        transfer_amount = min(debt_amount, cred_amount)
        # Anything subtracted below is reported, down to a single cent.
        if quantize(transfer_amount) > ZERO:
            transfers.append(
                Transfer(
                    from_participant=debt_name,
                    to_participant=cred_name,
                    amount=quantize(transfer_amount),
                )
            )

        debtors[i][1] = debt_amount - transfer_amount
        creditors[j][1] = cred_amount - transfer_amount

        if is_zero(debtors[i][1], HALF_CENT):
            i += 1
        if is_zero(creditors[j][1], HALF_CENT):
            j += 1

    return transfers


def plan_settlements(
    balances: Mapping[str, Decimal],
    epsilon: Decimal = EPSILON,
) -> List[Transfer]:
    """Greedy debtor/creditor matching.

    Applying the result leaves every balance within ``epsilon`` of zero. The
    number of transfers is at most debtors + creditors - 1 but is not
    guaranteed to be the smallest possible.
    """
    debts, credits = partition(balances, epsilon)
    return match_transfers(debts, credits)
