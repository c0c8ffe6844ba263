from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from splitledger.utils.money import format_amount


class SplitMode(str, Enum):
    EQUAL = "equal"
    CUSTOM = "custom"
    PERCENTAGE = "percentage"


@dataclass(slots=True)
class SplitDetail:
    participant_name: str
    amount: Decimal
    percentage: Optional[Decimal] = None


@dataclass(slots=True)
class Expense:
    amount: Decimal
    payer: str
    participants: list[str]
    split_mode: SplitMode
    split_details: list[SplitDetail]
    description: str = ""
    date: Optional[datetime] = None
    category: str = "Other"
    id: Optional[str] = None
    group_id: Optional[str] = None


@dataclass(slots=True)
class Group:
    id: str
    name: str
    owner_id: str
    owner_name: str
    participants: list[str] = field(default_factory=list)


@dataclass(slots=True)
class Transfer:
    from_participant: str
    to_participant: str
    amount: Decimal

    def to_dict(self) -> dict[str, str]:
        return {
            "from": self.from_participant,
            "to": self.to_participant,
            "amount": format_amount(self.amount),
        }


@dataclass(slots=True)
class PartyAmount:
    participant: str
    amount: Decimal

    def to_dict(self) -> dict[str, str]:
        return {"person": self.participant, "amount": format_amount(self.amount)}


@dataclass(slots=True)
class GroupBalance:
    balances: dict[str, Decimal]
    total_expenses: Decimal


@dataclass(slots=True)
class GroupBalanceReport:
    participants: list[str]
    balances: dict[str, Decimal]
    debts: list[PartyAmount]
    credits: list[PartyAmount]
    settlements: list[Transfer]
    total_expenses: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "participants": list(self.participants),
            "balances": {name: format_amount(value) for name, value in self.balances.items()},
            "debts": [entry.to_dict() for entry in self.debts],
            "credits": [entry.to_dict() for entry in self.credits],
            "settlements": [transfer.to_dict() for transfer in self.settlements],
            "totalExpenses": format_amount(self.total_expenses),
        }


@dataclass(slots=True)
class ParticipantBreakdown:
    participant: str
    net_balance: Decimal
    owes_to: dict[str, Decimal] = field(default_factory=dict)
    owed_by: dict[str, Decimal] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "netBalance": format_amount(self.net_balance),
            "owesTo": {name: format_amount(value) for name, value in self.owes_to.items()},
            "owedBy": {name: format_amount(value) for name, value in self.owed_by.items()},
        }
