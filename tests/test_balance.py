from decimal import Decimal

import pytest

from splitledger.errors import DataIntegrityError
from splitledger.models import Expense, SplitDetail, SplitMode
from splitledger.services.balance import compute_group_balances
from splitledger.services.split import compute_split


def _expense(payer, amount, participants, mode=SplitMode.EQUAL, **inputs):
    return Expense(
        amount=Decimal(amount),
        payer=payer,
        participants=list(participants),
        split_mode=mode,
        split_details=compute_split(amount, participants, mode, **inputs),
    )


def test_single_equal_expense():
    result = compute_group_balances(["B", "C"], [_expense("A", "30.00", ["A", "B", "C"])], owner="A")

    assert result.balances == {
        "A": Decimal("-20.00"),
        "B": Decimal("10.00"),
        "C": Decimal("10.00"),
    }
    assert result.total_expenses == Decimal("30.00")


def test_roster_and_owner_seeded_at_zero():
    result = compute_group_balances(["Bob", "Cid"], [], owner="Ann")

    assert result.balances == {"Bob": Decimal("0"), "Cid": Decimal("0"), "Ann": Decimal("0")}
    assert result.total_expenses == Decimal("0")


def test_names_outside_roster_are_added():
    expense = _expense("A", "9.00", ["A", "Zed", "Quinn"])
    result = compute_group_balances(["A"], [expense])

    assert result.balances["Zed"] == Decimal("3.00")
    assert result.balances["Quinn"] == Decimal("3.00")
    assert result.balances["A"] == Decimal("-6.00")


def test_payer_without_own_share():
    expense = _expense("A", "20.00", ["B", "C"])
    result = compute_group_balances(["A", "B", "C"], [expense])

    assert result.balances == {"A": Decimal("-20.00"), "B": Decimal("10.00"), "C": Decimal("10.00")}


def test_payer_only_expense_changes_nothing():
    result = compute_group_balances(["A", "B"], [_expense("A", "12.34", ["A"])])
    assert result.balances == {"A": Decimal("0"), "B": Decimal("0")}
    assert result.total_expenses == Decimal("12.34")


def test_balances_are_conserved():
    expenses = [
        _expense("A", "10.00", ["A", "B", "C"]),
        _expense("B", "7.01", ["A", "B", "C", "D"]),
        _expense("C", "99.99", ["A", "D"], SplitMode.PERCENTAGE, percentages=["33.3", "66.7"]),
        _expense("D", "50.00", ["A", "B", "C"], SplitMode.CUSTOM, custom_amounts=["10.00", "15.50", "24.50"]),
    ]

    result = compute_group_balances(["B", "C", "D"], expenses, owner="A")

    assert abs(sum(result.balances.values())) <= Decimal("0.01") * len(result.balances)
    assert result.total_expenses == Decimal("167.00")


def test_multiple_expenses():
    expenses = [
        _expense("A", "30.00", ["A", "B", "C"]),
        _expense("B", "15.00", ["A", "B", "C"]),
    ]

    result = compute_group_balances(["B", "C"], expenses, owner="A")

    assert result.balances == {"B": Decimal("0.00"), "C": Decimal("15.00"), "A": Decimal("-15.00")}
    assert sum(result.balances.values()) == 0
    assert result.total_expenses == Decimal("45.00")


@pytest.mark.parametrize(
    "amount, share",
    [
        (Decimal("NaN"), Decimal("1.00")),
        (Decimal("1.00"), "abc"),
        (Decimal("1.00"), Decimal("-1.00")),
        (None, Decimal("1.00")),
    ],
)
def test_malformed_expense_raises(amount, share):
    expense = Expense(
        amount=amount,
        payer="A",
        participants=["B"],
        split_mode=SplitMode.CUSTOM,
        split_details=[SplitDetail(participant_name="B", amount=share)],
        id="e1",
    )

    with pytest.raises(DataIntegrityError, match="expense e1"):
        compute_group_balances(["A", "B"], [expense])


def test_missing_participant_name_raises():
    expense = Expense(
        amount=Decimal("1.00"),
        payer="A",
        participants=["B"],
        split_mode=SplitMode.EQUAL,
        split_details=[SplitDetail(participant_name="", amount=Decimal("1.00"))],
    )

    with pytest.raises(DataIntegrityError, match="expense #0"):
        compute_group_balances(["A"], [expense])
