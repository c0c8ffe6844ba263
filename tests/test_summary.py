import pytest

from splitledger.errors import AuthorizationError, DataIntegrityError, GroupNotFoundError
from splitledger.services.expenses import create_expense
from splitledger.services.records import expense_to_record
from splitledger.services.summary import balance_summary, participant_balances


class StubStore:
    def __init__(self, groups, expenses) -> None:
        self.groups = {group["_id"]: group for group in groups}
        self.expenses = expenses

    async def fetch_group(self, group_id):
        return self.groups.get(group_id)

    async def fetch_groups(self, owner_id):
        return [group for group in self.groups.values() if group["owner"] == owner_id]

    async def fetch_expenses(self, group_id):
        return self.expenses.get(group_id, [])


def _record(amount, payer, participants, group_id):
    expense = create_expense(amount, payer, participants, "equal", description="Shared")
    record = expense_to_record(expense)
    record["group"] = group_id
    return record


@pytest.fixture
def store():
    return StubStore(
        groups=[
            {"_id": "g1", "name": "Trip", "owner": "u1", "participants": [{"name": "Bob"}, {"name": "Cid"}]},
            {"_id": "g2", "name": "Flat", "owner": "u1", "participants": [{"name": "Bob"}]},
            {"_id": "g3", "name": "Other", "owner": "u2", "participants": []},
        ],
        expenses={
            "g1": [
                _record("30.00", "Ann", ["Ann", "Bob", "Cid"], "g1"),
                _record("15.00", "Bob", ["Ann", "Bob", "Cid"], "g1"),
            ],
            "g2": [_record("8.00", "Bob", ["Ann", "Bob"], "g2")],
        },
    )


@pytest.mark.asyncio
async def test_balance_summary_for_all_owned_groups(store):
    summary = await balance_summary(store, "u1", "Ann")

    assert set(summary) == {"g1", "g2"}
    trip = summary["g1"]
    assert trip["groupName"] == "Trip"
    assert trip["participants"] == ["Bob", "Cid", "Ann"]
    assert trip["balances"] == {"Bob": "0.00", "Cid": "15.00", "Ann": "-15.00"}
    assert trip["settlements"] == [{"from": "Cid", "to": "Ann", "amount": "15.00"}]
    assert trip["totalExpenses"] == "45.00"
    assert summary["g2"]["settlements"] == [{"from": "Ann", "to": "Bob", "amount": "4.00"}]


@pytest.mark.asyncio
async def test_balance_summary_single_group(store):
    summary = await balance_summary(store, "u1", "Ann", group_id="g2")
    assert list(summary) == ["g2"]


@pytest.mark.asyncio
async def test_balance_summary_unknown_group(store):
    with pytest.raises(GroupNotFoundError):
        await balance_summary(store, "u1", "Ann", group_id="missing")


@pytest.mark.asyncio
async def test_balance_summary_foreign_group(store):
    with pytest.raises(AuthorizationError):
        await balance_summary(store, "u1", "Ann", group_id="g3")


@pytest.mark.asyncio
async def test_balance_summary_malformed_expense(store):
    store.expenses["g2"][0]["amount"] = "not a number"
    with pytest.raises(DataIntegrityError):
        await balance_summary(store, "u1", "Ann", group_id="g2")


@pytest.mark.asyncio
async def test_participant_balances(store):
    results = await participant_balances(store, "u1", "Ann", "Bob")

    by_group = {row["groupId"]: row for row in results}
    assert by_group["g1"] == {
        "groupName": "Trip",
        "groupId": "g1",
        "netBalance": "0.00",
        "owesTo": {"Ann": "10.00"},
        "owedBy": {"Ann": "5.00", "Cid": "5.00"},
    }
    assert by_group["g2"]["netBalance"] == "-4.00"
    assert by_group["g2"]["owedBy"] == {"Ann": "4.00"}
