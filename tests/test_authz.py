import pytest

from splitledger.errors import AuthorizationError, GroupNotFoundError
from splitledger.services.authz import fetch_owned_group, is_group_owner


class StubStore:
    def __init__(self, owner_id: str) -> None:
        self.owner_id = owner_id

    async def fetch_group(self, group_id):
        if group_id == "g1":
            return {"_id": "g1", "name": "Trip", "owner": self.owner_id}
        return None

    async def fetch_groups(self, owner_id):
        return []

    async def fetch_expenses(self, group_id):
        return []


@pytest.mark.asyncio
async def test_is_group_owner():
    store = StubStore(owner_id="u42")
    assert await is_group_owner(store, "u42", "g1") is True
    assert await is_group_owner(store, "u7", "g1") is False
    assert await is_group_owner(store, "u42", "g2") is False


@pytest.mark.asyncio
async def test_fetch_owned_group():
    store = StubStore(owner_id="u42")
    group = await fetch_owned_group(store, "u42", "g1")
    assert group["name"] == "Trip"


@pytest.mark.asyncio
async def test_fetch_owned_group_denied():
    store = StubStore(owner_id="u10")
    with pytest.raises(AuthorizationError):
        await fetch_owned_group(store, "u11", "g1")


@pytest.mark.asyncio
async def test_fetch_owned_group_missing():
    store = StubStore(owner_id="u10")
    with pytest.raises(GroupNotFoundError):
        await fetch_owned_group(store, "u10", "g2")
