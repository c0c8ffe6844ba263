from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from splitledger.errors import AuthorizationError, GroupNotFoundError


class LedgerStore(Protocol):
    async def fetch_group(self, group_id: str) -> Optional[Mapping[str, Any]]: ...

    async def fetch_groups(self, owner_id: str) -> list[Mapping[str, Any]]: ...

    async def fetch_expenses(self, group_id: str) -> list[Mapping[str, Any]]: ...


async def is_group_owner(store: LedgerStore, owner_id: str, group_id: str) -> bool:
    group = await store.fetch_group(group_id)
    return group is not None and str(group.get("owner")) == str(owner_id)


async def fetch_owned_group(store: LedgerStore, owner_id: str, group_id: str) -> Mapping[str, Any]:
    group = await store.fetch_group(group_id)
    if group is None:
        raise GroupNotFoundError(group_id)
    if str(group.get("owner")) != str(owner_id):
        raise AuthorizationError("Only the group owner can view its balances")
    return group
