from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Mapping, Optional

from splitledger.config import get_settings
from splitledger.errors import RosterError
from splitledger.models import Group


def validate_roster(names: Iterable[object], max_participants: Optional[int] = None) -> list[str]:
    """Return trimmed roster names, rejecting blanks, duplicates and overflow.

    Entries may be plain names or ``{"name": ...}`` mappings. The owner is
    implicit and does not count towards ``max_participants``.
    """
    limit = get_settings().max_participants if max_participants is None else max_participants

    roster: list[str] = []
    for entry in names:
        name = entry.get("name") if isinstance(entry, Mapping) else entry
        if not isinstance(name, str) or not name.strip():
            raise RosterError("Participant name is required")
        name = name.strip()
        if name in roster:
            raise RosterError(f"Participant '{name}' is already in the group")
        roster.append(name)

    if len(roster) > limit:
        raise RosterError(f"Maximum {limit} participants allowed (plus the owner)")
    return roster


def group_members(group: Group) -> list[str]:
    members = list(group.participants)
    if group.owner_name not in members:
        members.append(group.owner_name)
    return members


def create_group(
    group_id: str,
    name: str,
    owner_id: str,
    owner_name: str,
    participants: Iterable[object] = (),
) -> Group:
    if not name or not name.strip():
        raise RosterError("Group name is required")
    return Group(
        id=group_id,
        name=name.strip(),
        owner_id=owner_id,
        owner_name=owner_name,
        participants=validate_roster(participants),
    )


def update_group(
    group: Group,
    name: Optional[str] = None,
    participants: Optional[Iterable[object]] = None,
) -> Group:
    changes: dict[str, object] = {}
    if name and name.strip():
        changes["name"] = name.strip()
    if participants is not None:
        changes["participants"] = validate_roster(participants)
    return replace(group, **changes)
