"""Apply role actions to a member's current roles.

Reconciliation is a pure function of the member's role ids, the guild's
:class:`~rolebot.roles.catalog.RoleCatalog` and the deduplicated actions.
It never talks to Discord; the caller commits ``result.role_ids``.

Primary and secondary ids
-------------------------
A definition may carry a ``secondary_id``. The first definition a member
picks in a group gets its ``primary_id``; every further definition in the
same group gets its ``secondary_id`` when one exists. Guild admins place
secondary roles below all primaries so the first pick keeps, for example,
its colour priority.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from .catalog import RoleCatalog, RoleDefinition
from .parser import ActionKind, RoleAction

log = logging.getLogger(f"rolebot.{__name__}")


class ReconcileStatus(Enum):
    RESET = "reset"
    NO_CHANGES = "no_changes"
    CHANGED = "changed"


@dataclass
class ReconciliationResult:
    status: ReconcileStatus
    role_ids: frozenset[int]
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    already_had: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    unknown: list[str] = field(default_factory=list)
    over_limit: dict[str, list[str]] = field(default_factory=dict)


class MembershipState:
    """Mutable copy of a member's roles with per-group occupancy.

    ``occupied[group]`` holds the names of definitions the member has in
    that group. A definition counts once whether the member holds its
    primary id, its secondary id or both.
    """

    def __init__(self, role_ids: Iterable[int], catalog: RoleCatalog) -> None:
        self.role_ids: set[int] = set(role_ids)
        self.occupied: dict[str, set[str]] = {}
        for group in catalog.groups():
            self.occupied[group.name] = {
                role.name for role in group.roles if role.held_by(self.role_ids)
            }

    def count(self, group_name: str) -> int:
        return len(self.occupied.get(group_name, ()))

    def holds(self, group_name: str, role: RoleDefinition) -> bool:
        return role.name in self.occupied.get(group_name, ())

    def add(self, group_name: str, role: RoleDefinition, role_id: int) -> None:
        self.role_ids.add(role_id)
        self.occupied.setdefault(group_name, set()).add(role.name)

    def remove(self, group_name: str, role: RoleDefinition) -> None:
        self.role_ids -= role.role_ids
        self.occupied.get(group_name, set()).discard(role.name)


def reset_roles(role_ids: Iterable[int], catalog: RoleCatalog) -> ReconciliationResult:
    """Drop every catalog-managed role id, leaving unrelated roles alone."""
    remaining = frozenset(set(role_ids) - catalog.tracked_role_ids())
    return ReconciliationResult(ReconcileStatus.RESET, remaining)


def _choose_role_id(state: MembershipState, group_name: str, role: RoleDefinition) -> int:
    if role.secondary_id is None or state.count(group_name) == 0:
        return role.primary_id
    return role.secondary_id


def reconcile(
    role_ids: Iterable[int],
    catalog: RoleCatalog,
    actions: Iterable[RoleAction],
    *,
    reset: bool = False,
) -> ReconciliationResult:
    """Compute the member's new role ids for *actions*.

    Args:
        role_ids: Every role id the member currently holds.
        catalog: The guild's role catalog.
        actions: Deduplicated actions; processed by ``order_index``.
        reset: Clear all catalog roles instead of applying *actions*.

    Returns:
        The outcome. ``role_ids`` is unchanged when nothing was added or
        removed.
    """
    original = frozenset(role_ids)
    if reset:
        return reset_roles(original, catalog)

    state = MembershipState(original, catalog)
    result = ReconciliationResult(ReconcileStatus.CHANGED, original)

    for action in sorted(actions, key=lambda a: a.order_index):
        found = catalog.lookup(action.role_name)
        if found is None:
            log.debug("Ignoring unknown role %r", action.role_name)
            result.unknown.append(action.role_name)
            continue
        role, group_name = found
        group = catalog.group(group_name)

        if action.kind is ActionKind.ADD:
            if state.holds(group_name, role):
                result.already_had.append(role.name)
            elif group.limited and state.count(group_name) >= group.limit:
                result.over_limit.setdefault(group_name, []).append(role.name)
            else:
                state.add(group_name, role, _choose_role_id(state, group_name, role))
                result.added.append(role.name)
        else:
            if not role.held_by(state.role_ids):
                result.missing.append(role.name)
            else:
                state.remove(group_name, role)
                result.removed.append(role.name)

    if not result.added and not result.removed:
        result.status = ReconcileStatus.NO_CHANGES
        return result

    result.role_ids = frozenset(state.role_ids)
    return result
