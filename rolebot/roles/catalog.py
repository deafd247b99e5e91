"""In-memory view of a guild's self-assignable role groups.

The stored configuration looks like::

    {"groups": [
        {"name": "color", "limit": 1, "roles": [
            {"name": "Red", "primary_id": 1},
            {"name": "Gold", "primary_id": 10, "secondary_id": 11},
        ]},
    ]}

A group with ``limit`` L accepts up to L roles per member; ``0`` rejects
every add. Leave ``limit`` out (or set it to ``null``) for no limit. Role
names are matched case-insensitively and must be unique across every
group.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Sequence

from .errors import CatalogError
from .parser import normalize_name


@dataclass(frozen=True)
class RoleDefinition:
    """A user-facing role choice backed by one or two guild roles."""

    name: str
    primary_id: int
    secondary_id: int | None = None
    display_name: str = ""

    @property
    def role_ids(self) -> frozenset[int]:
        if self.secondary_id is None:
            return frozenset({self.primary_id})
        return frozenset({self.primary_id, self.secondary_id})

    def held_by(self, role_ids: set[int] | frozenset[int]) -> bool:
        return not self.role_ids.isdisjoint(role_ids)


@dataclass(frozen=True)
class RoleGroup:
    name: str
    limit: int | None = None
    roles: tuple[RoleDefinition, ...] = field(default_factory=tuple)

    @property
    def limited(self) -> bool:
        return self.limit is not None

    @property
    def role_ids(self) -> frozenset[int]:
        ids: set[int] = set()
        for role in self.roles:
            ids |= role.role_ids
        return frozenset(ids)


def _as_role_id(value: Any, where: str) -> int:
    # bool is an int subclass but never a valid snowflake
    if isinstance(value, bool):
        raise CatalogError(f"{where} must be a role id, got {value!r}")
    # floats cannot hold every snowflake exactly
    if isinstance(value, float):
        raise CatalogError(f"{where} must be an integer role id, got {value!r}")
    try:
        role_id = int(value)
    except (TypeError, ValueError):
        raise CatalogError(f"{where} must be a role id, got {value!r}") from None
    if role_id <= 0:
        raise CatalogError(f"{where} must be a positive role id, got {value!r}")
    return role_id


def _parse_role(raw: Any, group_name: str) -> RoleDefinition:
    if not isinstance(raw, Mapping):
        raise CatalogError(f"Role entries in group {group_name!r} must be objects")
    display = str(raw.get("name") or "").strip()
    name = normalize_name(display)
    if not name:
        raise CatalogError(f"Role in group {group_name!r} is missing a name")
    primary_id = _as_role_id(raw.get("primary_id"), f"{display}.primary_id")
    secondary_raw = raw.get("secondary_id")
    secondary_id = None
    if secondary_raw is not None:
        secondary_id = _as_role_id(secondary_raw, f"{display}.secondary_id")
        if secondary_id == primary_id:
            raise CatalogError(f"Role {display!r} uses the same id twice")
    return RoleDefinition(name, primary_id, secondary_id, display_name=display)


def _parse_group(raw: Any) -> RoleGroup:
    if not isinstance(raw, Mapping):
        raise CatalogError("Role groups must be objects")
    group_name = str(raw.get("name") or "").strip()
    if not group_name:
        raise CatalogError("Role group is missing a name")
    limit = raw.get("limit")
    if limit is not None and (
        isinstance(limit, bool) or not isinstance(limit, int) or limit < 0
    ):
        raise CatalogError(
            f"Group {group_name!r} limit must be a non-negative integer, got {limit!r}"
        )
    roles = raw.get("roles") or []
    if not isinstance(roles, Sequence) or isinstance(roles, (str, bytes)):
        raise CatalogError(f"Group {group_name!r} roles must be a list")
    return RoleGroup(
        group_name, limit, tuple(_parse_role(r, group_name) for r in roles)
    )


class RoleCatalog:
    """Role groups of one guild plus a name lookup across all groups."""

    def __init__(self, groups: Sequence[RoleGroup]) -> None:
        self._groups: dict[str, RoleGroup] = {}
        self._lookup: dict[str, tuple[RoleDefinition, str]] = {}
        for group in groups:
            if group.name in self._groups:
                raise CatalogError(f"Duplicate role group {group.name!r}")
            self._groups[group.name] = group
            for role in group.roles:
                if role.name in self._lookup:
                    other = self._lookup[role.name][1]
                    raise CatalogError(
                        f"Role {role.name!r} appears in both {other!r} and {group.name!r}"
                    )
                self._lookup[role.name] = (role, group.name)

    @classmethod
    def from_config(cls, config: Any) -> "RoleCatalog":
        """Build a catalog from stored JSON data.

        *config* is either the list of groups or a mapping with a
        ``groups`` key. ``None`` gives an empty catalog.

        Raises:
            CatalogError: the data is malformed or a role name is ambiguous.
        """
        if config is None:
            return cls([])
        if isinstance(config, Mapping):
            config = config.get("groups") or []
        if not isinstance(config, Sequence) or isinstance(config, (str, bytes)):
            raise CatalogError("Role config must be a list of groups")
        return cls([_parse_group(g) for g in config])

    def to_config(self) -> dict[str, Any]:
        """Return the JSON-compatible form accepted by :meth:`from_config`."""
        groups = []
        for group in self._groups.values():
            roles = []
            for role in group.roles:
                entry: dict[str, Any] = {
                    "name": role.display_name or role.name,
                    "primary_id": role.primary_id,
                }
                if role.secondary_id is not None:
                    entry["secondary_id"] = role.secondary_id
                roles.append(entry)
            group_entry: dict[str, Any] = {"name": group.name, "roles": roles}
            if group.limited:
                group_entry["limit"] = group.limit
            groups.append(group_entry)
        return {"groups": groups}

    def lookup(self, name: str) -> tuple[RoleDefinition, str] | None:
        return self._lookup.get(normalize_name(name))

    def groups(self) -> Iterator[RoleGroup]:
        return iter(self._groups.values())

    def group(self, name: str) -> RoleGroup:
        return self._groups[name]

    def tracked_role_ids(self) -> frozenset[int]:
        """Every role id managed through the catalog."""
        ids: set[int] = set()
        for group in self._groups.values():
            ids |= group.role_ids
        return frozenset(ids)

    def role_names(self) -> list[str]:
        return [role.display_name or role.name for role, _ in self._lookup.values()]

    def __len__(self) -> int:
        return len(self._lookup)

    def __bool__(self) -> bool:
        return bool(self._groups)
