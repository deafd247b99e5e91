"""Human-readable text for role channel replies and catalog listings."""
from __future__ import annotations

from typing import Iterable

from .catalog import RoleCatalog
from .reconciler import ReconcileStatus, ReconciliationResult

RESET_TEXT = "Your roles have been reset."
NO_CHANGES_TEXT = "Couldn't modify your roles"
COMMIT_FAILED_TEXT = "Failed to modify your roles :("


def code_list(names: Iterable[str]) -> str:
    """Return ``names`` as backtick-quoted, comma-separated text."""
    return ", ".join(f"`{name}`" for name in names)


def build_summary(result: ReconciliationResult, catalog: RoleCatalog) -> str:
    if result.status is ReconcileStatus.RESET:
        return RESET_TEXT
    if result.status is ReconcileStatus.NO_CHANGES:
        return NO_CHANGES_TEXT

    lines: list[str] = []
    if result.added:
        lines.append(f"Added roles: {code_list(result.added)}")
    if result.removed:
        lines.append(f"Removed roles: {code_list(result.removed)}")
    if result.over_limit:
        lines.append("Cannot add roles that exceed role group limits:")
        for group_name, names in result.over_limit.items():
            limit = catalog.group(group_name).limit
            lines.append(
                f"{code_list(names)} ({group_name} group has a limit of {limit} roles)"
            )
    if result.unknown:
        lines.append(f"Unknown roles: {code_list(result.unknown)}")
    return "\n".join(lines)


def describe_catalog(catalog: RoleCatalog) -> str:
    """Render the role groups for ``/roles show``."""
    if not catalog:
        return "No role groups are configured."
    blocks = []
    for group in catalog.groups():
        lines = [f"> **{group.name}**"]
        if group.limited:
            lines.append(f"> Limit: `{group.limit}`")
        lines.append(
            f"> Roles: {code_list(r.display_name or r.name for r in group.roles)}"
        )
        blocks.append("\n".join(lines))
    return "**Role Groups**\n" + "\n\n".join(blocks)


def usage_examples(catalog: RoleCatalog) -> str:
    """Example commands built from the first two configured roles.

    Returns an empty string when fewer than two roles exist.
    """
    names = catalog.role_names()[:2]
    if len(names) < 2:
        return ""
    first, second = names
    return (
        f"Adding a single role: `+{first}`\n"
        f"Removing a single role: `-{first}`\n"
        f"Adding multiple roles: `+{first} +{second}`\n"
        f"Adding and removing multiple roles `+{first} -{second}`"
    )
