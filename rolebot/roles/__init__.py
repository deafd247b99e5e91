"""Self-service role assignment.

Members post ``+role`` / ``-role`` / ``clear`` in a guild's role channel;
:func:`process_role_message` turns the text into the member's new role
ids and a reply. The package has no Discord or database state of its own;
:mod:`.store` and :mod:`.gateway` provide those collaborators.
"""
from .catalog import RoleCatalog, RoleDefinition, RoleGroup
from .dedup import dedupe_actions
from .engine import RoleCommandOutcome, process_role_message
from .errors import CatalogError, ParseError, RoleError
from .interfaces import GuildMembershipGateway, GuildRoleConfig, RoleConfigStore
from .parser import HELP_TEXT, ActionKind, ParsedCommand, RoleAction, parse_command
from .reconciler import (
    MembershipState,
    ReconcileStatus,
    ReconciliationResult,
    reconcile,
)
from .summary import (
    COMMIT_FAILED_TEXT,
    NO_CHANGES_TEXT,
    RESET_TEXT,
    build_summary,
    describe_catalog,
    usage_examples,
)

__all__ = [
    "ActionKind",
    "CatalogError",
    "COMMIT_FAILED_TEXT",
    "GuildMembershipGateway",
    "GuildRoleConfig",
    "HELP_TEXT",
    "MembershipState",
    "NO_CHANGES_TEXT",
    "ParseError",
    "ParsedCommand",
    "RESET_TEXT",
    "ReconcileStatus",
    "ReconciliationResult",
    "RoleAction",
    "RoleCatalog",
    "RoleCommandOutcome",
    "RoleConfigStore",
    "RoleDefinition",
    "RoleError",
    "RoleGroup",
    "build_summary",
    "dedupe_actions",
    "describe_catalog",
    "parse_command",
    "process_role_message",
    "reconcile",
    "usage_examples",
]
