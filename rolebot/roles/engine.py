"""Single entry point turning a role channel message into a reply."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .catalog import RoleCatalog
from .dedup import dedupe_actions
from .errors import ParseError
from .parser import parse_command
from .reconciler import ReconcileStatus, ReconciliationResult, reconcile
from .summary import build_summary

log = logging.getLogger(f"rolebot.{__name__}")


@dataclass(frozen=True)
class RoleCommandOutcome:
    """What to reply and, when ``role_ids`` is set, what to commit.

    ``result`` is ``None`` only when the message had no role syntax and
    ``reply`` is the help text.
    """

    reply: str
    role_ids: frozenset[int] | None = None
    result: ReconciliationResult | None = None

    @property
    def is_help(self) -> bool:
        return self.result is None


def process_role_message(
    text: str, catalog: RoleCatalog, role_ids: Iterable[int]
) -> RoleCommandOutcome:
    try:
        command = parse_command(text)
    except ParseError as exc:
        log.debug("No role syntax in %r", text)
        return RoleCommandOutcome(str(exc))

    actions = dedupe_actions(command.actions)
    log.debug("Role actions %s deduplicated to %s", command.actions, actions)
    result = reconcile(role_ids, catalog, actions, reset=command.reset)
    reply = build_summary(result, catalog)
    if result.status is ReconcileStatus.NO_CHANGES:
        return RoleCommandOutcome(reply, None, result)
    return RoleCommandOutcome(reply, result.role_ids, result)
