"""Collapse repeated or conflicting role actions from one message."""
from __future__ import annotations

import logging
from typing import Iterable

from .parser import RoleAction

log = logging.getLogger(f"rolebot.{__name__}")


def dedupe_actions(actions: Iterable[RoleAction]) -> list[RoleAction]:
    """Return at most one net action per role name, in message order.

    The first of several same-kind actions wins. An action followed by its
    opposite (``+red -red`` or ``-red +red``) cancels out and leaves
    nothing for that name, although a later third action starts over.
    """
    survivors: dict[str, RoleAction] = {}
    for action in actions:
        existing = survivors.get(action.role_name)
        if existing is None:
            survivors[action.role_name] = action
            continue
        log.debug("Duplicate role action %s, existing %s", action, existing)
        if existing.kind is action.kind.opposite:
            del survivors[action.role_name]
    return sorted(survivors.values(), key=lambda a: a.order_index)
