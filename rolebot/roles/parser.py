"""Tokenizer for role channel messages.

A message is either the reset keyword (``clear`` / ``reset``) or a run of
``+role name`` / ``-role name`` tokens::

    >>> [(a.kind.value, a.role_name) for a in parse_command("+Red -big blue").actions]
    [('+', 'red'), ('-', 'big blue')]
"""
from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from enum import Enum

from .errors import ParseError

RESET_KEYWORDS = frozenset({"clear", "reset"})

HELP_TEXT = (
    "You can add a role with `+role name` or remove a role with `-role name`.  "
    "Use `clear` or `reset` to remove all roles"
)


class ActionKind(str, Enum):
    ADD = "+"
    REMOVE = "-"

    @property
    def opposite(self) -> "ActionKind":
        return ActionKind.REMOVE if self is ActionKind.ADD else ActionKind.ADD


@dataclass(frozen=True)
class RoleAction:
    """One add/remove intent taken from a message."""

    order_index: int
    kind: ActionKind
    role_name: str


@dataclass(frozen=True)
class ParsedCommand:
    reset: bool = False
    actions: list[RoleAction] = field(default_factory=list)


def normalize_name(name: str) -> str:
    """Return the lookup key for a role name."""
    return name.strip().lower()


def _is_name_char(ch: str) -> bool:
    # word characters (letters, marks, digits, connectors) plus plain spaces
    if ch == " ":
        return True
    category = unicodedata.category(ch)
    return category[0] in "LMN" or category == "Pc"


def scan_actions(text: str) -> list[RoleAction]:
    """Scan *text* for sign-prefixed role names.

    A sign must be followed directly by at least one permitted character.
    Names that are blank once trimmed are skipped without consuming an
    index, so ``order_index`` always counts emitted actions.
    """
    actions: list[RoleAction] = []
    pos = 0
    length = len(text)
    while pos < length:
        sign = text[pos]
        if sign not in ("+", "-"):
            pos += 1
            continue
        end = pos + 1
        while end < length and _is_name_char(text[end]):
            end += 1
        name = normalize_name(text[pos + 1 : end])
        if name:
            actions.append(RoleAction(len(actions), ActionKind(sign), name))
        pos = max(end, pos + 1)
    return actions


def parse_command(text: str) -> ParsedCommand:
    """Parse a role channel message.

    Raises:
        ParseError: the message is neither a reset nor contains any
            ``+name`` / ``-name`` token.
    """
    if text.strip().lower() in RESET_KEYWORDS:
        return ParsedCommand(reset=True)
    actions = scan_actions(text)
    if not actions:
        raise ParseError(HELP_TEXT)
    return ParsedCommand(actions=actions)
