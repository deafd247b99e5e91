"""Exceptions raised by the role assignment engine."""
from __future__ import annotations


class RoleError(Exception):
    """Base class for role assignment errors."""


class ParseError(RoleError):
    """Message contains neither role actions nor a reset keyword.

    ``str(exc)`` is the help text to show the member.
    """


class CatalogError(RoleError):
    """Role configuration is malformed or ambiguous."""
