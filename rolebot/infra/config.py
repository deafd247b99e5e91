"""Centralized configuration for cogs and components."""
from __future__ import annotations

from dataclasses import dataclass, field

from ..util import bool_env, float_env


@dataclass(frozen=True)
class RolesConfig:
    """Timing and cleanup behaviour for the role channel."""

    # Seconds before the member's command and the bot's reply are deleted
    reply_delete_seconds: float = 10.0
    # Seconds before a command that failed to process is deleted
    error_delete_seconds: float = 5.0
    delete_messages: bool = True

    @classmethod
    def from_env(cls) -> "RolesConfig":
        """Create config from environment variables."""
        return cls(
            reply_delete_seconds=max(0.0, float_env("ROLE_REPLY_DELETE_SECONDS", 10.0)),
            error_delete_seconds=max(0.0, float_env("ROLE_ERROR_DELETE_SECONDS", 5.0)),
            delete_messages=bool_env("ROLE_DELETE_MESSAGES", True),
        )


@dataclass
class CogConfig:
    """Container for all cog configurations.

    Instantiated once and handed to cogs so tests can inject their own
    values instead of patching the environment.
    """

    roles: RolesConfig = field(default_factory=RolesConfig.from_env)

    @classmethod
    def from_env(cls) -> "CogConfig":
        """Create all configs from environment variables."""
        return cls(roles=RolesConfig.from_env())


# Global default configuration instance
_default_config: CogConfig | None = None


def get_config() -> CogConfig:
    """Return the global configuration instance.

    Creates the configuration on first access so environment variables
    are read lazily.
    """
    global _default_config
    if _default_config is None:
        _default_config = CogConfig.from_env()
    return _default_config


def set_config(config: CogConfig) -> None:
    """Set the global configuration instance."""
    global _default_config
    _default_config = config


def reset_config() -> None:
    """Reset the global configuration to reload from environment."""
    global _default_config
    _default_config = None
