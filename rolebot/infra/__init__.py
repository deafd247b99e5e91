"""Infrastructure utilities for rolebot."""
from .cog_base import PoolAwareCog, log_errors
from .config import CogConfig, RolesConfig, get_config, reset_config, set_config
from .logging import structured_log

__all__ = [
    # Cog base classes
    "PoolAwareCog",
    "log_errors",
    # Configuration
    "CogConfig",
    "RolesConfig",
    "get_config",
    "reset_config",
    "set_config",
    # Logging
    "structured_log",
]
