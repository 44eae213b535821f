"""Tier routing: configuration, state overrides and name resolution."""

from tierlink.routing.cache import ConfigCache
from tierlink.routing.config import ModeConfig, RouterConfig, RouterState, TierConfig
from tierlink.routing.resolver import get_active_preset, resolve_name
from tierlink.routing.state import StateStore
from tierlink.routing.validator import validate_config

__all__ = [
    "ConfigCache",
    "ModeConfig",
    "RouterConfig",
    "RouterState",
    "StateStore",
    "TierConfig",
    "get_active_preset",
    "resolve_name",
    "validate_config",
]
