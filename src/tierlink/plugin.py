"""Host-facing entry points: agent registration, protocol injection, commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from tierlink.commands import COMMANDS
from tierlink.config.constants import LOG_PREFIX
from tierlink.errors import ConfigError
from tierlink.protocol.compiler import compile_protocol
from tierlink.routing.cache import ConfigCache
from tierlink.routing.config import TierConfig
from tierlink.routing.resolver import get_active_tiers
from tierlink.routing.state import StateStore

if TYPE_CHECKING:
    from tierlink.config.settings import Settings

logger = logging.getLogger("tierlink.plugin")


def build_agent_options(tier: TierConfig) -> dict[str, Any]:
    """Map a tier's thinking/reasoning settings to provider options."""
    opts: dict[str, Any] = {}
    if tier.thinking is not None and tier.thinking.budget_tokens:
        opts["budget_tokens"] = tier.thinking.budget_tokens
    if tier.reasoning is not None:
        if tier.reasoning.effort:
            opts["reasoning_effort"] = tier.reasoning.effort
        if tier.reasoning.summary:
            opts["reasoning_summary"] = tier.reasoning.summary
    return opts


def build_agent_definition(tier: TierConfig) -> dict[str, Any]:
    """Subagent definition for one tier, leaving unset fields out."""
    agent: dict[str, Any] = {
        "model": tier.model,
        "mode": "subagent",
        "description": tier.description,
    }
    if tier.steps is not None:
        agent["steps"] = tier.steps
    if tier.prompt:
        agent["prompt"] = tier.prompt
    if tier.color:
        agent["color"] = tier.color
    if tier.variant:
        agent["variant"] = tier.variant
    opts = build_agent_options(tier)
    if opts:
        agent["options"] = opts
    return agent


class ModelRouterPlugin:
    """Wires the cache, the state store and the command handlers together.

    The host calls :meth:`register_agents` and :meth:`register_commands` once
    at start-up, :meth:`compile_protocol` on every turn and
    :meth:`handle_command` for each user command. None of them raise: when
    no configuration has ever loaded, they return a one-line error.
    """

    def __init__(self, cache: ConfigCache, state: StateStore) -> None:
        self._cache = cache
        self._state = state

    @classmethod
    def from_settings(cls, settings: Settings) -> ModelRouterPlugin:
        state = StateStore(path=settings.state_path)
        plugin = cls(ConfigCache(settings.tiers_path, state), state)
        try:
            plugin._cache.get()
        except ConfigError as exc:
            logger.error("Could not load %s: %s", settings.tiers_path, exc)
        return plugin

    @property
    def cache(self) -> ConfigCache:
        return self._cache

    @property
    def state(self) -> StateStore:
        return self._state

    def register_agents(self) -> dict[str, dict[str, Any]]:
        """One subagent per tier of the active preset."""
        try:
            cfg = self._cache.get()
        except ConfigError as exc:
            logger.error("No agents registered: %s", exc)
            return {}
        return {name: build_agent_definition(tier) for name, tier in get_active_tiers(cfg).items()}

    def register_commands(self) -> dict[str, dict[str, str]]:
        return {
            name: {"template": cmd.template, "description": cmd.description}
            for name, cmd in COMMANDS.items()
        }

    def compile_protocol(self) -> str:
        try:
            cfg = self._cache.get()
        except ConfigError as exc:
            return _error_line(exc)
        return compile_protocol(cfg)

    def handle_command(self, name: str, argument: str = "") -> str | None:
        """Run a report command; returns None for commands not owned here."""
        cmd = COMMANDS.get(name)
        if cmd is None or cmd.handler is None:
            return None

        try:
            cfg = self._cache.get()
        except ConfigError as exc:
            return _error_line(exc)

        argument = argument or ""
        if cmd.lowercase_argument:
            argument = argument.strip().lower()
        return cmd.handler(cfg, argument, self._state, self._cache)


def _error_line(exc: ConfigError) -> str:
    return f"{LOG_PREFIX} configuration error: {exc}"
