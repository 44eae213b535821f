"""Fallback chain derivation for the active preset."""

from __future__ import annotations

import logging

from tierlink.routing.config import RouterConfig

logger = logging.getLogger("tierlink.routing.fallback")


def build_fallback_chain(
    cfg: RouterConfig, active_preset: str
) -> list[tuple[str, list[str]]]:
    """Return ``(provider, presets)`` pairs to try when a provider fails.

    A non-empty per-preset override for *active_preset* replaces the global
    map. Each list drops the active preset itself and any name that is not
    a configured preset, keeping the original order; providers left with
    nothing are omitted.
    """
    if cfg.fallback is None:
        return []

    mapping = cfg.fallback.preset_overrides.get(active_preset) or cfg.fallback.providers

    chain: list[tuple[str, list[str]]] = []
    for provider, names in mapping.items():
        kept: list[str] = []
        for name in names:
            if name == active_preset:
                continue
            if name not in cfg.presets:
                logger.debug("Dropping unknown fallback preset '%s' (%s)", name, provider)
                continue
            kept.append(name)
        if kept:
            chain.append((provider, kept))
    return chain
