"""Preset and mode name resolution."""

from __future__ import annotations

from collections.abc import Iterable

from tierlink.routing.config import Preset, RouterConfig, RouterState


def resolve_name(candidates: Iterable[str], requested: str | None) -> str | None:
    """Return the candidate key matching *requested*, or None.

    An exact match always wins. Otherwise the first candidate whose
    lowercased form equals the trimmed, lowercased request is returned, so
    two keys differing only by case never shadow an exact hit.
    """
    if not requested:
        return None
    keys = list(candidates)
    if requested in keys:
        return requested

    wanted = requested.strip().lower()
    if not wanted:
        return None
    for key in keys:
        if key.lower() == wanted:
            return key
    return None


def apply_state(cfg: RouterConfig, state: RouterState) -> RouterConfig:
    """Overlay the persisted override record onto a validated document.

    A state preset that resolves replaces ``activePreset``; one that does not
    is ignored. The document has no default mode, so an unresolvable state
    mode simply leaves no mode active.
    """
    updates: dict[str, str | None] = {}

    preset = resolve_name(cfg.presets, state.active_preset)
    if preset is not None:
        updates["active_preset"] = preset

    if state.active_mode:
        updates["active_mode"] = resolve_name(cfg.modes, state.active_mode)

    return cfg.model_copy(update=updates) if updates else cfg


def get_active_preset(cfg: RouterConfig) -> tuple[str, Preset]:
    """Return ``(name, tiers)`` of the preset actually in effect.

    Falls back to the first preset in document order when ``active_preset``
    does not name one. Returns ``("", {})`` for a document with no presets.
    """
    tiers = cfg.presets.get(cfg.active_preset)
    if tiers is not None:
        return cfg.active_preset, tiers
    for name, tiers in cfg.presets.items():
        return name, tiers
    return "", {}


def get_active_tiers(cfg: RouterConfig) -> Preset:
    return get_active_preset(cfg)[1]


def get_default_tier(cfg: RouterConfig) -> str:
    """Default tier of the active mode, else the document's default tier."""
    mode = cfg.modes.get(cfg.active_mode) if cfg.active_mode else None
    return mode.default_tier if mode is not None else cfg.default_tier
