"""Structural validation of the raw tier document.

Required fields are checked in a fixed order and the first failure raises
:class:`~tierlink.errors.ConfigError` naming the offending field path.
Optional fields are cleaned instead: anything malformed is dropped and
logged, never fatal. Names are not cross-checked here (``activePreset``
may point at a preset that does not exist); the resolver handles that.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from tierlink.errors import ConfigError
from tierlink.routing.config import (
    FallbackConfig,
    ModeConfig,
    Preset,
    ReasoningOptions,
    RouterConfig,
    ThinkingOptions,
    TierConfig,
)

logger = logging.getLogger("tierlink.routing.validator")

_REASONING_EFFORTS = {"low", "medium", "high"}
_REASONING_SUMMARIES = {"auto", "always", "never"}


def _is_object(value: Any) -> bool:
    return isinstance(value, dict)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _strings(value: Any) -> list[str]:
    """Keep only the string items of a list."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


# -- Required structure ------------------------------------------------------


def _check_tier(raw: Any, path: str) -> None:
    if not _is_object(raw):
        raise ConfigError(path, "tier must be an object")
    model = raw.get("model")
    if not isinstance(model, str) or not model:
        raise ConfigError(f"{path}.model", "must be a non-empty string")
    if not isinstance(raw.get("description"), str):
        raise ConfigError(f"{path}.description", "must be a string")
    if not isinstance(raw.get("whenToUse"), list):
        raise ConfigError(f"{path}.whenToUse", "must be an array")


def _check_required(doc: Any) -> None:
    if not _is_object(doc):
        raise ConfigError("$", "document root must be an object")

    active = doc.get("activePreset")
    if not isinstance(active, str) or not active:
        raise ConfigError("activePreset", "must be a non-empty string")

    presets = doc.get("presets")
    if not _is_object(presets):
        raise ConfigError("presets", "must be an object")
    for preset_name, tiers in presets.items():
        if not _is_object(tiers):
            raise ConfigError(f"presets.{preset_name}", "preset must be an object")
        for tier_name, tier in tiers.items():
            _check_tier(tier, f"presets.{preset_name}.{tier_name}")

    if not isinstance(doc.get("rules"), list):
        raise ConfigError("rules", "must be an array")
    if not isinstance(doc.get("defaultTier"), str):
        raise ConfigError("defaultTier", "must be a string")

    if "modes" in doc:
        modes = doc["modes"]
        if not _is_object(modes):
            raise ConfigError("modes", "must be an object")
        for mode_name, mode in modes.items():
            path = f"modes.{mode_name}"
            if not _is_object(mode):
                raise ConfigError(path, "mode must be an object")
            if not isinstance(mode.get("defaultTier"), str):
                raise ConfigError(f"{path}.defaultTier", "must be a string")
            if not isinstance(mode.get("description"), str):
                raise ConfigError(f"{path}.description", "must be a string")

    if "taskPatterns" in doc:
        patterns = doc["taskPatterns"]
        if not _is_object(patterns):
            raise ConfigError("taskPatterns", "must be an object")
        for tier_name, phrases in patterns.items():
            if not isinstance(phrases, list):
                raise ConfigError(f"taskPatterns.{tier_name}", "must be an array")


# -- Typed model construction -----------------------------------------------


def _build_options(raw: dict, path: str) -> ThinkingOptions | ReasoningOptions | None:
    thinking = raw.get("thinking")
    reasoning = raw.get("reasoning")

    if _is_object(thinking) and _is_object(reasoning):
        logger.warning("%s declares both thinking and reasoning; using thinking", path)

    if _is_object(thinking):
        budget = thinking.get("budgetTokens")
        if not isinstance(budget, int) or isinstance(budget, bool) or budget <= 0:
            budget = None
        return ThinkingOptions(budget_tokens=budget)

    if _is_object(reasoning):
        effort = reasoning.get("effort")
        summary = reasoning.get("summary")
        return ReasoningOptions(
            effort=effort if effort in _REASONING_EFFORTS else None,
            summary=summary if summary in _REASONING_SUMMARIES else None,
        )

    return None


def _cost_ratio(value: Any, path: str) -> float | None:
    """Finite float cost ratio, or None."""
    if value is None:
        return None
    if _is_number(value):
        try:
            ratio = float(value)
        except OverflowError:
            ratio = math.inf
        if math.isfinite(ratio):
            return ratio
    logger.debug("Dropping invalid %s.costRatio", path)
    return None


def _build_tier(raw: dict, path: str) -> TierConfig:
    variant = raw.get("variant")
    steps = raw.get("steps")
    prompt = raw.get("prompt")
    color = raw.get("color")

    cost_ratio = _cost_ratio(raw.get("costRatio"), path)
    if steps is not None and (
        not isinstance(steps, int) or isinstance(steps, bool) or steps <= 0
    ):
        logger.debug("Dropping invalid %s.steps", path)
        steps = None

    return TierConfig(
        model=raw["model"],
        description=raw["description"],
        when_to_use=_strings(raw["whenToUse"]),
        variant=variant if isinstance(variant, str) and variant else None,
        options=_build_options(raw, path),
        cost_ratio=cost_ratio,
        steps=steps,
        prompt=prompt if isinstance(prompt, str) and prompt else None,
        color=color if isinstance(color, str) and color else None,
    )


def _build_provider_map(raw: Any) -> dict[str, list[str]]:
    if not _is_object(raw):
        return {}
    return {
        provider: _strings(names)
        for provider, names in raw.items()
        if isinstance(names, list)
    }


def _build_fallback(raw: Any) -> FallbackConfig | None:
    if not _is_object(raw):
        if raw is not None:
            logger.debug("Ignoring malformed fallback section")
        return None

    overrides = raw.get("presets")
    return FallbackConfig(
        providers=_build_provider_map(raw.get("global")),
        preset_overrides={
            preset: _build_provider_map(mapping)
            for preset, mapping in (overrides.items() if _is_object(overrides) else [])
            if _is_object(mapping)
        },
    )


def validate_config(doc: Any) -> RouterConfig:
    """Validate a decoded tier document and return the typed configuration.

    The returned config has no active mode; persisted state is applied on
    top by the cache (see :func:`tierlink.routing.resolver.apply_state`).

    Raises:
        ConfigError: on the first structural problem found.
    """
    _check_required(doc)

    presets: dict[str, Preset] = {
        preset_name: {
            tier_name: _build_tier(tier, f"presets.{preset_name}.{tier_name}")
            for tier_name, tier in tiers.items()
        }
        for preset_name, tiers in doc["presets"].items()
    }

    modes = {
        name: ModeConfig(
            default_tier=mode["defaultTier"],
            description=mode["description"],
            override_rules=_strings(mode.get("overrideRules")),
        )
        for name, mode in (doc.get("modes") or {}).items()
    }

    return RouterConfig(
        active_preset=doc["activePreset"],
        presets=presets,
        rules=_strings(doc["rules"]),
        default_tier=doc["defaultTier"],
        modes=modes,
        task_patterns={
            tier: _strings(phrases)
            for tier, phrases in (doc.get("taskPatterns") or {}).items()
        },
        fallback=_build_fallback(doc.get("fallback")),
    )
