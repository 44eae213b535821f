"""Human-readable reports for the /tiers, /preset and /budget commands."""

from __future__ import annotations

import logging

from tierlink.protocol.compiler import format_ratio
from tierlink.routing.cache import ConfigCache
from tierlink.routing.config import RouterConfig, TierConfig
from tierlink.routing.resolver import get_active_preset, get_default_tier, resolve_name
from tierlink.routing.state import StateStore

logger = logging.getLogger("tierlink.protocol.reports")


def _options_detail(tier: TierConfig) -> str:
    if tier.thinking is not None:
        budget = tier.thinking.budget_tokens
        return f" | thinking: {budget} tokens" if budget else " | thinking: default budget"
    if tier.reasoning is not None:
        return f" | reasoning: effort={tier.reasoning.effort or 'default'}"
    return ""


def build_tiers_report(cfg: RouterConfig) -> str:
    """List the active preset's tiers, the rules and the preset names."""
    preset_name, tiers = get_active_preset(cfg)
    lines = [
        "# Model Delegation Tiers",
        f"Active preset: **{preset_name}**",
    ]
    if cfg.active_mode:
        lines.append(f"Active mode: **{cfg.active_mode}**")
    lines.append("")

    for name, tier in tiers.items():
        variant = f" ({tier.variant})" if tier.variant else ""
        lines.append(f"## @{name} -> `{tier.model}`{variant}{_options_detail(tier)}")
        lines.append(tier.description)
        lines.append(f"Steps: {tier.steps if tier.steps is not None else 'default'}")
        if tier.cost_ratio is not None:
            lines.append(f"Cost: {format_ratio(tier.cost_ratio)}x")
        lines.append(f"Use when: {', '.join(tier.when_to_use)}")
        lines.append("")

    lines.append("## Delegation Rules")
    lines.extend(f"- {rule}" for rule in cfg.rules)
    lines.append("")
    lines.append(f"Default tier: @{get_default_tier(cfg)}")
    lines.append("")
    lines.append(f"Available presets: {', '.join(cfg.presets)}")
    lines.append("Switch with: `/preset <name>`")
    return "\n".join(lines)


def build_preset_report(
    cfg: RouterConfig, argument: str, state: StateStore, cache: ConfigCache
) -> str:
    """List presets, or switch to the one named by *argument*.

    A successful switch persists the preset and invalidates *cache* so the
    next compiled protocol uses it. Unknown names leave everything as is.
    """
    requested = argument.strip()
    active_name, _ = get_active_preset(cfg)

    if not requested:
        lines = ["# Available Presets", ""]
        for name, tiers in cfg.presets.items():
            marker = " <- active" if name == active_name else ""
            models = ", ".join(f"{tier}: {t.short_model}" for tier, t in tiers.items())
            lines.append(f"- **{name}**{marker}: {models}")
        lines.append("")
        lines.append("Switch with: `/preset <name>`")
        return "\n".join(lines)

    name = resolve_name(cfg.presets, requested)
    if name is None:
        return f'Unknown preset: "{requested}". Available: {", ".join(cfg.presets)}'

    try:
        state.write({"activePreset": name})
    except OSError as exc:
        logger.error("Failed to save preset '%s': %s", name, exc)
        return f"Failed to save preset {name}: {exc}"
    cache.invalidate()
    logger.info("Switched preset to '%s'", name)

    models = [f"  @{tier} -> {t.model}" for tier, t in cfg.presets[name].items()]
    return "\n".join([
        f"Preset switched to **{name}**.",
        "",
        *models,
        "",
        "Restart the host for agent registration to take effect.",
        "Delegation protocol updates immediately.",
    ])


def build_mode_report(
    cfg: RouterConfig, argument: str, state: StateStore, cache: ConfigCache
) -> str:
    """List routing modes, or switch to the one named by *argument*."""
    if not cfg.modes:
        return "No modes configured. Add a `modes` section to tiers.json to enable routing modes."

    requested = argument.strip()
    if not requested:
        lines = ["# Routing Modes", ""]
        for name, mode in cfg.modes.items():
            marker = " <- active" if name == cfg.active_mode else ""
            lines.append(
                f"- **{name}**{marker}: {mode.description} (default: @{mode.default_tier})"
            )
        lines.append("")
        lines.append("Switch with: `/budget <mode>`")
        return "\n".join(lines)

    name = resolve_name(cfg.modes, requested)
    if name is None:
        return f'Unknown mode: "{requested}". Available: {", ".join(cfg.modes)}'

    try:
        state.write({"activeMode": name})
    except OSError as exc:
        logger.error("Failed to save mode '%s': %s", name, exc)
        return f"Failed to save mode {name}: {exc}"
    cache.invalidate()
    logger.info("Switched mode to '%s'", name)

    mode = cfg.modes[name]
    lines = [
        f"Mode switched to **{name}**.",
        mode.description,
        f"Default tier: @{mode.default_tier}",
    ]
    if mode.override_rules:
        lines.append("")
        lines.append("Override rules:")
        lines.extend(f"{i}. {rule}" for i, rule in enumerate(mode.override_rules, start=1))
    return "\n".join(lines)
