"""Compile the effective configuration into the delegation protocol.

The protocol is injected into the agent's system context on every turn, so
it is kept dense: one block per concern, blank lines between blocks, and
optional blocks left out entirely when they have nothing to say.
"""

from __future__ import annotations

from tierlink.config.constants import CHEAPEST_TIER_HINT, TIER_SEPARATOR
from tierlink.routing.config import Preset, RouterConfig
from tierlink.routing.fallback import build_fallback_chain
from tierlink.routing.resolver import get_active_preset, get_default_tier


def format_ratio(ratio: float) -> str:
    """``5.0`` -> ``"5"``, ``0.25`` -> ``"0.25"``."""
    return f"{ratio:g}"


def _tier_summary(preset_name: str, tiers: Preset) -> str:
    entries = []
    for name, tier in tiers.items():
        variant = f"({tier.variant})" if tier.variant else ""
        entries.append(f"@{name}={tier.short_model}{variant}")
    return "\n".join([
        f"[Model Router] preset={preset_name}",
        f"Tiers: {TIER_SEPARATOR.join(entries)}",
    ])


def _capability_block(tiers: Preset) -> str:
    lines = ["Use:"]
    for name, tier in tiers.items():
        uses = ", ".join(tier.when_to_use) if tier.when_to_use else tier.description
        lines.append(f"@{name}: {uses}")
    return "\n".join(lines)


def _taxonomy_block(task_patterns: dict[str, list[str]]) -> str | None:
    rows = [
        f"@{tier}: {', '.join(phrases)}"
        for tier, phrases in task_patterns.items()
        if phrases
    ]
    if not rows:
        return None
    return "\n".join(["Task patterns:", *rows])


def _cost_line(tiers: Preset) -> str | None:
    pairs = [
        f"@{name}={format_ratio(tier.cost_ratio)}x"
        for name, tier in tiers.items()
        if tier.cost_ratio is not None
    ]
    if not pairs:
        return None
    return f"Cost: {' '.join(pairs)}. {CHEAPEST_TIER_HINT}"


def _mode_line(cfg: RouterConfig) -> str | None:
    mode = cfg.modes.get(cfg.active_mode) if cfg.active_mode else None
    if mode is None:
        return None
    return f"Mode: {cfg.active_mode} ({mode.description})"


def _rule_block(cfg: RouterConfig) -> str | None:
    mode = cfg.modes.get(cfg.active_mode) if cfg.active_mode else None
    rules = mode.override_rules if mode is not None and mode.override_rules else cfg.rules
    if not rules:
        return None
    return "\n".join(["Rules:", *(f"{i}. {rule}" for i, rule in enumerate(rules, start=1))])


def _fallback_block(chain: list[tuple[str, list[str]]]) -> str | None:
    if not chain:
        return None
    lines = ["Fallback (provider error -> retry with preset):"]
    for provider, presets in chain:
        lines.append(f"{provider}: {' -> '.join(presets)}")
    return "\n".join(lines)


def _closing_block(default_tier: str) -> str:
    return "\n".join([
        'Delegate with Task(subagent_type="<tier>", prompt="<self-contained task>").',
        f"Default tier: @{default_tier}.",
        "Orchestration stays local: plan, split work, merge results and answer the user yourself.",
    ])


def compile_protocol(cfg: RouterConfig) -> str:
    """Render *cfg* into the delegation protocol string.

    Pure and deterministic: identical configs give byte-identical output.
    """
    preset_name, tiers = get_active_preset(cfg)

    blocks = [
        _tier_summary(preset_name, tiers),
        _capability_block(tiers),
        _taxonomy_block(cfg.task_patterns),
        _cost_line(tiers),
        _mode_line(cfg),
        _rule_block(cfg),
        _fallback_block(build_fallback_chain(cfg, preset_name)),
        _closing_block(get_default_tier(cfg)),
    ]
    return "\n\n".join(block for block in blocks if block)
