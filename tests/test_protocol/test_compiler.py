"""Tests for the delegation protocol compiler."""

from __future__ import annotations

from tierlink.protocol.compiler import compile_protocol, format_ratio
from tierlink.routing.config import RouterState
from tierlink.routing.resolver import apply_state
from tierlink.routing.validator import validate_config


def _compile(doc, **state) -> str:
    return compile_protocol(apply_state(validate_config(doc), RouterState(**state)))


def _minimal_doc() -> dict:
    return {
        "activePreset": "anthropic",
        "defaultTier": "medium",
        "rules": ["Delegate"],
        "presets": {
            "anthropic": {
                "fast": {"model": "a/h", "description": "d1", "whenToUse": ["x"]},
                "medium": {"model": "a/s", "description": "d2", "whenToUse": ["y"]},
                "heavy": {"model": "a/o", "description": "d3", "whenToUse": ["z"]},
            },
        },
    }


class TestTierSummary:
    def test_short_model_names(self):
        assert "@fast=h | @medium=s | @heavy=o" in _compile(_minimal_doc())

    def test_variant_suffix(self, sample_doc):
        out = _compile(sample_doc)
        assert "@heavy=claude-opus(max)" in out

    def test_preset_name_shown(self, sample_doc):
        assert "preset=anthropic" in _compile(sample_doc)

    def test_unknown_active_preset_uses_first(self, sample_doc):
        sample_doc["activePreset"] = "missing"
        out = _compile(sample_doc)
        assert "preset=anthropic" in out
        assert "@fast=claude-haiku" in out


class TestBlocks:
    def test_capabilities_fall_back_to_description(self, sample_doc):
        out = _compile(sample_doc)
        assert "@fast: search, file reads" in out
        assert "@heavy: Hard problems" in out

    def test_task_patterns(self, sample_doc):
        out = _compile(sample_doc)
        assert "Task patterns:\n@fast: find definitions, list files\n@heavy: design a subsystem" in out

    def test_task_patterns_omitted_when_empty(self, sample_doc):
        sample_doc["taskPatterns"] = {"fast": [], "heavy": []}
        assert "Task patterns:" not in _compile(sample_doc)

    def test_cost_line(self, sample_doc):
        out = _compile(sample_doc)
        assert "Cost: @fast=1x @medium=5x @heavy=20x." in out

    def test_cost_line_omitted(self):
        assert "Cost:" not in _compile(_minimal_doc())

    def test_mode_line(self, sample_doc):
        assert "Mode: budget (Minimise cost)" in _compile(sample_doc, activeMode="budget")
        assert "Mode:" not in _compile(sample_doc)

    def test_global_rules_numbered(self, sample_doc):
        assert "Rules:\n1. Global rule one\n2. Global rule two" in _compile(sample_doc)

    def test_fallback_block_filters(self, sample_doc):
        out = _compile(sample_doc)
        assert "anthropic: openai" in out
        assert "ghost" not in out
        assert "anthropic: anthropic" not in out

    def test_fallback_omitted(self):
        assert "Fallback" not in _compile(_minimal_doc())

    def test_closing_names_default_tier(self, sample_doc):
        assert "Default tier: @medium." in _compile(sample_doc)
        assert "Default tier: @fast." in _compile(sample_doc, activeMode="budget")

    def test_no_residual_blank_lines(self):
        out = _compile(_minimal_doc())
        assert "\n\n\n" not in out
        assert not out.startswith("\n")
        assert not out.endswith("\n")

    def test_empty_rules_omitted(self):
        doc = _minimal_doc()
        doc["rules"] = []
        out = _compile(doc)
        assert "Rules:" not in out
        assert "\n\n\n" not in out


class TestModeOverrides:
    def test_override_rules_replace_global(self, sample_doc):
        out = _compile(sample_doc, activeMode="budget")
        assert "Rules:\n1. R1\n2. R2\n\n" in out
        assert "Global rule" not in out

    def test_mode_without_overrides_keeps_global(self, sample_doc):
        out = _compile(sample_doc, activeMode="normal")
        assert "1. Global rule one" in out


def test_deterministic(sample_doc):
    cfg = validate_config(sample_doc)
    assert compile_protocol(cfg) == compile_protocol(cfg)


def test_format_ratio():
    assert format_ratio(5.0) == "5"
    assert format_ratio(0.25) == "0.25"
