"""Tests for fallback chain derivation."""

from __future__ import annotations

from tierlink.routing.fallback import build_fallback_chain
from tierlink.routing.validator import validate_config


def test_filters_self_and_unknown(sample_doc):
    cfg = validate_config(sample_doc)
    assert build_fallback_chain(cfg, "anthropic") == [("anthropic", ["openai"])]


def test_no_fallback_section(sample_doc):
    del sample_doc["fallback"]
    assert build_fallback_chain(validate_config(sample_doc), "anthropic") == []


def test_provider_dropped_when_list_empties(sample_doc):
    sample_doc["fallback"]["global"]["openai"] = ["openai", "ghost"]
    chain = build_fallback_chain(validate_config(sample_doc), "openai")
    assert chain == [("anthropic", ["anthropic"])]


def test_preset_override_replaces_global(sample_doc):
    sample_doc["fallback"]["presets"] = {"anthropic": {"bedrock": ["openai"]}}
    chain = build_fallback_chain(validate_config(sample_doc), "anthropic")
    assert chain == [("bedrock", ["openai"])]


def test_empty_preset_override_uses_global(sample_doc):
    sample_doc["fallback"]["presets"] = {"anthropic": {}}
    chain = build_fallback_chain(validate_config(sample_doc), "anthropic")
    assert chain == [("anthropic", ["openai"])]


def test_order_preserved(sample_doc):
    sample_doc["presets"]["google"] = {
        "fast": {"model": "google/flash", "description": "", "whenToUse": []},
    }
    sample_doc["fallback"]["global"] = {"any": ["google", "anthropic", "openai"]}
    chain = build_fallback_chain(validate_config(sample_doc), "anthropic")
    assert chain == [("any", ["google", "openai"])]
