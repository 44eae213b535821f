"""Shared test fixtures."""

from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest

from tierlink.routing.cache import ConfigCache
from tierlink.routing.state import StateStore

SAMPLE_DOC: dict = {
    "activePreset": "anthropic",
    "defaultTier": "medium",
    "presets": {
        "anthropic": {
            "fast": {
                "model": "anthropic/claude-haiku",
                "description": "Cheap exploration",
                "costRatio": 1,
                "steps": 20,
                "whenToUse": ["search", "file reads"],
            },
            "medium": {
                "model": "anthropic/claude-sonnet",
                "description": "Implementation",
                "costRatio": 5,
                "whenToUse": ["implementation", "tests"],
            },
            "heavy": {
                "model": "anthropic/claude-opus",
                "variant": "max",
                "thinking": {"budgetTokens": 16000},
                "costRatio": 20,
                "description": "Hard problems",
                "whenToUse": [],
            },
        },
        "openai": {
            "fast": {
                "model": "openai/gpt-mini",
                "reasoning": {"effort": "low"},
                "description": "Cheap exploration",
                "whenToUse": ["search"],
            },
            "heavy": {
                "model": "openai/gpt-pro",
                "reasoning": {"effort": "high", "summary": "auto"},
                "description": "Hard problems",
                "whenToUse": ["architecture"],
            },
        },
    },
    "rules": ["Global rule one", "Global rule two"],
    "modes": {
        "normal": {"defaultTier": "medium", "description": "Balanced"},
        "budget": {
            "defaultTier": "fast",
            "description": "Minimise cost",
            "overrideRules": ["R1", "R2"],
        },
    },
    "taskPatterns": {
        "fast": ["find definitions", "list files"],
        "heavy": ["design a subsystem"],
    },
    "fallback": {
        "global": {"anthropic": ["anthropic", "ghost", "openai"]},
    },
}


@pytest.fixture
def sample_doc() -> dict:
    """A fresh, mutable copy of the sample tier document."""
    return copy.deepcopy(SAMPLE_DOC)


@pytest.fixture
def write_doc(tmp_path: Path):
    """Write a document to ``tmp_path/tiers.json`` and return the path."""

    def _write(doc: dict) -> Path:
        path = tmp_path / "tiers.json"
        path.write_text(json.dumps(doc), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def tiers_path(write_doc, sample_doc) -> Path:
    return write_doc(sample_doc)


@pytest.fixture
def state_store(tmp_path: Path) -> StateStore:
    return StateStore(path=tmp_path / "state" / "state.json")


@pytest.fixture
def cache(tiers_path: Path, state_store: StateStore) -> ConfigCache:
    return ConfigCache(tiers_path, state_store)
