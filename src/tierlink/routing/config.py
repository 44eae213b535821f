"""Router configuration models.

These are the typed, already-validated shapes. Raw JSON never reaches them
directly; :mod:`tierlink.routing.validator` checks the document first and
builds these models from the cleaned values.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

ReasoningEffort = Literal["low", "medium", "high"]
ReasoningSummary = Literal["auto", "always", "never"]


class ThinkingOptions(BaseModel):
    """Anthropic-style extended thinking."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["thinking"] = "thinking"
    budget_tokens: int | None = None


class ReasoningOptions(BaseModel):
    """OpenAI-style reasoning settings."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["reasoning"] = "reasoning"
    effort: ReasoningEffort | None = None
    summary: ReasoningSummary | None = None


ProviderOptions = Annotated[ThinkingOptions | ReasoningOptions, Field(discriminator="kind")]


class TierConfig(BaseModel):
    """One delegation target within a preset."""

    model_config = ConfigDict(frozen=True)

    model: str
    description: str
    when_to_use: list[str] = Field(default_factory=list)
    variant: str | None = None
    options: ProviderOptions | None = None
    cost_ratio: float | None = None
    steps: int | None = None
    prompt: str | None = None
    color: str | None = None

    @property
    def short_model(self) -> str:
        """Last ``/``-separated segment of the model id."""
        return self.model.rsplit("/", 1)[-1]

    @property
    def thinking(self) -> ThinkingOptions | None:
        return self.options if isinstance(self.options, ThinkingOptions) else None

    @property
    def reasoning(self) -> ReasoningOptions | None:
        return self.options if isinstance(self.options, ReasoningOptions) else None


# Tier name -> tier, insertion order is display order
Preset = dict[str, TierConfig]


class ModeConfig(BaseModel):
    """A named routing policy.

    A non-empty ``override_rules`` replaces the global rules while the mode
    is active.
    """

    model_config = ConfigDict(frozen=True)

    default_tier: str
    description: str
    override_rules: list[str] = Field(default_factory=list)


class FallbackConfig(BaseModel):
    """Provider -> ordered preset names to try when that provider fails."""

    model_config = ConfigDict(frozen=True)

    providers: dict[str, list[str]] = Field(default_factory=dict)
    preset_overrides: dict[str, dict[str, list[str]]] = Field(default_factory=dict)


class RouterConfig(BaseModel):
    """Effective configuration: document merged with persisted overrides."""

    model_config = ConfigDict(frozen=True)

    active_preset: str
    presets: dict[str, Preset]
    rules: list[str]
    default_tier: str
    active_mode: str | None = None
    modes: dict[str, ModeConfig] = Field(default_factory=dict)
    task_patterns: dict[str, list[str]] = Field(default_factory=dict)
    fallback: FallbackConfig | None = None


class RouterState(BaseModel):
    """Persisted override record (``state.json``)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    active_preset: str | None = Field(default=None, alias="activePreset")
    active_mode: str | None = Field(default=None, alias="activeMode")
