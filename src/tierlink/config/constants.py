"""Paths and default values used across the project."""

from pathlib import Path

# Base directory for user-level tierlink data
TIERLINK_HOME = Path.home() / ".tierlink"

CONFIG_FILE = TIERLINK_HOME / "tiers.json"
STATE_FILE = TIERLINK_HOME / "state.json"
ENV_FILE = TIERLINK_HOME / ".env"

# Document shipped with the package, used when the user has none
DEFAULT_TIERS_FILE = Path(__file__).resolve().parent.parent / "data" / "tiers.json"

# Protocol rendering
TIER_SEPARATOR = " | "
CHEAPEST_TIER_HINT = "Always pick the cheapest tier that can do the job well."
LOG_PREFIX = "[tierlink]"

# Commands exposed to the host
CMD_TIERS = "tiers"
CMD_PRESET = "preset"
CMD_MODE = "budget"
CMD_ANNOTATE_PLAN = "annotate-plan"
