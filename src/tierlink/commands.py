"""Host command registry: templates, descriptions and report handlers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from tierlink.config.constants import CMD_ANNOTATE_PLAN, CMD_MODE, CMD_PRESET, CMD_TIERS
from tierlink.protocol.reports import (
    build_mode_report,
    build_preset_report,
    build_tiers_report,
)
from tierlink.routing.cache import ConfigCache
from tierlink.routing.config import RouterConfig
from tierlink.routing.state import StateStore

Handler = Callable[[RouterConfig, str, StateStore, ConfigCache], str]


@dataclass(frozen=True)
class RouterCommand:
    """A command registered with the host.

    Commands without a handler are pure templates: the host expands them
    into the conversation and the agent does the work.
    """

    name: str
    description: str
    template: str
    handler: Handler | None = None
    lowercase_argument: bool = False


def _tiers(cfg: RouterConfig, argument: str, state: StateStore, cache: ConfigCache) -> str:
    return build_tiers_report(cfg)


_ANNOTATE_PLAN_TEMPLATE = "\n".join([
    "Annotate the plan with tier directives for model delegation.",
    "",
    'Plan file: "$ARGUMENTS"',
    "If no file was specified, look for the active plan: PLAN.md, plan.md, or the most "
    "recent .md with 'plan' in its name in the current directory or project root.",
    "",
    "## Available tiers",
    "- `[tier:fast]` - cheap model: exploration, search, file reads, listing, research. Does NOT edit code.",
    "- `[tier:medium]` - balanced model: implementation, refactoring, tests, bug fixes.",
    "- `[tier:heavy]` - most capable model: architecture, hard debugging, security, performance.",
    "",
    "## Annotation rules",
    "1. Put `[tier:X]` at the START of each step",
    "2. Research/exploration -> `[tier:fast]`",
    "3. Implementation/code -> `[tier:medium]`",
    "4. Architecture/security/hard debugging -> `[tier:heavy]`",
    "5. Split steps that mix exploration and implementation into two steps",
    "6. Verification (run tests, build) -> `[tier:medium]`",
    "7. Final review of the complete plan -> `[tier:heavy]`",
    "",
    "## Output",
    "Rewrite the plan file with the tags. Only add tags and split mixed steps; keep the substance.",
])


COMMANDS: dict[str, RouterCommand] = {
    cmd.name: cmd
    for cmd in (
        RouterCommand(
            name=CMD_TIERS,
            description="Show model delegation tiers and rules",
            template="",
            handler=_tiers,
        ),
        RouterCommand(
            name=CMD_PRESET,
            description="Show or switch model presets (e.g. /preset openai)",
            template="$ARGUMENTS",
            handler=build_preset_report,
        ),
        RouterCommand(
            name=CMD_MODE,
            description="Show or switch routing modes (e.g. /budget economy)",
            template="$ARGUMENTS",
            handler=build_mode_report,
            lowercase_argument=True,
        ),
        RouterCommand(
            name=CMD_ANNOTATE_PLAN,
            description="Annotate a plan with [tier:fast/medium/heavy] delegation tags",
            template=_ANNOTATE_PLAN_TEMPLATE,
        ),
    )
}
