"""
Projection of supported actions into the flag schemas advertised for
command registration.

Pure functions: no I/O, no global state. The shared matcher table is built
once at startup with freeze_flag_map() and passed in by reference.

Usage:
    from faultbridge.catalog import StaticAction, build_exp_models, freeze_flag_map
    from faultbridge.models import ActionFlag

    common = freeze_flag_map({"effect-count": ActionFlag(desc="...")})
    actions = [StaticAction("modify", {"value": ActionFlag(desc="...", required=True)})]
    models = build_exp_models(actions, common)
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Protocol

from faultbridge.flags import CONNECTION_FLAGS
from faultbridge.models import (
    ActionFlag,
    ActionFlagSchema,
    ExpCommandModel,
    ExpModels,
    FlagSchema,
)

FlagMap = Mapping[str, ActionFlag]

CATEGORY = "golang"


class Action(Protocol):
    """A fault action exposed by the agent."""

    def name(self) -> str: ...

    def flags(self) -> Optional[FlagMap]: ...


@dataclass(frozen=True)
class StaticAction:
    """Action described declaratively rather than by a live agent plugin."""

    action_name: str
    flag_map: Optional[FlagMap] = None

    def name(self) -> str:
        return self.action_name

    def flags(self) -> Optional[FlagMap]:
        return self.flag_map


def freeze_flag_map(flags: Mapping[str, ActionFlag]) -> FlagMap:
    """Snapshot a flag table into a read-only mapping."""
    return MappingProxyType(dict(flags))


def project_flags(flags: Optional[FlagMap]) -> List[FlagSchema]:
    if not flags:
        return []
    return [
        FlagSchema(name=key, desc=f.desc, no_args=f.no_args, required=f.required)
        for key, f in flags.items()
    ]


def common_matcher_flags(common_flags: Optional[FlagMap]) -> List[FlagSchema]:
    """Matcher flags shared by every action."""
    return project_flags(common_flags)


def build_action_schemas(
    actions: Iterable[Action], common_flags: Optional[FlagMap] = None
) -> List[ActionFlagSchema]:
    matchers = common_matcher_flags(common_flags)
    schemas = []
    for action in actions:
        name = action.name()
        schemas.append(
            ActionFlagSchema(
                name=name,
                aliases=[name],
                short_desc=name,
                long_desc=name,
                categories=[CATEGORY],
                matchers=matchers,
                flags=project_flags(action.flags()),
            )
        )
    return schemas


def build_exp_models(
    actions: Iterable[Action], common_flags: Optional[FlagMap] = None
) -> ExpModels:
    """Full plugin model for the ``go`` experiment target."""
    return ExpModels(
        models=[
            ExpCommandModel(
                name="go",
                short_desc="Chaos engineering experiments for golang application",
                long_desc="Chaos engineering experiments for golang application",
                executor="golang",
                actions=build_action_schemas(actions, common_flags),
                flags=list(CONNECTION_FLAGS),
            )
        ]
    )
