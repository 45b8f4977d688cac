"""
Context maps used to fill "{KEY}" placeholders in SQL, and resolution of the
positional arguments accepted by the scenario helpers.

Every helper accepts one of two shapes:

    (name, setup, teardown, body)
    (name, context, setup, teardown, body)

Group-scoped helpers hand their body a GroupContext. A test nested in that group
may pass it back as its context, in which case it is used as-is instead of being
merged with the defaults again.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Optional, Sequence, Union

from sqlscenario import config as sqlscenario_config

# Key under which a group's name is visible to its SQL, e.g. {GROUP_NAME}.
GROUP_NAME_KEY = 'GROUP_NAME'

SqlSource = Union[str, Sequence[str], None]

_default_context = None


class ArgumentShapeError(TypeError):
    """Raised when a scenario helper gets neither 4 nor 5 positional arguments."""

    def __init__(self, family: str, arguments: tuple):
        self.family = family
        self.arguments = arguments
        super().__init__(f"parameter mismatch in {family}(): {arguments!r}")


class ContextMap(Mapping):
    """Read-only string to string mapping used for SQL substitution."""

    def __init__(self, *maps: Optional[Mapping]):
        merged = {}
        for m in maps:
            if m:
                merged.update(m)
        self._data = merged

    def __getitem__(self, key):
        return self._data[key]

    def __iter__(self):
        return iter(self._data)

    def __len__(self):
        return len(self._data)

    def __repr__(self):
        return f"{type(self).__name__}({self._data!r})"


class GroupContext(ContextMap):
    """Context of a describe_sql_scenario() block, shared by its nested tests."""

    def __init__(self, group_name: str, *maps: Optional[Mapping]):
        super().__init__({GROUP_NAME_KEY: group_name}, *maps)
        # a GROUP_NAME given by the caller overrides the one passed here
        self.group_name = self[GROUP_NAME_KEY]


@dataclass(frozen=True)
class ScenarioArgs:
    name: str
    context: ContextMap
    setup: SqlSource
    teardown: SqlSource
    body: Callable[..., Any]


def default_context() -> Mapping:
    """
    Returns the process-wide starting context. It is computed once, from the
    configuration, and is read-only.
    """
    global _default_context
    if _default_context is None:
        cfg = sqlscenario_config.load_config()
        _default_context = MappingProxyType(dict(cfg['context']))
    return _default_context


def scenario_context(provided: Optional[Mapping] = None) -> ContextMap:
    if isinstance(provided, GroupContext):
        # inside a group: thread the group's map through unchanged
        return provided
    return ContextMap(default_context(), provided)


def group_context(name: str, provided: Optional[Mapping] = None) -> GroupContext:
    # caller values override the defaults, which override the group name
    return GroupContext(name, default_context(), provided)


def _destructure(family: str, args: tuple):
    if len(args) == 5:
        return args
    if len(args) == 4:
        name, setup, teardown, body = args
        return name, None, setup, teardown, body
    raise ArgumentShapeError(family, args)


def resolve_test_args(family: str, args: tuple) -> ScenarioArgs:
    name, provided, setup, teardown, body = _destructure(family, args)
    return ScenarioArgs(name, scenario_context(provided), setup, teardown, body)


def resolve_group_args(family: str, args: tuple) -> ScenarioArgs:
    name, provided, setup, teardown, body = _destructure(family, args)
    return ScenarioArgs(name, group_context(name, provided), setup, teardown, body)
