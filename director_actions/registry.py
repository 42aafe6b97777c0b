"""
Action Registry
===============

The dispatch table: action name → HandlerDescriptor.

A HandlerDescriptor declares everything the decoder needs to run an
action without looking at the handler itself:

    HandlerDescriptor(
        name="CAMERA_PAN",
        parameters=(
            Parameter("duration", ParameterType.FLOAT),
            Parameter("x", ParameterType.INT),
            Parameter("y", ParameterType.INT),
        ),
        invoke=lambda duration, x, y: scene.pan_camera(duration, GridPosition(x, y)),
    )

The parameter list is both the arity and the per-position type. The
invoke callable receives the already-converted values positionally.

The registry is built once from a list of descriptors and is read-only
afterwards. Duplicate names are a ConfigurationError raised by the
constructor, never discovered at dispatch time. Since nothing mutates
the table after __init__, lookups from several threads need no lock.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional

from director_actions.errors import ConfigurationError
from director_actions.parsers import ParameterType, check_converters


@dataclass(frozen=True)
class Parameter:
    """A declared parameter: its name (for messages) and its type."""
    name: str
    type: ParameterType


@dataclass(frozen=True)
class HandlerDescriptor:
    """An action the decoder can run.

    Attributes
    ----------
    name : str
        Dispatch key, exactly as written in scripts (case-sensitive).
    parameters : tuple[Parameter, ...]
        Ordered parameter declarations. Empty for nullary actions.
    invoke : callable
        Performs the side effect. Called with one positional argument
        per parameter, already converted.
    help_text : str
        Optional one-line description for help listings.
    """
    name: str
    parameters: tuple[Parameter, ...]
    invoke: Callable[..., Any]
    help_text: str = ""

    @property
    def parameter_types(self) -> tuple[ParameterType, ...]:
        return tuple(p.type for p in self.parameters)

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def usage(self) -> str:
        """Script spelling, e.g. "[CAMERA_SET:x,y]"."""
        if not self.parameters:
            return f"[{self.name}]"
        return f"[{self.name}:{','.join(p.name for p in self.parameters)}]"


class ActionRegistry:
    """Immutable name → HandlerDescriptor table.

    Usage
    -----
        registry = ActionRegistry([fade_in, fade_out, hide_item])
        descriptor = registry.lookup("FADE_IN")
        if descriptor is None:
            ...  # unknown action

    Raises
    ------
    ConfigurationError
        From the constructor, when two descriptors share a name, a
        parameter type is not a ParameterType, or the converter table
        does not cover every ParameterType.
    """

    def __init__(self, descriptors: Iterable[HandlerDescriptor]):
        check_converters()

        table: dict[str, HandlerDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in table:
                raise ConfigurationError(
                    f"Action name collision: '{descriptor.name}' is already registered"
                )
            for parameter in descriptor.parameters:
                if not isinstance(parameter.type, ParameterType):
                    raise ConfigurationError(
                        f"Parameter '{parameter.name}' of action '{descriptor.name}' "
                        f"has unsupported type {parameter.type!r}"
                    )
            table[descriptor.name] = descriptor

        self._actions: Mapping[str, HandlerDescriptor] = MappingProxyType(table)

    @property
    def actions(self) -> Mapping[str, HandlerDescriptor]:
        """Read-only view of the table."""
        return self._actions

    def lookup(self, name: str) -> Optional[HandlerDescriptor]:
        """Return the descriptor registered under name, or None."""
        return self._actions.get(name)

    def names(self) -> list[str]:
        return sorted(self._actions)

    def list_actions(self) -> list[tuple[str, str]]:
        """Return (name, usage + help) pairs sorted by name."""
        result = []
        for name in self.names():
            descriptor = self._actions[name]
            text = descriptor.usage
            if descriptor.help_text:
                text = f"{text} - {descriptor.help_text}"
            result.append((name, text))
        return result

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[HandlerDescriptor]:
        return iter(self._actions.values())
