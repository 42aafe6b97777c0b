"""
Action Decoder
==============

Runs one directive line from script text to side effect.

    Script line: "[CAMERA_PAN:2,10,-4]"
                  ↓
    tokenize()      → Directive("CAMERA_PAN", ("2", "10", "-4"))
                  ↓
    lookup          → HandlerDescriptor(duration: FLOAT, x: INT, y: INT)
                  ↓
    arity check     → 3 == 3
                  ↓
    coerce          → (2.0, 10, -4)      left to right, stop at first failure
                  ↓
    invoke          → scene.pan_camera(2.0, GridPosition(10, -4))
                  ↓
    notify          → on_action_done listeners

Every stage before "invoke" only reads. A line therefore either runs
completely or changes nothing: a bad third parameter is reported before
the handler is ever called, so no collaborator sees half an action.

Error Contract
--------------
decode() never raises for anything a script author can write. It
returns an ActionResult; when result.is_error, result.error is an
ActionError with an ErrorKind and a message naming the action and/or
parameter:

    MALFORMED_DIRECTIVE  line does not follow [ACTION] / [ACTION:params]
    UNKNOWN_ACTION       no handler registered under that name
    ARITY_MISMATCH       wrong number of parameters
    PARAMETER_COERCION   a token could not be converted to its type
    INVOCATION           the handler raised; the exception is kept as cause

The host decides what to do with a failed line (halt, skip, show the
message to the author). Completion listeners are called exactly once
for each successful line and never for a failed one. A listener that
raises is logged and the remaining listeners are still called; the
line still counts as a success.

ConfigurationError is the one thing that does raise, and only while the
registry is being built.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from director_actions.errors import DirectiveError, MalformedDirectiveError
from director_actions.parsers import parse_parameter
from director_actions.registry import ActionRegistry, HandlerDescriptor
from director_actions.tokenizer import tokenize

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    MALFORMED_DIRECTIVE = "malformed_directive"
    UNKNOWN_ACTION = "unknown_action"
    ARITY_MISMATCH = "arity_mismatch"
    PARAMETER_COERCION = "parameter_coercion"
    INVOCATION = "invocation"


@dataclass(frozen=True)
class ActionError:
    """Why a directive line did not run.

    Attributes
    ----------
    kind : ErrorKind
        Which pipeline stage rejected the line.
    message : str
        Author-facing explanation, ready to display.
    line : str
        The raw line as passed to decode().
    action : str or None
        The action name, once tokenizing succeeded.
    index : int or None
        1-based parameter position (PARAMETER_COERCION only).
    token : str or None
        The offending raw token (PARAMETER_COERCION only).
    reason : str or None
        The converter's rejection reason (PARAMETER_COERCION only).
    expected, received : int or None
        Declared and supplied parameter counts (ARITY_MISMATCH only).
    cause : Exception or None
        What the handler raised (INVOCATION only).
    """
    kind: ErrorKind
    message: str
    line: str
    action: Optional[str] = None
    index: Optional[int] = None
    token: Optional[str] = None
    reason: Optional[str] = None
    expected: Optional[int] = None
    received: Optional[int] = None
    cause: Optional[BaseException] = None


@dataclass
class ActionResult:
    """Outcome of decoding one line.

    arguments holds the converted values that were passed to the
    handler, in order. It is empty on failure.
    """
    line: str
    action: Optional[str] = None
    arguments: tuple[Any, ...] = field(default_factory=tuple)
    error: Optional[ActionError] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


class ActionDecoder:
    """Tokenizes, validates and dispatches directive lines.

    The decoder keeps no per-line state; each decode() call is a
    separate run of the pipeline. It is not safe to decode two lines
    that touch the same collaborator at once; the host serializes
    calls.

    Parameters
    ----------
    registry : ActionRegistry
        The action table to dispatch against.
    on_action_done : callable, optional
        Called with the ActionResult after every successful dispatch.
        More listeners can be added with add_done_listener().
    """

    def __init__(
        self,
        registry: ActionRegistry,
        on_action_done: Optional[Callable[[ActionResult], None]] = None,
    ):
        self.registry = registry
        self._done_listeners: list[Callable[[ActionResult], None]] = []
        if on_action_done is not None:
            self._done_listeners.append(on_action_done)

    def add_done_listener(self, callback: Callable[[ActionResult], None]) -> None:
        """Register a callback for "directive processing finished"."""
        self._done_listeners.append(callback)

    def decode(self, line: str) -> ActionResult:
        """Run a directive line through the full pipeline.

        Parameters
        ----------
        line : str
            A bracketed directive, e.g. "[FADE_IN:1.5]".

        Returns
        -------
        ActionResult
            Never None. Check is_error before using arguments.
        """
        try:
            descriptor, arguments = self._prepare(line)
        except DirectiveError as rejected:
            logger.warning(rejected.error.message)
            return ActionResult(line=line, action=rejected.error.action, error=rejected.error)

        try:
            descriptor.invoke(*arguments)
        except Exception as e:
            logger.exception(f"Action '{descriptor.name}' raised while running")
            error = ActionError(
                kind=ErrorKind.INVOCATION,
                message=f"'{descriptor.name}' failed while running: {e}",
                line=line,
                action=descriptor.name,
                cause=e,
            )
            return ActionResult(line=line, action=descriptor.name, error=error)

        result = ActionResult(line=line, action=descriptor.name, arguments=arguments)
        logger.debug(f"Dispatched {descriptor.name}{arguments!r}")
        for listener in self._done_listeners:
            try:
                listener(result)
            except Exception:
                logger.exception(f"Done listener for '{descriptor.name}' raised")
        return result

    def decode_or_raise(self, line: str) -> ActionResult:
        """Like decode(), but raise DirectiveError on failure."""
        result = self.decode(line)
        if result.error is not None:
            raise DirectiveError(result.error)
        return result

    def coerce(
        self,
        descriptor: HandlerDescriptor,
        parameters: Sequence[str],
        line: str = "",
    ) -> tuple[Any, ...]:
        """Convert raw tokens to the descriptor's parameter types.

        Stops at the first token that fails; later tokens are not
        looked at.

        Raises
        ------
        DirectiveError
            With a PARAMETER_COERCION error for the failing position.
        """
        values = []
        for index, (parameter, token) in enumerate(zip(descriptor.parameters, parameters), start=1):
            outcome = parse_parameter(parameter.type, token)
            if not outcome.ok:
                raise DirectiveError(ActionError(
                    kind=ErrorKind.PARAMETER_COERCION,
                    message=(
                        f"'{token}' is incorrect as parameter #{index} ({parameter.name}) "
                        f"for action '{descriptor.name}': {outcome.error}"
                    ),
                    line=line,
                    action=descriptor.name,
                    index=index,
                    token=token,
                    reason=outcome.error,
                ))
            values.append(outcome.value)
        return tuple(values)

    # ─── Pipeline stages ────────────────────────────────────────────

    def _prepare(self, line: str) -> tuple[HandlerDescriptor, tuple[Any, ...]]:
        """Tokenize, look up, check arity and coerce. No side effects."""
        try:
            directive = tokenize(line)
        except MalformedDirectiveError as e:
            raise DirectiveError(ActionError(
                kind=ErrorKind.MALFORMED_DIRECTIVE,
                message=str(e),
                line=line,
            )) from e

        descriptor = self.registry.lookup(directive.action)
        if descriptor is None:
            raise DirectiveError(ActionError(
                kind=ErrorKind.UNKNOWN_ACTION,
                message=f"No action named '{directive.action}'",
                line=line,
                action=directive.action,
            ))

        received = len(directive.parameters)
        if received != descriptor.arity:
            raise DirectiveError(ActionError(
                kind=ErrorKind.ARITY_MISMATCH,
                message=(
                    f"'{descriptor.name}' requires exactly {descriptor.arity} parameters "
                    f"(has {received} instead)"
                ),
                line=line,
                action=descriptor.name,
                expected=descriptor.arity,
                received=received,
            ))

        if not descriptor.parameters:
            return descriptor, ()

        return descriptor, self.coerce(descriptor, directive.parameters, line)
