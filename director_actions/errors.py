"""
Director Action Errors
======================

Exception types for the director action system.

Only two situations raise out of this package:

- ConfigurationError: the action table or the converter table is
  broken (duplicate action names, a ParameterType with no converter).
  This is a programmer error and is raised while the interpreter is
  being built, so the host never gets a half-working decoder.

- DirectiveError: raised by ActionDecoder.decode_or_raise() and
  ActionDecoder.coerce() for callers that prefer exceptions to
  inspecting ActionResult.error. decode() itself catches it.

Everything a script author can get wrong on a single line comes back
as a structured ActionResult instead (see decoder.py).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from director_actions.decoder import ActionError


class DirectorError(Exception):
    """Base error for the director action system."""


class ConfigurationError(DirectorError):
    """The action registry or converter table is inconsistent."""


class MalformedDirectiveError(DirectorError):
    """A line does not follow the [ACTION] / [ACTION:params] grammar."""

    def __init__(self, line: str, detail: str):
        self.line = line
        self.detail = detail
        super().__init__(f"Invalid action with line: {line} ({detail})")


class DirectiveError(DirectorError):
    """A directive line failed to dispatch.

    Attributes
    ----------
    error : ActionError
        The structured failure, same object the decoder would have
        put on ActionResult.error.
    """

    def __init__(self, error: ActionError):
        self.error = error
        super().__init__(error.message)
