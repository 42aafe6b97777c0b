"""
Directive Tokenizer
===================

Splits one bracketed script line into an action name and its raw
parameter tokens.

Grammar
-------
    [ACTION]
    [ACTION:param1,param2,...]

    ':'   separates the action name from the parameter list
    ','   separates parameters

Tokens are not escaped, so a literal ':' or ',' cannot appear inside a
parameter. A second ':' makes the line malformed; it is reported rather
than guessed at. Empty tokens are kept as they are:

    [FADE_IN:1.5]          →  Directive("FADE_IN", ("1.5",))
    [CAMERA_PAN:2,10,-4]   →  Directive("CAMERA_PAN", ("2", "10", "-4"))
    [HIDE_ITEM]            →  Directive("HIDE_ITEM", ())
    [SCENE:]               →  Directive("SCENE", ("",))
    [A:b:c]                →  MalformedDirectiveError
"""

from __future__ import annotations

from dataclasses import dataclass

from director_actions.errors import MalformedDirectiveError

ACTION_SEPARATOR = ":"
PARAMETER_SEPARATOR = ","

OPEN_BRACKET = "["
CLOSE_BRACKET = "]"


@dataclass(frozen=True)
class Directive:
    """One parsed directive line. Built and consumed within a dispatch."""
    action: str
    parameters: tuple[str, ...] = ()


def is_directive_line(line: str) -> bool:
    """True if the line is bracket-delimited and should go to the decoder."""
    return (
        len(line) >= 2
        and line.startswith(OPEN_BRACKET)
        and line.endswith(CLOSE_BRACKET)
    )


def tokenize(line: str) -> Directive:
    """Split a directive line into action name and raw parameters.

    Parameters
    ----------
    line : str
        The full line, brackets included. No surrounding whitespace is
        stripped; the host passes the line as it wants it read.

    Returns
    -------
    Directive

    Raises
    ------
    MalformedDirectiveError
        If the line is not bracket-delimited or has more than one ':'.
    """
    if not is_directive_line(line):
        raise MalformedDirectiveError(line, "expected the form [ACTION] or [ACTION:params]")

    body = line[1:-1]
    segments = body.split(ACTION_SEPARATOR)
    if len(segments) > 2:
        raise MalformedDirectiveError(
            line, f"only one '{ACTION_SEPARATOR}' is allowed, found {len(segments) - 1}"
        )

    action = segments[0]
    if len(segments) == 1:
        return Directive(action=action)

    return Directive(
        action=action,
        parameters=tuple(segments[1].split(PARAMETER_SEPARATOR)),
    )
