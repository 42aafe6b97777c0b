"""
Parameter Parsers
=================

Turns the raw text tokens of a directive into typed values.

Every parameter an action declares has a ParameterType. Each
ParameterType has exactly one converter in _CONVERTERS, and each
converter serves exactly one ParameterType. check_converters()
enforces that pairing; it runs at import time and again whenever an
ActionRegistry is built, so a new ParameterType without a converter
can never reach a script.

Converters never raise. They return a ParseOutcome that holds either
the typed value or a reason written for the script author:

    parse_parameter(ParameterType.BOOL, "true")
        → ParseOutcome(value=True, error=None)
    parse_parameter(ParameterType.BOOL, "maybe")
        → ParseOutcome(value=None, error="Must be either 'true' or 'false'")

Accepted Spellings
------------------
    BOOL                   'true' or 'false', case-sensitive
    INT                    [+|-]digits (ASCII only), surrounding whitespace allowed,
                           must fit a signed 32-bit integer
    FLOAT                  [+|-]digits[.digits][e[+|-]digits], '.' only
                           ('nan', 'inf', ',' and overflowing
                           exponents are rejected)
    STRING                 anything, returned untouched (no trimming)
    ITEM_DISPLAY_POSITION  the exact ItemDisplayPosition member name
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from director_actions.errors import ConfigurationError


class ParameterType(Enum):
    """How a raw directive token must be interpreted."""
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    ITEM_DISPLAY_POSITION = "item_display_position"


class ItemDisplayPosition(Enum):
    """Where an item can be shown on screen.

    Member names double as the script spelling (SHOW_ITEM:Knife,Left).
    """
    Left = "left"
    Middle = "middle"
    Right = "right"


@dataclass(frozen=True)
class ParseOutcome:
    """Result of converting one token.

    Exactly one of value / error is meaningful: error is None on
    success, and a human-readable reason on failure.
    """
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ─── Converters ─────────────────────────────────────────────────────

_INT_PATTERN = re.compile(r'^\s*[+-]?\d+\s*$', re.ASCII)
_FLOAT_PATTERN = re.compile(r'^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$', re.ASCII)

INT_MIN = -2**31
INT_MAX = 2**31 - 1

BOOL_LITERALS = {"true": True, "false": False}


def parse_bool(token: str) -> ParseOutcome:
    if token not in BOOL_LITERALS:
        return ParseOutcome(error="Must be either 'true' or 'false'")
    return ParseOutcome(value=BOOL_LITERALS[token])


def parse_int(token: str) -> ParseOutcome:
    if not _INT_PATTERN.match(token):
        return ParseOutcome(error="Must be a number with no decimals")
    value = int(token)
    if not (INT_MIN <= value <= INT_MAX):
        return ParseOutcome(error="Must be a number with no decimals")
    return ParseOutcome(value=value)


_FLOAT_ERROR = "Must be a number (with decimals delimited with '.' instead of ',')"


def parse_float(token: str) -> ParseOutcome:
    if not _FLOAT_PATTERN.match(token):
        return ParseOutcome(error=_FLOAT_ERROR)
    value = float(token)
    # 1e999 matches the pattern but overflows
    if not math.isfinite(value):
        return ParseOutcome(error=_FLOAT_ERROR)
    return ParseOutcome(value=value)


def parse_string(token: str) -> ParseOutcome:
    # Some scripts rely on leading/trailing spaces, so no strip().
    return ParseOutcome(value=token)


def parse_item_display_position(token: str) -> ParseOutcome:
    position = ItemDisplayPosition.__members__.get(token)
    if position is None:
        return ParseOutcome(
            error=f"Cannot convert '{token}' into an {ItemDisplayPosition.__name__}"
        )
    return ParseOutcome(value=position)


_CONVERTERS: dict[ParameterType, Callable[[str], ParseOutcome]] = {
    ParameterType.BOOL: parse_bool,
    ParameterType.INT: parse_int,
    ParameterType.FLOAT: parse_float,
    ParameterType.STRING: parse_string,
    ParameterType.ITEM_DISPLAY_POSITION: parse_item_display_position,
}


# ─── Registry access ────────────────────────────────────────────────

def check_converters(converters: Optional[dict] = None) -> None:
    """Verify every ParameterType has exactly one converter.

    Parameters
    ----------
    converters : dict, optional
        The table to check. Defaults to the module's own table; tests
        pass a doctored copy.

    Raises
    ------
    ConfigurationError
        If a ParameterType is missing, or a key is not a ParameterType.
    """
    table = _CONVERTERS if converters is None else converters

    missing = [t.name for t in ParameterType if t not in table]
    if missing:
        raise ConfigurationError(
            f"No converter registered for parameter type(s): {', '.join(missing)}"
        )

    unknown = [repr(key) for key in table if not isinstance(key, ParameterType)]
    if unknown:
        raise ConfigurationError(
            f"Converter registered for unknown parameter type(s): {', '.join(unknown)}"
        )


def get_converter(parameter_type: ParameterType) -> Callable[[str], ParseOutcome]:
    """Return the converter for a ParameterType."""
    try:
        return _CONVERTERS[parameter_type]
    except KeyError:
        raise ConfigurationError(
            f"No converter registered for parameter type {parameter_type!r}"
        ) from None


def parse_parameter(parameter_type: ParameterType, token: str) -> ParseOutcome:
    """Convert one raw token to the value its ParameterType describes."""
    return get_converter(parameter_type)(token)


check_converters()
