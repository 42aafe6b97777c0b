"""
Director Action System
======================

The interpreter for bracketed stage directions in visual-novel
scripts. Script authors write dialogue lines interleaved with
directives such as [FADE_IN:1.5] or [CAMERA_PAN:2,10,-4]; this package
checks each directive against a fixed action table, converts its
parameters to typed values and calls the subsystem that performs it.

Architecture Overview
---------------------
The playback driver reads the script one line at a time. Dialogue goes
to the textbox; directive lines are handed to the decoder:

    ┌─────────────────┐     ┌──────────────┐     ┌──────────────────────┐
    │  Script line     │────►│  Action      │────►│  Collaborators       │
    │  "[SCENE:Court]" │     │  Decoder     │     │  actor / scene /     │
    └─────────────────┘     └──────┬───────┘     │  audio / evidence /  │
                                   │              │  dialogue            │
                              ┌────▼────┐         └──────────────────────┘
                              │ Action  │
                              │ Result  │──► on_action_done (success)
                              │         │──► error for the host (failure)
                              └─────────┘

Inside the decoder the line passes through five stages, all of which
must succeed before anything is called:

    tokenizer.py   "[CAMERA_PAN:2,10,-4]" → ("CAMERA_PAN", ["2", "10", "-4"])
    registry.py    "CAMERA_PAN" → HandlerDescriptor(FLOAT, INT, INT)
    decoder.py     arity check, then parsers.py converts each token
    actions.py     the bound closure calls scene.pan_camera(...)
    decoder.py     completion listeners fire

Integration
-----------
    from director_actions import create_decoder, is_directive_line

    decoder = create_decoder(stage, on_action_done=advance_script)

    for line in script:
        if is_directive_line(line):
            result = decoder.decode(line)
            if result.is_error:
                show_error(result.error.message)
        else:
            show_dialogue(line)

create_decoder() raises ConfigurationError if the action table is
inconsistent; that is a bug in the table, not in the script, and the
host should refuse to start.

Module Structure
----------------
    director_actions/
    ├── __init__.py        ← This file. create_decoder() and exports.
    ├── errors.py          ← ConfigurationError, DirectiveError, ...
    ├── parsers.py         ← ParameterType and one converter per type.
    ├── tokenizer.py       ← Directive, tokenize(), is_directive_line().
    ├── registry.py        ← HandlerDescriptor, ActionRegistry.
    ├── collaborators.py   ← Subsystem interfaces and Stage.
    ├── actions.py         ← The default action table.
    ├── decoder.py         ← ActionDecoder, ActionResult, ActionError.
    └── console.py         ← Logging collaborators for the CLI and tests.

Dependencies
------------
Standard library only. The director CLI and its YAML configuration
live outside the package (director.py, director_config.py).

License
-------
GPL 3.0
"""

from __future__ import annotations

from typing import Callable, Optional

from director_actions.actions import build_action_registry
from director_actions.collaborators import Stage
from director_actions.decoder import ActionDecoder, ActionError, ActionResult, ErrorKind
from director_actions.errors import (
    ConfigurationError,
    DirectiveError,
    DirectorError,
    MalformedDirectiveError,
)
from director_actions.parsers import ItemDisplayPosition, ParameterType
from director_actions.registry import ActionRegistry, HandlerDescriptor, Parameter
from director_actions.tokenizer import Directive, is_directive_line, tokenize


def create_decoder(
    stage: Stage,
    on_action_done: Optional[Callable[[ActionResult], None]] = None,
) -> ActionDecoder:
    """Build the default action table for a stage and wrap it in a decoder.

    Raises
    ------
    ConfigurationError
        If the action table or converter table is inconsistent.
    """
    return ActionDecoder(build_action_registry(stage), on_action_done=on_action_done)


__all__ = [
    'create_decoder',
    'ActionDecoder',
    'ActionError',
    'ActionRegistry',
    'ActionResult',
    'ConfigurationError',
    'Directive',
    'DirectiveError',
    'DirectorError',
    'ErrorKind',
    'HandlerDescriptor',
    'ItemDisplayPosition',
    'MalformedDirectiveError',
    'Parameter',
    'ParameterType',
    'Stage',
    'build_action_registry',
    'is_directive_line',
    'tokenize',
]
