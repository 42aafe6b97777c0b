"""
Director Actions
================

The default action table. build_action_registry(stage) declares every
action a script can use, binds each one to the collaborator it drives
and returns the finished, read-only ActionRegistry.

Each entry is written out by hand: name, typed parameters, and a small
closure over the stage. There is no introspection of the closures; the
parameter list is the single source of truth for arity and types.

Adding an action
----------------
Append a HandlerDescriptor to the list in build_action_registry():

    _action(
        "SET_BACKGROUND_TINT",
        [("color", STRING)],
        lambda color: stage.scene.set_tint(color),
        "Tint the background",
    ),

If the action needs a type that is not in ParameterType, add the
variant and its converter in parsers.py first.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from director_actions.collaborators import (
    GridPosition,
    SpeakingType,
    Stage,
    WaiterType,
)
from director_actions.parsers import ParameterType
from director_actions.registry import ActionRegistry, HandlerDescriptor, Parameter

BOOL = ParameterType.BOOL
INT = ParameterType.INT
FLOAT = ParameterType.FLOAT
STRING = ParameterType.STRING
ITEM_DISPLAY_POSITION = ParameterType.ITEM_DISPLAY_POSITION


def _action(
    name: str,
    parameters: Sequence[tuple[str, ParameterType]],
    invoke: Callable[..., Any],
    help_text: str = "",
) -> HandlerDescriptor:
    return HandlerDescriptor(
        name=name,
        parameters=tuple(Parameter(pname, ptype) for pname, ptype in parameters),
        invoke=invoke,
        help_text=help_text,
    )


def build_action_descriptors(stage: Stage) -> list[HandlerDescriptor]:
    """Return the default HandlerDescriptors bound to stage."""
    actor = stage.actor
    scene = stage.scene
    audio = stage.audio
    evidence = stage.evidence
    dialogue = stage.dialogue

    def set_speaker(name: str, speaking_type: SpeakingType) -> None:
        actor.set_active_speaker(name)
        actor.set_speaking_type(speaking_type)

    def show_actor(show: bool) -> None:
        if show:
            scene.show_actor()
        else:
            scene.hide_actor()

    def appear_instantly() -> None:
        dialogue.print_text_instantly = True

    return [
        # ─── Actors ─────────────────────────────────────────────────
        _action("SHOWACTOR", [("show", BOOL)], show_actor,
                "Show (true) or hide (false) the active actor"),
        _action("ACTOR", [("actor", STRING)], actor.set_active_actor,
                "Set the actor shown on screen"),
        _action("SPEAK", [("actor", STRING)],
                lambda name: set_speaker(name, SpeakingType.SPEAKING),
                "Set the speaker for the following lines"),
        # THINK uses SPEAKING as well; SpeakingType.THINKING is not wired up yet.
        _action("THINK", [("actor", STRING)],
                lambda name: set_speaker(name, SpeakingType.SPEAKING),
                "Set the speaker for the following lines (thought)"),
        _action("SET_POSE", [("pose", STRING)], actor.set_pose,
                "Change the active actor's pose"),
        _action("PLAY_EMOTION", [("animation", STRING)], actor.play_emotion,
                "Play an emotion animation on the active actor"),

        # ─── Scene ──────────────────────────────────────────────────
        _action("FADE_IN", [("seconds", FLOAT)], scene.fade_in,
                "Fade the scene in"),
        _action("FADE_OUT", [("seconds", FLOAT)], scene.fade_out,
                "Fade the scene out"),
        _action("SHAKESCREEN", [("intensity", FLOAT)], scene.shake_screen,
                "Shake the screen"),
        _action("SCENE", [("scene_name", STRING)], scene.set_scene,
                "Switch to a named scene"),
        _action("CAMERA_SET", [("x", INT), ("y", INT)],
                lambda x, y: scene.set_camera_position(GridPosition(x, y)),
                "Move the camera instantly"),
        _action("CAMERA_PAN", [("duration", FLOAT), ("x", INT), ("y", INT)],
                lambda duration, x, y: scene.pan_camera(duration, GridPosition(x, y)),
                "Pan the camera over a duration in seconds"),
        _action("SHOW_ITEM", [("item_name", STRING), ("position", ITEM_DISPLAY_POSITION)],
                scene.show_item,
                "Show an item at Left, Middle or Right"),
        _action("HIDE_ITEM", [], scene.hide_item,
                "Hide the shown item"),
        _action("WAIT", [("seconds", FLOAT)], scene.wait,
                "Pause the script"),

        # ─── Audio ──────────────────────────────────────────────────
        _action("PLAYSFX", [("sfx", STRING)], audio.play_sfx,
                "Play a sound effect"),
        _action("PLAYSONG", [("song_name", STRING)], audio.play_song,
                "Play a background song"),
        _action("STOP_SONG", [], audio.stop_song,
                "Stop the background song"),

        # ─── Evidence ───────────────────────────────────────────────
        _action("ADD_EVIDENCE", [("evidence", STRING)], evidence.add_evidence,
                "Add evidence to the inventory"),
        _action("REMOVE_EVIDENCE", [("evidence", STRING)], evidence.remove_evidence,
                "Remove evidence from the inventory"),
        _action("ADD_RECORD", [("actor", STRING)], evidence.add_to_court_record,
                "Add an actor to the court record"),
        _action("PRESENT_EVIDENCE", [], evidence.open_evidence_menu,
                "Open the evidence menu"),
        _action("SUBSTITUTE_EVIDENCE", [("evidence", STRING)],
                evidence.substitute_evidence_with_alt,
                "Replace evidence with its alternate version"),

        # ─── Dialogue presentation ──────────────────────────────────
        _action("DIALOG_SPEED", [("value", STRING)],
                lambda value: dialogue.set_timer_value(WaiterType.DIALOG, value),
                "Set the dialogue character speed"),
        _action("OVERALL_SPEED", [("value", STRING)],
                lambda value: dialogue.set_timer_value(WaiterType.OVERALL, value),
                "Set the overall text speed"),
        _action("PUNCTUATION_SPEED", [("value", STRING)],
                lambda value: dialogue.set_timer_value(WaiterType.PUNCTUATION, value),
                "Set the pause after punctuation"),
        _action("CLEAR_SPEED", [], dialogue.clear_all_waiters,
                "Reset all custom text speeds"),
        _action("DISABLE_SKIPPING", [("disabled", BOOL)],
                dialogue.toggle_disable_text_skipping,
                "Prevent the player from skipping text"),
        _action("AUTOSKIP", [("should_skip", BOOL)], dialogue.auto_skip_dialog,
                "Advance dialogue automatically"),
        _action("CONTINUE_DIALOG", [], dialogue.continue_dialog,
                "Continue to the next line"),
        _action("APPEAR_INSTANTLY", [], appear_instantly,
                "Reveal the next line all at once"),
        _action("HIDE_TEXTBOX", [], dialogue.hide_textbox,
                "Hide the textbox"),
        # The playback driver does the waiting; the action itself is a no-op.
        _action("WAIT_FOR_INPUT", [], lambda: None,
                "Wait for the player to continue"),
    ]


def build_action_registry(stage: Stage) -> ActionRegistry:
    """Build the read-only default registry for a stage.

    Raises
    ------
    ConfigurationError
        If the table declares a name twice (see ActionRegistry).
    """
    return ActionRegistry(build_action_descriptors(stage))
