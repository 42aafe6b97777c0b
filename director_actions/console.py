"""
Console Stage
=============

Stand-in collaborators that log what they are asked to do instead of
drawing or playing anything. The director CLI plays scripts against
this stage, and tests use it when they want a real Stage rather than
mocks.

Every call is appended to the shared ``events`` list as a tuple of
(subsystem, method, *arguments):

    stage, events = create_console_stage()
    decoder = create_decoder(stage)
    decoder.decode("[CAMERA_SET:3,4]")
    events  →  [("scene", "set_camera_position", GridPosition(x=3, y=4))]
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from director_actions.collaborators import (
    ActorController,
    AppearingDialogueController,
    AudioController,
    EvidenceController,
    GridPosition,
    SceneController,
    SpeakingType,
    Stage,
    WaiterType,
)
from director_actions.parsers import ItemDisplayPosition

logger = logging.getLogger(__name__)


class _ConsoleCollaborator:
    subsystem = ""

    def __init__(self, events: Optional[list] = None):
        self.events = events if events is not None else []

    def _record(self, method: str, *args: Any) -> None:
        self.events.append((self.subsystem, method) + args)
        shown = ", ".join(str(a) for a in args)
        logger.info(f"[{self.subsystem}] {method}({shown})")


class ConsoleActor(_ConsoleCollaborator, ActorController):
    subsystem = "actor"

    def __init__(self, events: Optional[list] = None):
        super().__init__(events)
        self.active_actor: Optional[str] = None
        self.speaker: Optional[str] = None
        self.speaking_type: Optional[SpeakingType] = None

    def set_active_actor(self, actor: str) -> None:
        self.active_actor = actor
        self._record("set_active_actor", actor)

    def set_active_speaker(self, actor: str) -> None:
        self.speaker = actor
        self._record("set_active_speaker", actor)

    def set_speaking_type(self, speaking_type: SpeakingType) -> None:
        self.speaking_type = speaking_type
        self._record("set_speaking_type", speaking_type)

    def set_pose(self, pose: str) -> None:
        self._record("set_pose", pose)

    def play_emotion(self, animation: str) -> None:
        self._record("play_emotion", animation)


class ConsoleScene(_ConsoleCollaborator, SceneController):
    subsystem = "scene"

    def __init__(self, events: Optional[list] = None):
        super().__init__(events)
        self.scene_name: Optional[str] = None
        self.camera = GridPosition(0, 0)
        self.actor_visible = False

    def show_actor(self) -> None:
        self.actor_visible = True
        self._record("show_actor")

    def hide_actor(self) -> None:
        self.actor_visible = False
        self._record("hide_actor")

    def fade_in(self, seconds: float) -> None:
        self._record("fade_in", seconds)

    def fade_out(self, seconds: float) -> None:
        self._record("fade_out", seconds)

    def shake_screen(self, intensity: float) -> None:
        self._record("shake_screen", intensity)

    def set_scene(self, scene_name: str) -> None:
        self.scene_name = scene_name
        self._record("set_scene", scene_name)

    def set_camera_position(self, position: GridPosition) -> None:
        self.camera = position
        self._record("set_camera_position", position)

    def pan_camera(self, duration: float, position: GridPosition) -> None:
        self.camera = position
        self._record("pan_camera", duration, position)

    def show_item(self, item_name: str, position: ItemDisplayPosition) -> None:
        self._record("show_item", item_name, position)

    def hide_item(self) -> None:
        self._record("hide_item")

    def wait(self, seconds: float) -> None:
        self._record("wait", seconds)


class ConsoleAudio(_ConsoleCollaborator, AudioController):
    subsystem = "audio"

    def __init__(self, events: Optional[list] = None):
        super().__init__(events)
        self.song: Optional[str] = None

    def play_sfx(self, sfx: str) -> None:
        self._record("play_sfx", sfx)

    def play_song(self, song_name: str) -> None:
        self.song = song_name
        self._record("play_song", song_name)

    def stop_song(self) -> None:
        self.song = None
        self._record("stop_song")


class ConsoleEvidence(_ConsoleCollaborator, EvidenceController):
    subsystem = "evidence"

    def __init__(self, events: Optional[list] = None):
        super().__init__(events)
        self.inventory: list[str] = []
        self.court_record: list[str] = []

    def add_evidence(self, evidence: str) -> None:
        self.inventory.append(evidence)
        self._record("add_evidence", evidence)

    def remove_evidence(self, evidence: str) -> None:
        if evidence in self.inventory:
            self.inventory.remove(evidence)
        self._record("remove_evidence", evidence)

    def add_to_court_record(self, actor: str) -> None:
        self.court_record.append(actor)
        self._record("add_to_court_record", actor)

    def open_evidence_menu(self) -> None:
        self._record("open_evidence_menu")

    def substitute_evidence_with_alt(self, evidence: str) -> None:
        self._record("substitute_evidence_with_alt", evidence)


class ConsoleDialogue(_ConsoleCollaborator, AppearingDialogueController):
    subsystem = "dialogue"

    def __init__(self, events: Optional[list] = None):
        super().__init__(events)
        self.print_text_instantly = False
        self.timers: dict[WaiterType, str] = {}
        self.skipping_disabled = False
        self.auto_skip = False

    def set_timer_value(self, waiter_type: WaiterType, value: str) -> None:
        self.timers[waiter_type] = value
        self._record("set_timer_value", waiter_type, value)

    def clear_all_waiters(self) -> None:
        self.timers.clear()
        self._record("clear_all_waiters")

    def toggle_disable_text_skipping(self, disabled: bool) -> None:
        self.skipping_disabled = disabled
        self._record("toggle_disable_text_skipping", disabled)

    def auto_skip_dialog(self, should_skip: bool) -> None:
        self.auto_skip = should_skip
        self._record("auto_skip_dialog", should_skip)

    def continue_dialog(self) -> None:
        self._record("continue_dialog")

    def hide_textbox(self) -> None:
        self._record("hide_textbox")


def create_console_stage() -> tuple[Stage, list]:
    """Build a Stage of console collaborators sharing one event list."""
    events: list = []
    stage = Stage(
        actor=ConsoleActor(events),
        scene=ConsoleScene(events),
        audio=ConsoleAudio(events),
        evidence=ConsoleEvidence(events),
        dialogue=ConsoleDialogue(events),
    )
    return stage, events
