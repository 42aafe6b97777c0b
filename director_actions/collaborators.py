"""
Collaborator Interfaces
=======================

The five subsystems that director actions drive. The interpreter only
calls into these; the host owns the implementations and hands them in
as a Stage before the first line is decoded.

    ActorController              who is on screen, who is talking
    SceneController              fades, camera, background, items, waits
    AudioController              sound effects and background music
    EvidenceController           evidence inventory and court record
    AppearingDialogueController  how dialogue text is revealed

Implementations may run their effects asynchronously (a fade, a wait).
The interpreter treats an action as done as soon as the call returns.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from director_actions.parsers import ItemDisplayPosition


class SpeakingType(Enum):
    """How the current speaker's lines are presented."""
    SPEAKING = "speaking"
    THINKING = "thinking"


class WaiterType(Enum):
    """Timer categories used by the appearing-text renderer."""
    DIALOG = "dialog"
    OVERALL = "overall"
    PUNCTUATION = "punctuation"


@dataclass(frozen=True)
class GridPosition:
    """Integer camera coordinates."""
    x: int
    y: int


class ActorController(ABC):

    @abstractmethod
    def set_active_actor(self, actor: str) -> None:
        ...

    @abstractmethod
    def set_active_speaker(self, actor: str) -> None:
        ...

    @abstractmethod
    def set_speaking_type(self, speaking_type: SpeakingType) -> None:
        ...

    @abstractmethod
    def set_pose(self, pose: str) -> None:
        ...

    @abstractmethod
    def play_emotion(self, animation: str) -> None:
        ...


class SceneController(ABC):

    @abstractmethod
    def show_actor(self) -> None:
        ...

    @abstractmethod
    def hide_actor(self) -> None:
        ...

    @abstractmethod
    def fade_in(self, seconds: float) -> None:
        ...

    @abstractmethod
    def fade_out(self, seconds: float) -> None:
        ...

    @abstractmethod
    def shake_screen(self, intensity: float) -> None:
        ...

    @abstractmethod
    def set_scene(self, scene_name: str) -> None:
        ...

    @abstractmethod
    def set_camera_position(self, position: GridPosition) -> None:
        ...

    @abstractmethod
    def pan_camera(self, duration: float, position: GridPosition) -> None:
        ...

    @abstractmethod
    def show_item(self, item_name: str, position: ItemDisplayPosition) -> None:
        ...

    @abstractmethod
    def hide_item(self) -> None:
        ...

    @abstractmethod
    def wait(self, seconds: float) -> None:
        """Request a pause. Returns immediately; the scene runs the timer."""
        ...


class AudioController(ABC):

    @abstractmethod
    def play_sfx(self, sfx: str) -> None:
        ...

    @abstractmethod
    def play_song(self, song_name: str) -> None:
        ...

    @abstractmethod
    def stop_song(self) -> None:
        ...


class EvidenceController(ABC):

    @abstractmethod
    def add_evidence(self, evidence: str) -> None:
        ...

    @abstractmethod
    def remove_evidence(self, evidence: str) -> None:
        ...

    @abstractmethod
    def add_to_court_record(self, actor: str) -> None:
        """Add an actor's profile to the persistent court record."""
        ...

    @abstractmethod
    def open_evidence_menu(self) -> None:
        ...

    @abstractmethod
    def substitute_evidence_with_alt(self, evidence: str) -> None:
        """Replace an evidence item with its alternate version."""
        ...


class AppearingDialogueController(ABC):
    """Reveals dialogue text a character at a time.

    print_text_instantly is a plain attribute: the APPEAR_INSTANTLY
    action sets it to True and the renderer resets it per line.
    """

    print_text_instantly: bool = False

    @abstractmethod
    def set_timer_value(self, waiter_type: WaiterType, value: str) -> None:
        """Set a timer category's speed from its script-encoded value."""
        ...

    @abstractmethod
    def clear_all_waiters(self) -> None:
        ...

    @abstractmethod
    def toggle_disable_text_skipping(self, disabled: bool) -> None:
        ...

    @abstractmethod
    def auto_skip_dialog(self, should_skip: bool) -> None:
        ...

    @abstractmethod
    def continue_dialog(self) -> None:
        ...

    @abstractmethod
    def hide_textbox(self) -> None:
        ...


@dataclass
class Stage:
    """Non-owning references to the five collaborators.

    Supplied by the host and assumed valid for the decoder's lifetime.
    """
    actor: ActorController
    scene: SceneController
    audio: AudioController
    evidence: EvidenceController
    dialogue: AppearingDialogueController
