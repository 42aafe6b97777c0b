"""
Tests for the director script player and CLI.

Run with:  python -m pytest test_director.py -v
"""

import pytest

from director import PlaybackReport, ScriptPlayer, main
from director_actions import ErrorKind, create_decoder
from director_actions.console import create_console_stage
from director_config import DirectorConfig


SCRIPT = """\
# Chapter 1
[SCENE:Courtroom]
[PLAYSONG:Trial]

Judge: Court is now in session.
[SPEAK:Phoenix]
Phoenix: The defense is ready, Your Honor.
[CAMERA_PAN:2,10,-4]
"""


@pytest.fixture
def console():
    stage, events = create_console_stage()
    return stage, events, create_decoder(stage)


def _player(decoder, on_error="halt"):
    config = DirectorConfig()
    config.playback.on_error = on_error
    shown = []
    return ScriptPlayer(decoder, config, show_line=shown.append), shown


class TestScriptPlayer:

    def test_plays_directives_and_dialogue(self, console):
        stage, events, decoder = console
        player, shown = _player(decoder)

        report = player.play(SCRIPT.splitlines())

        assert report.ok
        assert not report.halted
        assert report.directives == 4
        assert report.dialogue_lines == 2
        assert shown == [
            "Judge: Court is now in session.",
            "Phoenix: The defense is ready, Your Honor.",
        ]
        assert stage.scene.scene_name == "Courtroom"
        assert stage.audio.song == "Trial"
        assert stage.actor.speaker == "Phoenix"

    def test_comments_and_blank_lines_are_ignored(self, console):
        _, events, decoder = console
        player, shown = _player(decoder)
        report = player.play(["", "   ", "# [SCENE:Hidden]"])
        assert report == PlaybackReport()
        assert events == []
        assert shown == []

    def test_halt_stops_at_first_error(self, console):
        stage, events, decoder = console
        player, _ = _player(decoder, on_error="halt")

        report = player.play(["[SCENE:Lobby]", "[SHOWACTOR:maybe]", "[PLAYSONG:Lobby]"])

        assert report.halted
        assert len(report.errors) == 1
        line_no, error = report.errors[0]
        assert line_no == 2
        assert error.kind is ErrorKind.PARAMETER_COERCION
        assert stage.audio.song is None

    def test_skip_continues_after_error(self, console):
        stage, _, decoder = console
        player, _ = _player(decoder, on_error="skip")

        report = player.play(["[BOGUS_ACTION:1]", "[PLAYSONG:Lobby]", "[FADE_IN]"])

        assert not report.halted
        assert [line_no for line_no, _ in report.errors] == [1, 3]
        assert [e.kind for _, e in report.errors] == [ErrorKind.UNKNOWN_ACTION, ErrorKind.ARITY_MISMATCH]
        assert stage.audio.song == "Lobby"

    def test_echo_disabled(self, console):
        _, _, decoder = console
        player, shown = _player(decoder)
        player.config.playback.echo_dialogue = False
        report = player.play(["Hello."])
        assert shown == []
        assert report.dialogue_lines == 1

    def test_directive_line_with_surrounding_whitespace(self, console):
        stage, _, decoder = console
        player, _ = _player(decoder)
        result = player.play_line("   [SCENE:Lobby]  \n")
        assert not result.is_error
        assert stage.scene.scene_name == "Lobby"

    def test_play_file(self, console, tmp_path):
        _, _, decoder = console
        script = tmp_path / "chapter1.txt"
        script.write_text(SCRIPT, encoding="utf-8")
        player, _ = _player(decoder)
        assert player.play_file(script).directives == 4


class TestMain:

    def test_plays_script(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        script = tmp_path / "chapter1.txt"
        script.write_text(SCRIPT, encoding="utf-8")
        assert main([str(script), "-q"]) == 0

    def test_halted_script_exits_nonzero(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        script = tmp_path / "broken.txt"
        script.write_text("[SCENE:A:B]\n", encoding="utf-8")
        assert main([str(script), "-q"]) == 1

    def test_skip_policy_exits_zero(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        script = tmp_path / "broken.txt"
        script.write_text("[SCENE:A:B]\n", encoding="utf-8")
        assert main([str(script), "-q", "--on-error", "skip"]) == 0

    def test_missing_script(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main([str(tmp_path / "nope.txt"), "-q"]) == 1

    def test_list_actions(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        assert main(["--list-actions", "-q"]) == 0
        out = capsys.readouterr().out
        assert "[CAMERA_PAN:duration,x,y]" in out
        assert "[HIDE_ITEM]" in out

    def test_interactive_session(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        lines = iter(["[FADE_IN:1.5]", "[BOGUS]", "hello", "/quit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

        assert main(["--interactive", "-q"]) == 0

        out = capsys.readouterr().out
        assert "[ok] FADE_IN(1.5,)" in out
        assert "[error] No action named 'BOGUS'" in out
        assert "[dialogue] hello" in out
