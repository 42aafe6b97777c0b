"""
Tests for the directive tokenizer.
"""

import pytest

from director_actions.errors import MalformedDirectiveError
from director_actions.tokenizer import Directive, is_directive_line, tokenize


class TestTokenize:

    def test_single_parameter(self):
        assert tokenize("[FADE_IN:1.5]") == Directive("FADE_IN", ("1.5",))

    def test_multiple_parameters(self):
        directive = tokenize("[CAMERA_PAN:2,10,-4]")
        assert directive.action == "CAMERA_PAN"
        assert directive.parameters == ("2", "10", "-4")

    def test_no_parameters(self):
        assert tokenize("[HIDE_ITEM]") == Directive("HIDE_ITEM", ())

    def test_empty_body(self):
        assert tokenize("[]") == Directive("", ())

    def test_trailing_colon_gives_one_empty_token(self):
        assert tokenize("[SCENE:]").parameters == ("",)

    def test_empty_tokens_are_kept(self):
        assert tokenize("[CAMERA_SET:,]").parameters == ("", "")

    def test_whitespace_is_not_trimmed(self):
        assert tokenize("[SPEAK: Maya ]").parameters == (" Maya ",)

    def test_action_is_case_preserved(self):
        assert tokenize("[fade_in:1]").action == "fade_in"

    def test_second_colon_is_malformed(self):
        with pytest.raises(MalformedDirectiveError) as exc_info:
            tokenize("[SCENE:Court:Lobby]")
        assert "[SCENE:Court:Lobby]" in str(exc_info.value)
        assert "only one ':'" in str(exc_info.value)

    @pytest.mark.parametrize("line", ["FADE_IN:1.5", "[FADE_IN:1.5", "FADE_IN]", "[", ""])
    def test_missing_brackets_is_malformed(self, line):
        with pytest.raises(MalformedDirectiveError):
            tokenize(line)


class TestIsDirectiveLine:

    @pytest.mark.parametrize("line", ["[HIDE_ITEM]", "[]", "[A:b,c]"])
    def test_bracketed(self, line):
        assert is_directive_line(line)

    @pytest.mark.parametrize("line", ["Hello there.", "[Objection!", "Hold it!]", "[", ""])
    def test_not_bracketed(self, line):
        assert not is_directive_line(line)
