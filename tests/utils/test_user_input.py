"""Tests for interactive prompt helpers."""

from __future__ import annotations

from collections.abc import Callable

from vaultguard.utils.user_input import get_int, get_yes_no


def scripted(*answers: str) -> Callable[[str], str]:
    replies = iter(answers)
    return lambda prompt: next(replies)


class TestGetInt:
    def test_parses_number(self) -> None:
        assert get_int("n: ", read=scripted("42")) == 42

    def test_enter_returns_default(self) -> None:
        assert get_int("n: ", default=12, read=scripted("")) == 12

    def test_reprompts_on_garbage(self, capsys) -> None:
        assert get_int("n: ", read=scripted("abc", "-3", "7")) == 7
        assert capsys.readouterr().out.count("Invalid") == 2

    def test_quit(self) -> None:
        assert get_int("n: ", default=12, read=scripted("q")) is None


class TestGetYesNo:
    def test_default(self) -> None:
        assert get_yes_no("ok?", True, read=scripted("")) is True
        assert get_yes_no("ok?", False, read=scripted("")) is False

    def test_answers(self) -> None:
        assert get_yes_no("ok?", False, read=scripted("Y")) is True
        assert get_yes_no("ok?", True, read=scripted("no")) is False

    def test_reprompts(self) -> None:
        assert get_yes_no("ok?", False, read=scripted("maybe", "yes")) is True
