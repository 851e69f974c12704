"""Tests for clipboard copy with auto-clear."""

from __future__ import annotations

import threading

import pyperclip
import pytest

from vaultguard.utils import clipboard_utils
from vaultguard.utils.clipboard_utils import (
    cancel_auto_clear,
    clear_clipboard,
    copy_to_clipboard,
)


class FakeClipboard:
    def __init__(self) -> None:
        self.value = ""
        self.copies: list[str] = []

    def copy(self, text: str) -> None:
        self.value = text
        self.copies.append(text)

    def paste(self) -> str:
        return self.value


@pytest.fixture
def clipboard(monkeypatch) -> FakeClipboard:
    fake = FakeClipboard()
    monkeypatch.setattr(pyperclip, "copy", fake.copy)
    monkeypatch.setattr(pyperclip, "paste", fake.paste)
    monkeypatch.setattr(clipboard_utils, "_last_copied", None)
    monkeypatch.setattr(clipboard_utils, "_clear_timer", None)
    yield fake
    cancel_auto_clear()


class TestCopyToClipboard:
    def test_copies_text(self, clipboard) -> None:
        assert copy_to_clipboard("s3cret!", timeout=0)
        assert clipboard.value == "s3cret!"
        assert clipboard_utils._clear_timer is None

    def test_nothing_to_copy(self, clipboard) -> None:
        assert not copy_to_clipboard("", timeout=0)
        assert clipboard.copies == []

    def test_schedules_auto_clear(self, clipboard) -> None:
        copy_to_clipboard("s3cret!", timeout=60)
        assert isinstance(clipboard_utils._clear_timer, threading.Timer)
        cancel_auto_clear()
        assert clipboard_utils._clear_timer is None
        assert clipboard.value == "s3cret!"

    def test_new_copy_replaces_pending_clear(self, clipboard) -> None:
        copy_to_clipboard("first", timeout=60)
        first_timer = clipboard_utils._clear_timer
        copy_to_clipboard("second", timeout=60)
        assert clipboard_utils._clear_timer is not first_timer
        assert not first_timer.is_alive() or first_timer.finished.is_set()

    def test_auto_clear_runs(self, clipboard) -> None:
        copy_to_clipboard("s3cret!", timeout=0.05)
        timer = clipboard_utils._clear_timer
        timer.join(timeout=5)
        assert clipboard.value == ""


class TestClearClipboard:
    def test_clears_our_copy(self, clipboard) -> None:
        copy_to_clipboard("s3cret!", timeout=0)
        clear_clipboard()
        assert clipboard.value == ""

    def test_leaves_foreign_content(self, clipboard) -> None:
        copy_to_clipboard("s3cret!", timeout=0)
        clipboard.copy("something the user copied later")
        clear_clipboard()
        assert clipboard.value == "something the user copied later"

    def test_noop_without_prior_copy(self, clipboard) -> None:
        clipboard.value = "untouched"
        clear_clipboard()
        assert clipboard.copies == []
        assert clipboard.value == "untouched"
