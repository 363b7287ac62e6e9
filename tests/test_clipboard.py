from io import StringIO

import pyperclip
import pytest

from ton_quick_transfer.shared.clipboard import (
    CopyResult,
    copy_text,
    copy_with_osc52,
    copy_with_pyperclip,
)

MESSAGE_HASH = "ab" * 32


@pytest.mark.unit
def test_copy_with_osc52_writes_escape_sequence(monkeypatch):
    monkeypatch.delenv("TMUX", raising=False)
    stream = StringIO()
    assert copy_with_osc52("ABC", stream=stream)

    value = stream.getvalue()
    assert value == "\x1b]52;c;QUJD\x07"


@pytest.mark.unit
def test_copy_with_osc52_wraps_for_tmux(monkeypatch):
    monkeypatch.setenv("TMUX", "/tmp/tmux-1000/default,1,0")
    stream = StringIO()
    assert copy_with_osc52("ABC", stream=stream)
    assert stream.getvalue().startswith("\x1bPtmux;")


@pytest.mark.unit
def test_empty_text_is_not_copied():
    assert copy_with_osc52("", stream=StringIO()) is False
    assert copy_with_pyperclip("") is False


@pytest.mark.unit
def test_copy_with_pyperclip_success(monkeypatch):
    state = {"value": ""}
    monkeypatch.setattr(pyperclip, "copy", lambda text: state.update(value=text))
    monkeypatch.setattr(pyperclip, "paste", lambda: state["value"])

    assert copy_with_pyperclip(MESSAGE_HASH)
    assert state["value"] == MESSAGE_HASH


@pytest.mark.unit
def test_copy_with_pyperclip_unavailable(monkeypatch):
    def no_clipboard(text):
        raise pyperclip.PyperclipException("no backend")

    monkeypatch.setattr(pyperclip, "copy", no_clipboard)
    assert copy_with_pyperclip(MESSAGE_HASH) is False


@pytest.mark.unit
def test_copy_text_falls_back_to_osc52(monkeypatch):
    monkeypatch.setattr(
        "ton_quick_transfer.shared.clipboard.copy_with_pyperclip", lambda text: False
    )
    monkeypatch.setattr(
        "ton_quick_transfer.shared.clipboard.copy_with_osc52", lambda text: True
    )

    assert copy_text(MESSAGE_HASH) == CopyResult(success=True, method="osc52")


@pytest.mark.unit
def test_copy_text_reports_failure(monkeypatch):
    monkeypatch.setattr(
        "ton_quick_transfer.shared.clipboard.copy_with_pyperclip", lambda text: False
    )
    monkeypatch.setattr(
        "ton_quick_transfer.shared.clipboard.copy_with_osc52", lambda text: False
    )

    assert copy_text(MESSAGE_HASH) == CopyResult(success=False, method=None)
