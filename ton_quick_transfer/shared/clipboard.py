"""Copy text (message hashes, addresses) to the system clipboard."""

from __future__ import annotations

import base64
import logging
import os
import sys
from dataclasses import dataclass
from typing import TextIO

import pyperclip

logger = logging.getLogger(__name__)


@dataclass
class CopyResult:
    success: bool
    method: str | None = None


def _write_control_sequence(sequence: str, stream: TextIO | None = None) -> bool:
    candidates: list[TextIO] = []
    if stream is not None:
        candidates.append(stream)

    # the TUI replaces sys.stdout; the original stream reaches the terminal
    if sys.__stdout__ is not None:
        candidates.append(sys.__stdout__)
    candidates.append(sys.stdout)

    for output in candidates:
        try:
            output.write(sequence)
            output.flush()
            return True
        except (OSError, ValueError):
            continue

    try:
        with open("/dev/tty", "w", encoding="utf-8") as tty:
            tty.write(sequence)
            tty.flush()
            return True
    except OSError:
        return False


def copy_with_osc52(text: str, stream: TextIO | None = None) -> bool:
    """Ask the terminal to set the clipboard; works over SSH."""
    if not text:
        return False

    payload = base64.b64encode(text.encode("utf-8")).decode("ascii")
    osc = f"\x1b]52;c;{payload}\x07"
    if os.getenv("TMUX"):
        osc = f"\x1bPtmux;\x1b{osc}\x1b\\"
    return _write_control_sequence(osc, stream=stream)


def copy_with_pyperclip(text: str) -> bool:
    if not text:
        return False

    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.debug("pyperclip copy failed: %s", e)
        return False

    try:
        return pyperclip.paste() == text
    except pyperclip.PyperclipException:
        # copy-only backends
        return True


def copy_text(text: str, prefer_osc52: bool = False) -> CopyResult:
    if prefer_osc52:
        methods = (("osc52", copy_with_osc52), ("pyperclip", copy_with_pyperclip))
    else:
        methods = (("pyperclip", copy_with_pyperclip), ("osc52", copy_with_osc52))

    for method_name, method in methods:
        if method(text):
            logger.debug("Copied %d characters via %s", len(text), method_name)
            return CopyResult(success=True, method=method_name)

    return CopyResult(success=False)
