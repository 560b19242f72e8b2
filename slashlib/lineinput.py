"""Prompted line input for the interactive shell."""

from __future__ import annotations

import sys
from typing import Optional, TextIO


def read_line(
    prompt: str = "",
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> Optional[str]:
    """Show *prompt* and read one line without its newline.

    Returns None at end of input when nothing was read; a final line
    without a newline is returned as is.
    """
    if stdin is None:
        stdin = sys.stdin
    if stdout is None:
        stdout = sys.stdout

    stdout.write(prompt)
    stdout.flush()

    chars: list[str] = []
    while True:
        ch = stdin.read(1)
        if not ch:
            return "".join(chars) if chars else None
        if ch == "\n":
            return "".join(chars)
        chars.append(ch)