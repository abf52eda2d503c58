from __future__ import annotations

import re
from typing import List

_ASCII_WS = re.compile(r"[ \t\n\f\r]+")


def _chunks(word: str, n: int) -> List[str]:
    return [word[i:i + n] for i in range(0, len(word), n)]


def wrap_words(text: str, max_line: int) -> List[str]:
    """
    Greedy word wrap: fill each line with as many whole words as fit.

    A line is closed when it already holds a word and adding " <word>" would
    take it past `max_line` characters. Words longer than `max_line` are cut
    into `max_line`-sized pieces, so no returned line is ever longer than
    `max_line`. Runs of ASCII whitespace collapse to a single space; other
    spaces (e.g. U+00A0) stay inside their word.
    """
    if max_line < 1:
        raise ValueError("max_line must be >= 1")

    lines: List[str] = []
    line: List[str] = []
    line_len = 0  # length of " ".join(line)
    for word in (w for w in _ASCII_WS.split(text) if w):
        for piece in _chunks(word, max_line) if len(word) > max_line else [word]:
            if line and line_len + 1 + len(piece) > max_line:
                lines.append(" ".join(line))
                line, line_len = [], 0
            line_len += len(piece) + (1 if line else 0)
            line.append(piece)
    if line:
        lines.append(" ".join(line))
    return lines
