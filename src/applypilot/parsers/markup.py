"""Inline markup tokenizer: bullet markers and **bold** spans."""

from __future__ import annotations

import re

from applypilot.models.letter import InlineRun

BULLET_MARKERS = "*·•"  # *, middle dot, bullet

# Marker, at least one whitespace, then the item text
BULLET_PATTERN = re.compile(rf"^([{re.escape(BULLET_MARKERS)}])\s+(.*)$")

# Non-greedy, at least one char inside, never spans a newline
BOLD_PATTERN = re.compile(r"\*\*([^\n]+?)\*\*")


def split_bullet(line: str) -> tuple[str, str] | None:
    """Return ``(marker, item_text)`` if the line is a bullet, else None.

    ``**Bold** lead`` is not a bullet: the marker must be followed by
    whitespace.
    """
    match = BULLET_PATTERN.match(line.strip())
    if not match:
        return None
    return match.group(1), match.group(2)


def parse_inline(line: str) -> list[InlineRun]:
    """Split a line into plain and bold runs.

    Matched ``**`` pairs are removed; an unterminated ``**`` stays in the
    plain text. Joining the run texts gives the line minus matched
    delimiters.
    """
    runs: list[InlineRun] = []
    pos = 0
    for match in BOLD_PATTERN.finditer(line):
        if match.start() > pos:
            runs.append(InlineRun(text=line[pos : match.start()], bold=False))
        runs.append(InlineRun(text=match.group(1), bold=True))
        pos = match.end()
    if pos < len(line):
        runs.append(InlineRun(text=line[pos:], bold=False))
    return [run for run in runs if run.text]


def strip_markup(line: str) -> str:
    """Visible text of a line with bold delimiters removed."""
    return "".join(run.text for run in parse_inline(line))
