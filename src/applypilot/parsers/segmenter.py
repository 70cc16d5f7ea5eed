"""Line classifier: splits letter text into header and body segments."""

from __future__ import annotations

import logging

from applypilot.config import DEFAULT_CLOSING_PHRASES
from applypilot.models.letter import Segment, SegmentKind
from applypilot.parsers.markup import parse_inline, split_bullet, strip_markup
from applypilot.parsers.text import normalize_newlines

logger = logging.getLogger(__name__)

SALUTATION_PREFIX = "Dear"
MAX_CLOSING_LENGTH = 60


def segment(
    text: str,
    closing_phrases: tuple[str, ...] = DEFAULT_CLOSING_PHRASES,
) -> list[Segment]:
    """Classify every line of ``text``.

    Non-empty lines before the first ``Dear`` line form the header: the
    first is the date, the rest are contact lines. Blank lines inside the
    header are skipped. Without a ``Dear`` line there is no header and
    every line goes through the body rules.
    """
    lines = normalize_newlines(text).split("\n") if text else []

    salutation_at = next(
        (i for i, line in enumerate(lines) if line.strip().startswith(SALUTATION_PREFIX)),
        None,
    )

    segments: list[Segment] = []
    if salutation_at is not None:
        header = [line.strip() for line in lines[:salutation_at] if line.strip()]
        segments.extend(_header_segments(header))
        body_lines = lines[salutation_at:]
    else:
        body_lines = lines

    for i, line in enumerate(body_lines):
        is_salutation = salutation_at is not None and i == 0
        segments.append(_classify_body_line(line, is_salutation, closing_phrases))

    logger.debug(
        "Segmented %d lines: %d header, salutation=%s",
        len(lines),
        sum(1 for s in segments if s.kind is SegmentKind.HEADER),
        salutation_at is not None,
    )
    return segments


def _header_segments(header: list[str]) -> list[Segment]:
    return [
        Segment(
            kind=SegmentKind.HEADER,
            text=line,
            runs=tuple(parse_inline(line)),
            header_role="date" if i == 0 else "contact",
        )
        for i, line in enumerate(header)
    ]


def _classify_body_line(
    line: str,
    is_salutation: bool,
    closing_phrases: tuple[str, ...],
) -> Segment:
    stripped = line.strip()
    if not stripped:
        return Segment(kind=SegmentKind.BLANK)

    if is_salutation:
        return Segment(
            kind=SegmentKind.SALUTATION, text=stripped, runs=tuple(parse_inline(stripped))
        )

    bullet = split_bullet(stripped)
    if bullet is not None:
        _, item = bullet
        return Segment(kind=SegmentKind.BULLET, text=item, runs=tuple(parse_inline(item)))

    kind = SegmentKind.CLOSING if is_closing_line(stripped, closing_phrases) else SegmentKind.BODY
    return Segment(kind=kind, text=stripped, runs=tuple(parse_inline(stripped)))


def is_closing_line(
    line: str,
    closing_phrases: tuple[str, ...] = DEFAULT_CLOSING_PHRASES,
) -> bool:
    """True for "Sincerely," and similar short sign-off lines (case-insensitive)."""
    lowered = strip_markup(line).strip().lower()
    if len(lowered) > MAX_CLOSING_LENGTH:
        return False
    for phrase in closing_phrases:
        if lowered.startswith(phrase):
            rest = lowered[len(phrase):]
            if not rest or not rest[0].isalpha():
                return True
    return False
