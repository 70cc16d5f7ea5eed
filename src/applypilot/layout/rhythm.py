"""Shared vertical rhythm for the page and flow renderers.

``build_layout`` turns segments into an ordered list of blocks, each with
an abstract gap after it. The renderers only translate blocks into their
own primitives; every spacing decision lives here.

Gap rules:

- header date: one unit, then contact lines with no gap between them
- one spacer unit after the contact block, before the salutation
- salutation, body and blank lines: one unit
- closing line and the blank line(s) right after it: none, so the
  signature sits directly under "Sincerely,"
- bullets: one unit, except the last bullet in the letter
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from applypilot.config import LayoutConfig
from applypilot.models.letter import BlockKind, Gap, LayoutBlock, Segment, SegmentKind

logger = logging.getLogger(__name__)

TWIPS_PER_POINT = 20

_BODY_KINDS = {
    SegmentKind.SALUTATION: BlockKind.SALUTATION,
    SegmentKind.BODY: BlockKind.BODY,
    SegmentKind.BULLET: BlockKind.BULLET,
    SegmentKind.CLOSING: BlockKind.CLOSING,
    SegmentKind.BLANK: BlockKind.BLANK,
}


@dataclass(frozen=True)
class Rhythm:
    """Maps abstract gaps to points and twips."""

    font_size: float = 11.0
    line_height_factor: float = 1.2
    spacing: str = "half"

    @classmethod
    def from_config(cls, config: LayoutConfig) -> Rhythm:
        return cls(
            font_size=config.font_size,
            line_height_factor=config.line_height_factor,
            spacing=config.spacing,
        )

    @property
    def line_height(self) -> float:
        return self.font_size * self.line_height_factor

    @property
    def unit(self) -> float:
        return self.line_height * (0.5 if self.spacing == "half" else 1.0)

    def points(self, gap: Gap) -> float:
        return self.unit if gap is Gap.UNIT else 0.0

    def twips(self, gap: Gap) -> int:
        return round(self.points(gap) * TWIPS_PER_POINT)


def to_twips(points: float) -> int:
    return round(points * TWIPS_PER_POINT)


def build_layout(segments: list[Segment]) -> list[LayoutBlock]:
    """Build the shared block plan from classified segments."""
    blocks: list[LayoutBlock] = []

    header = [s for s in segments if s.kind is SegmentKind.HEADER]
    for seg in header:
        if seg.header_role == "date":
            blocks.append(LayoutBlock(kind=BlockKind.HEADER_DATE, runs=seg.runs, gap_after=Gap.UNIT))
        else:
            blocks.append(
                LayoutBlock(kind=BlockKind.HEADER_CONTACT, runs=seg.runs, gap_after=Gap.NONE)
            )
    if any(s.header_role == "contact" for s in header):
        blocks.append(LayoutBlock(kind=BlockKind.HEADER_SPACER, gap_after=Gap.UNIT))

    body = [s for s in segments if s.kind is not SegmentKind.HEADER]
    last_bullet = max(
        (i for i, s in enumerate(body) if s.kind is SegmentKind.BULLET),
        default=None,
    )

    after_closing = False
    for i, seg in enumerate(body):
        kind = _BODY_KINDS[seg.kind]
        gap = Gap.UNIT
        if kind is BlockKind.CLOSING:
            gap = Gap.NONE
        elif kind is BlockKind.BLANK and after_closing:
            gap = Gap.NONE
        elif kind is BlockKind.BULLET and i == last_bullet:
            gap = Gap.NONE

        if kind is BlockKind.CLOSING:
            after_closing = True
        elif kind is not BlockKind.BLANK:
            after_closing = False

        blocks.append(LayoutBlock(kind=kind, runs=seg.runs, gap_after=gap))

    logger.debug("Layout plan: %d blocks from %d segments", len(blocks), len(segments))
    return blocks
