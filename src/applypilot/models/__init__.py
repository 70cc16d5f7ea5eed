"""Data models for the cover letter renderer."""

from applypilot.models.letter import (
    BlockKind,
    DocumentMetadata,
    Gap,
    Indent,
    InlineRun,
    LayoutBlock,
    ParagraphSpec,
    PlacedBlock,
    RenderedDocument,
    Segment,
    SegmentKind,
)

__all__ = [
    "BlockKind",
    "DocumentMetadata",
    "Gap",
    "Indent",
    "InlineRun",
    "LayoutBlock",
    "ParagraphSpec",
    "PlacedBlock",
    "RenderedDocument",
    "Segment",
    "SegmentKind",
]
