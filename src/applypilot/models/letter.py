"""Pydantic models for segmented letter text and its two layouts."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SegmentKind(str, Enum):
    HEADER = "header"
    BLANK = "blank"
    SALUTATION = "salutation"
    CLOSING = "closing"
    BODY = "body"
    BULLET = "bullet"


class BlockKind(str, Enum):
    HEADER_DATE = "header_date"
    HEADER_CONTACT = "header_contact"
    HEADER_SPACER = "header_spacer"
    SALUTATION = "salutation"
    BODY = "body"
    BULLET = "bullet"
    BLANK = "blank"
    CLOSING = "closing"

    @property
    def has_text(self) -> bool:
        return self not in (BlockKind.HEADER_SPACER, BlockKind.BLANK)

    @property
    def is_header(self) -> bool:
        return self in (BlockKind.HEADER_DATE, BlockKind.HEADER_CONTACT)


class Gap(str, Enum):
    """Vertical space left after a block, in abstract rhythm units."""

    NONE = "none"
    UNIT = "unit"


class InlineRun(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    bold: bool = False


class Segment(BaseModel):
    """One classified line of letter text."""

    model_config = ConfigDict(frozen=True)

    kind: SegmentKind
    text: str = ""  # trimmed line; bullet marker stripped for bullets
    runs: tuple[InlineRun, ...] = ()
    header_role: str | None = None  # "date" | "contact" for header lines


class LayoutBlock(BaseModel):
    """A unit of the shared layout plan consumed by both renderers."""

    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    runs: tuple[InlineRun, ...] = ()
    gap_after: Gap = Gap.UNIT


class PlacedBlock(BaseModel):
    """Where the page renderer put a block (points, top-down)."""

    kind: BlockKind
    top: float
    bottom: float
    gap_after: float


class Indent(BaseModel):
    model_config = ConfigDict(frozen=True)

    left: int  # twips
    hanging: int | None = None  # twips


class ParagraphSpec(BaseModel):
    """One paragraph of the flow document, before packing."""

    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    runs: tuple[InlineRun, ...] = ()
    spacing_after: int = 0  # twips
    indent: Indent | None = None
    is_bullet: bool = False


class DocumentMetadata(BaseModel):
    """Metadata extracted alongside the letter; drives the download name."""

    model_config = ConfigDict(populate_by_name=True)

    candidate_name: str | None = Field(default=None, alias="candidateName")
    company: str | None = None
    position: str | None = None


class RenderedDocument(BaseModel):
    content: bytes
    filename: str
    media_type: str
    format: str  # "pdf" | "docx"
