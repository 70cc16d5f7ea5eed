"""Cover letter export: letter text to PDF/DOCX bytes with a download name."""

from __future__ import annotations

import logging

from applypilot.config import AppConfig
from applypilot.errors import UnsupportedFormatError
from applypilot.export.docx_renderer import render_docx
from applypilot.export.filename import content_disposition, format_filename
from applypilot.export.pdf_renderer import render_page
from applypilot.models.letter import DocumentMetadata, RenderedDocument, Segment
from applypilot.parsers.segmenter import segment
from applypilot.parsers.text import clean_letter_text

logger = logging.getLogger(__name__)

MEDIA_TYPES = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
AVAILABLE_FORMATS = tuple(MEDIA_TYPES)


def segment_letter(letter_text: str, config: AppConfig | None = None) -> list[Segment]:
    """Clean generated text and classify its lines."""
    config = config or AppConfig()
    return segment(clean_letter_text(letter_text), config.layout.closing_phrases)


def render_to_page_format(letter_text: str, config: AppConfig | None = None) -> bytes:
    """Render letter text to PDF bytes."""
    config = config or AppConfig()
    return render_page(segment_letter(letter_text, config), config)


def render_to_flow_format(letter_text: str, config: AppConfig | None = None) -> bytes:
    """Render letter text to DOCX bytes."""
    config = config or AppConfig()
    return render_docx(segment_letter(letter_text, config), config)


def render_letter(
    letter_text: str,
    metadata: DocumentMetadata | dict | None = None,
    fmt: str = "pdf",
    config: AppConfig | None = None,
) -> RenderedDocument:
    """Render one format and attach the derived download filename."""
    config = config or AppConfig()
    fmt = fmt.lower().lstrip(".")
    if fmt == "pdf":
        content = render_to_page_format(letter_text, config)
    elif fmt == "docx":
        content = render_to_flow_format(letter_text, config)
    else:
        raise UnsupportedFormatError(fmt)

    filename = format_filename(metadata, fmt, config.output)
    logger.info("Rendered %s (%d bytes) as %r", fmt, len(content), filename)
    return RenderedDocument(
        content=content,
        filename=filename,
        media_type=MEDIA_TYPES[fmt],
        format=fmt,
    )


__all__ = [
    "AVAILABLE_FORMATS",
    "content_disposition",
    "format_filename",
    "render_letter",
    "render_to_flow_format",
    "render_to_page_format",
    "segment_letter",
]
