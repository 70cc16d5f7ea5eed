"""Flow renderer: the same layout plan expressed as DOCX paragraph spacing."""

from __future__ import annotations

import logging
from io import BytesIO

from docx import Document
from docx.shared import Pt, Twips

from applypilot.config import AppConfig
from applypilot.errors import RenderError
from applypilot.layout.rhythm import Rhythm, build_layout, to_twips
from applypilot.models.letter import BlockKind, Gap, Indent, ParagraphSpec, Segment

logger = logging.getLogger(__name__)

# Exact pitch of an empty spacer/blank paragraph; the page engine gives these no line
EMPTY_LINE_TWIPS = 1

# fpdf2 page sizes in points, mirrored for the DOCX section
PAGE_SIZES = {
    "letter": (612.0, 792.0),
    "a4": (595.28, 841.89),
}


def render_flow(segments: list[Segment], config: AppConfig | None = None) -> list[ParagraphSpec]:
    """Turn segments into paragraph specs, one per emitted flow paragraph."""
    config = config or AppConfig()
    rhythm = Rhythm.from_config(config.layout)
    bullet_indent = Indent(
        left=to_twips(config.layout.bullet_text_indent),
        hanging=to_twips(config.layout.bullet_text_indent - config.layout.bullet_indent),
    )

    specs: list[ParagraphSpec] = []
    for block in build_layout(segments):
        if block.kind is BlockKind.BLANK and block.gap_after is Gap.NONE:
            # Zero height on the page, so nothing to emit under the closing
            continue
        is_bullet = block.kind is BlockKind.BULLET
        specs.append(
            ParagraphSpec(
                kind=block.kind,
                runs=block.runs,
                spacing_after=rhythm.twips(block.gap_after),
                indent=bullet_indent if is_bullet else None,
                is_bullet=is_bullet,
            )
        )
    logger.debug("Flow layout: %d paragraphs", len(specs))
    return specs


def pack_docx(specs: list[ParagraphSpec], config: AppConfig | None = None) -> bytes:
    """Write paragraph specs into a .docx and return its bytes."""
    config = config or AppConfig()
    rhythm = Rhythm.from_config(config.layout)
    try:
        doc = Document()
        _setup_page(doc, config, rhythm)
        for spec in specs:
            _add_paragraph(doc, spec, config.flow.bullet_glyph)
        buf = BytesIO()
        doc.save(buf)
        return buf.getvalue()
    except (KeyError, ValueError, OSError) as e:
        logger.error("DOCX rendering failed", exc_info=True)
        raise RenderError("docx", str(e)) from e


def render_docx(segments: list[Segment], config: AppConfig | None = None) -> bytes:
    """Render segments to DOCX bytes."""
    return pack_docx(render_flow(segments, config), config)


def _setup_page(doc: Document, config: AppConfig, rhythm: Rhythm) -> None:
    width, height = PAGE_SIZES[config.page.format]
    for section in doc.sections:
        section.page_width = Pt(width)
        section.page_height = Pt(height)
        section.top_margin = Pt(config.page.margin)
        section.bottom_margin = Pt(config.page.margin)
        section.left_margin = Pt(config.page.margin)
        section.right_margin = Pt(config.page.margin)

    # Set default font and a fixed line pitch matching the page renderer
    style = doc.styles["Normal"]
    style.font.name = config.flow.font_name
    style.font.size = Pt(config.layout.font_size)
    pf = style.paragraph_format
    pf.space_before = Pt(0)
    pf.space_after = Pt(0)
    pf.line_spacing = Pt(rhythm.line_height)


def _add_paragraph(doc: Document, spec: ParagraphSpec, bullet_glyph: str) -> None:
    para = doc.add_paragraph()
    pf = para.paragraph_format
    pf.space_before = Twips(0)
    pf.space_after = Twips(spec.spacing_after)
    if not spec.kind.has_text:
        pf.line_spacing = Twips(EMPTY_LINE_TWIPS)

    if spec.indent is not None:
        pf.left_indent = Twips(spec.indent.left)
        if spec.indent.hanging:
            pf.first_line_indent = Twips(-spec.indent.hanging)
            pf.tab_stops.add_tab_stop(Twips(spec.indent.left))

    if spec.is_bullet:
        para.add_run(f"{bullet_glyph}\t")

    for run in spec.runs:
        r = para.add_run(run.text)
        if run.bold:
            r.bold = True
