"""Page renderer: lays the letter out on a fixed-size PDF page with fpdf2."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from fpdf import FPDF
from fpdf.errors import FPDFException

from applypilot.config import AppConfig, PageConfig
from applypilot.errors import RenderError
from applypilot.layout.rhythm import Rhythm, build_layout
from applypilot.models.letter import BlockKind, InlineRun, PlacedBlock, Segment

logger = logging.getLogger(__name__)

UNICODE_FAMILY = "LetterSans"

# Core PDF fonts only cover Latin-1
_LATIN1_REPLACEMENTS = str.maketrans(
    {
        "\u2018": "'",
        "\u2019": "'",
        "\u201c": '"',
        "\u201d": '"',
        "\u2013": "-",
        "\u2014": "--",
        "\u2026": "...",
        "\u2022": "\xb7",
        "\u00a0": " ",
        "\u2009": " ",
        "\u2212": "-",
    }
)


@dataclass
class LayoutCursor:
    x: float
    y: float


@dataclass
class PageLayout:
    pdf: FPDF
    placed: list[PlacedBlock] = field(default_factory=list)
    overflow: bool = False


def _bold_variant(path: Path) -> Path | None:
    """Find the bold face next to a regular TTF (DejaVuSans-Bold.ttf, arialbd.ttf, ...)."""
    stem = path.stem
    names = [
        stem.replace("-Regular", "-Bold"),
        f"{stem}-Bold",
        f"{stem} Bold",
        f"{stem}bd",
    ]
    for name in names:
        candidate = path.with_name(f"{name}{path.suffix}")
        if candidate != path and candidate.exists():
            return candidate
    return None


def _find_unicode_font(paths: tuple[str, ...]) -> tuple[Path, Path] | None:
    """Search for a regular + bold Unicode TTF pair on the system."""
    for raw in paths:
        path = Path(raw)
        if path.suffix.lower() != ".ttf" or not path.exists():
            continue
        bold = _bold_variant(path)
        if bold is not None:
            return path, bold
    return None


class _PageContext:
    """Everything a single page render mutates: canvas, cursor, current font."""

    def __init__(self, config: AppConfig, rhythm: Rhythm):
        self.page = config.page
        self.layout = config.layout
        self.rhythm = rhythm

        pdf = FPDF(orientation="portrait", unit="pt", format=self.page.format)
        pdf.set_margins(self.page.margin, self.page.margin, self.page.margin)
        pdf.set_auto_page_break(auto=False)
        pdf.set_creator("applypilot")
        pdf.set_title("Cover Letter")
        pdf.add_page()
        self.pdf = pdf

        self.family, self.unicode = self._load_fonts(self.page)
        self.bold = False
        pdf.set_font(self.family, style="", size=self.layout.font_size)

        self.cursor = LayoutCursor(x=self.page.margin, y=self.page.margin)

    def _load_fonts(self, page: PageConfig) -> tuple[str, bool]:
        found = _find_unicode_font(page.unicode_font_paths)
        if found:
            regular, bold = found
            try:
                self.pdf.add_font(UNICODE_FAMILY, "", str(regular))
                self.pdf.add_font(UNICODE_FAMILY, "B", str(bold))
                logger.debug("Using Unicode font %s", regular)
                return UNICODE_FAMILY, True
            except (FPDFException, OSError, RuntimeError):
                logger.warning("Failed to load font %s, using %s", regular, page.font_family)
        else:
            logger.debug("No Unicode TTF found, using core font %s", page.font_family)
        return page.font_family, False

    @property
    def bottom_limit(self) -> float:
        return self.pdf.h - self.page.margin

    def safe_text(self, text: str) -> str:
        """Ensure text is encodable by the current font. Replace if needed."""
        if self.unicode:
            return text
        text = text.translate(_LATIN1_REPLACEMENTS)
        return text.encode("latin-1", errors="replace").decode("latin-1")

    def set_weight(self, bold: bool) -> None:
        if bold != self.bold:
            self.pdf.set_font(self.family, style="B" if bold else "", size=self.layout.font_size)
            self.bold = bold

    def write_runs(self, runs: tuple[InlineRun, ...], left: float) -> None:
        """Write runs from ``left``; wrapped lines return to ``left``."""
        pdf = self.pdf
        line_height = self.rhythm.line_height
        pdf.set_left_margin(left)
        pdf.set_xy(left, self.cursor.y)
        for run in runs:
            self.set_weight(run.bold)
            pdf.write(line_height, self.safe_text(run.text))
        pdf.ln(line_height)
        pdf.set_left_margin(self.page.margin)
        self.set_weight(False)
        self.cursor.x = self.page.margin
        self.cursor.y = pdf.get_y()

    def place_glyph(self, glyph: str, x: float) -> None:
        self.set_weight(False)
        self.pdf.set_xy(x, self.cursor.y)
        self.pdf.cell(self.layout.bullet_text_indent - self.layout.bullet_indent,
                      self.rhythm.line_height, self.safe_text(glyph))

    def advance(self, points: float) -> None:
        self.cursor.y += points
        self.pdf.set_y(self.cursor.y)


def layout_page(segments: list[Segment], config: AppConfig | None = None) -> PageLayout:
    """Draw the segments onto a fresh page and return the canvas with its trace."""
    config = config or AppConfig()
    rhythm = Rhythm.from_config(config.layout)
    ctx = _PageContext(config, rhythm)
    result = PageLayout(pdf=ctx.pdf)
    margin = config.page.margin

    for block in build_layout(segments):
        top = ctx.cursor.y
        if block.kind is BlockKind.BULLET:
            ctx.place_glyph(config.page.bullet_glyph, margin + config.layout.bullet_indent)
            ctx.write_runs(block.runs, margin + config.layout.bullet_text_indent)
        elif block.kind.has_text:
            ctx.write_runs(block.runs, margin)
        bottom = ctx.cursor.y

        gap = rhythm.points(block.gap_after)
        ctx.advance(gap)
        result.placed.append(PlacedBlock(kind=block.kind, top=top, bottom=bottom, gap_after=gap))

        if not result.overflow and ctx.cursor.y > ctx.bottom_limit:
            # No pagination: the caller is expected to keep letters to one page
            result.overflow = True
            logger.warning("Letter overflows the page at block %d (%s)", len(result.placed), block.kind.value)

    logger.debug("Page layout: %d blocks, final y=%.1f", len(result.placed), ctx.cursor.y)
    return result


def render_page(segments: list[Segment], config: AppConfig | None = None) -> bytes:
    """Render segments to PDF bytes."""
    try:
        layout = layout_page(segments, config)
        return bytes(layout.pdf.output())
    except (FPDFException, OSError) as e:
        logger.error("PDF rendering failed", exc_info=True)
        raise RenderError("pdf", str(e)) from e
