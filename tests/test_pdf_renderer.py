"""Tests for the fpdf2 page renderer."""
from __future__ import annotations

import logging

import pytest
from fpdf.errors import FPDFException

from applypilot.config import AppConfig, LayoutConfig, PageConfig
from applypilot.errors import RenderError
from applypilot.export import pdf_renderer
from applypilot.export.pdf_renderer import layout_page, render_page
from applypilot.models.letter import BlockKind
from applypilot.parsers.segmenter import segment

LINE = 13.2
UNIT = 6.6


# ---------------------------------------------------------------------------
# render_page
# ---------------------------------------------------------------------------


def test_render_page_valid_pdf_magic(sample_letter, core_font_config):
    """Output should start with %PDF magic bytes."""
    result = render_page(segment(sample_letter), core_font_config)
    assert isinstance(result, bytes)
    assert result[:4] == b"%PDF"


def test_render_page_empty_input(core_font_config):
    """No segments still yields a one-page PDF."""
    result = render_page([], core_font_config)
    assert result[:4] == b"%PDF"


def test_render_page_default_config(sample_letter):
    """Default config works whether or not a Unicode TTF is installed."""
    assert render_page(segment(sample_letter))[:4] == b"%PDF"


def test_render_page_a4(sample_letter):
    config = AppConfig(page=PageConfig(format="a4", unicode_font_paths=()))
    layout = layout_page(segment(sample_letter), config)
    assert layout.pdf.h == pytest.approx(841.89, abs=0.01)


def test_core_font_handles_smart_punctuation(core_font_config):
    """Curly quotes and dashes are transliterated for Helvetica."""
    text = "Dear Team,\nI’m “ready” — truly…\n• Shipped → fast"
    assert render_page(segment(text), core_font_config)[:4] == b"%PDF"


def test_render_error_wraps_backend_failure(monkeypatch, sample_letter):
    def boom(*args, **kwargs):
        raise FPDFException("font missing")

    monkeypatch.setattr(pdf_renderer, "layout_page", boom)
    with pytest.raises(RenderError, match="Failed to render pdf: font missing") as exc:
        render_page(segment(sample_letter))
    assert exc.value.format == "pdf"


# ---------------------------------------------------------------------------
# layout_page trace
# ---------------------------------------------------------------------------


class TestPlacement:
    @pytest.fixture
    def placed(self, sample_letter, core_font_config):
        return layout_page(segment(sample_letter), core_font_config).placed

    def test_starts_at_top_margin(self, placed):
        assert placed[0].kind is BlockKind.HEADER_DATE
        assert placed[0].top == pytest.approx(72)
        assert placed[0].bottom == pytest.approx(72 + LINE)

    def test_date_then_unit_gap(self, placed):
        assert placed[0].gap_after == pytest.approx(UNIT)
        assert placed[1].top == pytest.approx(placed[0].bottom + UNIT)

    def test_contact_lines_touch(self, placed):
        contacts = [p for p in placed if p.kind is BlockKind.HEADER_CONTACT]
        assert len(contacts) == 3
        for upper, lower in zip(contacts, contacts[1:]):
            assert upper.gap_after == 0
            assert lower.top == pytest.approx(upper.bottom)

    def test_spacer_before_salutation(self, placed):
        spacer = placed[4]
        assert spacer.kind is BlockKind.HEADER_SPACER
        assert spacer.bottom == pytest.approx(spacer.top)
        assert placed[5].kind is BlockKind.SALUTATION
        assert placed[5].top == pytest.approx(spacer.top + UNIT)

    def test_bullet_gaps(self, placed):
        bullets = [p for p in placed if p.kind is BlockKind.BULLET]
        assert [b.gap_after for b in bullets[:-1]] == [pytest.approx(UNIT)] * 2
        assert bullets[-1].gap_after == 0

    def test_signature_directly_under_closing(self, placed):
        i = next(i for i, p in enumerate(placed) if p.kind is BlockKind.CLOSING)
        closing = placed[i]
        signature = next(p for p in placed[i + 1:] if p.kind.has_text)
        assert closing.gap_after == 0
        assert signature.top == pytest.approx(closing.bottom)

    def test_blocks_never_overlap(self, placed):
        for upper, lower in zip(placed, placed[1:]):
            assert lower.top == pytest.approx(upper.bottom + upper.gap_after)

    def test_full_line_rhythm(self, sample_letter):
        config = AppConfig(layout=LayoutConfig(spacing="full"), page=PageConfig(unicode_font_paths=()))
        placed = layout_page(segment(sample_letter), config).placed
        assert placed[0].gap_after == pytest.approx(LINE)


class TestOverflow:
    def test_single_page_letter_fits(self, sample_letter, core_font_config):
        assert layout_page(segment(sample_letter), core_font_config).overflow is False

    def test_long_letter_flags_overflow(self, long_letter, core_font_config, caplog):
        with caplog.at_level(logging.WARNING, logger="applypilot.export.pdf_renderer"):
            layout = layout_page(segment(long_letter), core_font_config)
        assert layout.overflow is True
        assert layout.pdf.pages_count == 1
        warnings = [r for r in caplog.records if "overflows" in r.getMessage()]
        assert len(warnings) == 1

    def test_wrapped_paragraph_is_taller(self, long_letter, core_font_config):
        placed = layout_page(segment(long_letter), core_font_config).placed
        body = next(p for p in placed if p.kind is BlockKind.BODY)
        assert body.bottom - body.top > LINE * 2
