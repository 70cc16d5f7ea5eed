"""ApplyPilot: lay out generated cover letters as PDF and DOCX."""

from applypilot.export import (
    format_filename,
    render_letter,
    render_to_flow_format,
    render_to_page_format,
)

__all__ = [
    "format_filename",
    "render_letter",
    "render_to_flow_format",
    "render_to_page_format",
]
