"""Download filename derived from the letter's metadata."""

from __future__ import annotations

import logging
import re
from urllib.parse import quote

from pydantic import ValidationError

from applypilot.config import OutputConfig
from applypilot.models.letter import DocumentMetadata

logger = logging.getLogger(__name__)

# Placeholders the metadata extraction returns when it fails
DEFAULT_CANDIDATE = "Candidate"
DEFAULT_COMPANY = "Company"
DEFAULT_POSITION = "Position"

# Illegal on Windows/macOS, plus quotes and control characters
_ILLEGAL_CHARS = re.compile(r"[<>:\"/\\|?*'`‘’“”\x00-\x1f\x7f]")
_WHITESPACE = re.compile(r"\s+")


def sanitize_component(value: str | None, max_length: int | None = None) -> str:
    """Make one metadata value safe for use in a filename."""
    if not value:
        return ""
    if max_length is None:
        max_length = OutputConfig().max_field_length
    text = _ILLEGAL_CHARS.sub("", str(value))
    text = _WHITESPACE.sub(" ", text).strip()
    return text[:max_length].strip(" .")


def format_filename(
    metadata: DocumentMetadata | dict | None,
    extension: str,
    config: OutputConfig | None = None,
) -> str:
    """Build "{name} - {company} {position}.{ext}", or "cover-letter.{ext}"."""
    config = config or OutputConfig()
    ext = re.sub(r"[^a-z0-9]", "", (extension or "").lower())
    suffix = f".{ext}" if ext else ""

    if metadata is not None and not isinstance(metadata, DocumentMetadata):
        try:
            metadata = DocumentMetadata.model_validate(metadata)
        except ValidationError as e:
            logger.warning("Unusable filename metadata, using fallback: %s", e)
            metadata = None
    if metadata is None:
        return f"{config.fallback_stem}{suffix}"

    name = sanitize_component(metadata.candidate_name, config.max_field_length)
    company = sanitize_component(metadata.company, config.max_field_length)
    position = sanitize_component(metadata.position, config.max_field_length)

    defaults = (DEFAULT_CANDIDATE, DEFAULT_COMPANY, DEFAULT_POSITION)
    values = (name, company, position)
    if all(values) and all(v.casefold() != d.casefold() for v, d in zip(values, defaults)):
        return f"{name} - {company} {position}{suffix}"
    return f"{config.fallback_stem}{suffix}"


def content_disposition(filename: str) -> str:
    """Attachment header value with an ASCII fallback and RFC 5987 filename*."""
    ascii_name = filename.encode("ascii", errors="ignore").decode("ascii").replace('"', "")
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"
