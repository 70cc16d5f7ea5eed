"""Shared test fixtures."""

from __future__ import annotations

import pytest

from applypilot.config import AppConfig, PageConfig
from applypilot.models.letter import DocumentMetadata


@pytest.fixture
def sample_letter() -> str:
    return """October 17, 2026
Jane O'Brien
(555) 123-4567
jane@example.com

Dear Hiring Manager,

I am excited to apply for the **Senior Engineer** role at Acme.

In my current role I:
* Led the **payments** platform migration
* Cut build times by 40%
· Mentored four engineers

Thank you for your consideration.

Sincerely,

Jane O'Brien
"""


@pytest.fixture
def letter_without_header() -> str:
    return """Hello team,

I would love to join **Acme**.
* Built things
* Shipped things
"""


@pytest.fixture
def long_letter() -> str:
    paragraph = "This sentence pads the letter so that it runs well past one page. " * 6
    body = "\n\n".join(paragraph for _ in range(20))
    return f"October 17, 2026\nJane Doe\n\nDear Hiring Manager,\n\n{body}\n\nSincerely,\nJane Doe"


@pytest.fixture
def core_font_config() -> AppConfig:
    """Config that never finds a Unicode TTF, so Helvetica is used."""
    return AppConfig(page=PageConfig(unicode_font_paths=()))


@pytest.fixture
def sample_metadata() -> DocumentMetadata:
    return DocumentMetadata(candidate_name="Jane Doe", company="Acme", position="Engineer")
