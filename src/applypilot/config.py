"""Renderer configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

CONFIG_ENV_VAR = "APPLYPILOT_CONFIG"

DEFAULT_CLOSING_PHRASES = (
    "sincerely",
    "best regards",
    "kind regards",
    "warm regards",
    "warmest regards",
    "regards",
    "respectfully",
    "yours truly",
    "yours sincerely",
    "cordially",
)

# Unicode-capable fonts (Linux, macOS, Windows)
DEFAULT_UNICODE_FONT_PATHS = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
    "C:/Windows/Fonts/arial.ttf",
)


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


@dataclass(frozen=True)
class LayoutConfig:
    font_size: float = 11.0
    line_height_factor: float = 1.2
    spacing: str = "half"  # "half" | "full" line per gap unit
    bullet_indent: float = 18.0  # pt from the left margin to the glyph
    bullet_text_indent: float = 36.0  # pt from the left margin to the text
    closing_phrases: tuple[str, ...] = DEFAULT_CLOSING_PHRASES

    def __post_init__(self) -> None:
        _check_range("font_size", self.font_size, 6, 36)
        _check_range("line_height_factor", self.line_height_factor, 1.0, 3.0)
        if self.spacing not in ("half", "full"):
            raise ValueError(f"spacing must be 'half' or 'full', got {self.spacing!r}")
        if self.bullet_indent < 0:
            raise ValueError("bullet_indent must not be negative")
        if self.bullet_text_indent <= self.bullet_indent:
            raise ValueError("bullet_text_indent must be greater than bullet_indent")
        object.__setattr__(
            self,
            "closing_phrases",
            tuple(p.strip().lower() for p in self.closing_phrases if p.strip()),
        )


@dataclass(frozen=True)
class PageConfig:
    format: str = "letter"  # "letter" | "a4"
    margin: float = 72.0
    font_family: str = "Helvetica"
    bullet_glyph: str = "\u2022"
    unicode_font_paths: tuple[str, ...] = DEFAULT_UNICODE_FONT_PATHS

    def __post_init__(self) -> None:
        if self.format not in ("letter", "a4"):
            raise ValueError(f"format must be 'letter' or 'a4', got {self.format!r}")
        _check_range("margin", self.margin, 0, 216)
        object.__setattr__(self, "unicode_font_paths", tuple(self.unicode_font_paths))


@dataclass(frozen=True)
class FlowConfig:
    font_name: str = "Calibri"
    bullet_glyph: str = "\u2022"


@dataclass(frozen=True)
class OutputConfig:
    fallback_stem: str = "cover-letter"
    max_field_length: int = 60

    def __post_init__(self) -> None:
        _check_range("max_field_length", self.max_field_length, 1, 200)
        if not self.fallback_stem.strip():
            raise ValueError("fallback_stem must not be empty")


@dataclass(frozen=True)
class AppConfig:
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    page: PageConfig = field(default_factory=PageConfig)
    flow: FlowConfig = field(default_factory=FlowConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None and os.environ.get(CONFIG_ENV_VAR):
        path = os.environ[CONFIG_ENV_VAR]
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    return AppConfig(
        layout=LayoutConfig(**raw.get("layout", {})),
        page=PageConfig(**raw.get("page", {})),
        flow=FlowConfig(**raw.get("flow", {})),
        output=OutputConfig(**raw.get("output", {})),
    )
