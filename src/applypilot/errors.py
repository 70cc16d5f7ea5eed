"""Exception hierarchy for the letter renderer.

Renderers raise these instead of leaking backend exceptions.
Callers (CLI, delivery layer) catch and present them.
"""


class ApplyPilotError(Exception):
    """Base exception for all renderer errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


class RenderError(ApplyPilotError):
    """Raised when a document backend fails to produce bytes."""

    def __init__(self, fmt: str, reason: str):
        super().__init__(f"Failed to render {fmt}: {reason}", {"format": fmt})
        self.format = fmt


class UnsupportedFormatError(ApplyPilotError):
    """Raised for an output format other than pdf or docx."""

    def __init__(self, fmt: str):
        super().__init__(f"Unsupported output format: {fmt}", {"format": fmt})
        self.format = fmt
