"""Exception hierarchy for md_renderer.

Rendering itself never raises for unsupported content; these exceptions
cover strict mode and configuration problems surfaced to the CLI.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .converters.common import Diagnostic


class RendererError(Exception):
    """Base class for all md_renderer errors."""


class StrictModeError(RendererError):
    """Raised in strict mode when rendering dropped any content."""

    def __init__(self, diagnostics: list[Diagnostic]):
        self.diagnostics = diagnostics
        super().__init__(
            f"{len(diagnostics)} node(s) could not be rendered: "
            + "; ".join(d.message for d in diagnostics)
        )


class ConfigError(RendererError):
    """Raised when a configuration file cannot be loaded or validated."""
