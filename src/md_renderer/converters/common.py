"""Common types for Markdown rendering results and diagnostics."""

from dataclasses import dataclass, field
from enum import Enum


class DiagnosticKind(Enum):
    """Category of a non-fatal rendering diagnostic."""

    UNSUPPORTED_FEATURE = "unsupported_feature"
    UNKNOWN_NODE_KIND = "unknown_node_kind"


@dataclass(frozen=True)
class Diagnostic:
    """A node the renderer dropped from its output.

    Attributes:
        kind: Why the node was dropped.
        node_kind: Type name of the dropped node (e.g. 'table', 'softbreak').
        message: One-line human-readable description.
    """

    kind: DiagnosticKind
    node_kind: str
    message: str


@dataclass
class RenderResult:
    """Result of normalising a Markdown document.

    Attributes:
        text: Normalised Markdown output
        diagnostics: Nodes that were dropped during rendering
        changed: True if the output differs from the input text
    """

    text: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    changed: bool = False

    @property
    def warnings(self) -> list[str]:
        return [d.message for d in self.diagnostics]
