"""Line-tagged preprocessing diagnostics and the sinks that receive them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

from glslext import log


@dataclass(frozen=True)
class Diagnostic:
    """Non-fatal message attached to a line of a shader unit."""

    file: str
    line: int
    message: str

    def __str__(self) -> str:
        return f"file {self.file}: warning: {self.message} at line {self.line}"


DiagnosticSink = Callable[[Diagnostic], None]


def log_sink(diagnostic: Diagnostic) -> None:
    """Default sink: forward to the glslext logger as a warning."""
    log.warn(str(diagnostic))


class CollectingSink:
    """Sink that keeps every diagnostic it receives."""

    def __init__(self) -> None:
        self.diagnostics: List[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def messages(self) -> List[str]:
        return [str(d) for d in self.diagnostics]

    def clear(self) -> None:
        self.diagnostics.clear()
