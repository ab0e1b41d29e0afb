"""Diagnostic sinks: batch reports for the CLI and an editor-style store."""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any

from cwl_lint.constants import CWL_EXTENSION
from cwl_lint.models import Diagnostic
from cwl_lint.validation import LintEngine

logger = logging.getLogger(__name__)


def format_diagnostic(path: str, diagnostic: Diagnostic) -> str:
    """Render ``<path>:<line>:<col> - Error: <message>`` with 1-based positions."""
    return f"{path}:{diagnostic.line + 1}:{diagnostic.character + 1} - Error: {diagnostic.message}"


@dataclass
class FileReport:
    """Diagnostics for one linted file."""
    path: str
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.diagnostics)

    def formatted(self) -> list[str]:
        return [format_diagnostic(self.path, d) for d in self.diagnostics]

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "errors": self.error_count,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


@dataclass
class LintReport:
    """Aggregated results of a lint run over one or more files."""
    files: list[FileReport] = field(default_factory=list)

    @property
    def total_errors(self) -> int:
        return sum(report.error_count for report in self.files)

    @property
    def exit_code(self) -> int:
        """Exit code for CI: 0 = clean, 1 = errors found."""
        return 1 if self.total_errors > 0 else 0

    def add(self, report: FileReport) -> None:
        self.files.append(report)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "totalErrors": self.total_errors,
            "exitCode": self.exit_code,
            "files": [report.to_dict() for report in self.files],
        }


def diagnostic_range(diagnostic: Diagnostic) -> tuple[tuple[int, int], tuple[int, int]]:
    """Start and end of the span an editor should mark.

    Without an explicit end the span covers the single anchor character.
    """
    start = (diagnostic.line, diagnostic.character)
    end_line = diagnostic.end_line if diagnostic.end_line is not None else diagnostic.line
    if diagnostic.end_character is not None:
        end_character = diagnostic.end_character
    else:
        end_character = diagnostic.character + 1
    return start, (end_line, end_character)


class DiagnosticCollection:
    """Diagnostics keyed by document identity, replaced wholesale on re-lint.

    Mirrors an editor's diagnostics store: every open, change, or save of a
    .cwl document re-runs the engine and overwrites what was shown before.
    """

    def __init__(self, engine: LintEngine | None = None):
        self.engine = engine or LintEngine.default()
        self._entries: dict[str, list[Diagnostic]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def accepts(uri: str) -> bool:
        """Only documents with the .cwl extension are linted."""
        return uri.endswith(CWL_EXTENSION)

    def relint(self, uri: str, content: str) -> list[Diagnostic]:
        """Lint ``content`` and store the result under ``uri``."""
        if not self.accepts(uri):
            logger.debug(f"Skipping non-CWL document: {uri}")
            return []

        diagnostics = self.engine.lint(content)
        with self._lock:
            self._entries[uri] = list(diagnostics)
        return diagnostics

    def get(self, uri: str) -> list[Diagnostic]:
        with self._lock:
            return list(self._entries.get(uri, []))

    def delete(self, uri: str) -> None:
        with self._lock:
            self._entries.pop(uri, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, uri: object) -> bool:
        with self._lock:
            return uri in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
