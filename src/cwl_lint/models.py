"""Diagnostic and source position models."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SourcePosition:
    """A 0-based line/character location in raw source text."""
    line: int = 0
    character: int = 0


ORIGIN = SourcePosition(0, 0)


@dataclass(frozen=True)
class Diagnostic:
    """A single lint violation with its source location (0-based)."""
    message: str
    line: int = 0
    character: int = 0
    end_line: int | None = None
    end_character: int | None = None
    rule: str | None = None

    @classmethod
    def from_position(cls, message: str, position: SourcePosition, rule: str | None = None) -> "Diagnostic":
        """Create a diagnostic anchored at a resolved position."""
        return cls(message=message, line=position.line, character=position.character, rule=rule)

    @property
    def position(self) -> SourcePosition:
        return SourcePosition(self.line, self.character)

    def __str__(self) -> str:
        return f"{self.line + 1}:{self.character + 1} {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        data: dict[str, Any] = {
            "message": self.message,
            "line": self.line,
            "character": self.character,
        }
        if self.end_line is not None:
            data["endLine"] = self.end_line
        if self.end_character is not None:
            data["endCharacter"] = self.end_character
        if self.rule is not None:
            data["rule"] = self.rule
        return data
