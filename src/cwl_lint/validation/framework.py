"""Core lint engine for CWL documents.

Parses raw text, runs the registered rules in order, and converts every
failure into diagnostics so that a lint call never raises.
"""

import logging
from abc import ABC, abstractmethod

import yaml
from yaml.reader import ReaderError

from ..document import Document, DocumentLoader
from ..models import Diagnostic

logger = logging.getLogger(__name__)


class LintRule(ABC):
    """Base class for lint rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name for identification."""
        pass

    @abstractmethod
    def check(self, document: Document, content: str) -> list[Diagnostic]:
        """Execute lint rule.

        Args:
            document: Parsed document tree
            content: Raw source text, used for location lookups

        Returns:
            Diagnostics found by this rule, in source order where applicable
        """
        pass


def _offset_to_line_column(content: str, offset: int) -> tuple[int, int]:
    """Convert a character offset into a 0-based line and column."""
    offset = max(0, min(offset, len(content)))
    line = content.count("\n", 0, offset)
    column = offset - (content.rfind("\n", 0, offset) + 1)
    return line, column


def _error_location(error: Exception, content: str) -> tuple[tuple[int, int] | None, str]:
    """Location and reason text reported by a YAML error, if any."""
    if isinstance(error, ReaderError):
        reason = error.reason
        if isinstance(error.character, int):
            reason = f"unacceptable character #x{error.character:04x}: {error.reason}"
        return _offset_to_line_column(content, error.position), reason

    mark = getattr(error, "problem_mark", None) or getattr(error, "context_mark", None)
    reason = getattr(error, "problem", None) or str(error)
    if mark is None:
        return None, str(error)
    return (mark.line, mark.column), reason


def parse_error_diagnostic(error: Exception, content: str) -> Diagnostic:
    """Translate a YAML parse failure into a single diagnostic.

    Errors with a mark or a reader offset are anchored at the parser's
    failure point and highlight the rest of that line; anything else falls
    back to the origin.
    """
    location, reason = _error_location(error, content)

    if location is None:
        return Diagnostic(message=f"YAML parsing error: {reason}", rule="yaml")

    line, column = location
    lines = content.split("\n")
    source_line = lines[line].rstrip("\r") if 0 <= line < len(lines) else ""
    end_character = len(source_line) if source_line else column + 1

    return Diagnostic(
        message=f"YAML parsing error: {reason}",
        line=line,
        character=column,
        end_line=line,
        end_character=end_character,
        rule="yaml"
    )


class LintEngine:
    """Runs an ordered set of lint rules against CWL source text."""

    def __init__(self, loader: DocumentLoader | None = None):
        self.loader = loader or DocumentLoader()
        self.rules: list[LintRule] = []

    @classmethod
    def default(cls) -> "LintEngine":
        """Engine preloaded with the default rule set."""
        engine = cls()
        engine.create_default_rules()
        return engine

    @property
    def rule_names(self) -> list[str]:
        return [rule.name for rule in self.rules]

    def add_rule(self, rule: LintRule) -> None:
        """Add a lint rule."""
        self.rules.append(rule)

    def create_default_rules(self) -> None:
        """Register the default rules in their reporting order."""
        from .rules import DEFAULT_RULES

        for rule_class in DEFAULT_RULES:
            self.add_rule(rule_class())

    def lint(self, content: str) -> list[Diagnostic]:
        """Lint raw CWL text.

        Args:
            content: Raw YAML source

        Returns:
            Diagnostics from every rule in registration order; a single
            parse-error diagnostic if the text is not valid YAML
        """
        try:
            document = self.loader.load_string(content)
        except yaml.YAMLError as e:
            logger.debug(f"YAML parsing failed: {e}")
            return [parse_error_diagnostic(e, content)]
        except Exception as e:
            # Constructor failures such as impossible timestamps are not YAMLErrors
            logger.warning(f"YAML loading failed: {e}")
            return [parse_error_diagnostic(e, content)]

        diagnostics: list[Diagnostic] = []
        for rule in self.rules:
            logger.debug(f"Executing rule: {rule.name}")
            try:
                diagnostics.extend(rule.check(document, content))
            except Exception as e:
                logger.error(f"Rule {rule.name} failed with error: {e}")
                diagnostics.append(Diagnostic(message=f"Rule '{rule.name}' failed: {e}", rule=rule.name))

        logger.debug(f"Lint completed with {len(diagnostics)} diagnostics")
        return diagnostics


_default_engine: LintEngine | None = None


def lint(content: str) -> list[Diagnostic]:
    """Lint raw CWL text with the default rule set."""
    global _default_engine
    if _default_engine is None:
        _default_engine = LintEngine.default()
    return _default_engine.lint(content)
