"""Rule engine for CWL linting.

Holds the lint engine, the rule base class, and the default rules that
check version, class, inputs shape, field order, blank lines, and
workflow input metadata.
"""

from .framework import LintEngine, LintRule, lint, parse_error_diagnostic
from .rules import (
    BlankLinesRule,
    ClassRule,
    FieldOrderRule,
    InputsShapeRule,
    VersionRule,
    WorkflowInputMetadataRule,
)

__all__ = [
    "LintEngine",
    "LintRule",
    "lint",
    "parse_error_diagnostic",
    "VersionRule",
    "ClassRule",
    "InputsShapeRule",
    "FieldOrderRule",
    "BlankLinesRule",
    "WorkflowInputMetadataRule",
]
