"""cwl-lint - Style and structure linter for Common Workflow Language documents.

cwl-lint parses CWL YAML sources, checks them against a fixed set of
structural and layout rules, and reports precisely located diagnostics.
"""

__version__ = "0.1.0"
__author__ = "cwl-lint contributors"
__description__ = "Style and structure linter for CWL documents"

from cwl_lint.models import Diagnostic, SourcePosition
from cwl_lint.validation import LintEngine, lint

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "Diagnostic",
    "SourcePosition",
    "LintEngine",
    "lint",
]
