"""Lint rules for CWL documents.

Each rule inspects the parsed document together with the raw text it came
from, and returns the diagnostics it finds. Rules hold no state and do not
depend on each other's output.
"""

import logging
import re

from ..constants import BLANK_LINE_FIELDS, FIELD_ORDER, VALID_CLASSES
from ..document import Document, NodeKind, is_truthy, node_kind
from ..locator import find_key_line, locate
from ..models import Diagnostic
from .framework import LintRule

logger = logging.getLogger(__name__)

_FIELD_LINE_RE = re.compile(r"^\s*([a-zA-Z0-9_$\-]+):")


class VersionRule(LintRule):
    """Require a non-empty top-level cwlVersion."""

    @property
    def name(self) -> str:
        return "version"

    def check(self, document: Document, content: str) -> list[Diagnostic]:
        if is_truthy(document.get("cwlVersion")):
            return []
        position = locate(content, "cwlVersion")
        return [Diagnostic.from_position("Missing cwlVersion field", position, self.name)]


class ClassRule(LintRule):
    """Require a class field naming a supported CWL process type."""

    @property
    def name(self) -> str:
        return "class"

    def check(self, document: Document, content: str) -> list[Diagnostic]:
        value = document.get("class")
        if not is_truthy(value):
            message = "Missing class field"
        elif isinstance(value, str) and value in VALID_CLASSES:
            return []
        else:
            message = f"Invalid class value. Must be one of: {', '.join(VALID_CLASSES)}"
        return [Diagnostic.from_position(message, locate(content, "class"), self.name)]


class InputsShapeRule(LintRule):
    """Inputs must be a mapping or a sequence, never a bare scalar."""

    @property
    def name(self) -> str:
        return "inputs-shape"

    def check(self, document: Document, content: str) -> list[Diagnostic]:
        if document.field_kind("inputs") != NodeKind.SCALAR:
            return []
        position = locate(content, "inputs")
        return [Diagnostic.from_position("Inputs must be an object or array", position, self.name)]


class FieldOrderRule(LintRule):
    """Top-level fields must follow the canonical order for the document class.

    Single forward pass: the reference field only advances on fields that
    are in order, so an out-of-order field never becomes the reference.
    Unknown fields are ignored.
    """

    @property
    def name(self) -> str:
        return "field-order"

    def check(self, document: Document, content: str) -> list[Diagnostic]:
        class_type = document.get("class")
        if not isinstance(class_type, str) or class_type not in FIELD_ORDER:
            return []

        expected_order = FIELD_ORDER[class_type]
        diagnostics: list[Diagnostic] = []
        last_index = -1

        for field in document.keys():
            if field not in expected_order:
                continue
            current_index = expected_order.index(field)

            if current_index < last_index:
                misplaced_after = expected_order[last_index]
                diagnostics.append(Diagnostic.from_position(
                    f"Field '{field}' is out of order. It should appear before '{misplaced_after}'.",
                    locate(content, field),
                    self.name
                ))
            else:
                last_index = current_index

        return diagnostics


class BlankLinesRule(LintRule):
    """Fields are separated by at most one blank line; section fields need one."""

    @property
    def name(self) -> str:
        return "blank-lines"

    def check(self, document: Document, content: str) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        lines = content.split("\n")

        for i in range(1, len(lines)):
            match = _FIELD_LINE_RE.match(lines[i])
            if not match:
                continue

            field_name = match.group(1)
            previous_blank = lines[i - 1].strip() == ""

            if previous_blank and i >= 2 and lines[i - 2].strip() == "":
                diagnostics.append(Diagnostic(
                    message=f"More than one blank line before field '{field_name}'.",
                    line=i - 1,
                    character=0,
                    rule=self.name
                ))

            if field_name in BLANK_LINE_FIELDS and not previous_blank:
                diagnostics.append(Diagnostic(
                    message=f"Missing blank line before field '{field_name}'.",
                    line=i,
                    character=0,
                    rule=self.name
                ))

        return diagnostics


class WorkflowInputMetadataRule(LintRule):
    """Workflow inputs written as mappings must carry label and doc."""

    @property
    def name(self) -> str:
        return "workflow-input-metadata"

    def check(self, document: Document, content: str) -> list[Diagnostic]:
        if document.get("class") != "Workflow" or document.field_kind("inputs") != NodeKind.MAPPING:
            return []

        diagnostics: list[Diagnostic] = []
        for input_key, input_value in document.get("inputs").items():
            if node_kind(input_value) != NodeKind.MAPPING:
                continue

            base_line = find_key_line(content, input_key)
            if base_line is None:
                logger.debug(f"Input '{input_key}' not found in source text, skipping")
                continue

            for required in ("label", "doc"):
                if required not in input_value:
                    diagnostics.append(Diagnostic(
                        message=f"Input '{input_key}' is missing required '{required}' field.",
                        line=base_line,
                        character=0,
                        rule=self.name
                    ))

        return diagnostics


DEFAULT_RULES: tuple[type[LintRule], ...] = (
    VersionRule,
    ClassRule,
    InputsShapeRule,
    FieldOrderRule,
    BlankLinesRule,
    WorkflowInputMetadataRule,
)
