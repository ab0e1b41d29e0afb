"""Tests for the lint engine."""

import pytest
import yaml

from cwl_lint.models import Diagnostic
from cwl_lint.validation import LintEngine, LintRule, lint


class BoomRule(LintRule):
    @property
    def name(self) -> str:
        return "boom"

    def check(self, document, content):
        raise RuntimeError("kaboom")


def yaml_mark(content):
    """Failure mark PyYAML itself reports for ``content``."""
    with pytest.raises(yaml.MarkedYAMLError) as exc_info:
        yaml.safe_load(content)
    return exc_info.value.problem_mark


class TestLintEngine:
    """Test rule registration and aggregation."""

    def test_default_rule_order(self, engine):
        assert engine.rule_names == [
            "version",
            "class",
            "inputs-shape",
            "field-order",
            "blank-lines",
            "workflow-input-metadata",
        ]

    def test_empty_engine_reports_nothing(self):
        assert LintEngine().lint("class: Nope\n") == []

    def test_valid_documents_are_clean(self, engine, valid_tool, valid_workflow, valid_expression_tool):
        assert engine.lint(valid_tool) == []
        assert engine.lint(valid_workflow) == []
        assert engine.lint(valid_expression_tool) == []

    def test_missing_version_end_to_end(self, engine):
        diagnostics = engine.lint("class: Workflow\n")

        assert diagnostics == [
            Diagnostic(message="Missing cwlVersion field", line=0, character=0, rule="version")
        ]

    def test_diagnostics_follow_rule_order(self, engine):
        content = "class: CommandLineTool\noutputs: []\ninputs: 5\n"
        diagnostics = engine.lint(content)

        assert [d.rule for d in diagnostics] == [
            "version",
            "inputs-shape",
            "field-order",
            "blank-lines",
            "blank-lines",
        ]

    def test_lint_is_idempotent(self, engine):
        content = "class: Workflow\ninputs:\n  message:\n    type: string\noutputs: []\n"
        assert engine.lint(content) == engine.lint(content)

    def test_empty_document(self, engine):
        assert [d.message for d in engine.lint("")] == [
            "Missing cwlVersion field",
            "Missing class field",
        ]

    def test_failing_rule_becomes_diagnostic(self):
        engine = LintEngine.default()
        engine.add_rule(BoomRule())

        diagnostics = engine.lint("class: Workflow\n")

        assert diagnostics[-1].message == "Rule 'boom' failed: kaboom"
        assert diagnostics[-1].position.line == 0
        assert diagnostics[0].message == "Missing cwlVersion field"

    def test_module_level_lint(self):
        assert [d.message for d in lint("class: Workflow\n")] == ["Missing cwlVersion field"]


class TestParseErrors:
    """Test translation of YAML failures."""

    def test_mapping_value_error_uses_mark(self, engine):
        content = "cwlVersion: v1.2\nclass: a: b\n"
        mark = yaml_mark(content)

        diagnostics = engine.lint(content)

        assert len(diagnostics) == 1
        diagnostic = diagnostics[0]
        assert diagnostic.message == "YAML parsing error: mapping values are not allowed here"
        assert (diagnostic.line, diagnostic.character) == (mark.line, mark.column)
        assert diagnostic.end_line == mark.line
        assert diagnostic.end_character == len("class: a: b")
        assert diagnostic.rule == "yaml"

    def test_unterminated_flow_sequence(self, engine):
        content = "cwlVersion: v1.2\nclass: [Workflow\n"
        mark = yaml_mark(content)

        diagnostics = engine.lint(content)

        assert len(diagnostics) == 1
        assert diagnostics[0].message.startswith("YAML parsing error: ")
        assert (diagnostics[0].line, diagnostics[0].character) == (mark.line, mark.column)

    def test_error_on_empty_line_highlights_one_character(self, engine):
        diagnostic = engine.lint("cwlVersion: v1.2\nclass: [Workflow\n")[0]

        assert (diagnostic.line, diagnostic.character) == (2, 0)
        assert diagnostic.end_line == 2
        assert diagnostic.end_character == 1

    def test_crlf_line_end_not_counted(self, engine):
        diagnostic = engine.lint("cwlVersion: v1.2\r\nclass: a: b\r\n")[0]

        assert diagnostic.line == 1
        assert diagnostic.end_character == len("class: a: b")

    def test_control_character_located_by_reader_offset(self, engine):
        diagnostics = engine.lint("cwlVersion: v1.2\nclass: Workflow\nlabel: a\x07b\n")

        assert len(diagnostics) == 1
        diagnostic = diagnostics[0]
        assert diagnostic.message == (
            "YAML parsing error: unacceptable character #x0007: special characters are not allowed"
        )
        assert (diagnostic.line, diagnostic.character) == (2, 8)
        assert diagnostic.end_character == len("label: a\x07b")
        assert "\n" not in diagnostic.message

    def test_stringified_duplicate_keys(self, engine):
        diagnostics = engine.lint("cwlVersion: v1.2\nclass: Workflow\n1: a\n'1': b\n")

        assert len(diagnostics) == 1
        assert diagnostics[0].message == "YAML parsing error: found duplicate key '1'"
        assert (diagnostics[0].line, diagnostics[0].character) == (3, 0)

    def test_duplicate_key(self, engine):
        content = "cwlVersion: v1.2\nclass: Workflow\nclass: CommandLineTool\n"
        diagnostics = engine.lint(content)

        assert len(diagnostics) == 1
        assert diagnostics[0].message == "YAML parsing error: found duplicate key 'class'"
        assert (diagnostics[0].line, diagnostics[0].character) == (2, 0)

    def test_unmarked_loading_error_falls_back_to_origin(self, engine):
        diagnostics = engine.lint("cwlVersion: v1.2\ncreated: 2020-13-45\n")

        assert len(diagnostics) == 1
        assert diagnostics[0].message.startswith("YAML parsing error: ")
        assert (diagnostics[0].line, diagnostics[0].character) == (0, 0)
        assert diagnostics[0].end_line is None

    def test_rules_not_run_on_parse_failure(self, engine):
        diagnostics = engine.lint("class: [\n\n\ninputs: 1\n")
        assert len(diagnostics) == 1
        assert diagnostics[0].rule == "yaml"
