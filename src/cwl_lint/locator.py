"""Textual position lookup for fields in raw CWL source."""

import re

from cwl_lint.models import ORIGIN, SourcePosition

_TOP_LEVEL_RE = re.compile(r"^\S")


def _field_pattern(field_name: str) -> re.Pattern[str]:
    return re.compile(rf"^\s*{re.escape(field_name)}:\s*")


def _has_parent_context(lines: list[str], index: int, parent_context: str) -> bool:
    """Scan upwards from ``index`` for a line containing ``parent_context``.

    The scan stops at the first unindented line, which closes the block.
    """
    for j in range(index - 1, -1, -1):
        if parent_context in lines[j]:
            return True
        if _TOP_LEVEL_RE.match(lines[j]):
            return False
    return False


def locate(content: str, field_name: str, parent_context: str | None = None) -> SourcePosition:
    """Find the line and column of ``field_name:`` in ``content``.

    Args:
        content: Raw document text
        field_name: Field to look for, matched literally
        parent_context: Optional substring expected on an enclosing line

    Returns:
        SourcePosition of the field name's first character, or the origin
        when no line qualifies.
    """
    lines = content.split("\n")
    pattern = _field_pattern(field_name)

    for i, line in enumerate(lines):
        if not pattern.match(line):
            continue
        if parent_context and not _has_parent_context(lines, i, parent_context):
            continue
        return SourcePosition(line=i, character=line.find(field_name))

    return ORIGIN


def find_key_line(content: str, key: str) -> int | None:
    """Index of the first line starting with ``key:`` at any indentation."""
    pattern = re.compile(rf"^\s*{re.escape(key)}:")
    for i, line in enumerate(content.split("\n")):
        if pattern.match(line):
            return i
    return None
