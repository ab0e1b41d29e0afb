"""Shared test fixtures for cwl-lint."""

import pytest

from cwl_lint.validation import LintEngine

VALID_TOOL = """\
cwlVersion: v1.2
class: CommandLineTool
label: Echo tool
doc: Prints a message to stdout

requirements:
  InlineJavascriptRequirement: {}

inputs:
  message:
    type: string
    inputBinding:
      position: 1

outputs:
  output_file:
    type: stdout

baseCommand: echo
stdout: output.txt
"""

VALID_WORKFLOW = """\
cwlVersion: v1.2
class: Workflow
label: Align reads
doc: Aligns reads against a reference

inputs:
  reads:
    type: File
    label: Reads
    doc: Input reads in FASTQ format

outputs:
  result:
    type: File
    outputSource: align/aligned

steps:
  align:
    run: align.cwl
    in:
      reads: reads
    out: [aligned]
"""

VALID_EXPRESSION_TOOL = """\
cwlVersion: v1.2
class: ExpressionTool
doc: Doubles a number

requirements:
  InlineJavascriptRequirement: {}

inputs:
  value: int

outputs:
  doubled: int

expression: |
  ${ return {"doubled": inputs.value * 2}; }
"""


@pytest.fixture
def engine() -> LintEngine:
    return LintEngine.default()


@pytest.fixture
def valid_tool() -> str:
    return VALID_TOOL


@pytest.fixture
def valid_workflow() -> str:
    return VALID_WORKFLOW


@pytest.fixture
def valid_expression_tool() -> str:
    return VALID_EXPRESSION_TOOL
