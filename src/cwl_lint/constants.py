"""Static CWL layout tables used by the lint rules."""

CWL_EXTENSION = ".cwl"

# Accepted values for the top-level ``class`` field (case-sensitive)
VALID_CLASSES = ("Workflow", "CommandLineTool", "ExpressionTool")

# Canonical top-level field order per document class
FIELD_ORDER: dict[str, tuple[str, ...]] = {
    "CommandLineTool": (
        "cwlVersion", "class", "label", "doc", "$namespaces",
        "requirements", "hints", "inputs", "outputs",
        "baseCommand", "arguments", "stdout", "stderr",
    ),
    "ExpressionTool": (
        "cwlVersion", "class", "doc", "$namespaces",
        "requirements", "hints", "inputs", "outputs", "expression",
    ),
    "Workflow": (
        "cwlVersion", "class", "label", "doc", "$namespaces",
        "requirements", "hints", "inputs", "outputs", "steps",
    ),
}

# Fields that must be preceded by exactly one blank line
BLANK_LINE_FIELDS = frozenset({
    "$namespaces", "requirements", "hints", "inputs", "outputs",
    "baseCommand", "arguments", "expression", "steps",
})
