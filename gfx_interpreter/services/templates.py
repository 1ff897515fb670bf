import ast
import operator
import re
from typing import Any, Mapping

_FIELD = re.compile(r"\{\{\s*(@index|[A-Za-z_][\w.]*)\s*\}\}")
_EXPRESSION = re.compile(r"^\s*expression\((.*)\)\s*$", re.DOTALL)

# Only these template fields may hold expression(...) strings
EXPRESSION_FIELDS = frozenset({"position_x", "position_y", "delay"})

_BINARY_OPERATORS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
}
_UNARY_OPERATORS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


def substitute(value: Any, row: Mapping[str, Any], index: int) -> Any:
    """Replace ``{{field}}`` and ``{{@index}}`` tokens throughout a template value.

    Tokens naming a field missing from the row are left untouched so resource
    placeholders such as ``{{LOGO:NBA:Lakers}}`` survive expansion.
    """
    if isinstance(value, str):
        return _FIELD.sub(lambda match: _field_value(match, row, index), value)
    if isinstance(value, dict):
        return {key: substitute(item, row, index) for key, item in value.items()}
    if isinstance(value, list):
        return [substitute(item, row, index) for item in value]
    return value


def _field_value(match: re.Match[str], row: Mapping[str, Any], index: int) -> str:
    key = match.group(1)
    if key == "@index":
        return str(index)
    if key in row:
        return str(row[key])
    return match.group(0)


def is_expression(value: Any) -> bool:
    return isinstance(value, str) and _EXPRESSION.match(value) is not None


def evaluate_expression(value: str) -> float | None:
    """Evaluate an arithmetic-only ``expression(...)`` string, e.g. ``expression(250+2*60)``."""
    match = _EXPRESSION.match(value)
    if not match:
        return None
    try:
        tree = ast.parse(match.group(1).strip(), mode="eval")
        return float(_evaluate(tree.body))
    except (SyntaxError, ValueError, TypeError, ZeroDivisionError, OverflowError):
        return None


def _evaluate(node: ast.AST) -> float:
    if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)):
        if isinstance(node.value, bool):
            raise ValueError("booleans are not numbers here")
        return node.value
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPERATORS:
        return _BINARY_OPERATORS[type(node.op)](_evaluate(node.left), _evaluate(node.right))
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPERATORS:
        return _UNARY_OPERATORS[type(node.op)](_evaluate(node.operand))
    raise ValueError(f"unsupported expression node: {type(node).__name__}")


def template_names(block: Mapping[str, Any] | None) -> list[str]:
    """Names the dynamic block's templates produce, one per template per row."""
    if not isinstance(block, Mapping):
        return []
    data, elements = block.get("data"), block.get("elements")
    rows = [row for row in data if isinstance(row, Mapping)] if isinstance(data, list) else []
    templates = [t for t in elements if isinstance(t, Mapping)] if isinstance(elements, list) else []
    names: list[str] = []
    for index, row in enumerate(rows):
        for template in templates:
            name = template.get("name")
            if isinstance(name, str):
                names.append(substitute(name, row, index))
    return names
