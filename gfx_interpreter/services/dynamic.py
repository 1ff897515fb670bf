import logging
from typing import Any, Mapping

from gfx_interpreter.models.schemas import DynamicBlock, ElementSpec
from gfx_interpreter.services.dialects import create_element
from gfx_interpreter.services.templates import (
    EXPRESSION_FIELDS,
    evaluate_expression,
    is_expression,
    substitute,
)
from gfx_interpreter.services.validator import validate_dynamic_block, validate_element

logger = logging.getLogger(__name__)


def expand_dynamic_elements(block: DynamicBlock | Mapping[str, Any] | None) -> list[ElementSpec]:
    """Instantiate every template once per data row.

    ``{{field}}`` takes the row's value and ``{{@index}}`` the row number; then
    ``expression(...)`` strings in position_x, position_y and delay are
    evaluated. A failed expression leaves the field at its default.
    """
    if not isinstance(block, DynamicBlock):
        block = validate_dynamic_block(block)
    if block is None:
        return []

    elements: list[ElementSpec] = []
    for index, row in enumerate(block.data):
        for template in block.elements:
            expanded = substitute(template, row, index)
            for key in EXPRESSION_FIELDS:
                value = expanded.get(key)
                if not is_expression(value):
                    continue
                result = evaluate_expression(value)
                if result is None:
                    logger.warning("Could not evaluate %s=%r for row %d", key, value, index)
                    del expanded[key]
                else:
                    expanded[key] = result

            element = validate_element(create_element(expanded, len(elements), x=0, y=0))
            if element is not None:
                elements.append(element)

    logger.debug("Expanded %d dynamic elements from %d rows", len(elements), len(block.data))
    return elements
