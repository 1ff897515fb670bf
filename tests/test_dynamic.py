from gfx_interpreter.services.dynamic import expand_dynamic_elements
from gfx_interpreter.services.templates import evaluate_expression, substitute, template_names

SCOREBOARD = {
    "data": [{"team": "Chiefs", "score": 21}, {"team": "Eagles", "score": 17}],
    "elements": [
        {
            "name": "Row {{@index}}",
            "type": "text",
            "text": "{{team}} {{score}}",
            "position_x": 100,
            "position_y": "expression(200+{{@index}}*60)",
            "delay": "expression({{@index}}*100)",
        },
        {"name": "Logo {{@index}}", "type": "image", "src": "{{LOGO:NFL:{{team}}}}"},
    ],
}


def test_templates_expand_once_per_row():
    elements = expand_dynamic_elements(SCOREBOARD)

    assert [e.name for e in elements] == ["Row 0", "Logo 0", "Row 1", "Logo 1"]
    row_0, logo_0, row_1, _ = elements
    assert row_0.content.text == "Chiefs 21"
    assert (row_0.position_x, row_0.position_y) == (100, 200)
    assert row_1.position_y == 260
    assert (row_0.delay, row_1.delay) == (0, 100)
    assert logo_0.element_type == "image"
    assert logo_0.content.src == "{{LOGO:NFL:Chiefs}}"


def test_failed_expression_leaves_field_at_default():
    block = {
        "data": [{"n": 1}],
        "elements": [{"name": "Cell", "position_x": "expression(__import__('os'))"}],
    }

    (element,) = expand_dynamic_elements(block)

    assert element.position_x == 0


def test_expressions_outside_expression_fields_are_ignored():
    block = {"data": [{}], "elements": [{"name": "Cell", "type": "shape", "width": "expression(10*2)"}]}

    (element,) = expand_dynamic_elements(block)

    assert element.width == 200


def test_missing_block_expands_to_nothing():
    assert expand_dynamic_elements(None) == []


def test_substitute_leaves_unknown_tokens():
    row = {"city": "Denver"}

    assert substitute({"text": "{{city}} #{{@index}} {{PEXELS:snow}}"}, row, 3) == {
        "text": "Denver #3 {{PEXELS:snow}}"
    }


def test_evaluate_expression_is_arithmetic_only():
    assert evaluate_expression("expression(250+2*60)") == 370
    assert evaluate_expression("expression(-(10 - 4) / 2)") == -3
    assert evaluate_expression("expression(2**10)") is None
    assert evaluate_expression("expression(1/0)") is None
    assert evaluate_expression("250") is None


def test_template_names():
    assert template_names(SCOREBOARD) == ["Row 0", "Logo 0", "Row 1", "Logo 1"]
