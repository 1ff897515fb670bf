import json

import pytest

from gfx_interpreter.models.schemas import ChangeSet, ElementSpec
from gfx_interpreter.services.interpreter import (
    TRUNCATION_WARNING,
    SceneInterpreter,
    is_drastic_change,
)

BOX_REPLY = """Adding a box that fades in.

```json
{
  "action": "create",
  "elements": [{"name": "Box", "type": "rectangle", "x": 100, "y": 100}],
  "animations": [{"element_name": "Box", "phase": "in"}]
}
```
"""


def test_reply_without_payload_is_no_change():
    assert SceneInterpreter().interpret("Sorry, I can't do that.") is None


def test_unrecognized_payload_is_no_change():
    assert SceneInterpreter().interpret('{"answer": 42}') is None


def test_box_fades_in_by_default():
    changes = SceneInterpreter().interpret(BOX_REPLY)

    (box,) = changes.elements
    assert box.element_type == "shape"
    assert (box.position_x, box.position_y) == (100, 100)
    (animation,) = changes.animations
    assert [kf.properties["opacity"] for kf in animation.keyframes] == [0, 1]
    assert changes.truncation_warning is None
    assert any(hint.field == "elements[0].x" for hint in changes.validation_hints)


def test_truncated_reply_carries_warning():
    reply = '```json\n{"type": "create", "elements": [{"name": "A"}, {"name": "B", "width": 3'

    changes = SceneInterpreter().interpret(reply)

    assert changes.truncation_warning == TRUNCATION_WARNING
    assert [e.name for e in changes.elements] == ["A", "B"]


def test_dynamic_elements_are_expanded_on_request():
    reply = json.dumps(
        {
            "type": "create",
            "elements": [{"name": "Header", "element_type": "text", "content": {"text": "Standings"}}],
            "dynamic_elements": {
                "data": [{"team": "Chiefs"}, {"team": "Eagles"}],
                "elements": [{"name": "Row {{@index}}", "type": "text", "text": "{{team}}"}],
            },
        }
    )

    kept = SceneInterpreter().interpret(reply)
    expanded = SceneInterpreter().interpret(reply, expand_dynamic=True)

    assert [e.name for e in kept.elements] == ["Header"]
    assert kept.dynamic_elements is not None
    assert [e.name for e in expanded.elements] == ["Header", "Row 0", "Row 1"]
    assert expanded.dynamic_elements is None


def test_debug_stages_are_saved(tmp_path):
    SceneInterpreter(debug_dir=str(tmp_path)).interpret(BOX_REPLY)

    (session,) = tmp_path.iterdir()
    saved = sorted(path.name for path in session.iterdir())
    assert saved == ["00_response.txt", "01_extracted.json", "02_normalized.json", "final_result.json"]
    final = json.loads((session / "final_result.json").read_text())
    assert final["elements"][0]["name"] == "Box"
    assert "validationHints" in final


def test_drastic_changes():
    element = ElementSpec(name="E")

    assert is_drastic_change(None) is False
    assert is_drastic_change(ChangeSet(type="create", elements=[element])) is False
    assert is_drastic_change(ChangeSet(type="delete")) is True
    assert is_drastic_change(ChangeSet(type="update", elements_to_delete=["el-1"])) is True
    assert is_drastic_change(ChangeSet(type="replace", elements=[element] * 101)) is True


def test_box_scenario_clamps_keyframes():
    reply = json.dumps(
        {
            "action": "create",
            "elements": [{"name": "Box", "type": "rectangle"}],
            "animations": [
                {
                    "element_name": "Box",
                    "phase": "in",
                    "keyframes": [
                        {"position": -10, "properties": {"opacity": -0.5}},
                        {"position": 150, "properties": {"opacity": 1.5}},
                    ],
                }
            ],
        }
    )

    changes = SceneInterpreter().interpret(reply)

    (animation,) = changes.animations
    assert [kf.position for kf in animation.keyframes] == [0, 100]
    assert [kf.properties["opacity"] for kf in animation.keyframes] == [0, 1]


WRONG_SHAPES = {
    "hints_int": {"type": "create", "elements": [{"name": "A"}], "validation_hints": 3},
    "layer_list": {"action": "create", "layer_type": ["overlay"], "elements": [{"name": "A"}]},
    "dynamic_data_int": {
        "type": "create",
        "elements": [{"name": "A"}],
        "dynamic_elements": {"data": 5, "elements": 7},
    },
    "icon_dict": {
        "layout": {
            "type": "slot",
            "name": "Sky",
            "elementType": "icon",
            "iconName": {"name": "sun"},
        }
    },
    "background_color_list": {
        "layout": {"type": "region", "name": "Panel", "background": {"type": "solid", "color": ["red"]}}
    },
    "chart_datasets_int": {
        "type": "create",
        "elements": [
            {
                "name": "Chart",
                "element_type": "chart",
                "content": {"type": "chart", "data": {"datasets": 4}},
            }
        ],
    },
    "group_styles_list": {
        "action": "create",
        "elements": [{"name": "Group", "styles": ["bold"], "elements": [{"name": "Child"}]}],
    },
}


@pytest.mark.parametrize("payload", WRONG_SHAPES.values(), ids=list(WRONG_SHAPES))
def test_wrong_shaped_values_are_tolerated(payload):
    changes = SceneInterpreter().interpret(json.dumps(payload))

    assert isinstance(changes, ChangeSet)
    assert changes.elements
