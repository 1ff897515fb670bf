from gfx_interpreter.models.schemas import KnownElement
from gfx_interpreter.services.dialects import (
    THEME_COLORS,
    collect_validation_hints,
    detect_dialect,
    map_keyframe,
    normalize,
)
from gfx_interpreter.services.validator import validate


def _interpret(raw, known=None):
    return validate(normalize(raw, known))


def test_detects_each_dialect():
    assert detect_dialect({"layout": {"type": "region"}}).name == "blueprint"
    assert detect_dialect({"action": "create", "elements": []}).name == "action"
    assert detect_dialect({"type": "update", "elements": []}).name == "canonical"
    assert detect_dialect({"elements": [{"name": "A"}]}).name == "simplified"
    assert detect_dialect({"message": "hello"}) is None


def test_unrecognized_payload_normalizes_to_none():
    assert normalize({"reply": "Nothing to change"}) is None
    assert normalize(None) is None


def test_action_create_uses_layer_defaults():
    raw = {
        "action": "create",
        "layer_type": "lower-third",
        "elements": [
            {"name": "Bar", "type": "rectangle", "width": 800, "height": "120px", "fill": "#111111"},
            {"name": "Title", "type": "text", "text": "Hello", "x": 40, "y": "20px"},
        ],
    }

    changes = _interpret(raw)

    assert changes.type == "create"
    assert changes.layer_type == "lower-third"
    bar, title = changes.elements
    assert bar.element_type == "shape"
    assert (bar.position_x, bar.position_y) == (50, 800)
    assert (bar.width, bar.height) == (800, 120)
    assert bar.content.fill == "#111111"
    assert bar.z_index == 300
    assert title.element_type == "text"
    assert (title.position_x, title.position_y) == (40, 20)
    assert title.content.text == "Hello"
    assert title.z_index == 301


def test_action_groups_are_flattened_with_parent_offsets():
    raw = {
        "action": "create",
        "layer_type": "lower-third",
        "elements": [
            {
                "name": "Panel",
                "x": 100,
                "y": 700,
                "styles": {"backgroundColor": "#000000", "borderRadius": "8px"},
                "elements": [{"name": "Label", "type": "text", "text": "Hi", "x": 20, "y": 10}],
            }
        ],
    }

    panel, label = _interpret(raw).elements

    assert panel.element_type == "shape"
    assert (panel.width, panel.height) == (600, 400)
    assert panel.content.fill == "transparent"
    assert panel.styles == {"borderRadius": "8px"}
    assert (label.position_x, label.position_y) == (120, 710)
    assert label.z_index == panel.z_index + 1


def test_animation_targeting_all_fans_out():
    raw = {
        "action": "create",
        "elements": [{"name": "A"}, {"name": "B"}],
        "animations": [{"element_name": "all", "phase": "in", "duration": 400}],
    }

    changes = _interpret(raw)

    assert [a.element_name for a in changes.animations] == ["A", "B"]
    assert all(a.duration == 400 for a in changes.animations)


def test_canonical_change_set_round_trips_unchanged():
    raw = {
        "type": "create",
        "layer_type": "fullscreen",
        "elements": [
            {
                "name": "Box",
                "element_type": "shape",
                "position_x": 10,
                "position_y": 20,
                "width": 300,
                "height": 150,
                "content": {"type": "shape", "fill": "#FF0000"},
            },
            {"name": "Caption", "element_type": "text", "content": {"type": "text", "text": "Live"}},
        ],
        "animations": [
            {
                "element_name": "Box",
                "phase": "in",
                "duration": 600,
                "easing": "ease-in-out",
                "keyframes": [
                    {"position": 0, "properties": {"opacity": 0}},
                    {"position": 100, "properties": {"opacity": 1}},
                ],
            }
        ],
    }

    once = _interpret(raw)
    twice = validate(normalize(once))

    assert twice == once


def test_simplified_payload_with_flat_keyframes():
    raw = {
        "elements": [{"name": "Logo", "type": "image", "src": "https://cdn.test/logo.png"}],
        "animations": [
            {
                "target": "Logo",
                "keyframes": [
                    {"offset": 0, "opacity": 0, "x": -50},
                    {"offset": 1, "opacity": 1, "x": 0},
                ],
            }
        ],
    }

    changes = _interpret(raw)

    assert changes.layer_type == "fullscreen"
    (logo,) = changes.elements
    assert (logo.position_x, logo.position_y) == (100, 100)
    assert logo.content.src == "https://cdn.test/logo.png"
    (animation,) = changes.animations
    assert animation.element_name == "Logo"
    assert [kf.position for kf in animation.keyframes] == [0, 100]
    assert animation.keyframes[0].properties == {"opacity": 0, "position_x": -50}


def test_nested_keyframe_properties_win_over_flat_ones():
    mapped = map_keyframe({"position": 50, "opacity": 0.2, "scale": 1.5, "properties": {"opacity": 0.8}})

    assert mapped == {
        "position": 50,
        "properties": {"opacity": 0.8, "transform": "scale(1.5)"},
    }


def test_animation_with_unknown_target_is_dropped():
    raw = {"type": "update", "animations": [{"element_name": "Ghost", "phase": "out"}]}

    assert _interpret(raw).animations == []


def test_known_elements_resolve_update_targets():
    known = [KnownElement(id="el-1", name="Ghost")]

    by_name = _interpret({"type": "update", "animations": [{"element_name": "Ghost"}]}, known)
    by_id = _interpret({"type": "update", "animations": [{"elementId": "el-1"}]}, known)

    assert by_name.animations[0].element_id == "el-1"
    assert by_id.animations[0].element_name == "Ghost"
    assert by_id.animations[0].element_id == "el-1"


def test_dynamic_template_names_are_valid_targets():
    raw = {
        "type": "create",
        "dynamic_elements": {
            "data": [{"team": "Chiefs"}, {"team": "Eagles"}],
            "elements": [{"name": "Row {{@index}}", "type": "text", "text": "{{team}}"}],
        },
        "animations": [{"element_name": "Row 1", "phase": "in"}],
    }

    changes = _interpret(raw)

    assert [a.element_name for a in changes.animations] == ["Row 1"]
    assert len(changes.dynamic_elements.data) == 2


def test_update_keeps_only_specified_fields():
    raw = {
        "type": "update",
        "elements": [{"id": "el-1", "name": "Score", "content": {"type": "text", "text": "21-14"}}],
    }

    (element,) = _interpret(raw).elements

    assert element.model_fields_set == {"id", "name", "content"}
    assert element.content.text == "21-14"


def test_blueprint_layout_is_flattened():
    raw = {
        "canvas": {"width": 1920, "height": 1080},
        "layout": {
            "type": "region",
            "name": "Panel",
            "position": {"anchor": "bottom-left", "x": 100, "y": 300},
            "size": {"width": "50%", "height": 200},
            "background": {"type": "solid", "color": "background"},
            "children": [
                {
                    "type": "slot",
                    "name": "Headline",
                    "elementType": "text",
                    "position": {"x": 20, "y": 20},
                    "size": {"width": 800, "height": "auto"},
                    "dataKey": "headline",
                    "exampleData": {"headline": "Breaking"},
                    "animation": {"in": {"duration": 400}},
                }
            ],
        },
    }

    changes = _interpret(raw)

    assert changes.layer_type == "fullscreen"
    panel, headline = changes.elements
    assert (panel.position_x, panel.position_y) == (100, 780)
    assert (panel.width, panel.height) == (960, 200)
    assert panel.content.fill == THEME_COLORS["background"]
    assert (headline.position_x, headline.position_y) == (120, 800)
    assert headline.height == 100
    assert headline.content.text == "Breaking"
    (animation,) = changes.animations
    assert animation.element_name == "Headline"
    assert animation.duration == 400
    assert animation.keyframes[0].properties == {"opacity": 0}


def test_validation_hints_describe_deviations():
    raw = {
        "action": "create",
        "elements": [{"name": "A", "type": "text", "x": 10, "width": "50%", "opacity": 2}],
        "animations": [{"element_name": "Missing", "keyframes": [{"offset": 0}]}],
    }

    hints = {hint.field: hint for hint in collect_validation_hints(raw)}

    assert set(hints) == {
        "elements[0].x",
        "elements[0].type",
        "elements[0].width",
        "elements[0].opacity",
        "animations[0].element_name",
        "animations[0].keyframes",
    }
    assert hints["animations[0].element_name"].type == "warning"


def test_known_elements_silence_unknown_target_hint():
    raw = {"type": "update", "animations": [{"element_name": "Score"}]}

    assert collect_validation_hints(raw, [KnownElement(name="Score")]) == []
