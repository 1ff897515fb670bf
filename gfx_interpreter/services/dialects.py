"""Map the JSON dialects the AI emits onto the canonical change-set shape.

Each dialect is a ``DialectRule``: a predicate that recognises the payload and
a converter that turns it into a draft. Drafts use ChangeSet field names but
still hold raw values; ``validator.validate`` turns a draft into a ChangeSet.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from gfx_interpreter.models.schemas import ChangeSet, KnownElement, ValidationHint
from gfx_interpreter.services.defaults import PHASE_TEMPLATES
from gfx_interpreter.services.numbers import is_percentage, to_number
from gfx_interpreter.services.templates import template_names

logger = logging.getLogger(__name__)

ChangeSetDraft = dict[str, Any]

CHANGE_TYPES = ("create", "update", "replace", "delete")

# z-index base and default position of each broadcast layer
LAYER_DEFAULTS: dict[str, dict[str, float]] = {
    "fullscreen": {"z_index": 100, "x": 0, "y": 0},
    "background": {"z_index": 50, "x": 0, "y": 0},
    "overlay": {"z_index": 200, "x": 0, "y": 0},
    "lower-third": {"z_index": 300, "x": 50, "y": 800},
    "side-panel": {"z_index": 350, "x": 1550, "y": 200},
    "ticker": {"z_index": 400, "x": 0, "y": 1020},
    "bug": {"z_index": 450, "x": 50, "y": 50},
    "alert": {"z_index": 500, "x": 400, "y": 150},
}
DEFAULT_LAYER = "lower-third"

TYPE_ALIASES = {
    "rectangle": "shape",
    "rect": "shape",
    "ellipse": "shape",
    "circle": "shape",
    "container": "shape",
    "group": "shape",
    "box": "shape",
    "img": "image",
    "picture": "image",
    "photo": "image",
    "txt": "text",
    "label": "text",
    "heading": "text",
    "graph": "chart",
    "grid": "table",
    "crawl": "ticker",
    "timer": "countdown",
    "divider": "line",
}

# Width/height used when a dimension is missing or given as a percentage
TYPE_SIZES: dict[str, tuple[float, float]] = {
    "text": (400, 60),
    "image": (400, 300),
    "icon": (64, 64),
    "chart": (600, 400),
    "table": (800, 400),
    "map": (800, 600),
    "video": (640, 360),
    "ticker": (1920, 60),
    "countdown": (200, 80),
    "line": (200, 4),
}
DEFAULT_SIZE = (200.0, 100.0)

# Group containers are bigger than plain shapes
GROUP_SIZE = (600.0, 400.0)

# Simplified payloads place unpositioned elements here
SIMPLIFIED_POSITION = 100.0

ELEMENT_FIELDS = (
    "id",
    "name",
    "element_type",
    "position_x",
    "position_y",
    "width",
    "height",
    "rotation",
    "opacity",
    "scale_x",
    "scale_y",
    "z_index",
    "delay",
    "styles",
    "content",
    "binding",
)
ELEMENT_KEY_ALIASES = {
    "x": "position_x",
    "y": "position_y",
    "positionX": "position_x",
    "positionY": "position_y",
    "type": "element_type",
    "elementType": "element_type",
    "scaleX": "scale_x",
    "scaleY": "scale_y",
    "zIndex": "z_index",
    "_zIndex": "z_index",
}

ANIMATION_FIELDS = ("phase", "duration", "delay", "easing", "iterations", "direction")
# Keys an animation may use to name its element, most specific first
TARGET_KEYS = ("id", "elementId", "element_id", "element_name", "elementName", "target", "targetElement")

KEYFRAME_KEYS = ("position", "offset", "easing")
KEYFRAME_PROPERTY_ALIASES = {
    "x": "position_x",
    "y": "position_y",
    "scaleX": "scale_x",
    "scaleY": "scale_y",
}

DEFAULT_CANVAS = (1920.0, 1080.0)
# Blueprint phase -> (duration ms, easing) used when the sub-object omits them
BLUEPRINT_PHASES = {"in": (500, "ease-out"), "loop": (1000, "linear"), "out": (300, "ease-in")}
# Named colour tokens blueprint nodes use instead of literal colours
THEME_COLORS = {
    "background": "rgba(0, 0, 0, 0.95)",
    "secondary": "rgba(255, 255, 255, 0.1)",
    "accent": "#06B6D4",
    "text": "#FFFFFF",
    "textSecondary": "rgba(255, 255, 255, 0.7)",
}
WEATHER_ICONS = frozenset({"sun", "cloud", "cloud-rain", "cloud-snow", "cloud-lightning", "wind"})
MAX_LAYOUT_DEPTH = 20


@dataclass(frozen=True)
class DialectRule:
    """Recognises one payload dialect and converts it to a draft."""

    name: str
    matches: Callable[[Mapping[str, Any]], bool]
    convert: Callable[[Mapping[str, Any]], ChangeSetDraft]


def normalize(
    raw: Mapping[str, Any] | ChangeSet | None,
    known_elements: Iterable[KnownElement | Mapping[str, Any]] | None = None,
) -> ChangeSetDraft | None:
    """Convert an extracted payload in any supported dialect to a canonical draft.

    Returns None when the payload matches no dialect. Animations whose target
    can't be found among this turn's elements, the dynamic templates or
    ``known_elements`` are dropped.
    """
    if isinstance(raw, ChangeSet):
        dumped = raw.model_dump(exclude_unset=True)
        dumped["type"] = raw.type
        raw = dumped
    if not isinstance(raw, Mapping):
        return None

    rule = detect_dialect(raw)
    if rule is None:
        logger.debug("Payload matches no dialect (keys: %s)", ", ".join(sorted(map(str, raw))[:10]))
        return None

    draft = rule.convert(raw)
    draft["animations"] = _resolve_animations(draft, known_elements or ())
    logger.debug(
        "Normalized %s payload: %d elements, %d animations",
        rule.name,
        len(draft["elements"]),
        len(draft["animations"]),
    )
    return draft


def detect_dialect(raw: Mapping[str, Any]) -> DialectRule | None:
    for rule in DIALECT_RULES:
        if rule.matches(raw):
            return rule
    return None


# --- Blueprint -----------------------------------------------------------


def _is_blueprint(raw: Mapping[str, Any]) -> bool:
    return isinstance(raw.get("layout"), Mapping)


def _convert_blueprint(raw: Mapping[str, Any]) -> ChangeSetDraft:
    canvas = raw.get("canvas") if isinstance(raw.get("canvas"), Mapping) else {}
    layout = BlueprintLayout(
        width=_positive(canvas.get("width"), DEFAULT_CANVAS[0]),
        height=_positive(canvas.get("height"), DEFAULT_CANVAS[1]),
    )
    layout.walk(raw["layout"])
    layer_type = _text(raw.get("layerType") or raw.get("layer_type")) or "fullscreen"
    return _draft("create", layer_type, layout.elements, layout.animations, raw)


class BlueprintLayout:
    """Flattens a blueprint layout tree into absolutely positioned elements."""

    def __init__(self, width: float = DEFAULT_CANVAS[0], height: float = DEFAULT_CANVAS[1]) -> None:
        self.width = width
        self.height = height
        self.elements: list[dict[str, Any]] = []
        self.animations: list[dict[str, Any]] = []

    def walk(self, node: Any, parent_x: float = 0, parent_y: float = 0, depth: int = 0) -> None:
        if not isinstance(node, Mapping) or depth > MAX_LAYOUT_DEPTH:
            return

        x, y = self.position(node, parent_x, parent_y)
        size = node.get("size") if isinstance(node.get("size"), Mapping) else {}
        width = self.size(size.get("width", node.get("width")), self.width, DEFAULT_SIZE[0])
        height = self.size(size.get("height", node.get("height")), self.height, DEFAULT_SIZE[1])
        children = node.get("children") if isinstance(node.get("children"), list) else []

        if node.get("type") == "region":
            name = _text(node.get("name") or node.get("id")) or f"Container {len(self.elements) + 1}"
            fill = _region_fill(node.get("background"))
            self.elements.append(
                _geometry(name, "shape", x, y, width, height)
                | {
                    "styles": _region_styles(node, fill),
                    "content": {"type": "shape", "shape": "rectangle", "fill": fill},
                }
            )
            self._add_animations(node, name)
            padding = node.get("padding") if isinstance(node.get("padding"), Mapping) else {}
            child_x = x + (to_number(padding.get("left")) or 0)
            child_y = y + (to_number(padding.get("top")) or 0)
            for child in children:
                self.walk(child, child_x, child_y, depth + 1)
            return

        if node.get("type") == "slot" and node.get("elementType"):
            element_type = _element_type(node["elementType"])
            name = _text(node.get("name") or node.get("id")) or f"Element {len(self.elements) + 1}"
            self.elements.append(
                _geometry(name, element_type, x, y, width, height)
                | {
                    "styles": _slot_styles(node),
                    "content": _slot_content(node, element_type, width, height),
                }
            )
            self._add_animations(node, name)

        for child in children:
            self.walk(child, x, y, depth + 1)

    def position(self, node: Mapping[str, Any], parent_x: float, parent_y: float) -> tuple[float, float]:
        """Absolute position of a node from its anchor and offsets."""
        position = node.get("position") if isinstance(node.get("position"), Mapping) else {}
        dx = to_number(position.get("x")) or 0.0
        dy = to_number(position.get("y")) or 0.0
        anchor = position.get("anchor")

        if anchor == "center":
            x, y = self.width / 2 + dx, self.height / 2 + dy
        elif anchor == "bottom-left":
            x, y = dx, self.height - dy
        elif anchor == "top-right":
            x, y = self.width - dx, dy
        elif anchor == "bottom-right":
            x, y = self.width - dx, self.height - dy
        else:
            x, y = dx, dy
        return x + parent_x, y + parent_y

    @staticmethod
    def size(value: Any, extent: float, fallback: float) -> float:
        """Resolve ``"50%"``, ``"100px"``, ``"auto"`` or a number against the canvas extent."""
        if isinstance(value, str):
            text = value.strip().lower()
            if text == "auto":
                return fallback
            if text.endswith("%"):
                percent = to_number(text[:-1])
                return extent * percent / 100 if percent is not None and percent > 0 else fallback
        return _positive(value, fallback)

    def _add_animations(self, node: Mapping[str, Any], name: str) -> None:
        animation = node.get("animation")
        if not isinstance(animation, Mapping):
            return
        for phase, (duration, easing) in BLUEPRINT_PHASES.items():
            phase_config = animation.get(phase)
            if not isinstance(phase_config, Mapping) or not phase_config:
                continue
            start, end = PHASE_TEMPLATES[phase]
            converted = {
                "element_name": name,
                "phase": phase,
                "duration": phase_config.get("duration") or duration,
                "delay": phase_config.get("delay") or 0,
                "easing": phase_config.get("easing") or easing,
                "keyframes": [
                    {"position": 0, "properties": phase_config.get("from") or dict(start)},
                    {"position": 100, "properties": phase_config.get("to") or dict(end)},
                ],
            }
            if "iterations" in phase_config:
                converted["iterations"] = phase_config["iterations"]
            self.animations.append(converted)


def _geometry(name: str, element_type: str, x: float, y: float, width: float, height: float) -> dict[str, Any]:
    return {
        "name": name,
        "element_type": element_type,
        "position_x": x,
        "position_y": y,
        "width": width,
        "height": height,
        "rotation": 0,
        "opacity": 1,
        "scale_x": 1,
        "scale_y": 1,
    }


def _theme_color(value: Any, fallback: str) -> str:
    if isinstance(value, str) and value:
        return THEME_COLORS.get(value, value)
    return fallback


def _region_fill(background: Any) -> str:
    if not isinstance(background, Mapping):
        return "transparent"
    color = background.get("color")
    if isinstance(color, str) and color in THEME_COLORS:
        return THEME_COLORS[color]
    if background.get("type") == "solid":
        return _theme_color(color, "transparent")
    return "transparent"


def _region_styles(node: Mapping[str, Any], fill: str) -> dict[str, Any]:
    background = node.get("background") if isinstance(node.get("background"), Mapping) else {}
    styles: dict[str, Any] = {"backgroundColor": fill, "opacity": background.get("opacity", 1)}

    border = node.get("border") if isinstance(node.get("border"), Mapping) else {}
    if border.get("radius"):
        styles["borderRadius"] = f"{border['radius']}px"
    if border.get("width"):
        styles["border"] = f"{border['width']}px solid {border.get('color') or 'transparent'}"

    shadow = node.get("shadow") if isinstance(node.get("shadow"), Mapping) else {}
    if shadow.get("enabled"):
        styles["boxShadow"] = (
            f"{shadow.get('x', 0)}px {shadow.get('y', 0)}px {shadow.get('blur', 0)}px "
            f"{shadow.get('color') or 'rgba(0,0,0,0.4)'}"
        )
    return styles


def _example_value(node: Mapping[str, Any]) -> Any:
    example = node.get("exampleData")
    key = node.get("dataKey")
    if isinstance(example, Mapping) and isinstance(key, str):
        return example.get(key)
    return None


def _slot_styles(node: Mapping[str, Any]) -> dict[str, Any]:
    text_style = node.get("textStyle")
    if not isinstance(text_style, Mapping):
        return {}
    font_size = text_style.get("fontSize")
    return {
        "fontSize": f"{font_size}px" if font_size else "32px",
        "fontFamily": text_style.get("fontFamily") or "Inter",
        "fontWeight": text_style.get("fontWeight") or 400,
        "color": _theme_color(text_style.get("color"), "#FFFFFF"),
        "textAlign": text_style.get("textAlign") or "left",
    }


def _slot_content(node: Mapping[str, Any], element_type: str, width: float, height: float) -> dict[str, Any]:
    example = _example_value(node)
    style = node.get("style") if isinstance(node.get("style"), Mapping) else {}

    if element_type == "text":
        return {"type": "text", "text": str(example or node.get("defaultValue") or "Text")}
    if element_type == "icon":
        data_key = node.get("dataKey")
        icon_name = node.get("iconName") or "Sparkles"
        if isinstance(data_key, str) and "icon" in data_key:
            icon_name = example or "sun"
        if not isinstance(icon_name, str):
            icon_name = "sun" if isinstance(data_key, str) and "icon" in data_key else "Sparkles"
        return {
            "type": "icon",
            "library": "weather" if icon_name in WEATHER_ICONS else "lucide",
            "iconName": icon_name,
            "size": min(width, height),
            "color": _theme_color(style.get("color"), "#FFFFFF"),
        }
    if element_type == "shape":
        return {
            "type": "shape",
            "shape": node.get("shapeType") or "rectangle",
            "fill": _theme_color(style.get("fill"), "#3B82F6"),
        }
    if element_type in ("image", "video", "svg"):
        return {"type": element_type, "src": str(example or node.get("src") or "")}
    return {"type": element_type}


# --- Action / canonical / simplified --------------------------------------


def _is_action(raw: Mapping[str, Any]) -> bool:
    return isinstance(raw.get("action"), str) and _has_change_keys(raw)


def _convert_action(raw: Mapping[str, Any]) -> ChangeSetDraft:
    change_type = _change_type(raw.get("action"))
    layer_type = _text(raw.get("layer_type") or raw.get("layerType")) or DEFAULT_LAYER
    entries = _objects(raw.get("elements"))

    if change_type == "update":
        elements = [_update_element(entry) for entry in entries]
    else:
        layer = LAYER_DEFAULTS.get(layer_type, LAYER_DEFAULTS[DEFAULT_LAYER])
        elements = _flatten_groups(entries, layer)

    return _draft(change_type, layer_type, elements, _objects(raw.get("animations")), raw)


def _flatten_groups(
    entries: list[Mapping[str, Any]],
    layer: Mapping[str, float],
    parent: tuple[float, float] | None = None,
    result: list[dict[str, Any]] | None = None,
) -> list[dict[str, Any]]:
    """Flatten nested ``elements`` groups into one list with absolute positions.

    Each group becomes a transparent container shape. Top-level elements without
    a position take the layer's default; nested ones are offset by their parent.
    """
    if result is None:
        result = []
    for entry in entries:
        fields = _element_fields(entry)
        if parent is None:
            x = _coordinate(fields.get("position_x"), layer["x"])
            y = _coordinate(fields.get("position_y"), layer["y"])
        else:
            x = parent[0] + _coordinate(fields.get("position_x"), 0)
            y = parent[1] + _coordinate(fields.get("position_y"), 0)
        z_index = int(layer["z_index"]) + len(result)

        children = entry.get("elements")
        if isinstance(children, list):
            styles = dict(fields["styles"]) if isinstance(fields.get("styles"), Mapping) else {}
            styles.pop("backgroundColor", None)
            group = _geometry(
                _text(fields.get("name")) or "Group",
                "shape",
                x,
                y,
                _dimension(fields.get("width"), GROUP_SIZE[0]),
                _dimension(fields.get("height"), GROUP_SIZE[1]),
            )
            for key in ("rotation", "opacity", "scale_x", "scale_y"):
                if key in fields:
                    group[key] = fields[key]
            group.update(
                styles=styles,
                content={"type": "shape", "shape": "rectangle", "fill": "transparent"},
                z_index=z_index,
            )
            if fields.get("id") is not None:
                group["id"] = fields["id"]
            result.append(group)
            _flatten_groups(_objects(children), layer, (x, y), result)
        else:
            result.append(create_element(entry, len(result), x=x, y=y, z_index=z_index, absolute=True))
    return result


def _is_canonical(raw: Mapping[str, Any]) -> bool:
    return raw.get("type") in CHANGE_TYPES and "action" not in raw


def _convert_canonical(raw: Mapping[str, Any]) -> ChangeSetDraft:
    change_type = _change_type(raw.get("type"))
    layer_type = _text(raw.get("layer_type", raw.get("layerType")))
    entries = _objects(raw.get("elements"))
    if change_type == "update":
        elements = [_update_element(entry) for entry in entries]
    else:
        elements = [create_element(entry, index, x=0, y=0) for index, entry in enumerate(entries)]
    return _draft(change_type, layer_type, elements, _objects(raw.get("animations")), raw)


def _is_simplified(raw: Mapping[str, Any]) -> bool:
    return isinstance(raw.get("elements"), list) or isinstance(raw.get("animations"), list)


def _convert_simplified(raw: Mapping[str, Any]) -> ChangeSetDraft:
    elements = [
        create_element(entry, index, x=SIMPLIFIED_POSITION, y=SIMPLIFIED_POSITION, z_index=index)
        for index, entry in enumerate(_objects(raw.get("elements")))
    ]
    return _draft("create", "fullscreen", elements, _objects(raw.get("animations")), raw)


DIALECT_RULES: tuple[DialectRule, ...] = (
    DialectRule("blueprint", _is_blueprint, _convert_blueprint),
    DialectRule("action", _is_action, _convert_action),
    DialectRule("canonical", _is_canonical, _convert_canonical),
    DialectRule("simplified", _is_simplified, _convert_simplified),
)


# --- Shared element/animation mapping ------------------------------------


def _draft(
    change_type: str,
    layer_type: Any,
    elements: list[dict[str, Any]],
    animations: list[Mapping[str, Any]],
    raw: Mapping[str, Any],
) -> ChangeSetDraft:
    to_delete = raw.get("elements_to_delete", raw.get("elementsToDelete"))
    dynamic = raw.get("dynamic_elements", raw.get("dynamicElements"))
    hints = raw.get("validation_hints", raw.get("validationHints"))
    return {
        "type": change_type,
        "layer_type": layer_type,
        "elements": elements,
        "animations": [map_animation(animation) for animation in animations],
        "elements_to_delete": list(to_delete) if isinstance(to_delete, list) else [],
        "dynamic_elements": dynamic if isinstance(dynamic, Mapping) else None,
        "validation_hints": hints if isinstance(hints, list) else [],
        "truncation_warning": raw.get("truncation_warning", raw.get("truncationWarning")),
    }


def _has_change_keys(raw: Mapping[str, Any]) -> bool:
    return any(
        key in raw
        for key in ("elements", "animations", "elements_to_delete", "elementsToDelete", "dynamic_elements")
    )


def _change_type(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() in CHANGE_TYPES:
        return value.strip().lower()
    return "create"


def _objects(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _text(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def _positive(value: Any, fallback: float) -> float:
    number = to_number(value)
    return number if number is not None and number > 0 else fallback


def _coordinate(value: Any, fallback: float) -> float:
    number = to_number(value)
    return fallback if number is None else number


def _dimension(value: Any, fallback: float) -> Any:
    """Strip unit suffixes; percentages and non-numeric sizes fall back."""
    if value is None or is_percentage(value):
        return fallback
    number = to_number(value)
    return fallback if number is None else number


def _element_type(value: Any) -> str | None:
    text = _text(value)
    if text is None:
        return None
    lowered = text.lower()
    return TYPE_ALIASES.get(lowered, lowered)


def _element_fields(entry: Mapping[str, Any]) -> dict[str, Any]:
    """Element keys mapped onto canonical names; canonical spellings win."""
    fields: dict[str, Any] = {}
    for key, value in entry.items():
        target = ELEMENT_KEY_ALIASES.get(key, key)
        if target in ELEMENT_FIELDS and (target not in fields or key == target):
            fields[target] = value
    return fields


def create_element(
    entry: Mapping[str, Any],
    index: int,
    *,
    x: float,
    y: float,
    z_index: int | None = None,
    absolute: bool = False,
) -> dict[str, Any]:
    fields = _element_fields(entry)
    content = fields.get("content")
    element_type = (
        _element_type(fields.get("element_type"))
        or (_element_type(content.get("type")) if isinstance(content, Mapping) else None)
        or "shape"
    )
    name = _text(fields.get("name")) or _text(fields.get("id")) or f"Element {index + 1}"
    width, height = TYPE_SIZES.get(element_type, DEFAULT_SIZE)

    element = _geometry(
        name,
        element_type,
        x if absolute else _coordinate(fields.get("position_x"), x),
        y if absolute else _coordinate(fields.get("position_y"), y),
        _dimension(fields.get("width"), width),
        _dimension(fields.get("height"), height),
    )
    for key in ("rotation", "opacity", "scale_x", "scale_y"):
        if key in fields:
            element[key] = fields[key]
    element["styles"] = fields.get("styles") if isinstance(fields.get("styles"), Mapping) else {}
    element["content"] = _content(content, entry, element_type, name)

    for key in ("id", "z_index", "delay", "binding"):
        if fields.get(key) is not None:
            element[key] = fields[key]
    if "z_index" not in element and z_index is not None:
        element["z_index"] = z_index
    return element


def _update_element(entry: Mapping[str, Any]) -> dict[str, Any]:
    """Only the fields the AI specified, with aliases and unit suffixes resolved."""
    fields = _element_fields(entry)
    if "element_type" in fields:
        fields["element_type"] = _element_type(fields["element_type"])
    for key in ("position_x", "position_y", "width", "height"):
        if key in fields and isinstance(fields[key], str):
            number = to_number(fields[key])
            if number is not None:
                fields[key] = number
    if "content" not in fields:
        content = _content(None, entry, fields.get("element_type"), None)
        if content is not None:
            fields["content"] = content
    return fields


def _content(
    content: Any,
    entry: Mapping[str, Any],
    element_type: str | None,
    name: str | None,
) -> dict[str, Any] | None:
    """Element content, built from flat shortcut keys (``text``, ``src``, ``fill``) when absent."""
    if isinstance(content, Mapping):
        content = dict(content)
        if element_type:
            content.setdefault("type", element_type)
        return content
    if isinstance(content, str) and element_type in (None, "text"):
        return {"type": "text", "text": content}

    text = entry.get("text", entry.get("value"))
    src = entry.get("src", entry.get("url"))
    fill = entry.get("fill", entry.get("color"))
    if element_type in (None, "text") and isinstance(text, (str, int, float)):
        return {"type": "text", "text": str(text)}
    if element_type == "text" and name is not None:
        return {"type": "text", "text": name}
    if element_type in ("image", "video", "svg") and isinstance(src, str):
        return {"type": element_type, "src": src}
    if element_type == "shape" and isinstance(fill, str):
        return {"type": "shape", "fill": fill}
    if element_type == "icon" and isinstance(entry.get("icon"), str):
        return {"type": "icon", "iconName": entry["icon"]}
    return None


def map_keyframe(keyframe: Mapping[str, Any]) -> dict[str, Any]:
    """Merge legacy flat keyframe properties into ``properties``.

    ``{"offset": 0, "opacity": 0, "x": -50}`` becomes
    ``{"offset": 0, "properties": {"opacity": 0, "position_x": -50}}``. Values
    already under ``properties`` win over flat siblings.
    """
    properties: dict[str, Any] = {}
    for key, value in keyframe.items():
        if key in KEYFRAME_KEYS or key == "properties":
            continue
        if key == "scale":
            properties["transform"] = f"scale({value})"
            continue
        properties[KEYFRAME_PROPERTY_ALIASES.get(key, key)] = value

    nested = keyframe.get("properties")
    if isinstance(nested, Mapping):
        properties.update(nested)

    mapped: dict[str, Any] = {key: keyframe[key] for key in KEYFRAME_KEYS if key in keyframe}
    mapped["properties"] = properties
    return mapped


def map_animation(animation: Mapping[str, Any]) -> dict[str, Any]:
    mapped = {key: animation[key] for key in TARGET_KEYS + ANIMATION_FIELDS if key in animation}
    keyframes = animation.get("keyframes")
    if isinstance(keyframes, list):
        mapped["keyframes"] = [map_keyframe(kf) if isinstance(kf, Mapping) else kf for kf in keyframes]
    else:
        mapped["keyframes"] = []
    return mapped


# --- Target resolution ---------------------------------------------------


class _TargetIndex:
    """Element ids and names an animation may refer to."""

    def __init__(self) -> None:
        self.names: dict[str, str | None] = {}
        self.ids: dict[str, str] = {}

    def add(self, element_id: Any, name: Any) -> None:
        element_id = _text(element_id)
        name = _text(name)
        if name is not None and self.names.get(name) is None:
            self.names[name] = element_id
        if element_id is not None:
            self.ids.setdefault(element_id, name or element_id)

    def resolve(self, animation: Mapping[str, Any]) -> tuple[str, str | None] | None:
        for key in ("id", "elementId", "element_id"):
            ref = _text(animation.get(key))
            if ref is not None and ref in self.ids:
                return self.ids[ref], ref
        for key in TARGET_KEYS[1:]:
            ref = _text(animation.get(key))
            if ref is None:
                continue
            if ref in self.names:
                return ref, self.names[ref]
            if ref in self.ids:
                return self.ids[ref], ref
        return None


def _target_ref(animation: Mapping[str, Any]) -> str | None:
    for key in TARGET_KEYS[1:]:
        ref = _text(animation.get(key))
        if ref is not None:
            return ref
    return None


def _resolve_animations(
    draft: ChangeSetDraft,
    known_elements: Iterable[KnownElement | Mapping[str, Any]],
) -> list[dict[str, Any]]:
    index = _TargetIndex()
    for element in draft["elements"]:
        index.add(element.get("id"), element.get("name"))
    for name in template_names(draft.get("dynamic_elements")):
        index.add(None, name)
    for known in known_elements:
        if isinstance(known, KnownElement):
            index.add(known.id, known.name)
        elif isinstance(known, Mapping):
            index.add(known.get("id"), known.get("name"))

    resolved: list[dict[str, Any]] = []
    for animation in draft["animations"]:
        if _target_ref(animation) == "all" and "all" not in index.names:
            resolved.extend(
                _retarget(animation, element.get("name"), element.get("id"))
                for element in draft["elements"]
                if _text(element.get("name"))
            )
            continue

        target = index.resolve(animation)
        if target is None:
            logger.debug("Dropping animation with unresolvable target %r", _target_ref(animation))
            continue
        resolved.append(_retarget(animation, *target))
    return resolved


def _retarget(animation: Mapping[str, Any], name: str, element_id: str | None) -> dict[str, Any]:
    retargeted = {key: value for key, value in animation.items() if key not in TARGET_KEYS}
    retargeted["element_name"] = name
    if element_id is not None:
        retargeted["element_id"] = element_id
    return retargeted


# --- Validation hints ----------------------------------------------------

# Positions further than this outside the canvas are probably mistakes
POSITION_TOLERANCE = 2000


def collect_validation_hints(
    raw: Mapping[str, Any] | None,
    known_elements: Iterable[KnownElement | Mapping[str, Any]] | None = None,
) -> list[ValidationHint]:
    """Non-fatal observations about a raw payload, surfaced to the user.

    Looks at the payload as the AI wrote it, before normalization hides the
    deviations.
    """
    if not isinstance(raw, Mapping):
        return []

    hints: list[ValidationHint] = []
    names = set(template_names(raw.get("dynamic_elements", raw.get("dynamicElements"))))
    for known in known_elements or ():
        name = known.name if isinstance(known, KnownElement) else known.get("name")
        if name:
            names.add(name)

    elements = raw.get("elements") if isinstance(raw.get("elements"), list) else []
    for index, element in enumerate(elements):
        if isinstance(element, Mapping) and isinstance(element.get("name"), str):
            names.add(element["name"])
        hints.extend(_element_hints(element, f"elements[{index}]", "action" in raw))

    animations = raw.get("animations") if isinstance(raw.get("animations"), list) else []
    for index, animation in enumerate(animations):
        hints.extend(_animation_hints(animation, f"animations[{index}]", names))
    return hints


def _element_hints(element: Any, field: str, action_dialect: bool) -> list[ValidationHint]:
    if not isinstance(element, Mapping):
        return [_hint("error", field, "Element entry is not an object and was ignored")]

    hints = []
    uses_xy = "x" in element or "y" in element
    if uses_xy and "position_x" not in element and "position_y" not in element:
        hints.append(
            _hint(
                "warning",
                f"{field}.x",
                "Element uses x/y instead of position_x/position_y",
                "Use position_x and position_y",
            )
        )
    if action_dialect and "type" in element and "element_type" not in element:
        hints.append(
            _hint(
                "info",
                f"{field}.type",
                "Element uses type instead of element_type",
                "Use element_type",
            )
        )
    for dimension in ("width", "height"):
        if is_percentage(element.get(dimension)):
            hints.append(
                _hint(
                    "warning",
                    f"{field}.{dimension}",
                    f"Percentage {dimension} {element[dimension]!r} replaced with a default",
                    "Use pixel values",
                )
            )

    opacity = to_number(element.get("opacity"))
    if opacity is not None and not 0 <= opacity <= 1:
        hints.append(
            _hint(
                "warning",
                f"{field}.opacity",
                f"Opacity {opacity:g} is outside 0-1 and will be clamped",
            )
        )

    low, high = -POSITION_TOLERANCE, DEFAULT_CANVAS[0] + POSITION_TOLERANCE
    for axis in ("position_x", "position_y"):
        position = to_number(element.get(axis))
        if position is not None and not low <= position <= high:
            hints.append(
                _hint("info", f"{field}.{axis}", f"Position {position:g} is far outside the canvas")
            )
    return hints


def _animation_hints(animation: Any, field: str, names: set[str]) -> list[ValidationHint]:
    if not isinstance(animation, Mapping):
        return [_hint("error", field, "Animation entry is not an object and was ignored")]

    hints = []
    target = _target_ref(animation)
    by_id = "elementId" in animation or "element_id" in animation
    if target is None:
        hints.append(_hint("error", f"{field}.element_name", "Animation has no target element"))
    elif target != "all" and target not in names and not by_id:
        hints.append(
            _hint(
                "warning",
                f"{field}.element_name",
                f"Animation targets unknown element {target!r}",
                "Reference an element created in this response or already on the canvas",
            )
        )

    keyframes = animation.get("keyframes")
    if isinstance(keyframes, list) and any(
        isinstance(kf, Mapping) and "offset" in kf and "position" not in kf for kf in keyframes
    ):
        hints.append(
            _hint(
                "info",
                f"{field}.keyframes",
                "Keyframes use offset (0-1); converted to position (0-100)",
                "Use position",
            )
        )
    return hints


def _hint(kind: str, field: str, message: str, suggestion: str | None = None) -> ValidationHint:
    return ValidationHint(type=kind, field=field, message=message, suggestion=suggestion)
