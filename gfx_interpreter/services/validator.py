"""Clamp and default every field of a normalized draft into a ChangeSet.

Each field is defaulted independently, so one bad value never rejects its
element or animation. Entries that aren't objects are dropped.
"""

import logging
import re
from typing import Any, Mapping

from pydantic import ValidationError

from gfx_interpreter.models.schemas import (
    CONTENT_MODELS,
    AnimationSpec,
    Binding,
    ChangeSet,
    DynamicBlock,
    ElementSpec,
    KeyframeSpec,
    ValidationHint,
)
from gfx_interpreter.services.dialects import CHANGE_TYPES, DEFAULT_SIZE, TYPE_ALIASES, TYPE_SIZES
from gfx_interpreter.services.numbers import parse_number, to_number
from gfx_interpreter.services.templates import EXPRESSION_FIELDS, is_expression

logger = logging.getLogger(__name__)

PHASES = ("in", "loop", "out")
DIRECTIONS = ("normal", "reverse", "alternate", "alternate-reverse")

# Animation timing bounds (ms)
DEFAULT_DURATION = 500.0
MAX_DURATION = 60000.0

DEFAULT_EASING = "ease-out"
EASING_KEYWORDS = frozenset(
    {"linear", "ease", "ease-in", "ease-out", "ease-in-out", "step-start", "step-end"}
)
_NUMBER = r"\s*(-?(?:\d+\.?\d*|\.\d+))\s*"
_CUBIC_BEZIER = re.compile(rf"^cubic-bezier\({_NUMBER},{_NUMBER},{_NUMBER},{_NUMBER}\)$")
_STEPS = re.compile(
    r"^steps\(\s*[1-9]\d*\s*"
    r"(?:,\s*(?:start|end|jump-start|jump-end|jump-none|jump-both)\s*)?\)$"
)

NUMERIC_ELEMENT_FIELDS = ("position_x", "position_y", "rotation", "scale_x", "scale_y")


def validate(draft: Mapping[str, Any] | ChangeSet | None) -> ChangeSet:
    """Build a ChangeSet from a draft, clamping and defaulting each field."""
    if isinstance(draft, ChangeSet):
        dumped = draft.model_dump(exclude_unset=True)
        dumped["type"] = draft.type
        draft = dumped
    if not isinstance(draft, Mapping):
        return ChangeSet()

    change_type = draft.get("type")
    if change_type not in CHANGE_TYPES:
        change_type = "create"
    partial = change_type == "update"

    elements = []
    for entry in _entries(draft.get("elements"), "element"):
        element = validate_element(entry, partial=partial)
        if element is not None:
            elements.append(element)

    animations = []
    for entry in _entries(draft.get("animations"), "animation"):
        animation = validate_animation(entry)
        if animation is not None:
            animations.append(animation)

    layer_type = draft.get("layer_type")
    truncation_warning = draft.get("truncation_warning")
    return ChangeSet(
        type=change_type,
        layer_type=layer_type if isinstance(layer_type, str) and layer_type else None,
        elements=elements,
        animations=animations,
        elements_to_delete=_references(draft.get("elements_to_delete")),
        dynamic_elements=validate_dynamic_block(draft.get("dynamic_elements")),
        validation_hints=_hints(draft.get("validation_hints")),
        truncation_warning=truncation_warning if isinstance(truncation_warning, str) else None,
    )


def validate_element(entry: Mapping[str, Any], partial: bool = False) -> ElementSpec | None:
    """Coerce one element; with ``partial`` only the fields present are set."""
    name = _text(entry.get("name")) or _text(entry.get("id"))
    if name is None:
        logger.debug("Dropping element without name or id")
        return None

    fields: dict[str, Any] = {"name": name}
    element_id = _text(entry.get("id"))
    if element_id is not None:
        fields["id"] = element_id

    element_type = _element_type(entry.get("element_type"))
    if element_type is None and not partial:
        element_type = _content_type(entry.get("content")) or "shape"
    if element_type is not None:
        fields["element_type"] = element_type

    for key in NUMERIC_ELEMENT_FIELDS:
        if key in entry or not partial:
            fallback = 1.0 if key.startswith("scale") else 0.0
            number = to_number(entry.get(key))
            if number is not None:
                fields[key] = number
            elif not partial:
                fields[key] = fallback

    default_width, default_height = TYPE_SIZES.get(element_type or "shape", DEFAULT_SIZE)
    for key, fallback in (("width", default_width), ("height", default_height)):
        number = to_number(entry.get(key))
        if number is not None and number > 0:
            fields[key] = number
        elif not partial:
            fields[key] = fallback

    if "opacity" in entry or not partial:
        fields["opacity"] = parse_number(entry.get("opacity"), 1.0, 0.0, 1.0)

    z_index = to_number(entry.get("z_index"))
    if z_index is not None:
        fields["z_index"] = int(z_index)
    delay = to_number(entry.get("delay"))
    if delay is not None:
        fields["delay"] = max(delay, 0.0)

    styles = entry.get("styles")
    if isinstance(styles, Mapping):
        fields["styles"] = dict(styles)
    elif not partial:
        fields["styles"] = {}

    if "content" in entry or not partial:
        content_type = element_type or _content_type(entry.get("content"))
        if content_type is not None:
            fields["content"] = coerce_content(entry.get("content"), content_type, name)

    binding = entry.get("binding")
    if isinstance(binding, Mapping) and isinstance(binding.get("field"), str):
        fields["binding"] = Binding(
            field=binding["field"],
            type=binding["type"] if isinstance(binding.get("type"), str) else "text",
        )

    return ElementSpec(**fields)


def coerce_content(content: Any, element_type: str, name: str | None = None):
    """Coerce a content map to the model for ``element_type``.

    Keys that fail validation are dropped; missing content gets the type's
    default payload.
    """
    model = CONTENT_MODELS[element_type]
    data = dict(content) if isinstance(content, Mapping) else {}
    data["type"] = element_type

    if element_type == "text":
        if "text" in data and data["text"] is not None:
            data["text"] = str(data["text"])
        elif name is not None:
            data["text"] = name
    elif element_type == "chart":
        data = repair_chart(data)

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        invalid = {error["loc"][0] for error in exc.errors() if error["loc"]}
        logger.debug("Dropping invalid %s content keys: %s", element_type, sorted(map(str, invalid)))
        cleaned = {key: value for key, value in data.items() if key not in invalid}

    try:
        return model.model_validate(cleaned)
    except ValidationError:
        return model()


def repair_chart(data: dict[str, Any]) -> dict[str, Any]:
    """Make chart data renderable: numeric datasets with matching labels.

    Accepts the usual shapes the AI writes: ``data: [1, 2, 3]``,
    ``data: {labels, values}`` or ``data: {labels, datasets}``.
    """
    chart = data.get("data")
    if isinstance(chart, list):
        chart = {"datasets": [{"label": "Data", "data": chart}]}
    if not isinstance(chart, Mapping):
        data.pop("data", None)
        return data

    raw_datasets = chart.get("datasets") if isinstance(chart.get("datasets"), list) else []
    datasets = [dict(ds) for ds in raw_datasets if isinstance(ds, Mapping)]
    if not datasets and isinstance(chart.get("values"), list):
        datasets = [{"label": "Data", "data": chart["values"]}]
    for dataset in datasets:
        values = dataset.get("data") if isinstance(dataset.get("data"), list) else []
        dataset["data"] = [parse_number(value, 0.0) for value in values] or [0.0]
        if not isinstance(dataset.get("label"), str):
            dataset["label"] = "Data"

    if not datasets:
        data.pop("data", None)
        return data

    labels = chart.get("labels") if isinstance(chart.get("labels"), list) else []
    longest = max(len(dataset["data"]) for dataset in datasets)
    labels = [str(label) for label in labels][:longest]
    labels += [f"Item {index + 1}" for index in range(len(labels), longest)]

    data["data"] = {**chart, "labels": labels, "datasets": datasets}
    data["data"].pop("values", None)
    return data


def validate_animation(entry: Mapping[str, Any]) -> AnimationSpec | None:
    name = _text(entry.get("element_name"))
    if name is None:
        logger.debug("Dropping animation without element_name")
        return None

    phase = entry.get("phase")
    phase = phase.strip().lower() if isinstance(phase, str) else "in"
    if phase not in PHASES:
        phase = "in"

    direction = entry.get("direction")
    if direction not in DIRECTIONS:
        direction = "normal"

    entries = _entries(entry.get("keyframes"), "keyframe")
    keyframes = [
        validate_keyframe(keyframe, index, len(entries))
        for index, keyframe in enumerate(entries)
    ]

    return AnimationSpec(
        element_name=name,
        element_id=_text(entry.get("element_id")),
        phase=phase,
        duration=clamp_duration(entry.get("duration")),
        delay=parse_number(entry.get("delay"), 0.0, minimum=0.0),
        easing=normalize_easing(entry.get("easing")) or DEFAULT_EASING,
        iterations=_iterations(entry.get("iterations"), phase),
        direction=direction,
        keyframes=keyframes,
    )


def validate_keyframe(entry: Mapping[str, Any], index: int = 0, count: int = 2) -> KeyframeSpec:
    """Clamp position to 0-100 and opacity to 0-1.

    ``offset`` is the 0-1 form of ``position`` and is scaled up first. A keyframe
    without either lands at the start (first) or end (others).
    """
    position = to_number(entry.get("position"))
    if position is None:
        position = to_number(entry.get("offset"))
        if position is not None and 0 <= position <= 1:
            position *= 100
    if position is None:
        position = 0.0 if index == 0 or count < 2 else 100.0
    position = min(max(position, 0.0), 100.0)

    properties = entry.get("properties")
    properties = dict(properties) if isinstance(properties, Mapping) else {}
    if "opacity" in properties:
        properties["opacity"] = parse_number(properties["opacity"], 1.0, 0.0, 1.0)

    return KeyframeSpec(
        position=position,
        properties=properties,
        easing=normalize_easing(entry.get("easing")),
    )


def clamp_duration(value: Any) -> float:
    """Duration in ms: suffixes stripped, non-positive or junk -> 500, capped at 60000."""
    number = to_number(value)
    if number is None or number <= 0:
        return DEFAULT_DURATION
    return min(number, MAX_DURATION)


def normalize_easing(value: Any) -> str | None:
    """A CSS easing keyword, ``cubic-bezier(...)`` or ``steps(...)``; None otherwise."""
    if not isinstance(value, str):
        return None
    easing = value.strip()
    lowered = easing.lower()
    if lowered in EASING_KEYWORDS:
        return lowered
    bezier = _CUBIC_BEZIER.match(lowered)
    if bezier:
        x1, _, x2, _ = (float(group) for group in bezier.groups())
        return easing if 0 <= x1 <= 1 and 0 <= x2 <= 1 else None
    if _STEPS.match(lowered):
        return easing
    return None


def validate_dynamic_block(block: Any) -> DynamicBlock | None:
    """Keep object rows and templates; ``expression(...)`` survives only in expression fields."""
    if not isinstance(block, Mapping):
        return None

    rows = [dict(row) for row in _entries(block.get("data"), "dynamic row")]
    templates = []
    for template in _entries(block.get("elements"), "dynamic template"):
        kept = {}
        for key, value in template.items():
            if is_expression(value) and key not in EXPRESSION_FIELDS:
                logger.debug("Dropping expression in non-expression field %r", key)
                continue
            kept[key] = value
        templates.append(kept)

    return DynamicBlock(data=rows, elements=templates)


def _iterations(value: Any, phase: str) -> int:
    if isinstance(value, str) and value.strip().lower() in ("infinite", "infinity"):
        return -1
    number = to_number(value)
    if number is None:
        return -1 if phase == "loop" else 1
    if number < 0:
        return -1
    return max(int(number), 1)


def _entries(value: Any, kind: str) -> list[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    entries = [item for item in value if isinstance(item, Mapping)]
    if len(entries) != len(value):
        logger.debug("Dropped %d non-object %s entries", len(value) - len(entries), kind)
    return entries


def _references(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if isinstance(item, (str, int)) and not isinstance(item, bool)]


def _hints(value: Any) -> list[ValidationHint]:
    hints = []
    for item in value if isinstance(value, list) else []:
        if isinstance(item, ValidationHint):
            hints.append(item)
            continue
        try:
            hints.append(ValidationHint.model_validate(item))
        except ValidationError:
            continue
    return hints


def _text(value: Any) -> str | None:
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        text = str(value).strip()
        return text or None
    return None


def _element_type(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    lowered = value.strip().lower()
    lowered = TYPE_ALIASES.get(lowered, lowered)
    if lowered in CONTENT_MODELS:
        return lowered
    return "shape" if lowered else None


def _content_type(content: Any) -> str | None:
    if isinstance(content, Mapping):
        return _element_type(content.get("type"))
    return None
