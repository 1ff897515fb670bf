import logging
from typing import Any, Iterable, Mapping

from gfx_interpreter.models.schemas import ChangeSet, KnownElement
from gfx_interpreter.services.debug_saver import DebugSaver
from gfx_interpreter.services.defaults import synthesize_defaults
from gfx_interpreter.services.dialects import collect_validation_hints, normalize
from gfx_interpreter.services.dynamic import expand_dynamic_elements
from gfx_interpreter.services.extractor import extract_payload
from gfx_interpreter.services.validator import validate

logger = logging.getLogger(__name__)

TRUNCATION_WARNING = (
    "Response was truncated and repaired. Some elements or animations may be incomplete."
)

# Change sets above this many elements need confirmation before applying
DRASTIC_ELEMENT_COUNT = 100


class SceneInterpreter:
    """Turns one AI reply into a validated ChangeSet."""

    def __init__(self, debug_dir: str | None = None) -> None:
        self.debug_dir = debug_dir

    def interpret(
        self,
        text: str,
        known_elements: Iterable[KnownElement | Mapping[str, Any]] | None = None,
        expand_dynamic: bool = False,
    ) -> ChangeSet | None:
        """
        Run a reply through every interpretation stage.

        Process flow:
        1. Extract the JSON payload, repairing truncation if needed
        2. Normalize whichever dialect it uses to the canonical shape
        3. Validate and clamp every field
        4. Give keyframe-less animations a template for their phase
        5. Attach validation hints, the truncation warning and, when asked,
           the expanded dynamic elements

        Returns None when the reply carries no change.
        """
        known = list(known_elements or [])
        debug = DebugSaver("turn", self.debug_dir)
        debug.save_response(text)

        extracted = extract_payload(text)
        if extracted is None:
            logger.info("No change payload in AI response")
            return None
        debug.save_stage(1, "extracted", extracted.payload)

        draft = normalize(extracted.payload, known)
        if draft is None:
            logger.info("AI payload is not a recognized change format")
            return None
        debug.save_stage(2, "normalized", draft)

        changes = synthesize_defaults(validate(draft))

        updates: dict[str, Any] = {
            "validation_hints": [
                *changes.validation_hints,
                *collect_validation_hints(extracted.payload, known),
            ]
        }
        if extracted.repaired:
            updates["truncation_warning"] = TRUNCATION_WARNING
        if expand_dynamic and changes.dynamic_elements is not None:
            updates["elements"] = [
                *changes.elements,
                *expand_dynamic_elements(changes.dynamic_elements),
            ]
            updates["dynamic_elements"] = None
        changes = changes.model_copy(update=updates)

        logger.info(
            "Interpreted %s change: %d elements, %d animations, %d hints",
            changes.type,
            len(changes.elements),
            len(changes.animations),
            len(changes.validation_hints),
        )
        debug.save_final_result(changes.model_dump(mode="json", by_alias=True))
        return changes


def is_drastic_change(changes: ChangeSet | None) -> bool:
    """Whether applying ``changes`` should be confirmed by the user first."""
    if changes is None:
        return False
    return (
        changes.type == "delete"
        or bool(changes.elements_to_delete)
        or len(changes.elements) > DRASTIC_ELEMENT_COUNT
    )


scene_interpreter = SceneInterpreter()
