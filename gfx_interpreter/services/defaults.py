from gfx_interpreter.models.schemas import AnimationSpec, ChangeSet, KeyframeSpec

# Start/end keyframe properties used when an animation arrives without keyframes
PHASE_TEMPLATES: dict[str, tuple[dict[str, float], dict[str, float]]] = {
    "in": ({"opacity": 0}, {"opacity": 1}),
    "out": ({"opacity": 1}, {"opacity": 0}),
    "loop": ({"rotation": 0}, {"rotation": 360}),
}


def template_keyframes(phase: str) -> list[KeyframeSpec]:
    start, end = PHASE_TEMPLATES.get(phase, PHASE_TEMPLATES["in"])
    return [
        KeyframeSpec(position=0, properties=dict(start)),
        KeyframeSpec(position=100, properties=dict(end)),
    ]


def synthesize_defaults(changes: ChangeSet) -> ChangeSet:
    """Give every animation at least two keyframes.

    Animations with fewer than two keyframes get the template for their phase
    in place of whatever partial keyframes they carried.
    """
    animations = [_with_keyframes(animation) for animation in changes.animations]
    if all(new is old for new, old in zip(animations, changes.animations)):
        return changes
    return changes.model_copy(update={"animations": animations})


def _with_keyframes(animation: AnimationSpec) -> AnimationSpec:
    if len(animation.keyframes) >= 2:
        return animation
    return animation.model_copy(update={"keyframes": template_keyframes(animation.phase)})
