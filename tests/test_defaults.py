from gfx_interpreter.models.schemas import AnimationSpec, ChangeSet, KeyframeSpec
from gfx_interpreter.services.defaults import synthesize_defaults, template_keyframes


def test_in_animation_without_keyframes_fades_in():
    changes = ChangeSet(animations=[AnimationSpec(element_name="Box", phase="in")])

    (animation,) = synthesize_defaults(changes).animations

    assert [(kf.position, kf.properties) for kf in animation.keyframes] == [
        (0, {"opacity": 0}),
        (100, {"opacity": 1}),
    ]


def test_out_and_loop_templates():
    out = template_keyframes("out")
    loop = template_keyframes("loop")

    assert [kf.properties for kf in out] == [{"opacity": 1}, {"opacity": 0}]
    assert [kf.properties for kf in loop] == [{"rotation": 0}, {"rotation": 360}]


def test_single_keyframe_is_replaced_by_template():
    animation = AnimationSpec(
        element_name="Box",
        phase="out",
        keyframes=[KeyframeSpec(position=50, properties={"opacity": 0.5})],
    )

    (result,) = synthesize_defaults(ChangeSet(animations=[animation])).animations

    assert [kf.position for kf in result.keyframes] == [0, 100]
    assert result.keyframes[-1].properties == {"opacity": 0}


def test_complete_animations_are_left_alone():
    changes = ChangeSet(
        animations=[
            AnimationSpec(
                element_name="Box",
                keyframes=[
                    KeyframeSpec(position=0, properties={"position_x": -100}),
                    KeyframeSpec(position=100, properties={"position_x": 0}),
                ],
            )
        ]
    )

    assert synthesize_defaults(changes) is changes
