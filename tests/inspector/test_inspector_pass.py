import logging

from shadergui.core.blend import KEYWORD_ALPHA_TEST
from shadergui.core.global_illumination import GIFlags
from shadergui.core.properties import PropertyFlags, PropertyKind, ShaderProperty
from shadergui.core.resource import Material
from shadergui.inspector.inspector import InspectorSettings, ShaderInspector
from shadergui.inspector.layout import LayoutRecorder
from shadergui.inspector.presets import (
    BLEND_MODE_NAMES,
    GPU_INSTANCING_LABEL,
    RENDER_QUEUE_LABEL,
)


def _float(name: str, *annotations: str, **kwargs) -> ShaderProperty:
    return ShaderProperty(name, PropertyKind.FLOAT, annotations=annotations, **kwargs)


def _inspector(**recorder_kwargs) -> tuple[ShaderInspector, LayoutRecorder]:
    recorder = LayoutRecorder(**recorder_kwargs)
    return ShaderInspector(recorder, settings=InspectorSettings()), recorder


def _labels(node) -> list[str]:
    return [n.label for n in node.children]


def test_foldout_state_persists_across_passes():
    mat = Material(
        "m",
        properties=[_float("_A", "Foldout(Detail)"), _float("_B"), _float("_C", "FoldoutEnd")],
    )
    inspector, recorder = _inspector()

    inspector.render_inspector(mat)
    assert _labels(recorder.root) == ["Detail", "_C"]
    assert recorder.root.find("Detail").value is False

    recorder.clear()
    recorder.queue_toggle("Detail")
    inspector.render_inspector(mat)
    assert inspector.foldouts.snapshot() == (True, False, False)
    assert _labels(recorder.root.find("Detail", kind="group")) == ["_A", "_B"]

    recorder.clear()
    inspector.render_inspector(mat)
    assert recorder.root.find("Detail", kind="foldout").value is True
    assert _labels(recorder.root.find("Detail", kind="group")) == ["_A", "_B"]
    assert _labels(recorder.root)[-1] == "_C"


def test_foldout_state_resets_when_property_count_changes():
    props = [_float("_A", "Foldout(Detail)"), _float("_B")]
    inspector, recorder = _inspector(toggles=["Detail"])
    inspector.render_inspector(Material("m", properties=props))
    assert inspector.foldouts.snapshot() == (True, False)

    recorder.clear()
    inspector.render_inspector(Material("m", properties=[*props, _float("_C")]))
    assert inspector.foldouts.snapshot() == (False, False, False)


def test_hidden_property_is_skipped_with_its_directives():
    mat = Material(
        "m",
        properties=[
            _float("_SrcBlend", "Header(Blend)", flags=PropertyFlags.HIDE_IN_INSPECTOR),
            _float("_Glossiness"),
        ],
    )
    inspector, recorder = _inspector()

    inspector.render_inspector(mat)

    assert [(n.kind, n.label) for n in recorder.root.children] == [("field", "_Glossiness")]


def test_space_and_text_are_drawn_before_the_property():
    mat = Material(
        "m",
        properties=[
            _float("_A", "Space(12)"),
            _float("_B", "Space"),
            _float("_C", "Text(Alpha is read from the red channel)"),
        ],
    )
    inspector, recorder = _inspector()

    inspector.render_inspector(mat)

    assert [(n.kind, n.value if n.kind == "space" else n.label) for n in recorder.root.children] == [
        ("space", 12.0),
        ("field", "_A"),
        ("space", 6.0),
        ("field", "_B"),
        ("help_box", "Alpha is read from the red channel"),
        ("field", "_C"),
    ]


def test_space_inside_closed_foldout_is_not_drawn():
    mat = Material(
        "m",
        properties=[_float("_A", "Foldout(Detail)"), _float("_B", "Space(20)"), _float("_C", "FoldoutEnd")],
    )
    inspector, recorder = _inspector()

    inspector.render_inspector(mat)

    assert [n.kind for n in recorder.root.children] == ["foldout", "field"]


def test_render_settings_block_is_drawn_when_its_region_closes():
    mat = Material(
        "m",
        properties=[
            _float("_Cull", "Header(RenderSettings)"),
            _float("_GIMode"),
            _float("_Other", "Header(Other)"),
        ],
    )
    inspector, recorder = _inspector(edits={"_GIMode": 2})

    changed = inspector.render_inspector(mat)

    group = recorder.root.find("RenderSettings", kind="group")
    assert [(n.kind, n.label) for n in group.children] == [
        ("field", "_Cull"),
        ("space", ""),
        ("field", RENDER_QUEUE_LABEL),
        ("field", GPU_INSTANCING_LABEL),
        ("popup", "_GIMode"),
    ]
    assert _labels(recorder.root.find("Other", kind="group")) == ["_Other"]
    assert changed
    assert mat.get_value("_GIMode") == 2.0
    assert mat.gi_flags is GIFlags.REALTIME_EMISSIVE
    assert mat.dirty


def test_top_level_render_settings_block_is_drawn_before_next_section():
    mat = Material(
        "m",
        properties=[_float("_GIMode"), _float("_A", "Header(Main)"), _float("_B")],
    )
    inspector, recorder = _inspector()

    inspector.render_inspector(mat)

    assert [(n.kind, n.label) for n in recorder.root.children] == [
        ("space", ""),
        ("field", RENDER_QUEUE_LABEL),
        ("field", GPU_INSTANCING_LABEL),
        ("popup", "_GIMode"),
        ("header", "Main"),
        ("group", "Main"),
    ]
    assert _labels(recorder.root.find("Main", kind="group")) == ["_A", "_B"]


def test_render_settings_block_flushes_at_end_of_pass():
    mat = Material("m", properties=[_float("_Emission", "GIMode"), _float("_Glossiness")])
    inspector, recorder = _inspector(edits={GPU_INSTANCING_LABEL: True, RENDER_QUEUE_LABEL: 2000})

    changed = inspector.render_inspector(mat)

    assert _labels(recorder.root)[-3:] == [RENDER_QUEUE_LABEL, GPU_INSTANCING_LABEL, "_Emission"]
    assert changed
    assert mat.instancing_enabled
    assert mat.render_queue == 2000
    # 選択値 0 は GI なし。
    assert mat.gi_flags is GIFlags.NONE


def test_render_settings_header_without_gi_selector_omits_gi_popup():
    mat = Material("m", properties=[_float("_Cull", "Header(RenderSettings)")])
    inspector, recorder = _inspector()

    assert not inspector.render_inspector(mat)

    group = recorder.root.find("RenderSettings", kind="group")
    assert [n.kind for n in group.children] == ["field", "space", "field", "field"]
    assert mat.gi_flags is GIFlags.EMISSIVE_IS_BLACK


def test_gi_value_out_of_range_leaves_flags_unchanged():
    mat = Material("m", properties=[_float("_GIMode", default=7.0)])
    inspector, _recorder = _inspector()

    inspector.render_inspector(mat)

    assert mat.gi_flags is GIFlags.EMISSIVE_IS_BLACK


def test_gi_override_on_non_float_kind_is_an_ordinary_widget():
    prop = ShaderProperty("_GIMode", PropertyKind.RANGE, range_limits=(0, 3))
    inspector, recorder = _inspector()

    inspector.render_inspector(Material("m", properties=[prop]))

    assert [n.kind for n in recorder.root.children] == ["slider"]


def test_blend_selector_applies_preset_on_change():
    mat = Material("m", properties=[_float("_blendMode")])
    inspector, recorder = _inspector(edits={"Blend": 1})

    changed = inspector.render_inspector(mat)

    space, popup = recorder.root.children
    assert space.kind == "space" and space.value == 10.0
    assert popup.kind == "popup" and popup.value == 0
    assert popup.options == BLEND_MODE_NAMES
    assert changed
    assert mat.dirty
    assert mat.get_value("_blendMode") == 1.0
    assert mat.is_keyword_enabled(KEYWORD_ALPHA_TEST)
    assert mat.render_queue == 2450
    assert mat.override_tags["RenderType"] == "TransparentCutout"


def test_blend_override_tag_marks_selector():
    mat = Material("m", properties=[_float("_Mode", "AlphaBlend", default=2.0)])
    inspector, recorder = _inspector()

    inspector.render_inspector(mat)

    assert recorder.root.find("Blend", kind="popup").value == 2


def test_blend_selector_resets_out_of_range_queue(caplog):
    mat = Material("m", properties=[_float("_blendMode", default=1.0)], render_queue=3000)
    inspector, _recorder = _inspector()

    with caplog.at_level(logging.WARNING):
        changed = inspector.render_inspector(mat)

    assert changed
    assert mat.render_queue == 2450
    assert any("outside of the allowed range" in r.getMessage() for r in caplog.records)


def test_invalid_blend_value_accepts_any_selection():
    mat = Material("m", properties=[_float("_blendMode", default=7.0)])
    mat.set_override_tag("RenderType", "Transparent")
    inspector, recorder = _inspector(edits={"Blend": 0})

    changed = inspector.render_inspector(mat)

    assert recorder.root.find("Blend", kind="popup").value == -1
    assert changed
    assert mat.get_value("_blendMode") == 0.0
    assert mat.get_value("_ZWrite") == 1.0
    assert "RenderType" not in mat.override_tags


def test_manual_blend_draws_factor_popups():
    mat = Material(
        "m",
        properties=[_float("_blendMode", default=4.0)],
        values={"_SrcBlend": 5.0, "_DstBlend": 10.0},
        render_queue=1234,
    )
    inspector, recorder = _inspector(edits={"_SrcBlend": 1})

    changed = inspector.render_inspector(mat)

    src = recorder.root.find("_SrcBlend", kind="popup")
    dst = recorder.root.find("_DstBlend", kind="popup")
    assert src.value == 5 and src.indent == 1
    assert dst.value == 10
    assert changed
    assert mat.get_value("_SrcBlend") == 1.0
    assert mat.render_queue == 1234


def test_untouched_pass_does_not_mark_dirty():
    mat = Material(
        "m",
        properties=[
            _float("_blendMode"),
            _float("_Glossiness", "Header(Main)"),
            ShaderProperty("_MainTex", PropertyKind.TEXTURE),
        ],
    )
    inspector, _recorder = _inspector()

    assert not inspector.render_inspector(mat)
    assert not mat.dirty
