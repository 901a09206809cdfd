# どこで: `src/shadergui/inspector/presets.py`。
# 何を: Blend セレクタと Render Settings ブロック（render queue / GPU instancing / GI）の描画を提供する。
# なぜ: 1 つの選択値から複数プロパティを書き換える UI を、通常ウィジェットの対応表から分離するため。

from __future__ import annotations

from shadergui.core.blend import (
    BlendFactor,
    BlendMode,
    BlendPropertyNames,
    apply_blend_preset,
    blend_mode_from_value,
    validate_render_queue,
)
from shadergui.core.global_illumination import GI_MODE_NAMES, gi_flags_for_mode
from shadergui.core.properties import ShaderProperty
from shadergui.core.resource import Resource

from .backend import DrawBackend, FieldKind

BLEND_POPUP_LABEL = "Blend"
BLEND_SECTION_SPACE = 10.0
RENDER_QUEUE_LABEL = "Render Queue"
GPU_INSTANCING_LABEL = "Enable GPU Instancing"

BLEND_MODE_NAMES: tuple[str, ...] = tuple(m.display_name for m in BlendMode)
BLEND_FACTOR_NAMES: tuple[str, ...] = tuple(f.name for f in BlendFactor)


def _popup_index(value: object, count: int) -> int:
    """プロパティ値をポップアップ index に変換する（範囲外は -1）。"""

    try:
        index = int(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return -1
    return index if 0 <= index < count else -1


def render_blend_mode_selector(
    backend: DrawBackend,
    resource: Resource,
    prop: ShaderProperty,
    *,
    names: BlendPropertyNames = BlendPropertyNames(),
) -> bool:
    """Blend セレクタを描画し、プリセットを適用する。値を変更した場合 True。

    - 選択が変わった: 選択値を保存し、プリセットを適用して render queue を既定値で上書きする。
    - 変わらない: render queue が範囲外なら既定値へ戻す（警告ログ）。
    - Manual: src/dst の blend factor を直接選ぶポップアップを描く。
    """

    backend.draw_space(BLEND_SECTION_SPACE)
    value = resource.get_value(prop.name)
    # 範囲外の保存値は -1（未選択）で表示し、どのモードを選んでも変更として扱う。
    index = _popup_index(value, len(BLEND_MODE_NAMES))
    mode = blend_mode_from_value(value)
    new_index = int(backend.draw_popup(BLEND_POPUP_LABEL, index, BLEND_MODE_NAMES))

    changed = False
    if new_index != index and 0 <= new_index < len(BLEND_MODE_NAMES):
        mode = BlendMode(new_index)
        resource.set_value(prop.name, float(mode))
        apply_blend_preset(resource, mode, names=names)
        validate_render_queue(resource, mode, override=True)
        changed = True
    elif validate_render_queue(resource, mode, override=False):
        changed = True

    if mode is BlendMode.MANUAL:
        changed = _render_manual_blend_factors(backend, resource, names=names) or changed
    return changed


def _render_manual_blend_factors(
    backend: DrawBackend,
    resource: Resource,
    *,
    names: BlendPropertyNames,
) -> bool:
    changed = False
    backend.indent()
    try:
        for prop_name in (names.src, names.dst):
            index = _popup_index(resource.get_value(prop_name), len(BLEND_FACTOR_NAMES))
            new_index = int(backend.draw_popup(prop_name, index, BLEND_FACTOR_NAMES))
            if new_index != index and 0 <= new_index < len(BLEND_FACTOR_NAMES):
                resource.set_value(prop_name, float(new_index))
                changed = True
    finally:
        backend.unindent()
    return changed


def render_render_settings_block(
    backend: DrawBackend,
    resource: Resource,
    gi_prop: ShaderProperty | None,
    *,
    space_height: float,
) -> bool:
    """Render Settings ブロックを描画する。値を変更した場合 True。

    gi_prop がある場合は GI セレクタも描き、選択値 0..3 に対応する GI フラグを設定する。
    """

    changed = False
    backend.draw_space(space_height)

    queue = int(resource.get_render_queue())
    new_queue = int(backend.draw_field(FieldKind.INT, RENDER_QUEUE_LABEL, queue))
    if new_queue != queue:
        resource.set_render_queue(new_queue)
        changed = True

    instancing = bool(resource.get_instancing_enabled())
    new_instancing = bool(backend.draw_field(FieldKind.TOGGLE, GPU_INSTANCING_LABEL, instancing))
    if new_instancing != instancing:
        resource.set_instancing_enabled(new_instancing)
        changed = True

    if gi_prop is None:
        return changed

    index = _popup_index(resource.get_value(gi_prop.name), len(GI_MODE_NAMES))
    new_index = int(backend.draw_popup(gi_prop.label, index, GI_MODE_NAMES))
    if new_index != index and 0 <= new_index < len(GI_MODE_NAMES):
        resource.set_value(gi_prop.name, float(new_index))
        changed = True

    flags = gi_flags_for_mode(resource.get_value(gi_prop.name))
    if flags is not None:
        resource.set_gi_flags(flags)
    return changed


__all__ = [
    "BLEND_FACTOR_NAMES",
    "BLEND_MODE_NAMES",
    "BLEND_POPUP_LABEL",
    "GPU_INSTANCING_LABEL",
    "RENDER_QUEUE_LABEL",
    "render_blend_mode_selector",
    "render_render_settings_block",
]
