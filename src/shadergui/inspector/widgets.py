# どこで: `src/shadergui/inspector/widgets.py`。
# 何を: ShaderProperty.kind（+ WidgetOverride）を backend の値ウィジェットへ対応付けて描画し、編集を Resource へ反映する。
# なぜ: kind ごとの UI 実装を閉じ込め、Render Loop（スコープ処理）から分離するため。

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np

from shadergui.core.directives import WidgetOverride
from shadergui.core.properties import PropertyFlags, PropertyKind, ShaderProperty
from shadergui.core.resource import Resource

from .backend import DrawBackend, FieldKind

OVERRIDE_INT_RANGE = "IntRange"
OVERRIDE_VECTOR2 = "Vector2"
OVERRIDE_VECTOR3 = "Vector3"


@dataclass(frozen=True, slots=True)
class WidgetContext:
    """1 プロパティぶんの描画入力。"""

    backend: DrawBackend
    resource: Resource
    prop: ShaderProperty
    override: WidgetOverride | None = None

    @property
    def override_kind(self) -> str | None:
        return None if self.override is None else self.override.kind


WidgetFn = Callable[[WidgetContext], bool]


def _as_float4(
    value: Any, *, default: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
) -> tuple[float, float, float, float]:
    """値を長さ 4 の float タプルへ変換して返す。足りない成分は default で埋める。"""

    out = np.asarray(default, dtype=np.float64).copy()
    if value is not None:
        try:
            arr = np.asarray(value, dtype=np.float64).reshape(-1)
        except (TypeError, ValueError):
            arr = np.zeros(0, dtype=np.float64)
        n = min(4, int(arr.size))
        out[:n] = arr[:n]
    return float(out[0]), float(out[1]), float(out[2]), float(out[3])


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _differs(old: Any, new: Any) -> bool:
    """old と new が異なれば True（シーケンスは成分比較）。"""

    if isinstance(old, (tuple, list, np.ndarray)) or isinstance(new, (tuple, list, np.ndarray)):
        try:
            a = np.asarray(old, dtype=np.float64)
            b = np.asarray(new, dtype=np.float64)
        except (TypeError, ValueError):
            return True
        return not np.array_equal(a, b)
    return bool(old != new)


def commit_value(resource: Resource, name: str, old: Any, new: Any) -> bool:
    """値が変わっていれば resource へ書き込み True を返す。"""

    if not _differs(old, new):
        return False
    resource.set_value(name, new)
    return True


def int_slider_range(lo: float, hi: float) -> tuple[int, int]:
    """IntRange スライダーの (min, max) を返す（逆転していれば入れ替える）。"""

    min_value = int(lo)
    max_value = int(hi)
    if min_value > max_value:
        min_value, max_value = max_value, min_value
    return min_value, max_value


def widget_float(ctx: WidgetContext) -> bool:
    """kind=Float の数値フィールドを描画し、変更があれば True を返す。"""

    current = ctx.resource.get_value(ctx.prop.name)
    value = _as_float(current)
    new_value = ctx.backend.draw_field(FieldKind.FLOAT, ctx.prop.label, value)
    return commit_value(ctx.resource, ctx.prop.name, value, float(new_value))


def widget_range(ctx: WidgetContext) -> bool:
    """kind=Range のスライダーを描画し、変更があれば True を返す。

    IntRange 指定時は同じレンジの整数スライダーとして描き、切り捨てた値を書き戻す。
    """

    current = _as_float(ctx.resource.get_value(ctx.prop.name))
    lo, hi = ctx.resource.get_range_limits(ctx.prop)

    if ctx.override_kind == OVERRIDE_INT_RANGE:
        min_value, max_value = int_slider_range(lo, hi)
        shown = max(min_value, min(max_value, int(current)))
        new_int = int(ctx.backend.draw_int_slider(ctx.prop.label, shown, min_value, max_value))
        # 表示した整数値を常に書き戻す（小数を持つ値は描画だけで切り捨てられる）。
        return commit_value(ctx.resource, ctx.prop.name, current, float(new_int))

    new_value = ctx.backend.draw_slider(ctx.prop.label, current, float(lo), float(hi))
    return commit_value(ctx.resource, ctx.prop.name, current, float(new_value))


def widget_int(ctx: WidgetContext) -> bool:
    """kind=Int の整数フィールドを描画する。"""

    current = ctx.resource.get_value(ctx.prop.name)
    value = int(_as_float(current))
    new_value = ctx.backend.draw_field(FieldKind.INT, ctx.prop.label, value)
    return commit_value(ctx.resource, ctx.prop.name, value, int(new_value))


def widget_color(ctx: WidgetContext) -> bool:
    """kind=Color のカラーピッカー（RGBA）を描画する。"""

    rgba = _as_float4(ctx.resource.get_value(ctx.prop.name), default=(1.0, 1.0, 1.0, 1.0))
    new_value = ctx.backend.draw_field(FieldKind.COLOR, ctx.prop.label, rgba)
    return commit_value(
        ctx.resource, ctx.prop.name, rgba, _as_float4(new_value, default=rgba)
    )


def widget_texture(ctx: WidgetContext) -> bool:
    """kind=Texture のテクスチャスロットと、tiling/offset を描画する。

    NO_SCALE_OFFSET フラグ付きなら tiling/offset は描かない。
    """

    resource = ctx.resource
    backend = ctx.backend
    current = resource.get_value(ctx.prop.name)
    new_texture = backend.draw_field(FieldKind.TEXTURE, ctx.prop.label, current)
    changed = commit_value(resource, ctx.prop.name, current, new_texture)

    if ctx.prop.flags & PropertyFlags.NO_SCALE_OFFSET:
        return changed

    sx, sy, ox, oy = resource.get_texture_scale_offset(ctx.prop.name)
    backend.indent()
    try:
        tiling = backend.draw_field(FieldKind.VECTOR2, "Tiling", (sx, sy))
        offset = backend.draw_field(FieldKind.VECTOR2, "Offset", (ox, oy))
    finally:
        backend.unindent()

    tx, ty, _, _ = _as_float4(tiling, default=(sx, sy, 0.0, 0.0))
    px, py, _, _ = _as_float4(offset, default=(ox, oy, 0.0, 0.0))
    new_st = (tx, ty, px, py)
    if _differs((sx, sy, ox, oy), new_st):
        resource.set_texture_scale_offset(ctx.prop.name, new_st)
        changed = True
    return changed


_VECTOR_FIELD_BY_COUNT: dict[int, FieldKind] = {
    2: FieldKind.VECTOR2,
    3: FieldKind.VECTOR3,
    4: FieldKind.VECTOR4,
}


def widget_vector(ctx: WidgetContext) -> bool:
    """kind=Vector の 4 成分フィールドを描画する。

    Vector2/Vector3 指定時は先頭 2/3 成分だけを描き、残りの成分は元の値のまま書き戻す。
    """

    current = _as_float4(ctx.resource.get_value(ctx.prop.name))
    if ctx.override_kind == OVERRIDE_VECTOR2:
        count = 2
    elif ctx.override_kind == OVERRIDE_VECTOR3:
        count = 3
    else:
        count = 4

    shown = current[:count]
    edited = ctx.backend.draw_field(_VECTOR_FIELD_BY_COUNT[count], ctx.prop.label, shown)
    head = _as_float4(edited, default=current)[:count]
    merged = (*head, *current[count:])
    return commit_value(ctx.resource, ctx.prop.name, current, merged)


def widget_unsupported(ctx: WidgetContext) -> bool:
    """未対応 kind のフォールバック表示。"""

    ctx.backend.draw_label(f"{ctx.prop.label} (Unsupported property type)")
    return False


_KIND_TO_WIDGET: dict[PropertyKind, WidgetFn] = {
    PropertyKind.FLOAT: widget_float,
    PropertyKind.RANGE: widget_range,
    PropertyKind.INT: widget_int,
    PropertyKind.COLOR: widget_color,
    PropertyKind.TEXTURE: widget_texture,
    PropertyKind.VECTOR: widget_vector,
}


def render_property_widget(
    backend: DrawBackend,
    resource: Resource,
    prop: ShaderProperty,
    override: WidgetOverride | None = None,
) -> bool:
    """prop.kind に応じたウィジェットを描画し、値を変更した場合 True を返す。

    未知 kind は例外にせず「未対応」ラベルを描く。
    """

    kind = prop.kind
    fn = _KIND_TO_WIDGET.get(kind) if isinstance(kind, PropertyKind) else None
    if fn is None:
        fn = widget_unsupported
    return fn(WidgetContext(backend=backend, resource=resource, prop=prop, override=override))


def widget_registry() -> dict[PropertyKind, WidgetFn]:
    """kind→widget 関数マップのコピーを返す。"""

    return dict(_KIND_TO_WIDGET)


__all__ = [
    "OVERRIDE_INT_RANGE",
    "OVERRIDE_VECTOR2",
    "OVERRIDE_VECTOR3",
    "WidgetContext",
    "commit_value",
    "render_property_widget",
    "widget_registry",
]
