# どこで: `src/shadergui/inspector/imgui_backend.py`。
# 何を: DrawBackend を pyimgui の immediate-mode ウィジェットで実装する。
# なぜ: Inspector 本体を imgui 非依存に保ち、imgui 固有の呼び出し規約をここへ閉じ込めるため。

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .backend import FieldKind

TEXTURE_PATH_MAX_LENGTH = 512
HELP_BOX_COLOR_RGBA = (0.55, 0.75, 1.0, 1.0)


def _int_slider_range(min_value: int, max_value: int) -> tuple[int, int]:
    """imgui の slider_int に渡せる (min, max) を返す。

    ImGui の slider_int は min/max が int32 の “半分レンジ” 以内であることを要求する。
    （範囲外だと assertion error でクラッシュする）
    """

    lo = max(-1_073_741_824, min(1_073_741_823, int(min_value)))
    hi = max(-1_073_741_824, min(1_073_741_823, int(max_value)))
    if lo > hi:
        lo, hi = hi, lo
    return lo, hi


class ImguiBackend:
    """pyimgui による DrawBackend 実装。

    各メソッドは現在の ImGui フレーム内（new_frame〜render の間）で呼ばれる前提。
    """

    def __init__(self, imgui_mod: Any | None = None) -> None:
        if imgui_mod is None:
            import imgui  # type: ignore[import-untyped]

            imgui_mod = imgui
        self._imgui = imgui_mod
        self._group_depth = 0

    def draw_field(
        self,
        kind: FieldKind,
        label: str,
        value: Any,
        constraints: Any | None = None,
    ) -> Any:
        imgui = self._imgui

        if kind is FieldKind.FLOAT:
            _changed, out = imgui.input_float(str(label), float(value))
            return float(out)
        if kind is FieldKind.INT:
            _changed, out = imgui.input_int(str(label), int(value))
            return int(out)
        if kind is FieldKind.TOGGLE:
            _clicked, state = imgui.checkbox(str(label), bool(value))
            return bool(state)
        if kind is FieldKind.COLOR:
            r, g, b, a = value
            _changed, out = imgui.color_edit4(str(label), float(r), float(g), float(b), float(a))
            return tuple(float(x) for x in out)
        if kind is FieldKind.VECTOR2:
            x, y = value
            _changed, out = imgui.input_float2(str(label), float(x), float(y))
            return tuple(float(v) for v in out)
        if kind is FieldKind.VECTOR3:
            x, y, z = value
            _changed, out = imgui.input_float3(str(label), float(x), float(y), float(z))
            return tuple(float(v) for v in out)
        if kind is FieldKind.VECTOR4:
            x, y, z, w = value
            _changed, out = imgui.input_float4(
                str(label), float(x), float(y), float(z), float(w)
            )
            return tuple(float(v) for v in out)
        if kind is FieldKind.TEXTURE:
            text = "" if value is None else str(value)
            _changed, out = imgui.input_text(str(label), text, TEXTURE_PATH_MAX_LENGTH)
            out = str(out).strip()
            return out or None

        raise ValueError(f"unknown field kind: {kind}")

    def draw_slider(self, label: str, value: float, min_value: float, max_value: float) -> float:
        _changed, out = self._imgui.slider_float(
            str(label), float(value), float(min_value), float(max_value)
        )
        return float(out)

    def draw_int_slider(self, label: str, value: int, min_value: int, max_value: int) -> int:
        lo, hi = _int_slider_range(min_value, max_value)
        _changed, out = self._imgui.slider_int(str(label), int(value), lo, hi)
        return int(out)

    def draw_toggle_header(self, title: str, is_open: bool) -> bool:
        imgui = self._imgui
        # 開閉状態は FoldoutStateStore が正とし、ImGui 内部の記憶より優先させる。
        set_next_item_open = getattr(imgui, "set_next_item_open", None)
        if callable(set_next_item_open):
            cond_always = getattr(imgui, "ALWAYS", None)
            try:
                if cond_always is None:
                    set_next_item_open(bool(is_open))
                else:
                    set_next_item_open(bool(is_open), cond_always)
            except TypeError:
                set_next_item_open(bool(is_open))
        expanded, _visible = imgui.collapsing_header(f"{title}##foldout", None)
        return bool(expanded)

    def draw_header(self, title: str) -> None:
        imgui = self._imgui
        imgui.spacing()
        imgui.text(str(title))
        imgui.separator()

    def draw_popup(self, label: str, index: int, options: Sequence[str]) -> int:
        _changed, out = self._imgui.combo(str(label), int(index), [str(o) for o in options])
        return int(out)

    def draw_help_box(self, text: str) -> None:
        imgui = self._imgui
        imgui.push_style_color(imgui.COLOR_TEXT, *HELP_BOX_COLOR_RGBA)
        try:
            imgui.text_wrapped(str(text))
        finally:
            imgui.pop_style_color(1)

    def draw_label(self, text: str) -> None:
        self._imgui.text(str(text))

    def draw_space(self, height: float) -> None:
        self._imgui.dummy(0.0, float(height))

    def begin_group(self) -> None:
        self._imgui.indent()
        self._imgui.begin_group()
        self._group_depth += 1

    def end_group(self) -> None:
        if self._group_depth <= 0:
            return
        self._group_depth -= 1
        self._imgui.end_group()
        self._imgui.unindent()

    def indent(self) -> None:
        self._imgui.indent()

    def unindent(self) -> None:
        self._imgui.unindent()

    def push_id(self, key: str) -> None:
        self._imgui.push_id(str(key))

    def pop_id(self) -> None:
        self._imgui.pop_id()


__all__ = ["ImguiBackend"]
