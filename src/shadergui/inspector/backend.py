# どこで: `src/shadergui/inspector/backend.py`。
# 何を: Inspector が利用するホスト描画プリミティブ（immediate-mode）のプロトコルを定義する。
# なぜ: 描画ロジックを pyimgui から切り離し、記録用 backend でテストできるようにするため。

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any, Protocol


class FieldKind(Enum):
    """draw_field が描画する値フィールドの種類。"""

    FLOAT = "float"
    INT = "int"
    TOGGLE = "toggle"
    COLOR = "color"
    VECTOR2 = "vector2"
    VECTOR3 = "vector3"
    VECTOR4 = "vector4"
    TEXTURE = "texture"


class DrawBackend(Protocol):
    """ホスト描画プリミティブ。

    値を返すメソッドは「ユーザー操作後の値」を返す（操作が無ければ入力値そのまま）。
    """

    def draw_field(
        self,
        kind: FieldKind,
        label: str,
        value: Any,
        constraints: Any | None = None,
    ) -> Any: ...

    def draw_slider(self, label: str, value: float, min_value: float, max_value: float) -> float: ...

    def draw_int_slider(self, label: str, value: int, min_value: int, max_value: int) -> int: ...

    def draw_toggle_header(self, title: str, is_open: bool) -> bool: ...

    def draw_header(self, title: str) -> None: ...

    def draw_popup(self, label: str, index: int, options: Sequence[str]) -> int: ...

    def draw_help_box(self, text: str) -> None: ...

    def draw_label(self, text: str) -> None: ...

    def draw_space(self, height: float) -> None: ...

    def begin_group(self) -> None: ...

    def end_group(self) -> None: ...

    def indent(self) -> None: ...

    def unindent(self) -> None: ...

    def push_id(self, key: str) -> None: ...

    def pop_id(self) -> None: ...


__all__ = ["DrawBackend", "FieldKind"]
