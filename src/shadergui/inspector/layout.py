# どこで: `src/shadergui/inspector/layout.py`。
# 何を: DrawBackend の記録実装（描画呼び出しをネストしたレイアウト木として保持し、予約された操作を返す）。
# なぜ: imgui/ウィンドウ無しで Inspector の出力レイアウトを検査・デバッグできるようにするため。

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .backend import FieldKind


@dataclass(slots=True)
class LayoutNode:
    """レイアウト木の 1 ノード。

    kind は "root" / "header" / "foldout" / "group" / "field" / "slider" /
    "int_slider" / "popup" / "help_box" / "label" / "space" のいずれか。
    """

    kind: str
    label: str = ""
    value: Any = None
    field_kind: FieldKind | None = None
    constraints: Any = None
    options: tuple[str, ...] = ()
    indent: int = 0
    children: list[LayoutNode] = field(default_factory=list)

    def walk(self) -> Iterator[LayoutNode]:
        """自身と子孫を深さ優先（描画順）で返す。"""

        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, label: str, *, kind: str | None = None) -> LayoutNode | None:
        """label（と kind）が一致する最初のノードを返す。"""

        for node in self.walk():
            if node.label == label and (kind is None or node.kind == kind):
                return node
        return None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"kind": self.kind}
        if self.label:
            out["label"] = self.label
        if self.value is not None:
            out["value"] = self.value
        if self.options:
            out["options"] = list(self.options)
        if self.children:
            out["children"] = [c.to_dict() for c in self.children]
        return out


class LayoutRecorder:
    """描画呼び出しを LayoutNode 木として記録する DrawBackend。

    Parameters
    ----------
    edits : Mapping[str, Any] | None
        label → ユーザー入力後の値。draw_field / draw_slider / draw_int_slider /
        draw_popup が 1 回だけ消費する。
    toggles : Sequence[str] | None
        クリックされる Foldout のタイトル。draw_toggle_header が 1 回だけ消費する。
    """

    def __init__(
        self,
        *,
        edits: Mapping[str, Any] | None = None,
        toggles: Sequence[str] | None = None,
    ) -> None:
        self._edits: dict[str, Any] = dict(edits or {})
        self._toggles: list[str] = list(toggles or [])
        self._id_stack: list[str] = []
        self._indent = 0
        self.root = LayoutNode(kind="root")
        self._stack: list[LayoutNode] = [self.root]

    # --- 操作の予約 -----------------------------------------------------

    def queue_edit(self, label: str, value: Any) -> None:
        self._edits[str(label)] = value

    def queue_toggle(self, title: str) -> None:
        self._toggles.append(str(title))

    def clear(self) -> None:
        """記録済みのレイアウトを捨てる（次のパス用）。"""

        self.root = LayoutNode(kind="root")
        self._stack = [self.root]
        self._id_stack = []
        self._indent = 0

    # --- 記録 ------------------------------------------------------------

    @property
    def depth(self) -> int:
        """開いているグループの深さ。"""

        return len(self._stack) - 1

    def _append(self, node: LayoutNode) -> LayoutNode:
        node.indent = self._indent
        self._stack[-1].children.append(node)
        return node

    def _take_edit(self, label: str, default: Any) -> Any:
        return self._edits.pop(str(label), default)

    def draw_field(
        self,
        kind: FieldKind,
        label: str,
        value: Any,
        constraints: Any | None = None,
    ) -> Any:
        out = self._take_edit(label, value)
        self._append(
            LayoutNode(
                kind="field", label=str(label), value=value, field_kind=kind, constraints=constraints
            )
        )
        return out

    def draw_slider(self, label: str, value: float, min_value: float, max_value: float) -> float:
        out = float(self._take_edit(label, value))
        out = max(float(min_value), min(float(max_value), out))
        self._append(
            LayoutNode(
                kind="slider",
                label=str(label),
                value=float(value),
                constraints=(float(min_value), float(max_value)),
            )
        )
        return out

    def draw_int_slider(self, label: str, value: int, min_value: int, max_value: int) -> int:
        out = int(self._take_edit(label, value))
        out = max(int(min_value), min(int(max_value), out))
        self._append(
            LayoutNode(
                kind="int_slider",
                label=str(label),
                value=int(value),
                constraints=(int(min_value), int(max_value)),
            )
        )
        return out

    def draw_toggle_header(self, title: str, is_open: bool) -> bool:
        out = bool(is_open)
        if str(title) in self._toggles:
            self._toggles.remove(str(title))
            out = not out
        self._append(LayoutNode(kind="foldout", label=str(title), value=out))
        return out

    def draw_header(self, title: str) -> None:
        self._append(LayoutNode(kind="header", label=str(title)))

    def draw_popup(self, label: str, index: int, options: Sequence[str]) -> int:
        out = int(self._take_edit(label, index))
        self._append(
            LayoutNode(kind="popup", label=str(label), value=int(index), options=tuple(options))
        )
        return out

    def draw_help_box(self, text: str) -> None:
        self._append(LayoutNode(kind="help_box", label=str(text)))

    def draw_label(self, text: str) -> None:
        self._append(LayoutNode(kind="label", label=str(text)))

    def draw_space(self, height: float) -> None:
        self._append(LayoutNode(kind="space", value=float(height)))

    def begin_group(self) -> None:
        # 直前の header/foldout をグループのタイトルとして引き継ぐ。
        parent = self._stack[-1]
        title = parent.children[-1].label if parent.children else ""
        node = self._append(LayoutNode(kind="group", label=title))
        self._stack.append(node)

    def end_group(self) -> None:
        if len(self._stack) > 1:
            self._stack.pop()

    def indent(self) -> None:
        self._indent += 1

    def unindent(self) -> None:
        self._indent = max(0, self._indent - 1)

    def push_id(self, key: str) -> None:
        self._id_stack.append(str(key))

    def pop_id(self) -> None:
        if self._id_stack:
            self._id_stack.pop()


__all__ = ["LayoutNode", "LayoutRecorder"]
