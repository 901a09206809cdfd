# どこで: `src/shadergui/inspector/__init__.py`。
# 何を: Inspector（描画パス / backend / 状態）の公開 API を集約する。
# なぜ: 実装を責務ごとに分割しつつ、利用側の import パスを安定させるため。

from __future__ import annotations

from .backend import DrawBackend, FieldKind
from .foldout_state import FoldoutStateStore
from .inspector import InspectorSettings, ShaderInspector
from .layout import LayoutNode, LayoutRecorder

__all__ = [
    "DrawBackend",
    "FieldKind",
    "FoldoutStateStore",
    "InspectorSettings",
    "LayoutNode",
    "LayoutRecorder",
    "ShaderInspector",
]
