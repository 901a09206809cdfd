# どこで: `src/shadergui/api/__init__.py`。
# 何を: 公開 API（render_inspector / run_inspector）のエントリポイント。
# なぜ: ユーザーコードからシンプルに API を import できるようにするため。

from __future__ import annotations

from typing import Any

from shadergui.core.resource import Resource
from shadergui.inspector.backend import DrawBackend
from shadergui.inspector.inspector import ShaderInspector


def render_inspector(
    resource: Resource,
    backend: DrawBackend,
    *,
    inspector: ShaderInspector | None = None,
) -> bool:
    """resource を backend へ 1 パス描画し、値を変更した場合 True を返す。

    Foldout 開閉状態を再描画間で維持したい場合は、同じ `inspector` を渡し続けること。
    """

    if inspector is None:
        inspector = ShaderInspector(backend)
    return inspector.render_inspector(resource)


def run_inspector(*args: Any, **kwargs: Any) -> None:
    """公開 run API へのラッパ（遅延インポートで GUI 依存を後回しにする）。"""

    from .runner import run_inspector as _run

    _run(*args, **kwargs)


__all__ = ["render_inspector", "run_inspector"]
