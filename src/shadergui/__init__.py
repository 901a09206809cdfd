# どこで: `src/shadergui/__init__.py`。
# 何を: ルート `shadergui` パッケージを定義する。
# なぜ: import 起点を `shadergui` に統一するため。

from __future__ import annotations

from shadergui.api import render_inspector, run_inspector
from shadergui.core.properties import PropertyFlags, PropertyKind, ShaderProperty
from shadergui.core.resource import Material

__all__ = [
    "Material",
    "PropertyFlags",
    "PropertyKind",
    "ShaderProperty",
    "render_inspector",
    "run_inspector",
]
