# どこで: `src/shadergui/core/properties.py`。
# 何を: シェーダープロパティ（kind / フラグ / 注釈 / レンジ）の行モデルを提供する。
# なぜ: Inspector の描画と値の所有者（Material）を分離し、メタ情報だけを不変に扱うため。

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Any


class PropertyKind(Enum):
    """プロパティの宣言型。"""

    FLOAT = "Float"
    RANGE = "Range"
    INT = "Int"
    TEXTURE = "Texture"
    COLOR = "Color"
    VECTOR = "Vector"


class PropertyFlags(IntFlag):
    """プロパティ宣言に付くフラグ。"""

    NONE = 0
    HIDE_IN_INSPECTOR = 1
    NO_SCALE_OFFSET = 2
    NORMAL = 4


@dataclass(frozen=True, slots=True)
class ShaderProperty:
    """Inspector が読む 1 プロパティぶんのメタ情報。

    現在値は保持しない（値は Resource 側が所有する）。
    `default` は Material 生成時の初期値としてだけ使う。
    """

    name: str
    kind: PropertyKind | str
    display_name: str = ""
    annotations: tuple[str, ...] = ()
    default: Any = None
    range_limits: tuple[float, float] | None = None
    flags: PropertyFlags = PropertyFlags.NONE

    @property
    def label(self) -> str:
        """表示ラベル（display_name が空なら name）を返す。"""

        return self.display_name or self.name

    @property
    def hidden(self) -> bool:
        return bool(self.flags & PropertyFlags.HIDE_IN_INSPECTOR)


def default_value_for_kind(kind: PropertyKind | str) -> Any:
    """kind ごとの既定値を返す。"""

    if kind in (PropertyKind.FLOAT, PropertyKind.RANGE):
        return 0.0
    if kind is PropertyKind.INT:
        return 0
    if kind is PropertyKind.COLOR:
        return (1.0, 1.0, 1.0, 1.0)
    if kind is PropertyKind.VECTOR:
        return (0.0, 0.0, 0.0, 0.0)
    return None


__all__ = ["PropertyFlags", "PropertyKind", "ShaderProperty", "default_value_for_kind"]
