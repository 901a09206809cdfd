# どこで: `src/shadergui/core/resource.py`。
# 何を: Inspector が編集対象として要求する Resource プロトコルと、その in-memory 実装 Material を提供する。
# なぜ: ホストエディタのマテリアル API を狭いインターフェースに閉じ込め、描画ロジックを単体テスト可能にするため。

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from .global_illumination import GIFlags
from .properties import PropertyKind, ShaderProperty, default_value_for_kind

DEFAULT_SCALE_OFFSET = (1.0, 1.0, 0.0, 0.0)


class Resource(Protocol):
    """Inspector が編集するレンダリングリソース。"""

    name: str

    def get_parameter_list(self) -> Sequence[ShaderProperty]: ...

    def get_annotations(self, prop: ShaderProperty) -> Sequence[str]: ...

    def get_value(self, name: str) -> Any: ...

    def set_value(self, name: str, value: Any) -> None: ...

    def get_range_limits(self, prop: ShaderProperty) -> tuple[float, float]: ...

    def enable_keyword(self, keyword: str) -> None: ...

    def disable_keyword(self, keyword: str) -> None: ...

    def is_keyword_enabled(self, keyword: str) -> bool: ...

    def get_render_queue(self) -> int: ...

    def set_render_queue(self, queue: int) -> None: ...

    def set_override_tag(self, tag: str, value: str) -> None: ...

    def set_gi_flags(self, flags: GIFlags) -> None: ...

    def get_instancing_enabled(self) -> bool: ...

    def set_instancing_enabled(self, enabled: bool) -> None: ...

    def get_texture_scale_offset(self, name: str) -> tuple[float, float, float, float]: ...

    def set_texture_scale_offset(
        self, name: str, value: tuple[float, float, float, float]
    ) -> None: ...

    def mark_dirty(self) -> None: ...


@dataclass(slots=True)
class Material:
    """Resource プロトコルの in-memory 実装。

    Notes
    -----
    - 値は `values[name]` に保持する。未宣言の名前への set_value も受け付ける
      （プリセットが `_SrcBlend` 等を宣言の有無に関わらず書くため）。
    - render_queue=-1 は「シェーダー既定」を表す。
    """

    name: str
    properties: list[ShaderProperty] = field(default_factory=list)
    values: dict[str, Any] = field(default_factory=dict)
    keywords: set[str] = field(default_factory=set)
    render_queue: int = -1
    override_tags: dict[str, str] = field(default_factory=dict)
    gi_flags: GIFlags = GIFlags.EMISSIVE_IS_BLACK
    instancing_enabled: bool = False
    texture_scale_offsets: dict[str, tuple[float, float, float, float]] = field(
        default_factory=dict
    )
    dirty: bool = False

    def __post_init__(self) -> None:
        for prop in self.properties:
            if prop.name in self.values:
                continue
            default = prop.default
            if default is None:
                default = default_value_for_kind(prop.kind)
            self.values[prop.name] = default

    def get_parameter_list(self) -> Sequence[ShaderProperty]:
        return tuple(self.properties)

    def get_annotations(self, prop: ShaderProperty) -> Sequence[str]:
        return tuple(prop.annotations)

    def get_value(self, name: str) -> Any:
        return self.values.get(name)

    def set_value(self, name: str, value: Any) -> None:
        self.values[str(name)] = value

    def get_range_limits(self, prop: ShaderProperty) -> tuple[float, float]:
        """Range の (min, max) を返す。未宣言なら 0..1。"""

        if prop.kind is not PropertyKind.RANGE or prop.range_limits is None:
            return 0.0, 1.0
        lo, hi = prop.range_limits
        return float(lo), float(hi)

    def enable_keyword(self, keyword: str) -> None:
        self.keywords.add(str(keyword))

    def disable_keyword(self, keyword: str) -> None:
        self.keywords.discard(str(keyword))

    def is_keyword_enabled(self, keyword: str) -> bool:
        return str(keyword) in self.keywords

    def get_render_queue(self) -> int:
        return int(self.render_queue)

    def set_render_queue(self, queue: int) -> None:
        self.render_queue = int(queue)

    def set_override_tag(self, tag: str, value: str) -> None:
        if value:
            self.override_tags[str(tag)] = str(value)
        else:
            # 空文字はタグの解除（シェーダー側の既定へ戻す）。
            self.override_tags.pop(str(tag), None)

    def set_gi_flags(self, flags: GIFlags) -> None:
        self.gi_flags = GIFlags(flags)

    def get_instancing_enabled(self) -> bool:
        return bool(self.instancing_enabled)

    def set_instancing_enabled(self, enabled: bool) -> None:
        self.instancing_enabled = bool(enabled)

    def get_texture_scale_offset(self, name: str) -> tuple[float, float, float, float]:
        return self.texture_scale_offsets.get(str(name), DEFAULT_SCALE_OFFSET)

    def set_texture_scale_offset(
        self, name: str, value: tuple[float, float, float, float]
    ) -> None:
        sx, sy, ox, oy = value
        self.texture_scale_offsets[str(name)] = (float(sx), float(sy), float(ox), float(oy))

    def mark_dirty(self) -> None:
        self.dirty = True


__all__ = ["DEFAULT_SCALE_OFFSET", "Material", "Resource"]
