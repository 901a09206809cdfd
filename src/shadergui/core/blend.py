# どこで: `src/shadergui/core/blend.py`。
# 何を: Blend モードのプリセット表と、その適用 / render queue 検証を提供する。
# なぜ: 1 つの選択値から複数プロパティを書き換える規則を、GUI から独立して検証できるようにするため。

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum

from .resource import Resource

_logger = logging.getLogger(__name__)


class BlendMode(IntEnum):
    """Blend 選択値。"""

    OPAQUE = 0
    CUTOUT = 1
    FADE = 2  # 旧来の alpha blend（フレネルは透明度に影響しない）
    TRANSPARENT = 3  # premultiplied alpha
    MANUAL = 4

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


class BlendFactor(IntEnum):
    """ホストの blend factor 列挙（値はホスト側と一致させる）。"""

    Zero = 0
    One = 1
    DstColor = 2
    SrcColor = 3
    OneMinusDstColor = 4
    SrcAlpha = 5
    OneMinusSrcColor = 6
    DstAlpha = 7
    OneMinusDstAlpha = 8
    SrcAlphaSaturate = 9
    OneMinusSrcAlpha = 10


class RenderQueue(IntEnum):
    """ホストの render queue 基準値。"""

    Background = 1000
    Geometry = 2000
    AlphaTest = 2450
    GeometryLast = 2500
    Transparent = 3000
    Overlay = 4000


KEYWORD_ALPHA_TEST = "_ALPHATEST_ON"
KEYWORD_ALPHA_BLEND = "_ALPHABLEND_ON"
KEYWORD_ALPHA_PREMULTIPLY = "_ALPHAPREMULTIPLY_ON"
BLEND_KEYWORDS: tuple[str, ...] = (
    KEYWORD_ALPHA_TEST,
    KEYWORD_ALPHA_BLEND,
    KEYWORD_ALPHA_PREMULTIPLY,
)

RENDER_TYPE_TAG = "RenderType"


@dataclass(frozen=True, slots=True)
class BlendPropertyNames:
    """プリセットが書き換えるプロパティ名。"""

    src: str = "_SrcBlend"
    dst: str = "_DstBlend"
    zwrite: str = "_ZWrite"
    alpha_to_mask: str = "_AlphaToMask"


@dataclass(frozen=True, slots=True)
class BlendPreset:
    """Manual 以外の Blend モードが固定で書き込む値の組。"""

    src_factor: BlendFactor
    dst_factor: BlendFactor
    depth_write: bool
    alpha_to_coverage: bool
    keyword: str | None
    render_queue_range: tuple[int, int]
    default_render_queue: int
    render_type: str


_PRESETS: dict[BlendMode, BlendPreset] = {
    BlendMode.OPAQUE: BlendPreset(
        src_factor=BlendFactor.One,
        dst_factor=BlendFactor.Zero,
        depth_write=True,
        alpha_to_coverage=False,
        keyword=None,
        render_queue_range=(-1, int(RenderQueue.AlphaTest) - 1),
        default_render_queue=-1,
        render_type="",
    ),
    BlendMode.CUTOUT: BlendPreset(
        src_factor=BlendFactor.One,
        dst_factor=BlendFactor.Zero,
        depth_write=True,
        alpha_to_coverage=True,
        keyword=KEYWORD_ALPHA_TEST,
        render_queue_range=(int(RenderQueue.AlphaTest), int(RenderQueue.GeometryLast)),
        default_render_queue=int(RenderQueue.AlphaTest),
        render_type="TransparentCutout",
    ),
    BlendMode.FADE: BlendPreset(
        src_factor=BlendFactor.SrcAlpha,
        dst_factor=BlendFactor.OneMinusSrcAlpha,
        depth_write=False,
        alpha_to_coverage=False,
        keyword=KEYWORD_ALPHA_BLEND,
        render_queue_range=(int(RenderQueue.GeometryLast) + 1, int(RenderQueue.Overlay) - 1),
        default_render_queue=int(RenderQueue.Transparent),
        render_type="Transparent",
    ),
    BlendMode.TRANSPARENT: BlendPreset(
        src_factor=BlendFactor.One,
        dst_factor=BlendFactor.OneMinusSrcAlpha,
        depth_write=False,
        alpha_to_coverage=False,
        keyword=KEYWORD_ALPHA_PREMULTIPLY,
        render_queue_range=(int(RenderQueue.GeometryLast) + 1, int(RenderQueue.Overlay) - 1),
        default_render_queue=int(RenderQueue.Transparent),
        render_type="Transparent",
    ),
}


def blend_mode_from_value(value: object) -> BlendMode:
    """プロパティ値を BlendMode へ変換して返す。範囲外/非数値は OPAQUE に丸める。"""

    try:
        return BlendMode(int(float(value)))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return BlendMode.OPAQUE


def blend_preset(mode: BlendMode) -> BlendPreset | None:
    """mode のプリセットを返す。MANUAL は None。"""

    return _PRESETS.get(BlendMode(mode))


def apply_blend_preset(
    resource: Resource,
    mode: BlendMode,
    *,
    names: BlendPropertyNames = BlendPropertyNames(),
) -> bool:
    """mode のプリセット値を resource へ書き込む。

    Returns
    -------
    bool
        書き込んだ場合 True（MANUAL は何もせず False）。
    """

    preset = blend_preset(mode)
    if preset is None:
        return False

    resource.set_override_tag(RENDER_TYPE_TAG, preset.render_type)
    resource.set_value(names.src, float(preset.src_factor))
    resource.set_value(names.dst, float(preset.dst_factor))
    resource.set_value(names.zwrite, 1.0 if preset.depth_write else 0.0)
    resource.set_value(names.alpha_to_mask, 1.0 if preset.alpha_to_coverage else 0.0)

    # 3 つのキーワードは排他。OPAQUE はすべて無効。
    for keyword in BLEND_KEYWORDS:
        if keyword == preset.keyword:
            resource.enable_keyword(keyword)
        else:
            resource.disable_keyword(keyword)
    return True


def validate_render_queue(
    resource: Resource,
    mode: BlendMode,
    *,
    override: bool,
) -> bool:
    """render queue を mode の既定値へ上書き、または範囲外なら既定値へ戻す。

    Parameters
    ----------
    override : bool
        True なら無条件に既定値で上書きする（Blend 変更直後）。
        False なら範囲外の場合のみ既定値へ戻し、警告ログを出す。

    Returns
    -------
    bool
        render queue を書き換えた場合 True。
    """

    preset = blend_preset(mode)
    if preset is None:
        return False

    lo, hi = preset.render_queue_range
    current = int(resource.get_render_queue())
    if override:
        if current == preset.default_render_queue:
            return False
        resource.set_render_queue(preset.default_render_queue)
        return True

    if lo <= current <= hi:
        return False

    _logger.warning(
        "Render queue value outside of the allowed range (%d - %d) for selected Blend mode, "
        "resetting render queue to default: resource=%s queue=%d default=%d",
        lo,
        hi,
        getattr(resource, "name", "?"),
        current,
        preset.default_render_queue,
    )
    resource.set_render_queue(preset.default_render_queue)
    return True


__all__ = [
    "BLEND_KEYWORDS",
    "BlendFactor",
    "BlendMode",
    "BlendPreset",
    "BlendPropertyNames",
    "KEYWORD_ALPHA_BLEND",
    "KEYWORD_ALPHA_PREMULTIPLY",
    "KEYWORD_ALPHA_TEST",
    "RENDER_TYPE_TAG",
    "RenderQueue",
    "apply_blend_preset",
    "blend_mode_from_value",
    "blend_preset",
    "validate_render_queue",
]
