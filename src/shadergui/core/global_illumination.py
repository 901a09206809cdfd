# どこで: `src/shadergui/core/global_illumination.py`。
# 何を: GI モード選択値（0..3）→ GI フラグの対応表を提供する。
# なぜ: Render Settings ブロックの副作用を 1 つの純粋な写像に閉じ込めるため。

from __future__ import annotations

from enum import IntFlag


class GIFlags(IntFlag):
    """ホストの GI フラグ（値はホスト側の列挙に合わせる）。"""

    NONE = 0
    REALTIME_EMISSIVE = 1
    BAKED_EMISSIVE = 2
    EMISSIVE_IS_BLACK = 4


# 選択値の並び順は Render Settings の GI ポップアップ表示順と一致させる。
GI_MODE_FLAGS: tuple[GIFlags, ...] = (
    GIFlags.NONE,
    GIFlags.BAKED_EMISSIVE,
    GIFlags.REALTIME_EMISSIVE,
    GIFlags.EMISSIVE_IS_BLACK,
)

GI_MODE_NAMES: tuple[str, ...] = (
    "None",
    "BakedEmissive",
    "RealtimeEmissive",
    "EmissiveIsBlack",
)


def gi_flags_for_mode(value: object) -> GIFlags | None:
    """GI モード選択値に対応するフラグを返す。

    0..3 以外（非数値を含む）は None を返し、呼び出し側はフラグを変更しない。
    """

    try:
        index = int(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return None
    if float(index) != float(value):  # type: ignore[arg-type]
        return None
    if not 0 <= index < len(GI_MODE_FLAGS):
        return None
    return GI_MODE_FLAGS[index]


__all__ = ["GIFlags", "GI_MODE_FLAGS", "GI_MODE_NAMES", "gi_flags_for_mode"]
