# どこで: `src/shadergui/inspector/foldout_state.py`。
# 何を: Foldout の開閉状態をプロパティ位置（index）ごとに保持する。
# なぜ: 再描画をまたいで開閉状態を維持しつつ、グローバル状態にせず Inspector インスタンスに所有させるため。

from __future__ import annotations

import logging
from collections.abc import Iterable

_logger = logging.getLogger(__name__)


class FoldoutStateStore:
    """index → open フラグの配列。

    Notes
    -----
    プロパティ数が変わった場合は、index がずれるため全て閉じた状態へ作り直す。
    """

    def __init__(self, flags: Iterable[bool] = ()) -> None:
        self._flags: list[bool] = [bool(x) for x in flags]

    def __len__(self) -> int:
        return len(self._flags)

    def sync_length(self, count: int) -> bool:
        """長さを count に合わせる。作り直した場合 True を返す。"""

        count = max(0, int(count))
        if len(self._flags) == count:
            return False
        if self._flags:
            _logger.debug(
                "プロパティ数が変わったため Foldout 状態をリセットします: %d -> %d",
                len(self._flags),
                count,
            )
        self._flags = [False] * count
        return True

    def is_open(self, index: int) -> bool:
        """index の開閉状態を返す（範囲外は閉じている扱い）。"""

        i = int(index)
        if 0 <= i < len(self._flags):
            return self._flags[i]
        return False

    def set_open(self, index: int, is_open: bool) -> None:
        i = int(index)
        if 0 <= i < len(self._flags):
            self._flags[i] = bool(is_open)

    def any_open(self, start: int, stop: int) -> bool:
        """[start, stop] のいずれかが開いていれば True を返す。"""

        lo = max(0, min(int(start), int(stop)))
        hi = min(len(self._flags) - 1, max(int(start), int(stop)))
        return any(self._flags[i] for i in range(lo, hi + 1))

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._flags)


__all__ = ["FoldoutStateStore"]
