# どこで: `src/shadergui/inspector/window_loop.py`。
# 何を: pyglet の app loop（`pyglet.app.run()`）で Inspector ウィンドウを回す最小ランナーを提供する。
# なぜ: OS 依存のイベント配送を pyglet に任せ、手動 `dispatch_events()` 由来の入力取りこぼしを避けるため。

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pyglet


class WindowLoop:
    """1 つのウィンドウを固定フレームレートで再描画する。

    `draw_frame()` は back buffer へ描画するだけにし、`flip()` は pyglet が行う。
    """

    def __init__(self, window: Any, draw_frame: Callable[[], Any], *, fps: float) -> None:
        self._window = window
        self._draw_frame = draw_frame
        self._fps = float(fps)

    def run(self) -> None:
        """ウィンドウが閉じられるまでループを実行する。"""

        window = self._window

        def request_exit(*_: object) -> None:
            # pyglet の on_close から呼ばれるコールバックは引数が来る場合があるため *args を受ける。
            pyglet.app.exit()

        def on_draw() -> None:
            self._draw_frame()

        window.push_handlers(on_close=request_exit, on_draw=on_draw)

        def draw(dt: float) -> None:
            # 閉じられたウィンドウへ draw すると例外になり得るため、開いている場合だけ描く。
            if window not in pyglet.app.windows:
                return
            window.draw(dt)

        # fps<=0 は「スロットリング無し（可能な限り回す）」として扱う。
        if self._fps <= 0:
            pyglet.clock.schedule(draw)
        else:
            pyglet.clock.schedule_interval(draw, 1.0 / float(self._fps))

        try:
            pyglet.app.run(interval=None)
        finally:
            pyglet.clock.unschedule(draw)


__all__ = ["WindowLoop"]
