# どこで: `src/shadergui/inspector/gui.py`。
# 何を: 1 つの Resource を pyimgui で編集するウィンドウ（初期化 / 1 フレーム描画 / 破棄）を提供する。
# なぜ: imgui コンテキストと Foldout 状態ファイルの寿命を 1 箇所で管理し、ShaderInspector を GUI 非依存に保つため。

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any

from shadergui.core.resource import Resource

from .imgui_backend import ImguiBackend
from .inspector import InspectorSettings, ShaderInspector
from .persistence import load_foldout_state, save_foldout_state
from .pyglet_backend import create_imgui_renderer, sync_imgui_io

_logger = logging.getLogger(__name__)

CLEAR_COLOR_RGBA = (0.12, 0.12, 0.12, 1.0)


class InspectorGUI:
    """pyimgui で 1 つの Resource を編集する GUI。

    Foldout の開閉状態は state_path があれば生成時に読み込み、close() で書き戻す。
    """

    def __init__(
        self,
        gui_window: Any,
        *,
        resource: Resource,
        settings: InspectorSettings | None = None,
        state_path: Path | None = None,
        title: str = "Inspector",
    ) -> None:
        import imgui  # type: ignore[import-untyped]

        self._imgui = imgui
        self._window = gui_window
        self._resource = resource
        self._title = str(title)
        self._state_path = state_path

        # 自前のコンテキストを current にしてから renderer を作る。
        self._context = imgui.create_context()
        imgui.set_current_context(self._context)
        imgui.style_colors_dark()
        self._renderer = create_imgui_renderer(gui_window)

        foldouts = load_foldout_state(state_path) if state_path is not None else None
        self._inspector = ShaderInspector(ImguiBackend(imgui), settings=settings, foldouts=foldouts)

        self._last_frame = time.monotonic()
        self._closed = False

    @property
    def inspector(self) -> ShaderInspector:
        return self._inspector

    def draw_frame(self) -> bool:
        """1 フレーム描画し、resource を変更した場合 True を返す。

        `flip()` は呼び出し側（pyglet の app loop）が行う。
        """

        if self._closed:
            return False

        now = time.monotonic()
        dt, self._last_frame = now - self._last_frame, now

        imgui = self._imgui
        imgui.set_current_context(self._context)
        imgui.new_frame()
        sync_imgui_io(imgui, self._window, dt=dt)

        # 1 ウィンドウ全面に Inspector だけを表示する。
        imgui.set_next_window_position(0, 0)
        imgui.set_next_window_size(self._window.width, self._window.height)
        imgui.begin(
            self._title,
            flags=imgui.WINDOW_NO_RESIZE | imgui.WINDOW_NO_COLLAPSE | imgui.WINDOW_NO_TITLE_BAR,
        )
        try:
            imgui.text(self._resource.name)
            imgui.separator()
            changed = self._inspector.render_inspector(self._resource)
        finally:
            imgui.end()
        imgui.render()

        import pyglet

        pyglet.gl.glClearColor(*CLEAR_COLOR_RGBA)
        self._window.clear()
        self._renderer.render(imgui.get_draw_data())
        if changed:
            _logger.debug("resource を更新しました: %s", self._resource.name)
        return changed

    def close(self) -> None:
        """Foldout 状態を保存し、renderer / コンテキスト / ウィンドウを破棄する（二重呼び出し可）。"""

        if self._closed:
            return
        self._closed = True

        if self._state_path is not None:
            try:
                save_foldout_state(self._inspector.foldouts, self._state_path)
            except OSError:
                _logger.exception("Foldout 状態の保存に失敗しました: %s", self._state_path)

        self._renderer.shutdown()
        self._imgui.destroy_context(self._context)
        self._window.close()


__all__ = ["InspectorGUI"]
