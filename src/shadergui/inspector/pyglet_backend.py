# どこで: `src/shadergui/inspector/pyglet_backend.py`。
# 何を: Inspector ウィンドウ（pyglet）と imgui renderer の生成、フレームごとの IO 同期を提供する。
# なぜ: imgui.integrations / pyglet の版差分をここで吸収し、InspectorGUI をフレーム処理だけに保つため。

from __future__ import annotations

import logging
from typing import Any

_logger = logging.getLogger(__name__)

MIN_WINDOW_SIZE = (320, 240)
MIN_DELTA_TIME = 1e-4


def create_imgui_renderer(gui_window: Any) -> Any:
    """gui_window に描画する imgui の pyglet renderer を返す。

    Raises
    ------
    RuntimeError
        imgui の pyglet integration が使えない場合。
    """

    try:
        from imgui.integrations import pyglet as integration  # type: ignore[import-untyped]
    except ImportError as exc:
        raise RuntimeError(f"imgui.integrations.pyglet を import できない: {exc}") from exc

    # 新しめの pyimgui は create_renderer() がウィンドウ種別に応じた実装を選ぶ。
    if hasattr(integration, "create_renderer"):
        return integration.create_renderer(gui_window)
    if hasattr(integration, "PygletRenderer"):
        _logger.debug("create_renderer が無いため PygletRenderer を直接使います")
        return integration.PygletRenderer(gui_window)
    raise RuntimeError("imgui.integrations.pyglet renderer is unavailable")


def sync_imgui_io(imgui_mod: Any, gui_window: Any, *, dt: float) -> None:
    """表示サイズ / HiDPI スケール / 経過時間を ImGui IO に書き込む。"""

    io = imgui_mod.get_io()
    io.delta_time = dt if dt > MIN_DELTA_TIME else MIN_DELTA_TIME

    width = max(1, int(gui_window.width))
    height = max(1, int(gui_window.height))
    fb_width, fb_height = gui_window.get_framebuffer_size()
    io.display_size = (float(width), float(height))
    io.display_fb_scale = (fb_width / width, fb_height / height)


def create_inspector_window(
    size: tuple[int, int],
    *,
    position: tuple[int, int] | None = None,
    caption: str = "Shader Inspector",
) -> Any:
    """Inspector 用の pyglet ウィンドウを size で生成し、position があれば移動する。"""

    import pyglet

    width = max(MIN_WINDOW_SIZE[0], int(size[0]))
    height = max(MIN_WINDOW_SIZE[1], int(size[1]))
    window = pyglet.window.Window(  # type: ignore[abstract]
        width=width,
        height=height,
        caption=caption,
        resizable=True,
        config=pyglet.gl.Config(double_buffer=True),  # type: ignore[abstract]
    )
    window.set_minimum_size(*MIN_WINDOW_SIZE)
    if position is not None:
        window.set_location(int(position[0]), int(position[1]))
    return window


__all__ = ["create_imgui_renderer", "create_inspector_window", "sync_imgui_io"]
