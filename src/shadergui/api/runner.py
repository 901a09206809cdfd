"""
どこで: `src/shadergui/api/runner.py`。公開 API のランナー実装。
何を: pyglet + pyimgui のウィンドウを開き、Resource を Inspector で編集し続けるランナーを提供する。
なぜ: `main.py` を実行して実際に Inspector を操作できる経路を用意するため。
"""

from __future__ import annotations

from pathlib import Path

from shadergui.core.resource import Resource
from shadergui.core.runtime_config import runtime_config, set_config_path
from shadergui.inspector.inspector import InspectorSettings
from shadergui.inspector.persistence import default_foldout_state_path


def run_inspector(
    resource: Resource,
    *,
    config_path: str | Path | None = None,
    foldout_persistence: bool = True,
    fps: float = 60.0,
) -> None:
    """pyglet ウィンドウを生成し、resource の Inspector をリアルタイム描画する。

    Parameters
    ----------
    resource : Resource
        編集対象。
    config_path : str | Path | None
        設定ファイル（config.yaml）のパス。指定した場合は探索より優先する。
    foldout_persistence : bool
        True の場合、Foldout 開閉状態を `{output_root}/inspector_state/` に保存/復元する。
    fps : float
        目標フレームレート。`<=0` の場合はスロットリングしない。
    """

    if config_path is not None:
        set_config_path(config_path)
    cfg = runtime_config()

    # pyimgui/pyglet は依存が重いので、使うときだけ遅延 import する。
    from shadergui.inspector.gui import InspectorGUI
    from shadergui.inspector.pyglet_backend import create_inspector_window
    from shadergui.inspector.window_loop import WindowLoop

    window = create_inspector_window(
        cfg.window_size,
        position=cfg.window_position,
        caption=f"Shader Inspector - {resource.name}",
    )
    state_path = default_foldout_state_path(resource.name) if foldout_persistence else None
    gui = InspectorGUI(
        window,
        resource=resource,
        settings=InspectorSettings.from_runtime_config(),
        state_path=state_path,
    )
    try:
        WindowLoop(window, gui.draw_frame, fps=fps).run()
    finally:
        gui.close()


__all__ = ["run_inspector"]
