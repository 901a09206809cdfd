# どこで: `src/shadergui/inspector/persistence.py`。
# 何を: Foldout 開閉状態の JSON 永続化（path 算出 / load / save）を提供する。
# なぜ: Inspector ウィンドウを閉じて開き直しても、リソースごとの開閉状態を復元できるようにするため。

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from shadergui.core.runtime_config import output_root_dir

from .foldout_state import FoldoutStateStore

_logger = logging.getLogger(__name__)

_STATE_VERSION = 1


def _sanitize_filename_fragment(text: str) -> str:
    """ファイル名に埋め込めるように text を正規化して返す。"""

    normalized = re.sub(r"[^A-Za-z0-9._-]+", "_", str(text))
    normalized = normalized.strip("._-")
    return normalized or "unknown"


def default_foldout_state_path(resource_name: str) -> Path:
    """resource 名に基づく Foldout 状態の既定保存パスを返す。

    Notes
    -----
    パスは `{output_root}/inspector_state/{resource_name}.json`。
    """

    filename = f"{_sanitize_filename_fragment(resource_name)}.json"
    return output_root_dir() / "inspector_state" / filename


def dumps_foldout_state(store: FoldoutStateStore) -> str:
    payload = {"version": _STATE_VERSION, "foldouts": list(store.snapshot())}
    return json.dumps(payload, ensure_ascii=False)


def loads_foldout_state(text: str) -> FoldoutStateStore:
    """JSON 文字列から FoldoutStateStore を復元する。

    Raises
    ------
    ValueError
        形式が不正な場合。
    """

    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("foldout state は mapping である必要があります")
    if int(data.get("version", 0)) != _STATE_VERSION:
        raise ValueError(f"未対応の foldout state version です: {data.get('version')!r}")
    flags = data.get("foldouts")
    if not isinstance(flags, list) or not all(isinstance(x, bool) for x in flags):
        raise ValueError("foldouts は bool の配列である必要があります")
    return FoldoutStateStore(flags)


def load_foldout_state(path: Path) -> FoldoutStateStore:
    """JSON ファイルから FoldoutStateStore をロードする。無い/壊れている場合は空を返す。"""

    try:
        payload = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return FoldoutStateStore()
    except OSError:
        _logger.warning("Foldout 状態ファイルを開けないため無視します: %s", path)
        return FoldoutStateStore()

    try:
        return loads_foldout_state(payload)
    except (ValueError, TypeError):
        # 破損した JSON は利便性のため無視して起動する。
        _logger.warning("Foldout 状態ファイルを読めないため無視します: %s", path)
        return FoldoutStateStore()


def save_foldout_state(store: FoldoutStateStore, path: Path) -> None:
    """FoldoutStateStore を JSON として path に保存する（親ディレクトリは作成する）。"""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_foldout_state(store) + "\n", encoding="utf-8")


__all__ = [
    "default_foldout_state_path",
    "dumps_foldout_state",
    "load_foldout_state",
    "loads_foldout_state",
    "save_foldout_state",
]
