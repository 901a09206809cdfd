# どこで: `src/shadergui/core/runtime_config.py`。
# 何を: config.yaml（同梱既定 → 探索 → 明示パス）を再帰マージして RuntimeConfig に変換し、キャッシュする。
# なぜ: セレクタのプロパティ名や UI 状態の保存先を、シェーダー側の命名に合わせてユーザーが変えられるようにするため。

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

from .blend import BlendPropertyNames

CONFIG_VERSION = 1
_PACKAGED_CONFIG = ("resource", "default_config.yaml")


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """shadergui の実行時設定。

    config_path は最も優先されたユーザー config（無ければ None）。
    """

    config_path: Path | None
    output_dir: Path
    blend_mode_property: str
    gi_mode_property: str
    render_settings_header: str
    default_space_height: float
    blend_property_names: BlendPropertyNames
    window_position: tuple[int, int]
    window_size: tuple[int, int]


_explicit_path: Path | None = None
_cached: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """明示 config パスを設定し、キャッシュを捨てる。None で探索のみに戻す。"""

    global _explicit_path, _cached
    _explicit_path = None if path is None else Path(os.fspath(path)).expanduser()
    _cached = None


def _discovered_config_path() -> Path | None:
    """カレント → ホームの順に config.yaml を探し、最初に見つかったものを返す。"""

    for candidate in (
        Path.cwd() / ".shadergui" / "config.yaml",
        Path.home() / ".config" / "shadergui" / "config.yaml",
    ):
        if candidate.is_file():
            return candidate
    return None


def _parse_yaml(text: str, *, source: str) -> dict[str, Any]:
    import yaml  # type: ignore[import-untyped]

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml を解釈できません: source={source}") from exc
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise RuntimeError(f"config.yaml のトップレベルは mapping である必要があります: source={source}")
    return dict(data)


def _merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """mapping を再帰的にマージして返す（override 側が後勝ち）。"""

    out = dict(base)
    for key, value in override.items():
        prev = out.get(key)
        if isinstance(prev, Mapping) and isinstance(value, Mapping):
            out[key] = _merge(dict(prev), value)
        else:
            out[key] = value
    return out


def _section(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = payload.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")
    return value


def _text(section: Mapping[str, Any], key: str, *, where: str) -> str:
    value = str(section.get(key) or "").strip()
    if not value:
        raise RuntimeError(f"{where}.{key} が未設定または空です")
    return value


def _pair(section: Mapping[str, Any], key: str, *, where: str) -> tuple[int, int]:
    value = section.get(key)
    try:
        x, y = value  # type: ignore[misc]
        return int(x), int(y)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{where}.{key} は [x, y] の整数配列である必要があります: got={value!r}") from exc


def _read_payload(explicit: Path | None, discovered: Path | None) -> dict[str, Any]:
    blob = resources.files("shadergui").joinpath(*_PACKAGED_CONFIG).read_text(encoding="utf-8")
    payload = _parse_yaml(blob, source="shadergui/" + "/".join(_PACKAGED_CONFIG))
    for path in (discovered, explicit):
        if path is not None:
            payload = _merge(payload, _parse_yaml(path.read_text(encoding="utf-8"), source=str(path)))
    return payload


def _build(payload: Mapping[str, Any], *, config_path: Path | None) -> RuntimeConfig:
    version = payload.get("version")
    if not isinstance(version, int) or version != CONFIG_VERSION:
        raise RuntimeError(f"未対応の config.yaml version です: got={version!r}")

    paths = _section(payload, "paths")
    output_dir = _text(paths, "output_dir", where="paths")

    inspector = _section(payload, "inspector")
    try:
        space_height = float(inspector.get("default_space_height", 6.0))
    except (TypeError, ValueError) as exc:
        raise RuntimeError("inspector.default_space_height は数値である必要があります") from exc
    if space_height < 0:
        raise RuntimeError(
            f"inspector.default_space_height は 0 以上である必要があります: got={space_height}"
        )

    names = _section(inspector, "blend_property_names")
    defaults = BlendPropertyNames()
    blend_names = BlendPropertyNames(
        src=str(names.get("src", defaults.src)),
        dst=str(names.get("dst", defaults.dst)),
        zwrite=str(names.get("zwrite", defaults.zwrite)),
        alpha_to_mask=str(names.get("alpha_to_mask", defaults.alpha_to_mask)),
    )

    ui = _section(payload, "ui")
    return RuntimeConfig(
        config_path=config_path,
        output_dir=Path(os.path.expandvars(os.path.expanduser(output_dir))),
        blend_mode_property=_text(inspector, "blend_mode_property", where="inspector"),
        gi_mode_property=_text(inspector, "gi_mode_property", where="inspector"),
        render_settings_header=_text(inspector, "render_settings_header", where="inspector"),
        default_space_height=space_height,
        blend_property_names=blend_names,
        window_position=_pair(ui, "window_position", where="ui"),
        window_size=_pair(ui, "window_size", where="ui"),
    )


def runtime_config() -> RuntimeConfig:
    """実行時設定を返す。初回呼び出しでロードし、以降はキャッシュを返す。

    Raises
    ------
    FileNotFoundError
        set_config_path で指定したファイルが存在しない場合。
    RuntimeError
        config の形式や version が不正な場合。
    """

    global _cached
    if _cached is not None:
        return _cached

    explicit = _explicit_path
    if explicit is not None and not explicit.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit}")
    discovered = _discovered_config_path()

    _cached = _build(_read_payload(explicit, discovered), config_path=explicit or discovered)
    return _cached


def output_root_dir() -> Path:
    """Foldout 状態などの UI 状態ファイルを保存するルートディレクトリを返す。"""

    return runtime_config().output_dir


__all__ = ["RuntimeConfig", "output_root_dir", "runtime_config", "set_config_path"]
