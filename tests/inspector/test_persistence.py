import logging
from pathlib import Path

import pytest

from shadergui.core.runtime_config import set_config_path
from shadergui.inspector.foldout_state import FoldoutStateStore
from shadergui.inspector.persistence import (
    default_foldout_state_path,
    dumps_foldout_state,
    load_foldout_state,
    loads_foldout_state,
    save_foldout_state,
)


def test_dumps_and_loads_foldout_state():
    store = FoldoutStateStore([True, False, True])
    restored = loads_foldout_state(dumps_foldout_state(store))
    assert restored.snapshot() == (True, False, True)


@pytest.mark.parametrize(
    "text",
    [
        "[]",
        '{"version": 2, "foldouts": []}',
        '{"version": 1, "foldouts": [1, 0]}',
        '{"version": 1}',
    ],
)
def test_loads_foldout_state_rejects_invalid_payload(text):
    with pytest.raises(ValueError):
        loads_foldout_state(text)


def test_load_missing_file_returns_empty_store(tmp_path: Path):
    assert len(load_foldout_state(tmp_path / "missing.json")) == 0


def test_load_corrupt_file_warns_and_returns_empty_store(tmp_path: Path, caplog):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="shadergui.inspector.persistence"):
        store = load_foldout_state(path)

    assert len(store) == 0
    assert len(caplog.records) == 1


def test_save_creates_parent_directories(tmp_path: Path):
    path = tmp_path / "nested" / "dir" / "state.json"
    save_foldout_state(FoldoutStateStore([False, True]), path)
    assert load_foldout_state(path).snapshot() == (False, True)


def test_default_foldout_state_path_is_sanitized(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    try:
        path = default_foldout_state_path("My Mat/01")
    finally:
        set_config_path(None)

    assert path == Path("data") / "output" / "inspector_state" / "My_Mat_01.json"
