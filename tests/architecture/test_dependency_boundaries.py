"""依存境界（core → inspector/GUI）の破りを検出するテスト。"""

from __future__ import annotations

import ast
from pathlib import Path


def _repo_root() -> Path:
    path = Path(__file__).resolve()
    for parent in path.parents:
        if (parent / "src").is_dir() and (parent / "tests").is_dir():
            return parent
    raise RuntimeError("repo root が見つからない")


def _module_name_for_path(*, path: Path, src_root: Path) -> tuple[str, bool]:
    parts = list(path.relative_to(src_root).parts)
    is_package = parts[-1] == "__init__.py"
    if is_package:
        parts = parts[:-1]
    else:
        parts[-1] = parts[-1].removesuffix(".py")
    return ".".join(parts), is_package


def _resolve_importfrom_targets(
    *,
    current_module: str,
    is_package: bool,
    node: ast.ImportFrom,
) -> set[str]:
    level = int(node.level or 0)
    if level == 0:
        base = str(node.module or "")
    else:
        current_package = current_module if is_package else current_module.rsplit(".", 1)[0]
        parts = current_package.split(".")
        up = level - 1
        if up >= len(parts):
            raise ValueError(
                "相対 import の解決に失敗: "
                f"current_module={current_module!r}, level={level}, module={node.module!r}"
            )
        base = ".".join(parts[: len(parts) - up])
        if node.module is not None:
            base = f"{base}.{node.module}"

    targets = {base}
    for alias in node.names:
        if alias.name != "*":
            targets.add(f"{base}.{alias.name}")
    return targets


def _import_modules_in_file(*, path: Path, src_root: Path) -> set[str]:
    current_module, is_package = _module_name_for_path(path=path, src_root=src_root)
    tree = ast.parse(path.read_text(encoding="utf-8"))
    modules: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.update(str(alias.name) for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            modules.update(
                _resolve_importfrom_targets(
                    current_module=current_module, is_package=is_package, node=node
                )
            )
    return modules


def _assert_no_forbidden_imports(*, root: Path, forbidden_prefixes: tuple[str, ...]) -> None:
    repo_root = _repo_root()
    src_root = repo_root / "src"
    violations: list[str] = []
    for path in sorted(root.rglob("*.py")):
        modules = _import_modules_in_file(path=path, src_root=src_root)
        bad = sorted(m for m in modules if m.startswith(forbidden_prefixes))
        if bad:
            violations.append(f"{path.relative_to(repo_root)}: {', '.join(bad)}")

    if violations:
        joined = "\n".join(violations)
        raise AssertionError(f"依存境界違反の import を検出:\n{joined}")


def test_core_does_not_depend_on_inspector_or_gui() -> None:
    root = _repo_root()
    _assert_no_forbidden_imports(
        root=root / "src" / "shadergui" / "core",
        forbidden_prefixes=("shadergui.inspector", "shadergui.api", "pyglet", "imgui"),
    )


def test_inspector_pass_does_not_import_gui_toolkits() -> None:
    root = _repo_root() / "src" / "shadergui" / "inspector"
    src_root = _repo_root() / "src"
    for name in ("inspector.py", "regions.py", "widgets.py", "presets.py", "layout.py"):
        modules = _import_modules_in_file(path=root / name, src_root=src_root)
        assert not [m for m in modules if m.startswith(("pyglet", "imgui"))], name


def _parse_single_stmt(source: str) -> ast.ImportFrom:
    tree = ast.parse(source)
    assert len(tree.body) == 1
    node = tree.body[0]
    assert isinstance(node, ast.ImportFrom)
    return node


def test__resolve_importfrom_targets_handles_relative_imports() -> None:
    got = _resolve_importfrom_targets(
        current_module="shadergui.inspector.widgets",
        is_package=False,
        node=_parse_single_stmt("from .backend import FieldKind\n"),
    )
    assert got == {"shadergui.inspector.backend", "shadergui.inspector.backend.FieldKind"}

    got = _resolve_importfrom_targets(
        current_module="shadergui.core",
        is_package=True,
        node=_parse_single_stmt("from .. import inspector\n"),
    )
    assert "shadergui.inspector" in got


def test__resolve_importfrom_targets_rejects_unresolvable_relative_imports() -> None:
    try:
        _resolve_importfrom_targets(
            current_module="shadergui.core",
            is_package=True,
            node=_parse_single_stmt("from ...x import y\n"),
        )
    except ValueError:
        return
    raise AssertionError("解決不能な相対 import は ValueError にする")
