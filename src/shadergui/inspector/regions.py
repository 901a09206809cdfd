# どこで: `src/shadergui/inspector/regions.py`。
# 何を: Header/Foldout 指定からセクションの開閉と「現在のプロパティを描くか」を決める状態機械を提供する。
# なぜ: スコープ遷移と可視判定を描画処理から分離し、遷移規則を単体テストできるようにするため。

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from shadergui.core.directives import Foldout, FoldoutEnd, Header, HeaderEnd, ScopeDirective

from .backend import DrawBackend
from .foldout_state import FoldoutStateStore


class ScopeKind(Enum):
    HEADER = "header"
    FOLDOUT = "foldout"


@dataclass(frozen=True, slots=True)
class Scope:
    """開いているセクション。Header は常に is_open=True。"""

    kind: ScopeKind
    title: str
    is_open: bool = True


class RegionStack:
    """1 回の描画パスぶんのスコープ状態。

    Notes
    -----
    - 同時に開くセクションは 1 つだけ。新しい Header/Foldout は先に既存のものを閉じる。
    - 閉じた Foldout の後ろのプロパティは、FoldoutEnd/HeaderEnd まで非表示。
    - Foldout の開閉フラグだけは FoldoutStateStore（パスをまたいで保持）に書く。
    """

    def __init__(
        self,
        backend: DrawBackend,
        foldouts: FoldoutStateStore,
        *,
        on_close: Callable[[Scope], None] | None = None,
    ) -> None:
        self._backend = backend
        self._foldouts = foldouts
        self._on_close = on_close
        self.open_region: Scope | None = None
        self.is_top_level = True
        self.foldout_index: int | None = None

    @property
    def is_visible(self) -> bool:
        """現在位置のプロパティを描画するなら True。"""

        return self.open_region is not None or self.is_top_level

    def apply(self, directive: ScopeDirective, *, index: int) -> None:
        """スコープ系 Directive を 1 件適用する。"""

        if isinstance(directive, Header):
            self._open_header(directive.title)
        elif isinstance(directive, HeaderEnd):
            self.close()
            self.is_top_level = True
        elif isinstance(directive, Foldout):
            self._open_foldout(directive.title, index=index)
        elif isinstance(directive, FoldoutEnd):
            self._end_foldout(index=index)

    def close(self) -> bool:
        """開いているセクションを閉じる。閉じた場合 True。"""

        region = self.open_region
        if region is None:
            return False
        # exit action（遅延ブロック等）はグループの内側で描く。
        if self._on_close is not None:
            self._on_close(region)
        self._backend.end_group()
        self.open_region = None
        self.is_top_level = True
        return True

    def finish(self) -> None:
        """パス終端で開いたままのセクションを閉じる。"""

        self.close()

    def _open_header(self, title: str) -> None:
        self.close()
        self._backend.draw_header(title)
        self._backend.begin_group()
        self.open_region = Scope(kind=ScopeKind.HEADER, title=title, is_open=True)
        self.is_top_level = False

    def _open_foldout(self, title: str, *, index: int) -> None:
        self.close()
        is_open = bool(
            self._backend.draw_toggle_header(title, self._foldouts.is_open(index))
        )
        self._foldouts.set_open(index, is_open)
        self.foldout_index = int(index)
        self.is_top_level = False
        if is_open:
            self._backend.begin_group()
            self.open_region = Scope(kind=ScopeKind.FOLDOUT, title=title, is_open=True)

    def _end_foldout(self, *, index: int) -> None:
        region = self.open_region
        if region is not None:
            if region.kind is ScopeKind.FOLDOUT:
                self.close()
            elif self.foldout_index is not None and self._foldouts.any_open(
                self.foldout_index, index
            ):
                self.close()
        self.is_top_level = True


__all__ = ["RegionStack", "Scope", "ScopeKind"]
