# どこで: `src/shadergui/core/directives.py`。
# 何を: プロパティ注釈文字列（"Header(Main)" 等）を閉じた Directive 型へ解析する純粋関数群を提供する。
# なぜ: 文字列キーの動的ディスパッチを避け、Inspector 側は型で分岐できるようにするため。

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Union

_logger = logging.getLogger(__name__)

# 最初の "(" から最後の ")" までを引数として取り出す（貪欲）。
_ARG_RE = re.compile(r"\((.*)\)")


@dataclass(frozen=True, slots=True)
class Space:
    """縦方向の余白。height=None は既定の高さ。"""

    height: float | None = None


@dataclass(frozen=True, slots=True)
class Header:
    """常に開いたセクションを開始する。"""

    title: str


@dataclass(frozen=True, slots=True)
class HeaderEnd:
    """開いているセクションを閉じる。"""


@dataclass(frozen=True, slots=True)
class Foldout:
    """折りたたみ可能なセクションを開始する。"""

    title: str


@dataclass(frozen=True, slots=True)
class FoldoutEnd:
    """折りたたみセクションを閉じる。"""


@dataclass(frozen=True, slots=True)
class Text:
    """情報ボックスを表示する。"""

    message: str


@dataclass(frozen=True, slots=True)
class WidgetOverride:
    """ウィジェット指定（"IntRange" / "Vector2" / "PowerSlider(0.5)" など）。"""

    kind: str
    param: str | None = None


Directive = Union[Space, Header, HeaderEnd, Foldout, FoldoutEnd, Text, WidgetOverride]
ScopeDirective = Union[Header, HeaderEnd, Foldout, FoldoutEnd]

SCOPE_DIRECTIVE_TYPES: tuple[type, ...] = (Header, HeaderEnd, Foldout, FoldoutEnd)


def _paren_arg(text: str) -> str | None:
    """括弧内の引数を返す。括弧が無い/閉じていない場合は None。"""

    m = _ARG_RE.search(text)
    if m is None:
        return None
    return m.group(1)


def _has_unbalanced_parens(text: str) -> bool:
    return text.count("(") != text.count(")")


def parse_directive(raw: str) -> Directive | None:
    """注釈文字列 1 件を Directive へ変換して返す。

    解釈できない注釈（数値でない Space の高さ、閉じていない括弧、
    引数の無い Header/Foldout/Text）は None を返す。例外は送出しない。

    Examples
    --------
    >>> parse_directive("Header(Main)")
    Header(title='Main')
    >>> parse_directive("IntRange")
    WidgetOverride(kind='IntRange', param=None)
    """

    text = str(raw).strip()
    if not text:
        return None

    if text.startswith("Space"):
        if text == "Space":
            return Space()
        arg = _paren_arg(text)
        if arg is None:
            _logger.debug("Space の引数が無いため無視します: %r", text)
            return None
        try:
            return Space(height=float(arg))
        except ValueError:
            _logger.debug("Space の高さが数値ではないため無視します: %r", text)
            return None

    if "Header" in text:
        if text == "HeaderEnd":
            return HeaderEnd()
        arg = _paren_arg(text)
        if arg is None:
            return None
        return Header(title=arg)

    if "Foldout" in text:
        if text == "FoldoutEnd":
            return FoldoutEnd()
        arg = _paren_arg(text)
        if arg is None:
            return None
        return Foldout(title=arg)

    if text.startswith("Text"):
        arg = _paren_arg(text)
        if arg is None:
            return None
        return Text(message=arg)

    if "(" not in text and ")" not in text:
        return WidgetOverride(kind=text, param=None)
    if _has_unbalanced_parens(text):
        _logger.debug("括弧が閉じていないため無視します: %r", text)
        return None
    arg = _paren_arg(text)
    prefix = text[: text.rfind("(")].strip() if arg is not None else ""
    if not prefix:
        return None
    return WidgetOverride(kind=prefix, param=arg)


def parse_directives(annotations: Iterable[str]) -> list[Directive]:
    """注釈列を宣言順の Directive 列へ変換して返す（解釈できない注釈は捨てる）。"""

    out: list[Directive] = []
    for raw in annotations:
        directive = parse_directive(raw)
        if directive is not None:
            out.append(directive)
    return out


def effective_override(directives: Sequence[Directive]) -> WidgetOverride | None:
    """有効な WidgetOverride を返す。

    同一プロパティに複数ある場合は最後に宣言されたものが優先される。
    逆順に並べて最初に一致したものを採用する。
    """

    for directive in reversed(list(directives)):
        if isinstance(directive, WidgetOverride):
            return directive
    return None


def is_scope_directive(directive: Directive) -> bool:
    return isinstance(directive, SCOPE_DIRECTIVE_TYPES)


__all__ = [
    "Directive",
    "Foldout",
    "FoldoutEnd",
    "Header",
    "HeaderEnd",
    "SCOPE_DIRECTIVE_TYPES",
    "ScopeDirective",
    "Space",
    "Text",
    "WidgetOverride",
    "effective_override",
    "is_scope_directive",
    "parse_directive",
    "parse_directives",
]
