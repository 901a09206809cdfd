from typing import get_args

import pytest

from shadergui.core.directives import (
    SCOPE_DIRECTIVE_TYPES,
    Foldout,
    FoldoutEnd,
    Header,
    HeaderEnd,
    ScopeDirective,
    Space,
    Text,
    WidgetOverride,
    effective_override,
    is_scope_directive,
    parse_directive,
    parse_directives,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Space", Space(None)),
        ("Space(12)", Space(12.0)),
        ("Space(2.5)", Space(2.5)),
        ("Header(Main)", Header("Main")),
        ("wHeader(Main Settings)", Header("Main Settings")),
        ("HeaderEnd", HeaderEnd()),
        ("Foldout(Detail)", Foldout("Detail")),
        ("wFoldout(Detail)", Foldout("Detail")),
        ("FoldoutEnd", FoldoutEnd()),
        ("Text(Use a normal map here)", Text("Use a normal map here")),
        ("IntRange", WidgetOverride("IntRange", None)),
        ("PowerSlider(0.5)", WidgetOverride("PowerSlider", "0.5")),
        ("Vector3", WidgetOverride("Vector3", None)),
    ],
)
def test_parse_directive_variants(raw, expected):
    assert parse_directive(raw) == expected


def test_parse_directive_title_keeps_nested_parentheses():
    assert parse_directive("Header(Main (beta))") == Header("Main (beta)")


@pytest.mark.parametrize(
    "raw",
    [
        "Space(abc)",
        "SpaceX",
        "Header",
        "Header(Main",
        "Foldout",
        "Text",
        "Enum(A",
        "",
        "   ",
    ],
)
def test_parse_directive_drops_malformed_tokens(raw):
    assert parse_directive(raw) is None


def test_parse_directives_skips_only_the_bad_token():
    out = parse_directives(["Header(Main)", "Space(oops)", "IntRange"])
    assert out == [Header("Main"), WidgetOverride("IntRange", None)]


def test_parse_directive_is_idempotent():
    for raw in ["Header(Main)", "Space(4)", "PowerSlider(2)", "FoldoutEnd", "Space(x)"]:
        assert parse_directive(raw) == parse_directive(raw)


def test_effective_override_last_declared_wins():
    directives = parse_directives(["IntRange", "PowerSlider(3)"])
    assert effective_override(directives) == WidgetOverride("PowerSlider", "3")

    directives = parse_directives(["PowerSlider(3)", "IntRange"])
    assert effective_override(directives) == WidgetOverride("IntRange", None)


def test_effective_override_ignores_scope_and_decoration_directives():
    directives = parse_directives(["Vector2", "Header(Main)", "Space", "Text(hi)"])
    assert effective_override(directives) == WidgetOverride("Vector2", None)
    assert effective_override(parse_directives(["Header(Main)"])) is None


def test_is_scope_directive():
    assert is_scope_directive(Header("a"))
    assert is_scope_directive(FoldoutEnd())
    assert not is_scope_directive(Space())
    assert not is_scope_directive(WidgetOverride("IntRange"))


def test_scope_directive_union_matches_scope_types():
    assert get_args(ScopeDirective) == SCOPE_DIRECTIVE_TYPES
