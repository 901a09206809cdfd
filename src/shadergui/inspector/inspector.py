# どこで: `src/shadergui/inspector/inspector.py`。
# 何を: 1 回の再描画でプロパティ列を宣言順に走査し、スコープ/可視判定/ウィジェット/プリセットを駆動する。
# なぜ: タグ解析・RegionStack・Widget Resolver・Preset を 1 箇所で順序付け、パス内の状態を明示的に持つため。

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from shadergui.core.blend import BlendPropertyNames
from shadergui.core.directives import (
    Directive,
    Foldout,
    Header,
    Space,
    Text,
    WidgetOverride,
    effective_override,
    is_scope_directive,
    parse_directives,
)
from shadergui.core.properties import PropertyKind, ShaderProperty
from shadergui.core.resource import Resource
from shadergui.core.runtime_config import runtime_config

from .backend import DrawBackend
from .foldout_state import FoldoutStateStore
from .presets import render_blend_mode_selector, render_render_settings_block
from .regions import RegionStack, Scope
from .widgets import render_property_widget

OVERRIDE_ALPHA_BLEND = "AlphaBlend"
OVERRIDE_GI_MODE = "GIMode"


@dataclass(frozen=True, slots=True)
class InspectorSettings:
    """Inspector の振る舞いを決める名前/寸法。"""

    blend_mode_property: str = "_blendMode"
    gi_mode_property: str = "_GIMode"
    render_settings_header: str = "RenderSettings"
    default_space_height: float = 6.0
    blend_property_names: BlendPropertyNames = field(default_factory=BlendPropertyNames)

    @classmethod
    def from_runtime_config(cls) -> InspectorSettings:
        """config.yaml の inspector セクションから設定を作る。"""

        cfg = runtime_config()
        return cls(
            blend_mode_property=cfg.blend_mode_property,
            gi_mode_property=cfg.gi_mode_property,
            render_settings_header=cfg.render_settings_header,
            default_space_height=cfg.default_space_height,
            blend_property_names=cfg.blend_property_names,
        )


@dataclass(slots=True)
class RenderSession:
    """1 パスぶんの一時状態。"""

    render_settings_pending: bool = False
    deferred_gi_property: ShaderProperty | None = None
    changed: bool = False


class ShaderInspector:
    """1 リソースの編集セッションに対応する Inspector。

    Foldout の開閉状態はこのインスタンスが保持し、再描画をまたいで維持される。
    それ以外の状態（スコープ/遅延ブロック）は毎パス作り直す。
    """

    def __init__(
        self,
        backend: DrawBackend,
        *,
        settings: InspectorSettings | None = None,
        foldouts: FoldoutStateStore | None = None,
    ) -> None:
        self._backend = backend
        self._settings = settings if settings is not None else InspectorSettings.from_runtime_config()
        self._foldouts = foldouts if foldouts is not None else FoldoutStateStore()

    @property
    def settings(self) -> InspectorSettings:
        return self._settings

    @property
    def foldouts(self) -> FoldoutStateStore:
        return self._foldouts

    def render_inspector(self, resource: Resource) -> bool:
        """resource のプロパティを 1 パス描画し、編集を反映する。

        Returns
        -------
        bool
            いずれかの値を変更した場合 True（resource は mark_dirty 済み）。
        """

        backend = self._backend
        props: Sequence[ShaderProperty] = list(resource.get_parameter_list())
        self._foldouts.sync_length(len(props))

        session = RenderSession()

        def _on_close(_scope: Scope) -> None:
            self._flush_render_settings(resource, session)

        regions = RegionStack(backend, self._foldouts, on_close=_on_close)

        for index, prop in enumerate(props):
            if prop.hidden:
                continue

            directives = parse_directives(resource.get_annotations(prop))
            for directive in directives:
                self._apply_directive(
                    directive, index=index, regions=regions, session=session, resource=resource
                )

            if not regions.is_visible:
                continue

            backend.push_id(prop.name)
            try:
                changed = self._render_property(
                    resource, prop, effective_override(directives), session=session
                )
            finally:
                backend.pop_id()
            session.changed = changed or session.changed

        regions.finish()
        # どのセクションにも属さない遅延ブロックはパス終端で描く。
        self._flush_render_settings(resource, session)

        if session.changed:
            resource.mark_dirty()
        return session.changed

    def _apply_directive(
        self,
        directive: Directive,
        *,
        index: int,
        regions: RegionStack,
        session: RenderSession,
        resource: Resource,
    ) -> None:
        if is_scope_directive(directive):
            if isinstance(directive, (Header, Foldout)) and regions.open_region is None:
                # トップレベルで保留中のブロックは、次のセクションより前に描く。
                self._flush_render_settings(resource, session)
            regions.apply(directive, index=index)
            if (
                isinstance(directive, Header)
                and directive.title == self._settings.render_settings_header
            ):
                session.render_settings_pending = True
            return

        if not regions.is_visible:
            return
        if isinstance(directive, Space):
            height = directive.height
            self._backend.draw_space(
                self._settings.default_space_height if height is None else float(height)
            )
        elif isinstance(directive, Text):
            self._backend.draw_help_box(directive.message)

    def _is_selector(
        self, prop: ShaderProperty, override: WidgetOverride | None, *, name: str, tag: str
    ) -> bool:
        if prop.kind is not PropertyKind.FLOAT:
            return False
        if prop.name == name:
            return True
        return override is not None and override.kind == tag

    def _render_property(
        self,
        resource: Resource,
        prop: ShaderProperty,
        override: WidgetOverride | None,
        *,
        session: RenderSession,
    ) -> bool:
        settings = self._settings
        if self._is_selector(
            prop, override, name=settings.blend_mode_property, tag=OVERRIDE_ALPHA_BLEND
        ):
            return render_blend_mode_selector(
                self._backend, resource, prop, names=settings.blend_property_names
            )
        if self._is_selector(prop, override, name=settings.gi_mode_property, tag=OVERRIDE_GI_MODE):
            session.deferred_gi_property = prop
            session.render_settings_pending = True
            return False
        return render_property_widget(self._backend, resource, prop, override)

    def _flush_render_settings(self, resource: Resource, session: RenderSession) -> None:
        if not session.render_settings_pending:
            return
        session.render_settings_pending = False
        gi_prop = session.deferred_gi_property
        session.deferred_gi_property = None
        changed = render_render_settings_block(
            self._backend,
            resource,
            gi_prop,
            space_height=self._settings.default_space_height,
        )
        session.changed = changed or session.changed


__all__ = [
    "InspectorSettings",
    "OVERRIDE_ALPHA_BLEND",
    "OVERRIDE_GI_MODE",
    "RenderSession",
    "ShaderInspector",
]
