# どこで: `src/shadergui/core/__init__.py`。
# 何を: GUI 非依存のコア（プロパティモデル/タグ解析/プリセット表/設定）をまとめる。
# なぜ: imgui/pyglet を import せずにテスト・再利用できる層を分けるため。
