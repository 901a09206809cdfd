"""
どこで: リポジトリ直下 `main.py`。
何を: 注釈付きプロパティを持つサンプル Material を作り、run_inspector で Inspector を表示する。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import sys

sys.path.append("src")

from shadergui import Material, PropertyFlags, PropertyKind, ShaderProperty, run_inspector

PROPERTIES = [
    ShaderProperty(
        "_MainTex",
        PropertyKind.TEXTURE,
        "Albedo",
        annotations=("Header(Main)",),
    ),
    ShaderProperty("_Color", PropertyKind.COLOR, "Color", default=(1.0, 1.0, 1.0, 1.0)),
    ShaderProperty(
        "_Steps",
        PropertyKind.RANGE,
        "Steps",
        annotations=("Space(8)", "IntRange"),
        default=4.0,
        range_limits=(0.0, 16.0),
    ),
    ShaderProperty(
        "_Offset",
        PropertyKind.VECTOR,
        "Offset",
        annotations=("Vector3",),
    ),
    ShaderProperty(
        "_EmissionMap",
        PropertyKind.TEXTURE,
        "Emission",
        annotations=("Foldout(Emission)", "Text(Emission is multiplied by the color below)"),
        flags=PropertyFlags.NO_SCALE_OFFSET,
    ),
    ShaderProperty("_EmissionColor", PropertyKind.COLOR, "Emission Color", default=(0, 0, 0, 1)),
    ShaderProperty(
        "_blendMode",
        PropertyKind.FLOAT,
        "Blend",
        annotations=("FoldoutEnd", "Header(RenderSettings)"),
    ),
    ShaderProperty("_GIMode", PropertyKind.FLOAT, "Global Illumination"),
    ShaderProperty("_SrcBlend", PropertyKind.FLOAT, flags=PropertyFlags.HIDE_IN_INSPECTOR, default=1.0),
    ShaderProperty("_DstBlend", PropertyKind.FLOAT, flags=PropertyFlags.HIDE_IN_INSPECTOR, default=0.0),
]


if __name__ == "__main__":
    run_inspector(Material("SampleMaterial", properties=list(PROPERTIES)))
