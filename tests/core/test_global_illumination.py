import pytest

from shadergui.core.global_illumination import GIFlags, gi_flags_for_mode


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, GIFlags.NONE),
        (1.0, GIFlags.BAKED_EMISSIVE),
        (2, GIFlags.REALTIME_EMISSIVE),
        (3.0, GIFlags.EMISSIVE_IS_BLACK),
    ],
)
def test_gi_flags_for_mode(value, expected):
    assert gi_flags_for_mode(value) is expected


@pytest.mark.parametrize("value", [-1, 4, 1.5, None, "abc", float("inf")])
def test_gi_flags_for_mode_out_of_range_is_none(value):
    assert gi_flags_for_mode(value) is None
