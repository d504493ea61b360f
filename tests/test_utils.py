import pytest

from restyle_core.core.util import is_hex_color


@pytest.mark.parametrize("value", ["#000000", "#a0d8ef", "#ABCDEF"])
def test_is_hex_color_accepts_rrggbb(value):
    assert is_hex_color(value) is True


@pytest.mark.parametrize("value", [None, "", "000000", "#fff", "#ffffff33", "#gggggg", "#000000\n", " #000000", "red", 123])
def test_is_hex_color_rejects_other_values(value):
    assert is_hex_color(value) is False
