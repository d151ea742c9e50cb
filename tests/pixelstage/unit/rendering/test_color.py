from __future__ import annotations

import pytest

from pixelstage.rendering.color import color_key, parse_color


def test_parse_color_accepts_names_and_hex_forms() -> None:
    assert parse_color("red") == (255, 0, 0, 255)
    assert parse_color(" White ") == (255, 255, 255, 255)
    assert parse_color("#f00") == (255, 0, 0, 255)
    assert parse_color("#1234") == (0x11, 0x22, 0x33, 0x44)
    assert parse_color("#102030") == (0x10, 0x20, 0x30, 255)
    assert parse_color("#10203040") == (0x10, 0x20, 0x30, 0x40)


def test_parse_color_clamps_tuples() -> None:
    assert parse_color((300, -5, 10)) == (255, 0, 10, 255)
    assert parse_color((1, 2, 3, 4)) == (1, 2, 3, 4)


@pytest.mark.parametrize("value", ["", "#12", "#ggg", "rgb(1,2,3)", (1, 2), [1, 2, 3]])
def test_parse_color_rejects_invalid_values(value) -> None:
    with pytest.raises(ValueError):
        parse_color(value)


def test_color_key_identifies_visually_equal_fills() -> None:
    assert color_key("red") == "#ff0000ff"
    assert color_key("#f00") == color_key((255, 0, 0))
