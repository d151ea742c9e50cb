from __future__ import annotations

import math

import numpy as np

from pixelstage.api.geometry import Rectangle
from pixelstage.rendering.text import TextRenderer, tint_image
from pixelstage.rendering.texture_cache import TextureCache
from pixelstage.rendering.view_stack import ViewStateStack
from tests.pixelstage.conftest import RecordingSurface, font_sheet, make_font


def _text(font=None) -> tuple[TextRenderer, RecordingSurface, ViewStateStack, TextureCache, np.ndarray]:
    font = font or make_font()
    surface = RecordingSurface()
    views = ViewStateStack(surface)
    views.set_font(font)
    sheet = font_sheet()
    cache = TextureCache()
    renderer = TextRenderer(surface, views, {font.url: sheet}.__getitem__, cache)
    return renderer, surface, views, cache, sheet


def test_measure_respects_line_breaks_and_glyph_widths() -> None:
    renderer, *_ = _text()
    assert renderer.measure("ab\ncde") == Rectangle(0, 0, 15, 16)
    assert renderer.measure("") == Rectangle(0, 0, 0, 8)
    narrow = make_font(glyph_widths={"i": 2})
    assert renderer.measure("ii", narrow) == Rectangle(0, 0, 4, 8)


def test_write_draws_glyph_cells_from_tinted_sheet() -> None:
    renderer, surface, views, cache, _ = _text()
    renderer.write("A", 10, 20, "white")
    assert surface.blits() == [(5, 20, 5, 5, 10, 20, 5, 5)]
    assert surface.calls[0][1] is cache.image
    assert len(cache) == 1


def test_write_advances_cursor_past_text_plus_space() -> None:
    renderer, _, views, _, _ = _text()
    renderer.write("ab", 10, 20)
    assert (views.state.text_x, views.state.text_y) == (25, 20)


def test_consecutive_writes_continue_from_cursor() -> None:
    renderer, surface, views, _, _ = _text()
    views.cursor(2, 3)
    renderer.write("a")
    renderer.write("b")
    destinations = [blit[4:6] for blit in surface.blits()]
    assert destinations == [(2, 3), (12, 3)]


def test_write_line_breaks_and_moves_to_next_line() -> None:
    renderer, surface, views, _, _ = _text()
    renderer.write("a\nb", 4, 0)
    assert [blit[4:6] for blit in surface.blits()] == [(4, 0), (4, 8)]
    assert (views.state.text_x, views.state.text_y) == (14, 8)

    renderer.write_line("c", 2, 3)
    assert (views.state.text_x, views.state.text_y) == (2, 11)


def test_shadow_is_drawn_below_and_right_of_glyph() -> None:
    renderer, surface, _, cache, _ = _text()
    renderer.write("A", 0, 0, "white", "black")
    # The text tint occupies (0, 0); the shadow tint is packed beside it.
    assert surface.blits() == [
        (85, 20, 5, 5, 1, 0, 5, 5),
        (85, 20, 5, 5, 0, 1, 5, 5),
        (85, 20, 5, 5, 1, 1, 5, 5),
        (5, 20, 5, 5, 0, 0, 5, 5),
    ]
    assert len(cache) == 2


def test_precolored_glyphs_are_drawn_from_raw_sheet() -> None:
    renderer, surface, _, cache, sheet = _text(make_font(precolored_glyphs=66))
    renderer.write("AB", 0, 0, "red")
    assert surface.calls[0][1] is sheet
    assert surface.calls[1][1] is cache.image


def test_fully_precolored_font_skips_tinting() -> None:
    renderer, surface, _, cache, sheet = _text(make_font(precolored_glyphs=math.inf))
    renderer.write("AB", 0, 0, "red")
    assert all(call[1] is sheet for call in surface.calls if call[0] == "draw_image")
    assert len(cache) == 0


def test_tinted_sheets_are_cached_per_color() -> None:
    renderer, _, _, cache, _ = _text()
    renderer.write("A", 0, 0, "red")
    renderer.write("B", 0, 0, "#ff0000")
    assert len(cache) == 1
    renderer.write("A", 0, 0, "blue")
    assert len(cache) == 2


def test_tint_image_multiplies_color_and_keeps_image_alpha() -> None:
    image = np.array(
        [[[255, 255, 255, 255], [100, 100, 100, 200], [50, 60, 70, 0]]],
        dtype=np.uint8,
    )
    opaque = tint_image(image, (255, 0, 0, 255))
    assert tuple(opaque[0, 0]) == (255, 0, 0, 255)
    # The fill shows through where the image itself is translucent.
    assert tuple(opaque[0, 1]) == (133, 0, 0, 200)
    assert tuple(opaque[0, 2]) == (0, 0, 0, 0)
    assert opaque.dtype == np.uint8


def test_translucent_tint_lightens_instead_of_fading() -> None:
    image = np.array([[[255, 255, 255, 255]]], dtype=np.uint8)
    tinted = tint_image(image, (255, 0, 0, 128))
    assert tuple(tinted[0, 0]) == (255, 127, 127, 255)
