"""Procedurally rendered 3x5 pixel font used when no font is configured."""

from __future__ import annotations

import numpy as np

from pixelstage.api.font import DEFAULT_FONT
from pixelstage.api.surface import ImageData

SHEET_COLUMNS = 16
SHEET_ROWS = 8

# Rows top to bottom, "#" marks a lit pixel. Lowercase letters reuse the
# uppercase shapes.
GLYPHS: dict[str, str] = {
    " ": "... ... ... ... ...",
    "!": ".#. .#. .#. ... .#.",
    '"': "#.# #.# ... ... ...",
    "#": "#.# ### #.# ### #.#",
    "$": ".## ##. .#. .## ##.",
    "%": "#.. ..# .#. #.. ..#",
    "&": ".#. #.# .#. #.# .##",
    "'": ".#. .#. ... ... ...",
    "(": "..# .#. .#. .#. ..#",
    ")": "#.. .#. .#. .#. #..",
    "*": "... #.# .#. #.# ...",
    "+": "... .#. ### .#. ...",
    ",": "... ... ... .#. #..",
    "-": "... ... ### ... ...",
    ".": "... ... ... ... .#.",
    "/": "..# ..# .#. #.. #..",
    "0": "### #.# #.# #.# ###",
    "1": ".#. ##. .#. .#. ###",
    "2": "##. ..# .#. #.. ###",
    "3": "##. ..# .#. ..# ##.",
    "4": "#.# #.# ### ..# ..#",
    "5": "### #.. ##. ..# ##.",
    "6": ".## #.. ### #.# ###",
    "7": "### ..# .#. .#. .#.",
    "8": "### #.# ### #.# ###",
    "9": "### #.# ### ..# ##.",
    ":": "... .#. ... .#. ...",
    ";": "... .#. ... .#. #..",
    "<": "..# .#. #.. .#. ..#",
    "=": "... ### ... ### ...",
    ">": "#.. .#. ..# .#. #..",
    "?": "##. ..# .#. ... .#.",
    "@": "### #.# #.# #.. .##",
    "A": ".#. #.# ### #.# #.#",
    "B": "##. #.# ##. #.# ##.",
    "C": ".## #.. #.. #.. .##",
    "D": "##. #.# #.# #.# ##.",
    "E": "### #.. ##. #.. ###",
    "F": "### #.. ##. #.. #..",
    "G": ".## #.. #.# #.# .##",
    "H": "#.# #.# ### #.# #.#",
    "I": "### .#. .#. .#. ###",
    "J": "..# ..# ..# #.# .#.",
    "K": "#.# #.# ##. #.# #.#",
    "L": "#.. #.. #.. #.. ###",
    "M": "#.# ### ### #.# #.#",
    "N": "##. #.# #.# #.# #.#",
    "O": ".#. #.# #.# #.# .#.",
    "P": "##. #.# ##. #.. #..",
    "Q": ".#. #.# #.# ##. .##",
    "R": "##. #.# ##. #.# #.#",
    "S": ".## #.. .#. ..# ##.",
    "T": "### .#. .#. .#. .#.",
    "U": "#.# #.# #.# #.# ###",
    "V": "#.# #.# #.# #.# .#.",
    "W": "#.# #.# ### ### #.#",
    "X": "#.# #.# .#. #.# #.#",
    "Y": "#.# #.# .#. .#. .#.",
    "Z": "### ..# .#. #.. ###",
    "[": "##. #.. #.. #.. ##.",
    "\\": "#.. #.. .#. ..# ..#",
    "]": ".## ..# ..# ..# .##",
    "^": ".#. #.# ... ... ...",
    "_": "... ... ... ... ###",
    "`": "#.. .#. ... ... ...",
    "{": "..# .#. ##. .#. ..#",
    "|": ".#. .#. .#. .#. .#.",
    "}": "#.. .#. .## .#. #..",
    "~": "... .## ##. ... ...",
}


def _glyph_rows(char: str) -> list[str] | None:
    pattern = GLYPHS.get(char)
    if pattern is None and char.islower():
        pattern = GLYPHS.get(char.upper())
    if pattern is None:
        return None
    return pattern.split()


def render_builtin_font() -> ImageData:
    """Render the glyph sheet: white glyphs on transparent, 16 cells per row."""
    gw = DEFAULT_FONT.glyph_width
    gh = DEFAULT_FONT.glyph_height
    sheet = np.zeros((SHEET_ROWS * gh, SHEET_COLUMNS * gw, 4), dtype=np.uint8)
    for code in range(SHEET_COLUMNS * SHEET_ROWS):
        rows = _glyph_rows(chr(code))
        if rows is None:
            continue
        left = (code % SHEET_COLUMNS) * gw
        top = (code // SHEET_COLUMNS) * gh
        for dy, row in enumerate(rows):
            for dx, cell in enumerate(row):
                if cell == "#":
                    sheet[top + dy, left + dx] = (255, 255, 255, 255)
    return sheet


__all__ = ["GLYPHS", "render_builtin_font"]
