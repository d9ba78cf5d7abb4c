# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import unicodedata
from collections.abc import Iterable

_wideEastAsianWidths = {"W", "F"}

_zeroWidthCategories = {"Mn", "Me", "Cf"}


def charDisplayWidth(char: str) -> int:
    """ Number of terminal columns taken up by a single character. """
    if unicodedata.category(char) in _zeroWidthCategories:
        return 0
    if unicodedata.east_asian_width(char) in _wideEastAsianWidths:
        return 2
    return 1


def displayWidth(text: str) -> int:
    """
    Number of columns needed to display `text` in a monospaced grid.
    Wide/fullwidth East Asian characters take up 2 columns; combining marks
    and format characters take up none. Unlike len(), this doesn't get thrown
    off by author names written in CJK scripts or with decomposed accents.
    """
    return sum(charDisplayWidth(c) for c in text)


def maxDisplayWidth(lines: Iterable[str]) -> int:
    return max((displayWidth(line) for line in lines), default=0)


def firstNonBlankLine(text: str) -> str:
    """ Return the first line of `text` that isn't blank, trimmed. """
    for line in text.splitlines():
        line = line.strip()
        if line:
            return line
    return ""

