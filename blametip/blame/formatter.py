# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses

from blametip.blame.blamerecord import BlameRecord
from blametip.localization import *
from blametip.toolbox import displayWidth, firstNonBlankLine, id8, maxDisplayWidth

# Columns taken up by "<8-char hash> " before the author's name
_HASH_COLUMNS = 9


@dataclasses.dataclass(frozen=True)
class FormattedContent:
    """
    Lines to show in the tip, plus a few metrics for the presentation layer.
    All metrics are in display columns.
    """

    lines: tuple[str, ...]

    labelEnd: int = 0
    "End of the hash+author span on the first line (for emphasis)"

    timeBegin: int = 0
    "Start of the date span on the first line (for emphasis)"

    maxWidth: int = 0
    "Widest line, to size the window"

    @property
    def hasLabel(self) -> bool:
        return self.labelEnd != 0 or self.timeBegin != 0


def notCommittedYetMarker() -> str:
    return _p("blame tip", "Not Committed Yet")


def formatContent(record: BlameRecord) -> FormattedContent:
    """
    Turn a finalized BlameRecord into display lines.

    Only the first non-blank line of the commit message is shown, as a
    one-line preview underneath the header.
    """
    if not record.isCommitted:
        marker = notCommittedYetMarker()
        return FormattedContent(lines=(marker,), maxWidth=displayWidth(marker))

    authorWidth = displayWidth(record.author)
    header = f"{id8(record.commitHash)} {record.author} ({record.date}):"

    lines = [header]
    summary = firstNonBlankLine(record.commitMessage or "")
    if summary:
        lines.append(summary)

    return FormattedContent(
        lines=tuple(lines),
        labelEnd=_HASH_COLUMNS + authorWidth,
        timeBegin=_HASH_COLUMNS + 1 + authorWidth,
        maxWidth=maxDisplayWidth(lines))
