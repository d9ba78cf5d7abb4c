# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses

from blametip.qt import *

DATE_FORMAT = "yyyy-MM-dd HH:mm"


@dataclasses.dataclass(frozen=True)
class BlameRecord:
    """
    Attribution of a single line.

    commitHash is None for lines that only exist in the working tree.
    commitMessage is filled in last (see withMessage); in a finalized record,
    it's None if and only if commitHash is None.
    """

    author: str = ""
    authorEmail: str = ""
    commitHash: str | None = None
    authorTimeUnix: int = 0
    commitMessage: str | None = None

    @property
    def isCommitted(self) -> bool:
        return self.commitHash is not None

    @property
    def date(self) -> str:
        """ Author date in local time. Derived from authorTimeUnix. """
        dateTime = QDateTime.fromSecsSinceEpoch(self.authorTimeUnix)
        return dateTime.toString(DATE_FORMAT)

    def withMessage(self, message: str) -> BlameRecord:
        assert self.isCommitted, "uncommitted lines don't have a message"
        return dataclasses.replace(self, commitMessage=message)

    def isFinal(self) -> bool:
        return (self.commitMessage is not None) == (self.commitHash is not None)


@dataclasses.dataclass(frozen=True)
class BlameQuery:
    """ What the host asks for: one line (1-based) of one file. """

    filePath: str
    lineNumber: int
    workingDirectory: str = ""

    def __post_init__(self):
        if not self.filePath:
            raise ValueError("filePath must not be empty")
        if self.lineNumber < 1:
            raise ValueError(f"line numbers start at 1, got {self.lineNumber}")
