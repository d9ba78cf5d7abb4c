# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Failures that can end a blame resolution. All of them are terminal: nothing
is retried, and the message of the exception is what the user gets to see.
"""

from blametip.localization import *


class BlameTipError(Exception):
    pass


class NotARepository(BlameTipError):
    def __init__(self, path: str = ""):
        super().__init__(_("Not a git repository"))
        self.path = path


class ProcessError(BlameTipError):
    pass


class ProcessSpawnFailure(ProcessError):
    def __init__(self, program: str = ""):
        super().__init__(_("Failed to start git process"))
        self.program = program


class ProcessNonZeroExit(ProcessError):
    """
    The process ran but exited with a non-zero code (or crashed).
    The message is git's own diagnostic, unmodified.
    """

    def __init__(self, diagnostic: str, exitCode: int = 1):
        super().__init__(diagnostic)
        self.diagnostic = diagnostic
        self.exitCode = exitCode


class ParseFailure(BlameTipError):
    def __init__(self, field: str):
        super().__init__(_("Error parsing blame {0}", field))
        self.field = field


class CommitMessageFetchFailure(BlameTipError):
    def __init__(self, diagnostic: str):
        super().__init__(_("Error getting commit message: {0}", diagnostic))
        self.diagnostic = diagnostic
