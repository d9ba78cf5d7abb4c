# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from collections.abc import Sequence

from blametip import settings
from blametip.errors import ProcessError
from blametip.gitdriver.gitdriver import GitDriver, ProcessCallback
from blametip.gitdriver.gitjob import GitJob
from blametip.qt import *
from blametip.toolbox import onAppThread

logger = logging.getLogger(__name__)


class ProcessRunner:
    """
    Runs external commands without blocking the calling thread.

    Commands are complete argument vectors, never interpreted by a shell.
    Each call spawns exactly one child process, with no retry and no timeout.
    The callback is invoked exactly once, on the application thread,
    with either the trimmed stdout or a ProcessError.

    Two interchangeable strategies (GitDriver, GitJob) are picked per call;
    both produce the same outcome for the same process.
    """

    def __init__(self, forceJobStrategy: bool | None = None):
        if forceJobStrategy is None:
            forceJobStrategy = settings.prefs.forceJobStrategy
        self.forceJobStrategy = forceJobStrategy
        self._inFlight: set[GitDriver | GitJob] = set()

    def hasStructuredSpawn(self) -> bool:
        """
        A QProcess can only be driven from a thread with an event loop.
        Outside the application thread, fall back to a job.
        """
        return not self.forceJobStrategy and onAppThread()

    def isBusy(self) -> bool:
        return bool(self._inFlight)

    def run(self, tokens: Sequence[str], callback: ProcessCallback) -> GitDriver | GitJob:
        assert tokens, "empty command"
        assert QCoreApplication.instance() is not None, "a QCoreApplication must exist"

        if self.hasStructuredSpawn():
            process = GitDriver(tokens)
        else:
            process = GitJob(tokens)

        # Keep the process object alive until it has reported back
        self._inFlight.add(process)

        def onProcessDone(stdout: str | None, error: ProcessError | None):
            self._inFlight.discard(process)
            process.deleteLater()
            callback(stdout, error)

        process.startWithCallback(onProcessDone)
        return process

    def runSync(self, tokens: Sequence[str]) -> str:
        """ Blocking variant of run(). Returns trimmed stdout or raises ProcessError. """
        assert tokens, "empty command"
        return GitDriver.runSync(tokens)
