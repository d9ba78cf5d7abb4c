# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence

from blametip.errors import ProcessError, ProcessSpawnFailure
from blametip.gitdriver.gitdriver import GitDriver, ProcessCallback, decodeOutput
from blametip.qt import *
from blametip.toolbox import appThread, onAppThread

logger = logging.getLogger(__name__)


class GitJob(QThread):
    """
    Job-based execution strategy, for callers that can't drive a QProcess
    (no event loop on their thread) or when forced by the prefs.

    The command runs to completion on a worker thread. Its output is
    buffered, then handed back as a whole via a queued signal, so the
    callback runs on the thread this object lives on (the application
    thread; see ProcessRunner).
    """

    jobDone = Signal(int, str, str, bool)
    "Exit code, stdout, stderr, whether the process started at all"

    def __init__(self, tokens: Sequence[str], parent: QObject | None = None):
        super().__init__(parent)
        assert tokens, "empty command"

        self.setObjectName("GitJob")
        self.tokens = list(tokens)
        self._callback: ProcessCallback | None = None

        # Deliver the outcome on the application thread. Move before connecting,
        # so the connection targets the thread the job ends up living on.
        if not onAppThread():
            assert parent is None, "can't move a GitJob that has a parent"
            self.moveToThread(appThread())

        self.jobDone.connect(self._onJobDone, Qt.ConnectionType.QueuedConnection)

    def startWithCallback(self, callback: ProcessCallback):
        assert self._callback is None, "GitJob already started"
        self._callback = callback

        logger.info(f"Starting job: {self.formatCommandLine()}")
        self.start()

    def run(self):
        try:
            completed = subprocess.run(
                self.tokens,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                env=GitDriver.childEnvironment(),
                check=False)
        except OSError as exc:
            logger.warning(f"Couldn't start {self.tokens[0]}: {exc}")
            self.jobDone.emit(-1, "", "", False)
            return

        stdout = decodeOutput(completed.stdout)
        stderr = decodeOutput(completed.stderr)
        self.jobDone.emit(completed.returncode, stdout, stderr, True)

    @Slot(int, str, str, bool)
    def _onJobDone(self, exitCode: int, stdout: str, stderr: str, started: bool):
        # Let the worker thread wrap up
        self.wait()

        callback = self._callback
        assert callback is not None, "GitJob delivered twice"
        self._callback = None

        if not started:
            callback(None, ProcessSpawnFailure(self.tokens[0]))
            return

        logger.debug(f"Job {self.tokens[0]} exited with code {exitCode}")

        # subprocess reports death by signal N as -N; QProcess would call it a crash
        crashed = exitCode < 0

        try:
            result = GitDriver.checkOutcome(exitCode, stdout, stderr, crashed)
        except ProcessError as error:
            callback(None, error)
        else:
            callback(result, None)

    def formatCommandLine(self):
        return shlex.join(self.tokens)
