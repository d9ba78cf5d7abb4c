# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import os
import shlex
import signal
from collections.abc import Callable, Sequence

from blametip.errors import ProcessError, ProcessNonZeroExit, ProcessSpawnFailure
from blametip.localization import *
from blametip.qt import *
from blametip.toolbox import callLater

logger = logging.getLogger(__name__)

ProcessCallback = Callable[[str | None, ProcessError | None], None]


def decodeOutput(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


class GitDriver(QProcess):
    """
    Structured execution strategy: a QProcess started with an argument vector.
    Stdout and stderr are captured separately; the outcome is judged from
    the numeric exit status.

    A GitDriver must be started from a thread that runs an event loop
    (in practice, the application thread).
    """

    _commandStem = ["git"]

    _childEnvironment = {
        # Force Git output in English
        "LC_ALL": "C.UTF-8",
    }

    @classmethod
    def setGitPath(cls, gitPath: str):
        # Treat command as POSIX even on Windows!
        cls._commandStem = shlex.split(gitPath, posix=True) or ["git"]

    @classmethod
    def makeCommand(cls, *args: str) -> list[str]:
        return cls._commandStem + list(args)

    @classmethod
    def childEnvironment(cls) -> dict[str, str]:
        return dict(os.environ) | cls._childEnvironment

    @classmethod
    def checkOutcome(cls, exitCode: int, stdout: str, stderr: str, crashed: bool = False) -> str:
        """
        Return trimmed stdout if the process exited cleanly.
        Otherwise, raise ProcessNonZeroExit carrying the most useful
        diagnostic we have: stderr, stdout, or a generic message.
        """
        if exitCode == 0 and not crashed:
            return stdout.strip()

        diagnostic = stderr.strip() or stdout.strip() or _("process error")
        raise ProcessNonZeroExit(diagnostic, exitCode)

    @classmethod
    def runSync(cls, tokens: Sequence[str]) -> str:
        """
        Run a command to completion, blocking the calling thread.
        Same outcome rules as the asynchronous path; raises instead of
        calling back.
        """
        process = cls(tokens)
        logger.info(f"runSync: {process.formatCommandLine()}")
        try:
            process.start()
            if not process.waitForStarted(-1):
                raise ProcessSpawnFailure(process.program())
            process.waitForFinished(-1)
            return process.readOutcome()
        finally:
            process.deleteLater()

    def __init__(self, tokens: Sequence[str], parent: QObject | None = None):
        super().__init__(parent)
        assert tokens, "empty command"

        self.setObjectName("GitDriver")
        self.setProgram(tokens[0])
        self.setArguments(list(tokens[1:]))

        environment = QProcessEnvironment.systemEnvironment()
        for k, v in self._childEnvironment.items():
            environment.insert(k, v)
        self.setProcessEnvironment(environment)

        self._callback: ProcessCallback | None = None

    def startWithCallback(self, callback: ProcessCallback):
        assert self._callback is None, "GitDriver already started"
        self._callback = callback

        self.errorOccurred.connect(self._onErrorOccurred)
        self.finished.connect(self._onFinished)

        logger.info(f"Starting process: {self.formatCommandLine()}")
        self.start()

    def readOutcome(self) -> str:
        stdout = decodeOutput(self.readAllStandardOutput().data())
        stderr = decodeOutput(self.readAllStandardError().data())
        crashed = self.exitStatus() == QProcess.ExitStatus.CrashExit
        return self.checkOutcome(self.exitCode(), stdout, stderr, crashed)

    def _onErrorOccurred(self, error: QProcess.ProcessError):
        # Other errors (e.g. Crashed) are followed by finished(),
        # which reports the outcome.
        if error == QProcess.ProcessError.FailedToStart:
            logger.warning(f"Couldn't start {self.program()}: {self.errorString()}")
            self._deliver(None, ProcessSpawnFailure(self.program()))

    def _onFinished(self, exitCode: int, exitStatus: QProcess.ExitStatus):
        logger.debug(f"Process {self.program()} exited with code {self.formatExitCode()}")
        try:
            stdout = self.readOutcome()
        except ProcessError as error:
            self._deliver(None, error)
        else:
            self._deliver(stdout, None)

    def _deliver(self, stdout: str | None, error: ProcessError | None):
        callback = self._callback
        if callback is None:  # already delivered
            return
        self._callback = None

        # FailedToStart may be reported from within start().
        # Never call back before the caller has regained control.
        callLater(callback, stdout, error)

    def formatExitCode(self) -> str:
        code = self.exitCode()
        try:
            s = signal.Signals(code)
            return f"{code} ({s.name})"
        except ValueError:
            return f"{code}"

    def formatCommandLine(self):
        return shlex.join([self.program()] + self.arguments())
