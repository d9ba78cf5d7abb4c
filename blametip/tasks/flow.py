# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Generator, Sequence
from typing import Any

from blametip.errors import BlameTipError, ProcessError
from blametip.gitdriver import GitDriver, ProcessRunner
from blametip.qt import *
from blametip.toolbox import Benchmark, appThread, onAppThread

logger = logging.getLogger(__name__)


class FlowControlToken:
    """
    Object that can be yielded from `FlowTask.flow()` to control the flow of the coroutine.
    """

    class Kind(enum.IntEnum):
        WaitProcessReady = enum.auto()

    flowControl: Kind
    command: list[str]

    def __init__(self, flowControl: Kind = Kind.WaitProcessReady, command: Sequence[str] = ()):
        self.flowControl = flowControl
        self.command = list(command)

    def __str__(self):
        return F"FlowControlToken({self.flowControl.name})"


FlowGeneratorType = Generator[FlowControlToken, str, Any]

FlowCallback = Callable[[Any, Exception | None], None]


class FlowTask:
    """
    A task whose work is expressed as a coroutine (see flow()).

    The same coroutine can be driven asynchronously by a FlowRunner, or
    synchronously by runFlowSync(). Either way, it's the driver that runs
    the external processes; the coroutine just asks for them.
    """

    def __str__(self):
        return self.__class__.__name__

    def flow(self) -> FlowGeneratorType:
        """
        Generator that performs the task. You can think of this as a coroutine.

        To run a git command, `yield from self.flowCallGit(...)`. This
        suspends the coroutine until the command completes, then evaluates
        to the command's trimmed stdout, or raises the command's ProcessError
        at that point in the coroutine.

        The value returned by the generator is the task's result.
        """
        # Dummy yield to make it a generator. You should override this function anyway!
        yield from self.flowCallGit("version")

    def flowCallGit(self, *args: str) -> Generator[FlowControlToken, str, str]:
        """
        This function is intended to be called by flow() with "yield from".
        """
        tokens = GitDriver.makeCommand(*args)
        stdout = yield FlowControlToken(FlowControlToken.Kind.WaitProcessReady, tokens)
        return stdout


class FlowRunner(QObject):
    """
    Drives a FlowTask's coroutine on the application thread, starting one
    process at a time, and reports the outcome through a single callback.

    The callback is invoked exactly once, on the application thread, and
    never before start() has returned.
    """

    kick = Signal()

    _running: set[FlowRunner] = set()
    "Keep runners alive until they've delivered, even if the caller drops them"

    def __init__(self, task: FlowTask, callback: FlowCallback, processRunner: ProcessRunner | None = None):
        super().__init__(None)
        self.setObjectName("FlowRunner")

        if not onAppThread():
            self.moveToThread(appThread())

        self.task = task
        self.callback = callback
        self.processRunner = processRunner or ProcessRunner()
        self._flow: FlowGeneratorType | None = None
        self._benchmark = Benchmark(str(task))

        self.kick.connect(self._continueFlow, Qt.ConnectionType.QueuedConnection)

    def isRunning(self) -> bool:
        return self._flow is not None

    def start(self):
        assert self._flow is None, "flow already started"
        assert self.callback is not None, "flow already finished"

        logger.debug(f">>> {self.task}")
        self._benchmark.enter()
        self._flow = self.task.flow()
        assert isinstance(self._flow, Generator), "flow() must contain at least one yield statement"
        FlowRunner._running.add(self)

        # Defer the first step to the application thread's event loop
        self.kick.emit()

    def _continueFlow(self, value: str | None = None, exception: Exception | None = None):
        assert onAppThread(), "_continueFlow must be called on UI thread"
        flow = self._flow
        assert flow is not None

        try:
            if exception is not None:
                token = flow.throw(exception)
            else:
                token = flow.send(value)
        except StopIteration as stop:
            self._finish(stop.value, None)
            return
        except BlameTipError as error:
            self._finish(None, error)
            return
        except Exception as error:
            logger.exception(f"Unexpected exception in {self.task}")
            self._finish(None, error)
            return

        assert isinstance(token, FlowControlToken), \
            f"In a FlowTask coroutine, you can only yield FlowControlToken. You yielded: {type(token).__name__}"
        assert token.flowControl == FlowControlToken.Kind.WaitProcessReady
        self.processRunner.run(token.command, self._onProcessDone)

    def _onProcessDone(self, stdout: str | None, error: ProcessError | None):
        self._continueFlow(stdout, error)

    def _finish(self, result: Any, error: Exception | None):
        logger.debug(f"<<< {self.task}" + (f" ({type(error).__name__})" if error else ""))
        self._benchmark.exit(type(error) if error else None)

        callback = self.callback
        self.callback = None
        self._flow = None
        FlowRunner._running.discard(self)

        callback(result, error)


def runFlowSync(task: FlowTask, processRunner: ProcessRunner | None = None) -> Any:
    """
    Run a FlowTask's coroutine to completion, blocking the calling thread
    on each process. Returns the task's result or raises its error.
    """
    processRunner = processRunner or ProcessRunner()
    flow = task.flow()
    value: str | None = None
    exception: Exception | None = None

    with Benchmark(f"{task} (sync)"):
        while True:
            try:
                if exception is not None:
                    token = flow.throw(exception)
                else:
                    token = flow.send(value)
            except StopIteration as stop:
                return stop.value

            value, exception = None, None
            try:
                value = processRunner.runSync(token.command)
            except ProcessError as error:
                exception = error
