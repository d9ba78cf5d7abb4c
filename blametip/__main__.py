# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Command-line host: print the blame tip for a line of a file.
"""

import argparse
import logging
import os
import signal
import sys
from typing import TextIO

from blametip import settings
from blametip.appconsts import APP_DISPLAY_NAME, APP_SYSTEM_NAME, APP_VERSION
from blametip.blame import BlameQuery, FormattedContent, MessageCache
from blametip.qt import *
from blametip.settings import LoggingLevel
from blametip.tasks import showBlameTip, showBlameTipSync

logger = logging.getLogger(__name__)


class ConsolePresenter:
    """ Writes the tip to stdout, or the error to stderr. """

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None, showMetrics=False):
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.showMetrics = showMetrics
        self.exitCode: int | None = None
        self.whenDone = lambda: None

    def showContent(self, content: FormattedContent):
        for line in content.lines:
            print(line, file=self.out)
        if self.showMetrics:
            print(f"labelEnd={content.labelEnd} timeBegin={content.timeBegin} maxWidth={content.maxWidth}",
                  file=self.out)
        self._done(0)

    def notifyError(self, message: str):
        print(f"blametip: {message}", file=self.err)
        self._done(1)

    def _done(self, exitCode: int):
        assert self.exitCode is None, "presenter used twice"
        self.exitCode = exitCode
        self.whenDone()


def makeArgumentParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blametip", description=f"{APP_DISPLAY_NAME}: show who last touched a line of a file, and why.")
    parser.add_argument("path", help="File path")
    parser.add_argument("line", type=int, help="Line number (starting at 1)")
    parser.add_argument("-C", "--cwd", default="", metavar="DIR",
                        help="Look for the repository from this directory (default: current directory)")
    parser.add_argument("-s", "--sync", action="store_true", help="Block on each git call (legacy synchronous path)")
    parser.add_argument("-j", "--jobs", action="store_true", help="Run git on worker threads instead of QProcess")
    parser.add_argument("--git", default="", metavar="COMMAND", help="Git command (default: $BLAMETIP_GIT or git)")
    parser.add_argument("-m", "--metrics", action="store_true", help="Print layout metrics after the tip")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION} ({QT_BINDING} {QT_BINDING_VERSION})")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = makeArgumentParser().parse_args(argv)

    prefs = settings.prefs
    if args.verbose:
        prefs.logLevel = LoggingLevel.Debug
    if args.git:
        prefs.gitPath = args.git
    if args.jobs:
        prefs.forceJobStrategy = True

    logging.basicConfig(
        stream=sys.stderr,
        level=prefs.logLevel,
        format='%(levelname).1s %(asctime)s %(filename)-16s | %(message)s',
        datefmt="%H:%M:%S")
    logging.captureWarnings(True)

    settings.applyPrefs()

    # Relative paths are relative to --cwd, like git -C
    workingDirectory = os.path.abspath(args.cwd or os.getcwd())
    filePath = os.path.join(workingDirectory, args.path) if args.path else ""

    try:
        query = BlameQuery(filePath, args.line, workingDirectory)
    except ValueError as exc:
        print(f"blametip: {exc}", file=sys.stderr)
        return 2

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv[:1])
        app.setApplicationName(APP_SYSTEM_NAME)
        app.setApplicationVersion(APP_VERSION)
    presenter = ConsolePresenter(showMetrics=args.metrics)
    cache = MessageCache()

    if args.sync:
        showBlameTipSync(query, presenter, cache)
        return presenter.exitCode

    loop = QEventLoop(app)
    presenter.whenDone = loop.quit

    # Bail out of the event loop on Ctrl+C
    def onSigint(*_dummy):
        QTimer.singleShot(0, lambda: loop.exit(130))
    previousSigint = signal.signal(signal.SIGINT, onSigint)

    # Force Python interpreter to run every now and then so it can run the Ctrl+C signal handler
    wakeUpTimer = QTimer(loop)
    wakeUpTimer.timeout.connect(lambda: None)
    wakeUpTimer.start(300)

    try:
        showBlameTip(query, presenter, cache)
        interrupted = loop.exec()
    finally:
        signal.signal(signal.SIGINT, previousSigint)

    if presenter.exitCode is None:
        logger.warning("Interrupted")
        return interrupted
    return presenter.exitCode


if __name__ == "__main__":
    sys.exit(main())
