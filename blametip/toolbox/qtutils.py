# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from blametip.qt import *


def onAppThread():
    appInstance = QCoreApplication.instance()
    return bool(appInstance and appInstance.thread() is QThread.currentThread())


def appThread() -> QThread:
    appInstance = QCoreApplication.instance()
    assert appInstance is not None, "a QCoreApplication must exist"
    return appInstance.thread()


def callLater(callback, *args):
    """ Run `callback` on the next event loop iteration of the calling thread. """
    QTimer.singleShot(0, lambda: callback(*args))
