# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Protocol

from blametip.blame import BlameQuery, BlameRecord, FormattedContent, MessageCache, formatContent
from blametip.errors import BlameTipError
from blametip.gitdriver import ProcessRunner
from blametip.localization import *
from blametip.tasks.commitinfo import resolveCommitInfo, resolveCommitInfoSync
from blametip.tasks.flow import FlowRunner

logger = logging.getLogger(__name__)


class BlameTipPresenter(Protocol):
    """
    Whatever puts the tip on screen. Positioning, styling and dismissal
    are entirely up to the presenter.
    """

    def showContent(self, content: FormattedContent):
        ...

    def notifyError(self, message: str):
        ...


def errorText(error: Exception) -> str:
    if isinstance(error, BlameTipError):
        return str(error)
    return _("Unexpected error: {0}", f"{type(error).__name__}: {error}")


def _present(presenter: BlameTipPresenter, record: BlameRecord | None, error: Exception | None):
    if error is not None:
        logger.info(f"Blame tip not shown: {error}")
        presenter.notifyError(errorText(error))
        return

    presenter.showContent(formatContent(record))


def showBlameTip(
        query: BlameQuery,
        presenter: BlameTipPresenter,
        cache: MessageCache,
        processRunner: ProcessRunner | None = None,
) -> FlowRunner:
    """
    Resolve the line in the background, then either show the tip or
    report the error (once; no tip is shown on error).
    """
    return resolveCommitInfo(
        query, lambda record, error: _present(presenter, record, error), cache, processRunner)


def showBlameTipSync(
        query: BlameQuery,
        presenter: BlameTipPresenter,
        cache: MessageCache,
        processRunner: ProcessRunner | None = None,
):
    """ Same as showBlameTip, but blocks until the tip is shown or the error is reported. """
    try:
        record = resolveCommitInfoSync(query, cache, processRunner)
    except BlameTipError as error:
        _present(presenter, None, error)
    except Exception as error:
        logger.exception("Unexpected exception while resolving blame tip")
        _present(presenter, None, error)
    else:
        _present(presenter, record, None)
