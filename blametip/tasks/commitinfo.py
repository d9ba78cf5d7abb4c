# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import os
from collections.abc import Callable

from blametip.blame import BlameQuery, BlameRecord, MessageCache
from blametip.errors import CommitMessageFetchFailure, ProcessError
from blametip.gitdriver import ProcessRunner, parseBlamePorcelain
from blametip.tasks.flow import FlowGeneratorType, FlowRunner, FlowTask, runFlowSync
from blametip.toolbox import id8, locateRepoRoot

logger = logging.getLogger(__name__)

CommitInfoCallback = Callable[[BlameRecord | None, Exception | None], None]


class CommitInfoTask(FlowTask):
    """
    Find out who last touched a line, when, and why.

    Each step either succeeds or ends the task with its error, unmodified
    (except for commit message lookups, which report CommitMessageFetchFailure).
    Nothing is retried.
    """

    def __init__(self, query: BlameQuery, cache: MessageCache):
        self.query = query
        self.cache = cache

    def __str__(self):
        return f"CommitInfo({os.path.basename(self.query.filePath)}:{self.query.lineNumber})"

    def flow(self) -> FlowGeneratorType:
        query = self.query

        # Raises NotARepository before any process is spawned
        repoRoot = locateRepoRoot(query.workingDirectory or os.getcwd())

        lineRange = f"{query.lineNumber},{query.lineNumber}"
        blameOutput = yield from self.flowCallGit(
            "-C", repoRoot, "blame", "-L", lineRange, "--porcelain", "--", query.filePath)

        record = parseBlamePorcelain(blameOutput)

        # Nothing to look up for lines that only exist in the working tree
        if not record.isCommitted:
            return record

        commitHash = record.commitHash

        message = self.cache.get(commitHash)
        if message is not None:
            logger.debug(f"Commit message cache hit: {id8(commitHash)}")
            return record.withMessage(message)

        try:
            message = yield from self.flowCallGit(
                "-C", repoRoot, "show", "-s", "--format=%B", commitHash)
        except ProcessError as error:
            raise CommitMessageFetchFailure(str(error)) from error

        self.cache.put(commitHash, message)
        return record.withMessage(message)


def resolveCommitInfo(
        query: BlameQuery,
        callback: CommitInfoCallback,
        cache: MessageCache,
        processRunner: ProcessRunner | None = None,
) -> FlowRunner:
    """
    Resolve the attribution of a line without blocking the caller.

    `callback(record, error)` is called exactly once, on the application
    thread: either with a finalized BlameRecord and no error, or with no
    record and the error that ended the resolution.
    """
    def onFlowDone(record: BlameRecord | None, error: Exception | None):
        assert error is not None or record.isFinal(), "incomplete BlameRecord"
        callback(record, error)

    runner = FlowRunner(CommitInfoTask(query, cache), onFlowDone, processRunner)
    runner.start()
    return runner


def resolveCommitInfoSync(
        query: BlameQuery,
        cache: MessageCache,
        processRunner: ProcessRunner | None = None,
) -> BlameRecord:
    """
    Blocking variant of resolveCommitInfo: same steps, same errors.
    Returns the finalized BlameRecord or raises.
    """
    record = runFlowSync(CommitInfoTask(query, cache), processRunner)
    assert record.isFinal(), "incomplete BlameRecord"
    return record
