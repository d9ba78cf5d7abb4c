# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import datetime
import json
import os
import shlex
import shutil
import sys
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

import pygit2
import pytest

from blametip.blame import BlameQuery, BlameRecord, FormattedContent, MessageCache
from blametip.tasks import resolveCommitInfo, resolveCommitInfoSync
from . import *

TEST_SIGNATURE = pygit2.Signature("Test Person", "toto@example.com", 1672600000, 0)

# 2024-01-15 10:30 in the local timezone of the machine running the tests
LOCAL_2024_01_15_1030 = int(datetime.datetime(2024, 1, 15, 10, 30).timestamp())

HASH_A1B2 = "a1b2c3d4e5f6a7b8c9d0a1b2c3d4e5f6a7b8c9d0"

requiresGit = pytest.mark.skipif(
    not shutil.which("git"),
    reason="Requires git")

requiresPosix = pytest.mark.skipif(
    WINDOWS,
    reason="Requires POSIX signals")

_T = TypeVar("_T")


def getTestDataPath(name):
    path = Path(__file__).resolve().parent / "data"
    return str(path / name)


def waitUntilTrue(
        callback: Callable[[], _T],
        timeout: int = 10000
) -> _T:
    interval = 100
    assert timeout >= interval
    for _ in range(0, timeout, interval):
        result = callback()
        if result:
            return result
        QTest.qWait(interval)
    raise TimeoutError(f"retry failed after {timeout} ms timeout")


def makePorcelain(
        commitHash=HASH_A1B2,
        author="Jane Doe",
        email="jane@example.com",
        authorTime=LOCAL_2024_01_15_1030,
        content="hello world",
        omit=(),
) -> str:
    """ Blame output for a single line, as `git blame --porcelain` prints it. """
    fields = {
        "author": f"author {author}",
        "author-mail": f"author-mail <{email}>",
        "author-time": f"author-time {authorTime}",
        "author-tz": "author-tz +0000",
        "committer": f"committer {author}",
        "committer-mail": f"committer-mail <{email}>",
        "committer-time": f"committer-time {authorTime}",
        "committer-tz": "committer-tz +0000",
        "summary": "summary Fix bug",
        "filename": "filename hello.txt",
    }
    lines = [f"{commitHash} 3 3 1"]
    lines += [text for key, text in fields.items() if key not in omit]
    lines.append("\t" + content)
    return "\n".join(lines) + "\n"


class FakeGit:
    """
    Scriptable stand-in for the git executable (see data/fake-git.py).
    Tests declare replies per subcommand, then inspect the calls it received.
    """

    def __init__(self, tempDirPath: str):
        self.scriptDir = os.path.join(tempDirPath, "fake-git")
        os.makedirs(self.scriptDir)

        # The repo root is still located for real, so give the fake git a real repo to work in
        self.workdir = os.path.join(tempDirPath, "repo")
        pygit2.init_repository(self.workdir)

    @property
    def gitPath(self) -> str:
        return shlex.join([sys.executable, getTestDataPath("fake-git.py"), self.scriptDir])

    def reply(self, subcommand: str, stdout="", stderr="", exitCode=0):
        path = os.path.join(self.scriptDir, f"{subcommand}.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"stdout": stdout, "stderr": stderr, "exitCode": exitCode}, f)

    def calls(self) -> list[list[str]]:
        try:
            with open(os.path.join(self.scriptDir, "calls.log"), encoding="utf-8") as f:
                return [json.loads(line) for line in f]
        except FileNotFoundError:
            return []

    def callCount(self, subcommand: str) -> int:
        return sum(1 for args in self.calls() if subcommand in args)

    def query(self, lineNumber=3, fileName="hello.txt") -> BlameQuery:
        return BlameQuery(os.path.join(self.workdir, fileName), lineNumber, self.workdir)


def makeRepo(tempDir: tempfile.TemporaryDirectory | str, name="TestRepo") -> pygit2.Repository:
    tempDirPath = tempDir if isinstance(tempDir, str) else tempDir.name
    path = os.path.realpath(os.path.join(tempDirPath, name))
    return pygit2.init_repository(path)


def writeFile(path: str, text: str):
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)


def commitFile(repo: pygit2.Repository, name: str, text: str, message: str,
               signature: pygit2.Signature = TEST_SIGNATURE) -> str:
    writeFile(os.path.join(repo.workdir, name), text)
    repo.index.add(name)
    repo.index.write()
    tree = repo.index.write_tree()
    parents = [] if repo.head_is_unborn else [repo.head.target]
    oid = repo.create_commit("HEAD", signature, signature, message, tree, parents)
    return str(oid)


class RecordingPresenter:
    def __init__(self):
        self.contents: list[FormattedContent] = []
        self.errors: list[str] = []

    def showContent(self, content: FormattedContent):
        self.contents.append(content)

    def notifyError(self, message: str):
        self.errors.append(message)

    def deliveries(self) -> int:
        return len(self.contents) + len(self.errors)


def resolveAndWait(query: BlameQuery, cache: MessageCache, processRunner=None, sync=False):
    """
    Resolve a line and return (record, error).
    Asynchronously: wait for the callback and make sure it comes exactly once.
    """
    if sync:
        try:
            return resolveCommitInfoSync(query, cache, processRunner), None
        except Exception as error:
            return None, error

    results: list[tuple[BlameRecord | None, Exception | None]] = []
    resolveCommitInfo(query, lambda record, error: results.append((record, error)), cache, processRunner)
    assert not results, "callback must not be invoked before resolveCommitInfo returns"

    waitUntilTrue(lambda: results)
    QTest.qWait(50)
    assert len(results) == 1, "callback must be invoked exactly once"
    return results[0]
