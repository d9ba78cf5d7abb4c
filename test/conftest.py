# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses
import logging
import os
import tempfile
from collections.abc import Generator

import pygit2
import pytest

from blametip import settings
from blametip.blame import MessageCache
from blametip.gitdriver import GitDriver, ProcessRunner
from blametip.qt import QCoreApplication


def setUpGitConfigSearchPaths(prefix=""):
    """
    Prevent unit tests from accessing the host system's git config files.
    This modifies libgit2 search paths and GIT_CONFIG environment variables
    for vanilla git.
    """
    ConfigLevel = pygit2.enums.ConfigLevel

    levels = [
        ConfigLevel.GLOBAL,
        ConfigLevel.XDG,
        ConfigLevel.SYSTEM,
        ConfigLevel.PROGRAMDATA,
    ]

    for level in levels:
        if prefix:
            path = f"{prefix}_{level.name}"
        else:
            path = ""
        pygit2.settings.search_path[level] = path

    # Vanilla git reads no config files other than the repo's own
    os.environ["GIT_CONFIG_NOSYSTEM"] = "1"
    os.environ["GIT_CONFIG_GLOBAL"] = os.devnull


@pytest.fixture(scope='session', autouse=True)
def maskHostGitConfig():
    setUpGitConfigSearchPaths("")


@pytest.fixture(scope='session', autouse=True)
def setUpLogging():
    rootLogger = logging.root
    rootLogger.setLevel(logging.DEBUG)

    yield

    # Chatty destructors may cause spam after pytest has wound down.
    # Work around https://github.com/pytest-dev/pytest/issues/5502
    for handler in rootLogger.handlers:
        rootLogger.removeHandler(handler)


@pytest.fixture(scope="session")
def qapp_args():
    mainPyPath = os.path.join(os.path.dirname(__file__), "..", "blametip", "__main__.py")
    mainPyPath = os.path.normpath(mainPyPath)
    return [mainPyPath]


@pytest.fixture(scope="session")
def qapp_cls():
    from blametip.appconsts import APP_TESTMODE
    assert APP_TESTMODE

    # No widgets anywhere in BlameTip
    yield QCoreApplication


@pytest.fixture(autouse=True)
def restorePrefs():
    """ Undo any changes a test makes to the prefs or to the git command. """
    savedPrefs = dataclasses.replace(settings.prefs)
    savedStem = list(GitDriver._commandStem)

    yield

    for field in dataclasses.fields(settings.Prefs):
        setattr(settings.prefs, field.name, getattr(savedPrefs, field.name))
    GitDriver._commandStem = savedStem


@pytest.fixture
def tempDir() -> Generator[tempfile.TemporaryDirectory, None, None]:
    location = os.environ.get("BLAMETIP_TEMPDIR", None)

    td = tempfile.TemporaryDirectory(prefix="blametiptest-", dir=location)
    yield td
    td.cleanup()


@pytest.fixture
def cache() -> MessageCache:
    return MessageCache()


@pytest.fixture(params=["structured", "jobs"])
def processRunner(request, qapp) -> ProcessRunner:
    """ Exercise both process strategies. """
    return ProcessRunner(forceJobStrategy=request.param == "jobs")


@pytest.fixture
def fakeGit(tempDir, qapp):
    from .util import FakeGit

    fake = FakeGit(tempDir.name)
    GitDriver.setGitPath(fake.gitPath)
    yield fake
