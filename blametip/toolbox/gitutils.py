# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging
import os

import pygit2

from blametip.errors import NotARepository

logger = logging.getLogger(__name__)

HASH_40X0 = "0" * 40


def id8(hexHash: str) -> str:
    """ Abbreviated commit hash, as shown in the tip's header. Shorter input is returned as is. """
    return hexHash[:8]


def isUncommittedHash(hexHash: str | None) -> bool:
    return not hexHash or hexHash == HASH_40X0


def locateRepoRoot(path: str) -> str:
    """
    Find the working directory of the repository containing `path` by
    walking up towards the root of the filesystem.

    Raise NotARepository if there's no repository, or if the repository
    is bare (there's nothing to blame without a working directory).
    """
    gitDir = pygit2.discover_repository(path)

    if not gitDir:
        raise NotARepository(path)

    gitDir = os.path.normpath(gitDir)

    if os.path.basename(gitDir) == ".git":
        # Common case: skip opening the repository
        return os.path.dirname(gitDir)

    # Worktrees, separate git dirs, etc.
    repo = pygit2.Repository(gitDir)
    if repo.is_bare or not repo.workdir:
        raise NotARepository(path)
    return os.path.normpath(repo.workdir)
