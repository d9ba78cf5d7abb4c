# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging

logger = logging.getLogger(__name__)


class MessageCache:
    """
    Commit hash -> commit message, for the life of the host process.

    A commit's message can't change without changing its hash, so entries
    are never invalidated or evicted. Writing the same hash twice is harmless
    (last write wins, and the value is the same anyway).
    """

    def __init__(self):
        self._messages: dict[str, str] = {}

    def __contains__(self, commitHash: str):
        return commitHash in self._messages

    def __len__(self):
        return len(self._messages)

    def get(self, commitHash: str) -> str | None:
        return self._messages.get(commitHash, None)

    def put(self, commitHash: str, message: str):
        self._messages[commitHash] = message

    def clear(self):
        logger.debug(f"Dropping {len(self._messages)} cached commit messages")
        self._messages.clear()
