# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import re

from blametip.blame.blamerecord import BlameRecord
from blametip.errors import ParseFailure
from blametip.toolbox import isUncommittedHash

# <hash> <orig line> <final line> [<num lines>]
# author <name>
# author-mail <<email>>
# author-time <timestamp>
# author-tz <offset>
# committer ...
# summary ...
# filename <path>
# \t<line contents>
_blameHashPattern = re.compile(r"^([\da-fA-F]+)")
_blameAuthorPattern = re.compile(r"^author[ \t]+(.*)$", re.M)
_blameAuthorMailPattern = re.compile(r"^author-mail[ \t]+<([^>\n]*)>", re.M)
_blameAuthorTimePattern = re.compile(r"^author-time[ \t]+(\d+)", re.M)


def parseBlamePorcelain(raw: str) -> BlameRecord:
    """
    Parse the output of "git blame --porcelain" for a single line.

    Returns a partial BlameRecord (commitMessage isn't filled in).
    Lines that are only in the working tree come back with commitHash=None;
    their author fields are filled in on a best-effort basis.

    Raises ParseFailure naming the first required field that's missing.
    """

    hashMatch = _blameHashPattern.match(raw)
    if not hashMatch:
        raise ParseFailure("commit hash")
    commitHash = hashMatch.group(1).strip()

    # Only look at the header. The line's contents come after a tab
    # and could look like anything.
    header, _dummy, _contents = raw.partition("\n\t")

    authorMatch = _blameAuthorPattern.search(header)
    mailMatch = _blameAuthorMailPattern.search(header)
    timeMatch = _blameAuthorTimePattern.search(header)

    author = authorMatch.group(1).strip() if authorMatch else ""
    authorEmail = mailMatch.group(1).strip() if mailMatch else None
    authorTime = timeMatch.group(1) if timeMatch else None

    if isUncommittedHash(commitHash):
        return BlameRecord(
            author=author,
            authorEmail=authorEmail or "",
            commitHash=None,
            authorTimeUnix=int(authorTime or 0))

    if not author:
        raise ParseFailure("author")
    if authorEmail is None:
        raise ParseFailure("author email")
    if authorTime is None:
        raise ParseFailure("author time")

    return BlameRecord(
        author=author,
        authorEmail=authorEmail,
        commitHash=commitHash,
        authorTimeUnix=int(authorTime))
