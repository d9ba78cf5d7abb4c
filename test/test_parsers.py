# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import pytest

from blametip.errors import ParseFailure
from blametip.gitdriver import parseBlamePorcelain
from blametip.toolbox import HASH_40X0
from .util import *


def testParseCommittedLine():
    record = parseBlamePorcelain(makePorcelain())
    assert record.commitHash == HASH_A1B2
    assert record.author == "Jane Doe"
    assert record.authorEmail == "jane@example.com"
    assert record.authorTimeUnix == LOCAL_2024_01_15_1030
    assert record.commitMessage is None
    assert not record.isFinal()


def testParseUncommittedLine():
    record = parseBlamePorcelain(makePorcelain(
        commitHash=HASH_40X0, author="Not Committed Yet", email="not.committed.yet"))
    assert record.commitHash is None
    assert not record.isCommitted
    assert record.commitMessage is None
    assert record.isFinal()


def testParseUncommittedLineWithoutFields():
    record = parseBlamePorcelain(f"{HASH_40X0} 1 1 1\n\tnew line\n")
    assert record.commitHash is None
    assert record.isFinal()


def testParseTrimsValues():
    raw = makePorcelain(author="  Jane Doe   ", email=" jane@example.com ")
    record = parseBlamePorcelain(raw)
    assert record.author == "Jane Doe"
    assert record.authorEmail == "jane@example.com"


def testParseEmptyEmail():
    record = parseBlamePorcelain(makePorcelain(email=""))
    assert record.authorEmail == ""


def testParseNonAsciiAuthor():
    record = parseBlamePorcelain(makePorcelain(author="Jöhn 李"))
    assert record.author == "Jöhn 李"


@pytest.mark.parametrize(["omit", "field"], [
    ("author", "author"),
    ("author-mail", "author email"),
    ("author-time", "author time"),
])
def testParseMissingField(omit, field):
    with pytest.raises(ParseFailure) as excInfo:
        parseBlamePorcelain(makePorcelain(omit=[omit]))
    assert excInfo.value.field == field
    assert str(excInfo.value) == f"Error parsing blame {field}"


@pytest.mark.parametrize("raw", ["", "garbage\n", "\tcontent only\n"])
def testParseMissingHash(raw):
    with pytest.raises(ParseFailure) as excInfo:
        parseBlamePorcelain(raw)
    assert excInfo.value.field == "commit hash"


def testParseIgnoresLineContent():
    # The content of the blamed line must never be mistaken for a header field
    raw = makePorcelain(omit=["author"], content="author Mallory")
    with pytest.raises(ParseFailure) as excInfo:
        parseBlamePorcelain(raw)
    assert excInfo.value.field == "author"


def testParseCommitterIsNotAuthor():
    raw = makePorcelain().replace("author-time", "committer-time-but-not-author", 1)
    with pytest.raises(ParseFailure) as excInfo:
        parseBlamePorcelain(raw)
    assert excInfo.value.field == "author time"
