# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
What a blame tip is made of: the attribution of a line, the commit messages
seen so far, and the text that ends up on screen.
"""

from blametip.blame.blamerecord import BlameQuery, BlameRecord
from blametip.blame.formatter import FormattedContent, formatContent, notCommittedYetMarker
from blametip.blame.messagecache import MessageCache
