# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from blametip.tasks.flow import FlowControlToken, FlowRunner, FlowTask, runFlowSync
from blametip.tasks.commitinfo import CommitInfoTask, resolveCommitInfo, resolveCommitInfoSync
from blametip.tasks.showblametip import BlameTipPresenter, showBlameTip, showBlameTipSync
