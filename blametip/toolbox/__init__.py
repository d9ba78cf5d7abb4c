# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from .benchmark import Benchmark, BENCHMARK_LOGGING_LEVEL
from .gitutils import HASH_40X0, id8, isUncommittedHash, locateRepoRoot
from .qtutils import onAppThread, appThread, callLater
from .textutils import displayWidth, maxDisplayWidth, firstNonBlankLine
