# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of BlameTip, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import enum
import logging
import os
from collections.abc import Mapping

from blametip.toolbox.benchmark import BENCHMARK_LOGGING_LEVEL

logger = logging.getLogger(__name__)


class LoggingLevel(enum.IntEnum):
    Benchmark = BENCHMARK_LOGGING_LEVEL
    Debug = logging.DEBUG
    Info = logging.INFO
    Warning = logging.WARNING
    Error = logging.ERROR


@dataclasses.dataclass
class Prefs:
    """
    Runtime preferences. BlameTip has no config file: each field can be
    overridden by the environment variable listed in `_environmentKeys`.
    """

    gitPath                     : str                   = "git"
    forceJobStrategy            : bool                  = False
    logLevel                    : LoggingLevel          = LoggingLevel.Warning
    translationsPath            : str                   = ""

    _environmentKeys = {
        "gitPath": "BLAMETIP_GIT",
        "forceJobStrategy": "BLAMETIP_FORCE_JOBS",
        "logLevel": "BLAMETIP_LOG_LEVEL",
        "translationsPath": "BLAMETIP_TRANSLATIONS",
    }

    @classmethod
    def fromEnvironment(cls, environ: Mapping[str, str] | None = None):
        if environ is None:
            environ = os.environ

        prefs = cls()

        for field in dataclasses.fields(cls):
            try:
                raw = environ[cls._environmentKeys[field.name]]
            except KeyError:
                continue

            defaultValue = getattr(prefs, field.name)
            try:
                value = cls._coerce(raw, type(defaultValue))
            except (KeyError, ValueError):
                logger.warning(f"Ignoring bad value for {cls._environmentKeys[field.name]}: {raw!r}")
                continue
            setattr(prefs, field.name, value)

        return prefs

    @staticmethod
    def _coerce(raw: str, fieldType: type):
        if fieldType is bool:
            return raw.strip().lower() not in ["", "0", "false", "no", "off"]
        elif issubclass(fieldType, enum.IntEnum):
            raw = raw.strip()
            if raw.lstrip("-").isdigit():
                return fieldType(int(raw))
            return fieldType[raw.capitalize()]
        else:
            return fieldType(raw)


prefs = Prefs.fromEnvironment()


def applyPrefs():
    """ Push the current prefs into the components that read them. """
    from blametip.gitdriver import GitDriver
    from blametip.localization import installGettextTranslator

    GitDriver.setGitPath(prefs.gitPath)
    installGettextTranslator(prefs.translationsPath)
