"""
Copyright (c) 2020, The Decred developers
See LICENSE for details
"""

import configparser
import logging
from logging import Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys
from typing import Dict, Iterable, Optional, Union

from cashnode import CashnodeError


LogLevels = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class LogSettings:
    """
    Tracks the logging levels shared by every logger created with getLogger.
    """

    root = logging.getLogger("cashnode")
    defaultLevel = logging.INFO
    moduleLevels: Dict[str, int] = {}
    loggers: Dict[str, Logger] = {}


LogSettings.root.setLevel(logging.NOTSET)


def parseLogLevel(name: str) -> int:
    """
    Convert a level name from a config file or command line to a logging
    level.

    Args:
        name: One of debug, info, warning or error. Case-insensitive.

    Returns:
        The logging module's level constant.
    """
    try:
        return LogLevels[name.strip().lower()]
    except KeyError:
        raise CashnodeError(f"unknown log level {name!r}")


def prepareLogging(
    filepath: Union[Path, str, None] = None,
    logLvl: int = logging.INFO,
    lvlMap: Optional[Dict[str, int]] = None,
) -> None:
    """
    Set up handlers for the package loggers. Output always goes to stdout. If
    filepath is provided, a rotating log file is written too. Levels of
    loggers that already exist are updated along with the defaults used for
    new ones.

    Args:
        filepath: The base name for the rotating log file.
        logLvl: The default level for loggers without an entry in lvlMap.
        lvlMap: Logger name to level overrides, merged into the stored map.
    """
    LogSettings.defaultLevel = logLvl
    LogSettings.moduleLevels.update(lvlMap if lvlMap else {})
    for name, logger in LogSettings.loggers.items():
        logger.setLevel(LogSettings.moduleLevels.get(name, LogSettings.defaultLevel))

    formatter = logging.Formatter(
        "%(asctime)s %(module)s %(levelname)s %(funcName)s(%(lineno)d) %(message)s"
    )
    if filepath:
        fileHandler = RotatingFileHandler(
            filepath, mode="a", maxBytes=5 * 1024 * 1024, backupCount=2
        )
        fileHandler.setFormatter(formatter)
        LogSettings.root.addHandler(fileHandler)
    if not sys.executable.endswith("pythonw.exe"):
        printHandler = logging.StreamHandler()
        printHandler.setFormatter(formatter)
        LogSettings.root.addHandler(printHandler)


def getLogger(name: str) -> Logger:
    """
    Gets a named child of the package logger. A level registered for the name
    with prepareLogging is used, otherwise the default level.

    Args:
        name: The logger name.
    """
    l = LogSettings.root.getChild(name)
    l.setLevel(LogSettings.moduleLevels.get(name, LogSettings.defaultLevel))
    LogSettings.loggers[name] = l
    return l


def readINI(path: Union[Path, str], keys: Iterable[str]) -> Dict[str, str]:
    """
    Read the specified keys from an INI-formatted file. Every section is
    searched, and a file with no section header at all is accepted. Keys that
    are not found are absent from the result.

    Args:
        path: The path to the INI file.
        keys: Keys to search for.

    Returns:
        Discovered keys and values.
    """
    config = configparser.ConfigParser(strict=False)
    # configparser needs a header before any sectionless keys.
    with open(path) as f:
        config.read_string("[cashnode]\n" + f.read())
    keys = set(keys)
    res = {}
    for section in config.sections():
        for k in config[section]:
            if k in keys:
                res[k] = config[section][k]
    return res
