"""Minimal structured logging helper.

Emits key=value pairs with a timestamp and level so generation runs can be
grepped or parsed without configuring the stdlib logging tree.

Usage:
    from undercroft.logging_utils import get_logger
    log = get_logger("undercroft.dungeon")
    log.info(event="dungeon_generated", seed=1, rooms=12)

All non-numeric values are str()'d with spaces replaced. Reserved keys: level, ts.
Set UNDERCROFT_LOG_JSON=1 for one JSON object per line.

When a stdlib logging handler is attached to the ``undercroft`` logger (the CLI
does this for ``--log-file``) every emitted line is mirrored there as well.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = 20
JSON_MODE = False

_STDLIB_LEVELS = {"debug": logging.DEBUG, "info": logging.INFO, "warn": logging.WARNING, "error": logging.ERROR}


def set_level(name: str) -> None:
    """Change the emit threshold at runtime (``debug``, ``info``, ``warn``, ``error``)."""
    global CURRENT_LEVEL
    if name not in LEVELS:
        raise ValueError(f"unknown log level: {name!r}")
    CURRENT_LEVEL = LEVELS[name]


def configure_from_env(environ=None) -> None:
    """(Re)read UNDERCROFT_LOG_LEVEL and UNDERCROFT_LOG_JSON; the CLI calls this after loading .env."""
    global CURRENT_LEVEL, JSON_MODE
    env = os.environ if environ is None else environ
    CURRENT_LEVEL = LEVELS.get(env.get("UNDERCROFT_LOG_LEVEL", "info"), 20)
    JSON_MODE = env.get("UNDERCROFT_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")


def _format(level: str, **fields):
    if JSON_MODE:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        try:
            return json.dumps(rec, separators=(",", ":"), default=str)
        except (TypeError, ValueError):
            return json.dumps({"level": level, "ts": int(time.time()), "error": "json_encode_failed"})
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "undercroft"
        self._mirror = logging.getLogger(self.name)

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        if "logger" not in fields:
            fields["logger"] = self.name
        line = _format(lvl, **fields)
        print(line, file=sys.stdout if lvl != "error" else sys.stderr)
        if logging.getLogger("undercroft").handlers:
            self._mirror.log(_STDLIB_LEVELS[lvl], line)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


configure_from_env()

log = get_logger("undercroft")
