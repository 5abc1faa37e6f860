import json
import logging

import pytest

from undercroft import logging_utils
from undercroft.logging_utils import get_logger, set_level


def test_key_value_line(capsys):
    get_logger("undercroft.test").info(event="hello world", rooms=3, skipped=None)
    line = capsys.readouterr().out.strip()
    assert line.startswith("level=info ts=")
    assert "event=hello_world" in line
    assert "rooms=3" in line
    assert "logger=undercroft.test" in line
    assert "skipped" not in line


def test_level_threshold(capsys):
    log = get_logger("undercroft.test")
    set_level("warn")
    log.info(event="quiet")
    log.warn(event="loud")
    out = capsys.readouterr().out
    assert "quiet" not in out
    assert "event=loud" in out


def test_errors_go_to_stderr(capsys):
    get_logger("undercroft.test").error(event="boom")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "level=error" in captured.err


def test_json_mode(capsys, monkeypatch):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    get_logger("undercroft.test").info(event="dungeon_generated", seed=4, extra=None)
    rec = json.loads(capsys.readouterr().out)
    assert rec["event"] == "dungeon_generated"
    assert rec["seed"] == 4
    assert rec["level"] == "info"
    assert "extra" not in rec


def test_unknown_level_rejected():
    with pytest.raises(ValueError):
        set_level("loud")


def test_loggers_are_cached():
    assert get_logger("undercroft.test") is get_logger("undercroft.test")


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


def test_lines_mirror_to_stdlib_handlers(capsys):
    root = logging.getLogger("undercroft")
    handler = _ListHandler()
    old_level = root.level
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    try:
        get_logger("undercroft.test").info(event="mirrored")
    finally:
        root.removeHandler(handler)
        root.setLevel(old_level)
    assert any("event=mirrored" in m for m in handler.messages)
    assert "event=mirrored" in capsys.readouterr().out


def test_configure_from_env_rereads_settings():
    logging_utils.configure_from_env({"UNDERCROFT_LOG_LEVEL": "error", "UNDERCROFT_LOG_JSON": "yes"})
    assert logging_utils.CURRENT_LEVEL == logging_utils.LEVELS["error"]
    assert logging_utils.JSON_MODE is True
    logging_utils.configure_from_env({})
    assert logging_utils.CURRENT_LEVEL == logging_utils.LEVELS["info"]
    assert logging_utils.JSON_MODE is False
