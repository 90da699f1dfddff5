"""Tests for the logging setup helpers."""

from __future__ import annotations

import json
import logging
import logging.handlers
from pathlib import Path

from laser_clock.utils import logging_config
from laser_clock.utils.logging_config import (
    ContextFormatter,
    pop_context,
    push_context,
    setup_logging,
)


def _record(msg: str = "hello %s", args: tuple = ("laser",)) -> logging.LogRecord:
    return logging.LogRecord("laser_clock.test", logging.INFO, __file__, 1, msg, args, None)


class TestContextFormatter:
    def test_human_format(self) -> None:
        line = ContextFormatter("human", use_color=False).format(_record())
        assert "| INFO     |" in line
        assert line.endswith("hello laser")

    def test_human_with_context(self) -> None:
        push_context(app="clock", device=0)
        line = ContextFormatter("human", use_color=False).format(_record())
        assert "app=clock device=0" in line

    def test_json_format(self) -> None:
        push_context(app="clock")
        data = json.loads(ContextFormatter("json").format(_record()))
        assert data["lvl"] == "INFO"
        assert data["msg"] == "hello laser"
        assert data["app"] == "clock"

    def test_pop_selected_keys(self) -> None:
        push_context(app="clock", frame=3)
        pop_context(["frame"])
        line = ContextFormatter("human", use_color=False).format(_record())
        assert "app=clock" in line
        assert "frame=" not in line


class TestSetupLogging:
    def test_idempotent(self) -> None:
        setup_logging("INFO", capture_warnings=False)
        setup_logging("DEBUG", capture_warnings=False)
        root = logging.getLogger()
        ours = [h for h in root.handlers if h in logging_config._handlers]
        assert len(ours) == 1
        assert root.level == logging.DEBUG

    def test_json_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "clock.log"
        handlers = setup_logging(
            "INFO",
            str(log_file),
            json=True,
            to_stderr=False,
            capture_warnings=False,
            context={"app": "clock"},
        )
        logging.getLogger("laser_clock.test").info("frame %d", 7)
        for handler in handlers:
            handler.flush()

        entry = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert entry["msg"] == "frame 7"
        assert entry["app"] == "clock"

    def test_size_rotation(self, tmp_path: Path) -> None:
        handlers = setup_logging(
            "INFO",
            str(tmp_path / "rot.log"),
            to_stderr=False,
            capture_warnings=False,
            rotate={"mode": "size", "max_bytes": 1000, "backup_count": 1},
        )
        assert isinstance(handlers[0], logging.handlers.RotatingFileHandler)
