from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "installers" / "bootstrap"))

from devx_bootstrap.logging_setup import JsonFormatter, configure_logging


def test_json_formatter_includes_event() -> None:
    record = logging.LogRecord("devx", logging.WARNING, __file__, 1, "Postinstall failed: %s", ("boom",), None)
    record.event = "install_failed"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "devx"
    assert payload["msg"] == "Postinstall failed: boom"
    assert payload["event"] == "install_failed"
    assert "ts_utc" in payload


def test_configure_logging_writes_json_file(tmp_path, monkeypatch) -> None:
    logger = logging.getLogger("devx")
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "propagate", logger.propagate)
    monkeypatch.setattr(logger, "level", logger.level)

    log_file = tmp_path / "logs" / "install.jsonl"
    configured = configure_logging(log_file=log_file, console=False)
    assert configured is logger
    assert configure_logging(log_file=log_file, console=False) is logger
    assert len(logger.handlers) == 1

    logger.debug("downloaded", extra={"event": "download_complete"})
    for handler in logger.handlers:
        handler.flush()
        handler.close()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[-1])["event"] == "download_complete"
