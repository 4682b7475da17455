from __future__ import annotations

import io
import logging
from pathlib import Path

from scout_dashboard.logging_config import configure_logging


def test_configure_logging_adds_stream_handler() -> None:
    # Ensure configuring logging doesn't raise and attaches a StreamHandler
    configure_logging(None)
    root = logging.getLogger()
    assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)


def test_configure_logging_writes_to_stream_and_file(tmp_path: Path) -> None:
    stream = io.StringIO()
    log_path = tmp_path / "logs" / "dashboard.log"
    configure_logging(log_path, logging.INFO, stream=stream)

    logging.getLogger("scout_dashboard.test").info("report built")
    for h in logging.getLogger().handlers:
        h.flush()

    assert "| INFO | scout_dashboard.test | report built" in stream.getvalue()
    assert "report built" in log_path.read_text(encoding="utf-8")
    assert logging.getLogger("pymongo").level == logging.WARNING
