from __future__ import annotations

import io
import logging
from pathlib import Path

from resale_dashboard.logging_config import configure_logging


def test_configure_logging_adds_stream_handler() -> None:
    # Ensure configuring logging doesn't raise and attaches a StreamHandler
    configure_logging(None)
    root = logging.getLogger()
    assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)


def test_configure_logging_writes_to_file_and_stream(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "dashboard.log"
    buf = io.StringIO()
    configure_logging(log_file, stream=buf)

    logging.getLogger("resale_dashboard.test").info("snapshot loaded")
    for h in logging.getLogger().handlers:
        h.flush()

    assert "| INFO | resale_dashboard.test | snapshot loaded" in buf.getvalue()
    assert "snapshot loaded" in log_file.read_text(encoding="utf-8")
