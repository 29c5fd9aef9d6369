"""
Tests for the log formatters.
"""

import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from turnario.core.logging_config import ColoredFormatter, JSONFormatter


def _record(msg: str = "Saved profile", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord("turnario.core.storage", level, __file__, 42, msg, None, None)


def test_json_formatter_outputs_fields():
    record = _record()
    record.extra_fields = {"request_id": "abc", "status_code": 200}

    data = json.loads(JSONFormatter().format(record))

    assert data["level"] == "INFO"
    assert data["logger"] == "turnario.core.storage"
    assert data["message"] == "Saved profile"
    assert data["request_id"] == "abc"
    assert data["timestamp"].endswith("Z")


def test_colored_formatter_leaves_record_untouched():
    record = _record(level=logging.WARNING)

    output = ColoredFormatter(fmt="%(levelname)s %(message)s").format(record)

    assert "\033[33m" in output
    assert record.levelname == "WARNING"
