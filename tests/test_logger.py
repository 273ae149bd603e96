import json
import logging
import os
import time

import pytest

from copyholder.config import AppSettings
from copyholder.logger import (
    LOGGER_NAME,
    _archive_daily_log_file,
    _manage_logfile_archives,
    setup_logging,
)


@pytest.fixture
def reset_package_logger():
    """Undo setup_logging so other tests see default propagation."""
    yield
    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


def test_setup_logging_writes_json_lines(tmp_path, reset_package_logger):
    settings = AppSettings(app_root=tmp_path, log_level="info")
    logger = setup_logging(settings, console=False)
    logger.getChild("HistoryEngine").info("Captured new clipboard entry (%d chars).", 5)
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "logs" / "copyholder.jsonl").read_text().splitlines()
    record = json.loads(lines[-1])
    assert record["levelname"] == "INFO"
    assert record["name"] == "copyholder.HistoryEngine"
    assert record["message"] == "Captured new clipboard entry (5 chars)."


def test_archive_renames_existing_log(tmp_path):
    log_file = tmp_path / "copyholder.jsonl"
    log_file.write_text("{}\n")
    archive = _archive_daily_log_file(log_file)
    assert archive is not None and archive.exists()
    assert not log_file.exists()


def test_archive_skipped_when_recent_archive_exists(tmp_path):
    log_file = tmp_path / "copyholder.jsonl"
    log_file.write_text("{}\n")
    assert _archive_daily_log_file(log_file) is not None
    log_file.write_text("{}\n")
    assert _archive_daily_log_file(log_file) is None
    assert log_file.exists()


def test_manage_archives_keeps_most_recent(tmp_path):
    log_file = tmp_path / "copyholder.jsonl"
    now = time.time()
    for day in range(12):
        archive = tmp_path / f"copyholder_202501{day + 1:02d}_000000.jsonl"
        archive.write_text("{}\n")
        os.utime(archive, (now - day * 86400, now - day * 86400))

    assert _manage_logfile_archives(log_file, days_to_keep=10) == 2
    remaining = sorted(p.name for p in tmp_path.glob("copyholder_*.jsonl"))
    assert len(remaining) == 10
    assert "copyholder_20250101_000000.jsonl" in remaining
    assert "copyholder_20250112_000000.jsonl" not in remaining
