"""Shared pytest fixtures."""

import logging
import os
from pathlib import Path

import pytest

from rewrap.services.settings import WrappingOptions
from rewrap.utils import logging as logging_utils

# Run Qt tests headless unless the environment already chose a platform.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(autouse=True)
def _isolated_log_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep log files out of the home directory and drop handlers between tests."""

    monkeypatch.setenv("REWRAP_LOG_DIR", str(tmp_path / "logs"))
    yield tmp_path / "logs"
    logging_utils.shutdown_logging()


@pytest.fixture
def options() -> WrappingOptions:
    return WrappingOptions(wrapping_column=20, tab_size=4)


@pytest.fixture
def rewrap_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    caplog.set_level(logging.DEBUG, logger="rewrap")
    return caplog
