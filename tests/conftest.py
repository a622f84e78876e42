"""Shared fixtures for CT Intelligence tests."""

import json
import logging

import pytest

from .helpers import NOW


@pytest.fixture
def clock():
    """Fixed clock returning NOW in epoch seconds."""
    return lambda: NOW.timestamp()


@pytest.fixture
def data_dir(tmp_path):
    """Empty live scan directory."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def write_scan(data_dir):
    """Write a scan file; strings are written verbatim, anything else as JSON."""

    def _write(name, payload):
        path = data_dir / name
        text = payload if isinstance(payload, str) else json.dumps(payload)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def bundle_file(tmp_path):
    """Write a JSON array of scans as an archive bundle."""

    def _write(scans, name="scans-bundle.json"):
        path = tmp_path / name
        path.write_text(json.dumps(scans), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore the ct_intel logger after tests that call setup_logging."""
    logger = logging.getLogger("ct_intel")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
