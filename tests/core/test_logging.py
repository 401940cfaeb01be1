"""Tests for folio.core.utils.logging."""

import os

import pytest
from loguru import logger

from folio.core.utils.logging import setup_logging


@pytest.fixture(autouse=True)
def _restore_loguru():
    yield
    logger.remove()
    setup_logging()


def test_console_level(capsys):
    setup_logging(level="info")
    logger.debug("hidden")
    logger.info("shown")
    err = capsys.readouterr().err
    assert "shown" in err
    assert "hidden" not in err


def test_log_file(tmp_dir):
    log_file = os.path.join(tmp_dir, "folio.log")
    setup_logging(level="DEBUG", log_file=log_file)
    logger.debug("to the file")
    logger.remove()
    with open(log_file) as f:
        assert "to the file" in f.read()
