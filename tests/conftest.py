"""Pytest configuration for all tests."""

import logging
import sys
from pathlib import Path

import pytest

# Make the package importable without installing it
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers bound to streams from earlier tests."""
    yield
    logger = logging.getLogger("txt2html")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
