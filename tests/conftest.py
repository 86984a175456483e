"""Shared pytest fixtures."""

import logging
import sys

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI attaches so they don't outlive CliRunner's streams."""
    yield
    package_logger = logging.getLogger("sysprompt")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def non_utf8_tool(tmp_path):
    """An executable that prints a Latin-1 version line ("\\xfcbersetzer")."""
    if sys.platform == "win32":
        pytest.skip("needs a POSIX shell")
    tool = tmp_path / "fakecc"
    tool.write_bytes(b"#!/bin/sh\nprintf 'fakecc Version 1.0 \\374bersetzer\\n'\n")
    tool.chmod(0o755)
    return tool
