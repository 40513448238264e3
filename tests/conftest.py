"""Shared fixtures for the menukit test suite.

Every test runs with configuration isolated from the user's files and
environment, and with a RecordingRenderer installed as the default so no
escape codes reach the terminal.
"""
import os

import pytest

from menukit.config import configure, get_config
from menukit.render import RecordingRenderer, set_renderer
from menukit.utils import set_output_fd

_ENV_VARS = (
    "MENUKIT_PAGE_SIZE",
    "MENUKIT_RESULT_HEIGHT",
    "MENUKIT_WIDTH",
    "MENUKIT_MOUSE",
    "MENUKIT_ESCAPE_TIMEOUT_MS",
    "XDG_CONFIG_HOME",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point both config files at paths that do not exist."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MENUKIT_CONFIG", str(tmp_path / "missing-global.toml"))
    monkeypatch.setenv("MENUKIT_APP_CONFIG", str(tmp_path / "missing-app.toml"))
    configure()
    yield
    get_config.cache_clear()


@pytest.fixture(autouse=True)
def recorder():
    """RecordingRenderer installed as the process-wide default."""
    rec = RecordingRenderer()
    set_renderer(rec)
    yield rec
    set_renderer(None)


@pytest.fixture
def devnull_output():
    """Send raw terminal output to /dev/null."""
    fd = os.open(os.devnull, os.O_WRONLY)
    set_output_fd(fd)
    yield fd
    set_output_fd(None)
    os.close(fd)

