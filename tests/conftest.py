"""
Shared fixtures for ChainLog tests
"""
import logging

import pytest

from chainlog.config import reset_config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user and working-directory config files out of every test"""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo setup_logging() calls made by the code under test"""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    component_levels = {
        name: logging.getLogger(name).level
        for name in ("chainlog.unification", "chainlog.matching")
    }
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, component_level in component_levels.items():
        logging.getLogger(name).setLevel(component_level)
