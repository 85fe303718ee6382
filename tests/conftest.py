"""Shared fixtures: isolate process-wide state touched by ``init``."""

import logging
import sys

import pytest

from node_cli.services.runner import reset_process_state


@pytest.fixture(autouse=True)
def isolate_process_state(monkeypatch):
    """Restore logging, excepthook and the init guard around every test."""
    for var in ("NODE_CLI_CONFIG", "NODE_CLI_LOG", "NODE_CLI_BASE_PATH"):
        monkeypatch.delenv(var, raising=False)

    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    saved_hook = sys.excepthook
    reset_process_state()

    yield

    reset_process_state()
    sys.excepthook = saved_hook
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
