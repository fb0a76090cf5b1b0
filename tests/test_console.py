# tests/test_console.py

from __future__ import annotations

import logging

import pytest

import taskclient.__main__ as console
from taskmanager.core.logging_setup import setup_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    before, level = set(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        if handler not in before:
            root.removeHandler(handler)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_installs_one_handler(restore_root_logger: logging.Logger) -> None:
    setup_logging("warning")
    setup_logging("debug")

    assert len(restore_root_logger.handlers) == 1
    assert restore_root_logger.level == logging.DEBUG


@pytest.mark.asyncio
async def test_console_entry_point_uses_shared_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    levels: list[str] = []
    boards: list[object] = []

    async def fake_run_console(board) -> None:
        boards.append(board)

    monkeypatch.setattr(console, "setup_logging", levels.append)
    monkeypatch.setattr(console, "run_console", fake_run_console)

    await console.main()

    assert levels == [console.LOG_LEVEL]
    assert len(boards) == 1
