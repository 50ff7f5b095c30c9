"""Shared pytest fixtures for ulidkit tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

import pytest

from ulidkit.settings import reload_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Run every test without ULIDKIT_* variables or a stray ``.env`` file."""

    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.upper().startswith("ULIDKIT_"):
            monkeypatch.delenv(name, raising=False)
    reload_settings()
    yield


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """Undo handler/level changes made by ``setup_logging`` during a test."""

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    flag = getattr(root, "_ulidkit_configured", None)
    yield
    root.handlers = handlers
    root.setLevel(level)
    if flag is None:
        if hasattr(root, "_ulidkit_configured"):
            delattr(root, "_ulidkit_configured")
    else:
        root._ulidkit_configured = flag


@pytest.fixture
def little_endian_bytes() -> bytes:
    """Raw native bytes 0x01..0x10."""

    return bytes(range(1, 17))
