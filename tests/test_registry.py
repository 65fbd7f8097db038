"""Tests for the method registry."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock

import pytest

from jsonrpc_remote.registry import MethodRegistry


def test_register_and_lookup() -> None:
    """A registered handler should be returned by name."""
    registry = MethodRegistry()
    handler = AsyncMock()
    registry.register("player_play", handler)
    assert registry.lookup("player_play") is handler
    assert "player_play" in registry
    assert len(registry) == 1


def test_lookup_unknown() -> None:
    """Unknown names should return None."""
    assert MethodRegistry().lookup("player_play") is None


def test_names_keep_registration_order() -> None:
    """names() and iteration should follow registration order."""
    registry = MethodRegistry()
    for name in ("b", "a", "c"):
        registry.register(name, AsyncMock())
    assert registry.names() == ["b", "a", "c"]
    assert list(registry) == ["b", "a", "c"]


def test_duplicate_replaces_handler(caplog: pytest.LogCaptureFixture) -> None:
    """Registering a name twice should keep the last handler and warn."""
    registry = MethodRegistry()
    first, second = AsyncMock(), AsyncMock()
    registry.register("player_play", first)
    with caplog.at_level(logging.WARNING):
        registry.register("player_play", second)
    assert registry.lookup("player_play") is second
    assert len(registry) == 1
    assert "registered twice" in caplog.text


def test_frozen_registry_rejects_registration() -> None:
    """No handler can be added once frozen."""
    registry = MethodRegistry()
    registry.register("player_play", AsyncMock())
    registry.freeze()
    assert registry.frozen
    with pytest.raises(RuntimeError):
        registry.register("player_stop", AsyncMock())
    assert registry.names() == ["player_play"]


def test_freeze_is_idempotent() -> None:
    """freeze() twice should keep the contents."""
    registry = MethodRegistry()
    handler = AsyncMock()
    registry.register("player_play", handler)
    registry.freeze()
    registry.freeze()
    assert registry.lookup("player_play") is handler
