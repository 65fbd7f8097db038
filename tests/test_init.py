"""Tests for the plugin entry point."""

from __future__ import annotations

from unittest.mock import Mock

from conftest import FakeController

from jsonrpc_remote import JsonRpcRemote, setup


async def test_setup_returns_plugin(library_mock: Mock, controller: FakeController) -> None:
    """setup() should return a JsonRpcRemote instance."""
    result = await setup(library_mock, controller)
    assert isinstance(result, JsonRpcRemote)
    assert result.library is library_mock
    assert result.controller is controller


async def test_setup_wires_frozen_registry(
    library_mock: Mock, controller: FakeController
) -> None:
    """The registry should be complete and frozen before any request arrives."""
    result = await setup(library_mock, controller)
    assert result.registry.frozen
    assert len(result.registry) == 38
    assert "library_scan" in result.registry
    assert "player_dec_volume" in result.registry
    assert not result.running


async def test_instances_do_not_share_registries(
    library_mock: Mock, controller: FakeController
) -> None:
    """Each plugin instance should own its registry and handlers."""
    first = await setup(library_mock, controller)
    second = await setup(library_mock, FakeController())
    assert first.registry is not second.registry
    assert first.registry.lookup("player_play") != second.registry.lookup("player_play")
