"""Fixtures for testing the JSON-RPC remote plugin."""

from __future__ import annotations

from collections.abc import Sequence
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest
from aiohttp.test_utils import TestClient, TestServer

from jsonrpc_remote.dispatcher import JsonRpcDispatcher
from jsonrpc_remote.http_server import JsonRpcHTTPServer
from jsonrpc_remote.remote import JsonRpcRemote

RPC_PATH = "/jsonrpc"


def make_file(file_id: int, **overrides: Any) -> SimpleNamespace:
    """Create a library file record."""
    values: dict[str, Any] = {
        "id": file_id,
        "path": f"/music/{file_id}.flac",
        "name": f"{file_id}.flac",
        "length": 180 + file_id,
        "title": f"Song {file_id}",
        "artist": "Artist",
        "album": "Album",
        "year": 2001,
        "track_index": file_id,
        "codec": "flac",
        "artist_id": 1,
        "album_id": 1,
        "sample_rate": 44100,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def make_directory(directory_id: int, name: str = "dir") -> SimpleNamespace:
    """Create a library directory record."""
    return SimpleNamespace(id=directory_id, name=name)


def make_album(album_id: int, name: str = "Album", **overrides: Any) -> SimpleNamespace:
    """Create a library album record."""
    values: dict[str, Any] = {
        "id": album_id,
        "name": name,
        "artist": 1,
        "songs": 2,
        "length": 400,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def make_playlist(
    playlist_id: int, entries: Sequence[tuple[int, str, int]], name: str = "Mix"
) -> SimpleNamespace:
    """Create a playlist definition from (entry id, type, item id) tuples."""
    return SimpleNamespace(
        id=playlist_id,
        name=name,
        items=[
            SimpleNamespace(id=entry_id, type=entry_type, item_id=item_id)
            for entry_id, entry_type, item_id in entries
        ],
    )


class FakeController:
    """In-memory playback controller with a flat queue and a 0-100 volume."""

    def __init__(self) -> None:
        self.items: list[Any] = []
        self.volume = 100
        self.state = "stopped"
        self.position = 0
        self.current: Any = None
        self.index: list[int] = []
        self.remove_calls: list[list[int]] = []
        self.go_to_calls: list[list[int]] = []
        self.seeks: list[int] = []

    async def queue(self, item: Any) -> None:
        self.items.append(item)

    async def get_queue(self) -> list[Any]:
        return list(self.items)

    async def remove(self, index: Sequence[int]) -> None:
        self.remove_calls.append(list(index))
        del self.items[index[0]]

    async def remove_all(self) -> None:
        self.items.clear()

    async def get_status(self) -> SimpleNamespace:
        return SimpleNamespace(
            file=self.current,
            state=self.state,
            position=self.position,
            volume=self.volume,
            index=self.index,
        )

    async def play(self) -> None:
        self.state = "playing"

    async def pause(self) -> None:
        self.state = "paused"

    async def stop(self) -> None:
        self.state = "stopped"

    async def seek(self, seconds: int) -> None:
        self.seeks.append(seconds)
        self.position = seconds

    async def prev(self) -> None:
        self.index = [max(0, (self.index or [0])[0] - 1)]

    async def next(self) -> None:
        self.index = [(self.index or [-1])[0] + 1]

    async def go_to(self, index: Sequence[int]) -> None:
        self.go_to_calls.append(list(index))
        self.index = list(index)

    async def get_volume(self) -> int:
        return self.volume

    async def set_volume(self, level: int) -> None:
        if not 0 <= level <= 100:
            raise ValueError(f"volume out of range: {level}")
        self.volume = level

    async def inc_volume(self) -> None:
        self.volume = min(100, self.volume + 5)

    async def dec_volume(self) -> None:
        self.volume = max(0, self.volume - 5)


@pytest.fixture
def storage_mock() -> Mock:
    """Return a mock library storage with empty results."""
    storage = Mock()
    storage.get_statistics = AsyncMock(
        return_value=SimpleNamespace(
            num_of_artists=0, num_of_albums=0, num_of_files=0, sum_of_song_length=0
        )
    )
    storage.get_artists = AsyncMock(return_value=[])
    storage.get_albums = AsyncMock(return_value=[])
    storage.get_albums_by_artist = AsyncMock(return_value=[])
    storage.get_album = AsyncMock(return_value=make_album(1))
    storage.get_file = AsyncMock(return_value=make_file(1))
    storage.get_files = AsyncMock(return_value=[])
    storage.get_files_of_artist = AsyncMock(return_value=[])
    storage.get_files_of_album = AsyncMock(return_value=[])
    storage.get_directory = AsyncMock(return_value=make_directory(1))
    storage.get_directories = AsyncMock(return_value=[])
    storage.list_subdirectories = AsyncMock(return_value=[])
    storage.get_files_of_directory = AsyncMock(return_value=[])
    storage.update_file_metadata = AsyncMock()
    storage.create_playlist = AsyncMock(return_value=1)
    storage.delete_playlist = AsyncMock()
    storage.add_playlist_item = AsyncMock()
    storage.delete_playlist_item = AsyncMock()
    storage.get_playlists = AsyncMock(return_value=[])
    storage.get_playlist = AsyncMock(return_value=make_playlist(1, []))
    return storage


@pytest.fixture
def library_mock(storage_mock: Mock) -> Mock:
    """Return a mock music library wrapping the storage mock."""
    library = Mock()
    library.storage = storage_mock
    library.scan = AsyncMock()
    return library


@pytest.fixture
def controller() -> FakeController:
    """Return an in-memory playback controller."""
    return FakeController()


@pytest.fixture
def remote(library_mock: Mock, controller: FakeController) -> JsonRpcRemote:
    """Return a wired plugin instance without a running HTTP server."""
    return JsonRpcRemote(library_mock, controller)


@pytest.fixture
def dispatcher(remote: JsonRpcRemote) -> JsonRpcDispatcher:
    """Return the plugin's dispatcher."""
    return remote.dispatcher


@pytest.fixture
async def http_client(dispatcher: JsonRpcDispatcher) -> TestClient:
    """Return an aiohttp TestClient for the JSON-RPC HTTP server."""
    server = JsonRpcHTTPServer(dispatcher, RPC_PATH, 0)
    client = TestClient(TestServer(server.app))
    await client.start_server()
    yield client
    await client.close()
