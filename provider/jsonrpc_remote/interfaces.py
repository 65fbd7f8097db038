"""Interfaces of the collaborators the plugin is wired to.

The host owns the library storage and the playback controller; the plugin
only consumes them through these protocols. Library records are plain
attribute bags, so any object exposing the listed attributes will do.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .queue import QueueItem


class ArtistRecord(Protocol):
    id: int
    name: str
    albums: int


class AlbumRecord(Protocol):
    id: int
    name: str
    artist: int
    songs: int
    length: int


class FileRecord(Protocol):
    id: int
    path: str
    name: str
    length: int
    title: str
    artist: str
    album: str
    year: int
    track_index: int
    codec: str
    artist_id: int
    album_id: int
    sample_rate: int


class DirectoryRecord(Protocol):
    id: int
    name: str


class PlaylistEntryRecord(Protocol):
    id: int
    type: str
    item_id: int


class PlaylistRecord(Protocol):
    id: int
    name: str
    items: Sequence[PlaylistEntryRecord]


class LibraryStatistics(Protocol):
    num_of_artists: int
    num_of_albums: int
    num_of_files: int
    sum_of_song_length: int


class PlayerStatus(Protocol):
    file: FileRecord | None
    state: Any
    position: int
    volume: int
    index: Sequence[int]


class LibraryStorage(Protocol):
    """Storage engine that resolves library records by id.

    Lookups of unknown ids raise; the plugin does not care which exception.
    """

    async def get_statistics(self) -> LibraryStatistics: ...

    async def get_artists(self) -> Sequence[ArtistRecord]: ...

    async def get_albums(self) -> Sequence[AlbumRecord]: ...

    async def get_albums_by_artist(self, artist_id: int) -> Sequence[AlbumRecord]: ...

    async def get_album(self, album_id: int) -> AlbumRecord: ...

    async def get_file(self, file_id: int) -> FileRecord: ...

    async def get_files(self, file_ids: Sequence[int]) -> Sequence[FileRecord]: ...

    async def get_files_of_artist(self, artist_id: int) -> Sequence[FileRecord]: ...

    async def get_files_of_album(self, album_id: int) -> Sequence[FileRecord]: ...

    async def get_directory(self, directory_id: int) -> DirectoryRecord: ...

    async def get_directories(self, directory_ids: Sequence[int]) -> Sequence[DirectoryRecord]: ...

    async def list_subdirectories(self, directory_id: int) -> Sequence[DirectoryRecord]: ...

    async def get_files_of_directory(self, directory_id: int) -> Sequence[FileRecord]: ...

    async def update_file_metadata(self, file_id: int, metadata: dict[str, Any]) -> None: ...

    async def create_playlist(self, name: str) -> int: ...

    async def delete_playlist(self, playlist_id: int) -> None: ...

    async def add_playlist_item(self, playlist_id: int, item_type: str, item_id: int) -> None: ...

    async def delete_playlist_item(self, entry_id: int) -> None: ...

    async def get_playlists(self) -> Sequence[PlaylistRecord]: ...

    async def get_playlist(self, playlist_id: int) -> PlaylistRecord: ...


class MusicLibrary(Protocol):
    """The host's music library: a storage plus a scanner."""

    storage: LibraryStorage

    async def scan(self) -> None: ...


class PlayerController(Protocol):
    """Playback controller owning the live queue."""

    async def queue(self, item: QueueItem) -> None: ...

    async def get_queue(self) -> Sequence[Any]: ...

    async def remove(self, index: Sequence[int]) -> None: ...

    async def remove_all(self) -> None: ...

    async def get_status(self) -> PlayerStatus: ...

    async def play(self) -> None: ...

    async def pause(self) -> None: ...

    async def stop(self) -> None: ...

    async def seek(self, seconds: int) -> None: ...

    async def prev(self) -> None: ...

    async def next(self) -> None: ...

    async def go_to(self, index: Sequence[int]) -> None: ...

    async def get_volume(self) -> int: ...

    async def set_volume(self, level: int) -> None: ...

    async def inc_volume(self) -> None: ...

    async def dec_volume(self) -> None: ...
