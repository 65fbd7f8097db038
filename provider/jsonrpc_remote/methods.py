"""Handlers for the library and player RPC methods."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from .codec import encode_queue
from .constants import PLAYLIST_ENTRY_TYPES
from .errors import InvalidParams
from .mappers import (
    map_album,
    map_artist,
    map_directory,
    map_directory_listing,
    map_file,
    map_metadata,
    map_playlist,
    map_statistics,
    map_status,
)
from .queue import album_item, directory_item, file_item, resolve_playlist, snapshot_queue
from .validators import ParamKind, optional_field, require_field, require_int_list

if TYPE_CHECKING:
    from .interfaces import LibraryStorage, MusicLibrary, PlayerController
    from .registry import MethodRegistry

logger = logging.getLogger(__name__)

# metadata key -> kind accepted by library_update_metadata
METADATA_FIELDS: dict[str, ParamKind] = {
    "artist": ParamKind.STRING,
    "album": ParamKind.STRING,
    "title": ParamKind.STRING,
    "year": ParamKind.INTEGER,
    "track_index": ParamKind.INTEGER,
}


class RpcMethods:
    """The method catalog, bound to one library and one controller."""

    def __init__(self, library: MusicLibrary, controller: PlayerController) -> None:
        """Initialize the handler set."""
        self.library = library
        self.controller = controller
        self._scan_tasks: set[asyncio.Task[None]] = set()

    @property
    def storage(self) -> LibraryStorage:
        """Return the library storage."""
        return self.library.storage

    def register(self, registry: MethodRegistry) -> None:
        """Register every method of the catalog."""
        # library
        registry.register("library_scan", self.library_scan)
        registry.register("library_get_statistics", self.library_get_statistics)

        # library - artists
        registry.register("library_get_artists", self.library_get_artists)

        # library - albums
        registry.register("library_get_albums", self.library_get_albums)
        registry.register("library_get_albums_by_artist", self.library_get_albums_by_artist)
        registry.register(
            "library_get_album_ids_by_artist", self.library_get_album_ids_by_artist
        )

        # library - files
        registry.register("library_get_files", self.library_get_files)
        registry.register("library_get_files_of_artist", self.library_get_files_of_artist)
        registry.register("library_get_files_of_album", self.library_get_files_of_album)
        registry.register("library_get_file_ids_of_album", self.library_get_file_ids_of_album)

        # library - directories
        registry.register("library_get_directories", self.library_get_directories)
        registry.register("library_list_directory", self.library_list_directory)

        # library - metadata
        registry.register("library_get_metadata", self.library_get_metadata)
        registry.register("library_update_metadata", self.library_update_metadata)

        # library - playlists
        registry.register("library_create_playlist", self.library_create_playlist)
        registry.register("library_delete_playlist", self.library_delete_playlist)
        registry.register("library_add_playlist_item", self.library_add_playlist_item)
        registry.register("library_delete_playlist_item", self.library_delete_playlist_item)
        registry.register("library_get_playlists", self.library_get_playlists)

        # player - queue
        registry.register("player_queue_file", self.player_queue_file)
        registry.register("player_queue_directory", self.player_queue_directory)
        registry.register("player_queue_album", self.player_queue_album)
        registry.register("player_queue_playlist", self.player_queue_playlist)
        registry.register("player_queue_get", self.player_queue_get)
        registry.register("player_queue_remove", self.player_queue_remove)
        registry.register("player_queue_remove_all", self.player_queue_remove_all)

        # player - status
        registry.register("player_status", self.player_status)

        # player - control
        registry.register("player_play", self.player_play)
        registry.register("player_pause", self.player_pause)
        registry.register("player_stop", self.player_stop)
        registry.register("player_seek", self.player_seek)
        registry.register("player_prev", self.player_prev)
        registry.register("player_next", self.player_next)
        registry.register("player_goto", self.player_goto)

        # player - volume
        registry.register("player_get_volume", self.player_get_volume)
        registry.register("player_set_volume", self.player_set_volume)
        registry.register("player_inc_volume", self.player_inc_volume)
        registry.register("player_dec_volume", self.player_dec_volume)

    async def cancel_background_tasks(self) -> None:
        """Cancel library scans that are still running."""
        tasks = list(self._scan_tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._scan_tasks.clear()

    # --- Library ---

    async def library_scan(self, params: Any) -> None:
        """Start a library scan in the background and return at once."""
        task = asyncio.create_task(self.library.scan())
        self._scan_tasks.add(task)
        task.add_done_callback(self._on_scan_done)
        logger.info("Library scan started")

    def _on_scan_done(self, task: asyncio.Task[None]) -> None:
        self._scan_tasks.discard(task)
        if task.cancelled():
            logger.debug("Library scan cancelled")
            return
        if exc := task.exception():
            logger.error("Library scan failed", exc_info=exc)
        else:
            logger.info("Library scan finished")

    async def library_get_statistics(self, params: Any) -> dict[str, Any]:
        """Return library totals."""
        return map_statistics(await self.storage.get_statistics())

    async def library_get_artists(self, params: Any) -> list[dict[str, Any]]:
        """List artists."""
        return [map_artist(a) for a in await self.storage.get_artists()]

    async def library_get_albums(self, params: Any) -> list[dict[str, Any]]:
        """List albums."""
        return [map_album(a) for a in await self.storage.get_albums()]

    async def library_get_albums_by_artist(self, params: Any) -> list[dict[str, Any]]:
        """List albums of an artist."""
        artist_id = require_field(params, "artist_id", ParamKind.INTEGER)
        albums = await self.storage.get_albums_by_artist(artist_id)
        return [map_album(a, with_artist=False) for a in albums]

    async def library_get_album_ids_by_artist(self, params: Any) -> list[int]:
        """List album ids of an artist."""
        artist_id = require_field(params, "artist_id", ParamKind.INTEGER)
        return [a.id for a in await self.storage.get_albums_by_artist(artist_id)]

    async def library_get_files(self, params: Any) -> list[dict[str, Any]]:
        """Return files by id."""
        file_ids = require_int_list(params, "id")
        return [map_file(f) for f in await self.storage.get_files(file_ids)]

    async def library_get_files_of_artist(self, params: Any) -> list[dict[str, Any]]:
        """List files of an artist."""
        artist_id = require_field(params, "artist_id", ParamKind.INTEGER)
        return [map_file(f) for f in await self.storage.get_files_of_artist(artist_id)]

    async def library_get_files_of_album(self, params: Any) -> list[dict[str, Any]]:
        """List files of an album."""
        album_id = require_field(params, "album_id", ParamKind.INTEGER)
        return [map_file(f) for f in await self.storage.get_files_of_album(album_id)]

    async def library_get_file_ids_of_album(self, params: Any) -> list[int]:
        """List file ids of an album."""
        album_id = require_field(params, "album_id", ParamKind.INTEGER)
        return [f.id for f in await self.storage.get_files_of_album(album_id)]

    async def library_get_directories(self, params: Any) -> list[dict[str, Any]]:
        """Return directories by id."""
        directory_ids = require_int_list(params, "id")
        return [map_directory(d) for d in await self.storage.get_directories(directory_ids)]

    async def library_list_directory(self, params: Any) -> list[dict[str, Any]]:
        """List subdirectories and files of a directory."""
        directory_id = require_field(params, "directory_id", ParamKind.INTEGER)
        directories = await self.storage.list_subdirectories(directory_id)
        files = await self.storage.get_files_of_directory(directory_id)
        return map_directory_listing(list(directories), list(files))

    async def library_get_metadata(self, params: Any) -> dict[str, Any]:
        """Return the metadata of a file."""
        file_id = require_field(params, "id", ParamKind.INTEGER)
        return map_metadata(await self.storage.get_file(file_id))

    async def library_update_metadata(self, params: Any) -> None:
        """Overwrite the metadata of a file.

        Missing fields are written as empty strings or zero.
        """
        file_id = require_field(params, "id", ParamKind.INTEGER)
        metadata = {
            key: optional_field(params, key, kind, "" if kind is ParamKind.STRING else 0)
            for key, kind in METADATA_FIELDS.items()
        }
        await self.storage.update_file_metadata(file_id, metadata)

    async def library_create_playlist(self, params: Any) -> int:
        """Create an empty playlist and return its id."""
        name = require_field(params, "name", ParamKind.STRING)
        return await self.storage.create_playlist(name)

    async def library_delete_playlist(self, params: Any) -> None:
        """Delete a playlist."""
        playlist_id = require_field(params, "id", ParamKind.INTEGER)
        await self.storage.delete_playlist(playlist_id)

    async def library_add_playlist_item(self, params: Any) -> None:
        """Append a file, directory or album to a playlist."""
        playlist_id = require_field(params, "id", ParamKind.INTEGER)
        item_type = require_field(params, "type", ParamKind.STRING)
        item_id = require_field(params, "item_id", ParamKind.INTEGER)
        if item_type not in PLAYLIST_ENTRY_TYPES:
            raise InvalidParams("type", f"unsupported playlist entry type {item_type!r}")
        await self.storage.add_playlist_item(playlist_id, item_type, item_id)

    async def library_delete_playlist_item(self, params: Any) -> None:
        """Remove one entry from a playlist."""
        entry_id = require_field(params, "id", ParamKind.INTEGER)
        await self.storage.delete_playlist_item(entry_id)

    async def library_get_playlists(self, params: Any) -> list[dict[str, Any]]:
        """List playlists with their entries."""
        return [map_playlist(p) for p in await self.storage.get_playlists()]

    # --- Player queue ---

    async def player_queue_file(self, params: Any) -> None:
        """Queue a single file."""
        file_id = require_field(params, "id", ParamKind.INTEGER)
        await self.controller.queue(file_item(await self.storage.get_file(file_id)))

    async def player_queue_directory(self, params: Any) -> None:
        """Queue a directory with its files."""
        directory_id = require_field(params, "directory_id", ParamKind.INTEGER)
        directory = await self.storage.get_directory(directory_id)
        files = await self.storage.get_files_of_directory(directory_id)
        await self.controller.queue(directory_item(directory, files))

    async def player_queue_album(self, params: Any) -> None:
        """Queue an album with its files."""
        album_id = require_field(params, "id", ParamKind.INTEGER)
        album = await self.storage.get_album(album_id)
        files = await self.storage.get_files_of_album(album_id)
        await self.controller.queue(album_item(album, files))

    async def player_queue_playlist(self, params: Any) -> None:
        """Queue a playlist, resolving its entries through the library."""
        playlist_id = require_field(params, "id", ParamKind.INTEGER)
        playlist = await self.storage.get_playlist(playlist_id)
        await self.controller.queue(await resolve_playlist(self.storage, playlist))

    async def player_queue_get(self, params: Any) -> list[dict[str, Any]]:
        """Return a snapshot of the queue."""
        return encode_queue(snapshot_queue(await self.controller.get_queue()), rich=True)

    async def player_queue_remove(self, params: Any) -> None:
        """Remove the item at the given index path."""
        index = require_int_list(params, "index")
        await self.controller.remove(index)

    async def player_queue_remove_all(self, params: Any) -> None:
        """Empty the queue."""
        await self.controller.remove_all()

    # --- Player status and control ---

    async def player_status(self, params: Any) -> dict[str, Any]:
        """Return the player status."""
        return map_status(await self.controller.get_status())

    async def player_play(self, params: Any) -> None:
        """Start or resume playback."""
        await self.controller.play()

    async def player_pause(self, params: Any) -> None:
        """Pause playback."""
        await self.controller.pause()

    async def player_stop(self, params: Any) -> None:
        """Stop playback."""
        await self.controller.stop()

    async def player_seek(self, params: Any) -> None:
        """Seek within the current file."""
        seconds = require_field(params, "seconds", ParamKind.INTEGER)
        await self.controller.seek(seconds)

    async def player_prev(self, params: Any) -> None:
        """Skip to the previous file."""
        await self.controller.prev()

    async def player_next(self, params: Any) -> None:
        """Skip to the next file."""
        await self.controller.next()

    async def player_goto(self, params: Any) -> None:
        """Jump to the item at the given index path."""
        index = require_int_list(params, "index")
        await self.controller.go_to(index)

    # --- Player volume ---

    async def player_get_volume(self, params: Any) -> int:
        """Return the volume level."""
        return await self.controller.get_volume()

    async def player_set_volume(self, params: Any) -> None:
        """Set the volume level."""
        level = require_field(params, "level", ParamKind.INTEGER)
        await self.controller.set_volume(level)

    async def player_inc_volume(self, params: Any) -> None:
        """Raise the volume by one step."""
        await self.controller.inc_volume()

    async def player_dec_volume(self, params: Any) -> None:
        """Lower the volume by one step."""
        await self.controller.dec_volume()
