"""Mappers for flattening library records into JSON documents."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .interfaces import (
        AlbumRecord,
        ArtistRecord,
        DirectoryRecord,
        FileRecord,
        LibraryStatistics,
        PlayerStatus,
        PlaylistRecord,
    )


def map_statistics(stat: LibraryStatistics) -> dict[str, Any]:
    """Map library statistics."""
    return {
        "num_of_artists": stat.num_of_artists,
        "num_of_albums": stat.num_of_albums,
        "num_of_files": stat.num_of_files,
        "sum_of_song_length": stat.sum_of_song_length,
    }


def map_artist(artist: ArtistRecord) -> dict[str, Any]:
    """Map an artist with its album count."""
    return {
        "id": artist.id,
        "name": artist.name,
        "albums": artist.albums,
    }


def map_album(album: AlbumRecord, *, with_artist: bool = True) -> dict[str, Any]:
    """Map an album. Albums listed per artist leave the artist out."""
    doc: dict[str, Any] = {"id": album.id, "name": album.name}
    if with_artist:
        doc["artist"] = album.artist
    doc["songs"] = album.songs
    doc["length"] = album.length
    return doc


def map_file(file: FileRecord) -> dict[str, Any]:
    """Map a file with its full description."""
    return {
        "id": file.id,
        "path": file.path,
        "name": file.name,
        "length": file.length,
        "title": file.title,
        "year": file.year,
        "track_index": file.track_index,
        "codec": file.codec,
        "artist_id": file.artist_id,
        "album_id": file.album_id,
        "sample_rate": file.sample_rate,
    }


def map_directory(directory: DirectoryRecord) -> dict[str, Any]:
    """Map a directory."""
    return {"id": directory.id, "name": directory.name}


def map_directory_listing(
    directories: list[DirectoryRecord], files: list[FileRecord]
) -> list[dict[str, Any]]:
    """Map the content of a directory: subdirectories first, then files."""
    listing: list[dict[str, Any]] = [
        {"type": "directory", **map_directory(d)} for d in directories
    ]
    listing.extend({"type": "file", **map_file(f)} for f in files)
    return listing


def map_metadata(file: FileRecord) -> dict[str, Any]:
    """Map the editable metadata of a file."""
    return {
        "id": file.id,
        "name": file.name,
        "artist": file.artist,
        "album": file.album,
        "title": file.title,
        "year": file.year,
        "track_index": file.track_index,
    }


def map_playlist(playlist: PlaylistRecord) -> dict[str, Any]:
    """Map a playlist definition with its typed entries."""
    return {
        "id": playlist.id,
        "name": playlist.name,
        "items": [
            {
                "id": entry.id,
                "type": _enum_value(entry.type),
                "item_id": entry.item_id,
            }
            for entry in playlist.items
        ],
    }


def map_status(status: PlayerStatus) -> dict[str, Any]:
    """Map the player status. ``current`` is the playing file id or None."""
    return {
        "current": status.file.id if status.file is not None else None,
        "state": _enum_value(status.state),
        "position": status.position,
        "volume": status.volume,
        "index": list(status.index),
    }


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value
