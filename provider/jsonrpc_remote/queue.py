"""Playback-queue item model.

A queue is a sequence of items, each a file or a group (directory, album,
playlist) owning an ordered tuple of child items. Children can be any item
variant. Trees are built top-down from library lookups or from a walk of the
controller's live queue, and are frozen once built.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from .interfaces import (
        AlbumRecord,
        DirectoryRecord,
        FileRecord,
        LibraryStorage,
        PlaylistRecord,
    )

logger = logging.getLogger(__name__)


class QueueItemType(str, Enum):
    """Queue item variants."""

    FILE = "file"
    DIRECTORY = "directory"
    ALBUM = "album"
    PLAYLIST = "playlist"


class QueueFile(BaseModel):
    """A single playable file, always a leaf."""

    model_config = ConfigDict(frozen=True)

    type: Literal["file"] = "file"
    id: int
    path: str = ""
    name: str = ""
    title: str = ""
    length: int = 0
    codec: str = ""
    sample_rate: int = 0


class QueueDirectory(BaseModel):
    """A directory queued as a whole."""

    model_config = ConfigDict(frozen=True)

    type: Literal["directory"] = "directory"
    id: int
    name: str = ""
    children: tuple[QueueItem, ...] = ()


class QueueAlbum(BaseModel):
    """An album queued as a whole."""

    model_config = ConfigDict(frozen=True)

    type: Literal["album"] = "album"
    id: int
    name: str = ""
    children: tuple[QueueItem, ...] = ()


class QueuePlaylist(BaseModel):
    """A playlist, whose children may mix files, directories and albums."""

    model_config = ConfigDict(frozen=True)

    type: Literal["playlist"] = "playlist"
    id: int
    name: str = ""
    children: tuple[QueueItem, ...] = ()


QueueItem = Annotated[
    QueueFile | QueueDirectory | QueueAlbum | QueuePlaylist,
    Field(discriminator="type"),
]

QUEUE_ITEM_CLASSES = (QueueFile, QueueDirectory, QueueAlbum, QueuePlaylist)

for _model in (QueueDirectory, QueueAlbum, QueuePlaylist):
    _model.model_rebuild()


# --- Construction from library records ---


def file_item(record: FileRecord) -> QueueFile:
    """Build a queue file from a library file record."""
    return QueueFile(
        id=record.id,
        path=getattr(record, "path", "") or "",
        name=getattr(record, "name", "") or "",
        title=getattr(record, "title", "") or "",
        length=getattr(record, "length", 0) or 0,
        codec=getattr(record, "codec", "") or "",
        sample_rate=getattr(record, "sample_rate", 0) or 0,
    )


def directory_item(record: DirectoryRecord, files: Sequence[FileRecord]) -> QueueDirectory:
    """Build a queue directory holding the given files in order."""
    return QueueDirectory(
        id=record.id,
        name=getattr(record, "name", "") or "",
        children=tuple(file_item(f) for f in files),
    )


def album_item(record: AlbumRecord, files: Sequence[FileRecord]) -> QueueAlbum:
    """Build a queue album holding the given files in order."""
    return QueueAlbum(
        id=record.id,
        name=getattr(record, "name", "") or "",
        children=tuple(file_item(f) for f in files),
    )


async def resolve_playlist(storage: LibraryStorage, playlist: PlaylistRecord) -> QueuePlaylist:
    """Resolve a playlist definition into a queue playlist.

    Each entry is looked up in the library storage by its type. Entries with
    an unknown type are skipped; lookup failures propagate.
    """
    children: list[QueueItem] = []
    for entry in playlist.items:
        entry_type = _type_value(getattr(entry, "type", None))
        if entry_type == QueueItemType.FILE.value:
            children.append(file_item(await storage.get_file(entry.item_id)))
        elif entry_type == QueueItemType.DIRECTORY.value:
            directory = await storage.get_directory(entry.item_id)
            files = await storage.get_files_of_directory(entry.item_id)
            children.append(directory_item(directory, files))
        elif entry_type == QueueItemType.ALBUM.value:
            album = await storage.get_album(entry.item_id)
            files = await storage.get_files_of_album(entry.item_id)
            children.append(album_item(album, files))
        else:
            logger.warning(
                "Skipping entry %s of playlist %s: unknown type %r",
                getattr(entry, "id", None),
                playlist.id,
                entry_type,
            )
    return QueuePlaylist(
        id=playlist.id,
        name=getattr(playlist, "name", "") or "",
        children=tuple(children),
    )


# --- Snapshot of the live queue ---

_GROUP_TYPES = (
    QueueItemType.DIRECTORY.value,
    QueueItemType.ALBUM.value,
    QueueItemType.PLAYLIST.value,
)


def snapshot_queue(nodes: Sequence[Any]) -> tuple[QueueItem, ...]:
    """Copy the controller's live queue into a frozen tree.

    Live nodes expose ``type`` and, depending on it, ``file``, ``directory``,
    ``album`` or ``playlist`` (the library record) plus ``items`` for groups.
    Nodes that already are queue items are reused as they are immutable.

    The walk uses an explicit stack, so nesting depth is not bound by the
    recursion limit. A group is built once all of its children are.
    """
    root: list[QueueItem] = []
    # (node, its finished children or None before expansion, parent's list)
    stack: list[tuple[Any, list[QueueItem] | None, list[QueueItem]]] = [
        (node, None, root) for node in reversed(nodes)
    ]
    while stack:
        node, children, target = stack.pop()
        if isinstance(node, QUEUE_ITEM_CLASSES):
            target.append(node)
            continue

        node_type = _type_value(getattr(node, "type", None))
        if node_type == QueueItemType.FILE.value:
            target.append(file_item(node.file))
        elif children is None:
            if node_type not in _GROUP_TYPES:
                raise ValueError(f"Unknown queue node type: {node_type!r}")
            children = []
            stack.append((node, children, target))
            # reversed so the first child is finished first
            items = getattr(node, "items", ())
            stack.extend((child, None, children) for child in reversed(items))
        else:
            target.append(_group_item(node, node_type, tuple(children)))
    return tuple(root)


def _group_item(node: Any, node_type: str, children: tuple[QueueItem, ...]) -> QueueItem:
    if node_type == QueueItemType.DIRECTORY.value:
        record = node.directory
        return QueueDirectory(id=record.id, name=record.name or "", children=children)
    if node_type == QueueItemType.ALBUM.value:
        record = node.album
        return QueueAlbum(id=record.id, name=record.name or "", children=children)
    if node_type == QueueItemType.PLAYLIST.value:
        record = node.playlist
        return QueuePlaylist(
            id=record.id, name=getattr(record, "name", "") or "", children=children
        )
    raise ValueError(f"Unknown queue node type: {node_type!r}")


def _type_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value
