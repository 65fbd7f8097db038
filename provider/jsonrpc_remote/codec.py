"""Encoding of queue item trees into JSON documents."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .queue import QueueAlbum, QueueDirectory, QueueFile, QueueItem, QueuePlaylist


def encode_queue_item(item: QueueItem, *, rich: bool = True) -> dict[str, Any]:
    """Encode a queue item and all its descendants.

    Nodes are emitted pre-order: each document is created and attached to its
    parent before its own children are encoded, and children are appended in
    their original order to ``files`` (directories, albums) or ``items``
    (playlists). An explicit stack is used so deep trees do not hit the
    recursion limit. The tree itself is left untouched.

    With ``rich`` set, files carry their full description and groups their
    name; otherwise only ``type`` and ``id`` are emitted.
    """
    root: list[dict[str, Any]] = []
    stack: list[tuple[QueueItem, list[dict[str, Any]]]] = [(item, root)]
    while stack:
        node, target = stack.pop()
        doc, children = _encode_node(node, rich)
        target.append(doc)
        if children is not None:
            # reversed so the first child is popped first
            stack.extend((child, children) for child in reversed(node.children))
    return root[0]


def encode_queue(items: Iterable[QueueItem], *, rich: bool = True) -> list[dict[str, Any]]:
    """Encode a whole queue, keeping its order."""
    return [encode_queue_item(item, rich=rich) for item in items]


def _encode_node(
    node: QueueItem, rich: bool
) -> tuple[dict[str, Any], list[dict[str, Any]] | None]:
    """Encode one node without its children.

    Returns the document and the list its children go into (None for files).
    """
    if isinstance(node, QueueFile):
        doc: dict[str, Any] = {"type": "file", "id": node.id}
        if rich:
            doc.update(
                {
                    "path": node.path,
                    "name": node.name,
                    "title": node.title,
                    "length": node.length,
                    "codec": node.codec,
                    "sample_rate": node.sample_rate,
                }
            )
        return doc, None

    if isinstance(node, QueuePlaylist):
        children_key = "items"
    elif isinstance(node, (QueueDirectory, QueueAlbum)):
        children_key = "files"
    else:
        raise TypeError(f"Not a queue item: {node!r}")

    children: list[dict[str, Any]] = []
    doc = {"type": node.type, "id": node.id}
    if rich:
        doc["name"] = node.name
    doc[children_key] = children
    return doc, children
