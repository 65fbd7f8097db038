"""Tests for encoding queue item trees."""

from __future__ import annotations

import pytest

from jsonrpc_remote.codec import encode_queue, encode_queue_item
from jsonrpc_remote.queue import QueueAlbum, QueueDirectory, QueueFile, QueuePlaylist


def _file(file_id: int) -> QueueFile:
    return QueueFile(
        id=file_id,
        path=f"/music/{file_id}.mp3",
        name=f"{file_id}.mp3",
        title=f"Track {file_id}",
        length=200,
        codec="mp3",
        sample_rate=48000,
    )


def test_encode_file_rich() -> None:
    """A rich file document carries the full description."""
    assert encode_queue_item(_file(1)) == {
        "type": "file",
        "id": 1,
        "path": "/music/1.mp3",
        "name": "1.mp3",
        "title": "Track 1",
        "length": 200,
        "codec": "mp3",
        "sample_rate": 48000,
    }


def test_encode_nested_playlist() -> None:
    """A playlist holding a directory of two files keeps order and tags."""
    tree = QueuePlaylist(
        id=1,
        name="Mix",
        children=(QueueDirectory(id=2, name="live", children=(_file(3), _file(4))),),
    )
    doc = encode_queue_item(tree)

    assert doc["type"] == "playlist"
    assert doc["name"] == "Mix"
    assert "files" not in doc
    (directory,) = doc["items"]
    assert directory["type"] == "directory"
    assert "items" not in directory
    assert [f["id"] for f in directory["files"]] == [3, 4]
    assert all(f["type"] == "file" for f in directory["files"])


def test_encode_album_uses_files() -> None:
    """Albums put their children under ``files``."""
    doc = encode_queue_item(QueueAlbum(id=5, name="Blue", children=(_file(1),)))
    assert doc["type"] == "album"
    assert [f["id"] for f in doc["files"]] == [1]


def test_encode_empty_group() -> None:
    """A group without children still carries an empty child list."""
    assert encode_queue_item(QueueDirectory(id=2, name="empty")) == {
        "type": "directory",
        "id": 2,
        "name": "empty",
        "files": [],
    }


def test_encode_compact() -> None:
    """Without ``rich`` only type and id are emitted, children included."""
    tree = QueueAlbum(id=5, name="Blue", children=(_file(1), _file(2)))
    assert encode_queue_item(tree, rich=False) == {
        "type": "album",
        "id": 5,
        "files": [{"type": "file", "id": 1}, {"type": "file", "id": 2}],
    }


def test_encode_mixed_order() -> None:
    """Children of mixed kinds should keep their original order."""
    tree = QueuePlaylist(
        id=1,
        children=(
            _file(1),
            QueueAlbum(id=2, children=(_file(3),)),
            _file(4),
            QueueDirectory(id=5, children=(_file(6), _file(7))),
        ),
    )
    doc = encode_queue_item(tree, rich=False)
    assert [(c["type"], c["id"]) for c in doc["items"]] == [
        ("file", 1),
        ("album", 2),
        ("file", 4),
        ("directory", 5),
    ]
    assert [f["id"] for f in doc["items"][3]["files"]] == [6, 7]


def test_encode_deep_tree() -> None:
    """Nesting deeper than the recursion limit should still encode."""
    depth = 5000
    node: QueuePlaylist | QueueFile = _file(0)
    for level in range(depth):
        node = QueuePlaylist.model_construct(id=level + 1, name="", children=(node,))

    doc = encode_queue_item(node, rich=False)
    levels = 0
    while doc["type"] == "playlist":
        (doc,) = doc["items"]
        levels += 1
    assert levels == depth
    assert doc == {"type": "file", "id": 0}


def test_encode_leaves_tree_untouched() -> None:
    """Encoding should not change the tree."""
    tree = QueuePlaylist(id=1, children=(QueueDirectory(id=2, children=(_file(3),)),))
    before = tree.model_dump()
    encode_queue_item(tree)
    encode_queue_item(tree, rich=False)
    assert tree.model_dump() == before


def test_encode_queue_keeps_order() -> None:
    """A whole queue should encode to a list in queue order."""
    docs = encode_queue([_file(2), _file(1)], rich=False)
    assert docs == [{"type": "file", "id": 2}, {"type": "file", "id": 1}]


def test_encode_non_item() -> None:
    """Anything but a queue item should be rejected."""
    with pytest.raises(TypeError):
        encode_queue_item({"type": "file", "id": 1})  # type: ignore[arg-type]
