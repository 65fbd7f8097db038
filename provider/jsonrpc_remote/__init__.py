"""
JSON-RPC remote control plugin for a music player.

Exposes the host's music library and playback controller through a fixed
catalog of JSON-RPC-style methods, served by an embedded HTTP server.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .remote import JsonRpcRemote

if TYPE_CHECKING:
    from .interfaces import MusicLibrary, PlayerController

__all__ = ["JsonRpcRemote", "setup"]


async def setup(library: MusicLibrary, controller: PlayerController) -> JsonRpcRemote:
    """Create the plugin instance for the given library and controller."""
    return JsonRpcRemote(library, controller)
