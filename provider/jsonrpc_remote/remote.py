"""JSON-RPC remote plugin implementation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from .config import RemoteConfig, load_config
from .constants import CONF_PATH, PLUGIN_NAME
from .dispatcher import JsonRpcDispatcher
from .http_server import JsonRpcHTTPServer
from .methods import RpcMethods
from .registry import MethodRegistry

if TYPE_CHECKING:
    from .interfaces import MusicLibrary, PlayerController

logger = logging.getLogger(__name__)


class JsonRpcRemote:
    """Plugin exposing a music library and a player controller over JSON-RPC.

    The method registry is filled and frozen when the plugin is constructed,
    so it is complete before the HTTP server can deliver the first request.
    """

    name = PLUGIN_NAME
    http_server: JsonRpcHTTPServer | None = None
    config: RemoteConfig | None = None

    def __init__(self, library: MusicLibrary, controller: PlayerController) -> None:
        """Initialize the plugin and wire the method registry."""
        self.library = library
        self.controller = controller
        self.methods = RpcMethods(library, controller)
        self.registry = MethodRegistry()
        self.methods.register(self.registry)
        self.registry.freeze()
        self.dispatcher = JsonRpcDispatcher(self.registry)

    @property
    def running(self) -> bool:
        """Return whether the HTTP server is up."""
        return self.http_server is not None

    async def start(self, config: Mapping[str, Any]) -> None:
        """Validate the configuration and start the HTTP server.

        An invalid configuration is logged and leaves the plugin as it was.
        A server that is already running is stopped before the new one starts.
        """
        try:
            self.config = RemoteConfig.model_validate(dict(config))
        except ValidationError as err:
            fields = {str(e["loc"][0]) for e in err.errors() if e["loc"]}
            if CONF_PATH in fields:
                logger.error("%s: path not configured properly", PLUGIN_NAME)
            else:
                logger.error("%s: invalid configuration: %s", PLUGIN_NAME, err)
            return

        if self.config.log_level:
            logging.getLogger(__package__).setLevel(self.config.log_level)

        if self.http_server:
            logger.warning("%s already running, restarting HTTP server", PLUGIN_NAME)
            await self.http_server.stop()
            self.http_server = None

        self.http_server = JsonRpcHTTPServer(
            self.dispatcher,
            self.config.path,
            self.config.port,
            self.config.host,
        )
        await self.http_server.start()
        logger.info(
            "%s started with %d methods on %s",
            PLUGIN_NAME,
            len(self.registry),
            self.config.path,
        )

    async def start_from_file(self, config_file: str | Path) -> None:
        """Load the configuration from a JSON file and start."""
        await self.start(await load_config(config_file))

    async def stop(self) -> None:
        """Cancel running scans, then stop the HTTP server."""
        await self.methods.cancel_background_tasks()
        if self.http_server:
            await self.http_server.stop()
            self.http_server = None
        logger.info("%s stopped", PLUGIN_NAME)

    async def process_request(self, payload: bytes | str) -> str:
        """Process a request delivered by a host-owned transport."""
        return await self.dispatcher.process_raw(payload)
