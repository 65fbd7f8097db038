"""Embedded HTTP transport for the JSON-RPC remote plugin."""

from __future__ import annotations

import logging
from typing import Any

from aiohttp import web

from .constants import DEFAULT_HOST, JSON_CHARSET, JSON_CONTENT_TYPE, PLUGIN_NAME
from .dispatcher import JsonRpcDispatcher

logger = logging.getLogger(__name__)


class JsonRpcHTTPServer:
    """HTTP server that hands request bodies posted on the RPC path to the dispatcher."""

    def __init__(
        self,
        dispatcher: JsonRpcDispatcher,
        path: str,
        port: int,
        host: str = DEFAULT_HOST,
    ) -> None:
        """Initialize the HTTP server."""
        self.dispatcher = dispatcher
        self.path = path
        self.port = port
        self.host = host
        self.app = web.Application(middlewares=[self._cors_middleware])
        self._runner: web.AppRunner | None = None
        self._setup_routes()

    def _setup_routes(self) -> None:
        """Register all HTTP routes."""
        self.app.router.add_post(self.path, self._handle_rpc)
        self.app.router.add_get("/health", self._handle_health)

    @web.middleware
    async def _cors_middleware(self, request: web.Request, handler: Any) -> web.StreamResponse:
        """Add CORS headers to all responses."""
        if request.method == "OPTIONS":
            return web.Response(
                headers={
                    "Access-Control-Allow-Origin": "*",
                    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
                    "Access-Control-Allow-Headers": "*",
                }
            )
        response: web.StreamResponse = await handler(request)
        response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    async def start(self) -> None:
        """Start the HTTP server."""
        self._runner = web.AppRunner(self.app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port, reuse_address=True)
        await site.start()
        logger.info("JSON-RPC server listening on %s:%s%s", self.host, self.port, self.path)

    async def stop(self) -> None:
        """Stop the HTTP server."""
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
        logger.info("JSON-RPC server stopped")

    async def _handle_rpc(self, request: web.Request) -> web.Response:
        """Process one RPC call. Protocol failures are still HTTP 200."""
        payload = await request.read()
        logger.debug("RPC request from %s: %d bytes", request.remote, len(payload))
        body = await self.dispatcher.process_raw(payload)
        return web.Response(
            status=200,
            text=body,
            content_type=JSON_CONTENT_TYPE,
            charset=JSON_CHARSET,
        )

    async def _handle_health(self, request: web.Request) -> web.Response:
        """Health check endpoint."""
        return web.json_response(
            {
                "status": "ok",
                "plugin": PLUGIN_NAME,
                "methods": len(self.dispatcher.registry),
            }
        )
