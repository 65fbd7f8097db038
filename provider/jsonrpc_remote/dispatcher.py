"""Request processor: turns one raw payload into one response envelope."""

from __future__ import annotations

import json
import logging
from typing import Any

from .errors import (
    EnvelopeIncomplete,
    HandlerError,
    HandlerFault,
    InvalidParams,
    MalformedPayload,
    RpcError,
    UnknownMethod,
)
from .models import RpcFailure, RpcRequest, RpcResponse, RpcSuccess
from .registry import MethodRegistry, RpcHandler

logger = logging.getLogger(__name__)


class JsonRpcDispatcher:
    """Parses requests, dispatches them through a registry and wraps the outcome.

    The dispatcher keeps no per-request state and may be called concurrently.
    Every call produces a valid envelope; failures are reported through the
    ``error`` member only.
    """

    def __init__(self, registry: MethodRegistry) -> None:
        """Initialize the dispatcher with a fully wired registry."""
        self.registry = registry

    async def process_request(self, payload: bytes | str) -> RpcResponse:
        """Process one request payload and return its response envelope."""
        try:
            document = self._parse(payload)
        except MalformedPayload as err:
            logger.debug("Rejecting request: %s", err.message)
            return self._failure(None, err)

        try:
            request = self._check_envelope(document)
        except EnvelopeIncomplete as err:
            logger.debug("Rejecting request: %s", err.message)
            return self._failure(document.get("id"), err)

        try:
            handler = self._resolve(request)
            result = await self._invoke(request, handler)
        except UnknownMethod as err:
            logger.debug("Rejecting request %r: %s", request.id, err.message)
            return self._failure(request.id, err)
        except InvalidParams as err:
            logger.debug("Invalid call of %s: %s", request.method, err.message)
            return self._failure(request.id, err)
        except HandlerError as err:
            return self._failure(request.id, err)

        return RpcSuccess(id=request.id, result=result)

    async def process_raw(self, payload: bytes | str) -> str:
        """Process one request payload and return the serialized response."""
        response = await self.process_request(payload)
        try:
            return json.dumps(response.model_dump(), allow_nan=False)
        except (TypeError, ValueError, RecursionError):
            logger.exception("Result of request %r is not serializable", response.id)
            fault = HandlerError("result not serializable")
            return json.dumps(self._failure(response.id, fault).model_dump())

    @staticmethod
    def _parse(payload: bytes | str) -> dict[str, Any]:
        """Decode the payload; only a JSON object is a valid request."""
        try:
            document = json.loads(payload, parse_constant=_reject_constant)
        except (TypeError, ValueError, RecursionError) as err:
            raise MalformedPayload(f"payload is not valid JSON: {err}") from err
        if not isinstance(document, dict):
            raise MalformedPayload("payload is not a JSON object")
        return document

    @staticmethod
    def _check_envelope(document: dict[str, Any]) -> RpcRequest:
        """Require ``method`` and ``id``; ``params`` defaults to an empty object."""
        if "method" not in document or "id" not in document:
            raise EnvelopeIncomplete()
        return RpcRequest(
            method=document["method"],
            id=document["id"],
            params=document.get("params", {}),
        )

    def _resolve(self, request: RpcRequest) -> RpcHandler:
        if not isinstance(request.method, str):
            raise UnknownMethod(request.method)
        handler = self.registry.lookup(request.method)
        if handler is None:
            raise UnknownMethod(request.method)
        return handler

    @staticmethod
    async def _invoke(request: RpcRequest, handler: RpcHandler) -> Any:
        """Run the handler, normalizing unexpected exceptions into HandlerFault."""
        try:
            return await handler(request.params)
        except HandlerError:
            raise
        except Exception as err:
            logger.exception("Error executing %s (request %r)", request.method, request.id)
            raise HandlerFault(request.method, err) from err

    @staticmethod
    def _failure(request_id: Any, err: RpcError) -> RpcFailure:
        return RpcFailure(id=request_id, error=err.reason)


def _reject_constant(name: str) -> Any:
    """Refuse NaN and Infinity, which are not part of JSON."""
    raise ValueError(f"invalid JSON constant {name}")
