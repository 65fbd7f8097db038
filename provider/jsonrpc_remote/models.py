"""Pydantic models for the JSON-RPC envelope."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from .constants import PROTOCOL_TAG


class RpcRequest(BaseModel):
    """A request whose envelope passed the method/id check."""

    model_config = ConfigDict(frozen=True)

    method: Any
    id: Any
    params: Any = None


class RpcSuccess(BaseModel):
    """Successful reply: carries ``result``, which may be null."""

    model_config = ConfigDict(frozen=True)

    jsonrpc: Literal["2.0"] = PROTOCOL_TAG
    id: Any = None
    result: Any = None


class RpcFailure(BaseModel):
    """Failed reply: carries the error reason instead of a result."""

    model_config = ConfigDict(frozen=True)

    jsonrpc: Literal["2.0"] = PROTOCOL_TAG
    id: Any = None
    error: str


RpcResponse = RpcSuccess | RpcFailure
