"""Configuration of the JSON-RPC remote plugin."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import aiofiles
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DEFAULT_HOST, DEFAULT_HTTP_PORT

logger = logging.getLogger(__name__)


class RemoteConfig(BaseModel):
    """Validated plugin configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    path: str = Field(min_length=1)
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_HTTP_PORT, ge=0, le=65535)
    log_level: str | None = None

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Require an absolute route path."""
        if not v.startswith("/"):
            raise ValueError("path must start with '/'")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str | None) -> str | None:
        """Accept standard logging level names only."""
        if v is None:
            return v
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level


async def load_config(config_file: str | Path) -> dict[str, Any]:
    """Read a JSON config file into a mapping."""
    async with aiofiles.open(config_file, encoding="utf-8") as f:
        content = await f.read()
    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError(f"{config_file}: configuration must be a JSON object")
    logger.debug("Loaded configuration from %s", config_file)
    return data
