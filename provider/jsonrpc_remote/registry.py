"""Name-keyed table of RPC method handlers."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterator
from types import MappingProxyType
from typing import Any

logger = logging.getLogger(__name__)

RpcHandler = Callable[[Any], Awaitable[Any]]


class MethodRegistry:
    """Maps method names to handlers.

    Populated once while the plugin is wired, then frozen. After ``freeze()``
    the table is a read-only mapping, so lookups from concurrent requests need
    no locking.
    """

    def __init__(self) -> None:
        """Initialize an empty, writable registry."""
        self._methods: dict[str, RpcHandler] = {}
        self._frozen = False

    def register(self, name: str, handler: RpcHandler) -> None:
        """Bind ``name`` to ``handler``. A duplicate name replaces the old handler."""
        if self._frozen:
            raise RuntimeError(f"Cannot register {name!r}: registry is frozen")
        if name in self._methods:
            logger.warning("RPC method %s registered twice, replacing handler", name)
        self._methods[name] = handler

    def freeze(self) -> None:
        """Make the registry read-only."""
        if not self._frozen:
            self._methods = MappingProxyType(dict(self._methods))  # type: ignore[assignment]
            self._frozen = True

    @property
    def frozen(self) -> bool:
        """Return whether the registry is read-only."""
        return self._frozen

    def lookup(self, name: str) -> RpcHandler | None:
        """Return the handler bound to ``name``, or None."""
        return self._methods.get(name)

    def names(self) -> list[str]:
        """Return the registered method names in registration order."""
        return list(self._methods)

    def __contains__(self, name: object) -> bool:
        return name in self._methods

    def __iter__(self) -> Iterator[str]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)
