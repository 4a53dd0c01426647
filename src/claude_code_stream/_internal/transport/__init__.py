"""Transport implementations for Claude Code stream client."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterable, AsyncIterator, Iterable
from typing import Any


class Transport(ABC):
    """Abstract transport for Claude communication.

    A transport owns the connection to one Claude Code process (or an
    equivalent remote service), writes user turns to it and hands back the
    raw JSON objects it emits. Message typing happens a layer above.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize connection. Calling it twice must not open a second one."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close connection. Safe to call repeatedly or before connect()."""
        pass

    @abstractmethod
    async def send_message(self, message: dict[str, Any]) -> None:
        """Write one JSON message as a single line."""
        pass

    @abstractmethod
    async def send_messages(
        self, messages: Iterable[dict[str, Any]] | AsyncIterable[dict[str, Any]]
    ) -> None:
        """Write every message in order, then signal end of input."""
        pass

    @abstractmethod
    def receive_messages(self) -> AsyncIterator[dict[str, Any]]:
        """Receive decoded JSON objects in the order they were emitted."""
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if transport is connected."""
        pass


__all__ = ["Transport"]
