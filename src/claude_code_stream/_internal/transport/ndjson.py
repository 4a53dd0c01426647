"""Incremental decoder for the CLI's newline-delimited JSON output."""

import json
import logging
from collections.abc import Iterator
from typing import Any

from ..._errors import CLIJSONDecodeError

logger = logging.getLogger(__name__)

MAX_BUFFER_SIZE = 1024 * 1024 * 50  # 50MB

# A failed parse shorter than this is assumed to be a document split over
# several lines and keeps accumulating; anything longer is malformed.
INCOMPLETE_JSON_LIMIT = 10_000


class NDJSONDecoder:
    """Reassemble JSON documents from arbitrarily chunked text.

    Chunks are cut into lines first, so a document split across reads is
    rejoined before any parse is attempted. Each stripped, non-empty line is
    appended to the decode buffer and the buffer is parsed:

    - success: the buffer is cleared and the object is yielded
    - failure while the buffer is short: keep accumulating lines (covers a
      document spread over several lines)
    - failure once the buffer passes ``INCOMPLETE_JSON_LIMIT``: raise

    The pending line plus the decode buffer may never exceed
    ``max_buffer_size``; crossing it clears everything and raises.
    """

    def __init__(self, max_buffer_size: int = MAX_BUFFER_SIZE, debug: bool = False):
        self._max_buffer_size = max_buffer_size
        self._debug = debug
        self._buffer = ""
        # Unterminated tail of the most recent chunk, kept as pieces so a
        # very long line is not re-copied on every read
        self._pending: list[str] = []
        self._pending_size = 0

    @property
    def buffer(self) -> str:
        """Text received but not yet decoded."""
        return self._buffer + "".join(self._pending)

    def feed(self, chunk: str) -> Iterator[dict[str, Any]]:
        """Consume a chunk of stdout and yield every document it completes."""
        if "\n" not in chunk:
            self._hold(chunk)
            return

        head, *lines = chunk.split("\n")
        tail = lines.pop()

        self._hold(head)
        first_line = "".join(self._pending)
        self._pending = []
        self._pending_size = 0

        for line in (first_line, *lines):
            yield from self._decode_line(line)

        self._hold(tail)

    def finish(self) -> Iterator[dict[str, Any]]:
        """Flush at end of stream; leftover text that does not parse raises."""
        tail = "".join(self._pending)
        self._pending = []
        self._pending_size = 0
        yield from self._decode_line(tail)

        if self._buffer.strip():
            buffer = self._buffer
            self._buffer = ""
            try:
                data = json.loads(buffer)
            except json.JSONDecodeError as e:
                raise CLIJSONDecodeError(buffer, e) from e
            yield data

    def _hold(self, piece: str) -> None:
        if not piece:
            return
        self._pending.append(piece)
        self._pending_size += len(piece)
        self._check_size(len(self._buffer) + self._pending_size)

    def _check_size(self, size: int) -> None:
        if size <= self._max_buffer_size:
            return

        self._buffer = ""
        self._pending = []
        self._pending_size = 0
        raise CLIJSONDecodeError(
            f"JSON message exceeded maximum buffer size of {self._max_buffer_size} bytes",
            ValueError(f"Buffer size {size} exceeds limit {self._max_buffer_size}"),
        )

    def _decode_line(self, line: str) -> Iterator[dict[str, Any]]:
        line = line.strip()
        if not line:
            return

        self._buffer += line
        self._check_size(len(self._buffer))

        try:
            data = json.loads(self._buffer)
        except json.JSONDecodeError as e:
            if len(self._buffer) > INCOMPLETE_JSON_LIMIT:
                buffer = self._buffer
                self._buffer = ""
                if self._debug:
                    logger.error(f"Invalid JSON: {buffer[:200]}...")
                raise CLIJSONDecodeError(buffer, e) from e

            if self._debug:
                logger.debug(f"Buffering incomplete JSON: {self._buffer[:100]}...")
            return

        self._buffer = ""
        if self._debug and isinstance(data, dict):
            logger.debug(f"Parsed JSON: {data.get('type', 'unknown')}")
        yield data
