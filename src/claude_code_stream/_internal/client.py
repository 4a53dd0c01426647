"""Internal client implementation."""

from collections.abc import AsyncIterable, AsyncIterator, Iterable
from dataclasses import replace
from pathlib import Path
from typing import Any

from ..helpers import create_user_message
from ..types import ClaudeCodeOptions, Message
from .message_parser import parse_message
from .transport.subprocess_cli import SubprocessCLITransport

Turns = Iterable[dict[str, Any]] | AsyncIterable[dict[str, Any]]


class InternalClient:
    """Internal client implementation."""

    def __init__(self) -> None:
        """Initialize the internal client."""

    async def process_query(
        self,
        prompt: str | Turns,
        options: ClaudeCodeOptions,
        cli_path: str | Path | None = None,
    ) -> AsyncIterator[Message]:
        """Process a query through transport.

        A string prompt goes on the command line, unless the options ask for
        stream-json input, in which case it is sent as the only turn. Any other
        prompt is an iterable of turns written to stdin.
        """
        turns: Turns | None = None
        if not isinstance(prompt, str):
            turns = prompt
            options = replace(options, input_format="stream-json")
        elif options.streams_input:
            turns = [create_user_message(prompt)]

        transport = SubprocessCLITransport(
            prompt=prompt if turns is None else None,
            options=options,
            cli_path=cli_path,
        )

        try:
            await transport.connect()

            if turns is not None:
                await transport.send_messages(turns)

            async for data in transport.receive_messages():
                message = parse_message(data)
                if message is not None:
                    yield message

        finally:
            await transport.disconnect()
