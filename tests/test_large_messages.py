"""Test that large messages are reassembled without JSON truncation."""

import io
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from claude_code_stream import AssistantMessage, ClaudeCodeOptions, TextBlock, ToolResultBlock
from claude_code_stream._internal.message_parser import parse_message
from claude_code_stream._internal.transport.ndjson import MAX_BUFFER_SIZE
from claude_code_stream._internal.transport.subprocess_cli import SubprocessCLITransport

# Typical read size of a subprocess pipe
PIPE_READ_SIZE = 65536


class ChunkedStream:
    """Serve text in fixed-size reads like a pipe under load."""

    def __init__(self, text: str, size: int = PIPE_READ_SIZE) -> None:
        self.chunks = [text[i : i + size] for i in range(0, len(text), size)]

    def __aiter__(self):
        return self

    async def __anext__(self) -> str:
        if not self.chunks:
            raise StopAsyncIteration
        return self.chunks.pop(0)


def make_transport(text: str, size: int = PIPE_READ_SIZE) -> SubprocessCLITransport:
    transport = SubprocessCLITransport(
        prompt="test", options=ClaudeCodeOptions(), cli_path="claude"
    )
    process = MagicMock()
    process.returncode = None
    process.wait = AsyncMock(return_value=0)
    transport._process = process
    transport._stdout_stream = ChunkedStream(text, size)  # type: ignore[assignment]
    transport._stderr_file = io.BytesIO()
    return transport


class TestLargeMessages:
    """Test handling of large messages that previously caused JSON truncation."""

    def test_default_buffer_size(self):
        """Verify the transport starts with the full decode buffer limit."""
        transport = SubprocessCLITransport(
            prompt="test", options=ClaudeCodeOptions(), cli_path="claude"
        )
        assert transport._max_buffer_size == MAX_BUFFER_SIZE

    @pytest.mark.asyncio
    async def test_large_response_handling(self):
        """Test a single line far larger than one pipe read parses intact."""
        text = "".join(f"line {i}: " + "lorem ipsum " * 20 + "\n" for i in range(2000))
        event = {
            "type": "assistant",
            "message": {"content": [{"type": "text", "text": text}]},
        }
        line = json.dumps(event)
        assert len(line) > 5 * PIPE_READ_SIZE

        transport = make_transport(line + "\n")
        received = [data async for data in transport.receive_messages()]

        assert received == [event]
        message = parse_message(received[0])
        assert isinstance(message, AssistantMessage)
        assert message.content == [TextBlock(text=text)]

    @pytest.mark.asyncio
    async def test_large_tool_result_between_small_messages(self):
        """Test small messages around a large one keep their order."""
        big_output = [{"type": "text", "text": "x" * 200_000}]
        events = [
            {"type": "system", "subtype": "init", "session_id": "s"},
            {
                "type": "assistant",
                "message": {
                    "content": [
                        {"type": "tool_result", "tool_use_id": "t1", "content": big_output}
                    ]
                },
            },
            {"type": "result", "subtype": "success", "num_turns": 1},
        ]
        stream = "".join(json.dumps(event) + "\n" for event in events)

        transport = make_transport(stream, size=4093)
        received = [data async for data in transport.receive_messages()]

        assert received == events
        message = parse_message(received[1])
        assert message.content == [
            ToolResultBlock(tool_use_id="t1", content=big_output, is_error=None)
        ]

    @pytest.mark.asyncio
    async def test_deeply_nested_structure(self):
        """Test nested structures split across reads."""
        nested: dict = {"leaf": "value"}
        for depth in range(200):
            nested = {"level": depth, "child": nested, "pad": "p" * 500}
        event = {"type": "system", "subtype": "debug", "tree": nested}

        transport = make_transport(json.dumps(event) + "\n", size=1000)
        received = [data async for data in transport.receive_messages()]

        assert received == [event]
