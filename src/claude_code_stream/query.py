"""Query functions for one-shot and streamed-input interactions with Claude Code."""

from collections.abc import AsyncIterable, AsyncIterator, Iterable, Mapping
from contextlib import aclosing
from dataclasses import replace
from pathlib import Path
from typing import Any

from ._internal.client import InternalClient
from .helpers import add_mcp_server
from .types import ClaudeCodeOptions, McpServerConfig, Message, PermissionMode

QUICK_MCP_SYSTEM_PROMPT = "You are helpful. Use the available MCP tools to answer questions."


def _merge_mcp_servers(
    options: ClaudeCodeOptions, mcp_servers: Mapping[str, McpServerConfig] | None
) -> ClaudeCodeOptions:
    if not mcp_servers:
        return options
    return replace(options, mcp_servers={**options.mcp_servers, **mcp_servers})


async def query(
    *,
    prompt: str | Iterable[dict[str, Any]] | AsyncIterable[dict[str, Any]],
    options: ClaudeCodeOptions | None = None,
    cli_path: str | Path | None = None,
    mcp_servers: Mapping[str, McpServerConfig] | None = None,
) -> AsyncIterator[Message]:
    """
    Query Claude Code.

    Runs one CLI process per call and yields its messages as they arrive. The
    process is started on the first iteration and terminated when iteration
    ends, fails or is abandoned.

    Args:
        prompt: The prompt to send to Claude. A string is passed on the command
            line; an iterable (sync or async) of turn dicts, such as the ones
            built by ``create_user_message``, is streamed to the CLI's stdin as
            JSON lines and stdin is closed after the last one.
        options: Optional configuration (defaults to ClaudeCodeOptions() if None).
            Set options.input_format="stream-json" to send a string prompt as a
            single stdin turn instead.
        cli_path: Path to the claude binary. Found automatically when omitted.
        mcp_servers: Extra MCP servers merged over ``options.mcp_servers``;
            on a name clash the entry given here wins.

    Yields:
        Messages from the conversation

    Raises:
        CLINotFoundError: If the CLI cannot be located or executed
        CLIConnectionError: If the process cannot be started or dies while
            turns are being written
        CLIJSONDecodeError: If the CLI emits output that is not valid JSON
        ProcessError: If the CLI exits with a non-zero status

    Example:
        ```python
        async for message in query(prompt="What is 2 + 2?"):
            print(message)
        ```

        Abandoning the loop early while still guaranteeing cleanup:
        ```python
        from contextlib import aclosing

        async with aclosing(query(prompt="Hello")) as messages:
            async for message in messages:
                if isinstance(message, AssistantMessage):
                    break
        ```
    """
    if options is None:
        options = ClaudeCodeOptions()
    options = _merge_mcp_servers(options, mcp_servers)

    client = InternalClient()

    # Closing this generator disconnects the transport immediately
    async with aclosing(
        client.process_query(prompt=prompt, options=options, cli_path=cli_path)
    ) as messages:
        async for message in messages:
            yield message


def stream_json_query(
    messages: Iterable[dict[str, Any]] | AsyncIterable[dict[str, Any]],
    *,
    options: ClaudeCodeOptions | None = None,
    cli_path: str | Path | None = None,
    mcp_servers: Mapping[str, McpServerConfig] | None = None,
) -> AsyncIterator[Message]:
    """Query Claude Code with several user turns sent over stdin.

    Example:
        ```python
        turns = create_conversation("Hi", "Now summarise our chat")
        async for message in stream_json_query(turns):
            print(message)
        ```
    """
    options = replace(options or ClaudeCodeOptions(), input_format="stream-json")
    return query(prompt=messages, options=options, cli_path=cli_path, mcp_servers=mcp_servers)


def continue_conversation(
    prompt: str | None = None,
    *,
    options: ClaudeCodeOptions | None = None,
    cli_path: str | Path | None = None,
    mcp_servers: Mapping[str, McpServerConfig] | None = None,
) -> AsyncIterator[Message]:
    """Continue the most recent conversation in the working directory."""
    options = replace(options or ClaudeCodeOptions(), continue_conversation=True)
    return query(
        prompt=prompt or "", options=options, cli_path=cli_path, mcp_servers=mcp_servers
    )


def resume_conversation(
    session_id: str,
    prompt: str | None = None,
    *,
    options: ClaudeCodeOptions | None = None,
    cli_path: str | Path | None = None,
    mcp_servers: Mapping[str, McpServerConfig] | None = None,
) -> AsyncIterator[Message]:
    """Resume the conversation identified by ``session_id``.

    The id comes from ``ResultMessage.session_id`` of an earlier query.
    """
    options = replace(options or ClaudeCodeOptions(), resume=session_id)
    return query(
        prompt=prompt or "", options=options, cli_path=cli_path, mcp_servers=mcp_servers
    )


def quick_mcp_query(
    prompt: str,
    *,
    server_name: str,
    server_url: str | McpServerConfig,
    tools: str | Iterable[str],
    cli_path: str | Path | None = None,
    max_turns: int = 1,
    system_prompt: str = QUICK_MCP_SYSTEM_PROMPT,
    model: str | None = None,
    permission_mode: PermissionMode | None = None,
    cwd: str | Path | None = None,
) -> AsyncIterator[Message]:
    """Ask one question with a single MCP server and only its tools allowed.

    A string ``server_url`` is registered as an HTTP server; pass a full
    server config for stdio or SSE servers. Tool names without the
    ``mcp__`` prefix are qualified as ``mcp__<server_name>__<tool>``.

    Example:
        ```python
        async for message in quick_mcp_query(
            "Tell me about this server",
            server_name="docs",
            server_url="https://example.com/mcp",
            tools="about",
        ):
            print(format_message(message))
        ```
    """
    if isinstance(server_url, str):
        config: McpServerConfig = {"type": "http", "url": server_url}
    else:
        config = server_url

    if isinstance(tools, str):
        tools = [tools]
    allowed_tools = [
        tool if tool.startswith("mcp__") else f"mcp__{server_name}__{tool}"
        for tool in tools
    ]

    options = ClaudeCodeOptions(
        allowed_tools=allowed_tools,
        max_turns=max_turns,
        system_prompt=system_prompt,
        model=model,
        permission_mode=permission_mode,
        cwd=cwd,
    )
    return query(
        prompt=prompt,
        options=options,
        cli_path=cli_path,
        mcp_servers=add_mcp_server(server_name, config),
    )
