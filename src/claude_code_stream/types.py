"""Type definitions for Claude Code stream client."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, NotRequired, TypedDict

# Permission modes
PermissionMode = Literal["default", "acceptEdits", "plan", "bypassPermissions"]

# Wire formats understood by the CLI
InputFormat = Literal["text", "stream-json"]
OutputFormat = Literal["text", "json", "stream-json"]


# MCP Server config
class McpStdioServerConfig(TypedDict):
    """MCP stdio server configuration."""

    type: NotRequired[Literal["stdio"]]  # Optional for backwards compatibility
    command: str
    args: NotRequired[list[str]]
    env: NotRequired[dict[str, str]]


class McpSSEServerConfig(TypedDict):
    """MCP SSE server configuration."""

    type: Literal["sse"]
    url: str
    headers: NotRequired[dict[str, str]]


class McpHttpServerConfig(TypedDict):
    """MCP HTTP server configuration."""

    type: Literal["http"]
    url: str
    headers: NotRequired[dict[str, str]]


McpServerConfig = McpStdioServerConfig | McpSSEServerConfig | McpHttpServerConfig


# Content block types
@dataclass(frozen=True)
class TextBlock:
    """Text content block."""

    text: str | None


@dataclass(frozen=True)
class ToolUseBlock:
    """Tool use content block."""

    id: str | None
    name: str | None
    input: dict[str, Any] | None


@dataclass(frozen=True)
class ToolResultBlock:
    """Tool result content block.

    ``tool_use_id`` refers to a ToolUseBlock seen earlier in the session; the
    link is not checked here.
    """

    tool_use_id: str | None
    content: str | list[dict[str, Any]] | None = None
    is_error: bool | None = None


ContentBlock = TextBlock | ToolUseBlock | ToolResultBlock


# Message types
@dataclass(frozen=True)
class UserMessage:
    """User message, content passed through as received."""

    content: Any


@dataclass(frozen=True)
class AssistantMessage:
    """Assistant message with content blocks."""

    content: list[ContentBlock]


@dataclass(frozen=True)
class SystemMessage:
    """System message with metadata.

    ``data`` holds the whole raw event so fields not modelled here stay
    reachable, e.g. ``data["session_id"]`` on the ``init`` event.
    """

    subtype: str | None
    data: dict[str, Any]


@dataclass(frozen=True)
class ResultMessage:
    """Result message with cost and usage information.

    Fields missing from the CLI event are None.
    """

    subtype: str | None
    duration_ms: int | None
    is_error: bool | None
    num_turns: int | None
    session_id: str | None
    duration_api_ms: int | None = None
    total_cost_usd: float | None = None
    usage: dict[str, Any] | None = None
    result: str | None = None


Message = UserMessage | AssistantMessage | SystemMessage | ResultMessage


@dataclass(frozen=True)
class ClaudeCodeOptions:
    """Query options for Claude Code.

    Immutable; derive variants with ``dataclasses.replace``.
    """

    allowed_tools: list[str] = field(default_factory=list)
    # Accepted for compatibility; the CLI has no flag for it and it is never sent
    max_thinking_tokens: int = 8000
    system_prompt: str | None = None
    append_system_prompt: str | None = None
    mcp_servers: dict[str, McpServerConfig] = field(default_factory=dict)
    permission_mode: PermissionMode | None = None
    continue_conversation: bool = False
    resume: str | None = None
    max_turns: int | None = None
    disallowed_tools: list[str] = field(default_factory=list)
    model: str | None = None
    permission_prompt_tool_name: str | None = None
    cwd: str | Path | None = None
    input_format: InputFormat | None = None
    output_format: OutputFormat | None = None
    env: dict[str, str] = field(default_factory=dict)
    debug: bool = False

    @property
    def streams_input(self) -> bool:
        """True when turns are written to stdin as JSON lines."""
        return self.input_format == "stream-json"
