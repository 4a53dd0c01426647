"""Claude Code stream client for Python.

Runs the Claude Code CLI as a subprocess and turns its stream-json output
into typed messages.
"""

from ._errors import (
    ClaudeSDKError,
    CLIConnectionError,
    CLIJSONDecodeError,
    CLINotFoundError,
    ProcessError,
)
from ._internal.transport import Transport
from .helpers import (
    add_mcp_server,
    create_conversation,
    create_user_message,
    format_message,
    format_messages_as_jsonl,
)
from .query import (
    continue_conversation,
    query,
    quick_mcp_query,
    resume_conversation,
    stream_json_query,
)
from .types import (
    AssistantMessage,
    ClaudeCodeOptions,
    ContentBlock,
    McpHttpServerConfig,
    McpServerConfig,
    McpSSEServerConfig,
    McpStdioServerConfig,
    Message,
    PermissionMode,
    ResultMessage,
    SystemMessage,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
    UserMessage,
)

__version__ = "0.1.0"

__all__ = [
    # Main exports
    "query",
    "stream_json_query",
    "continue_conversation",
    "resume_conversation",
    "quick_mcp_query",
    # Transport
    "Transport",
    # Types
    "PermissionMode",
    "McpServerConfig",
    "McpStdioServerConfig",
    "McpSSEServerConfig",
    "McpHttpServerConfig",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ResultMessage",
    "Message",
    "ClaudeCodeOptions",
    "TextBlock",
    "ToolUseBlock",
    "ToolResultBlock",
    "ContentBlock",
    # Helpers
    "create_user_message",
    "create_conversation",
    "format_messages_as_jsonl",
    "add_mcp_server",
    "format_message",
    # Errors
    "ClaudeSDKError",
    "CLIConnectionError",
    "CLINotFoundError",
    "ProcessError",
    "CLIJSONDecodeError",
]
