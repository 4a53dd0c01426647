"""Error types for Claude Code stream client."""

from typing import Any


class ClaudeSDKError(Exception):
    """Base exception for all Claude SDK errors."""


class CLIConnectionError(ClaudeSDKError):
    """Raised when unable to connect to Claude Code."""


class CLINotFoundError(CLIConnectionError):
    """Raised when Claude Code is not found or not installed."""

    def __init__(
        self, message: str = "Claude Code not found", cli_path: str | None = None
    ):
        self.cli_path = cli_path
        if cli_path:
            message = f"{message}: {cli_path}"
        super().__init__(message)


class ProcessError(ClaudeSDKError):
    """Raised when the CLI process fails."""

    def __init__(
        self, message: str, exit_code: int | None = None, stderr: str | None = None
    ):
        self.exit_code = exit_code
        self.stderr = stderr

        if exit_code is not None:
            # Exit code belongs on the headline, before any hint lines
            headline, sep, details = message.partition("\n")
            message = f"{headline} (exit code: {exit_code}){sep}{details}"
        if stderr:
            message = f"{message}\nError output: {stderr}"

        super().__init__(message)


class CLIJSONDecodeError(ClaudeSDKError):
    """Raised when unable to decode JSON from CLI output."""

    def __init__(self, line: str, original_error: Exception):
        self.line = line
        self.original_error = original_error
        super().__init__(f"Failed to decode JSON: {line[:100]}... ({original_error})")


def describe_exit_failure(stderr: str, debug_info: dict[str, Any] | None = None) -> str:
    """Build the ProcessError message for a CLI that exited non-zero.

    With no stderr to show, the message lists the usual causes instead of
    leaving the caller with a bare exit code.
    """
    message = "CLI process failed"
    if stderr.strip():
        return message

    message += "\n\nNo error output from Claude CLI. Common causes:"
    message += "\n- Invalid or missing ANTHROPIC_API_KEY"
    message += "\n- MCP server connection failed"
    message += "\n- Network connectivity issues"
    message += "\n- Invalid model name or options"

    if debug_info:
        message += "\n\nDebug info:"
        for key, value in debug_info.items():
            message += f"\n- {key}: {value}"
    else:
        message += "\n\nTry ClaudeCodeOptions(debug=True) for more details"

    return message
