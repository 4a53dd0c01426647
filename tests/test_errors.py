"""Tests for Claude Code stream error handling."""

import json

from claude_code_stream import (
    ClaudeSDKError,
    CLIConnectionError,
    CLIJSONDecodeError,
    CLINotFoundError,
    ProcessError,
)
from claude_code_stream._errors import describe_exit_failure


class TestErrorTypes:
    """Test error types and their properties."""

    def test_base_error(self):
        """Test base ClaudeSDKError."""
        error = ClaudeSDKError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert isinstance(error, Exception)

    def test_cli_not_found_error(self):
        """Test CLINotFoundError."""
        error = CLINotFoundError("Claude Code not found")
        assert isinstance(error, CLIConnectionError)
        assert isinstance(error, ClaudeSDKError)
        assert "Claude Code not found" in str(error)
        assert error.cli_path is None

    def test_cli_not_found_error_with_path(self):
        """Test CLINotFoundError names the path it tried."""
        error = CLINotFoundError("Claude Code not found at", cli_path="/bin/claude")
        assert str(error) == "Claude Code not found at: /bin/claude"
        assert error.cli_path == "/bin/claude"

    def test_connection_error(self):
        """Test CLIConnectionError."""
        error = CLIConnectionError("Failed to connect to CLI")
        assert isinstance(error, ClaudeSDKError)
        assert "Failed to connect to CLI" in str(error)

    def test_process_error(self):
        """Test ProcessError with exit code and stderr."""
        error = ProcessError("Process failed", exit_code=1, stderr="Command not found")
        assert error.exit_code == 1
        assert error.stderr == "Command not found"
        assert "Process failed" in str(error)
        assert "exit code: 1" in str(error)
        assert "Command not found" in str(error)

    def test_process_error_exit_code_on_first_line(self):
        """Test the exit code is attached to the headline, not the hints."""
        error = ProcessError("CLI process failed\n\nhint one\nhint two", exit_code=2)
        lines = str(error).split("\n")
        assert lines[0] == "CLI process failed (exit code: 2)"
        assert lines[-1] == "hint two"

    def test_process_error_without_details(self):
        """Test ProcessError with only a message."""
        error = ProcessError("Process failed")
        assert str(error) == "Process failed"
        assert error.exit_code is None
        assert error.stderr is None

    def test_json_decode_error(self):
        """Test CLIJSONDecodeError."""
        try:
            json.loads("{invalid json}")
        except json.JSONDecodeError as e:
            error = CLIJSONDecodeError("{invalid json}", e)
            assert error.line == "{invalid json}"
            assert error.original_error == e
            assert "Failed to decode JSON" in str(error)

    def test_json_decode_error_truncates_long_lines(self):
        """Test only the start of a long line appears in the message."""
        line = "x" * 500
        error = CLIJSONDecodeError(line, ValueError("bad"))
        assert line[:100] in str(error)
        assert line[:101] not in str(error)
        assert error.line == line


class TestDescribeExitFailure:
    """Test describe_exit_failure."""

    def test_with_stderr(self):
        """Test stderr output leaves only the headline."""
        assert describe_exit_failure("Error: invalid api key") == "CLI process failed"

    def test_without_stderr_lists_causes(self):
        """Test empty stderr gives a list of common causes."""
        message = describe_exit_failure("  \n")
        assert message.startswith("CLI process failed")
        assert "ANTHROPIC_API_KEY" in message
        assert "MCP server" in message
        assert "ClaudeCodeOptions(debug=True)" in message

    def test_without_stderr_with_debug_info(self):
        """Test debug details replace the debug hint."""
        message = describe_exit_failure(
            "", {"CLI path": "/usr/bin/claude", "Working directory": "/tmp"}
        )
        assert "Debug info:" in message
        assert "- CLI path: /usr/bin/claude" in message
        assert "- Working directory: /tmp" in message
        assert "debug=True" not in message
