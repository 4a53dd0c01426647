"""Tests for the convenience helpers."""

import json

from claude_code_stream import (
    AssistantMessage,
    ClaudeCodeOptions,
    ResultMessage,
    SystemMessage,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
    UserMessage,
    add_mcp_server,
    create_conversation,
    create_user_message,
    format_message,
    format_messages_as_jsonl,
)


class TestTurnHelpers:
    """Test helpers that build stdin turns."""

    def test_create_user_message(self):
        """Test the user turn shape."""
        assert create_user_message("Hello") == {
            "type": "user",
            "message": {
                "role": "user",
                "content": [{"type": "text", "text": "Hello"}],
            },
        }

    def test_create_conversation_skips_empty_turns(self):
        """Test empty and missing turns are left out."""
        turns = create_conversation("First", "", None, "Second")
        assert turns == [create_user_message("First"), create_user_message("Second")]

    def test_create_conversation_empty(self):
        """Test no turns gives an empty list."""
        assert create_conversation() == []

    def test_format_messages_as_jsonl(self):
        """Test each message becomes one JSON line."""
        turns = create_conversation("a\nb", "c")
        text = format_messages_as_jsonl(turns)
        lines = text.split("\n")
        assert len(lines) == 2
        assert [json.loads(line) for line in lines] == turns

    def test_format_messages_as_jsonl_empty(self):
        """Test no messages gives empty text."""
        assert format_messages_as_jsonl([]) == ""


class TestAddMcpServer:
    """Test add_mcp_server."""

    def test_wraps_config(self):
        """Test the config is keyed by server name."""
        config = {"command": "mcp-fs", "args": ["--root", "/tmp"]}
        assert add_mcp_server("fs", config) == {"fs": config}

    def test_combines_into_options(self):
        """Test several servers merge into options."""
        servers = {
            **add_mcp_server("fs", {"command": "mcp-fs"}),
            **add_mcp_server("web", {"type": "http", "url": "https://example.com/mcp"}),
        }
        options = ClaudeCodeOptions(mcp_servers=servers)
        assert set(options.mcp_servers) == {"fs", "web"}


class TestFormatMessage:
    """Test format_message."""

    def test_init_system_message_is_hidden(self):
        """Test the init system message renders as nothing."""
        message = SystemMessage(subtype="init", data={"type": "system", "subtype": "init"})
        assert format_message(message) == ""

    def test_other_system_message(self):
        """Test other system messages show their subtype."""
        message = SystemMessage(subtype="compact_boundary", data={})
        assert format_message(message) == "System: compact_boundary"

    def test_assistant_message(self):
        """Test each assistant block renders on its own line."""
        message = AssistantMessage(
            content=[
                TextBlock(text="Reading the file."),
                ToolUseBlock(id="t1", name="Read", input={"file_path": "a.txt"}),
                ToolResultBlock(tool_use_id="t1", content="hello"),
            ]
        )
        assert format_message(message) == (
            "Reading the file.\nTool: Read\nTool result: hello"
        )

    def test_result_message(self):
        """Test the result message shows the cost."""
        message = ResultMessage(
            subtype="success",
            duration_ms=10,
            is_error=False,
            num_turns=1,
            session_id="s",
            total_cost_usd=0.0123,
        )
        assert format_message(message) == "Cost: $0.012300"

    def test_result_message_without_cost(self):
        """Test a missing cost renders as zero."""
        message = ResultMessage(
            subtype="success", duration_ms=10, is_error=False, num_turns=1, session_id="s"
        )
        assert format_message(message) == "Cost: $0.000000"

    def test_text_block_without_text(self):
        """Test a text block with no text renders as an empty line."""
        message = AssistantMessage(content=[TextBlock(text=None), TextBlock(text="after")])
        assert format_message(message) == "\nafter"

    def test_user_message_is_hidden(self):
        """Test user messages render as nothing."""
        assert format_message(UserMessage(content="hi")) == ""
