"""Build the CLI argument vector and child environment from options."""

import json
import os
from collections.abc import Mapping
from typing import Any

from ..types import ClaudeCodeOptions

ENTRYPOINT = "sdk-py"

# Credentials and backend switches the CLI reads; forwarded, never invented
AUTH_ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "CLAUDE_CODE_USE_BEDROCK",
    "CLAUDE_CODE_USE_VERTEX",
)


def build_command(
    cli_path: str, options: ClaudeCodeOptions, prompt: str | None = None
) -> list[str]:
    """Build CLI command with arguments.

    In streaming mode the prompt is ignored; turns arrive on stdin instead.
    """
    cmd = [cli_path, "--output-format", options.output_format or "stream-json", "--verbose"]

    if options.input_format:
        cmd.extend(["--input-format", options.input_format])

    if options.system_prompt:
        cmd.extend(["--system-prompt", options.system_prompt])

    if options.append_system_prompt:
        cmd.extend(["--append-system-prompt", options.append_system_prompt])

    if options.allowed_tools:
        cmd.extend(["--allowedTools", ",".join(options.allowed_tools)])

    if options.max_turns:
        cmd.extend(["--max-turns", str(options.max_turns)])

    if options.disallowed_tools:
        cmd.extend(["--disallowedTools", ",".join(options.disallowed_tools)])

    if options.model:
        cmd.extend(["--model", options.model])

    if options.permission_prompt_tool_name:
        cmd.extend(["--permission-prompt-tool", options.permission_prompt_tool_name])

    if options.permission_mode:
        cmd.extend(["--permission-mode", options.permission_mode])

    if options.continue_conversation:
        cmd.append("--continue")

    if options.resume:
        cmd.extend(["--resume", options.resume])

    if options.mcp_servers:
        cmd.extend(["--mcp-config", json.dumps({"mcpServers": options.mcp_servers})])

    if options.streams_input:
        cmd.append("--print")
    else:
        cmd.extend(["--print", prompt or ""])

    return cmd


def build_env(
    options: ClaudeCodeOptions, base: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Environment for the child process.

    Built fresh per spawn so concurrent queries never see each other's
    settings and the host's ``os.environ`` is left untouched.
    """
    source = os.environ if base is None else base
    env = {**source, **options.env}
    env["CLAUDE_CODE_ENTRYPOINT"] = ENTRYPOINT
    return env
