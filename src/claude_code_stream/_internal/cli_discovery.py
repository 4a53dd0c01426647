"""Locate the Claude Code CLI binary."""

import glob
import shutil
from pathlib import Path

from .._errors import CLINotFoundError


def _candidate_locations() -> list[Path]:
    home = Path.home()
    return [
        home / ".claude/local/claude",
        home / ".npm-global/bin/claude",
        Path("/usr/local/bin/claude"),
        home / ".local/bin/claude",
        home / "node_modules/.bin/claude",
        home / ".yarn/bin/claude",
        Path("/opt/homebrew/bin/claude"),  # macOS ARM
        Path("/usr/local/lib/node_modules/@anthropic-ai/claude-code/bin/claude"),
        home / ".nvm/versions/node/*/bin/claude",  # nvm installations
    ]


def find_cli(cli_path: str | Path | None = None) -> str:
    """Resolve the CLI executable.

    An explicit ``cli_path`` wins and is returned as given; whether it can
    actually be executed is only known once the process is spawned. Then
    ``PATH`` is searched, then the usual npm, yarn and Homebrew install
    locations.

    Raises:
        CLINotFoundError: with install guidance that tells a missing Node.js
            apart from a missing CLI
    """
    if cli_path:
        return str(cli_path)

    if cli := shutil.which("claude"):
        return cli

    for path in _candidate_locations():
        if "*" in str(path):
            for expanded in sorted(glob.glob(str(path))):
                if Path(expanded).is_file():
                    return expanded
        elif path.exists() and path.is_file():
            return str(path)

    if shutil.which("node") is None:
        error_msg = "Claude Code requires Node.js, which is not installed.\n\n"
        error_msg += "Install Node.js from: https://nodejs.org/\n"
        error_msg += "\nAfter installing Node.js, install Claude Code:\n"
        error_msg += "  npm install -g @anthropic-ai/claude-code"
        raise CLINotFoundError(error_msg)

    raise CLINotFoundError(
        "Claude Code not found. Install with:\n"
        "  npm install -g @anthropic-ai/claude-code\n"
        "\nIf already installed locally, try:\n"
        '  export PATH="$HOME/node_modules/.bin:$PATH"\n'
        "\nOr pass the path explicitly:\n"
        "  query(prompt=..., cli_path='/path/to/claude')"
    )
