"""Subprocess transport implementation using Claude Code CLI."""

import json
import logging
import tempfile
from collections.abc import AsyncIterable, AsyncIterator, Iterable
from pathlib import Path
from subprocess import PIPE
from typing import IO, Any

import anyio
import anyio.to_thread
from anyio.abc import ByteSendStream, Process
from anyio.streams.text import TextReceiveStream

from ..._errors import (
    CLIConnectionError,
    CLINotFoundError,
    ProcessError,
    describe_exit_failure,
)
from ...types import ClaudeCodeOptions
from ..cli_discovery import find_cli
from ..command import AUTH_ENV_VARS, build_command, build_env
from . import Transport
from .ndjson import MAX_BUFFER_SIZE, NDJSONDecoder
from .ndjson import logger as decoder_logger

logger = logging.getLogger(__name__)

# Seconds between the terminate signal and the kill signal
TERMINATE_GRACE_PERIOD = 5.0


class SubprocessCLITransport(Transport):
    """Subprocess transport using Claude Code CLI.

    Owns exactly one CLI process. With ``options.input_format`` set to
    ``"stream-json"`` stdin stays open for :meth:`send_messages`; otherwise the
    prompt travels on the command line and stdin is closed right after spawn.
    """

    def __init__(
        self,
        prompt: str | None,
        options: ClaudeCodeOptions,
        cli_path: str | Path | None = None,
    ):
        self._prompt = prompt
        self._options = options
        self._cli_path = find_cli(cli_path)
        self._cwd = str(options.cwd) if options.cwd else None
        self._process: Process | None = None
        self._stdin_stream: ByteSendStream | None = None
        self._stdout_stream: TextReceiveStream | None = None
        self._stderr_file: IO[bytes] | None = None
        self._max_buffer_size = MAX_BUFFER_SIZE
        self._debug = options.debug

        if self._debug:
            logger.setLevel(logging.DEBUG)
            decoder_logger.setLevel(logging.DEBUG)
            logger.debug(f"Initialized transport with CLI path: {self._cli_path}")

    def _build_command(self) -> list[str]:
        """Build CLI command with arguments."""
        return build_command(self._cli_path, self._options, self._prompt)

    async def connect(self) -> None:
        """Start subprocess."""
        if self._process:
            return

        if self._cwd and not Path(self._cwd).is_dir():
            raise CLIConnectionError(f"Working directory does not exist: {self._cwd}")

        cmd = self._build_command()
        env = build_env(self._options)

        if self._debug:
            logger.debug(f"Running command: {' '.join(cmd)}")
            logger.debug(f"Working directory: {self._cwd}")
            forwarded = [name for name in AUTH_ENV_VARS if name in env]
            logger.debug(f"Forwarding auth variables: {forwarded}")

        # stderr goes to a file, not a pipe: a pipe nobody drains until stdout
        # hits EOF would stall a CLI that writes a lot of diagnostics
        stderr_file = tempfile.TemporaryFile()
        try:
            self._process = await anyio.open_process(
                cmd,
                stdin=PIPE,
                stdout=PIPE,
                stderr=stderr_file,
                cwd=self._cwd,
                env=env,
            )
        except FileNotFoundError as e:
            stderr_file.close()
            raise CLINotFoundError("Claude Code not found at", cli_path=self._cli_path) from e
        except PermissionError as e:
            stderr_file.close()
            raise CLINotFoundError(
                "Claude Code is not executable", cli_path=self._cli_path
            ) from e
        except Exception as e:
            stderr_file.close()
            raise CLIConnectionError(f"Failed to start Claude Code: {e}") from e

        self._stderr_file = stderr_file
        self._stdin_stream = self._process.stdin
        if self._process.stdout:
            # Undecodable bytes become U+FFFD and fail as CLIJSONDecodeError
            self._stdout_stream = TextReceiveStream(self._process.stdout, errors="replace")

        if self._debug:
            logger.debug(f"Process started with PID {self._process.pid}")

        if self._options.streams_input:
            if self._debug:
                logger.debug("Keeping stdin open for streaming JSON input")
        else:
            # Prompt is already on the command line; EOF tells the CLI to start
            await self._close_stdin()

    async def disconnect(self) -> None:
        """Terminate subprocess and release its streams."""
        if not self._process:
            return

        process = self._process
        # Teardown must finish even when the caller is being cancelled
        with anyio.CancelScope(shield=True):
            try:
                if process.returncode is None:
                    process.terminate()
                    try:
                        with anyio.fail_after(TERMINATE_GRACE_PERIOD):
                            await process.wait()
                    except TimeoutError:
                        if self._debug:
                            logger.debug("Process termination timed out, killing...")
                        process.kill()
                        await process.wait()
            except ProcessLookupError:
                pass
            finally:
                await self._release_streams()
                self._process = None

    async def _release_streams(self) -> None:
        stdin_stream, self._stdin_stream = self._stdin_stream, None
        stdout_stream, self._stdout_stream = self._stdout_stream, None
        stderr_file, self._stderr_file = self._stderr_file, None

        # Each handle is closed on its own so one failure cannot leak the rest
        for name, stream in (("stdin", stdin_stream), ("stdout", stdout_stream)):
            if stream is None:
                continue
            try:
                await stream.aclose()
            except Exception as e:
                logger.debug(f"Ignoring error while closing {name}: {e}")

        if stderr_file is not None:
            try:
                stderr_file.close()
            except OSError as e:
                logger.debug(f"Ignoring error while closing stderr: {e}")

    async def _close_stdin(self) -> None:
        stdin_stream, self._stdin_stream = self._stdin_stream, None
        if stdin_stream is not None:
            await stdin_stream.aclose()

    async def send_message(self, message: dict[str, Any]) -> None:
        """Write one JSON message to stdin as a single line."""
        if not self._process or not self._stdin_stream:
            raise CLIConnectionError("Not connected to CLI")

        json_line = json.dumps(message) + "\n"
        if self._debug:
            logger.debug(f"Sending JSON message: {json_line.strip()[:100]}")

        try:
            await self._stdin_stream.send(json_line.encode())
        except anyio.ClosedResourceError as e:
            raise CLIConnectionError("Not connected to CLI") from e
        except (BrokenPipeError, ConnectionResetError, anyio.BrokenResourceError) as e:
            raise CLIConnectionError("CLI process terminated unexpectedly") from e

    async def send_messages(
        self, messages: Iterable[dict[str, Any]] | AsyncIterable[dict[str, Any]]
    ) -> None:
        """Send every message in order, then close stdin to end the input."""
        if not self._process or not self._stdin_stream:
            raise CLIConnectionError("Not connected to CLI")

        if isinstance(messages, AsyncIterable):
            async for message in messages:
                await self.send_message(message)
        else:
            for message in messages:
                await self.send_message(message)

        await self._close_stdin()

    async def receive_messages(self) -> AsyncIterator[dict[str, Any]]:
        """Receive messages from CLI.

        Objects are yielded in the order the CLI wrote them. Once stdout ends
        the exit status is checked; a non-zero status raises ProcessError with
        the captured stderr.
        """
        if not self._process or not self._stdout_stream:
            raise CLIConnectionError("Not connected")

        decoder = NDJSONDecoder(max_buffer_size=self._max_buffer_size, debug=self._debug)

        try:
            async for chunk in self._stdout_stream:
                for data in decoder.feed(chunk):
                    yield data
        except (anyio.ClosedResourceError, anyio.EndOfStream):
            pass

        for data in decoder.finish():
            yield data

        returncode = await self._process.wait()
        stderr_output = await anyio.to_thread.run_sync(self._read_stderr)

        if returncode:
            debug_info = None
            if self._debug:
                debug_info = {
                    "CLI path": self._cli_path,
                    "Working directory": self._cwd or "current",
                }
            raise ProcessError(
                describe_exit_failure(stderr_output, debug_info),
                exit_code=returncode,
                stderr=stderr_output,
            )

    def _read_stderr(self) -> str:
        if self._stderr_file is None:
            return ""
        self._stderr_file.seek(0)
        return self._stderr_file.read().decode("utf-8", errors="replace")

    def is_connected(self) -> bool:
        """Check if subprocess is running."""
        return self._process is not None and self._process.returncode is None
