#!/usr/bin/env python3
"""Send several user turns to the CLI over stdin in one process."""

import anyio

from claude_code_stream import (
    ClaudeCodeOptions,
    ResultMessage,
    create_conversation,
    create_user_message,
    format_message,
    format_messages_as_jsonl,
    query,
    stream_json_query,
)


async def conversation_example():
    """Send a prepared list of turns."""
    print("=== Multi-turn Conversation ===")

    turns = create_conversation(
        "Hello! I'm working on a Python project.",
        "Can you suggest a name for a CLI tool that tidies log files?",
        "Give me one more option.",
    )

    async for message in stream_json_query(turns, options=ClaudeCodeOptions(max_turns=3)):
        if text := format_message(message):
            print(text)
    print()


async def generated_turns_example():
    """Produce turns lazily from an async generator."""
    print("=== Generated Turns ===")

    async def turns():
        for topic in ("recursion", "closures"):
            yield create_user_message(f"Explain {topic} in one sentence.")

    async for message in query(prompt=turns()):
        if text := format_message(message):
            print(text)
        if isinstance(message, ResultMessage):
            print(f"Session: {message.session_id}")
    print()


def jsonl_example():
    """Show the exact lines written to the CLI's stdin."""
    print("=== JSONL Sent to stdin ===")

    turns = create_conversation("What is 2 + 2?", "And times 3?")
    print(format_messages_as_jsonl(turns))
    print()


async def main():
    """Run all examples."""
    jsonl_example()
    await conversation_example()
    await generated_turns_example()


if __name__ == "__main__":
    anyio.run(main)
