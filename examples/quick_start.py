#!/usr/bin/env python3
"""Quick start examples for the Claude Code stream client."""

from contextlib import aclosing

import anyio

from claude_code_stream import (
    AssistantMessage,
    ClaudeCodeOptions,
    ResultMessage,
    TextBlock,
    continue_conversation,
    format_message,
    query,
)


async def basic_example():
    """Ask a single question and print the answer."""
    print("=== Basic Example ===")

    async for message in query(prompt="What is 2 + 2?"):
        if isinstance(message, AssistantMessage):
            for block in message.content:
                if isinstance(block, TextBlock):
                    print(f"Claude: {block.text}")
    print()


async def with_options_example():
    """Use a custom system prompt and a turn limit."""
    print("=== With Options Example ===")

    options = ClaudeCodeOptions(
        system_prompt="You are a helpful assistant that explains things simply.",
        max_turns=1,
    )

    async for message in query(
        prompt="Explain what Python is in one sentence.", options=options
    ):
        if text := format_message(message):
            print(text)
    print()


async def with_tools_example():
    """Let Claude use tools and report what the run cost."""
    print("=== With Tools Example ===")

    options = ClaudeCodeOptions(
        allowed_tools=["Read", "Write"],
        system_prompt="You are a helpful file assistant.",
    )

    async for message in query(
        prompt="Create a file called hello.txt with 'Hello, World!' in it",
        options=options,
    ):
        if isinstance(message, AssistantMessage):
            for block in message.content:
                if isinstance(block, TextBlock):
                    print(f"Claude: {block.text}")
        elif isinstance(message, ResultMessage) and message.total_cost_usd:
            print(f"\nCost: ${message.total_cost_usd:.4f}")
    print()


async def first_answer_only_example():
    """Stop after the first assistant message; the CLI is stopped too."""
    print("=== First Answer Only Example ===")

    async with aclosing(query(prompt="Count slowly from 1 to 20.")) as messages:
        async for message in messages:
            if isinstance(message, AssistantMessage):
                print(format_message(message))
                break
    print()


async def continue_example():
    """Pick up the most recent conversation in this directory."""
    print("=== Continue Conversation Example ===")

    async for message in continue_conversation("Summarise what we just did."):
        if text := format_message(message):
            print(text)
    print()


async def main():
    """Run all examples."""
    await basic_example()
    await with_options_example()
    await with_tools_example()
    await first_answer_only_example()
    await continue_example()


if __name__ == "__main__":
    anyio.run(main)
