#!/usr/bin/env python3
"""Example usage of the OpenAI API client."""

import asyncio
import os

from openai_api import ApiError, ChatConfig, ChatRole, Client, CompletionConfig


async def main():
    async with Client(os.getenv("OPENAI_API_KEY", "dummy-key")) as client:
        # Example 1: Bare prompt, every other argument defaulted
        print("Example 1: Bare prompt")
        try:
            completion = await client.complete_prompt("Once upon a time")
            print(f"Completion: {completion}")
        except ApiError as e:
            print(f"Error: {e}")

        # Example 2: Builder with explicit arguments
        print("\nExample 2: Builder")
        config = (
            CompletionConfig.builder()
            .model("gpt-3.5-turbo-instruct")
            .prompt("Q: What is the capital of France?\nA:")
            .max_tokens(10)
            .temperature(0.0)
            .stop("\n")
            .build()
        )
        try:
            completion = await client.complete_prompt(config)
            print(f"Answer: {completion.choices[0].text.strip()}")
            print(f"Finish reason: {completion.choices[0].finish_reason}")
        except ApiError as e:
            print(f"Error: {e}")

        # Example 3: Chat from role/content pairs
        print("\nExample 3: Chat")
        try:
            answer = await client.chat(
                ChatConfig.from_messages(
                    [
                        (ChatRole.SYSTEM, "You are a helpful assistant."),
                        (ChatRole.USER, "Hello, how are you?"),
                    ]
                )
            )
            print(f"Assistant: {answer.content}")
        except ApiError as e:
            print(f"Error: {e}")


if __name__ == "__main__":
    asyncio.run(main())
