"""
Command line front end for openai-lite.

    openai-lite chat "Hello!" --stream
    openai-lite embed "first text" "second text"
    openai-lite models
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .core import OpenAILiteError, reload_settings
from .models import ChatCompletion, ChatCompletionMessage
from .services import OpenAIClient


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="openai-lite",
        description="Talk to the OpenAI API. Reads OPENAI_KEY and OPENAI_BASE_URL from the environment or .env.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    chat = subparsers.add_parser("chat", help="Send one chat message")
    chat.add_argument("prompt", help="User message")
    chat.add_argument("--model", default="gpt-4o-mini", help="Model ID")
    chat.add_argument("--system", default=None, help="Optional system message")
    chat.add_argument("--temperature", type=float, default=None, help="Sampling temperature")
    chat.add_argument("--stream", action="store_true", help="Print tokens as they arrive")

    embed = subparsers.add_parser("embed", help="Embed texts and print their distances")
    embed.add_argument("texts", nargs="+", help="Texts to embed")
    embed.add_argument("--model", default="text-embedding-3-small", help="Model ID")

    subparsers.add_parser("models", help="List available models")
    return parser


async def run_chat(args: argparse.Namespace) -> None:
    messages: List[ChatCompletionMessage] = []
    if args.system:
        messages.append(ChatCompletionMessage(role="system", content=args.system))
    messages.append(ChatCompletionMessage(role="user", content=args.prompt))

    builder = ChatCompletion.builder(args.model, messages)
    if args.temperature is not None:
        builder = builder.temperature(args.temperature)

    async with OpenAIClient() as client:
        if args.stream:
            async for delta in builder.create_stream(client):
                for choice in delta.choices:
                    if choice.delta.content:
                        print(choice.delta.content, end="", flush=True)
            print()
            return
        completion = await builder.create(client)
    for choice in completion.choices:
        print(choice.message.content or "")


async def run_embed(args: argparse.Namespace) -> None:
    async with OpenAIClient() as client:
        embeddings = await client.embeddings.create(args.model, args.texts)
    for text, embedding in zip(args.texts, embeddings.data):
        print(f"{len(embedding.vec):>5} dims  {text}")
    for index, distance in enumerate(embeddings.distances(), start=1):
        print(f"distance {index - 1}->{index}: {distance:.6f}")


async def run_models(args: argparse.Namespace) -> None:
    async with OpenAIClient() as client:
        models = await client.models.list()
    for model in sorted(models.data, key=lambda m: m.id):
        print(f"{model.id}\t{model.owned_by}")


COMMANDS = {
    "chat": run_chat,
    "embed": run_embed,
    "models": run_models,
}


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    try:
        reload_settings()
        asyncio.run(COMMANDS[args.command](args))
    except OpenAILiteError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
