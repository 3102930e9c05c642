#!/usr/bin/env python3
"""Smoke test for end-to-end chat streaming against the real OpenAI API.

Usage:
  python scripts/smoke_stream.py --message "Say hello in five words"

Environment fallbacks:
  OPENAI_API_KEY, CHAT_COMPLETIONS_URL
"""
from __future__ import annotations

import argparse
import asyncio
import io
import sys

from gptcli.app.config.settings import get_settings
from gptcli.app.core.errors import GptCliError
from gptcli.app.core.logging import setup_logging
from gptcli.app.services.dispatcher import run_command


class TeeSink(io.StringIO):
    """Collect streamed output while echoing it to stdout."""

    def __init__(self, quiet: bool):
        super().__init__()
        self.quiet = quiet

    def write(self, s: str) -> int:
        if not self.quiet:
            sys.stdout.write(s)
        return super().write(s)

    def flush(self) -> None:
        if not self.quiet:
            sys.stdout.flush()
        super().flush()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="gptcli streaming smoke test")
    parser.add_argument("--model-command", default="", choices=["", "4"], help="'' for the default model, '4' for GPT-4")
    parser.add_argument("--message", default="Smoke test: reply with one short sentence")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--quiet", action="store_true")
    return parser.parse_args()


def exit_with(message: str, code: int = 1) -> None:
    print(message, file=sys.stderr)
    raise SystemExit(code)


def main() -> None:
    args = parse_args()
    setup_logging(level=args.log_level, json_output=False)
    settings = get_settings()

    argv = ["gpt"]
    if args.model_command:
        argv.append(args.model_command)
    argv.extend(args.message.split())

    sink = TeeSink(quiet=args.quiet)
    try:
        asyncio.run(run_command(argv, settings=settings, api_key=settings.openai_api_key, out=sink))
    except GptCliError as exc:
        exit_with(f"Smoke test failed: [{exc.code}] {exc.message}")

    streamed = sink.getvalue()
    if not streamed.endswith("\n"):
        exit_with("Stream ended without trailing newline")
    if not streamed.strip():
        exit_with("No delta text received")

    if not args.quiet:
        print("Smoke test passed")
        print(f"assistant_chars={len(streamed.strip())}")


if __name__ == "__main__":
    main()
