from __future__ import annotations

import asyncio
import sys
from typing import Sequence, TextIO

from pydantic import ValidationError

from gptcli.app.config.settings import Settings, get_settings
from gptcli.app.core.constants import HELP_FLAGS
from gptcli.app.core.errors import ConfigError, GptCliError, ServerError
from gptcli.app.core.logging import get_logger, setup_logging
from gptcli.app.services.dispatcher import run_command

logger = get_logger("gptcli")

HELP_TEXT = """\
━━━━━━━━━━━━━━━━━━━━━━━━━━ GPTCLI ━━━━━━━━━━━━━━━━━━━━━━━━━━
Usage:
  gpt [option] <argument>

Options:
      GPT-3.5-Turbo (default for text prompts).
  4   GPT-4 model for text prompts.
  v   GPT-4 Vision model for image analysis.
  d   DALL-E 3 model for image generation.
  -h, -help, --help  Display this help message.

Arguments:
  <prompt>  A text prompt for GPT-3.5-Turbo.
  4 <prompt>  A text prompt for GPT-4.
  v <image_path> [description]  A path to an image file and optional description for GPT-4 Vision.
  d <prompt>  A text prompt for DALL-E 3.

Examples:
  gpt What is the capital of California?
  gpt 4 What is the meaning of life?
  gpt v rust_astronaut.jpg What colors are in this image?
  gpt d An astronaut on Mars in a rusty spacesuit holding a crab

Environment:
  OPENAI_API_KEY  API key sent as a bearer token (required).
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""


def wants_help(args: Sequence[str]) -> bool:
    return len(args) < 2 or any(arg in HELP_FLAGS for arg in args[1:])


def load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"])
        raise ConfigError(f"Invalid configuration: {fields or exc}") from exc


def report_error(exc: GptCliError, err: TextIO) -> None:
    print(f"Error: {exc.message}", file=err)
    if isinstance(exc, ServerError) and exc.body:
        print(f"Response error message: {exc.body}", file=err)


def main(argv: Sequence[str] | None = None, out: TextIO | None = None, err: TextIO | None = None) -> int:
    """Run one command and return the process exit code."""
    args = list(sys.argv if argv is None else argv)
    out = out or sys.stdout
    err = err or sys.stderr

    if wants_help(args):
        out.write(HELP_TEXT)
        out.flush()
        return 0

    try:
        settings = load_settings()
        try:
            setup_logging(
                level=settings.log_level,
                json_output=settings.log_json,
                log_file=settings.log_file or None,
            )
        except OSError as exc:
            raise ConfigError(f"Cannot open log file {settings.log_file}: {exc}") from exc
        asyncio.run(
            run_command(args, settings=settings, api_key=settings.openai_api_key, out=out)
        )
    except GptCliError as exc:
        logger.debug("Command failed", data={"code": exc.code, "detail": exc.detail})
        report_error(exc, err)
        return exc.exit_code
    except KeyboardInterrupt:
        print("Interrupted", file=err)
        return 130
    return 0


def run() -> None:
    """Console-script entry point."""
    raise SystemExit(main())


if __name__ == "__main__":
    run()
