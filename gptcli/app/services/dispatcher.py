from __future__ import annotations

import asyncio
import sys
from typing import Sequence, TextIO

import httpx

from gptcli.app.config.settings import Settings
from gptcli.app.core.errors import ServerError
from gptcli.app.core.logging import command_ctx, endpoint_ctx, get_logger
from gptcli.app.providers.openai_compat import OpenAIClient
from gptcli.app.providers.types import RequestKind
from gptcli.app.domain.services.request_builder import build_request
from gptcli.app.services.decoders import (
    decode_chat_stream,
    decode_image_generation,
    decode_vision,
)

logger = get_logger(__name__)


async def run_command(
    args: Sequence[str],
    *,
    settings: Settings,
    api_key: str | None,
    client: httpx.AsyncClient | None = None,
    out: TextIO | None = None,
) -> None:
    """Build, send and render one request.

    Raises a ``GptCliError`` subclass on any failure; output already written
    stays written.
    """
    out = out or sys.stdout
    request, url = build_request(args, settings)
    command_ctx.set(request.kind.value)
    endpoint_ctx.set(url)

    transport = OpenAIClient(
        api_key=api_key,
        timeout_seconds=settings.request_timeout_seconds,
        client=client,
    )
    try:
        # One deadline for the whole exchange; a chat stream drops it once
        # headers arrive and then runs until the server closes.
        async with asyncio.timeout(settings.request_timeout_seconds) as deadline:
            async with transport.post(url, request.payload) as response:
                if not response.is_success:
                    body = await transport.read_text(response)
                    logger.warning(
                        "Request failed",
                        data={"status": response.status_code},
                    )
                    raise ServerError(response.status_code, body)

                if request.kind is RequestKind.CHAT:
                    deadline.reschedule(None)
                    emitted = await decode_chat_stream(transport.iter_bytes(response), out)
                    logger.info("Stream finished", data={"fragments": emitted})
                elif request.kind is RequestKind.VISION:
                    decode_vision(await transport.read_body(response), out)
                else:
                    decode_image_generation(await transport.read_body(response), out)
    except TimeoutError as exc:
        raise transport.timeout_error() from exc
    finally:
        if client is None:
            await transport.aclose()
