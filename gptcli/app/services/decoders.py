"""Response decoders: streamed chat deltas, vision descriptions, image URLs."""
from __future__ import annotations

from typing import AsyncIterable, TextIO

from pydantic import ValidationError

from gptcli.app.core.constants import NO_VISION_CONTENT
from gptcli.app.core.errors import DecodeError, OutputError
from gptcli.app.core.logging import get_logger
from gptcli.app.domain.schemas import ChatChunk, ImageGenerationResponse, VisionResponse
from gptcli.app.services.line_buffer import LineBuffer

logger = get_logger(__name__)

DATA_PREFIX = b"data: "


def emit(out: TextIO, text: str) -> None:
    """Write ``text`` and flush so it shows up immediately."""
    try:
        out.write(text)
        out.flush()
    except (OSError, ValueError) as exc:
        raise OutputError(f"Failed to write output: {exc}") from exc


def parse_stream_line(line: bytes) -> ChatChunk | None:
    """Parse one framed line; ``None`` for blank, sentinel or malformed lines."""
    if line.startswith(DATA_PREFIX):
        line = line[len(DATA_PREFIX):]
    line = line.strip()
    if not line:
        return None
    try:
        return ChatChunk.model_validate_json(line)
    except ValidationError:
        logger.debug("Skipping non-data stream line", data={"line": line[:80]})
        return None


async def decode_chat_stream(chunks: AsyncIterable[bytes], out: TextIO) -> int:
    """Print chat deltas as they arrive, then a trailing newline.

    Returns the number of fragments written.
    """
    buffer = LineBuffer()
    emitted = 0
    async for chunk in chunks:
        for line in buffer.feed(chunk):
            record = parse_stream_line(line)
            if record is None:
                continue
            for choice in record.choices:
                if choice.delta.content:
                    emit(out, choice.delta.content)
                    emitted += 1

    if buffer.remainder:
        logger.debug(
            "Discarding unterminated stream tail",
            data={"bytes": len(buffer.remainder)},
        )
    emit(out, "\n")
    return emitted


def decode_vision(body: bytes | str, out: TextIO) -> None:
    try:
        response = VisionResponse.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeError(
            "Failed to parse vision response",
            detail={"errors": exc.error_count()},
        ) from exc

    if response.choices:
        text = response.choices[0].message.content
    else:
        text = NO_VISION_CONTENT
    emit(out, f"{text}\n")


def decode_image_generation(body: bytes | str, out: TextIO) -> None:
    try:
        response = ImageGenerationResponse.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeError(
            "Failed to parse image generation response",
            detail={"errors": exc.error_count()},
        ) from exc

    for image in response.data:
        emit(out, f"{image.url}\n")
