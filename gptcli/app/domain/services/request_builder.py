"""Map raw command-line arguments to a request variant and its endpoint."""
from __future__ import annotations

import base64
from pathlib import Path
from typing import Sequence

from gptcli.app.config.settings import Settings
from gptcli.app.core.constants import (
    CMD_DALLE,
    CMD_GPT4,
    CMD_VISION,
    DALLE_MODEL,
    DEFAULT_MODEL,
    DEFAULT_VISION_INSTRUCTIONS,
    GPT4_MODEL,
    GPT4_VISION_MODEL,
    SYSTEM_PREAMBLE,
    VISION_MEDIA_TYPE,
)
from gptcli.app.core.errors import ResourceError
from gptcli.app.core.logging import get_logger
from gptcli.app.domain.schemas import (
    ChatMessage,
    ChatPayload,
    DallePayload,
    ImageUrl,
    ImageUrlPart,
    TextPart,
    VisionMessage,
    VisionPayload,
)
from gptcli.app.providers.types import (
    ChatRequest,
    DalleRequest,
    RequestKind,
    RequestVariant,
    VisionRequest,
)

logger = get_logger(__name__)


def encode_image(image_path: str) -> str:
    """Read an image file and return its base64 text."""
    try:
        raw = Path(image_path).read_bytes()
    except OSError as exc:
        raise ResourceError(
            f"Failed to read image file: {image_path} ({exc.strerror or exc})",
            path=image_path,
        ) from exc
    return base64.b64encode(raw).decode("ascii")


def build_chat_request(prompt: str, model: str) -> ChatRequest:
    return ChatRequest(
        payload=ChatPayload(
            model=model,
            messages=[
                ChatMessage(role="system", content=SYSTEM_PREAMBLE),
                ChatMessage(role="user", content=prompt),
            ],
            stream=True,
        )
    )


def build_vision_request(args: Sequence[str]) -> VisionRequest:
    """Build a vision request from ``[prog, "v", <image>, *instructions]``.

    The image is always labelled ``image/jpeg`` whatever its real format.
    """
    if len(args) < 3:
        raise ResourceError("Vision requests need an image path")
    image_path = args[2]
    instructions = " ".join(args[3:]) if len(args) > 3 else DEFAULT_VISION_INSTRUCTIONS
    image_base64 = encode_image(image_path)
    logger.debug(
        "Encoded vision image",
        data={"path": image_path, "base64_chars": len(image_base64)},
    )

    return VisionRequest(
        payload=VisionPayload(
            model=GPT4_VISION_MODEL,
            messages=[
                VisionMessage(
                    role="user",
                    content=[
                        TextPart(text=instructions),
                        ImageUrlPart(
                            image_url=ImageUrl(
                                url=f"data:{VISION_MEDIA_TYPE};base64,{image_base64}"
                            )
                        ),
                    ],
                )
            ],
        )
    )


def build_dalle_request(prompt: str) -> DalleRequest:
    return DalleRequest(payload=DallePayload(model=DALLE_MODEL, prompt=prompt))


def endpoint_for(kind: RequestKind, settings: Settings) -> str:
    """Return the endpoint URL for a request kind."""
    if kind is RequestKind.DALLE:
        return settings.image_generations_url
    return settings.chat_completions_url


def build_request(args: Sequence[str], settings: Settings) -> tuple[RequestVariant, str]:
    """Classify ``args`` (argv including the program name) into one request.

    ``args[1]`` selects the command; anything unrecognised is a plain chat
    prompt whose text starts at ``args[1]``.
    """
    command = args[1] if len(args) > 1 else None

    request: RequestVariant
    if command == CMD_GPT4:
        request = build_chat_request(" ".join(args[2:]), GPT4_MODEL)
    elif command == CMD_VISION:
        request = build_vision_request(args)
    elif command == CMD_DALLE:
        request = build_dalle_request(" ".join(args[2:]))
    else:
        request = build_chat_request(" ".join(args[1:]), DEFAULT_MODEL)

    return request, endpoint_for(request.kind, settings)
