"""Pydantic wire models for OpenAI request payloads and responses."""
from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from gptcli.app.core.constants import (
    DALLE_IMAGE_COUNT,
    DALLE_QUALITY,
    DALLE_SIZE,
    VISION_MAX_TOKENS,
)


# Outbound payloads

class ChatMessage(BaseModel):
    role: str
    content: str


class ChatPayload(BaseModel):
    model: str
    messages: list[ChatMessage]
    stream: bool = True


class ImageUrl(BaseModel):
    url: str


class TextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImageUrlPart(BaseModel):
    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl


ContentPart = Annotated[Union[TextPart, ImageUrlPart], Field(discriminator="type")]


class VisionMessage(BaseModel):
    role: str = "user"
    content: list[ContentPart]


class VisionPayload(BaseModel):
    model: str
    messages: list[VisionMessage]
    max_tokens: int = Field(default=VISION_MAX_TOKENS, ge=1)


class DallePayload(BaseModel):
    model: str
    prompt: str
    n: int = Field(default=DALLE_IMAGE_COUNT, ge=1, le=255)
    size: str = DALLE_SIZE
    quality: str = DALLE_QUALITY


# Inbound responses

class ChatDelta(BaseModel):
    content: str | None = None


class ChatChunkChoice(BaseModel):
    delta: ChatDelta


class ChatChunk(BaseModel):
    """One ``data:`` record of a streamed chat completion."""

    choices: list[ChatChunkChoice]


class VisionResponseMessage(BaseModel):
    content: str


class VisionChoice(BaseModel):
    message: VisionResponseMessage


class VisionResponse(BaseModel):
    choices: list[VisionChoice]


class GeneratedImage(BaseModel):
    url: str


class ImageGenerationResponse(BaseModel):
    data: list[GeneratedImage]
