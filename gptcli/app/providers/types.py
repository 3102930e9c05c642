from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from gptcli.app.domain.schemas import ChatPayload, DallePayload, VisionPayload


class RequestKind(str, Enum):
    CHAT = "chat"
    VISION = "vision"
    DALLE = "dalle"


@dataclass(frozen=True)
class ChatRequest:
    payload: ChatPayload
    kind: ClassVar[RequestKind] = RequestKind.CHAT


@dataclass(frozen=True)
class VisionRequest:
    payload: VisionPayload
    kind: ClassVar[RequestKind] = RequestKind.VISION


@dataclass(frozen=True)
class DalleRequest:
    payload: DallePayload
    kind: ClassVar[RequestKind] = RequestKind.DALLE


RequestVariant = Union[ChatRequest, VisionRequest, DalleRequest]
