"""Shared error types.

Every failure a command can hit is a ``GptCliError``; ``main`` maps the
subclass to an exit code and prints ``message``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class GptCliError(Exception):
    code: str
    message: str
    detail: dict | None = None

    exit_code: ClassVar[int] = 1

    def __str__(self) -> str:
        return self.message


class ConfigError(GptCliError):
    exit_code = 2

    def __init__(self, message: str, detail: dict | None = None):
        super().__init__(code="CONFIG_ERROR", message=message, detail=detail)


class ResourceError(GptCliError):
    exit_code = 3

    def __init__(self, message: str, path: str | None = None):
        super().__init__(
            code="RESOURCE_ERROR",
            message=message,
            detail={"path": path} if path is not None else None,
        )
        self.path = path


class TransportError(GptCliError):
    exit_code = 4

    def __init__(self, message: str, detail: dict | None = None):
        super().__init__(code="TRANSPORT_ERROR", message=message, detail=detail)


class ServerError(GptCliError):
    exit_code = 5

    def __init__(self, status_code: int, body: str | None = None):
        super().__init__(
            code="SERVER_ERROR",
            message=f"Failed with status code: {status_code}",
            detail={"status_code": status_code, "body": body},
        )
        self.status_code = status_code
        self.body = body


class DecodeError(GptCliError):
    exit_code = 6

    def __init__(self, message: str, detail: dict | None = None):
        super().__init__(code="DECODE_ERROR", message=message, detail=detail)


class OutputError(GptCliError):
    exit_code = 7

    def __init__(self, message: str, detail: dict | None = None):
        super().__init__(code="OUTPUT_ERROR", message=message, detail=detail)
