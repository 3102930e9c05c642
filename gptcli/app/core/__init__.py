from .errors import (
    ConfigError,
    DecodeError,
    GptCliError,
    OutputError,
    ResourceError,
    ServerError,
    TransportError,
)
from .logging import command_ctx, endpoint_ctx, get_logger, setup_logging

__all__ = [
    "GptCliError",
    "ConfigError",
    "ResourceError",
    "TransportError",
    "ServerError",
    "DecodeError",
    "OutputError",
    "command_ctx",
    "endpoint_ctx",
    "get_logger",
    "setup_logging",
]
