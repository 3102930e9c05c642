import asyncio
import io
import json
import logging
import os

import httpx
import pytest

# Keep a developer's real credential and log settings out of the tests
for _name in ("OPENAI_API_KEY", "LOG_LEVEL", "LOG_JSON", "LOG_FILE", "CHAT_COMPLETIONS_URL", "IMAGE_GENERATIONS_URL"):
    os.environ.pop(_name, None)

from gptcli.app.config.settings import Settings

CHAT_URL = "https://api.test/v1/chat/completions"
IMAGES_URL = "https://api.test/v1/images/generations"


class RecordingTransport(httpx.AsyncBaseTransport):
    """Mock transport that records requests and replies with a fixed response.

    ``chunks`` are delivered one by one through the response stream so tests can
    control where network chunk boundaries fall.
    """

    def __init__(
        self,
        status_code: int = 200,
        chunks: list[bytes] | None = None,
        error: Exception | None = None,
        stream_error: Exception | None = None,
        response_delay: float = 0,
        chunk_delay: float = 0,
    ):
        self.status_code = status_code
        self.chunks = chunks or []
        self.error = error
        self.stream_error = stream_error
        self.response_delay = response_delay
        self.chunk_delay = chunk_delay
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.response_delay:
            await asyncio.sleep(self.response_delay)
        if self.error is not None:
            raise self.error
        return httpx.Response(
            self.status_code,
            stream=ChunkStream(self.chunks, self.stream_error, self.chunk_delay),
        )

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


class ChunkStream(httpx.AsyncByteStream):
    def __init__(self, chunks: list[bytes], error: Exception | None = None, delay: float = 0):
        self.chunks = chunks
        self.error = error
        self.delay = delay

    async def __aiter__(self):
        for chunk in self.chunks:
            if self.delay:
                await asyncio.sleep(self.delay)
            yield chunk
        if self.error is not None:
            raise self.error


class FailingSink(io.StringIO):
    def write(self, s):
        raise OSError("broken pipe")


class FlushFailingSink:
    def __init__(self):
        self.written = []

    def write(self, s):
        self.written.append(s)
        return len(s)

    def flush(self):
        raise OSError("broken pipe")


class RecordingSink:
    """Text sink that logs every write and flush in call order."""

    def __init__(self):
        self.events: list[tuple[str, str | None]] = []

    def write(self, s):
        self.events.append(("write", s))
        return len(s)

    def flush(self):
        self.events.append(("flush", None))


async def aiter_chunks(chunks):
    for chunk in chunks:
        yield chunk


def sse(*records) -> bytes:
    """Encode records as ``data:`` lines; strings are sent verbatim."""
    lines = []
    for record in records:
        text = record if isinstance(record, str) else json.dumps(record)
        lines.append(f"data: {text}\n")
    return "".join(lines).encode("utf-8")


def delta(content):
    return {"choices": [{"delta": {"content": content}}]}


@pytest.fixture(autouse=True)
def restore_root_logging():
    """``main`` reconfigures the root logger; put pytest's handlers back."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(saved_level)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        openai_api_key="test-key",
        chat_completions_url=CHAT_URL,
        image_generations_url=IMAGES_URL,
    )


@pytest.fixture
def image_file(tmp_path):
    path = tmp_path / "astronaut.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0fake-jpeg")
    return path


@pytest.fixture
def out():
    return io.StringIO()
