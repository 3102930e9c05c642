from __future__ import annotations


class LineBuffer:
    """Incremental newline framer for a chunked byte stream.

    ``feed`` returns every line completed by the new chunk (without the
    trailing ``\\n``). Bytes after the last newline stay buffered and are
    prefixed to the next chunk, so a record split across network chunks is
    reassembled.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        # Offset up to which the buffer is known to contain no newline.
        self._scanned = 0

    def feed(self, chunk: bytes) -> list[bytes]:
        if not chunk:
            return []
        self._buffer.extend(chunk)

        lines: list[bytes] = []
        start = 0
        search_from = self._scanned
        while True:
            end = self._buffer.find(b"\n", search_from)
            if end == -1:
                break
            lines.append(bytes(self._buffer[start:end]))
            start = end + 1
            search_from = start

        if start:
            del self._buffer[:start]
        self._scanned = len(self._buffer)
        return lines

    @property
    def remainder(self) -> bytes:
        """Buffered bytes that are not yet a complete line."""
        return bytes(self._buffer)
