"""Duplex byte stream used as the body of a Request or Response.

Writers call ``write()`` and ``end()``; a single reader iterates the
stream asynchronously or awaits ``read()``. A stream can instead be fed
from an upstream async iterable (``pipe_from``), in which case it ends
when the upstream is exhausted.

Buffering uses an anyio memory object stream, created only when a
reader has to wait for chunks that have not been written yet.
"""

from __future__ import annotations

import json
import math
from collections.abc import AsyncIterable, AsyncIterator
from typing import Any

import anyio
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream


class BodyStream:
    """A single-consumer duplex byte stream.

    Usage::

        body = BodyStream()
        body.write("hello ")
        body.end("world")
        assert await body.read() == b"hello world"

        piped = BodyStream(source=upstream)  # any AsyncIterable[bytes | str]
        async for chunk in piped:
            ...
    """

    __slots__ = ("_ended", "_pending", "_receive", "_send", "_source")

    def __init__(self, source: AsyncIterable[bytes | str] | None = None) -> None:
        self._source: AsyncIterable[bytes | str] | None = source
        self._pending: list[bytes] = []
        self._ended = False
        self._send: MemoryObjectSendStream[bytes] | None = None
        self._receive: MemoryObjectReceiveStream[bytes] | None = None

    @property
    def ended(self) -> bool:
        """True once ``end()`` was called or the upstream was exhausted."""
        return self._ended

    @property
    def piped(self) -> bool:
        """True while an upstream source is attached."""
        return self._source is not None

    # -- Writing --

    def write(self, chunk: bytes | str) -> None:
        """Append *chunk* to the stream."""
        if self._ended:
            msg = "write after end"
            raise RuntimeError(msg)
        data = to_bytes(chunk)
        if not data:
            return
        if self._send is None:
            self._pending.append(data)
        else:
            self._send.send_nowait(data)

    def end(self, chunk: bytes | str | None = None) -> None:
        """Optionally write a final *chunk*, then mark the stream finished."""
        if chunk is not None:
            self.write(chunk)
        self._ended = True
        if self._send is not None:
            self._send.close()

    def pipe_from(self, source: AsyncIterable[bytes | str]) -> None:
        """Feed this stream from *source* instead of direct writes."""
        if self._ended:
            msg = "cannot pipe into an ended stream"
            raise RuntimeError(msg)
        self._source = source

    def close(self) -> None:
        """Detach any upstream and finish the stream.

        Chunks already buffered stay readable; nothing more arrives.
        """
        self._source = None
        self._ended = True
        if self._send is not None:
            self._send.close()

    # -- Reading --

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self.chunks()

    async def chunks(self) -> AsyncIterator[bytes]:
        """Yield chunks until the stream ends."""
        source = self._source
        if source is not None:
            async for chunk in source:
                if self._source is not source:
                    # Severed while reading
                    break
                yield to_bytes(chunk)
            if self._source is source:
                self._source = None
                self.end()

        while self._pending:
            yield self._pending.pop(0)
        if self._ended:
            return

        self._send, self._receive = anyio.create_memory_object_stream[bytes](math.inf)
        async with self._receive:
            async for chunk in self._receive:
                yield chunk

    async def read(self) -> bytes:
        """Read the whole stream into memory."""
        return b"".join([chunk async for chunk in self.chunks()])

    def __repr__(self) -> str:
        state = "ended" if self._ended else "piped" if self.piped else "open"
        return f"<BodyStream {state}>"


def is_stream(value: object) -> bool:
    """True if *value* can be consumed as an upstream byte source."""
    return isinstance(value, AsyncIterable)


def to_bytes(chunk: bytes | bytearray | str) -> bytes:
    if isinstance(chunk, bytes):
        return chunk
    if isinstance(chunk, bytearray):
        return bytes(chunk)
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    msg = f"stream chunks must be bytes or str, got {type(chunk).__name__}"
    raise TypeError(msg)


def encode_value(value: Any) -> bytes:
    """Bytes a replaced (non-stream) body value is written as."""
    if value is None:
        return b""
    if isinstance(value, (bytes, bytearray, str)):
        return to_bytes(value)
    return json.dumps(value, default=str).encode("utf-8")
