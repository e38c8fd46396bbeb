"""Abstract line input / prompt output interfaces.

Defines the LineSource and PromptWriter protocols the retry controller talks
to, so the terminal binding and in-memory doubles share the same prompt logic.
"""

from __future__ import annotations

import asyncio
from typing import Protocol, runtime_checkable


@runtime_checkable
class LineSource(Protocol):
    """Delivers typed lines, one per call."""

    async def read_line(self) -> str:
        """Wait for the next line, separator already stripped.

        Raises EOFError once the underlying stream is closed.
        """
        ...


@runtime_checkable
class PromptWriter(Protocol):
    """Writes prompt text to the interactive output."""

    def write(self, text: str) -> None:
        """Write literal prompt text, no newline appended."""
        ...

    def write_line(self, text: str) -> None:
        """Write a full informational line (hints, rejection reasons)."""
        ...

    def set_echo(self, enabled: bool) -> None:
        """Enable or suppress echo of subsequently typed characters."""
        ...


_EOF = object()


class QueueLineSource:
    """Line source fed with raw text chunks.

    Chunks are split on newlines; a trailing partial line is held back until
    its newline arrives. Any number of lines can be buffered ahead of reads.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._partial = ""
        self._closed = False

    def feed(self, data: str) -> None:
        if self._closed:
            raise EOFError("line source is closed")
        data = self._partial + data.replace("\r\n", "\n")
        *lines, self._partial = data.split("\n")
        for line in lines:
            self._queue.put_nowait(line)

    def close(self) -> None:
        """Flush any partial line, then signal end of input."""
        if self._closed:
            return
        if self._partial:
            self._queue.put_nowait(self._partial)
            self._partial = ""
        self._closed = True
        self._queue.put_nowait(_EOF)

    @property
    def pending(self) -> int:
        """Number of complete lines waiting to be read."""
        return self._queue.qsize() - (1 if self._closed else 0)

    async def read_line(self) -> str:
        item = await self._queue.get()
        if item is _EOF:
            # keep EOF sticky for later readers
            self._queue.put_nowait(_EOF)
            raise EOFError("line source is closed")
        return item  # type: ignore[return-value]


class BufferedWriter:
    """Prompt writer that keeps an in-memory transcript."""

    def __init__(self) -> None:
        self._chunks: list[str] = []
        self.echo = True
        self.echo_changes: list[bool] = []

    def write(self, text: str) -> None:
        self._chunks.append(text)

    def write_line(self, text: str) -> None:
        self._chunks.append(text + "\n")

    def set_echo(self, enabled: bool) -> None:
        self.echo = enabled
        self.echo_changes.append(enabled)

    @property
    def output(self) -> str:
        return "".join(self._chunks)

    def count(self, text: str) -> int:
        return self.output.count(text)

    def clear(self) -> None:
        self._chunks.clear()
