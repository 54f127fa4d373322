"""Line-oriented reader for server-sent event streams."""

from __future__ import annotations

from typing import Callable, Generic, Iterator, Optional, Tuple, TypeVar

import httpx

from .request import HTTPResponse, pack_response

T = TypeVar("T")

Processor = Callable[[str, Iterator[str]], Tuple[Optional[T], bool]]


class StreamReader(Generic[T]):
    """Turns the lines of a streamed response into events via a processor.

    The processor receives a non-empty line and the iterator of the remaining
    lines, and returns the event (or None to skip) and whether it ends the stream.
    """

    def __init__(self, response: httpx.Response, processor: Processor) -> None:
        self._response = response
        self._processor = processor
        self._http_response = HTTPResponse(response.headers)
        self._lines: Iterator[str] | None = None
        self._finished = False

    def _lines_iter(self) -> Iterator[str]:
        if self._lines is None:
            if "application/json" in self._response.headers.get("Content-Type", ""):
                # A JSON body is an error document, never a stream of events.
                pack_response(self._response)
                self._lines = iter(())
            else:
                self._lines = self._response.iter_lines()
        return self._lines

    def recv(self) -> T | None:
        """Return the next event, or None once the stream is exhausted."""
        lines = self._lines_iter()
        for line in lines:
            if not line:
                continue
            event, done = self._processor(line, lines)
            self._finished = done
            if event is not None:
                return event
        self._finished = True
        return None

    def __iter__(self) -> Iterator[T]:
        while (event := self.recv()) is not None:
            yield event

    def close(self) -> None:
        self._response.close()

    def __enter__(self) -> StreamReader[T]:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @property
    def is_finished(self) -> bool:
        """Whether the last event ended the stream."""
        return self._finished

    @property
    def response(self) -> HTTPResponse:
        """Headers of the underlying HTTP response."""
        return self._http_response