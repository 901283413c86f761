"""Reading server-sent event streams of JSON messages."""

from __future__ import annotations

import io
import json
from collections.abc import Callable, Iterator, Mapping
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_HEADER_DATA = b"data: "
_ERROR_PREFIX = b'data: {"error":'
_DONE = b"[DONE]"
DEFAULT_EMPTY_MESSAGES_LIMIT = 300


class TooManyEmptyStreamMessagesError(Exception):
    """The stream sent more lines without data than allowed."""

    def __init__(self, message: str = "stream has sent too many empty messages") -> None:
        super().__init__(message)


class StreamAPIError(Exception):
    """An error object the server sent in place of stream data."""

    def __init__(self, error: Mapping[str, Any] | None) -> None:
        details = dict(error or {})
        self.details = details
        self.message = details.get("message") or ""
        self.type = details.get("type") or ""
        self.param = details.get("param")
        self.code = details.get("code")
        super().__init__(f"error, {self.message}")


class StreamReader(Generic[T]):
    """Reads ``data:`` lines from an event stream and decodes them.

    ``source`` is a binary stream with ``readline()`` or an iterable of byte
    lines. Each payload is decoded with ``loads`` and passed to ``factory``
    when one is given. Lines that carry no data are collected; if the stream
    ends or sends an error line, the collected text is read as an error
    object and raised as :class:`StreamAPIError`.
    """

    def __init__(
        self,
        source: Any,
        *,
        factory: Callable[[Any], T] | None = None,
        loads: Callable[[bytes], Any] = json.loads,
        empty_messages_limit: int = DEFAULT_EMPTY_MESSAGES_LIMIT,
        error_buffer: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._source = source
        if hasattr(source, "readline"):
            self._readline: Callable[[], bytes] = source.readline
        else:
            lines = iter(source)
            self._readline = lambda: next(lines, b"")
        self._factory = factory
        self._loads = loads
        self.empty_messages_limit = empty_messages_limit
        self._errors = error_buffer if error_buffer is not None else io.BytesIO()
        self.headers = dict(headers or {})
        self._finished = False

    def recv_raw(self) -> bytes:
        """Return the next payload; raise EOFError once the stream is done."""
        if self._finished:
            raise EOFError("stream is finished")

        empty_messages = 0
        has_error_prefix = False
        while True:
            line = self._readline()
            at_end = not line.endswith(b"\n")
            if at_end or has_error_prefix:
                error = self._error_response()
                if error is not None:
                    detail = error.get("error")
                    raise StreamAPIError(detail if isinstance(detail, Mapping) else None)
                if at_end:
                    raise EOFError("stream ended")
                return b""

            stripped = line.strip()
            if stripped.startswith(_ERROR_PREFIX):
                has_error_prefix = True
            if has_error_prefix or not stripped.startswith(_HEADER_DATA):
                if has_error_prefix:
                    stripped = stripped.removeprefix(_HEADER_DATA)
                self._errors.write(stripped)
                empty_messages += 1
                if empty_messages > self.empty_messages_limit:
                    raise TooManyEmptyStreamMessagesError()
                continue

            payload = stripped[len(_HEADER_DATA):]
            if payload == _DONE:
                self._finished = True
                raise EOFError("stream is finished")
            return payload

    def recv(self) -> T | Any:
        """Return the next decoded message; raise EOFError at the end."""
        value = self._loads(self.recv_raw())
        return self._factory(value) if self._factory is not None else value

    def _error_response(self) -> Mapping[str, Any] | None:
        data = self._errors.getvalue()
        if not data:
            return None
        try:
            parsed = self._loads(data)
        except Exception:
            return None
        return parsed if isinstance(parsed, Mapping) else None

    def close(self) -> None:
        """Close the underlying source if it can be closed."""
        closer = getattr(self._source, "close", None)
        if callable(closer):
            closer()

    def __iter__(self) -> Iterator[T | Any]:
        while True:
            try:
                yield self.recv()
            except EOFError:
                return

    def __enter__(self) -> StreamReader[T]:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()