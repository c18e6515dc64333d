"""
Incremental decoding of a JSON array whose elements arrive over time.

The streaming endpoint answers with a single JSON array,
``[{...},{...},...]``, written piece by piece. ``JsonArrayStreamDecoder``
splits the incoming bytes into the texts of the individual elements without
waiting for the closing bracket: it counts ``{``/``[`` nesting while skipping
over string literals and escapes, and releases an element once the delimiter
that follows it (``,`` or ``]``) has been read. Only the element being
assembled is buffered.
"""

import codecs
from enum import Enum
from typing import AsyncIterable, AsyncIterator, List, Optional, Union

from ..core.exceptions import SerializationException
from ..core.logger import get_logger

logger = get_logger(__name__)

_WHITESPACE = " \t\r\n\ufeff"
_OPENERS = "{["
_CLOSERS = "}]"


class _State(Enum):
    BEFORE_ARRAY = "before_array"
    EXPECT_FIRST = "expect_first"
    EXPECT_ELEMENT = "expect_element"
    IN_ELEMENT = "in_element"
    AFTER_ELEMENT = "after_element"
    DONE = "done"


class JsonArrayStreamDecoder:
    """Split a chunked JSON array into the JSON texts of its elements.

    Elements must be objects or arrays. The decoder is single-use: once the
    closing bracket was read, or an error was raised, it accepts no more
    structural input.
    """

    def __init__(self) -> None:
        self._utf8 = codecs.getincrementaldecoder("utf-8")()
        self._state = _State.BEFORE_ARRAY
        self._segments: List[str] = []
        self._pending = ""
        self._failure: Optional[SerializationException] = None
        self._depth = 0
        self._in_string = False
        self._escaped = False
        self._offset = 0

    @property
    def finished(self) -> bool:
        """Whether the closing bracket of the array has been read."""
        return self._state is _State.DONE

    def feed(self, chunk: Union[bytes, str]) -> List[str]:
        """Consume the next chunk of the stream.

        Elements completed before a syntax error in the same chunk are still
        returned; the error is raised by the next ``feed`` or ``close``.

        Args:
            chunk: Raw bytes (UTF-8, may end mid-character) or already decoded text.

        Returns:
            The JSON texts of all elements completed by this chunk, in order.

        Raises:
            SerializationException: If the chunk breaks the array syntax.
        """
        if self._failure is not None:
            raise self._failure

        if isinstance(chunk, bytes):
            try:
                text = self._utf8.decode(chunk)
            except UnicodeDecodeError as e:
                raise self._error(f"Invalid UTF-8 in stream: {e}") from e
        else:
            text = chunk

        completed: List[str] = []
        try:
            self._scan(text, completed)
        except SerializationException as e:
            if not completed:
                raise
            self._failure = e
        return completed

    def _scan(self, text: str, completed: List[str]) -> None:
        segment_start = 0 if self._state is _State.IN_ELEMENT else None

        for index, char in enumerate(text):
            state = self._state

            if state is _State.IN_ELEMENT:
                if self._in_string:
                    if self._escaped:
                        self._escaped = False
                    elif char == "\\":
                        self._escaped = True
                    elif char == '"':
                        self._in_string = False
                elif char == '"':
                    self._in_string = True
                elif char in _OPENERS:
                    self._depth += 1
                elif char in _CLOSERS:
                    self._depth -= 1
                    if self._depth == 0:
                        self._segments.append(text[segment_start : index + 1])
                        self._pending = "".join(self._segments)
                        self._segments = []
                        segment_start = None
                        self._state = _State.AFTER_ELEMENT
                continue

            if char in _WHITESPACE:
                continue

            if state is _State.BEFORE_ARRAY:
                if char != "[":
                    raise self._error(f"Expected '[' at the start of the stream, got {char!r}", index)
                self._state = _State.EXPECT_FIRST
            elif state in (_State.EXPECT_FIRST, _State.EXPECT_ELEMENT):
                if char in _OPENERS:
                    self._state = _State.IN_ELEMENT
                    self._depth = 1
                    segment_start = index
                elif char == "]" and state is _State.EXPECT_FIRST:
                    self._state = _State.DONE
                else:
                    raise self._error(f"Expected an object or array element, got {char!r}", index)
            elif state is _State.AFTER_ELEMENT:
                if char not in ",]":
                    raise self._error(f"Expected ',' or ']' after an element, got {char!r}", index)
                completed.append(self._pending)
                self._pending = ""
                self._state = _State.EXPECT_ELEMENT if char == "," else _State.DONE
            else:
                raise self._error(f"Unexpected data after the end of the array: {char!r}", index)

        if segment_start is not None:
            self._segments.append(text[segment_start:])
        self._offset += len(text)

    def close(self) -> None:
        """Signal the end of the stream.

        Raises:
            SerializationException: If the array was not terminated, including
                the case of an element cut off mid-way.
        """
        if self._failure is not None:
            raise self._failure

        try:
            tail = self._utf8.decode(b"", final=True)
        except UnicodeDecodeError as e:
            raise self._error(f"Stream ended inside a UTF-8 sequence: {e}") from e
        if tail:
            self.feed(tail)

        if self._state is not _State.DONE:
            if self._state is _State.IN_ELEMENT:
                raise self._error("Stream ended in the middle of an element")
            raise self._error("Stream ended before the closing ']' of the response array")

    def _error(self, message: str, index: int = 0) -> SerializationException:
        msg = f"{message} (offset {self._offset + index})"
        logger.error(msg)
        return SerializationException(msg)


async def iter_json_array(chunks: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """Lazily yield the element texts of a JSON array read from ``chunks``.

    Reading the next chunk only happens when the consumer asks for the next
    element and none is ready yet.

    Raises:
        SerializationException: If the array is malformed or truncated.
    """
    decoder = JsonArrayStreamDecoder()
    async for chunk in chunks:
        for element in decoder.feed(chunk):
            yield element
    decoder.close()
