"""Response obtained by executing a :class:`~hookline.http.Request`.

The status line is captured when the :class:`Response` is built; the body
stays on the wire until it is read through :meth:`Response.stream` or one
of the helpers layered on it (:meth:`~Response.text`,
:meth:`~Response.json`, :meth:`~Response.pipe`,
:meth:`~Response.save_to_file`). The body can be read once.

Non-2xx statuses never raise while the response is built. They raise
:class:`~hookline.exceptions.HttpException` at :meth:`Response.assert_ok`,
and therefore at :meth:`Response.stream` and everything that reads the
body.
"""

from __future__ import annotations

import io
import re
import shutil
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Optional, Union

import httpx

from hookline.codec import from_json
from hookline.exceptions import HttpException, InvalidOperationError, TransportError

if TYPE_CHECKING:
    from hookline.http.request import Request

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class ResponseStream(io.RawIOBase):
    """Readable, single-pass binary stream over a response body.

    Closing the stream closes the underlying :class:`httpx.Response`.
    """

    def __init__(self, raw: httpx.Response) -> None:
        super().__init__()
        self._raw = raw
        self._chunks = raw.iter_bytes()
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Any) -> int:
        while not self._pending:
            try:
                self._pending = next(self._chunks)
            except StopIteration:
                return 0
            except httpx.StreamError as exc:
                raise InvalidOperationError(f"Response body is no longer available: {exc}") from exc
            except httpx.RequestError as exc:
                raise TransportError(f"Failed reading response body: {exc}") from exc
        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size

    def close(self) -> None:
        if not self.closed:
            self._raw.close()
        super().close()


class Response:
    """Result of executing a request.

    Building a Response completes the exchange with the server if the
    request has not done so yet, then records the status code and message.

    Attributes:
        request: The :class:`~hookline.http.Request` this response belongs to.
        status_code: The HTTP status code.
        status_message: The HTTP reason phrase (e.g. ``"Not Found"``).
        headers: Response headers.
    """

    def __init__(self, request: Request) -> None:
        self.request = request
        self._raw = request._exchange()
        self.status_code: int = self._raw.status_code
        self.status_message: str = self._raw.reason_phrase
        self.headers: httpx.Headers = self._raw.headers
        self._body_taken = False

    def ok(self) -> bool:
        """Whether the request was successful (status code 2xx)."""
        return 200 <= self.status_code < 300

    def assert_ok(self) -> None:
        """Raise :class:`~hookline.exceptions.HttpException` if the request was not successful."""
        if not self.ok():
            raise HttpException(self.request, self)

    def text(self) -> str:
        """Read the whole body as UTF-8 text.

        Byte sequences that are not valid UTF-8 decode to U+FFFD.

        Line breaks (``\\n``, ``\\r\\n`` or ``\\r``) are normalised to
        ``\\n``, and every line, including the last, ends with one.
        """
        with self.stream() as body:
            content = body.read().decode("utf-8", errors="replace")
        lines = _LINE_BREAK.split(content)
        if lines[-1] == "":
            lines.pop()
        return "".join(f"{line}\n" for line in lines)

    def json(self, schema: Optional[Any] = None) -> Any:
        """Decode the body as JSON.

        Args:
            schema: Class or generic alias (``list[Pet]``) to validate
                into; ``None`` returns plain Python values.

        Raises:
            CodecError: If the body does not match *schema*.
        """
        return from_json(self.text(), schema)

    def stream(self) -> ResponseStream:
        """Return the raw body stream.

        Raises:
            HttpException: If the status is not 2xx. Nothing is read.
            InvalidOperationError: If the body was already handed out.
        """
        self.assert_ok()
        if self._body_taken:
            raise InvalidOperationError("Response body has already been read")
        self._body_taken = True
        return ResponseStream(self._raw)

    def pipe(self, sink: IO[bytes]) -> None:
        """Copy the body into *sink*. The sink is left open for the caller to close."""
        with self.stream() as body:
            shutil.copyfileobj(body, sink)

    def save_to_file(self, path: Union[str, Path]) -> None:
        """Save the body to *path*. The file is closed even if reading fails."""
        with open(path, "wb") as sink:
            self.pipe(sink)

    def close(self) -> None:
        """Close the :class:`~hookline.http.Request` this response belongs to."""
        self.request.close()

    def __enter__(self) -> Response:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Response [{self.status_code} {self.status_message}]>"
