"""HTTP request/response layer for hookline.

Wraps :mod:`httpx` in a small, synchronous API:

* :class:`QueryBuilder` -- builds encoded query strings.
* :class:`Request` -- one configured outbound call, executed once.
* :class:`Response` -- status line plus a lazily read, single-pass body.
* :class:`~hookline.exceptions.HttpException` -- raised for non-2xx
  statuses by :meth:`Response.assert_ok` and :meth:`Response.stream`.
* ``simple_*`` helpers for one-line GET/POST/download calls.

Calls block the calling thread. Nothing here spawns threads or retries.

Example::

    from hookline.http import QueryBuilder, Request

    url = QueryBuilder("https://api.example.com/search").append("q", "cats")
    with Request.from_query(url) as req:
        hits = req.execute().json()
"""

from hookline.exceptions import HttpException
from hookline.http.query import QueryBuilder, encode_component
from hookline.http.request import Request
from hookline.http.response import Response, ResponseStream
from hookline.http.simple import (
    simple_download,
    simple_get,
    simple_json_get,
    simple_json_post,
    simple_post,
)

__all__ = [
    "HttpException",
    "QueryBuilder",
    "Request",
    "Response",
    "ResponseStream",
    "encode_component",
    "simple_download",
    "simple_get",
    "simple_json_get",
    "simple_json_post",
    "simple_post",
]
