"""One-call helpers for the most common requests.

Each helper creates its own :class:`~hookline.http.Request`, reads what it
needs from the :class:`~hookline.http.Response`, and closes both before
returning. Keyword arguments beyond the documented ones (``options``,
``transport``) are forwarded to :class:`~hookline.http.Request`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from hookline.http.request import Request


def simple_get(url: str, **kwargs: Any) -> str:
    """Send a GET request and return the raw body.

    Use :func:`simple_json_get` for JSON.

    Raises:
        HttpException: If the status is not 2xx.
    """
    with Request(url, "GET", **kwargs) as req:
        return req.execute().text()


def simple_json_get(url: str, schema: Optional[Any] = None, **kwargs: Any) -> Any:
    """Send a GET request and decode the JSON body into *schema*."""
    with Request(url, "GET", **kwargs) as req:
        return req.execute().json(schema)


def simple_download(url: str, path: Union[str, Path], **kwargs: Any) -> None:
    """Download the body of *url* into the file at *path*."""
    with Request(url, "GET", **kwargs) as req:
        req.execute().save_to_file(path)


def simple_post(url: str, body: str, **kwargs: Any) -> str:
    """Send a POST request with a raw text *body* and return the raw response body.

    Use :func:`simple_json_post` for JSON.
    """
    with Request(url, "POST", **kwargs) as req:
        return req.execute_with_body(body).text()


def simple_json_post(url: str, body: Any, schema: Optional[Any] = None, **kwargs: Any) -> Any:
    """Send a POST request and decode the JSON response into *schema*.

    A ``str`` *body* is sent as-is. Any other object is serialised to JSON
    and sent with ``Content-Type: application/json``.
    """
    with Request(url, "POST", **kwargs) as req:
        if isinstance(body, str):
            resp = req.execute_with_body(body)
        else:
            resp = req.execute_with_json(body)
        return resp.json(schema)
