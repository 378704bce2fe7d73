"""hookline -- HTTP helpers and a blocking bridge for host-embedded extensions.

Extension code running inside a larger host application gets two small
toolkits from this package:

* :mod:`hookline.http` -- a synchronous, chainable request/response layer
  built on :mod:`httpx` (:class:`~hookline.http.Request`,
  :class:`~hookline.http.Response`, :class:`~hookline.http.QueryBuilder`)
  plus one-call helpers such as :func:`~hookline.http.simple_get`.
* :mod:`hookline.rx` -- a push-to-pull bridge that turns an asynchronous
  event source into a single ``(value, error)`` result without ever
  blocking the host's non-blockable thread.

Typical usage::

    from hookline.http import Request

    with Request("https://api.example.com/users", "POST") as req:
        users = req.execute_with_json({"name": "ada"}).json()

Modules:
    models: Pydantic configuration records.
    config: Process-wide configuration installed by the host.
    exceptions: Exception hierarchy rooted at :class:`HooklineError`.
    codec: JSON encoding and decoding through pydantic.
    output: stderr diagnostics with Rich support.
"""

__version__ = "0.1.0"
