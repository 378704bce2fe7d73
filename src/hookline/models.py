"""Pydantic models shared across hookline modules.

Two configuration records live here:

* :class:`HttpConfig` -- process-wide defaults installed by the host through
  :mod:`hookline.config` (identifying ``User-Agent``, timeout, redirect
  policy, verbosity).
* :class:`RequestOptions` -- an immutable per-request record that can be
  handed to :class:`~hookline.http.Request` wholesale instead of calling
  its setters one by one.

All models use Pydantic v2.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hookline import __version__

DEFAULT_USER_AGENT = f"hookline/{__version__}"


class HttpConfig(BaseModel):
    """Process-wide HTTP defaults.

    Every :class:`~hookline.http.Request` takes a snapshot of the active
    config when it is constructed, so changing the config afterwards only
    affects requests created later.

    Example::

        HttpConfig(user_agent="MyPlugin/1.0", timeout_ms=10_000)
    """

    model_config = ConfigDict(extra="forbid")

    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        min_length=1,
        description="Identifying User-Agent attached to every request",
    )
    timeout_ms: int = Field(
        default=30_000,
        ge=0,
        description="Connect and read timeout in milliseconds; 0 disables it",
    )
    follow_redirects: bool = Field(
        default=True, description="Follow 3xx redirects automatically"
    )
    verbose: bool = Field(
        default=False, description="Emit debug diagnostics on stderr"
    )


class RequestOptions(BaseModel):
    """Immutable per-request configuration.

    Unset fields fall back to the active :class:`HttpConfig`.

    Example::

        opts = RequestOptions(headers={"Accept": "application/json"}, timeout_ms=5000)
        Request("https://api.example.com", options=opts)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    headers: dict[str, str] = Field(default_factory=dict)
    timeout_ms: Optional[int] = Field(default=None, ge=0)
    follow_redirects: Optional[bool] = None
