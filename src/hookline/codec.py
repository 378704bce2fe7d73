"""JSON codec backed by pydantic.

:func:`to_json` turns any value pydantic can serialise (plain containers,
:class:`~pydantic.BaseModel` instances, dataclasses, datetimes, ...) into
JSON text. :func:`from_json` parses JSON text, optionally validating it
into a *schema*: a class such as ``Pet``, or a generic alias such as
``list[Pet]`` or ``dict[str, int]``. Both kinds of schema go through
:class:`~pydantic.TypeAdapter`, so they behave identically.

The only contract is that values produced by :func:`to_json` round-trip
through :func:`from_json` with the same schema.
"""

from __future__ import annotations

from typing import Any, Optional

import pydantic_core
from pydantic import TypeAdapter

from hookline.exceptions import CodecError


def to_json(obj: Any) -> str:
    """Serialise *obj* to JSON text.

    Raises:
        CodecError: If *obj* contains a value pydantic cannot serialise.
    """
    try:
        return pydantic_core.to_json(obj).decode("utf-8")
    except ValueError as exc:
        raise CodecError(f"Cannot serialise {type(obj).__name__} to JSON: {exc}") from exc


def from_json(text: str, schema: Optional[Any] = None) -> Any:
    """Parse JSON *text*, validating it into *schema* when one is given.

    Args:
        text: JSON document.
        schema: Target type. ``None`` returns plain Python values
            (``dict``, ``list``, ``str``, ...).

    Raises:
        CodecError: If *text* is not valid JSON or does not match *schema*.
    """
    try:
        if schema is None:
            return pydantic_core.from_json(text)
        return TypeAdapter(schema).validate_json(text)
    except ValueError as exc:
        raise CodecError(f"Invalid JSON for {_schema_name(schema)}: {exc}") from exc


def _schema_name(schema: Optional[Any]) -> str:
    if schema is None:
        return "any"
    return getattr(schema, "__name__", None) or repr(schema)
