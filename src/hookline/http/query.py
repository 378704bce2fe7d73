"""Query-string builder with form encoding."""

from __future__ import annotations

from urllib.parse import quote_plus

# Characters left as-is by application/x-www-form-urlencoded, beyond
# ASCII letters and digits.
_FORM_SAFE = "-_.*"


def encode_component(text: str) -> str:
    """Form-encode *text*: UTF-8, spaces as ``+``, reserved characters as ``%XX``."""
    return quote_plus(text, safe=_FORM_SAFE, encoding="utf-8").replace("~", "%7E")


class QueryBuilder:
    """Builds a URL with an encoded query string.

    Example::

        url = QueryBuilder("https://api.example.com/search").append("q", "a&b").build()
        # https://api.example.com/search?q=a%26b

    Args:
        base_url: URL the query string is appended to.
    """

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url
        self._pairs: list[str] = []

    def append(self, key: str, value: str) -> QueryBuilder:
        """Append a query parameter. Both *key* and *value* are encoded for you.

        Returns:
            self, for chaining.
        """
        self._pairs.append(f"{encode_component(key)}={encode_component(value)}")
        return self

    @property
    def query(self) -> str:
        """The encoded pairs joined by ``&``, without base URL or ``?``."""
        return "&".join(self._pairs)

    def build(self) -> str:
        """Return the finished URL.

        With no parameters appended this is the base URL unchanged.
        """
        if not self._pairs:
            return self.base_url
        return f"{self.base_url}?{self.query}"

    def __str__(self) -> str:
        return self.build()

    def __repr__(self) -> str:
        return f"QueryBuilder({self.build()!r})"
