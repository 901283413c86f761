"""Descriptions of API calls: method, path, query, body and options."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from operator import itemgetter
from typing import Any
from urllib.parse import urlencode


class HttpMethod(str, Enum):
    """The HTTP methods the API uses."""

    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


def encode_query(items: Iterable[tuple[str, str]]) -> str:
    """Encode query pairs sorted by key, keeping the order of values per key.

    Spaces become ``+`` and every character except letters, digits and
    ``-_.~`` is percent-escaped.
    """
    return urlencode(sorted(items, key=itemgetter(0)))


@dataclass(frozen=True)
class ApiRequest:
    """One API call, described independently of the transport that sends it.

    ``model`` names the model the call is for (some deployments route on it),
    ``assistants_beta`` marks calls that need the assistants beta header and
    ``raw_response`` marks calls whose response body is not JSON.
    """

    method: HttpMethod
    path: str
    query: tuple[tuple[str, str], ...] = ()
    body: Any = None
    model: str = ""
    assistants_beta: bool = False
    content_type: str | None = None
    raw_response: bool = False

    def url_suffix(self) -> str:
        """Return the path with its encoded query string, if any."""
        if not self.query:
            return self.path
        return f"{self.path}?{encode_query(self.query)}"


@dataclass(frozen=True)
class Pagination:
    """Cursor options shared by the list endpoints."""

    limit: int | None = None
    order: str | None = None
    after: str | None = None
    before: str | None = None

    def query_items(self) -> list[tuple[str, str]]:
        """Return the query pairs for the options that are set."""
        items: list[tuple[str, str]] = []
        if self.limit is not None:
            items.append(("limit", str(int(self.limit))))
        if self.order is not None:
            items.append(("order", self.order))
        if self.after is not None:
            items.append(("after", self.after))
        if self.before is not None:
            items.append(("before", self.before))
        return items