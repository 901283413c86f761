"""Rate-limit information carried in API response headers."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from fractions import Fraction
from typing import Any

_UNIT_NANOSECONDS = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_COMPONENT = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_MAX_NANOSECONDS = 2**63 - 1


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``"1h30m"``, ``"6m0s"`` or ``"-1.5s"``.

    Units are ns, us (or µs), ms, s, m and h. Raises ValueError on bad input.
    """
    body = text
    negative = False
    if body and body[0] in "+-":
        negative = body[0] == "-"
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise ValueError(f"invalid duration {text!r}")

    total = Fraction(0)
    pos = 0
    while pos < len(body):
        match = _COMPONENT.match(body, pos)
        whole, fraction, unit = match.groups()
        if not whole and not fraction:
            raise ValueError(f"invalid duration {text!r}")
        if not unit:
            raise ValueError(f"missing unit in duration {text!r}")
        if unit not in _UNIT_NANOSECONDS:
            raise ValueError(f"unknown unit {unit!r} in duration {text!r}")
        value = Fraction(int(whole or "0"))
        if fraction:
            value += Fraction(int(fraction), 10 ** len(fraction))
        total += value * _UNIT_NANOSECONDS[unit]
        pos = match.end()

    nanoseconds = int(total)
    limit = _MAX_NANOSECONDS + 1 if negative else _MAX_NANOSECONDS
    if nanoseconds > limit:
        raise ValueError(f"invalid duration {text!r}")
    seconds, rest = divmod(nanoseconds, 1_000_000_000)
    result = timedelta(seconds=seconds, microseconds=rest // 1000)
    return -result if negative else result


class ResetTime(str):
    """A reset interval as sent by the server, e.g. ``"6m0s"``."""

    def __str__(self) -> str:
        return str.__str__(self)

    def to_datetime(self) -> datetime:
        """Return the moment of reset; an unreadable value means now."""
        try:
            delta = parse_duration(str(self))
        except ValueError:
            delta = timedelta(0)
        return datetime.now(timezone.utc) + delta


def _atoi(value: Any) -> int:
    if isinstance(value, str) and _INTEGER.fullmatch(value):
        return int(value)
    return 0


@dataclass(frozen=True)
class RateLimitHeaders:
    """The x-ratelimit-* headers of a response."""

    limit_requests: int = 0
    limit_tokens: int = 0
    remaining_requests: int = 0
    remaining_tokens: int = 0
    reset_requests: ResetTime = ResetTime("")
    reset_tokens: ResetTime = ResetTime("")

    @classmethod
    def from_headers(cls, headers: Mapping[str, Any]) -> RateLimitHeaders:
        """Read the headers; names match case-insensitively, bad numbers read as 0."""
        lowered: dict[str, str] = {}
        for name, value in headers.items():
            if isinstance(value, (list, tuple)):
                value = value[0] if value else ""
            lowered.setdefault(name.lower(), value)

        def get(name: str) -> str:
            return lowered.get(name, "")

        return cls(
            limit_requests=_atoi(get("x-ratelimit-limit-requests")),
            limit_tokens=_atoi(get("x-ratelimit-limit-tokens")),
            remaining_requests=_atoi(get("x-ratelimit-remaining-requests")),
            remaining_tokens=_atoi(get("x-ratelimit-remaining-tokens")),
            reset_requests=ResetTime(get("x-ratelimit-reset-requests")),
            reset_tokens=ResetTime(get("x-ratelimit-reset-tokens")),
        )