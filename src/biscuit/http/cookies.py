"""Cookie parsing and Set-Cookie serialization.

Consolidates the read side (``parse_cookies``, ``cookie_names``,
``cookie_value``) and the write side (``stringify_cookie`` with
``CookieOptions``) in one module.

Names and values escape the two reserved characters ``%`` and ``;`` so
that a value can never terminate its own segment::

    >>> stringify_cookie("theme", "a;b")
    'theme=a%3Bb'
    >>> cookie_value("theme=a%3Bb", "theme")
    'a;b'
"""

import math
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime
from email.utils import format_datetime, parsedate_to_datetime
from numbers import Real
from typing import Literal, TypeAlias

CookieSource: TypeAlias = str | Sequence[str] | None
SameSite: TypeAlias = Literal["strict", "lax", "none"]

# Whitespace trimmed around names and values (not all of Unicode whitespace)
SPACE_CHARS = " \t\r\n"

_ESCAPED = re.compile(r"%(3B|25)")
_UNESCAPED = {"3B": ";", "25": "%"}


def encode_cookie_component(text: str) -> str:
    """Escape ``%`` and ``;`` in a cookie name or value."""
    return text.replace("%", "%25").replace(";", "%3B")


def decode_cookie_component(text: str) -> str:
    """Undo ``encode_cookie_component``.

    Only ``%3B`` and ``%25`` are decoded, in a single pass, so any other
    percent sequence is left exactly as it was received.
    """
    if "%" not in text:
        return text
    return _ESCAPED.sub(lambda m: _UNESCAPED[m.group(1)], text)


def _join(source: CookieSource) -> str:
    if not source:
        return ""
    if isinstance(source, str):
        return source
    if len(source) == 1:
        return source[0]
    return ";".join(source)


def _pairs(text: str) -> Iterator[tuple[str, str]]:
    """Yield raw ``(name, value)`` pairs, skipping segments without ``=``."""
    for segment in text.split(";"):
        name, sep, value = segment.partition("=")
        if sep:
            yield name, value


def parse_cookies(source: CookieSource) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    *source* may also be a sequence of header lines, which are read as if
    joined with ``;``. Returns an empty dict for empty or missing input.
    When a name repeats, the last value wins.
    """
    cookies: dict[str, str] = {}
    for name, value in _pairs(_join(source)):
        cookies[decode_cookie_component(name.strip(SPACE_CHARS))] = decode_cookie_component(
            value.strip(SPACE_CHARS)
        )
    return cookies


def cookie_names(source: CookieSource) -> list[str]:
    """Return unique cookie names in order of first appearance."""
    names: dict[str, None] = {}
    for name, _ in _pairs(_join(source)):
        names.setdefault(decode_cookie_component(name.strip(SPACE_CHARS)))
    return list(names)


def cookie_value(source: CookieSource, name: str) -> str | None:
    """Return the value of the first cookie called *name*, or ``None``.

    Compares the encoded *name* against each raw segment name, so no
    mapping is built and other values are never decoded.
    """
    text = _join(source)
    if not text:
        return None
    encoded = encode_cookie_component(name)
    for raw_name, raw_value in _pairs(text):
        if raw_name.strip(SPACE_CHARS) == encoded:
            return decode_cookie_component(raw_value.strip(SPACE_CHARS))
    return None


@dataclass(frozen=True, slots=True)
class CookieOptions:
    """Attributes of a ``Set-Cookie`` directive.

    ``max_age`` takes precedence over ``expires_at`` in user agents; both
    are written when both are given. Invalid values for either are
    dropped rather than raised.

    ``expires_at`` accepts an aware or naive (UTC) ``datetime``, a ``date``
    (midnight UTC), a POSIX timestamp in seconds, or an ISO 8601 or
    RFC 5322 date string.
    """

    expires_at: datetime | date | str | int | float | None = None
    max_age: int | float | None = None
    path: str | None = None
    domain: str | None = None
    same_site: SameSite | None = None
    secure: bool = False
    http_only: bool = False
    partitioned: bool = False


def _resolve_expiry(expires_at: object) -> datetime | None:
    """Coerce *expires_at* to an aware UTC datetime, or ``None`` if invalid."""
    if isinstance(expires_at, datetime):
        moment = expires_at
    elif isinstance(expires_at, date):
        moment = datetime(expires_at.year, expires_at.month, expires_at.day, tzinfo=UTC)
    elif isinstance(expires_at, Real) and not isinstance(expires_at, bool):
        if not math.isfinite(expires_at):
            return None
        try:
            moment = datetime.fromtimestamp(float(expires_at), UTC)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(expires_at, str):
        try:
            moment = datetime.fromisoformat(expires_at.strip())
        except ValueError:
            try:
                moment = parsedate_to_datetime(expires_at)
            except (TypeError, ValueError, IndexError, OverflowError):
                return None
    else:
        return None

    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    try:
        return moment.astimezone(UTC)
    except (OverflowError, ValueError):
        return None


def http_date(moment: datetime) -> str:
    """Format an aware datetime as an IMF-fixdate (``Thu, 01 Jan 1970 00:00:00 GMT``)."""
    return format_datetime(moment.astimezone(UTC), usegmt=True)


def _resolve_max_age(max_age: object) -> int | None:
    if isinstance(max_age, bool) or not isinstance(max_age, Real):
        return None
    if not math.isfinite(max_age):
        return None
    return int(max_age)


def stringify_cookie(name: str, value: str, options: CookieOptions | None = None) -> str:
    """Serialize a cookie to a ``Set-Cookie`` header value string.

    Attributes are appended in a fixed order: Expires, Max-Age, Path,
    Domain, SameSite, Secure, HttpOnly, Partitioned.
    """
    cookie = f"{encode_cookie_component(name)}={encode_cookie_component(value)}"
    if options is None:
        return cookie

    parts = [cookie]
    if options.expires_at is not None:
        expires = _resolve_expiry(options.expires_at)
        if expires is not None:
            parts.append(f"Expires={http_date(expires)}")
    if options.max_age is not None:
        max_age = _resolve_max_age(options.max_age)
        if max_age is not None:
            parts.append(f"Max-Age={max_age}")
    if options.path is not None:
        parts.append(f"Path={options.path}")
    if options.domain is not None:
        parts.append(f"Domain={options.domain}")
    if options.same_site is not None:
        parts.append(f"SameSite={options.same_site}")
    if options.secure:
        parts.append("Secure")
    if options.http_only:
        parts.append("HttpOnly")
    if options.partitioned:
        parts.append("Partitioned")
    return "; ".join(parts)
