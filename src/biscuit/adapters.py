"""Bindings between ``CookieStorage`` and a host's cookie accessors.

``CookieDocument`` stands in for a browser's ``document.cookie``
property: reading returns every cookie as one ``Cookie`` string, and
assigning a ``Set-Cookie`` string merges that single cookie by name.

``header_cookie_storage`` binds to a server-side request/response pair:
``Cookie`` header lines in, ``Set-Cookie`` header values out.
"""

import logging
from collections.abc import MutableSequence
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

from biscuit.http.cookies import SPACE_CHARS, CookieSource
from biscuit.serializers import Serializer, json_serializer
from biscuit.storage import CookieStorage, create_cookie_storage

logger = logging.getLogger("biscuit.storage")


def _is_expired(attributes: dict[str, str]) -> bool:
    """Apply Max-Age, then Expires, the way user agents do."""
    if "max-age" in attributes:
        try:
            return int(attributes["max-age"]) <= 0
        except ValueError:
            pass
    if "expires" in attributes:
        try:
            expires = parsedate_to_datetime(attributes["expires"])
        except (TypeError, ValueError, IndexError, OverflowError):
            return False
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=UTC)
        return expires <= datetime.now(UTC)
    return False


class CookieDocument:
    """An in-memory cookie jar with ``document.cookie`` semantics.

    Names and values are kept exactly as received (still escaped), so
    reading ``cookie`` back yields text the parser can consume directly.
    """

    __slots__ = ("_cookies",)

    def __init__(self, cookie: str = "") -> None:
        self._cookies: dict[str, str] = {}
        for segment in cookie.split(";"):
            name, sep, value = segment.partition("=")
            if sep:
                self._cookies[name.strip(SPACE_CHARS)] = value.strip(SPACE_CHARS)

    @property
    def cookie(self) -> str:
        return "; ".join(f"{name}={value}" for name, value in self._cookies.items())

    @cookie.setter
    def cookie(self, set_cookie: str) -> None:
        pair, *rest = set_cookie.split(";")
        name, sep, value = pair.partition("=")
        if not sep:
            logger.debug("Ignored cookie assignment without '=': %r", pair)
            return

        attributes: dict[str, str] = {}
        for attribute in rest:
            key, _, attr_value = attribute.partition("=")
            attributes[key.strip(SPACE_CHARS).lower()] = attr_value.strip(SPACE_CHARS)

        name = name.strip(SPACE_CHARS)
        if _is_expired(attributes):
            self._cookies.pop(name, None)
        else:
            self._cookies[name] = value.strip(SPACE_CHARS)

    def __repr__(self) -> str:
        return f"CookieDocument({self.cookie!r})"


def document_cookie_storage(document: CookieDocument) -> CookieStorage:
    """Storage over *document* that serializes values as JSON."""

    def set_cookie(cookie: str) -> None:
        document.cookie = cookie

    return create_cookie_storage(lambda: document.cookie, set_cookie, json_serializer)


def header_cookie_storage(
    cookie_headers: CookieSource,
    set_cookie_headers: MutableSequence[str],
    serializer: Serializer | None = None,
) -> CookieStorage:
    """Storage reading request ``Cookie`` lines and collecting ``Set-Cookie`` values.

    Reads see *cookie_headers* as received; writes are appended to
    *set_cookie_headers* and are not visible to later reads.
    """
    return create_cookie_storage(lambda: cookie_headers, set_cookie_headers.append, serializer)
