"""Cookie storage: a key/value view over raw cookie text.

Every read goes back to ``get_cookie`` and re-parses, so changes made to
the underlying store between calls are always observed. Writes go
straight to ``set_cookie`` as ``Set-Cookie`` strings.

Usage::

    from biscuit.config import StorageConfig
    from biscuit.serializers import json_serializer
    from biscuit.storage import CookieStorage

    headers: list[str] = []
    storage = CookieStorage(StorageConfig(
        get_cookie=lambda: request_cookie_header,
        set_cookie=headers.append,
        serializer=json_serializer,
    ))

    storage.set("prefs", {"theme": "dark"}, CookieOptions(path="/"))
    prefs = storage.get("prefs")
"""

import dataclasses
import logging
from collections.abc import Callable, Iterator
from typing import Any

from biscuit.config import StorageConfig
from biscuit.errors import ConfigurationError
from biscuit.http.cookies import (
    CookieOptions,
    CookieSource,
    cookie_names,
    cookie_value,
    parse_cookies,
    stringify_cookie,
)
from biscuit.http.signed import extract_signed, stringify_signed_cookie
from biscuit.security.signing import Secret
from biscuit.serializers import Serializer

logger = logging.getLogger("biscuit.storage")

_EXPIRED = CookieOptions(max_age=0)


class CookieStorage:
    """Reads and writes cookies through a pair of accessors."""

    __slots__ = ("_get_cookie", "_serializer", "_set_cookie")

    def __init__(self, config: StorageConfig) -> None:
        if not callable(config.get_cookie):
            msg = "StorageConfig.get_cookie must be callable."
            raise ConfigurationError(msg)
        if not callable(config.set_cookie):
            msg = "StorageConfig.set_cookie must be callable."
            raise ConfigurationError(msg)
        if config.serializer is not None and not isinstance(config.serializer, Serializer):
            msg = "StorageConfig.serializer must define parse() and stringify()."
            raise ConfigurationError(msg)

        self._get_cookie = config.get_cookie
        self._set_cookie = config.set_cookie
        self._serializer = config.serializer

    def _parse(self, text: str) -> Any:
        return text if self._serializer is None else self._serializer.parse(text)

    def _stringify(self, value: Any) -> str:
        return str(value) if self._serializer is None else self._serializer.stringify(value)

    def get_all(self) -> dict[str, Any]:
        """Return all cookies as a name-value dict."""
        cookies: dict[str, Any] = parse_cookies(self._get_cookie())
        if self._serializer is None:
            return cookies
        for name, text in cookies.items():
            cookies[name] = self._serializer.parse(text)
        return cookies

    def get_names(self) -> list[str]:
        """Return the names of all existing cookies."""
        return cookie_names(self._get_cookie())

    def get(self, name: str) -> Any | None:
        """Return the value of cookie *name*, or ``None`` if it is missing."""
        text = cookie_value(self._get_cookie(), name)
        return None if text is None else self._parse(text)

    def set(self, name: str, value: Any, options: CookieOptions | None = None) -> None:
        """Write cookie *name* with the given attributes."""
        self._set_cookie(stringify_cookie(name, self._stringify(value), options))

    async def get_signed(self, name: str, secret: Secret) -> Any | None:
        """Return the value of signed cookie *name* if its signature is valid."""
        text = await extract_signed(self._get_cookie(), name, secret)
        return None if text is None else self._parse(text)

    async def set_signed(
        self,
        name: str,
        value: Any,
        secret: Secret,
        options: CookieOptions | None = None,
    ) -> None:
        """Sign and write cookie *name*."""
        self._set_cookie(
            await stringify_signed_cookie(name, self._stringify(value), secret, options)
        )

    def has(self, name: str) -> bool:
        """Return ``True`` if a cookie called *name* exists."""
        return cookie_value(self._get_cookie(), name) is not None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def delete(self, name: str, options: CookieOptions | None = None) -> None:
        """Expire cookie *name*.

        Pass *options* to match the ``Path``/``Domain`` the cookie was set
        with; its expiry fields are replaced by ``Max-Age=0``.
        """
        if options is None:
            expired = _EXPIRED
        else:
            expired = dataclasses.replace(options, expires_at=None, max_age=0)
        self._set_cookie(stringify_cookie(name, "", expired))

    def clear(self) -> None:
        """Expire every cookie currently visible."""
        names = cookie_names(self._get_cookie())
        for name in names:
            self._set_cookie(stringify_cookie(name, "", _EXPIRED))
        logger.debug("Cleared %d cookie(s)", len(names))

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        yield from self.get_all().items()


def create_cookie_storage(
    get_cookie: Callable[[], CookieSource],
    set_cookie: Callable[[str], None],
    serializer: Serializer | None = None,
) -> CookieStorage:
    """Build a ``CookieStorage`` without spelling out a ``StorageConfig``."""
    return CookieStorage(
        StorageConfig(get_cookie=get_cookie, set_cookie=set_cookie, serializer=serializer)
    )
