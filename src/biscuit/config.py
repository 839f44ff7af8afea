"""Storage configuration.

StorageConfig is a frozen dataclass: immutable after creation, with the
cookie accessors passed in explicitly rather than looked up globally.
"""

from collections.abc import Callable
from dataclasses import dataclass

from biscuit.http.cookies import CookieSource
from biscuit.serializers import Serializer


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Cookie storage configuration. Immutable after creation.

    ``get_cookie`` returns the current raw cookie text on every call;
    ``set_cookie`` receives one ``Set-Cookie`` string per write::

        config = StorageConfig(
            get_cookie=lambda: request.headers.get_list("cookie"),
            set_cookie=set_cookie_headers.append,
        )

    ``serializer`` is ``None`` when values are stored as plain strings.
    """

    get_cookie: Callable[[], CookieSource]
    set_cookie: Callable[[str], None]
    serializer: Serializer | None = None
