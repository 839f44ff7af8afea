"""Biscuit: read, write and sign HTTP cookie strings.

Parsing and serializing::

    from biscuit import CookieOptions, parse_cookies, stringify_cookie

    parse_cookies("session=abc; theme=dark")
    # {'session': 'abc', 'theme': 'dark'}

    stringify_cookie("theme", "dark", CookieOptions(max_age=3600, path="/"))
    # 'theme=dark; Max-Age=3600; Path=/'

Storage over any get/set pair::

    from biscuit import create_cookie_storage, json_serializer

    headers: list[str] = []
    storage = create_cookie_storage(lambda: cookie_header, headers.append, json_serializer)
    await storage.set_signed("user", {"id": 42}, secret)
"""

__version__ = "0.1.0"
__all__ = [
    "BiscuitError",
    "ConfigurationError",
    "CookieDocument",
    "CookieOptions",
    "CookieStorage",
    "JSONSerializer",
    "Serializer",
    "SigningError",
    "StorageConfig",
    "compose_signed",
    "cookie_names",
    "cookie_value",
    "create_cookie_storage",
    "document_cookie_storage",
    "extract_signed",
    "header_cookie_storage",
    "json_serializer",
    "parse_cookies",
    "sign",
    "stringify_cookie",
    "stringify_signed_cookie",
    "verify",
]

# public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "BiscuitError": "biscuit.errors",
    "ConfigurationError": "biscuit.errors",
    "SigningError": "biscuit.errors",
    "CookieOptions": "biscuit.http.cookies",
    "cookie_names": "biscuit.http.cookies",
    "cookie_value": "biscuit.http.cookies",
    "parse_cookies": "biscuit.http.cookies",
    "stringify_cookie": "biscuit.http.cookies",
    "compose_signed": "biscuit.http.signed",
    "extract_signed": "biscuit.http.signed",
    "stringify_signed_cookie": "biscuit.http.signed",
    "sign": "biscuit.security.signing",
    "verify": "biscuit.security.signing",
    "JSONSerializer": "biscuit.serializers",
    "Serializer": "biscuit.serializers",
    "json_serializer": "biscuit.serializers",
    "StorageConfig": "biscuit.config",
    "CookieStorage": "biscuit.storage",
    "create_cookie_storage": "biscuit.storage",
    "CookieDocument": "biscuit.adapters",
    "document_cookie_storage": "biscuit.adapters",
    "header_cookie_storage": "biscuit.adapters",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import biscuit`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
