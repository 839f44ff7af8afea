"""Signed cookie values.

A signed value is ``<value>.<signature>``, where the signature is the
base64 HMAC of ``<value>``. Reading splits at the last ``.``, since the
base64 alphabet never contains one, so values may contain dots freely.

Any failure on the read side (missing cookie, no separator, bad base64,
wrong secret) reads as ``None``. Callers cannot tell a forged cookie
from an absent one.
"""

from biscuit.http.cookies import CookieOptions, CookieSource, cookie_value, stringify_cookie
from biscuit.security.audit import emit_security_event
from biscuit.security.signing import Secret, sign, verify

SEPARATOR = "."


async def compose_signed(value: str, secret: Secret) -> str:
    """Return *value* followed by the separator and its signature.

    Reserved characters are not escaped here; ``stringify_cookie`` does
    that when the result is written out.
    """
    return f"{value}{SEPARATOR}{await sign(value, secret)}"


def split_signed(raw: str) -> tuple[str, str] | None:
    """Split a signed value into ``(value, signature)`` at the last separator."""
    value, sep, signature = raw.rpartition(SEPARATOR)
    if not sep:
        return None
    return value, signature


async def extract_signed(source: CookieSource, name: str, secret: Secret) -> str | None:
    """Return the verified value of the signed cookie *name*, or ``None``."""
    raw = cookie_value(source, name)
    if raw is None:
        return None

    parts = split_signed(raw)
    if parts is None:
        return None

    value, signature = parts
    if await verify(value, secret, signature):
        return value

    emit_security_event("cookie.signature_rejected", cookie=name)
    return None


async def stringify_signed_cookie(
    name: str,
    value: str,
    secret: Secret,
    options: CookieOptions | None = None,
) -> str:
    """Sign *value* and serialize it as a ``Set-Cookie`` header value."""
    return stringify_cookie(name, await compose_signed(value, secret), options)
