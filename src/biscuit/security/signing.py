"""HMAC signatures for cookie values.

Signatures are HMAC-SHA256 digests of the UTF-8 value, encoded as
standard padded base64. The alphabet never contains ``.``, which is what
lets a signed cookie use ``.`` as its value/signature separator.

Usage::

    from biscuit.security.signing import sign, verify

    signature = await sign("42", "s3cr3t")
    ok = await verify("42", "s3cr3t", signature)

``sign`` and ``verify`` yield to the event loop once before computing,
so many independent checks interleave fairly. ``compute_signature`` is
the synchronous core for callers outside an event loop.
"""

import base64
import binascii
import hmac
import logging
from typing import TypeAlias

from anyio.lowlevel import checkpoint

from biscuit.errors import SigningError

logger = logging.getLogger("biscuit.security")

DEFAULT_DIGEST = "sha256"

Secret: TypeAlias = str | bytes | bytearray | memoryview


def _key(secret: Secret) -> bytes:
    """Normalize a secret to raw key bytes."""
    if isinstance(secret, str):
        return secret.encode("utf-8")
    if isinstance(secret, (bytes, bytearray, memoryview)):
        return bytes(secret)
    msg = f"Secret must be str or bytes, not {type(secret).__name__}."
    raise TypeError(msg)


def _digest(value: str, secret: Secret, digest: str) -> bytes:
    return hmac.new(_key(secret), value.encode("utf-8"), digest).digest()


def compute_signature(value: str, secret: Secret, *, digest: str = DEFAULT_DIGEST) -> str:
    """Return the base64 HMAC signature of *value* under *secret*.

    Raises:
        SigningError: If the digest is unsupported or the secret unusable.
    """
    try:
        raw = _digest(value, secret, digest)
    except (TypeError, ValueError) as exc:
        msg = f"Cannot sign value with digest {digest!r}: {exc}"
        raise SigningError(msg) from exc
    return base64.b64encode(raw).decode("ascii")


async def sign(value: str, secret: Secret, *, digest: str = DEFAULT_DIGEST) -> str:
    """Sign *value*, returning the base64 signature text."""
    await checkpoint()
    return compute_signature(value, secret, digest=digest)


async def verify(
    value: str,
    secret: Secret,
    signature: str,
    *,
    digest: str = DEFAULT_DIGEST,
) -> bool:
    """Check *signature* against *value* in constant time.

    Never raises: malformed base64, an unusable secret or an unsupported
    digest all count as a failed verification.

    Returns:
        ``True`` if the signature matches, ``False`` otherwise.
    """
    await checkpoint()
    try:
        supplied = base64.b64decode(signature, validate=True)
        expected = _digest(value, secret, digest)
    except (binascii.Error, TypeError, ValueError):
        supplied = expected = b""
    if expected and hmac.compare_digest(expected, supplied):
        return True
    logger.debug("Rejected signature (digest=%s)", digest)
    return False
