"""Security utilities: cookie signatures and audit events.

Signing::

    from biscuit.security import sign, verify

    signature = await sign("42", "s3cr3t")
    ok = await verify("42", "s3cr3t", signature)
"""

from biscuit.security.audit import SecurityEvent, emit_security_event, set_security_event_sink
from biscuit.security.signing import compute_signature, sign, verify

__all__ = [
    "SecurityEvent",
    "compute_signature",
    "emit_security_event",
    "set_security_event_sink",
    "sign",
    "verify",
]
