"""Security audit events.

Small opt-in event channel for signed-cookie telemetry. Applications can
register a sink to forward events to logs, metrics, or a SIEM::

    from biscuit.security.audit import set_security_event_sink

    set_security_event_sink(lambda event: log.warning("%s %s", event.name, event.cookie))
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from time import time
from typing import Any, TypeAlias

logger = logging.getLogger("biscuit.security")


@dataclass(frozen=True, slots=True)
class SecurityEvent:
    """A structured security event."""

    name: str
    timestamp: float = field(default_factory=time)
    cookie: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


SecurityEventSink: TypeAlias = Callable[[SecurityEvent], None]


_sink_lock = threading.Lock()
_sink: SecurityEventSink | None = None


def set_security_event_sink(sink: SecurityEventSink | None) -> None:
    """Set a process-wide sink for security events.

    Pass ``None`` to disable event delivery.
    """
    global _sink
    with _sink_lock:
        _sink = sink


def emit_security_event(
    name: str,
    *,
    cookie: str | None = None,
    details: dict[str, Any] | None = None,
) -> None:
    """Emit a best-effort security event to the configured sink.

    A failing sink is logged at DEBUG and never breaks the caller.
    """
    with _sink_lock:
        sink = _sink
    if sink is None:
        return
    try:
        sink(SecurityEvent(name=name, cookie=cookie, details=details or {}))
    except Exception:
        logger.debug("Security event sink failed for %s", name, exc_info=True)
