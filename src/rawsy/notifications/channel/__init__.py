"""Push transport registry.

Provides get_push_transport() / set_push_transport() to swap implementations.
Defaults to the fake transport; a real provider is installed at startup with
set_push_transport().
"""

from rawsy.notifications.channel.fake_push import FakePushTransport
from rawsy.notifications.channel.push_port import MulticastResult, PushTransport

_current_transport: PushTransport | None = None


def get_push_transport() -> PushTransport:
    """Return the current push transport. Defaults to FakePushTransport."""
    global _current_transport
    if _current_transport is None:
        _current_transport = FakePushTransport()
    return _current_transport


def set_push_transport(transport: PushTransport) -> None:
    """Override the active push transport (useful for tests)."""
    global _current_transport
    _current_transport = transport


def reset_push_transport() -> None:
    """Reset to default transport."""
    global _current_transport
    _current_transport = None


__all__ = [
    "FakePushTransport",
    "MulticastResult",
    "PushTransport",
    "get_push_transport",
    "reset_push_transport",
    "set_push_transport",
]
