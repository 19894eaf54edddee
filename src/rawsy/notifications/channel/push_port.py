"""Push notification channel port — abstract interface for multicast push dispatch."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class MulticastResult:
    """Outcome of one multicast call."""

    success_count: int
    failure_count: int
    message_ids: list[str] = field(default_factory=list)
    error: str | None = None


class PushTransport(ABC):
    """Abstract interface for push notification transports."""

    @abstractmethod
    def send_multicast(
        self,
        tokens: list[str],
        title: str,
        body: str,
        data: dict[str, str] | None = None,
    ) -> MulticastResult:
        """Deliver one notification to every device token in a single call.

        Best-effort: implementations may raise on transport failure; callers
        catch and log.
        """
        ...
