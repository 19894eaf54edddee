"""Fake push transport — records multicast sends for testing."""

from uuid import uuid4

from rawsy.notifications.channel.push_port import MulticastResult, PushTransport
from rawsy.shared.exceptions import DependencyError


class FakePushTransport(PushTransport):
    """Push transport that records multicasts in memory for test assertions."""

    def __init__(self):
        self.sent: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Push delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Push delivery failed"):
        """Configure the fake transport behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send_multicast(
        self,
        tokens: list[str],
        title: str,
        body: str,
        data: dict[str, str] | None = None,
    ) -> MulticastResult:
        if not self.should_succeed:
            raise DependencyError({"push": [self.failure_reason]})

        message_ids = [f"push-{uuid4().hex[:12]}" for _ in tokens]
        self.sent.append(
            {
                "tokens": list(tokens),
                "title": title,
                "body": body,
                "data": dict(data or {}),
            }
        )
        return MulticastResult(success_count=len(tokens), failure_count=0, message_ids=message_ids)

    @property
    def call_count(self) -> int:
        return len(self.sent)

    def reset(self):
        """Clear recorded sends (useful between tests)."""
        self.sent.clear()
        self.should_succeed = True
        self.failure_reason = "Push delivery failed"
