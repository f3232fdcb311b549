"""Transient user notifications (toasts)."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Severity(Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    severity: Severity
    summary: str
    detail: str


class Notifier:
    """Collects notifications and forwards each one to an optional sink.

    The web layer installs a sink that turns notifications into FastHTML
    toasts; tests read `messages` directly.
    """

    def __init__(self, sink: Optional[Callable[[Notification], None]] = None):
        self.sink = sink
        self.messages: list[Notification] = []

    def notify(self, severity: Severity, summary: str, detail: str) -> Notification:
        notification = Notification(severity, summary, detail)
        self.messages.append(notification)
        if self.sink is not None:
            self.sink(notification)
        return notification

    def success(self, detail: str, summary: str = "Success") -> Notification:
        return self.notify(Severity.SUCCESS, summary, detail)

    def info(self, detail: str, summary: str = "Info") -> Notification:
        return self.notify(Severity.INFO, summary, detail)

    def warning(self, detail: str, summary: str = "Warning") -> Notification:
        return self.notify(Severity.WARNING, summary, detail)

    def error(self, detail: str, summary: str = "Error") -> Notification:
        return self.notify(Severity.ERROR, summary, detail)

    @property
    def errors(self) -> list[Notification]:
        return [n for n in self.messages if n.severity == Severity.ERROR]
