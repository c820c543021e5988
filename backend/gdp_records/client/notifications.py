"""Notifications — transient, auto-dismissing messages for terminal outcomes.

Invariants:
    - Every notification is shown immediately and dismissed after dismiss_after seconds
    - Dismissal is idempotent (manual dismiss before the timer fires is fine)
    - Must be used from inside a running event loop
"""

import asyncio
import itertools
from dataclasses import dataclass, field
from enum import Enum

from gdp_records.client.view import GdpView


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    id: int
    message: str
    kind: NotificationKind = NotificationKind.INFO


@dataclass
class Notifier:
    view: GdpView
    dismiss_after: float = 3.0
    active: list[Notification] = field(default_factory=list)
    _ids: itertools.count = field(
        default_factory=lambda: itertools.count(1), init=False, repr=False,
    )
    _timers: dict[int, asyncio.TimerHandle] = field(
        default_factory=dict, init=False, repr=False,
    )

    def notify(
        self, message: str, kind: NotificationKind = NotificationKind.INFO,
    ) -> Notification:
        notification = Notification(next(self._ids), message, kind)
        self.active.append(notification)
        self.view.show_notification(notification)
        loop = asyncio.get_running_loop()
        self._timers[notification.id] = loop.call_later(
            self.dismiss_after, self.dismiss, notification,
        )
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(message, NotificationKind.SUCCESS)

    def error(self, message: str) -> Notification:
        return self.notify(message, NotificationKind.ERROR)

    def dismiss(self, notification: Notification) -> None:
        timer = self._timers.pop(notification.id, None)
        if timer is not None:
            timer.cancel()
        if notification in self.active:
            self.active.remove(notification)
            self.view.dismiss_notification(notification)
