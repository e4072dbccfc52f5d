# =============================================================================
# lib/notifications.py - Auto-Dismissing Notifications
# =============================================================================
# Keeps the list of user-facing notifications (info/success/warning/error)
# and removes each one after its duration.
#
# Every auto-dismiss timer is an asyncio TimerHandle keyed by notification id.
# Removing a notification by hand, or clearing the list, cancels its timer,
# so no callback fires for a notification that is already gone.
#
# Usage (inside a running event loop):
#   center = NotificationCenter()
#   note = center.add("success", "User created")
#   center.remove(note.id)
# =============================================================================

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from lib.utils import utc_now

logger = logging.getLogger(__name__)

NotificationType = Literal["info", "success", "warning", "error"]

DEFAULT_DURATION_MS = 5000
STICKY = -1


@dataclass
class Notification:
    """One notification as shown to the user."""
    id: str
    type: NotificationType
    title: str
    message: str | None = None
    duration_ms: int = DEFAULT_DURATION_MS
    created_at: datetime = field(default_factory=utc_now)


class NotificationCenter:
    """
    Ordered notification list with cancellable auto-dismissal.

    `duration_ms=STICKY` (-1) keeps a notification until it is removed.
    Timers need a running event loop; add() must be called from one.
    """

    def __init__(self):
        self._notifications: list[Notification] = []
        self._timers: dict[str, asyncio.TimerHandle] = {}

    @property
    def notifications(self) -> list[Notification]:
        """Current notifications, oldest first (a copy)."""
        return list(self._notifications)

    def pending_timers(self) -> int:
        """Number of auto-dismiss timers still scheduled."""
        return len(self._timers)

    def add(
        self,
        type: NotificationType,
        title: str,
        message: str | None = None,
        duration_ms: int | None = None,
    ) -> Notification:
        """
        Add a notification and schedule its removal.

        Args:
            type: info, success, warning or error
            title: Short headline
            message: Optional detail text
            duration_ms: Lifetime in ms (default 5000); -1 for sticky

        Returns:
            The stored Notification (with generated id and created_at)
        """
        if duration_ms is None or duration_ms == 0:
            duration_ms = DEFAULT_DURATION_MS

        note = Notification(
            id=str(uuid.uuid4()),
            type=type,
            title=title,
            message=message,
            duration_ms=duration_ms,
        )
        self._notifications.append(note)

        if duration_ms != STICKY:
            loop = asyncio.get_running_loop()
            self._timers[note.id] = loop.call_later(duration_ms / 1000, self._expire, note.id)

        return note

    def _expire(self, notification_id: str) -> None:
        self._timers.pop(notification_id, None)
        self._discard(notification_id)
        logger.debug(f"Notification {notification_id} expired")

    def _discard(self, notification_id: str) -> bool:
        before = len(self._notifications)
        self._notifications = [n for n in self._notifications if n.id != notification_id]
        return len(self._notifications) != before

    def remove(self, notification_id: str) -> bool:
        """
        Remove a notification now and cancel its timer.

        Returns:
            True if the notification was present
        """
        timer = self._timers.pop(notification_id, None)
        if timer is not None:
            timer.cancel()
        return self._discard(notification_id)

    def clear(self) -> None:
        """Remove every notification and cancel all timers."""
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._notifications.clear()
