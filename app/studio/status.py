"""
Status notices shown above the results gallery.

Only one notice is visible at a time. Info and success notices clear
themselves after a short interval; errors stay until replaced.
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional

INFO = "info"
SUCCESS = "success"
ERROR = "error"

NOTICE_KINDS = (INFO, SUCCESS, ERROR)

# Seconds an info/success notice stays visible
NOTICE_TTL = 5.0

_ICONS = {INFO: "⏳", SUCCESS: "✓", ERROR: "❌"}


@dataclass(frozen=True)
class Notice:
    kind: str
    message: str
    shown_at: float

    @property
    def sticky(self) -> bool:
        return self.kind == ERROR

    def format(self) -> str:
        return f"{_ICONS[self.kind]} {self.message}"


class StatusBoard:
    def __init__(self, ttl: float = NOTICE_TTL, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._notice: Optional[Notice] = None

    def show(self, kind: str, message: str) -> Notice:
        if kind not in NOTICE_KINDS:
            raise ValueError(f"Unknown notice kind: {kind!r}")
        self._notice = Notice(kind, message, self._clock())
        return self._notice

    def clear(self) -> None:
        self._notice = None

    def current(self) -> Optional[Notice]:
        """The visible notice, dropping it once an expiring one has timed out."""
        notice = self._notice
        if notice is None:
            return None
        if not notice.sticky and self._clock() - notice.shown_at >= self.ttl:
            self._notice = None
            return None
        return notice

    def text(self) -> str:
        notice = self.current()
        return notice.format() if notice else ""
