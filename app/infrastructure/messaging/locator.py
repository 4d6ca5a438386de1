"""Map message ids to the platform location of the message."""

import threading
from typing import Dict, Optional, Tuple

from core.logging import get_module_logger

logger = get_module_logger()


class MessageLocator:
    """Thread-safe ``(message_id, channel) -> ts`` map.

    Slack addresses messages by channel and timestamp, while commands address
    them by correlation id. The map lives in process memory; the interaction
    handler re-seeds it from every button/menu click, which always carries the
    location of the message that was clicked.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._locations: Dict[Tuple[str, str], str] = {}

    def remember(self, message_id: str, channel: str, ts: str) -> None:
        """Record where a message lives."""
        with self._lock:
            self._locations[(message_id, channel)] = ts
        logger.debug("message_location_recorded", message_id=message_id, channel=channel, ts=ts)

    def lookup(self, message_id: str, channel: str) -> Optional[str]:
        """Return the timestamp of a known message or None."""
        with self._lock:
            return self._locations.get((message_id, channel))

    def forget(self, message_id: str, channel: str) -> None:
        """Drop a location, e.g. after the message was deleted."""
        with self._lock:
            self._locations.pop((message_id, channel), None)

    def clear(self) -> None:
        """Drop every known location."""
        with self._lock:
            self._locations.clear()


message_locator = MessageLocator()
