"""Status listener implementations."""

from datetime import datetime
from typing import List, Tuple

from ..models.status import AlarmStatus
from ..logging_config import get_logger
from ..utils import format_timestamp
from .interfaces import StatusListener

logger = get_logger("status_listener")


class LoggingStatusListener(StatusListener):
    """Listener that logs every callback and remembers alarm statuses seen."""

    def __init__(self, max_history: int = 100):
        self.max_history = max_history
        self.history: List[Tuple[datetime, AlarmStatus]] = []
        self.last_cat_detected = False

    def notify(self, status: AlarmStatus) -> None:
        now = datetime.now()
        self.history.append((now, status))
        if len(self.history) > self.max_history:
            self.history.pop(0)
        logger.info(f"[{format_timestamp(now)}] Alarm status: {status.description}")

    def cat_detected(self, detected: bool) -> None:
        self.last_cat_detected = detected
        if detected:
            logger.info("Cat detected in latest image")

    def sensor_status_changed(self) -> None:
        logger.debug("Sensor status changed")

    @property
    def current_status(self) -> AlarmStatus:
        """Most recent alarm status seen, NO_ALARM before any notification."""
        return self.history[-1][1] if self.history else AlarmStatus.NO_ALARM
