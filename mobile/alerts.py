import logging
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Alert:
    title: str
    message: str


class AlertCenter:
    """Collects user-facing alerts; ``on_alert`` lets a front end display them."""

    def __init__(self, on_alert: Callable[[Alert], None] | None = None):
        self.alerts: list[Alert] = []
        self.on_alert = on_alert

    def alert(self, title: str, message: str) -> None:
        alert = Alert(title, message)
        logger.warning("%s: %s", title, message)
        self.alerts.append(alert)
        if self.on_alert is not None:
            self.on_alert(alert)

    @property
    def last(self) -> Alert | None:
        return self.alerts[-1] if self.alerts else None
