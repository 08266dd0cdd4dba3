import logging
from collections.abc import Callable

from .constants import ALERT_MESSAGES, AlertCategory
from .models import Alert

logger = logging.getLogger(__name__)


class AlertSink:
    """
    Collects user-facing error alerts.

    Alerts are recorded synchronously at the failure site; a front end can
    attach a listener to display them as they happen.
    """

    def __init__(self, listener: Callable[[Alert], None] | None = None):
        self.listener = listener
        self.alerts: list[Alert] = []

    def show_error(self, category: str, header: str, content: str) -> Alert:
        alert = Alert(category=category, header=header, content=content)
        self.alerts.append(alert)
        logger.error(f"{category}: {header} {content}")

        if self.listener:
            try:
                self.listener(alert)
            except Exception as e:
                logger.error(f"Alert listener failed for '{category}': {e}")
        return alert

    def raise_category(self, category: AlertCategory) -> Alert:
        """Raises one of the fixed alert categories with its standard texts."""
        header, content = ALERT_MESSAGES[category]
        return self.show_error(category.value, header, content)

    def count(self, category: AlertCategory | str) -> int:
        name = category.value if isinstance(category, AlertCategory) else category
        return sum(1 for alert in self.alerts if alert.category == name)
