"""
Digest rendering and dispatch.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from .config import RuleSet

logger = logging.getLogger(__name__)


def render_digest(alerts: List[str], entity_label: str, generated_at: datetime) -> str:
    """Render the plain-text digest body."""
    return (
        f"{entity_label} - Potential Stock Impact Alerts\n\n"
        + "\n\n".join(alerts)
        + f"\n\nGenerated: {generated_at:%Y-%m-%d %H:%M:%S %Z}".rstrip()
    )


class DigestDispatcher:
    """Hands a rendered digest to a delivery channel.

    The channel is any object with ``send(subject, body) -> bool``.
    Delivery failures are logged and never propagate.
    """

    def __init__(self, channel, rules: RuleSet) -> None:
        self.channel = channel
        self.rules = rules

    @property
    def subject(self) -> str:
        return f"{self.rules.ticker} Stock Impact Alert"

    def dispatch(self, alerts: List[str], generated_at: Optional[datetime] = None) -> bool:
        """
        Send one digest for all alerts.

        Returns:
            True if the channel reported a successful delivery.
        """
        if not alerts:
            logger.info("No significant events detected.")
            return False

        generated_at = generated_at or datetime.now(timezone.utc)
        body = render_digest(alerts, self.rules.label, generated_at)
        try:
            sent = bool(self.channel.send(self.subject, body))
        except Exception:
            logger.exception("Digest delivery failed")
            return False

        if sent:
            logger.info("%d alert(s) sent!", len(alerts))
        else:
            logger.warning("Digest with %d alert(s) was not delivered", len(alerts))
        return sent
