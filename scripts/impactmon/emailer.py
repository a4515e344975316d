"""
Email delivery for alert digests.

Sends plain-text mail over authenticated SMTP. Credentials and addresses
come from the environment (EMAIL_USER, EMAIL_PASS, EMAIL_FROM, EMAIL_TO).
"""

import logging
import os
import smtplib
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import List, Optional

logger = logging.getLogger(__name__)


class Emailer:
    """Sends digest emails through an SMTP relay."""

    def __init__(
        self,
        smtp_host: str = "smtp.gmail.com",
        smtp_port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        sender: Optional[str] = None,
        recipients: Optional[List[str]] = None,
        sender_name: str = "",
        timeout: int = 30,
    ) -> None:
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.username = username if username is not None else os.environ.get("EMAIL_USER", "")
        self.password = password if password is not None else os.environ.get("EMAIL_PASS", "")
        self.sender = sender or os.environ.get("EMAIL_FROM") or self.username
        if recipients is None:
            recipients = [r.strip() for r in os.environ.get("EMAIL_TO", "").split(",") if r.strip()]
        self.recipients = recipients
        self.sender_name = sender_name
        self.timeout = timeout

    @classmethod
    def from_config(cls, cfg, ticker: str) -> "Emailer":
        return cls(
            smtp_host=cfg.get("email.smtp_host", "smtp.gmail.com"),
            smtp_port=int(cfg.get("email.smtp_port", 587)),
            sender_name=cfg.get("email.sender_name") or f"{ticker} Alert",
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.username and self.password and self.sender and self.recipients)

    def send(self, subject: str, body: str) -> bool:
        """
        Send a plain-text email to all recipients.

        Returns:
            True if the relay accepted the message.
        """
        if not self.is_configured:
            logger.warning("Email not configured (EMAIL_USER/EMAIL_PASS/EMAIL_TO) - not sending")
            return False

        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = formataddr((self.sender_name, self.sender)) if self.sender_name else self.sender
        msg["To"] = ", ".join(self.recipients)

        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as server:
                server.starttls()
                server.login(self.username, self.password)
                server.sendmail(self.sender, self.recipients, msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Email failed: %s", e)
            return False

        logger.info("Email sent: %s", subject)
        return True
