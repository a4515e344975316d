"""
Base class for signal checkers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

import requests

from impactmon.config import RuleSet

# Request settings
REQUEST_TIMEOUT = 30


class CheckerError(Exception):
    """An upstream source returned a payload the checker cannot use."""


@dataclass
class CheckResult:
    """Outcome of running one checker."""

    checker_id: str
    alerts: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    check_time: Optional[datetime] = None

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    def __str__(self) -> str:
        return (
            f"{self.checker_id}: {len(self.alerts)} alert(s)"
            f"{f' ({len(self.errors)} errors)' if self.errors else ''}"
        )


def short_date(value: date) -> str:
    """Format a date as 'Oct 7' without platform-specific strftime flags."""
    return f"{value:%b} {value.day}"


class SignalChecker(ABC):
    """Abstract base class for external signal checkers.

    Each checker issues its own fetches and maps the raw data to zero or
    more alert strings. Checkers keep no state between runs.
    """

    def __init__(
        self,
        rules: RuleSet,
        session: Optional[requests.Session] = None,
        timeout: int = REQUEST_TIMEOUT,
    ) -> None:
        self.rules = rules
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable checker name."""
        ...

    @property
    @abstractmethod
    def checker_id(self) -> str:
        """Unique identifier for this checker (used on the CLI)."""
        ...

    @property
    def enabled(self) -> bool:
        """Whether this checker can run. Override to check credentials."""
        return True

    @abstractmethod
    def check(self, last_check: datetime) -> List[str]:
        """Fetch the signal and return alerts.

        Args:
            last_check: Timestamp of the previous completed run.

        Returns:
            Alert strings in the order they were found.

        Raises:
            requests.RequestException: On transport failures.
            CheckerError: On unusable upstream payloads.
        """
        ...

    def _get_json(self, url: str, **kwargs) -> dict:
        """GET a URL and decode a JSON body, raising on HTTP errors."""
        response = self.session.get(url, timeout=self.timeout, **kwargs)
        response.raise_for_status()
        try:
            return response.json()
        except ValueError as e:
            raise CheckerError(f"Invalid JSON from {url}: {e}") from e
