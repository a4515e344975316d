"""
Run state persisted between scheduled invocations.

The only durable fact is the timestamp of the last completed run.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# Lookback used when there is no usable previous run
DEFAULT_LOOKBACK = timedelta(hours=24)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RunState:
    """Timestamp of the last completed run."""

    last_check: datetime

    def to_dict(self) -> dict:
        return {"last_check": self.last_check.isoformat()}


class StateStore:
    """Loads and saves the single RunState record."""

    def __init__(self, state_path: Path, now: Optional[Callable[[], datetime]] = None) -> None:
        """
        Initialize the state store.

        Args:
            state_path: JSON file holding the run state.
            now: Clock returning an aware datetime (defaults to UTC now).
        """
        self.state_path = Path(state_path)
        self._now = now or utc_now

    def default(self) -> RunState:
        """State used when nothing usable is on disk."""
        return RunState(last_check=self._now() - DEFAULT_LOOKBACK)

    def load(self) -> RunState:
        """
        Load state from file.

        Never raises: a missing, unreadable or malformed file yields the
        default state.
        """
        if not self.state_path.exists():
            logger.debug("No state file at %s, using default lookback", self.state_path)
            return self.default()

        try:
            with open(self.state_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            last_check = datetime.fromisoformat(data["last_check"])
        except (OSError, ValueError, TypeError, KeyError, RecursionError) as e:
            logger.warning("Unreadable state file %s (%s), using default lookback", self.state_path, e)
            return self.default()

        if last_check.tzinfo is None:
            last_check = last_check.replace(tzinfo=timezone.utc)
        return RunState(last_check=last_check)

    def save(self, timestamp: Optional[datetime] = None) -> RunState:
        """Overwrite the state file with the given (or current) timestamp."""
        state = RunState(last_check=timestamp or self._now())
        self.state_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.state_path, "w", encoding="utf-8") as f:
            json.dump(state.to_dict(), f, indent=2)
        logger.debug("Saved state: last_check=%s", state.last_check.isoformat())
        return state

    def reset(self) -> bool:
        """Delete the state file. Returns True if a file was removed."""
        if self.state_path.exists():
            self.state_path.unlink()
            return True
        return False
