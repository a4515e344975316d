"""
Price move checker - Alpha Vantage daily closes.

Unlike the other checkers this one ignores the last-check timestamp and
always compares the two most recent trading days.
"""

import logging
import math
import os
from datetime import datetime
from typing import List, Optional

from impactmon.checkers.base import CheckerError, SignalChecker

logger = logging.getLogger(__name__)

DEFAULT_PRICE_URL = "https://www.alphavantage.co/query"
SERIES_KEY = "Time Series (Daily)"
CLOSE_KEY = "4. close"


class PriceChecker(SignalChecker):
    """Alert when the latest close moved at least the threshold from the prior close."""

    def __init__(
        self, rules, api_key: Optional[str] = None, price_url: str = DEFAULT_PRICE_URL, **kwargs
    ) -> None:
        super().__init__(rules, **kwargs)
        self.api_key = api_key if api_key is not None else os.environ.get("ALPHA_VANTAGE_KEY", "")
        self.price_url = price_url

    @property
    def name(self) -> str:
        return "Stock Price"

    @property
    def checker_id(self) -> str:
        return "price"

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def check(self, last_check: Optional[datetime] = None) -> List[str]:
        params = {
            "function": "TIME_SERIES_DAILY",
            "symbol": self.rules.ticker,
            "apikey": self.api_key,
        }
        data = self._get_json(self.price_url, params=params)
        series = data.get(SERIES_KEY)
        if not series:
            # Alpha Vantage reports throttling and bad keys in-band
            detail = data.get("Note") or data.get("Information") or data.get("Error Message") or "no data"
            raise CheckerError(f"No daily series for {self.rules.ticker}: {detail}")
        if len(series) < 2:
            raise CheckerError(f"Need two trading days for {self.rules.ticker}, got {len(series)}")

        dates = sorted(series, reverse=True)
        try:
            close = float(series[dates[0]][CLOSE_KEY])
            prev_close = float(series[dates[1]][CLOSE_KEY])
        except (KeyError, TypeError, ValueError) as e:
            raise CheckerError(f"Malformed close for {self.rules.ticker}: {e}") from e

        alert = price_move_alert(prev_close, close, dates[0], self.rules.price_threshold)
        return [alert] if alert else []


def price_move_alert(prev_close: float, close: float, as_of: str, threshold: float) -> Optional[str]:
    """Return a directional alert if the close-to-close move meets the threshold."""
    if prev_close == 0:
        logger.warning("Previous close is zero, cannot compute change")
        return None

    if not (math.isfinite(close) and math.isfinite(prev_close)):
        logger.warning("Non-finite close (%s, %s), cannot compute change", prev_close, close)
        return None

    change_pct = (close - prev_close) / prev_close * 100
    if not abs(change_pct) >= threshold:
        return None

    arrow = "↑" if change_pct > 0 else "↓"
    return f"PRICE {arrow} {abs(change_pct):.2f}% -> ${close:,.2f} (as of {as_of})"
