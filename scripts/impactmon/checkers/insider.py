"""
Insider transaction checker - Form 4 filings from the SEC EDGAR feed.
"""

import calendar
import logging
import re
from datetime import date, datetime, timezone
from typing import List, Optional

import feedparser
from bs4 import BeautifulSoup

from impactmon.checkers.base import SignalChecker, short_date

logger = logging.getLogger(__name__)

DEFAULT_FEED_URL = "https://www.sec.gov/Archives/edgar/daily-index-rss.xml"

# Filing links embed their filing date as a standalone YYYYMMDD run
LINK_DATE_RE = re.compile(r"(?<!\d)(\d{8})(?!\d)")


class InsiderChecker(SignalChecker):
    """Alert on large Form 4 transactions by watch-listed insiders."""

    def __init__(self, rules, feed_url: str = DEFAULT_FEED_URL, user_agent: str = "", **kwargs) -> None:
        super().__init__(rules, **kwargs)
        self.feed_url = feed_url
        self.headers = {"User-Agent": user_agent} if user_agent else {}

    @property
    def name(self) -> str:
        return "Insider Transactions"

    @property
    def checker_id(self) -> str:
        return "insider"

    def check(self, last_check: datetime) -> List[str]:
        since = last_check.date()
        response = self.session.get(self.feed_url, headers=self.headers, timeout=self.timeout)
        response.raise_for_status()
        feed = feedparser.parse(response.content)

        alerts = []
        for item in feed.entries[: self.rules.feed_scan_limit]:
            link = item.get("link")
            if not link or self.rules.insider_link_marker not in link:
                continue
            if self.rules.insider_form_marker not in link:
                continue

            filed = self._link_date(link)
            if filed is None or filed < since:
                continue

            alert = self._check_filing(link, self._parse_date(item))
            if alert:
                alerts.append(alert)

        logger.debug("Scanned %d feed entries for Form 4 filings", len(feed.entries))
        return alerts

    def _check_filing(self, link: str, published: Optional[datetime]) -> Optional[str]:
        """Fetch one filing and return an alert if it crosses the rules."""
        response = self.session.get(link, headers=self.headers, timeout=self.timeout)
        response.raise_for_status()
        soup = BeautifulSoup(response.text, "html.parser")

        owner = self._text(soup, "reportingowner rptownername")
        shares = parse_shares(
            self._text(soup, "nonderivativetransaction transactionamounts transactionshares value")
        )
        is_sale = "4" in self._text(soup, "transactioncoding transactionformtype") and shares > 0

        if abs(shares) <= self.rules.share_threshold:
            return None
        if not self.is_watched(owner):
            logger.debug("Ignoring Form 4 by %s (not on watch-list)", owner)
            return None

        kind = "Sale" if is_sale else "Purchase"
        alert = f"INSIDER {kind}: {owner} - {abs(shares):,} shares"
        if published:
            alert += f" ({short_date(published)})"
        return alert

    def is_watched(self, owner: str) -> bool:
        """Raw substring match against the watch-list."""
        return any(name in owner for name in self.rules.watch_list)

    @staticmethod
    def _text(soup: BeautifulSoup, selector: str) -> str:
        node = soup.select_one(selector)
        return node.get_text().strip() if node else ""

    @staticmethod
    def _link_date(link: str) -> Optional[date]:
        """Extract the embedded YYYYMMDD date from a filing link."""
        for candidate in LINK_DATE_RE.findall(link):
            try:
                return datetime.strptime(candidate, "%Y%m%d").date()
            except ValueError:
                continue
        return None

    @staticmethod
    def _parse_date(item) -> Optional[datetime]:
        """Extract publication date from feed item."""
        parsed = item.get("published_parsed") or item.get("updated_parsed")
        if not parsed:
            return None
        try:
            return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)
        except (ValueError, OverflowError):
            return None


def parse_shares(text: str) -> int:
    """Parse a share amount, keeping only digits, sign and decimal point."""
    cleaned = re.sub(r"[^0-9.-]", "", text)
    try:
        return int(float(cleaned))
    except ValueError:
        return 0
