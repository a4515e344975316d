"""
Earnings and material filing checker - EDGAR per-company submissions index.
"""

import logging
from datetime import date, datetime
from typing import List, Optional

from impactmon.checkers.base import CheckerError, SignalChecker, short_date

logger = logging.getLogger(__name__)

DEFAULT_SUBMISSIONS_URL = "https://data.sec.gov/submissions/CIK{cik}.json"


class FilingsChecker(SignalChecker):
    """Alert on new quarterly reports and earnings-related current reports."""

    def __init__(
        self, rules, submissions_url: str = DEFAULT_SUBMISSIONS_URL, user_agent: str = "", **kwargs
    ) -> None:
        super().__init__(rules, **kwargs)
        self.submissions_url = submissions_url
        self.user_agent = user_agent

    @property
    def name(self) -> str:
        return "Earnings & Material Filings"

    @property
    def checker_id(self) -> str:
        return "filings"

    def check(self, last_check: datetime) -> List[str]:
        url = self.submissions_url.format(cik=self.rules.cik)
        data = self._get_json(url, headers={"User-Agent": self.user_agent})

        try:
            recent = data["filings"]["recent"]
            forms = recent["form"]
            filing_dates = recent["filingDate"]
        except (KeyError, TypeError) as e:
            raise CheckerError(f"Unexpected submissions payload: missing {e}") from e
        descriptions = recent.get("primaryDocDescription") or []

        since = last_check.date()
        alerts = []
        for i, form in enumerate(forms):
            filed = _parse_iso_date(filing_dates[i] if i < len(filing_dates) else None)
            if filed is None or filed < since:
                continue

            description = (descriptions[i] if i < len(descriptions) else None) or ""
            if self.is_material(form, description):
                alerts.append(f"FILING: {form} filed on {short_date(filed)} - {description}")

        return alerts

    def is_material(self, form: str, description: str) -> bool:
        """Quarterly reports always qualify; other material forms need an earnings mention."""
        if form not in self.rules.material_forms:
            return False
        if form == self.rules.unconditional_form:
            return True
        return self.rules.earnings_keyword.lower() in description.lower()


def _parse_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        logger.debug("Skipping filing with unparseable date %r", value)
        return None
