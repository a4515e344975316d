"""
News checker - keyword-scoped NewsAPI search scored with VADER sentiment.
"""

import logging
import os
from datetime import datetime
from typing import List, Optional

from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from impactmon.checkers.base import CheckerError, SignalChecker

logger = logging.getLogger(__name__)

DEFAULT_NEWS_URL = "https://newsapi.org/v2/everything"


class NewsChecker(SignalChecker):
    """Alert on strongly positive or negative news about the entity."""

    def __init__(
        self,
        rules,
        api_key: Optional[str] = None,
        news_url: str = DEFAULT_NEWS_URL,
        analyzer=None,
        **kwargs,
    ) -> None:
        super().__init__(rules, **kwargs)
        self.api_key = api_key if api_key is not None else os.environ.get("NEWSAPI_KEY", "")
        self.news_url = news_url
        self._analyzer = analyzer

    @property
    def name(self) -> str:
        return "News & Events"

    @property
    def checker_id(self) -> str:
        return "news"

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    @property
    def analyzer(self):
        """VADER analyzer, built on first use."""
        if self._analyzer is None:
            self._analyzer = SentimentIntensityAnalyzer()
        return self._analyzer

    def build_query(self) -> str:
        keywords = " OR ".join(f'"{k}"' for k in self.rules.news_keywords)
        return f'("{self.rules.entity_name}" OR {self.rules.ticker}) ({keywords})'

    def check(self, last_check: datetime) -> List[str]:
        params = {
            "q": self.build_query(),
            "from": last_check.date().isoformat(),
            "sortBy": "publishedAt",
            "apiKey": self.api_key,
        }
        data = self._get_json(self.news_url, params=params)
        if data.get("status") == "error":
            raise CheckerError(f"NewsAPI error: {data.get('code')}: {data.get('message')}")

        alerts = []
        for article in (data.get("articles") or [])[: self.rules.news_limit]:
            title = article.get("title") or ""
            compound = self.score(title, article.get("description"))
            if abs(compound) > self.rules.sentiment_threshold:
                sentiment = "POSITIVE" if compound > 0 else "NEGATIVE"
                alerts.append(f"{sentiment} NEWS: {title}\n    -> {article.get('url') or ''}")
            else:
                logger.debug("Dropping neutral article (%.2f): %s", compound, title)

        return alerts

    def score(self, title: str, description: Optional[str]) -> float:
        """Compound polarity of the headline plus description, in [-1, 1]."""
        text = f"{title}. {description or ''}"
        return float(self.analyzer.polarity_scores(text)["compound"])
