"""Tests for the sentiment-scored news checker."""

from unittest.mock import MagicMock

import pytest
from impactmon.checkers.base import CheckerError
from impactmon.checkers.news import NewsChecker


def article(title, description="", url="https://news.example/a"):
    return {
        "title": title,
        "description": description,
        "url": url,
        "publishedAt": "2026-10-16T12:00:00Z",
    }


def analyzer_returning(*scores):
    analyzer = MagicMock()
    analyzer.polarity_scores.side_effect = [{"compound": s} for s in scores]
    return analyzer


@pytest.fixture
def make_checker(rules, session):
    def _make(*scores):
        return NewsChecker(rules, api_key="test-key", analyzer=analyzer_returning(*scores), session=session)

    return _make


class TestNewsChecker:
    def test_disabled_without_api_key(self, rules, monkeypatch):
        monkeypatch.delenv("NEWSAPI_KEY", raising=False)
        assert NewsChecker(rules).enabled is False

    def test_api_key_from_environment(self, rules, monkeypatch):
        monkeypatch.setenv("NEWSAPI_KEY", "env-key")
        assert NewsChecker(rules).enabled is True

    def test_query(self, make_checker):
        checker = make_checker()
        assert checker.build_query() == (
            '("Bloom Energy" OR BE) ("travel" OR "meeting" OR "partnership" OR "opportunity"'
            ' OR "earnings" OR "conference" OR "data center")'
        )

    def test_request_params(self, make_checker, session, make_response, last_check):
        session.get.return_value = make_response(json_data={"status": "ok", "articles": []})
        make_checker().check(last_check)
        params = session.get.call_args.kwargs["params"]
        assert params["from"] == "2026-10-15"
        assert params["sortBy"] == "publishedAt"
        assert params["apiKey"] == "test-key"

    def test_positive_article_alerts(self, make_checker, session, make_response, last_check):
        session.get.return_value = make_response(
            json_data={"status": "ok", "articles": [article("Bloom wins data center deal")]}
        )
        assert make_checker(0.5).check(last_check) == [
            "POSITIVE NEWS: Bloom wins data center deal\n    -> https://news.example/a"
        ]

    def test_negative_article_alerts(self, make_checker, session, make_response, last_check):
        session.get.return_value = make_response(json_data={"status": "ok", "articles": [article("Plant fire")]})
        alerts = make_checker(-0.6).check(last_check)
        assert alerts[0].startswith("NEGATIVE NEWS: Plant fire")

    @pytest.mark.parametrize("score", [-0.05, 0.0, 0.3, -0.3])
    def test_weak_sentiment_is_dropped(self, make_checker, session, make_response, last_check, score):
        session.get.return_value = make_response(json_data={"status": "ok", "articles": [article("Meh")]})
        assert make_checker(score).check(last_check) == []

    def test_scores_title_and_description(self, rules, session, make_response, last_check):
        analyzer = analyzer_returning(0.0)
        checker = NewsChecker(rules, api_key="k", analyzer=analyzer, session=session)
        session.get.return_value = make_response(
            json_data={"status": "ok", "articles": [article("Headline", description=None)]}
        )
        checker.check(last_check)
        analyzer.polarity_scores.assert_called_once_with("Headline. ")

    def test_caps_to_first_ten_articles(self, make_checker, session, make_response, last_check):
        articles = [article(f"Story {i}") for i in range(15)]
        session.get.return_value = make_response(json_data={"status": "ok", "articles": articles})
        alerts = make_checker(*([0.9] * 15)).check(last_check)
        assert len(alerts) == 10
        assert "Story 0" in alerts[0]

    def test_api_error_raises(self, make_checker, session, make_response, last_check):
        session.get.return_value = make_response(
            json_data={"status": "error", "code": "apiKeyInvalid", "message": "bad key"}
        )
        with pytest.raises(CheckerError, match="apiKeyInvalid"):
            make_checker().check(last_check)

    def test_null_url_renders_empty(self, make_checker, session, make_response, last_check):
        story = article("Bloom lands partnership")
        story["url"] = None
        session.get.return_value = make_response(json_data={"status": "ok", "articles": [story]})
        alerts = make_checker(0.7).check(last_check)
        assert alerts == ["POSITIVE NEWS: Bloom lands partnership\n    -> "]
