"""Tests for checker construction and isolated execution."""

from datetime import timedelta
from unittest.mock import MagicMock

import requests
from impactmon.checkers.base import CheckResult
from impactmon.checkers.registry import get_all_checkers, get_checker, run_checker, run_checkers


def fake_checker(checker_id, alerts=None, error=None, enabled=True):
    checker = MagicMock()
    checker.checker_id = checker_id
    checker.name = checker_id.title()
    checker.enabled = enabled
    if error is not None:
        checker.check.side_effect = error
    else:
        checker.check.return_value = alerts or []
    return checker


class TestGetAllCheckers:
    def test_order_and_ids(self, fresh_config):
        ids = [c.checker_id for c in get_all_checkers(fresh_config)]
        assert ids == ["insider", "filings", "news", "price"]

    def test_shared_rules_and_session(self, fresh_config):
        session = MagicMock()
        checkers = get_all_checkers(fresh_config, session=session)
        assert all(c.session is session for c in checkers)
        assert all(c.rules == fresh_config.rules() for c in checkers)

    def test_get_checker_by_id(self, fresh_config):
        assert get_checker("price", fresh_config).checker_id == "price"
        assert get_checker("nope", fresh_config) is None


class TestRunChecker:
    def test_collects_alerts(self, last_check):
        result = run_checker(fake_checker("price", ["PRICE ↑"]), last_check)
        assert isinstance(result, CheckResult)
        assert result.alerts == ["PRICE ↑"]
        assert result.failed is False

    def test_check_time_is_utc(self, last_check):
        result = run_checker(fake_checker("price"), last_check)
        assert result.check_time.utcoffset() == timedelta(0)

    def test_network_error_yields_zero_alerts(self, last_check):
        result = run_checker(fake_checker("news", error=requests.ConnectionError("down")), last_check)
        assert result.alerts == []
        assert result.failed is True
        assert "down" in result.errors[0]

    def test_parse_error_yields_zero_alerts(self, last_check):
        result = run_checker(fake_checker("filings", error=KeyError("filings")), last_check)
        assert result.alerts == []
        assert result.failed is True

    def test_passes_last_check(self, last_check):
        checker = fake_checker("insider")
        run_checker(checker, last_check)
        checker.check.assert_called_once_with(last_check)


class TestRunCheckers:
    def test_preserves_order(self, last_check):
        results = run_checkers(
            [fake_checker("a", ["a1", "a2"]), fake_checker("b", ["b1"])],
            last_check,
        )
        assert [r.checker_id for r in results] == ["a", "b"]
        assert [alert for r in results for alert in r.alerts] == ["a1", "a2", "b1"]

    def test_failure_does_not_stop_later_checkers(self, last_check):
        later = fake_checker("later", ["ok"])
        results = run_checkers([fake_checker("bad", error=RuntimeError("x")), later], last_check)
        assert results[1].alerts == ["ok"]

    def test_skips_disabled(self, last_check):
        disabled = fake_checker("news", enabled=False)
        results = run_checkers([disabled, fake_checker("price", ["p"])], last_check)
        assert [r.checker_id for r in results] == ["price"]
        disabled.check.assert_not_called()
