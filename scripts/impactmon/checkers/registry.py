"""
Checker registry - builds the configured checkers and runs them in order.
"""

import logging
from datetime import datetime
from typing import List, Optional

import requests

from impactmon.checkers.base import CheckResult, SignalChecker
from impactmon.checkers.filings import FilingsChecker
from impactmon.checkers.insider import InsiderChecker
from impactmon.checkers.news import NewsChecker
from impactmon.checkers.price import PriceChecker
from impactmon.state import utc_now

logger = logging.getLogger(__name__)


def get_all_checkers(cfg=None, session: Optional[requests.Session] = None) -> List[SignalChecker]:
    """Get instances of all checkers, in digest order.

    Disabled checkers (missing credentials) are included; run_checkers
    skips them with a warning.
    """
    if cfg is None:
        from impactmon.config import config as cfg

    rules = cfg.rules()
    session = session or requests.Session()
    timeout = cfg.get("sources.request_timeout", 30)
    user_agent = cfg.sec_user_agent

    return [
        InsiderChecker(
            rules,
            feed_url=cfg.get("sources.insider_feed_url"),
            user_agent=user_agent,
            session=session,
            timeout=timeout,
        ),
        FilingsChecker(
            rules,
            submissions_url=cfg.get("sources.submissions_url"),
            user_agent=user_agent,
            session=session,
            timeout=timeout,
        ),
        NewsChecker(rules, news_url=cfg.get("sources.news_url"), session=session, timeout=timeout),
        PriceChecker(rules, price_url=cfg.get("sources.price_url"), session=session, timeout=timeout),
    ]


def get_checker(checker_id: str, cfg=None) -> Optional[SignalChecker]:
    """Look up a single checker by id."""
    for checker in get_all_checkers(cfg):
        if checker.checker_id == checker_id:
            return checker
    return None


def run_checker(checker: SignalChecker, last_check: datetime) -> CheckResult:
    """Run one checker, converting any failure into an empty result.

    A failing checker never aborts the run: its error is logged and it
    contributes zero alerts.
    """
    result = CheckResult(checker_id=checker.checker_id, check_time=utc_now())
    try:
        logger.info("Checking %s...", checker.name)
        result.alerts = list(checker.check(last_check))
        logger.info("  %s: %d alert(s)", checker.name, len(result.alerts))
    except Exception as e:
        logger.error("%s check failed: %s", checker.name, e)
        result.alerts = []
        result.errors.append(f"{checker.name}: {e}")
    return result


def run_checkers(checkers: List[SignalChecker], last_check: datetime) -> List[CheckResult]:
    """Run every enabled checker sequentially, preserving order."""
    results = []
    for checker in checkers:
        if not checker.enabled:
            logger.warning("%s disabled (missing credentials) - skipping", checker.name)
            continue
        results.append(run_checker(checker, last_check))
    return results
