"""
Configuration management for the Impact Monitor.

Handles loading and accessing configuration from YAML files and environment variables.
"""

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml


@dataclass(frozen=True)
class RuleSet:
    """Immutable bundle of the rule constants every checker is parameterized by."""

    entity_name: str
    ticker: str
    cik: str
    watch_list: Tuple[str, ...]
    share_threshold: int
    price_threshold: float
    sentiment_threshold: float
    news_keywords: Tuple[str, ...]
    news_limit: int
    feed_scan_limit: int
    insider_form_marker: str
    insider_link_marker: str
    material_forms: Tuple[str, ...]
    unconditional_form: str
    earnings_keyword: str

    @property
    def label(self) -> str:
        """Display label such as 'Bloom Energy (BE)'."""
        return f"{self.entity_name} ({self.ticker})"


class Config:
    """Configuration manager for the Impact Monitor."""

    # Default configuration values
    DEFAULTS: Dict[str, Any] = {
        "paths": {
            "base_dir": None,  # Set dynamically
            "state": "state.json",
            "logs": "logs",
        },
        "entity": {
            "name": "Bloom Energy",
            "ticker": "BE",
            "cik": "0001664703",
        },
        "rules": {
            "watch_list": [
                "KR Sridhar",
                "Aman Joshi",
                "Greg Cameron",
                "Ravi Prasher",
                "Satish Chitoori",
            ],
            "share_threshold": 1000,
            "price_threshold": 5.0,
            "sentiment_threshold": 0.3,
            "news_keywords": [
                "travel",
                "meeting",
                "partnership",
                "opportunity",
                "earnings",
                "conference",
                "data center",
            ],
            "news_limit": 10,
            "feed_scan_limit": 50,
            "insider_form_marker": "-4-",
            "insider_link_marker": "xbrl",
            "material_forms": ["8-K", "10-Q"],
            "unconditional_form": "10-Q",
            "earnings_keyword": "earnings",
        },
        "sources": {
            "insider_feed_url": "https://www.sec.gov/Archives/edgar/daily-index-rss.xml",
            "submissions_url": "https://data.sec.gov/submissions/CIK{cik}.json",
            "news_url": "https://newsapi.org/v2/everything",
            "price_url": "https://www.alphavantage.co/query",
            "sec_user_agent": "ImpactMonitor/1.0 (impact-monitor@example.com)",
            "request_timeout": 30,
        },
        "email": {
            "smtp_host": "smtp.gmail.com",
            "smtp_port": 587,
            "sender_name": None,  # Defaults to "<TICKER> Alert"
        },
        "logging": {
            "level": "INFO",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "file_enabled": True,
        },
    }

    _instance: Optional["Config"] = None
    _config: Dict[str, Any] = {}
    _base_dir: Optional[Path] = None

    def __new__(cls) -> "Config":
        """Singleton pattern to ensure single configuration instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        """Initialize configuration if not already done."""
        if self._initialized:
            return
        self._initialized = True
        self._config = copy.deepcopy(self.DEFAULTS)
        self._base_dir = self._find_base_dir()
        self._load_config_file()

    def _find_base_dir(self) -> Path:
        """Find the base directory of the monitor installation."""
        env_base = os.environ.get("IMPACTMON_BASE_DIR")
        if env_base:
            return Path(env_base)

        # scripts/impactmon/config.py -> scripts/impactmon -> scripts -> base
        current_file = Path(__file__).resolve()
        return current_file.parent.parent.parent

    def _load_config_file(self) -> None:
        """Load configuration from YAML file if it exists."""
        config_path = self._base_dir / "config" / "config.yaml"
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                file_config = yaml.safe_load(f) or {}
                self._merge_config(file_config)

        self._config["paths"]["base_dir"] = str(self._base_dir)

    def _merge_config(self, new_config: Dict[str, Any]) -> None:
        """Deep merge new configuration into existing configuration."""
        for key, value in new_config.items():
            if key in self._config and isinstance(self._config[key], dict) and isinstance(value, dict):
                self._config[key].update(value)
            else:
                self._config[key] = value

    @property
    def base_dir(self) -> Path:
        """Get the base directory path."""
        return self._base_dir

    @property
    def state_path(self) -> Path:
        """Get the run-state file path."""
        return self._base_dir / self._config["paths"]["state"]

    @property
    def logs_dir(self) -> Path:
        """Get the logs directory path."""
        return self._base_dir / self._config["paths"]["logs"]

    @property
    def sec_user_agent(self) -> str:
        """User agent sent to SEC endpoints; the environment wins over the file."""
        return os.environ.get("IMPACTMON_SEC_USER_AGENT") or self.get("sources.sec_user_agent")

    def rules(self) -> RuleSet:
        """
        Build the immutable rule set handed to every checker.

        Returns:
            RuleSet populated from the entity and rules sections.
        """
        rules = self._config["rules"]
        entity = self._config["entity"]
        return RuleSet(
            entity_name=entity["name"],
            ticker=entity["ticker"],
            cik=str(entity["cik"]),
            watch_list=tuple(rules["watch_list"]),
            share_threshold=int(rules["share_threshold"]),
            price_threshold=float(rules["price_threshold"]),
            sentiment_threshold=float(rules["sentiment_threshold"]),
            news_keywords=tuple(rules["news_keywords"]),
            news_limit=int(rules["news_limit"]),
            feed_scan_limit=int(rules["feed_scan_limit"]),
            insider_form_marker=rules["insider_form_marker"],
            insider_link_marker=rules["insider_link_marker"],
            material_forms=tuple(rules["material_forms"]),
            unconditional_form=rules["unconditional_form"],
            earnings_keyword=rules["earnings_keyword"],
        )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.

        Supports dot notation for nested keys (e.g., 'rules.share_threshold').
        """
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def reload(self) -> None:
        """Reload configuration from file."""
        self._config = copy.deepcopy(self.DEFAULTS)
        self._load_config_file()


# Global configuration instance
config = Config()
