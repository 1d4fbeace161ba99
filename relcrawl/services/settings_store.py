import logging
import os
from typing import Optional

import yaml

from relcrawl.domain.crawl_config import UNBOUNDED_PAGES
from relcrawl.exceptions import SettingsError

logger = logging.getLogger(__name__)


class SettingsStore:
    """Crawl settings read from a YAML file.

    Responsibility: how many pages to crawl per page type, and how long to
    wait between requests. The file is re-read on every call so edits take
    effect on the next run.

    Example file::

        crawl_number:
          default: -1
          following: 2
        slow_crawl_delay_ms: 1600
    """

    def __init__(self, *, settings_path: str, default_delay_seconds: float = 1.6):
        self.settings_path = settings_path
        self.default_delay_seconds = default_delay_seconds

    def load_yaml_dict(self) -> dict:
        """Return the parsed settings, `{}` when the file does not exist."""
        if not os.path.isfile(self.settings_path):
            logger.debug("Settings file %s not found; using defaults", self.settings_path)
            return {}
        try:
            with open(self.settings_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SettingsError(self.settings_path, f"is not valid YAML: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise SettingsError(self.settings_path, "must contain a mapping")
        return data

    def crawl_number(self, page_type: str) -> int:
        """Pages to crawl for `page_type`; -1 means all of them."""
        numbers = self.load_yaml_dict().get("crawl_number") or {}
        if not isinstance(numbers, dict):
            raise SettingsError(self.settings_path, "crawl_number must be a mapping")

        value = numbers.get(page_type, numbers.get("default", UNBOUNDED_PAGES))
        # bool is an int subclass; `true` is not a page count
        if isinstance(value, bool) or not isinstance(value, int):
            raise SettingsError(self.settings_path, f"crawl_number.{page_type} must be an integer, got {value!r}")
        if value != UNBOUNDED_PAGES and value < 1:
            raise SettingsError(self.settings_path, f"crawl_number.{page_type} must be -1 or >= 1, got {value}")
        return value

    def slow_crawl_delay(self) -> float:
        """Delay between two requests of a run, in seconds."""
        raw: Optional[object] = self.load_yaml_dict().get("slow_crawl_delay_ms")
        if raw is None:
            return self.default_delay_seconds
        try:
            delay_ms = float(raw)
        except (TypeError, ValueError) as e:
            raise SettingsError(self.settings_path, f"slow_crawl_delay_ms is not a number: {raw!r}") from e
        if delay_ms < 0:
            raise SettingsError(self.settings_path, "slow_crawl_delay_ms must be >= 0")
        return delay_ms / 1000
