from dataclasses import dataclass, field
from typing import List

from relcrawl.domain.user_record import UserRecord


@dataclass
class CrawlState:
    """Mutable accumulation for a single run, owned by the crawl engine."""

    user_ids: List[str] = field(default_factory=list)
    # Only filled in csv mode
    records: List[UserRecord] = field(default_factory=list)
    request_times: int = 0
    attempts: int = 0
    busy: bool = False

    @property
    def count(self) -> int:
        return len(self.user_ids)

    def reset(self) -> None:
        self.user_ids = []
        self.records = []
        self.request_times = 0
        self.attempts = 0
