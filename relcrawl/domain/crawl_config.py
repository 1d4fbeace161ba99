from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Literal, Optional

RelationKind = Literal["following", "mypixiv", "followers"]
Visibility = Literal["show", "hide"]
ExportFormat = Literal["csv", "json"]

RELATION_KINDS: tuple[str, ...] = ("following", "mypixiv", "followers")
EXPORT_FORMATS: tuple[str, ...] = ("csv", "json")

# Users shown per page in the listing UI; page quotas are counted in these pages.
USERS_PER_PAGE = 24
# Users requested per API call.
FETCH_LIMIT = 100
UNBOUNDED_PAGES = -1


@dataclass(frozen=True)
class CrawlConfig:
    """Everything one crawl run needs, fixed before the first request."""

    kind: RelationKind
    rest: Visibility
    tag: str
    user_id: str
    base_offset: int
    page_quota: int
    export_format: ExportFormat
    delay_seconds: float = 0.0
    page_title: Optional[str] = None

    def __post_init__(self):
        if self.kind not in RELATION_KINDS:
            raise ValueError(f"Unknown relation kind: {self.kind!r}")
        if self.rest not in ("show", "hide"):
            raise ValueError(f"Unknown visibility filter: {self.rest!r}")
        if self.export_format not in EXPORT_FORMATS:
            raise ValueError(f"Unknown export format: {self.export_format!r}")
        if not self.user_id:
            raise ValueError("user_id is required")
        if self.base_offset < 0:
            raise ValueError("base_offset must be >= 0")
        if self.page_quota != UNBOUNDED_PAGES and self.page_quota < 1:
            raise ValueError("page_quota must be -1 or a positive integer")

    @property
    def unbounded(self) -> bool:
        return self.page_quota == UNBOUNDED_PAGES

    @property
    def total_need(self) -> int:
        """Number of users to collect before the run stops on its own."""
        if self.unbounded:
            return sys.maxsize
        return USERS_PER_PAGE * self.page_quota

    def offset_for(self, request_times: int) -> int:
        return self.base_offset + request_times * FETCH_LIMIT
