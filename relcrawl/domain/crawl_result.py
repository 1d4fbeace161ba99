"""Crawl result data models."""
from typing import NamedTuple, Optional, Tuple

from relcrawl.domain.user_record import UserRecord


class CrawlResult(NamedTuple):
    """Frozen snapshot of the accumulated users, handed to the exporter."""
    export_format: str
    user_id: str
    """Owning user whose relation list was crawled"""
    user_ids: Tuple[str, ...]
    records: Tuple[UserRecord, ...] = ()
    kind: str = "following"
    page_title: Optional[str] = None

    @property
    def total(self) -> int:
        return len(self.user_ids)


class ExportArtifact(NamedTuple):
    """A file ready to be saved."""
    filename: str
    content: bytes
    media_type: str


class CrawlOutcome(NamedTuple):
    """What a finished run reports back to its caller."""
    total: int
    requests: int
    """Successful page fetches, the final one included"""
    attempts: int
    """All fetch attempts, failed ones included"""
    artifact: Optional[ExportArtifact] = None
    saved_to: Optional[str] = None
