"""Domain objects for RelCrawl - explicit re-exports to satisfy linters."""
from .crawl_config import CrawlConfig as CrawlConfig
from .crawl_result import CrawlOutcome as CrawlOutcome
from .crawl_result import CrawlResult as CrawlResult
from .crawl_result import ExportArtifact as ExportArtifact
from .crawl_state import CrawlState as CrawlState
from .page_location import PageLocation as PageLocation
from .user_record import RelationUser as RelationUser
from .user_record import UserRecord as UserRecord

__all__ = [
    "CrawlConfig",
    "CrawlOutcome",
    "CrawlResult",
    "CrawlState",
    "ExportArtifact",
    "PageLocation",
    "RelationUser",
    "UserRecord",
]
