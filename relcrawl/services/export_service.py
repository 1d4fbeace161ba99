import logging
from typing import Optional

from relcrawl.domain.crawl_config import EXPORT_FORMATS
from relcrawl.domain.crawl_result import CrawlOutcome
from relcrawl.domain.page_location import PageLocation
from relcrawl.exceptions import CrawlBusyError
from relcrawl.services.crawl_engine import CrawlEngine
from relcrawl.services.notifier import Notifier
from relcrawl.services.page_context_resolver import PageContextResolver

logger = logging.getLogger(__name__)

BUSY_MESSAGE = "A task of the same kind is running, please wait for it to finish"


class ExportService:
    """Entry point for exporting a relation list from a page location.

    Resolving the page happens before the engine is claimed, so a location
    without an owning user fails without touching any crawl state.
    """

    def __init__(self, *, engine: CrawlEngine, resolver: PageContextResolver, notifier: Notifier):
        self.engine = engine
        self.resolver = resolver
        self.notifier = notifier

    @property
    def busy(self) -> bool:
        return self.engine.busy

    def _announce(self, export_format: str) -> None:
        self.notifier.log(f"🚀 Export following list {export_format.upper()}")
        self.notifier.log("Start crawling the user list")
        # always slow
        self.notifier.warning("Slow crawl: requests are paced to avoid rate limits")

    def _check_format(self, export_format: str) -> None:
        if export_format not in EXPORT_FORMATS:
            raise ValueError(f"Unknown export format: {export_format!r}")

    def start(self, export_format: str, location: PageLocation, page_title: Optional[str] = None) -> bool:
        """Begin an export in the background. Returns False if one is already running."""
        self._check_format(export_format)
        if self.engine.busy:
            self.notifier.error(BUSY_MESSAGE)
            return False

        config = self.resolver.resolve(location, export_format, page_title=page_title)
        self._announce(export_format)

        on_complete = None
        record_artifact = getattr(self.notifier, "record_artifact", None)
        if record_artifact is not None:
            def on_complete(outcome: CrawlOutcome) -> None:
                record_artifact(outcome.saved_to)

        if self.engine.start(config, on_complete=on_complete) is None:
            self.notifier.error(BUSY_MESSAGE)
            return False
        logger.info("Started %s export of %s list for user %s", export_format, config.kind, config.user_id)
        return True

    def run(self, export_format: str, location: PageLocation, page_title: Optional[str] = None) -> CrawlOutcome:
        """Blocking export; raises CrawlBusyError if one is already running."""
        self._check_format(export_format)
        if self.engine.busy:
            self.notifier.error(BUSY_MESSAGE)
            raise CrawlBusyError(BUSY_MESSAGE)

        config = self.resolver.resolve(location, export_format, page_title=page_title)
        self._announce(export_format)
        return self.engine.run(config)
