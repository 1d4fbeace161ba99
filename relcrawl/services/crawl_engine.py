import enum
import logging
import threading
import time
from typing import Callable, Optional

from relcrawl.domain.crawl_config import CrawlConfig
from relcrawl.domain.crawl_result import CrawlOutcome, CrawlResult
from relcrawl.domain.crawl_state import CrawlState
from relcrawl.domain.user_record import UserRecord
from relcrawl.exceptions import CrawlBusyError, RetryLimitExceededError
from relcrawl.services.artifact_sink import ArtifactSink
from relcrawl.services.notifier import LoggingNotifier, Notifier
from relcrawl.services.relation_list_fetcher import RelationListFetcher
from relcrawl.services.result_exporter import ResultExporter

logger = logging.getLogger(__name__)


class StepResult(enum.Enum):
    RETRY = "retry"
    CONTINUE = "continue"
    COMPLETE = "complete"


class CrawlEngine:
    """Pages through a relation list and exports what it collected.

    One run at a time: `run` blocks, `start` runs in a daemon thread. Inside a
    run there is never more than one request in flight. Every continuation to
    the next page waits `config.delay_seconds` first; a failed request is
    retried at once, at the same offset.
    """

    def __init__(
        self,
        *,
        fetcher: RelationListFetcher,
        exporter: ResultExporter,
        sink: Optional[ArtifactSink] = None,
        notifier: Optional[Notifier] = None,
        sleep: Callable[[float], None] = time.sleep,
        max_retries: Optional[int] = None,
    ):
        self.fetcher = fetcher
        self.exporter = exporter
        self.sink = sink
        self.notifier = notifier or LoggingNotifier()
        self._sleep = sleep
        self.max_retries = max_retries
        self.state = CrawlState()
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        with self._lock:
            return self.state.busy

    def _claim(self) -> bool:
        with self._lock:
            if self.state.busy:
                return False
            self.state.busy = True
            return True

    def _release(self) -> None:
        with self._lock:
            self.state.reset()
            self.state.busy = False

    def step(self, config: CrawlConfig, state: CrawlState) -> StepResult:
        """Fetch the page at the current offset and fold it into `state`."""
        offset = config.offset_for(state.request_times)
        state.attempts += 1
        try:
            users = self.fetcher.fetch(config.kind, config.user_id, config.rest, config.tag, offset)
        except Exception as e:
            logger.warning("Fetch failed at offset %s, retrying: %s", offset, e)
            return StepResult.RETRY

        if len(users) == 0:
            logger.debug("Empty page at offset %s; list exhausted", offset)
            return StepResult.COMPLETE

        total_need = config.total_need
        for user in users:
            state.user_ids.append(user.user_id)
            if config.export_format == "csv":
                state.records.append(UserRecord.from_user(user))
            if len(state.user_ids) >= total_need:
                return StepResult.COMPLETE

        self.notifier.progress(state.count)
        state.request_times += 1
        return StepResult.CONTINUE

    def run(self, config: CrawlConfig) -> CrawlOutcome:
        """Crawl to completion in the calling thread."""
        if not self._claim():
            raise CrawlBusyError("a crawl is already running")
        return self._run_claimed(config)

    def start(self, config: CrawlConfig, on_complete: Optional[Callable[[CrawlOutcome], None]] = None) -> Optional[threading.Thread]:
        """Start a crawl in a daemon thread. Returns None if one is already running."""
        if not self._claim():
            return None
        thread = threading.Thread(
            target=self._run_in_background,
            args=(config, on_complete),
            name=f"relcrawl-{config.kind}-{config.user_id}",
            daemon=True,
        )
        thread.start()
        return thread

    def _run_in_background(self, config: CrawlConfig, on_complete) -> None:
        try:
            outcome = self._run_claimed(config)
        except Exception as e:
            logger.exception("Crawl for user %s failed", config.user_id)
            self.notifier.error(f"Export failed: {e}")
            return
        if on_complete is not None:
            on_complete(outcome)

    def _run_claimed(self, config: CrawlConfig) -> CrawlOutcome:
        state = self.state
        failures = 0
        try:
            while True:
                result = self.step(config, state)
                if result is StepResult.RETRY:
                    failures += 1
                    if self.max_retries is not None and failures > self.max_retries:
                        raise RetryLimitExceededError(config.offset_for(state.request_times), failures)
                    continue
                failures = 0
                if result is StepResult.CONTINUE:
                    self._sleep(config.delay_seconds)
                    continue
                return self._complete(config, state)
        finally:
            self._release()

    def _complete(self, config: CrawlConfig, state: CrawlState) -> CrawlOutcome:
        total = state.count
        self.notifier.progress(total)

        result = CrawlResult(
            export_format=config.export_format,
            user_id=config.user_id,
            user_ids=tuple(state.user_ids),
            records=tuple(state.records),
            kind=config.kind,
            page_title=config.page_title,
        )

        artifact = None
        saved_to = None
        if total == 0:
            self.notifier.warning("User count is 0, no crawl results available")
        else:
            artifact = self.exporter.export(result)
            if self.sink is not None:
                saved_to = self.sink.save(artifact)
            self.notifier.success(f"Exported following list {config.export_format.upper()}")

        return CrawlOutcome(
            total=total,
            requests=state.request_times + 1,
            attempts=state.attempts,
            artifact=artifact,
            saved_to=saved_to,
        )
