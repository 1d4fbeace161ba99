"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from relcrawl import config as env
from relcrawl.services.artifact_sink import FileArtifactSink
from relcrawl.services.crawl_engine import CrawlEngine
from relcrawl.services.export_service import ExportService
from relcrawl.services.http_service import HttpService
from relcrawl.services.notifier import ExportTracker
from relcrawl.services.page_context_resolver import PageContextResolver
from relcrawl.services.relation_list_fetcher import HttpRelationListFetcher
from relcrawl.services.result_exporter import ResultExporter
from relcrawl.services.settings_store import SettingsStore


# Environment variables used by the container (read via `relcrawl.config` helpers).
#
# USER_AGENT (str, default: "RelCrawl/0.1")
#   User-Agent header for relation list requests.
#
# HTTP_TIMEOUT (int seconds, default: 10)
#   Timeout for each relation list request.
#
# CRAWL_DELAY (float seconds, default: 1.6)
#   Pause between two requests of one export when the settings file has no
#   `slow_crawl_delay_ms`.
#
# API_BASE_URL (str, default: "https://www.pixiv.net")
#   Origin serving the `/ajax/user/<id>/<kind>` endpoints.
#
# API_COOKIE (str | optional)
#   Raw Cookie header sent with every request; needed for private lists.
#
# RELCRAWL_SETTINGS_FILE (str, default: "configs/settings.yml")
#   YAML file with `crawl_number` per page type and `slow_crawl_delay_ms`.
#
# RELCRAWL_OUTPUT_DIR (str, default: "exports")
#   Directory exported CSV/JSON files are written to.
#
# RELCRAWL_MAX_RETRIES (int | optional)
#   Give up after this many consecutive failed requests at one offset.
#   Unset means retry forever.
ENV = {
    "USER_AGENT": env.get_str_env("USER_AGENT", "RelCrawl/0.1"),
    "HTTP_TIMEOUT": env.get_int_env("HTTP_TIMEOUT", 10),
    "CRAWL_DELAY": env.get_float_env("CRAWL_DELAY", 1.6),
    "API_BASE_URL": env.get_str_env("API_BASE_URL", "https://www.pixiv.net"),
    "API_COOKIE": env.get_optional_str_env("API_COOKIE"),
    "RELCRAWL_SETTINGS_FILE": env.settings_file(),
    "RELCRAWL_OUTPUT_DIR": env.output_dir(),
    "RELCRAWL_MAX_RETRIES": env.get_optional_int_env("RELCRAWL_MAX_RETRIES"),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for RelCrawl application."""

    # Configuration
    config = providers.Configuration(default=ENV)

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(int),
        cookie=config.API_COOKIE,
    )

    relation_list_fetcher = providers.Singleton(
        HttpRelationListFetcher,
        http_service=http_service,
        base_url=config.API_BASE_URL.as_(str),
    )

    settings_store = providers.Singleton(
        SettingsStore,
        settings_path=config.RELCRAWL_SETTINGS_FILE.as_(str),
        default_delay_seconds=config.CRAWL_DELAY.as_(float),
    )

    page_context_resolver = providers.Singleton(
        PageContextResolver,
        settings=settings_store,
    )

    export_tracker = providers.Singleton(
        ExportTracker
    )

    result_exporter = providers.Singleton(
        ResultExporter
    )

    artifact_sink = providers.Singleton(
        FileArtifactSink,
        output_dir=config.RELCRAWL_OUTPUT_DIR.as_(str),
    )

    # Singleton: the busy flag lives on the engine
    crawl_engine = providers.Singleton(
        CrawlEngine,
        fetcher=relation_list_fetcher,
        exporter=result_exporter,
        sink=artifact_sink,
        notifier=export_tracker,
        max_retries=config.RELCRAWL_MAX_RETRIES,
    )

    export_service = providers.Singleton(
        ExportService,
        engine=crawl_engine,
        resolver=page_context_resolver,
        notifier=export_tracker,
    )
