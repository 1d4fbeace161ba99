import logging
import re
from typing import Optional
from urllib.parse import parse_qs, unquote

from relcrawl.domain.crawl_config import UNBOUNDED_PAGES, USERS_PER_PAGE, CrawlConfig
from relcrawl.domain.page_location import PageLocation
from relcrawl.exceptions import OwnerNotResolvedError
from relcrawl.services.settings_store import SettingsStore

logger = logging.getLogger(__name__)

OWNER_PATTERN = re.compile(r"users/(\d*)/")


def get_path_field(path: str, field: str) -> str:
    """Return the path segment that follows `field`, or '' if there is none.

    `get_path_field("/users/1/following/art", "following")` -> "art"
    """
    segments = path.split("/")
    try:
        index = segments.index(field)
    except ValueError:
        return ""
    if index + 1 < len(segments):
        return segments[index + 1]
    return ""


def get_query_field(query: str, field: str) -> str:
    values = parse_qs(query).get(field)
    return values[0] if values else ""


class PageContextResolver:
    """Turn the page a user is looking at into a CrawlConfig."""

    def __init__(self, settings: SettingsStore):
        self.settings = settings

    def page_type(self, path: str) -> str:
        if "/following" in path:
            return "following"
        if "/mypixiv" in path:
            return "mypixiv"
        if "/followers" in path:
            return "followers"
        return "following"

    def base_offset(self, query: str) -> int:
        now_page = get_query_field(query, "p")
        if now_page == "":
            return 0
        try:
            page = int(now_page)
        except ValueError:
            logger.debug("Ignoring non-numeric page parameter %r", now_page)
            return 0
        return max(page - 1, 0) * USERS_PER_PAGE

    def owner_user_id(self, location: PageLocation) -> str:
        match = OWNER_PATTERN.search(location.href)
        if not match or match.group(1) == "":
            logger.error("Get the user's own id failed: %s", location.href)
            raise OwnerNotResolvedError(location.href)
        return match.group(1)

    def resolve(self, location: PageLocation, export_format: str, page_title: Optional[str] = None) -> CrawlConfig:
        kind = self.page_type(location.path)

        page_quota = self.settings.crawl_number(kind)
        if page_quota == UNBOUNDED_PAGES:
            logger.warning("Downloading all pages")
        else:
            logger.warning("This task follows the pages-to-crawl setting")
            logger.warning("Starting from this page, fetching %s pages", page_quota)

        return CrawlConfig(
            kind=kind,
            rest="hide" if "rest=hide" in location.href else "show",
            tag=unquote(get_path_field(location.path, "following")),
            user_id=self.owner_user_id(location),
            base_offset=self.base_offset(location.query),
            page_quota=page_quota,
            export_format=export_format,
            delay_seconds=self.settings.slow_crawl_delay(),
            page_title=page_title if page_title is not None else location.title,
        )
