"""Custom exceptions for RelCrawl services."""


class OwnerNotResolvedError(Exception):
    """Raised when the owning user id cannot be read from the page location."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"Get the user's own id failed: {location}")


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class RelationFetchError(Exception):
    """Raised when the relation API answers with an error payload."""

    def __init__(self, url: str, message: str):
        self.url = url
        self.message = message
        super().__init__(f"Relation list request failed for {url}: {message}")


class CrawlBusyError(Exception):
    """Raised when a crawl is requested while another one is still running."""


class RetryLimitExceededError(Exception):
    """Raised when an optional retry ceiling is configured and reached."""

    def __init__(self, offset: int, attempts: int):
        self.offset = offset
        self.attempts = attempts
        super().__init__(f"Gave up on offset {offset} after {attempts} failed attempts")


class SettingsError(Exception):
    """Raised when the crawl settings file holds invalid values."""

    def __init__(self, settings_path: str, reason: str):
        self.settings_path = settings_path
        self.reason = reason
        super().__init__(f"Settings '{settings_path}' {reason}")
