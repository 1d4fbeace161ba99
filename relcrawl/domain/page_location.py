from typing import NamedTuple, Optional
from urllib.parse import urlsplit


class PageLocation(NamedTuple):
    """The page a crawl is started from: path, query string and title."""
    path: str
    query: str = ""
    title: Optional[str] = None

    @property
    def href(self) -> str:
        if self.query:
            return f"{self.path}?{self.query}"
        return self.path

    @classmethod
    def from_url(cls, url: str, title: Optional[str] = None) -> "PageLocation":
        if url is None or url.strip() == "":
            raise ValueError("url is required")
        parts = urlsplit(url.strip())
        return cls(path=parts.path or "/", query=parts.query, title=title)
