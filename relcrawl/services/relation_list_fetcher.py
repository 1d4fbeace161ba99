from __future__ import annotations

from typing import List, Protocol

from relcrawl.domain.crawl_config import FETCH_LIMIT
from relcrawl.domain.user_record import RelationUser
from relcrawl.exceptions import RelationFetchError
from relcrawl.services.http_service import HttpService


class RelationListFetcher(Protocol):
    """Fetch one page of a user's relation list.

    Any exception means "try again"; the crawl engine does not look at
    the exception type.
    """

    def fetch(self, kind: str, user_id: str, rest: str, tag: str, offset: int) -> List[RelationUser]: ...


class HttpRelationListFetcher:
    """RelationListFetcher backed by the site's ajax endpoints."""

    def __init__(self, http_service: HttpService, base_url: str, limit: int = FETCH_LIMIT):
        self._http_service = http_service
        self._base_url = base_url.rstrip("/")
        self._limit = limit

    def build_request(self, kind: str, user_id: str, rest: str, tag: str, offset: int) -> tuple[str, dict]:
        url = f"{self._base_url}/ajax/user/{user_id}/{kind}"
        params = {"offset": offset, "limit": self._limit}
        if kind == "following":
            params["rest"] = rest
            params["tag"] = tag
        elif kind not in ("mypixiv", "followers"):
            raise ValueError(f"Unknown relation kind: {kind!r}")
        return url, params

    def fetch(self, kind: str, user_id: str, rest: str, tag: str, offset: int) -> List[RelationUser]:
        url, params = self.build_request(kind, user_id, rest, tag, offset)
        payload = self._http_service.get_json(url, params=params)

        if not isinstance(payload, dict):
            raise RelationFetchError(url, "response is not a JSON object")
        if payload.get("error"):
            raise RelationFetchError(url, payload.get("message") or "error flag set")

        body = payload.get("body")
        users = body.get("users") if isinstance(body, dict) else None
        if not isinstance(users, list):
            raise RelationFetchError(url, "missing body.users")

        return [RelationUser.from_payload(u) for u in users]
