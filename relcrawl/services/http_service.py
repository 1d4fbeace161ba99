import requests
from typing import Callable, Optional

from relcrawl.exceptions import HttpFetchError


class HttpService:
    """
    HTTP client wrapper for the relation list API.

    Requires http_client callable for dependency injection (DIP compliance).
    This enables easy testing without patching and allows swapping HTTP libraries.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 10, cookie: Optional[str] = None):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client
        self.cookie = cookie

    def _headers(self) -> dict:
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        if self.cookie:
            headers["Cookie"] = self.cookie
        return headers

    def get_json(self, url: str, params: Optional[dict] = None):
        """GET `url` and return the decoded JSON body.

        Transport failures, non-2xx answers and undecodable bodies all raise
        HttpFetchError; callers treat them the same way.
        """
        try:
            resp = self.http_client(url, params=params, headers=self._headers(), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        status = int(resp.status_code)
        if status < 200 or status >= 300:
            raise HttpFetchError(url, RuntimeError(f"status {status}"))

        try:
            return resp.json()
        except ValueError as e:
            raise HttpFetchError(url, e) from e
