"""
HTTP provider: GET {base_url}/api/variation/{gameId} against the variation server.
"""
from typing import Any, Optional

import httpx

from config import VARIATION_API_URL, VARIATION_FETCH_TIMEOUT
from variation.errors import VariationFetchError
from .base import BaseVariationProvider


class HttpProvider(BaseVariationProvider):
    """Variation server client (httpx)."""

    def __init__(
        self,
        base_url: str = VARIATION_API_URL,
        timeout: float = VARIATION_FETCH_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = client or httpx.Client(timeout=timeout)

    @property
    def name(self) -> str:
        return "http"

    def url_for(self, game_id: str) -> str:
        return f"{self.base_url}/api/variation/{game_id}"

    def fetch(self, game_id: str) -> Any:
        url = self.url_for(game_id)
        try:
            resp = self.client.get(url, timeout=self.timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise VariationFetchError(f"GET {url} failed: {e}") from e

        if resp.status_code != 200:
            detail = resp.text[:200]
            raise VariationFetchError(f"GET {url} returned {resp.status_code}: {detail}")

        try:
            return resp.json()
        except ValueError as e:
            raise VariationFetchError(f"GET {url} returned invalid JSON: {e}") from e

    def close(self):
        self.client.close()
