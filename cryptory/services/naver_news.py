"""Naver news search integration service."""
import logging
import requests
from typing import List, Optional
from cryptory.core.config import get_settings
from cryptory.core.exceptions import UpstreamError
from cryptory.schemas.market import NaverNews

logger = logging.getLogger("api")


class NaverNewsAPI:
    """Client for the Naver news search API."""

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        display: Optional[int] = None,
    ):
        settings = get_settings()
        self.url = settings.naver_api_url
        self.client_id = client_id or settings.naver_client_id
        self.client_secret = client_secret or settings.naver_client_secret
        self.display = display or settings.naver_news_display
        self.timeout = settings.naver_timeout_seconds

        if not (self.client_id and self.client_secret):
            logger.warning("Naver API credentials not provided, news search will fail")

    def search(self, term: str) -> List[NaverNews]:
        """Search recent news for a free-text term.

        Args:
            term: Search keyword (e.g., "비트코인")

        Returns:
            News items sorted by date, newest first
        """
        headers = {
            "X-Naver-Client-Id": self.client_id,
            "X-Naver-Client-Secret": self.client_secret,
        }
        params = {"query": term, "display": self.display, "sort": "date"}

        try:
            response = requests.get(self.url, headers=headers, params=params, timeout=self.timeout)
            response.raise_for_status()
            items = response.json().get("items", [])
        except requests.exceptions.RequestException as e:
            logger.error(f"Naver news request error for '{term}': {e}")
            raise UpstreamError(f"Naver news search failed: {e}", {"provider": "naver", "term": term}) from e
        except ValueError as e:
            logger.error(f"Naver news returned invalid JSON for '{term}': {e}")
            raise UpstreamError("Naver news returned invalid JSON", {"provider": "naver", "term": term}) from e

        logger.info(f"Fetched {len(items)} news items for '{term}'")
        return [NaverNews.model_validate(item) for item in items]


# Global instance
naver_news_api = NaverNewsAPI()
