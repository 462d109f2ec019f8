"""Upbit public API integration service (tickers, markets, daily candles)."""
import logging
import requests
from typing import List, Optional, Sequence
from cryptory.core.config import get_settings
from cryptory.core.exceptions import UpstreamError
from cryptory.schemas.market import Ticker, Market, Candle

logger = logging.getLogger("api")


class UpbitAPI:
    """Wrapper class for the Upbit quotation API.

    Failures are raised as ``UpstreamError``; retrying is left to callers.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        """Initialize Upbit API client.

        Args:
            base_url: API root (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
        """
        settings = get_settings()
        self.base_url = (base_url or settings.upbit_api_url).rstrip("/")
        self.timeout = timeout or settings.upbit_timeout_seconds
        self.session = requests.Session()
        self.session.headers.update({"accept": "application/json"})

    def _get(self, path: str, params: Optional[dict] = None):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            result = response.json()
            logger.debug(f"GET {path} {params} -> {response.status_code}")
            return result
        except requests.exceptions.RequestException as e:
            logger.error(f"Upbit API request error ({path}): {e}")
            raise UpstreamError(f"Upbit API request failed: {e}", {"provider": "upbit", "path": path}) from e
        except ValueError as e:
            logger.error(f"Upbit API returned invalid JSON ({path}): {e}")
            raise UpstreamError("Upbit API returned invalid JSON", {"provider": "upbit", "path": path}) from e

    def fetch_tickers(self, codes: Sequence[str]) -> List[Ticker]:
        """Get current tickers for a batch of market codes in one call.

        Args:
            codes: Market codes (e.g., ["KRW-BTC", "KRW-ETH"])

        Returns:
            One Ticker per code, in the order the exchange returns them
        """
        if not codes:
            return []
        data = self._get("/ticker", {"markets": ",".join(codes)})
        return [Ticker.model_validate(item) for item in data]

    def get_markets(self, quote: str = "KRW") -> List[Market]:
        """Get all markets quoted in the given currency.

        Args:
            quote: Quote currency prefix

        Returns:
            List of Market entries (e.g., market="KRW-BTC")
        """
        data = self._get("/market/all", {"isDetails": "false"})
        prefix = f"{quote}-"
        markets = [Market.model_validate(item) for item in data if item.get("market", "").startswith(prefix)]
        logger.info(f"Fetched {len(markets)} {quote} markets from Upbit")
        return markets

    def get_daily_candles(self, code: str, count: int = 200) -> List[Candle]:
        """Get daily candles for a market, newest first.

        Args:
            code: Market code
            count: Number of days (Upbit allows at most 200 per call)
        """
        data = self._get("/candles/days", {"market": code, "count": min(count, 200)})
        return [Candle.model_validate(item) for item in data]


# Global instance
upbit_api = UpbitAPI()
