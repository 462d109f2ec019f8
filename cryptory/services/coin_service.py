"""Coin visibility and aggregation service.

Merges the coin catalog, chart history, live tickers and issue markers into
read views, and guards the cap on publicly displayed coins.
"""
import logging
import threading
from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from cryptory.core.config import get_settings
from cryptory.core.exceptions import (
    CoinNotFound,
    DisplayLimitExceeded,
    NewsDateParseError,
    NoChartData,
    NoDisplayableCoins,
    UpstreamError,
)
from cryptory.models.coin import Coin
from cryptory.repositories.chart_repository import ChartRepository
from cryptory.repositories.coin_repository import CoinRepository, COIN_SORT_FIELDS
from cryptory.repositories.issue_repository import IssueRepository
from cryptory.schemas.coin import (
    ChartResponse,
    CoinAdminDetail,
    CoinAdminSummary,
    CoinDetail,
    CoinSummary,
    CoinSymbolResponse,
    IssueMarker,
    NewsItem,
)
from cryptory.schemas.common import Page
from cryptory.schemas.market import Ticker
from cryptory.utils.helpers import parse_sort, format_trade_time, format_news_date

logger = logging.getLogger(__name__)

# Maximum number of coins on the public front page
MAX_DISPLAYED_COINS = 7

# Queues display toggles within one process ahead of the database write lock
_display_lock = threading.Lock()


class CoinService:
    """Public and admin coin reads plus the display-flag toggle."""

    def __init__(
        self,
        db: Session,
        ticker_client=None,
        news_client=None,
        max_displayed_coins: Optional[int] = None,
        display_lock: Optional[threading.Lock] = None,
    ):
        """Initialize coin service.

        Args:
            db: Database session
            ticker_client: Object with ``fetch_tickers(codes)`` (defaults to Upbit)
            news_client: Object with ``search(term)`` (defaults to Naver)
            max_displayed_coins: Front-page cap (defaults to settings)
            display_lock: Lock guarding ``set_display`` (defaults to the module lock)
        """
        self.db = db
        self.coins = CoinRepository(db)
        self.charts = ChartRepository(db)
        self.issues = IssueRepository(db)

        if ticker_client is None:
            from cryptory.services.upbit_api import upbit_api
            ticker_client = upbit_api
        if news_client is None:
            from cryptory.services.naver_news import naver_news_api
            news_client = naver_news_api
        self.ticker_client = ticker_client
        self.news_client = news_client

        if max_displayed_coins is None:
            max_displayed_coins = get_settings().max_displayed_coins or MAX_DISPLAYED_COINS
        self.max_displayed_coins = max_displayed_coins
        self.display_lock = display_lock or _display_lock

    # Public reads

    def list_public_coins(self) -> List[CoinSummary]:
        """List front-page coins with current price and change.

        Raises:
            NoDisplayableCoins: If no coin is displayed
        """
        coins = self.coins.find_displayed()
        if not coins:
            raise NoDisplayableCoins()

        ticker_map = self._fetch_ticker_map([coin.code for coin in coins])

        summaries = []
        for coin in coins:
            ticker = self._ticker_for(ticker_map, coin.code)
            summaries.append(CoinSummary(
                coin_id=coin.id,
                korean_name=coin.korean_name,
                english_name=coin.english_name,
                code=coin.symbol,
                coin_symbol=self._symbol_response(coin),
                trade_price=ticker.trade_price,
                signed_change_price=ticker.signed_change_price,
                signed_change_rate=ticker.signed_change_rate,
            ))
        return summaries

    def get_coin_detail(self, coin_id: int) -> CoinDetail:
        """Assemble the coin page: ticker, chart series and issue markers.

        Raises:
            CoinNotFound: If the coin does not exist
            NoChartData: If the coin has no chart history
        """
        coin = self._get_coin(coin_id)

        charts = [
            ChartResponse(
                chart_id=chart.id,
                date=chart.date,
                opening_price=chart.opening_price,
                high_price=chart.high_price,
                low_price=chart.low_price,
                trade_price=chart.trade_price,
                change_rate=chart.change_rate,
            )
            for chart in self.charts.find_all_by_coin_id(coin.id)
        ]
        if not charts:
            raise NoChartData(coin.id)

        ticker = self._ticker_for(self._fetch_ticker_map([coin.code]), coin.code)

        issues = []
        for issue in self.issues.find_active_by_coin_id(coin.id):
            chart = issue.chart
            issues.append(IssueMarker(
                issue_id=issue.id,
                chart_id=chart.id if chart else None,
                date=chart.date if chart else issue.date,
                opening_price=chart.opening_price if chart else None,
                high_price=chart.high_price if chart else None,
                low_price=chart.low_price if chart else None,
                trade_price=chart.trade_price if chart else None,
            ))

        return CoinDetail(
            coin_id=coin.id,
            korean_name=coin.korean_name,
            english_name=coin.english_name,
            code=coin.symbol,
            coin_symbol=self._symbol_response(coin),
            trade_price=ticker.trade_price,
            signed_change_price=ticker.signed_change_price,
            signed_change_rate=ticker.signed_change_rate,
            timestamp=format_trade_time(ticker.trade_date, ticker.trade_time),
            chart_list=charts,
            issue_list=issues,
        )

    def get_coin_news(self, coin_id: int) -> List[NewsItem]:
        """Search news by the coin's Korean name.

        Raises:
            CoinNotFound: If the coin does not exist
            NewsDateParseError: If any item has an unparseable publish date
        """
        coin = self._get_coin(coin_id)

        news_items = []
        for news in self.news_client.search(coin.korean_name):
            try:
                published_at = format_news_date(news.pub_date)
            except (ValueError, AttributeError) as e:
                logger.error(f"Unparseable news date {news.pub_date!r} for coin {coin.id}: {e}")
                raise NewsDateParseError(news.pub_date) from e
            news_items.append(NewsItem(
                title=news.title,
                link=news.link,
                description=news.description,
                published_at=published_at,
            ))
        return news_items

    # Display flag

    def set_display(self, coin_id: int, is_displayed: bool) -> None:
        """Show or hide a coin on the front page.

        Turning a hidden coin on is a single conditional UPDATE that only
        matches while the displayed count is under the cap, so the cap holds
        across worker processes. Turning a coin off, or on again when already
        shown, always succeeds.

        Raises:
            CoinNotFound: If the coin does not exist
            DisplayLimitExceeded: If the cap is already reached
        """
        with self.display_lock:
            try:
                coin = self._get_coin(coin_id)

                if is_displayed and not coin.is_displayed:
                    if not self.coins.enable_display_within_limit(coin.id, self.max_displayed_coins):
                        self.db.rollback()
                        self.db.refresh(coin)
                        if not coin.is_displayed:
                            logger.warning(
                                f"Display limit reached ({self.coins.count_displayed()}/"
                                f"{self.max_displayed_coins}), coin {coin_id} stays hidden"
                            )
                            raise DisplayLimitExceeded(self.max_displayed_coins)
                elif coin.is_displayed != is_displayed:
                    coin.is_displayed = is_displayed
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise

        logger.info(f"Coin display status updated for ID: {coin_id}, is_displayed: {is_displayed}")

    # Admin reads

    def list_coins_for_admin(
        self,
        keyword: Optional[str] = None,
        page: int = 0,
        size: int = 10,
        sort: Optional[str] = None,
    ) -> Page[CoinAdminSummary]:
        """Page through the catalog, optionally filtered by keyword.

        Args:
            keyword: Substring matched case-insensitively against names and code
            page: Zero-based page index
            size: Page size
            sort: "<field>[,asc|desc]"; anything unusable falls back to id ascending
        """
        sort_spec = parse_sort(sort, COIN_SORT_FIELDS)

        pattern = None
        if keyword is not None and keyword.strip():
            pattern = f"%{keyword.lower().strip()}%"
        logger.debug(f"Admin coin list keyword pattern: {pattern}")

        if pattern is None:
            coins, total = self.coins.find_page(page, size, sort_spec)
        else:
            coins, total = self.coins.search_by_keyword(pattern, page, size, sort_spec)

        content = [
            CoinAdminSummary(
                crypto_id=coin.id,
                korean_name=coin.korean_name,
                english_name=coin.english_name,
                symbol=coin.symbol,
                logo_url=coin.coin_symbol.logo_url if coin.coin_symbol else None,
                is_displayed=coin.is_displayed,
            )
            for coin in coins
        ]
        return Page.of(content, page, size, total)

    def get_coin_detail_for_admin(self, coin_id: int) -> CoinAdminDetail:
        """Catalog fields, symbol metadata and display flag of one coin.

        Raises:
            CoinNotFound: If the coin does not exist
        """
        coin = self._get_coin(coin_id)
        symbol = coin.coin_symbol
        return CoinAdminDetail(
            crypto_id=coin.id,
            name=coin.korean_name,
            symbol=coin.symbol,
            logo_url=symbol.logo_url if symbol else None,
            crypto_color=symbol.color if symbol else None,
            is_displayed=coin.is_displayed,
        )

    # Helpers

    def _get_coin(self, coin_id: int) -> Coin:
        coin = self.coins.find_by_id(coin_id)
        if coin is None:
            raise CoinNotFound(coin_id)
        return coin

    def _fetch_ticker_map(self, codes: List[str]) -> Dict[str, Ticker]:
        tickers = self.ticker_client.fetch_tickers(codes)
        return {ticker.market: ticker for ticker in tickers}

    @staticmethod
    def _ticker_for(ticker_map: Dict[str, Ticker], code: str) -> Ticker:
        ticker = ticker_map.get(code)
        if ticker is None:
            raise UpstreamError(f"No ticker returned for {code}", {"provider": "upbit", "market": code})
        return ticker

    @staticmethod
    def _symbol_response(coin: Coin) -> Optional[CoinSymbolResponse]:
        if coin.coin_symbol is None:
            return None
        return CoinSymbolResponse.model_validate(coin.coin_symbol)
