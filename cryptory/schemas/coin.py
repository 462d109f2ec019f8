"""Pydantic schemas for coin responses."""
from pydantic import BaseModel
from datetime import date
from typing import List, Optional


class CoinSymbolResponse(BaseModel):
    """Display metadata of a coin symbol."""
    code: str
    color: Optional[str] = None
    logo_url: Optional[str] = None

    class Config:
        from_attributes = True


class CoinSummary(BaseModel):
    """Front-page coin merged with its live ticker."""
    coin_id: int
    korean_name: str
    english_name: str
    code: str  # Display symbol (e.g., "BTC")
    coin_symbol: Optional[CoinSymbolResponse]
    trade_price: float
    signed_change_price: float
    signed_change_rate: float


class ChartResponse(BaseModel):
    """One day of chart history."""
    chart_id: int
    date: date
    opening_price: float
    high_price: float
    low_price: float
    trade_price: float
    change_rate: Optional[float]


class IssueMarker(BaseModel):
    """Issue pinned on the chart with the OHLC of its day."""
    issue_id: int
    chart_id: Optional[int]
    date: date
    opening_price: Optional[float]
    high_price: Optional[float]
    low_price: Optional[float]
    trade_price: Optional[float]


class CoinDetail(BaseModel):
    """Coin page: catalog data, live ticker, chart series and issues."""
    coin_id: int
    korean_name: str
    english_name: str
    code: str
    coin_symbol: Optional[CoinSymbolResponse]
    trade_price: float
    signed_change_price: float
    signed_change_rate: float
    timestamp: str
    chart_list: List[ChartResponse]
    issue_list: List[IssueMarker]


class NewsItem(BaseModel):
    """News article about a coin."""
    title: str
    link: str
    description: str
    published_at: str


class CoinAdminSummary(BaseModel):
    """Catalog row for the admin coin list."""
    crypto_id: int
    korean_name: str
    english_name: str
    symbol: str
    logo_url: Optional[str]
    is_displayed: bool


class CoinAdminDetail(BaseModel):
    """Catalog detail for the admin coin page."""
    crypto_id: int
    name: str
    symbol: str
    logo_url: Optional[str]
    crypto_color: Optional[str]
    is_displayed: bool
