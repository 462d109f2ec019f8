"""Schemas for data returned by the Upbit and Naver APIs."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class Ticker(BaseModel):
    """Current price snapshot for one market. Never persisted."""
    model_config = ConfigDict(extra="ignore")

    market: str
    trade_price: float
    signed_change_price: float
    signed_change_rate: float
    trade_date: str  # YYYYMMDD
    trade_time: str  # HHMMSS


class Market(BaseModel):
    """Tradable market listed by the exchange."""
    model_config = ConfigDict(extra="ignore")

    market: str
    korean_name: str
    english_name: str


class Candle(BaseModel):
    """Daily candle as returned by the exchange."""
    model_config = ConfigDict(extra="ignore")

    market: str
    candle_date_time_kst: str
    opening_price: float
    high_price: float
    low_price: float
    trade_price: float
    change_price: Optional[float] = None
    change_rate: Optional[float] = None


class NaverNews(BaseModel):
    """One news search hit."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: str
    link: str
    description: str = ""
    pub_date: Optional[str] = Field(None, alias="pubDate")
