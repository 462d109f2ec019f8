"""Application configuration settings."""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./db/cryptory.db"

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    enable_docs: bool = True  # Swagger/ReDoc 문서 활성화 (프로덕션에서는 False로 설정)

    # Upbit public API (tickers, markets, candles)
    upbit_api_url: str = "https://api.upbit.com/v1"
    upbit_timeout_seconds: float = 10.0

    # Naver news search API
    naver_api_url: str = "https://openapi.naver.com/v1/search/news.json"
    naver_client_id: str = ""
    naver_client_secret: str = ""
    naver_news_display: int = 10
    naver_timeout_seconds: float = 10.0

    # Coin display settings
    max_displayed_coins: int = 7

    # Catalog bootstrap
    bootstrap_on_startup: bool = False
    chart_candle_count: int = 200
    chart_coin_codes: List[str] = ["KRW-BTC", "KRW-ETH", "KRW-DOGE", "KRW-XRP", "KRW-ADA"]
    default_displayed_codes: List[str] = ["BTC", "ETH", "DOGE", "ADA", "SOL", "AVAX", "TRX"]

    # Logging
    log_dir: str = "logs"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
