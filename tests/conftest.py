"""Shared pytest fixtures for the coin service."""
from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cryptory.core.database import Base
from cryptory.models.chart import Chart
from cryptory.models.coin import Coin, CoinSymbol
from cryptory.models.issue import Issue
from cryptory.schemas.market import NaverNews, Ticker


class FakeTickerClient:
    """Returns canned tickers, in reverse request order, and records calls."""

    def __init__(self, prices=None, missing=()):
        self.prices = prices or {}
        self.missing = set(missing)
        self.calls = []

    def fetch_tickers(self, codes):
        self.calls.append(list(codes))
        tickers = []
        for code in codes:
            if code in self.missing:
                continue
            price = self.prices.get(code, 1000.0)
            tickers.append(Ticker(
                market=code,
                trade_price=price,
                signed_change_price=-price * 0.01,
                signed_change_rate=-0.01,
                trade_date="20240110",
                trade_time="093000",
            ))
        return list(reversed(tickers))


class FakeNewsClient:
    """Returns canned news items and records search terms."""

    def __init__(self, items=None):
        self.items = items or []
        self.terms = []

    def search(self, term):
        self.terms.append(term)
        return list(self.items)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def ticker_client():
    return FakeTickerClient(prices={"KRW-BTC": 60000000.0, "KRW-ETH": 3000000.0})


@pytest.fixture
def news_client():
    return FakeNewsClient([
        NaverNews(
            title="비트코인 급등",
            link="https://news.example.com/1",
            description="비트코인이 올랐다",
            pub_date="Wed, 10 Jan 2024 09:30:00 +0900",
        ),
        NaverNews(
            title="비트코인 ETF",
            link="https://news.example.com/2",
            description="ETF 승인",
            pub_date="Tue, 09 Jan 2024 18:05:00 +0900",
        ),
    ])


@pytest.fixture
def make_coin(db):
    """Factory creating a coin (and its symbol) from an exchange code."""

    def _make(code, is_displayed=False, korean_name=None, english_name=None, with_symbol=True):
        base = code.split("-", 1)[1]
        symbol = None
        if with_symbol:
            symbol = db.query(CoinSymbol).filter(CoinSymbol.code == base).first()
            if symbol is None:
                symbol = CoinSymbol(code=base, color="#F7931A", logo_url=f"https://static.upbit.com/logos/{base}.png")
                db.add(symbol)
                db.flush()
        coin = Coin(
            korean_name=korean_name or f"{base} 코인",
            english_name=english_name or f"{base} Coin",
            code=code,
            coin_symbol_id=symbol.id if symbol else None,
            is_displayed=is_displayed,
        )
        db.add(coin)
        db.commit()
        db.refresh(coin)
        return coin

    return _make


@pytest.fixture
def make_chart(db):
    def _make(coin, chart_date, price=100.0):
        chart = Chart(
            coin_id=coin.id,
            date=chart_date,
            opening_price=price,
            high_price=price * 1.1,
            low_price=price * 0.9,
            trade_price=price * 1.05,
            change_rate=0.05,
            change_price=price * 0.05,
        )
        db.add(chart)
        db.commit()
        db.refresh(chart)
        return chart

    return _make


@pytest.fixture
def make_issue(db):
    def _make(coin, issue_date=date(2024, 1, 10), chart=None, title="Issue", content="body",
              is_deleted=False, user_id=1):
        issue = Issue(
            coin_id=coin.id,
            chart_id=chart.id if chart else None,
            date=issue_date,
            title=title,
            content=content,
            news_title="News",
            source="https://news.example.com",
            type="MANUAL",
            user_id=user_id,
            request_count=0,
            is_deleted=is_deleted,
        )
        db.add(issue)
        db.commit()
        db.refresh(issue)
        return issue

    return _make


@pytest.fixture
def bitcoin(make_coin):
    return make_coin("KRW-BTC", is_displayed=True, korean_name="비트코인", english_name="Bitcoin")
