"""Tests for the catalog bootstrap job."""
from datetime import date

import pytest

from cryptory.models.chart import Chart
from cryptory.models.coin import Coin, CoinSymbol, CoinSymbolCode
from cryptory.schemas.market import Candle, Market
from cryptory.services.coin_sync import (
    apply_default_display,
    prepare_coin_symbols,
    run_initial_load,
)
from cryptory.repositories.coin_repository import CoinRepository


class FakeUpbit:
    def __init__(self):
        self.markets = [
            Market(market="KRW-BTC", korean_name="비트코인", english_name="Bitcoin"),
            Market(market="KRW-ETH", korean_name="이더리움", english_name="Ethereum"),
            Market(market="KRW-DOGE", korean_name="도지코인", english_name="Dogecoin"),
            Market(market="KRW-ZZZ", korean_name="모르는코인", english_name="Unknown"),
        ]
        self.candle_calls = []

    def get_markets(self, quote="KRW"):
        return list(self.markets)

    def get_daily_candles(self, code, count=200):
        self.candle_calls.append(code)
        if code != "KRW-BTC":
            return []
        return [
            Candle(market=code, candle_date_time_kst="2024-01-10T09:00:00", opening_price=1.0,
                   high_price=2.0, low_price=0.5, trade_price=1.5, change_price=0.5, change_rate=0.5),
            Candle(market=code, candle_date_time_kst="2024-01-09T09:00:00", opening_price=0.8,
                   high_price=1.2, low_price=0.7, trade_price=1.0, change_price=0.2, change_rate=0.25),
        ]


@pytest.fixture
def upbit():
    return FakeUpbit()


def test_symbols_seeded_from_enumeration(db):
    symbols = prepare_coin_symbols(CoinRepository(db))

    assert set(symbols) == {member.code for member in CoinSymbolCode}
    assert symbols["BTC"].logo_url == "https://static.upbit.com/logos/BTC.png"
    assert db.query(CoinSymbol).count() == len(CoinSymbolCode)


def test_initial_load(db, upbit):
    stats = run_initial_load(db, api=upbit)

    codes = {coin.code for coin in db.query(Coin).all()}
    assert codes == {"KRW-BTC", "KRW-ETH", "KRW-DOGE"}
    assert stats["coins"]["added"] == 3
    assert stats["coins"]["skipped"] == 1

    btc = db.query(Coin).filter(Coin.code == "KRW-BTC").one()
    assert btc.coin_symbol.code == "BTC"
    assert btc.is_displayed is True
    assert db.query(Coin).filter(Coin.is_displayed.is_(True)).count() == 3

    charts = db.query(Chart).filter(Chart.coin_id == btc.id).order_by(Chart.date).all()
    assert [c.date for c in charts] == [date(2024, 1, 9), date(2024, 1, 10)]
    assert stats["charts"]["KRW-BTC"] == 2


def test_initial_load_is_idempotent(db, upbit):
    run_initial_load(db, api=upbit)
    stats = run_initial_load(db, api=upbit)

    assert stats["coins"]["added"] == 0
    assert stats["displayed"] == 0
    assert stats["charts"]["KRW-BTC"] == 0
    assert db.query(Coin).count() == 3
    assert db.query(Chart).count() == 2
    assert db.query(CoinSymbol).count() == len(CoinSymbolCode)


def test_keep_list_prunes_catalog(db, upbit):
    run_initial_load(db, api=upbit)
    btc = db.query(Coin).filter(Coin.code == "KRW-BTC").one()

    stats = run_initial_load(db, api=FakeUpbit(), keep_coin_ids=[btc.id])

    assert stats["deleted"] == 2
    assert [c.code for c in db.query(Coin).all()] == ["KRW-BTC"]


def test_default_display_respects_limit(db, make_coin):
    for code in ["KRW-BTC", "KRW-ETH", "KRW-DOGE", "KRW-ADA"]:
        make_coin(code)

    switched = apply_default_display(CoinRepository(db), ["BTC", "ETH", "DOGE", "ADA"], limit=2)

    assert switched == 2
    shown = db.query(Coin).filter(Coin.is_displayed.is_(True)).order_by(Coin.id).all()
    assert [c.code for c in shown] == ["KRW-BTC", "KRW-ETH"]


def test_default_display_skipped_when_already_curated(db, make_coin):
    make_coin("KRW-BTC")
    make_coin("KRW-XRP", is_displayed=True)

    assert apply_default_display(CoinRepository(db), ["BTC"], limit=7) == 0


def test_from_market_lookup():
    assert CoinSymbolCode.from_market("KRW-BTC") is CoinSymbolCode.BTC
    assert CoinSymbolCode.from_market("KRW-ZZZ") is None
