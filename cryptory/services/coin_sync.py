"""Catalog bootstrap: seed coin symbols, coins and chart history from Upbit."""
import logging
import time
from datetime import datetime
from typing import Dict, List, Optional, Sequence
from sqlalchemy.orm import Session

from cryptory.core.config import get_settings
from cryptory.models.chart import Chart
from cryptory.models.coin import Coin, CoinSymbol, CoinSymbolCode
from cryptory.repositories.chart_repository import ChartRepository
from cryptory.repositories.coin_repository import CoinRepository

logger = logging.getLogger(__name__)


def prepare_coin_symbols(coins: CoinRepository) -> Dict[str, CoinSymbol]:
    """Find or create a CoinSymbol row for every known symbol.

    Returns:
        Mapping of symbol code to CoinSymbol
    """
    existing = {symbol.code: symbol for symbol in coins.find_all_symbols()}

    to_save = [
        CoinSymbol(code=member.code, color=member.color, logo_url=member.logo_url)
        for member in CoinSymbolCode
        if member.code not in existing
    ]
    if to_save:
        logger.info(f"Saving {len(to_save)} new coin symbols")
        coins.save_all_symbols(to_save)
        existing.update({symbol.code: symbol for symbol in to_save})

    logger.info(f"Prepared {len(existing)} coin symbols in total")
    return existing


def sync_coins(coins: CoinRepository, api, symbols: Dict[str, CoinSymbol]) -> Dict[str, int]:
    """Add KRW markets with a known symbol that are not yet in the catalog.

    New coins start hidden.

    Returns:
        Dictionary with sync statistics (added, skipped, total)
    """
    stats = {"added": 0, "skipped": 0, "total": 0}

    known_codes = {coin.code for coin in coins.find_all()}
    to_save = []
    for market in api.get_markets("KRW"):
        stats["total"] += 1
        member = CoinSymbolCode.from_market(market.market)
        if member is None:
            logger.debug(f"Unknown symbol for market {market.market}, skipping")
            stats["skipped"] += 1
            continue
        if market.market in known_codes:
            stats["skipped"] += 1
            continue

        to_save.append(Coin(
            korean_name=market.korean_name,
            english_name=market.english_name,
            code=market.market,
            coin_symbol_id=symbols[member.code].id,
            is_displayed=False,
        ))
        known_codes.add(market.market)

    if to_save:
        coins.save_all(to_save)
    stats["added"] = len(to_save)

    logger.info(
        f"Coin sync complete: {stats['added']} added, "
        f"{stats['skipped']} skipped, {stats['total']} total"
    )
    return stats


def apply_default_display(coins: CoinRepository, symbols: Sequence[str], limit: int) -> int:
    """Display the default front-page coins while nothing is displayed yet.

    Returns:
        Number of coins switched on
    """
    if coins.count_displayed() > 0:
        return 0

    codes = [f"KRW-{symbol}" for symbol in symbols]
    by_code = {coin.code: coin for coin in coins.find_by_code_in(codes)}
    selected = [by_code[code] for code in codes if code in by_code][:limit]
    for coin in selected:
        coin.is_displayed = True
    coins.save_all(selected)

    logger.info(f"Displayed {len(selected)} default coins: {[coin.code for coin in selected]}")
    return len(selected)


def sync_charts(
    coins: CoinRepository,
    charts: ChartRepository,
    api,
    codes: Sequence[str],
    count: int = 200,
) -> Dict[str, int]:
    """Store daily candles for the given markets, skipping dates already stored.

    Returns:
        Mapping of market code to number of chart rows added
    """
    added = {}
    coin_map = {coin.code: coin for coin in coins.find_by_code_in(codes)}

    for code in codes:
        coin = coin_map.get(code)
        if coin is None:
            logger.warning(f"Coin not found in database for code: {code}. Skipping chart data.")
            continue

        candles = api.get_daily_candles(code, count)
        if not candles:
            logger.info(f"No chart data found for {code}")
            continue

        stored_dates = {chart.date for chart in charts.find_all_by_coin_id(coin.id)}
        to_save: List[Chart] = []
        for candle in candles:
            candle_date = datetime.fromisoformat(candle.candle_date_time_kst).date()
            if candle_date in stored_dates:
                continue
            stored_dates.add(candle_date)
            to_save.append(Chart(
                coin_id=coin.id,
                date=candle_date,
                opening_price=candle.opening_price,
                high_price=candle.high_price,
                low_price=candle.low_price,
                trade_price=candle.trade_price,
                change_rate=candle.change_rate,
                change_price=candle.change_price,
            ))

        if to_save:
            charts.save_all(to_save)
        added[code] = len(to_save)
        logger.info(f"Saved {len(to_save)} chart entries for {code}")

    return added


def run_initial_load(
    db: Session,
    api=None,
    keep_coin_ids: Optional[Sequence[int]] = None,
) -> Dict[str, object]:
    """Seed the catalog once before the service takes traffic.

    Safe to run repeatedly: existing symbols, coins and chart dates are kept.

    Args:
        db: Database session
        api: Exchange client (defaults to the Upbit client)
        keep_coin_ids: If given, coins outside this id list are deleted

    Returns:
        Summary of what was added
    """
    if api is None:
        from cryptory.services.upbit_api import upbit_api
        api = upbit_api

    settings = get_settings()
    start_time = time.time()
    logger.info("Starting initial data load...")

    coin_repo = CoinRepository(db)
    chart_repo = ChartRepository(db)

    symbols = prepare_coin_symbols(coin_repo)
    coin_stats = sync_coins(coin_repo, api, symbols)

    deleted = 0
    if keep_coin_ids:
        deleted = coin_repo.delete_where_id_not_in(keep_coin_ids)
        logger.info(f"Deleted {deleted} coins outside the keep list")

    displayed = apply_default_display(coin_repo, settings.default_displayed_codes, settings.max_displayed_coins)
    chart_stats = sync_charts(coin_repo, chart_repo, api, settings.chart_coin_codes, settings.chart_candle_count)

    logger.info(f"Initial data load finished in {(time.time() - start_time) * 1000:.0f} ms")
    return {
        "symbols": len(symbols),
        "coins": coin_stats,
        "deleted": deleted,
        "displayed": displayed,
        "charts": chart_stats,
    }
