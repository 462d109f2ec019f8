"""Coin catalog store backed by SQLAlchemy."""
from typing import List, Optional, Sequence, Tuple
from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session

from cryptory.models.coin import Coin, CoinSymbol
from cryptory.utils.helpers import SortSpec, DEFAULT_SORT

# Columns the admin listing may be sorted by
COIN_SORT_FIELDS = ("id", "korean_name", "english_name", "code", "is_displayed")


class CoinRepository:
    """Lookup, search and bulk writes for coins and coin symbols."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, coin_id: int) -> Optional[Coin]:
        return self.db.get(Coin, coin_id)

    def find_all(self) -> List[Coin]:
        return self.db.query(Coin).order_by(Coin.id.asc()).all()

    def find_displayed(self) -> List[Coin]:
        return self.db.query(Coin).filter(Coin.is_displayed.is_(True)).order_by(Coin.id.asc()).all()

    def find_by_code_in(self, codes: Sequence[str]) -> List[Coin]:
        if not codes:
            return []
        return self.db.query(Coin).filter(Coin.code.in_(list(codes))).all()

    def find_page(self, page: int, size: int, sort: SortSpec = DEFAULT_SORT) -> Tuple[List[Coin], int]:
        """Return one page of all coins and the total count."""
        return self._paginate(self.db.query(Coin), page, size, sort)

    def search_by_keyword(
        self, pattern: str, page: int, size: int, sort: SortSpec = DEFAULT_SORT
    ) -> Tuple[List[Coin], int]:
        """Case-insensitive LIKE search over names and code.

        Args:
            pattern: Lower-cased pattern with wildcards (e.g., "%btc%")
        """
        query = self.db.query(Coin).filter(
            or_(
                func.lower(Coin.korean_name).like(pattern),
                func.lower(Coin.english_name).like(pattern),
                func.lower(Coin.code).like(pattern),
            )
        )
        return self._paginate(query, page, size, sort)

    def count_displayed(self) -> int:
        return self.db.query(func.count(Coin.id)).filter(Coin.is_displayed.is_(True)).scalar() or 0

    def enable_display_within_limit(self, coin_id: int, limit: int) -> bool:
        """Switch a hidden coin on in one UPDATE guarded by the displayed count.

        The count is evaluated by the database inside the UPDATE statement, so
        callers in separate processes cannot both slip under the limit.

        Returns:
            True if the row was switched on, False if it was already displayed
            or the limit is reached
        """
        shown = Coin.__table__.alias("shown")
        displayed = (
            select(func.count())
            .select_from(shown)
            .where(shown.c.is_displayed.is_(True))
            .scalar_subquery()
        )
        stmt = (
            update(Coin)
            .where(Coin.id == coin_id, Coin.is_displayed.is_(False), displayed < limit)
            .values(is_displayed=True)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount == 1

    def save(self, coin: Coin) -> Coin:
        self.db.add(coin)
        self.db.commit()
        self.db.refresh(coin)
        return coin

    def save_all(self, coins: Sequence[Coin]) -> List[Coin]:
        self.db.add_all(coins)
        self.db.commit()
        return list(coins)

    def delete_where_id_not_in(self, ids: Sequence[int]) -> int:
        """Delete every coin whose id is not in ``ids``; returns rows removed."""
        deleted = (
            self.db.query(Coin)
            .filter(Coin.id.notin_(list(ids)))
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted

    # Coin symbols

    def find_all_symbols(self) -> List[CoinSymbol]:
        return self.db.query(CoinSymbol).all()

    def save_all_symbols(self, symbols: Sequence[CoinSymbol]) -> List[CoinSymbol]:
        self.db.add_all(symbols)
        self.db.commit()
        return list(symbols)

    def _paginate(self, query, page: int, size: int, sort: SortSpec) -> Tuple[List[Coin], int]:
        total = query.order_by(None).count()
        column = getattr(Coin, sort.field if sort.field in COIN_SORT_FIELDS else "id")
        ordering = column.desc() if sort.descending else column.asc()
        items = query.order_by(ordering, Coin.id.asc()).offset(page * size).limit(size).all()
        return items, total
