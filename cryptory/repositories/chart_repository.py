"""Chart store backed by SQLAlchemy."""
from datetime import date
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session

from cryptory.models.chart import Chart


class ChartRepository:
    """Read access to daily chart rows plus batch insert for data loads."""

    def __init__(self, db: Session):
        self.db = db

    def find_all_by_coin_id(self, coin_id: int) -> List[Chart]:
        return self.db.query(Chart).filter(Chart.coin_id == coin_id).order_by(Chart.date.asc()).all()

    def find_by_date_and_coin_id(self, chart_date: date, coin_id: int) -> Optional[Chart]:
        return self.db.query(Chart).filter(Chart.coin_id == coin_id, Chart.date == chart_date).first()

    def save_all(self, charts: Sequence[Chart]) -> List[Chart]:
        self.db.add_all(charts)
        self.db.commit()
        return list(charts)
