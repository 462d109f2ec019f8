"""Daily OHLC chart rows."""
from sqlalchemy import Column, Integer, Float, Date, ForeignKey, UniqueConstraint
from cryptory.core.database import Base


class Chart(Base):
    """One daily candle for a coin, unique per coin and date."""
    __tablename__ = "charts"
    __table_args__ = (
        UniqueConstraint("coin_id", "date", name="uq_charts_coin_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    coin_id = Column(Integer, ForeignKey("coins.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    opening_price = Column(Float, nullable=False)
    high_price = Column(Float, nullable=False)
    low_price = Column(Float, nullable=False)
    trade_price = Column(Float, nullable=False)  # Closing price of the day
    change_rate = Column(Float, nullable=True)
    change_price = Column(Float, nullable=True)

    def __repr__(self):
        return f"<Chart(coin_id={self.coin_id}, date='{self.date}')>"
