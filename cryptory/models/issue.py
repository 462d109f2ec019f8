"""Issue annotations attached to coin charts."""
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from cryptory.core.database import Base, kst_now
from cryptory.models.chart import Chart

# Type tag for issues written by an administrator
MANUAL_ISSUE_TYPE = "MANUAL"


class Issue(Base):
    """Curated note on a coin's price movement for a given date.

    Rows are never removed; ``is_deleted`` is a one-way soft delete.
    """
    __tablename__ = "issues"

    id = Column(Integer, primary_key=True, index=True)
    coin_id = Column(Integer, ForeignKey("coins.id"), nullable=False, index=True)
    chart_id = Column(Integer, ForeignKey("charts.id"), nullable=True)  # Chart of the same date, if any
    chart = relationship(Chart, lazy="joined")

    date = Column(Date, nullable=False)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    news_title = Column(String(255), nullable=True)
    source = Column(String(500), nullable=True)
    type = Column(String(20), nullable=False, default=MANUAL_ISSUE_TYPE)
    user_id = Column(Integer, nullable=True)  # Authoring admin
    request_count = Column(Integer, default=0, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=kst_now)
    updated_at = Column(DateTime, default=kst_now, onupdate=kst_now)

    def update(self, title=None, content=None, news_title=None, source=None):
        """Apply a partial update; ``None`` keeps the current value."""
        self.title = title if title is not None else self.title
        self.content = content if content is not None else self.content
        self.news_title = news_title if news_title is not None else self.news_title
        self.source = source if source is not None else self.source

    def delete(self):
        self.is_deleted = True

    def __repr__(self):
        return f"<Issue(id={self.id}, coin_id={self.coin_id}, date='{self.date}')>"
