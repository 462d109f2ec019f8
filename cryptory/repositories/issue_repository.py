"""Issue store backed by SQLAlchemy."""
from typing import List, Optional, Sequence, Tuple
from sqlalchemy.orm import Session

from cryptory.models.issue import Issue


class IssueRepository:
    """Persistence for issue annotations. Rows are only ever soft-deleted."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, issue_id: int) -> Optional[Issue]:
        return self.db.get(Issue, issue_id)

    def find_all_by_id(self, ids: Sequence[int]) -> List[Issue]:
        if not ids:
            return []
        return self.db.query(Issue).filter(Issue.id.in_(list(ids))).all()

    def find_active_by_coin_id(self, coin_id: int) -> List[Issue]:
        return (
            self.db.query(Issue)
            .filter(Issue.coin_id == coin_id, Issue.is_deleted.is_(False))
            .order_by(Issue.date.asc(), Issue.id.asc())
            .all()
        )

    def find_by_coin_id_and_not_deleted(self, coin_id: int, page: int, size: int) -> Tuple[List[Issue], int]:
        """Return one page of active issues, newest first, and the total count."""
        query = self.db.query(Issue).filter(Issue.coin_id == coin_id, Issue.is_deleted.is_(False))
        total = query.count()
        items = (
            query.order_by(Issue.created_at.desc(), Issue.id.desc())
            .offset(page * size)
            .limit(size)
            .all()
        )
        return items, total

    def save(self, issue: Issue) -> Issue:
        self.db.add(issue)
        self.db.commit()
        self.db.refresh(issue)
        return issue

    def save_all(self, issues: Sequence[Issue]) -> List[Issue]:
        self.db.add_all(issues)
        self.db.commit()
        return list(issues)
