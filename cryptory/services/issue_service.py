"""Issue lifecycle management: create, update, soft delete and views."""
import logging
from typing import Any, Sequence
from sqlalchemy.orm import Session

from cryptory.core.exceptions import CoinNotFound, IssueNotFound, InvalidAuthorId
from cryptory.models.issue import Issue, MANUAL_ISSUE_TYPE
from cryptory.repositories.chart_repository import ChartRepository
from cryptory.repositories.coin_repository import CoinRepository
from cryptory.repositories.issue_repository import IssueRepository
from cryptory.schemas.common import Page
from cryptory.schemas.issue import (
    IssueAdminDetail,
    IssueCreateRequest,
    IssuePublicDetail,
    IssueSummary,
    IssueUpdateRequest,
)

logger = logging.getLogger(__name__)

UNKNOWN_AUTHOR = "Unknown"


def parse_author_id(author_id: Any) -> int:
    """Convert the author id received from the gateway to a user id.

    Raises:
        InvalidAuthorId: If the value is not an integer
    """
    if isinstance(author_id, bool):
        raise InvalidAuthorId(author_id)
    if isinstance(author_id, int):
        return author_id
    try:
        return int(str(author_id).strip())
    except (TypeError, ValueError):
        logger.error(f"Cannot convert admin user id '{author_id}' to an integer")
        raise InvalidAuthorId(author_id)


class IssueService:
    """Admin and public operations on issue annotations.

    Admin views include soft-deleted issues; public views never do.
    """

    def __init__(self, db: Session):
        self.db = db
        self.issues = IssueRepository(db)
        self.coins = CoinRepository(db)
        self.charts = ChartRepository(db)

    def list_for_admin(self, coin_id: int, page: int = 0, size: int = 10) -> Page[IssueSummary]:
        """Page through a coin's active issues, newest first."""
        issues, total = self.issues.find_by_coin_id_and_not_deleted(coin_id, page, size)
        content = [self._to_summary(issue) for issue in issues]
        return Page.of(content, page, size, total)

    def create(self, coin_id: int, request: IssueCreateRequest, author_id: Any) -> int:
        """Create a manual issue for a coin.

        The issue is linked to the coin's chart row of the same date when one
        exists, and stored without a chart otherwise.

        Args:
            coin_id: Coin the issue belongs to
            request: Issue fields
            author_id: Authoring admin's user id, possibly as text

        Returns:
            New issue id

        Raises:
            CoinNotFound: If the coin does not exist
            InvalidAuthorId: If ``author_id`` is not numeric
        """
        coin = self.coins.find_by_id(coin_id)
        if coin is None:
            raise CoinNotFound(coin_id)

        user_id = parse_author_id(author_id)

        chart = self.charts.find_by_date_and_coin_id(request.date, coin_id)
        if chart is None:
            logger.info(f"No chart for coin {coin_id} on {request.date}, issue stored without chart")

        issue = Issue(
            coin_id=coin.id,
            chart_id=chart.id if chart else None,
            date=request.date,
            title=request.title,
            content=request.content,
            news_title=request.news_title,
            source=request.source,
            type=MANUAL_ISSUE_TYPE,
            user_id=user_id,
            request_count=0,
            is_deleted=False,
        )
        issue = self.issues.save(issue)
        logger.info(f"Admin issue created (ID: {issue.id}) by admin ID: {user_id}")
        return issue.id

    def get_detail_for_admin(self, issue_id: int) -> IssueAdminDetail:
        """Return an issue regardless of its deleted state.

        Raises:
            IssueNotFound: If no issue row has this id
        """
        issue = self._get_issue(issue_id)
        return IssueAdminDetail(
            issue_id=issue.id,
            date=issue.date,
            title=issue.title,
            content=issue.content,
            created_by=self._created_by(issue),
            created_at=issue.created_at,
            updated_at=issue.updated_at,
            news_title=issue.news_title,
            source=issue.source,
            type=issue.type,
            is_deleted=issue.is_deleted,
        )

    def update(self, issue_id: int, request: IssueUpdateRequest) -> None:
        """Partially update an issue; deleted issues may be edited too.

        Raises:
            IssueNotFound: If no issue row has this id
        """
        issue = self._get_issue(issue_id)
        issue.update(request.title, request.content, request.news_title, request.source)
        self.issues.save(issue)
        logger.info(f"Admin issue updated (ID: {issue_id})")

    def bulk_soft_delete(self, ids: Sequence[int]) -> None:
        """Mark every existing issue in ``ids`` as deleted.

        Unknown ids are logged and skipped. Re-deleting is a no-op.
        """
        issues = self.issues.find_all_by_id(ids)
        if len(issues) != len(set(ids)):
            found = {issue.id for issue in issues}
            missing = sorted(set(ids) - found)
            logger.warning(f"Issues requested for deletion not found: {missing} (requested IDs: {list(ids)})")

        for issue in issues:
            issue.delete()
        self.issues.save_all(issues)
        logger.info(f"Admin issues soft-deleted (IDs: {[issue.id for issue in issues]})")

    def get_public_detail(self, coin_id: int, issue_id: int) -> IssuePublicDetail:
        """Return the public body of an active issue.

        Raises:
            IssueNotFound: If the issue does not exist or is deleted
        """
        issue = self.issues.find_by_id(issue_id)
        if issue is None or issue.is_deleted:
            raise IssueNotFound(issue_id)
        return IssuePublicDetail(
            title=issue.title,
            content=issue.content,
            news_title=issue.news_title,
            source=issue.source,
        )

    def _get_issue(self, issue_id: int) -> Issue:
        issue = self.issues.find_by_id(issue_id)
        if issue is None:
            raise IssueNotFound(issue_id)
        return issue

    @staticmethod
    def _created_by(issue: Issue) -> str:
        return str(issue.user_id) if issue.user_id is not None else UNKNOWN_AUTHOR

    def _to_summary(self, issue: Issue) -> IssueSummary:
        return IssueSummary(
            issue_id=issue.id,
            date=issue.date,
            title=issue.title,
            created_by=self._created_by(issue),
            created_at=issue.created_at,
            updated_at=issue.updated_at,
        )
