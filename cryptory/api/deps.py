"""Dependency injection for FastAPI routes."""
from fastapi import Depends
from sqlalchemy.orm import Session

from cryptory.core.database import get_db
from cryptory.services.coin_service import CoinService
from cryptory.services.issue_service import IssueService


def get_coin_service(db: Session = Depends(get_db)) -> CoinService:
    """Dependency: coin service bound to the request's session."""
    return CoinService(db)


def get_issue_service(db: Session = Depends(get_db)) -> IssueService:
    """Dependency: issue service bound to the request's session."""
    return IssueService(db)
