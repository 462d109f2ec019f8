"""Admin API endpoints for coin curation and issue management."""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Header, HTTPException, Query, Response, status
from cryptory.api.deps import get_coin_service, get_issue_service
from cryptory.schemas.coin import CoinAdminSummary, CoinAdminDetail
from cryptory.schemas.common import Page
from cryptory.schemas.issue import (
    IssueAdminDetail,
    IssueCreateRequest,
    IssueSummary,
    IssueUpdateRequest,
)
from cryptory.services.coin_service import CoinService
from cryptory.services.issue_service import IssueService

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])
logger = logging.getLogger(__name__)


@router.get("/coins", response_model=Page[CoinAdminSummary])
async def get_admin_coin_list(
    keyword: Optional[str] = None,
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    sort: Optional[str] = None,
    service: CoinService = Depends(get_coin_service),
):
    """Page through the coin catalog.

    Args:
        keyword: Substring of the Korean/English name or code
        page: Zero-based page index
        size: Page size (1-100)
        sort: "<field>[,asc|desc]", defaults to id ascending
    """
    return service.list_coins_for_admin(keyword, page, size, sort)


@router.get("/coins/{coin_id}", response_model=CoinAdminDetail)
async def get_admin_coin_detail(coin_id: int, service: CoinService = Depends(get_coin_service)):
    """Get catalog details of one coin."""
    return service.get_coin_detail_for_admin(coin_id)


@router.get("/coins/{coin_id}/issues", response_model=Page[IssueSummary])
async def get_admin_issue_list(
    coin_id: int,
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    service: IssueService = Depends(get_issue_service),
):
    """Page through a coin's active issues, newest first."""
    return service.list_for_admin(coin_id, page, size)


@router.post("/coins/{coin_id}/issues", status_code=status.HTTP_201_CREATED)
async def create_admin_issue(
    coin_id: int,
    request: IssueCreateRequest,
    x_admin_user_id: str = Header(...),
    service: IssueService = Depends(get_issue_service),
):
    """Create an issue for a coin; the author comes from the X-Admin-User-Id header."""
    issue_id = service.create(coin_id, request, x_admin_user_id)
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"/api/v1/admin/issues/{issue_id}"},
    )


@router.get("/issues/{issue_id}", response_model=IssueAdminDetail)
async def get_admin_issue_detail(issue_id: int, service: IssueService = Depends(get_issue_service)):
    """Get an issue, including soft-deleted ones."""
    return service.get_detail_for_admin(issue_id)


@router.put("/issues/{issue_id}")
async def update_admin_issue(
    issue_id: int,
    request: IssueUpdateRequest,
    service: IssueService = Depends(get_issue_service),
):
    """Update an issue; omitted fields keep their values."""
    service.update(issue_id, request)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/issues", status_code=status.HTTP_204_NO_CONTENT)
async def delete_admin_issues(
    ids: List[int] = Query(default=[]),
    service: IssueService = Depends(get_issue_service),
):
    """Soft-delete issues by id."""
    if not ids:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one issue id is required"
        )
    service.bulk_soft_delete(ids)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
