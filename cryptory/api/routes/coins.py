"""Public coin API endpoints."""
import logging
from typing import List
from fastapi import APIRouter, Depends, Query, Response, status
from cryptory.api.deps import get_coin_service, get_issue_service
from cryptory.schemas.coin import CoinSummary, CoinDetail, NewsItem
from cryptory.schemas.common import ApiResponse
from cryptory.schemas.issue import IssuePublicDetail
from cryptory.services.coin_service import CoinService
from cryptory.services.issue_service import IssueService

router = APIRouter(prefix="/api/v1/coins", tags=["coins"])
logger = logging.getLogger(__name__)


@router.get("", response_model=ApiResponse[List[CoinSummary]])
def get_coins(service: CoinService = Depends(get_coin_service)):
    """List front-page coins with live prices."""
    return ApiResponse(data=service.list_public_coins())


@router.get("/{coin_id}", response_model=ApiResponse[CoinDetail])
def get_coin_detail(coin_id: int, service: CoinService = Depends(get_coin_service)):
    """Get one coin with its chart, ticker and issues."""
    return ApiResponse(data=service.get_coin_detail(coin_id))


@router.get("/{coin_id}/news", response_model=ApiResponse[List[NewsItem]])
def get_coin_news(coin_id: int, service: CoinService = Depends(get_coin_service)):
    """Search news for a coin."""
    return ApiResponse(data=service.get_coin_news(coin_id))


@router.patch("/{coin_id}/display", status_code=status.HTTP_200_OK)
def update_display_setting(
    coin_id: int,
    is_displayed: bool = Query(...),
    service: CoinService = Depends(get_coin_service),
):
    """Show or hide a coin on the front page (internal API)."""
    service.set_display(coin_id, is_displayed)
    logger.info(f"Display setting request processed for coin {coin_id}: {is_displayed}")
    return Response(status_code=status.HTTP_200_OK)


@router.get("/{coin_id}/issues/{issue_id}", response_model=ApiResponse[IssuePublicDetail])
async def get_public_issue_detail(
    coin_id: int,
    issue_id: int,
    service: IssueService = Depends(get_issue_service),
):
    """Get the public body of an issue."""
    return ApiResponse(data=service.get_public_detail(coin_id, issue_id))
