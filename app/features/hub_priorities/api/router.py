"""
Hub priorities routes.

GET /hub/priorities returns the top priority items for the authenticated
user's hub view.
"""

import time

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.auth.verify import current_user_id
from app.config import settings
from app.features.hub_priorities.domain.models import DayContext, PriorityOptions, TimeContext
from app.features.hub_priorities.services.priority_service import (
    HubPriorityService,
    hub_priority_service,
)
from app.infrastructure.observability.logging import get_logger

from .schemas import HubPrioritiesResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/hub", tags=["hub"])


def get_hub_priority_service() -> HubPriorityService:
    return hub_priority_service


def clamp_limit(limit: int | None) -> int:
    if limit is None:
        return settings.HUB_DEFAULT_LIMIT
    return min(max(limit, 1), settings.HUB_MAX_LIMIT)


@router.get("/priorities", response_model=HubPrioritiesResponse)
async def get_hub_priorities(
    limit: int | None = Query(None, description="Items to return, clamped to 1..HUB_MAX_LIMIT"),
    time_context: TimeContext | None = Query(None, description="Override the time-of-day context"),
    day_context: DayContext | None = Query(None, description="Override the day context"),
    user_id: str = Depends(current_user_id),
    service: HubPriorityService = Depends(get_hub_priority_service),
):
    """Top priority items across messages, tasks, events and extracted dates."""
    start_time = time.time()
    options = PriorityOptions(
        limit=clamp_limit(limit),
        time_context=time_context,
        day_context=day_context,
    )

    try:
        result = await service.get_top_priority_items(user_id, options)
    except Exception as e:
        logger.error(
            "Hub priorities fetch failed",
            user_id=user_id,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch hub priorities",
        ) from e

    logger.info(
        "Hub priorities fetched",
        user_id=user_id,
        item_count=len(result.items),
        duration_ms=round((time.time() - start_time) * 1000, 2),
    )
    return HubPrioritiesResponse.from_domain(result)
