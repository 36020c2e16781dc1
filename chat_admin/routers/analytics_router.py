from fastapi import APIRouter, Depends

from chat_admin.config import get_settings
from chat_admin.constants import ANALYTICS_DEFAULT_DAYS
from chat_admin.db import Database, get_db
from chat_admin.errors import upstream_errors
from chat_admin.routers.utils.dependencies import days_param
from chat_admin.schemas.analytics import UsageAnalytics
from chat_admin.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/usage", response_model=UsageAnalytics)
async def get_usage_analytics(
    days: int = Depends(days_param(ANALYTICS_DEFAULT_DAYS)),
    db: Database = Depends(get_db),
) -> UsageAnalytics:
    """Daily conversation, message and active-user counts over the last ``days`` days."""
    with upstream_errors("get usage analytics"):
        service = AnalyticsService(db, get_settings().display_timezone)
        return await service.usage(days)
