from fastapi import APIRouter, Depends

from chat_admin.config import get_settings
from chat_admin.db import Database, get_db
from chat_admin.errors import upstream_errors
from chat_admin.schemas.dashboard import DashboardStats
from chat_admin.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(db: Database = Depends(get_db)) -> DashboardStats:
    """Global user, conversation and message statistics."""
    with upstream_errors("dashboard stats"):
        return await DashboardService(db, get_settings().display_timezone).stats()
