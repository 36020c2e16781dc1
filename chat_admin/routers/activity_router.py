from fastapi import APIRouter, Depends

from chat_admin.constants import RECENT_ACTIVITY_LIMIT
from chat_admin.db import Database, get_db
from chat_admin.errors import upstream_errors
from chat_admin.routers.utils.dependencies import limit_param
from chat_admin.schemas.activity import RecentActivity
from chat_admin.services.activity_service import ActivityService

router = APIRouter(prefix="/activity", tags=["activity"])


@router.get("/recent", response_model=RecentActivity)
async def get_recent_activity(
    limit: int = Depends(limit_param(RECENT_ACTIVITY_LIMIT)),
    db: Database = Depends(get_db),
) -> RecentActivity:
    """Most recent conversations and messages, merged newest first."""
    with upstream_errors("get recent activity"):
        return await ActivityService(db).recent_activity(limit)
