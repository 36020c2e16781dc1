from fastapi import APIRouter, Depends

from chat_admin.constants import MESSAGES_PAGE_SIZE
from chat_admin.db import Database, get_db
from chat_admin.errors import upstream_errors
from chat_admin.query import PageRequest
from chat_admin.routers.utils.dependencies import get_message_filters, page_params
from chat_admin.schemas.message import MessageFilters, MessageList
from chat_admin.services.message_service import MessageService

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("", response_model=MessageList)
async def list_messages(
    page: PageRequest = Depends(page_params(MESSAGES_PAGE_SIZE)),
    filters: MessageFilters = Depends(get_message_filters),
    db: Database = Depends(get_db),
) -> MessageList:
    """List messages newest first, filtered by conversation, participant, text and date range."""
    with upstream_errors("get messages"):
        return await MessageService(db).list_messages(page, filters)
