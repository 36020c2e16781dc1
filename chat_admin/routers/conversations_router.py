from typing import Optional

from fastapi import APIRouter, Depends, Query

from chat_admin.constants import CONVERSATIONS_PAGE_SIZE
from chat_admin.db import Database, get_db
from chat_admin.errors import NotFoundError, upstream_errors
from chat_admin.query import PageRequest
from chat_admin.routers.utils.dependencies import page_params
from chat_admin.schemas.conversation import ConversationDetail, ConversationList
from chat_admin.services.conversation_service import ConversationService

router = APIRouter(
    prefix="/conversations",
    tags=["conversations"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=ConversationList)
async def list_conversations(
    page: PageRequest = Depends(page_params(CONVERSATIONS_PAGE_SIZE)),
    status: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: Database = Depends(get_db),
) -> ConversationList:
    """List conversations, most recently started first."""
    with upstream_errors("get conversations"):
        return await ConversationService(db).list_conversations(
            page, status=status, search=search
        )


@router.get("/{conversation_id}", response_model=ConversationDetail)
async def get_conversation(
    conversation_id: int,
    db: Database = Depends(get_db),
) -> ConversationDetail:
    """Get a conversation with its full message log in chronological order."""
    with upstream_errors("get conversation details"):
        detail = await ConversationService(db).get_conversation_detail(conversation_id)
    if detail is None:
        raise NotFoundError("Conversation")
    return detail
