"""Pagination summaries; each entity reports its total under its own key."""

from __future__ import annotations

from typing import ClassVar

from chat_admin.query.pagination import PageInfo
from chat_admin.schemas.base import CamelModel


class PaginationBase(CamelModel):
    current_page: int
    total_pages: int
    has_next: bool
    has_prev: bool

    total_field: ClassVar[str]

    @classmethod
    def from_page(cls, info: PageInfo):
        return cls(
            current_page=info.page,
            total_pages=info.total_pages,
            has_next=info.has_next,
            has_prev=info.has_prev,
            **{cls.total_field: info.total},
        )


class UserPagination(PaginationBase):
    total_field: ClassVar[str] = "total_users"

    total_users: int


class ConversationPagination(PaginationBase):
    total_field: ClassVar[str] = "total_conversations"

    total_conversations: int


class MessagePagination(PaginationBase):
    total_field: ClassVar[str] = "total_messages"

    total_messages: int
