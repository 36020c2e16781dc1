"""Resolve the ``/users/{identifier}`` path segment to a lookup column and value."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from chat_admin.constants import HANDLE_MARKER, MAX_ID, MIN_ID

_NUMERIC_ID = re.compile(r"-?[0-9]+")


def fits_id(value: int) -> bool:
    """Whether ``value`` can be bound against a 64-bit id column."""
    return MIN_ID <= value <= MAX_ID


@dataclass(frozen=True)
class UserLookup:
    column: str
    value: Union[int, str]

    @property
    def by_id(self) -> bool:
        return self.column == "user_id"

    @property
    def matchable(self) -> bool:
        """False for numeric ids no stored row can carry."""
        return not self.by_id or fits_id(self.value)


def normalize_handle(handle: str) -> str:
    """Prefix ``handle`` with the marker unless it already carries it."""
    if handle.startswith(HANDLE_MARKER):
        return handle
    return f"{HANDLE_MARKER}{handle}"


def resolve_user_identifier(identifier: str) -> UserLookup:
    """
    A segment made entirely of ASCII digits (optionally signed) is a numeric
    user id; anything else is a handle.
    """
    segment = identifier.strip()
    if _NUMERIC_ID.fullmatch(segment):
        return UserLookup(column="user_id", value=int(segment))
    return UserLookup(column="username", value=normalize_handle(identifier))
