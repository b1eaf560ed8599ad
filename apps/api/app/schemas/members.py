from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class MemberCreate(BaseModel):
    account_guid: UUID
    # The first member of an account is made primary regardless of this flag.
    is_primary: bool = False
    first_name: str | None = Field(default=None, max_length=45)
    last_name: str | None = Field(default=None, max_length=45)
    address: str | None = Field(default=None, max_length=45)
    city: str | None = Field(default=None, max_length=45)
    locale: str | None = Field(default=None, max_length=16)
    postal_code: str | None = Field(default=None, max_length=16)


class MemberResponse(BaseModel):
    guid: str
    account_guid: str
    location_guid: str
    is_primary: bool
    first_name: str | None
    last_name: str | None
    address: str | None
    city: str | None
    locale: str | None
    postal_code: str | None
    joined_at: datetime
    cancelled_at: datetime | None
    cancelled: bool
    created_at: datetime
    updated_at: datetime | None


class MemberListResponse(BaseModel):
    items: list[MemberResponse]


class MemberDeleteResponse(BaseModel):
    deleted_count: int
    new_primary_promoted: bool
    promoted_member_guid: str | None = None
