from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.entities import AccountStatusEnum, AccountTypeEnum


class AccountCreate(BaseModel):
    location_guid: UUID
    status: AccountStatusEnum = AccountStatusEnum.green
    account_type: AccountTypeEnum = AccountTypeEnum.openend
    payment_amount: float | None = Field(default=None, ge=0)
    end_date: datetime | None = None
    period_start: datetime | None = None
    period_end: datetime | None = None
    next_billing: datetime | None = None


class AccountResponse(BaseModel):
    guid: str
    location_guid: str
    status: AccountStatusEnum
    account_type: AccountTypeEnum
    payment_amount: float | None
    pend_cancel: bool
    pend_cancel_at: datetime | None
    end_date: datetime | None
    period_start: datetime
    period_end: datetime
    next_billing: datetime
    created_at: datetime
    updated_at: datetime | None


class AccountListResponse(BaseModel):
    items: list[AccountResponse]


class AccountDeleteResponse(BaseModel):
    deleted_count: int
    members_deleted: int


class NonPrimaryDeleteResponse(BaseModel):
    deleted_count: int
