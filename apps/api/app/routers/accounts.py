import calendar
import logging
from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.models.entities import Account, AccountStatusEnum, AccountTypeEnum, Location
from app.routers.members import to_member_response
from app.schemas.accounts import (
    AccountCreate,
    AccountDeleteResponse,
    AccountListResponse,
    AccountResponse,
    NonPrimaryDeleteResponse,
)
from app.schemas.members import MemberListResponse
from app.services import members as member_repo
from app.services.access import require_account, require_location
from app.services.outcomes import unwrap
from app.services.purge import purge_account, purge_non_primary_members

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/accounts", tags=["accounts"])


def _one_month_after(value: datetime) -> datetime:
    year, month = (value.year + 1, 1) if value.month == 12 else (value.year, value.month + 1)
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def _to_account_response(account: Account, location_guid: str) -> AccountResponse:
    return AccountResponse(
        guid=account.guid,
        location_guid=location_guid,
        status=AccountStatusEnum(account.status),
        account_type=AccountTypeEnum(account.account_type),
        payment_amount=account.payment_amount,
        pend_cancel=account.pend_cancel,
        pend_cancel_at=account.pend_cancel_at,
        end_date=account.end_date,
        period_start=account.period_start,
        period_end=account.period_end,
        next_billing=account.next_billing,
        created_at=account.created_at,
        updated_at=account.updated_at,
    )


@router.get("", response_model=AccountListResponse)
def list_accounts(db: Session = Depends(get_db)):
    rows = db.execute(
        select(Account, Location.guid).join(Location, Location.id == Account.location_id).order_by(Account.id.asc())
    ).all()
    return AccountListResponse(items=[_to_account_response(account, location_guid) for account, location_guid in rows])


@router.get("/{account_guid}", response_model=AccountResponse)
def get_account(account_guid: UUID, db: Session = Depends(get_db)):
    account = require_account(db, str(account_guid))
    location = db.get(Location, account.location_id)
    return _to_account_response(account, location.guid)


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(payload: AccountCreate, db: Session = Depends(get_db)):
    location = require_location(db, str(payload.location_guid))
    now = datetime.now(timezone.utc)
    account = Account(
        location_id=location.id,
        status=int(payload.status),
        account_type=int(payload.account_type),
        payment_amount=payload.payment_amount,
        pend_cancel=False,
        end_date=payload.end_date,
        period_start=payload.period_start or now,
        period_end=payload.period_end or _one_month_after(now),
        next_billing=payload.next_billing or _one_month_after(now),
        created_at=now,
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    logger.info("created account", extra={"account_id": account.guid, "location_id": location.guid})
    return _to_account_response(account, location.guid)


@router.delete("/{account_guid}", response_model=AccountDeleteResponse)
def delete_account(account_guid: UUID, db: Session = Depends(get_db)):
    result = unwrap(purge_account(db, str(account_guid)))
    return AccountDeleteResponse(deleted_count=result.accounts_deleted, members_deleted=result.members_deleted)


@router.get("/{account_guid}/members", response_model=MemberListResponse)
def list_account_members(account_guid: UUID, db: Session = Depends(get_db)):
    account = require_account(db, str(account_guid))
    rows = member_repo.list_account_members(db, account.id)
    return MemberListResponse(items=[to_member_response(*row) for row in rows])


@router.delete("/{account_guid}/members/non-primary", response_model=NonPrimaryDeleteResponse)
def delete_non_primary_members(account_guid: UUID, db: Session = Depends(get_db)):
    deleted = unwrap(purge_non_primary_members(db, str(account_guid)))
    return NonPrimaryDeleteResponse(deleted_count=deleted)
