from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.entities import Account, Location
from app.services.outcomes import Failure, to_http_exception


def require_location(db: Session, location_guid: str) -> Location:
    location = db.execute(select(Location).where(Location.guid == location_guid)).scalar_one_or_none()
    if location is None:
        raise to_http_exception(Failure.not_found("Location", location_guid))
    return location


def require_account(db: Session, account_guid: str) -> Account:
    account = db.execute(select(Account).where(Account.guid == account_guid)).scalar_one_or_none()
    if account is None:
        raise to_http_exception(Failure.not_found("Account", account_guid))
    return account
