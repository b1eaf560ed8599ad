from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import Select, delete, func, select, update
from sqlalchemy.orm import Session

from app.models.entities import Account, Location, Member


@dataclass(frozen=True)
class MemberFields:
    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    city: str | None = None
    locale: str | None = None
    postal_code: str | None = None


def _lock_account_stmt(*criteria) -> Select[tuple[Account]]:
    return select(Account).where(*criteria).with_for_update()


def lock_account(db: Session, account_guid: str) -> Account | None:
    """
    Load an account and hold a row lock on it until the transaction ends.

    Every operation that reads member counts or picks a successor takes this lock
    first, so changes to an account's primary member are serialized across
    processes. SQLite ignores FOR UPDATE and serializes writers on its own.
    """
    return _locked(db, Account.guid == account_guid)


def lock_account_by_id(db: Session, account_id: int) -> Account | None:
    return _locked(db, Account.id == account_id)


def _locked(db: Session, criterion) -> Account | None:
    return db.execute(
        _lock_account_stmt(criterion).execution_options(populate_existing=True)
    ).scalar_one_or_none()


def get_member(db: Session, member_guid: str, *, refresh: bool = False) -> Member | None:
    query = select(Member).where(Member.guid == member_guid)
    if refresh:
        query = query.execution_options(populate_existing=True)
    return db.execute(query).scalar_one_or_none()


def _member_rows():
    return (
        select(Member, Account.guid, Location.guid)
        .join(Account, Account.id == Member.account_id)
        .join(Location, Location.id == Member.location_id)
    )


def list_members(db: Session) -> list[tuple[Member, str, str]]:
    """All members with their account and location guids, grouped by account, primary first."""
    rows = db.execute(
        _member_rows().order_by(Account.guid.asc(), Member.is_primary.desc(), Member.created_at.asc(), Member.id.asc())
    ).all()
    return [tuple(row) for row in rows]


def list_account_members(db: Session, account_id: int) -> list[tuple[Member, str, str]]:
    rows = db.execute(
        _member_rows()
        .where(Member.account_id == account_id)
        .order_by(Member.is_primary.desc(), Member.created_at.asc(), Member.id.asc())
    ).all()
    return [tuple(row) for row in rows]


def get_member_row(db: Session, member_guid: str) -> tuple[Member, str, str] | None:
    row = db.execute(_member_rows().where(Member.guid == member_guid)).first()
    return tuple(row) if row is not None else None


def count_members(db: Session, account_id: int) -> int:
    return db.execute(select(func.count(Member.id)).where(Member.account_id == account_id)).scalar_one()


def count_primary_members(db: Session, account_id: int) -> int:
    return db.execute(
        select(func.count(Member.id)).where(Member.account_id == account_id, Member.is_primary.is_(True))
    ).scalar_one()


def find_primary(db: Session, account_id: int) -> Member | None:
    return db.execute(
        select(Member).where(Member.account_id == account_id, Member.is_primary.is_(True))
    ).scalar_one_or_none()


def find_successor(db: Session, account_id: int, excluding_member_id: int) -> Member | None:
    """Oldest remaining member of the account; equal timestamps fall back to the lowest id."""
    return db.execute(
        select(Member)
        .where(Member.account_id == account_id, Member.id != excluding_member_id)
        .order_by(Member.created_at.asc(), Member.id.asc())
        .limit(1)
    ).scalar_one_or_none()


def insert_member(db: Session, account: Account, fields: MemberFields, *, is_primary: bool) -> Member:
    now = datetime.now(timezone.utc)
    member = Member(
        account_id=account.id,
        location_id=account.location_id,
        is_primary=is_primary,
        cancelled=False,
        joined_at=now,
        created_at=now,
        first_name=fields.first_name,
        last_name=fields.last_name,
        address=fields.address,
        city=fields.city,
        locale=fields.locale,
        postal_code=fields.postal_code,
    )
    db.add(member)
    db.flush()
    return member


def promote_member(db: Session, member_id: int) -> int:
    result = db.execute(
        update(Member)
        .where(Member.id == member_id)
        .values(is_primary=True, updated_at=datetime.now(timezone.utc))
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


def delete_member_row(db: Session, member_id: int) -> int:
    result = db.execute(
        delete(Member).where(Member.id == member_id).execution_options(synchronize_session=False)
    )
    return result.rowcount


def delete_non_primary(db: Session, account_id: int) -> int:
    result = db.execute(
        delete(Member)
        .where(Member.account_id == account_id, Member.is_primary.is_(False))
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


def delete_all_for_account(db: Session, account_id: int) -> int:
    result = db.execute(
        delete(Member).where(Member.account_id == account_id).execution_options(synchronize_session=False)
    )
    return result.rowcount
