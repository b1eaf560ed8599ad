import uuid
from datetime import datetime, timezone
from enum import IntEnum

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_guid() -> str:
    return str(uuid.uuid4())


class AccountStatusEnum(IntEnum):
    # Ordering is meaningful: anything below CANCELLED counts as active.
    green = 0
    yellow = 1
    red = 2
    cancelled = 3
    collections = 4


class AccountTypeEnum(IntEnum):
    term = 1
    openend = 2


class Location(Base):
    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    guid: Mapped[str] = mapped_column(String(36), nullable=False, unique=True, default=_new_guid)
    name: Mapped[str] = mapped_column(String(45), nullable=False)
    address: Mapped[str | None] = mapped_column(String(45))
    city: Mapped[str | None] = mapped_column(String(45))
    locale: Mapped[str | None] = mapped_column(String(45))
    postal_code: Mapped[str | None] = mapped_column(String(16))
    disabled: Mapped[bool] = mapped_column(Boolean, default=False)
    enable_billing: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    guid: Mapped[str] = mapped_column(String(36), nullable=False, unique=True, default=_new_guid)
    location_id: Mapped[int] = mapped_column(ForeignKey("locations.id"), nullable=False)
    status: Mapped[int] = mapped_column(Integer, nullable=False, default=AccountStatusEnum.green)
    account_type: Mapped[int] = mapped_column(Integer, nullable=False, default=AccountTypeEnum.openend)
    payment_amount: Mapped[float | None] = mapped_column(Float)
    pend_cancel: Mapped[bool] = mapped_column(Boolean, default=False)
    pend_cancel_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    period_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    period_end: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    next_billing: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    __table_args__ = (CheckConstraint("status >= 0 AND status <= 4", name="ck_account_status_range"),)

class Member(Base):
    __tablename__ = "members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    guid: Mapped[str] = mapped_column(String(36), nullable=False, unique=True, default=_new_guid)
    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"), nullable=False)
    # Copied from the account at creation time.
    location_id: Mapped[int] = mapped_column(ForeignKey("locations.id"), nullable=False)
    is_primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    cancelled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    first_name: Mapped[str | None] = mapped_column(String(45))
    last_name: Mapped[str | None] = mapped_column(String(45))
    address: Mapped[str | None] = mapped_column(String(45))
    city: Mapped[str | None] = mapped_column(String(45))
    locale: Mapped[str | None] = mapped_column(String(16))
    postal_code: Mapped[str | None] = mapped_column(String(16))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))


Index("ix_accounts_location_status", Account.location_id, Account.status)
Index("ix_members_account_created", Member.account_id, Member.created_at, Member.id)
# At most one primary per account, whatever the application does.
Index(
    "uq_members_account_primary",
    Member.account_id,
    unique=True,
    postgresql_where=Member.is_primary.is_(True),
    sqlite_where=Member.is_primary.is_(True),
)
