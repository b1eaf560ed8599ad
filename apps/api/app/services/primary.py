"""
Primary member designation.

Every account that has members has exactly one primary member. The first member
created on an account becomes primary no matter what the caller asked for, a
second primary is refused, the last member cannot be deleted on its own, and
deleting the primary promotes the oldest remaining member (lowest id on equal
timestamps) in the same transaction.

Each operation runs as one unit of work on the caller's session and returns an
Outcome instead of raising for business rule violations.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.core.db import run_in_transaction
from app.models.entities import Member
from app.services import members as repo
from app.services.members import MemberFields
from app.services.outcomes import ConflictReason, Failure, Outcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteResult:
    deleted: bool
    promoted: bool
    promoted_member_guid: str | None = None


def create_member(
    db: Session,
    account_guid: str,
    requested_primary: bool,
    fields: MemberFields,
    *,
    cancel: threading.Event | None = None,
) -> Outcome[Member]:
    def work(session: Session) -> Outcome[Member]:
        account = repo.lock_account(session, account_guid)
        if account is None:
            logger.warning(f"account {account_guid} not found when creating member")
            return Outcome.fail(Failure.not_found("Account", account_guid))

        member_count = repo.count_members(session, account.id)
        primary_count = repo.count_primary_members(session, account.id)
        if requested_primary and primary_count > 0:
            logger.warning(
                "rejected second primary member",
                extra={"account_id": account_guid, "error_code": ConflictReason.duplicate_primary.value},
            )
            return Outcome.fail(
                Failure.conflict(
                    ConflictReason.duplicate_primary,
                    "account already has a primary member; only one is allowed",
                )
            )

        is_primary = requested_primary or member_count == 0
        member = repo.insert_member(session, account, fields, is_primary=is_primary)
        return Outcome.success(member)

    outcome = run_in_transaction(db, work, cancel=cancel, operation="create_member")
    if outcome.ok:
        member = outcome.value
        logger.info(
            f"created member (primary={member.is_primary})",
            extra={"account_id": account_guid, "member_id": member.guid},
        )
    return outcome


def delete_member(
    db: Session,
    member_guid: str,
    *,
    cancel: threading.Event | None = None,
) -> Outcome[DeleteResult]:
    def work(session: Session) -> Outcome[DeleteResult]:
        member = repo.get_member(session, member_guid)
        if member is None:
            logger.warning(f"member {member_guid} not found for deletion")
            return Outcome.fail(Failure.not_found("Member", member_guid))

        account = repo.lock_account_by_id(session, member.account_id)
        # Re-read under the lock: a concurrent delete may have won the race.
        member = repo.get_member(session, member_guid, refresh=True)
        if account is None or member is None:
            return Outcome.fail(Failure.not_found("Member", member_guid))

        if repo.count_members(session, account.id) <= 1:
            logger.warning(
                "rejected deletion of last member",
                extra={"account_id": account.guid, "member_id": member_guid, "error_code": ConflictReason.last_member.value},
            )
            return Outcome.fail(
                Failure.conflict(
                    ConflictReason.last_member,
                    "cannot delete the last member of an account",
                )
            )

        successor: Member | None = None
        if member.is_primary:
            successor = repo.find_successor(session, account.id, excluding_member_id=member.id)
            if successor is None:
                logger.error(
                    "no successor for primary member despite remaining members",
                    extra={"account_id": account.guid, "member_id": member_guid, "error_code": ConflictReason.promotion_failed.value},
                )
                return Outcome.fail(
                    Failure.conflict(
                        ConflictReason.promotion_failed,
                        "could not promote a new primary member; deletion aborted",
                    )
                )

        # Delete before promoting so the one-primary-per-account index never sees two.
        deleted = repo.delete_member_row(session, member.id)
        if successor is not None and repo.promote_member(session, successor.id) != 1:
            return Outcome.fail(
                Failure.conflict(
                    ConflictReason.promotion_failed,
                    "could not promote a new primary member; deletion aborted",
                )
            )
        return Outcome.success(
            DeleteResult(
                deleted=deleted == 1,
                promoted=successor is not None,
                promoted_member_guid=successor.guid if successor is not None else None,
            )
        )

    outcome = run_in_transaction(db, work, cancel=cancel, operation="delete_member")
    if outcome.ok:
        logger.info(
            f"deleted member (promoted={outcome.value.promoted})",
            extra={"member_id": member_guid, "promoted_member_id": outcome.value.promoted_member_guid},
        )
    return outcome
