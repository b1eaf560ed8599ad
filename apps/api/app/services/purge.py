from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from sqlalchemy import delete
from sqlalchemy.orm import Session

from app.core.db import run_in_transaction
from app.models.entities import Account
from app.services import members as repo
from app.services.outcomes import Failure, Outcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountPurgeResult:
    members_deleted: int
    accounts_deleted: int


def purge_account(
    db: Session,
    account_guid: str,
    *,
    cancel: threading.Event | None = None,
) -> Outcome[AccountPurgeResult]:
    """
    Hard-delete an account together with all of its members.

    This is the only path that takes an account down to zero members, so the
    last-member rule does not apply here. Members go first so the account row is
    never left referenced.
    """

    def work(session: Session) -> Outcome[AccountPurgeResult]:
        account = repo.lock_account(session, account_guid)
        if account is None:
            logger.warning(f"account {account_guid} not found for deletion")
            return Outcome.fail(Failure.not_found("Account", account_guid))

        members_deleted = repo.delete_all_for_account(session, account.id)
        accounts_deleted = session.execute(
            delete(Account).where(Account.id == account.id).execution_options(synchronize_session=False)
        ).rowcount
        return Outcome.success(AccountPurgeResult(members_deleted=members_deleted, accounts_deleted=accounts_deleted))

    outcome = run_in_transaction(db, work, cancel=cancel, operation="purge_account")
    if outcome.ok:
        logger.info(
            f"deleted account with {outcome.value.members_deleted} members",
            extra={"account_id": account_guid},
        )
    return outcome


def purge_non_primary_members(
    db: Session,
    account_guid: str,
    *,
    cancel: threading.Event | None = None,
) -> Outcome[int]:
    """Delete every non-primary member of an account; the primary is never touched."""

    def work(session: Session) -> Outcome[int]:
        account = repo.lock_account(session, account_guid)
        if account is None:
            logger.warning(f"account {account_guid} not found for non-primary member deletion")
            return Outcome.fail(Failure.not_found("Account", account_guid))
        return Outcome.success(repo.delete_non_primary(session, account.id))

    outcome = run_in_transaction(db, work, cancel=cancel, operation="purge_non_primary_members")
    if outcome.ok:
        logger.info(f"deleted {outcome.value} non-primary members", extra={"account_id": account_guid})
    return outcome
