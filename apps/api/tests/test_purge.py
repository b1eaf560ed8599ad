from datetime import datetime, timezone

from sqlalchemy import func, select

from app.models.entities import Account, Location, Member
from app.services import members as repo
from app.services.members import MemberFields
from app.services.outcomes import FailureKind
from app.services.primary import create_member
from app.services.purge import purge_account, purge_non_primary_members

T0 = datetime(2026, 1, 1, 9, 0, 0, tzinfo=timezone.utc)


def _seed_account_with_members(db_session, names):
    location = Location(name="Gym")
    db_session.add(location)
    db_session.flush()
    account = Account(location_id=location.id, period_start=T0, period_end=T0, next_billing=T0)
    db_session.add(account)
    db_session.commit()
    account_id, account_guid = account.id, account.guid
    for name in names:
        assert create_member(db_session, account_guid, False, MemberFields(first_name=name)).ok
    return account_id, account_guid


def test_purge_account_removes_all_members(db_session):
    account_id, account_guid = _seed_account_with_members(db_session, ["A", "B", "C", "D"])

    outcome = purge_account(db_session, account_guid)

    assert outcome.ok
    assert outcome.value.members_deleted == 4
    assert outcome.value.accounts_deleted == 1
    assert db_session.execute(select(func.count(Member.id))).scalar_one() == 0
    assert db_session.get(Account, account_id) is None


def test_purge_account_applies_to_single_member_account(db_session):
    _, account_guid = _seed_account_with_members(db_session, ["Solo"])

    outcome = purge_account(db_session, account_guid)

    assert outcome.value.members_deleted == 1


def test_purge_unknown_account(db_session):
    outcome = purge_account(db_session, "missing")

    assert outcome.failure.kind == FailureKind.not_found


def test_purge_non_primary_members(db_session):
    account_id, account_guid = _seed_account_with_members(db_session, ["P", "N1", "N2"])
    primary_id = repo.find_primary(db_session, account_id).id

    first = purge_non_primary_members(db_session, account_guid)
    second = purge_non_primary_members(db_session, account_guid)

    assert first.value == 2
    assert second.value == 0
    assert repo.count_members(db_session, account_id) == 1
    assert repo.find_primary(db_session, account_id).id == primary_id


def test_purge_non_primary_members_unknown_account(db_session):
    outcome = purge_non_primary_members(db_session, "missing")

    assert outcome.failure.kind == FailureKind.not_found
