from datetime import datetime, timezone

import pytest
from fastapi import HTTPException

from app.models.entities import Account, Location
from app.services.access import require_account, require_location


def test_require_account_returns_existing_account(db_session):
    location = Location(name="Downtown")
    db_session.add(location)
    db_session.flush()
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    account = Account(location_id=location.id, period_start=now, period_end=now, next_billing=now)
    db_session.add(account)
    db_session.commit()

    found = require_account(db_session, account.guid)
    assert found.id == account.id
    assert require_location(db_session, location.guid).name == "Downtown"


def test_require_account_rejects_unknown_guid(db_session):
    with pytest.raises(HTTPException) as exc_info:
        require_account(db_session, "nope")
    assert exc_info.value.status_code == 404
    assert exc_info.value.detail["message"] == "account nope not found"
