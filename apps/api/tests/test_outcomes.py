import json
import logging

import pytest
from fastapi import HTTPException

from app.core.config import Settings
from app.core.logging_config import JSONFormatter
from app.services.outcomes import ConflictReason, Failure, FailureKind, Outcome, to_http_exception, unwrap


@pytest.mark.parametrize(
    ("failure", "status_code"),
    [
        (Failure.not_found("Account", "abc"), 404),
        (Failure.conflict(ConflictReason.duplicate_primary, "dup"), 409),
        (Failure.conflict(ConflictReason.last_member, "last"), 409),
        (Failure.conflict(ConflictReason.promotion_failed, "broken"), 500),
        (Failure(FailureKind.invalid_argument, "bad"), 400),
        (Failure(FailureKind.storage_failure, "retry"), 503),
        (Failure(FailureKind.cancelled, "stop"), 503),
    ],
)
def test_failures_map_to_http_status(failure, status_code):
    exc = to_http_exception(failure)
    assert exc.status_code == status_code
    assert exc.detail["code"] == failure.kind.value


def test_unwrap_returns_value_or_raises():
    assert unwrap(Outcome.success(3)) == 3
    with pytest.raises(HTTPException) as exc_info:
        unwrap(Outcome.fail(Failure.conflict(ConflictReason.last_member, "last")))
    assert exc_info.value.detail["reason"] == "last_member"


def test_database_url_prefers_override():
    assert Settings(database_url_override="sqlite://").database_url == "sqlite://"
    assert Settings(database_url_override="").database_url.startswith("postgresql+psycopg2://")


def test_json_formatter_surfaces_known_extras():
    record = logging.LogRecord("app.services.primary", logging.INFO, __file__, 1, "created member", None, None)
    record.account_id = "acc-1"
    record.member_id = "mem-1"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "created member"
    assert payload["account_id"] == "acc-1"
    assert payload["member_id"] == "mem-1"
    assert "error_code" not in payload
