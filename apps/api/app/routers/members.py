from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.models.entities import Member
from app.schemas.members import MemberCreate, MemberDeleteResponse, MemberListResponse, MemberResponse
from app.services import members as member_repo
from app.services.members import MemberFields
from app.services.outcomes import Failure, to_http_exception, unwrap
from app.services.primary import create_member, delete_member

router = APIRouter(prefix="/v1/members", tags=["members"])


def to_member_response(member: Member, account_guid: str, location_guid: str) -> MemberResponse:
    return MemberResponse(
        guid=member.guid,
        account_guid=account_guid,
        location_guid=location_guid,
        is_primary=member.is_primary,
        first_name=member.first_name,
        last_name=member.last_name,
        address=member.address,
        city=member.city,
        locale=member.locale,
        postal_code=member.postal_code,
        joined_at=member.joined_at,
        cancelled_at=member.cancelled_at,
        cancelled=member.cancelled,
        created_at=member.created_at,
        updated_at=member.updated_at,
    )


def _member_response(db: Session, member_guid: str) -> MemberResponse:
    row = member_repo.get_member_row(db, member_guid)
    if row is None:
        raise to_http_exception(Failure.not_found("Member", member_guid))
    return to_member_response(*row)


@router.get("", response_model=MemberListResponse)
def list_members(db: Session = Depends(get_db)):
    return MemberListResponse(items=[to_member_response(*row) for row in member_repo.list_members(db)])


@router.get("/{member_guid}", response_model=MemberResponse)
def get_member(member_guid: UUID, db: Session = Depends(get_db)):
    return _member_response(db, str(member_guid))


@router.post("", response_model=MemberResponse, status_code=201)
def create_account_member(payload: MemberCreate, db: Session = Depends(get_db)):
    fields = MemberFields(
        first_name=payload.first_name,
        last_name=payload.last_name,
        address=payload.address,
        city=payload.city,
        locale=payload.locale,
        postal_code=payload.postal_code,
    )
    member = unwrap(create_member(db, str(payload.account_guid), payload.is_primary, fields))
    return _member_response(db, member.guid)


@router.delete("/{member_guid}", response_model=MemberDeleteResponse)
def delete_account_member(member_guid: UUID, db: Session = Depends(get_db)):
    result = unwrap(delete_member(db, str(member_guid)))
    return MemberDeleteResponse(
        deleted_count=int(result.deleted),
        new_primary_promoted=result.promoted,
        promoted_member_guid=result.promoted_member_guid,
    )
