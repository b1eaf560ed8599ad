from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.models.entities import Account, AccountStatusEnum, Location
from app.schemas.locations import LocationCreate, LocationListResponse, LocationResponse
from app.services.access import require_location

router = APIRouter(prefix="/v1/locations", tags=["locations"])


def _active_account_count():
    return (
        select(func.count(Account.id))
        .where(Account.location_id == Location.id, Account.status < AccountStatusEnum.cancelled)
        .correlate(Location)
        .scalar_subquery()
    )


def _to_location_response(location: Location, active_account_count: int) -> LocationResponse:
    return LocationResponse(
        guid=location.guid,
        name=location.name,
        address=location.address,
        city=location.city,
        locale=location.locale,
        postal_code=location.postal_code,
        created_at=location.created_at,
        active_account_count=active_account_count,
    )


@router.get("", response_model=LocationListResponse)
def list_locations(db: Session = Depends(get_db)):
    rows = db.execute(select(Location, _active_account_count()).order_by(Location.id.asc())).all()
    return LocationListResponse(items=[_to_location_response(location, count) for location, count in rows])


@router.get("/{location_guid}", response_model=LocationResponse)
def get_location(location_guid: UUID, db: Session = Depends(get_db)):
    location = require_location(db, str(location_guid))
    count = db.execute(select(_active_account_count()).select_from(Location).where(Location.id == location.id)).scalar_one()
    return _to_location_response(location, count)


@router.post("", response_model=LocationResponse, status_code=201)
def create_location(payload: LocationCreate, db: Session = Depends(get_db)):
    location = Location(
        name=payload.name,
        address=payload.address,
        city=payload.city,
        locale=payload.locale,
        postal_code=payload.postal_code,
        disabled=False,
        enable_billing=False,
    )
    db.add(location)
    db.commit()
    db.refresh(location)
    return _to_location_response(location, 0)
