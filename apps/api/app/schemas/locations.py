from datetime import datetime

from pydantic import BaseModel, Field


class LocationCreate(BaseModel):
    name: str = Field(min_length=1, max_length=45)
    address: str | None = Field(default=None, max_length=45)
    city: str | None = Field(default=None, max_length=45)
    locale: str | None = Field(default=None, max_length=45)
    postal_code: str | None = Field(default=None, max_length=16)


class LocationResponse(BaseModel):
    guid: str
    name: str
    address: str | None
    city: str | None
    locale: str | None
    postal_code: str | None
    created_at: datetime
    active_account_count: int = 0


class LocationListResponse(BaseModel):
    items: list[LocationResponse]
