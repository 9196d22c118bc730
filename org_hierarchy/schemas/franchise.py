from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from org_hierarchy.schemas.common import CamelModel, GeoPoint, TIME_OF_DAY
from org_hierarchy.schemas.types import UTCDateTime


class FranchiseAddress(CamelModel):
    street: str
    city: str
    state: str
    country: str
    zip_code: str
    coordinates: GeoPoint


class FranchiseContact(CamelModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None


class DayHours(CamelModel):
    open: Optional[str] = None
    close: Optional[str] = None
    closed: bool = False

    @field_validator("open", "close")
    @classmethod
    def check_time_format(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not TIME_OF_DAY.match(v):
            raise ValueError("time must be zero-padded HH:MM")
        return v


class OperatingHours(CamelModel):
    monday: DayHours = Field(default_factory=DayHours)
    tuesday: DayHours = Field(default_factory=DayHours)
    wednesday: DayHours = Field(default_factory=DayHours)
    thursday: DayHours = Field(default_factory=DayHours)
    friday: DayHours = Field(default_factory=DayHours)
    saturday: DayHours = Field(default_factory=DayHours)
    sunday: DayHours = Field(default_factory=DayHours)


class FranchiseFeatures(CamelModel):
    wifi: bool = False
    parking: bool = False
    delivery: bool = False
    takeout: bool = False
    outdoor_seating: bool = False


class FranchiseSettings(CamelModel):
    timezone: str = "UTC"
    operating_hours: OperatingHours = Field(default_factory=OperatingHours)
    features: FranchiseFeatures = Field(default_factory=FranchiseFeatures)


class Capacity(CamelModel):
    max_customers: int = Field(50, ge=0)
    seating_capacity: int = Field(30, ge=0)


class FranchiseDocument(CamelModel):
    name: str = Field(..., max_length=100)
    business_id: str
    manager_id: Optional[str] = None
    address: FranchiseAddress
    contact: FranchiseContact = Field(default_factory=FranchiseContact)
    settings: FranchiseSettings = Field(default_factory=FranchiseSettings)
    capacity: Capacity = Field(default_factory=Capacity)
    is_active: bool = True


class FranchiseResponse(FranchiseDocument):
    id: str
    created_at: UTCDateTime
    updated_at: UTCDateTime


class OpenStatusResponse(CamelModel):
    franchise_id: str
    at: datetime
    timezone: str
    is_open: bool
