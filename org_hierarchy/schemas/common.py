"""Building blocks shared by every entity schema."""

import re
from typing import Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")

TIME_OF_DAY = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON while keeping snake_case attributes."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
        "extra": "ignore",
    }


class PostalAddress(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip_code: Optional[str] = None


class GeoPoint(CamelModel):
    """GeoJSON point, coordinates in [longitude, latitude] order."""

    type: Literal["Point"] = "Point"
    coordinates: List[float] = Field(default_factory=lambda: [0.0, 0.0])

    @model_validator(mode="before")
    @classmethod
    def accept_bare_pair(cls, data):
        if isinstance(data, (list, tuple)):
            return {"type": "Point", "coordinates": list(data)}
        return data

    @field_validator("coordinates")
    @classmethod
    def check_range(cls, v: List[float]) -> List[float]:
        if len(v) != 2:
            raise ValueError("coordinates must be [longitude, latitude]")
        lng, lat = v
        if not -180 <= lng <= 180:
            raise ValueError("longitude must be between -180 and 180")
        if not -90 <= lat <= 90:
            raise ValueError("latitude must be between -90 and 90")
        return v


class GeoAddress(PostalAddress):
    coordinates: GeoPoint = Field(default_factory=GeoPoint)


class DataResponse(BaseModel, Generic[T]):
    """Envelope for single-object responses."""

    success: bool = True
    data: T


class ListResponse(BaseModel, Generic[T]):
    """Envelope for list responses."""

    success: bool = True
    data: List[T]
    count: int


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class DeletedResponse(BaseModel):
    id: str
    deleted: bool = True
