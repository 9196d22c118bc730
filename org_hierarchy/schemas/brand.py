from typing import List, Optional

from pydantic import Field

from org_hierarchy.schemas.common import CamelModel, PostalAddress
from org_hierarchy.schemas.types import UTCDateTime


class BrandGuidelines(CamelModel):
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    font_family: Optional[str] = None
    logo_variations: List[str] = Field(default_factory=list)


class BrandFeatures(CamelModel):
    custom_forms: bool = False
    custom_reports: bool = False
    white_label: bool = False


class BrandSettings(CamelModel):
    theme: str = "default"
    custom_domain: Optional[str] = None
    features: BrandFeatures = Field(default_factory=BrandFeatures)


class BrandContact(CamelModel):
    email: Optional[str] = None
    phone: Optional[str] = None
    address: PostalAddress = Field(default_factory=PostalAddress)


class BrandLimits(CamelModel):
    """Quota caps; null means unlimited."""

    businesses: Optional[int] = Field(10, ge=0)
    users: Optional[int] = Field(50, ge=0)
    forms: Optional[int] = Field(100, ge=0)


class BrandDocument(CamelModel):
    name: str = Field(..., max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    organization_id: str
    logo: Optional[str] = None
    brand_guidelines: BrandGuidelines = Field(default_factory=BrandGuidelines)
    settings: BrandSettings = Field(default_factory=BrandSettings)
    contact: BrandContact = Field(default_factory=BrandContact)
    limits: BrandLimits = Field(default_factory=BrandLimits)
    is_active: bool = True


class BrandResponse(BrandDocument):
    id: str
    created_at: UTCDateTime
    updated_at: UTCDateTime
    business_count: Optional[int] = None

    @classmethod
    def from_entity(cls, brand, business_count=None) -> "BrandResponse":
        response = cls.model_validate(brand)
        response.business_count = business_count
        return response
