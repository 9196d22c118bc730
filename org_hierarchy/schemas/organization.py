from datetime import datetime
from typing import Optional

from pydantic import Field

from org_hierarchy.schemas.common import CamelModel, PostalAddress
from org_hierarchy.schemas.types import UTCDateTime


class OrganizationFeatures(CamelModel):
    multi_brand: bool = False
    white_label: bool = False
    custom_domain: bool = False


class OrganizationSettings(CamelModel):
    timezone: str = "UTC"
    currency: str = "USD"
    language: str = "en"
    features: OrganizationFeatures = Field(default_factory=OrganizationFeatures)


class OrganizationContact(CamelModel):
    email: Optional[str] = None
    phone: Optional[str] = None
    address: PostalAddress = Field(default_factory=PostalAddress)


class OrganizationSubscription(CamelModel):
    plan: str = "basic"
    status: str = "trial"
    trial_ends_at: Optional[datetime] = None
    billing_cycle: str = "monthly"


class OrganizationLimits(CamelModel):
    """Quota caps; null means unlimited."""

    brands: Optional[int] = Field(1, ge=0)
    businesses: Optional[int] = Field(5, ge=0)
    users: Optional[int] = Field(10, ge=0)
    storage: Optional[int] = Field(1024, ge=0)  # MB


class OrganizationDocument(CamelModel):
    """Writable organization fields, with defaults applied."""

    name: str = Field(..., max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    domain: Optional[str] = None
    logo: Optional[str] = None
    settings: OrganizationSettings = Field(default_factory=OrganizationSettings)
    contact: OrganizationContact = Field(default_factory=OrganizationContact)
    subscription: OrganizationSubscription = Field(default_factory=OrganizationSubscription)
    limits: OrganizationLimits = Field(default_factory=OrganizationLimits)
    is_active: bool = True


class OrganizationResponse(OrganizationDocument):
    id: str
    created_at: UTCDateTime
    updated_at: UTCDateTime
    brand_count: Optional[int] = None
    business_count: Optional[int] = None

    @classmethod
    def from_entity(cls, org, brand_count=None, business_count=None) -> "OrganizationResponse":
        response = cls.model_validate(org)
        response.brand_count = brand_count
        response.business_count = business_count
        return response
