from datetime import datetime
from typing import List, Optional

from pydantic import Field

from org_hierarchy.schemas.common import CamelModel, GeoAddress
from org_hierarchy.schemas.types import UTCDateTime


class BusinessContact(CamelModel):
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    address: GeoAddress = Field(default_factory=GeoAddress)


class NotificationSettings(CamelModel):
    email: bool = True
    sms: bool = False
    push: bool = False


class BusinessFeatures(CamelModel):
    custom_forms: bool = False
    custom_reports: bool = False
    ai_insights: bool = False
    integrations: bool = False


class BusinessSettings(CamelModel):
    timezone: str = "UTC"
    currency: str = "USD"
    language: str = "en"
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    features: BusinessFeatures = Field(default_factory=BusinessFeatures)


class BusinessLimits(CamelModel):
    """Plan quota caps; null means unlimited."""

    franchises: Optional[int] = Field(1, ge=0)
    forms: Optional[int] = Field(5, ge=0)
    submissions: Optional[int] = Field(100, ge=0)
    staff: Optional[int] = Field(5, ge=0)
    storage: Optional[int] = Field(1024, ge=0)  # MB


class BusinessSubscription(CamelModel):
    plan: str = "basic"
    status: str = "trial"
    trial_ends_at: Optional[datetime] = None
    features: List[str] = Field(default_factory=list)
    limits: BusinessLimits = Field(default_factory=BusinessLimits)


class BusinessDocument(CamelModel):
    name: str = Field(..., max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    organization_id: str
    brand_id: Optional[str] = None
    owner_id: str
    industry: str
    business_type: str = "single_location"
    contact: BusinessContact = Field(default_factory=BusinessContact)
    settings: BusinessSettings = Field(default_factory=BusinessSettings)
    subscription: BusinessSubscription = Field(default_factory=BusinessSubscription)
    is_active: bool = True


class BusinessResponse(BusinessDocument):
    id: str
    brand_name: Optional[str] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime
    franchise_count: Optional[int] = None

    @classmethod
    def from_entity(cls, business, brand_name=None, franchise_count=None) -> "BusinessResponse":
        response = cls.model_validate(business)
        response.brand_name = brand_name
        response.franchise_count = franchise_count
        return response
