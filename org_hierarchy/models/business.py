import enum
from sqlalchemy import Column, String, Boolean, DateTime, Text, ForeignKey
from org_hierarchy.database import Base, DocumentJSON


class Industry(str, enum.Enum):
    restaurant = "restaurant"
    hotel = "hotel"
    retail = "retail"
    healthcare = "healthcare"
    education = "education"
    fitness = "fitness"
    beauty = "beauty"
    automotive = "automotive"
    real_estate = "real_estate"
    other = "other"


class BusinessType(str, enum.Enum):
    single_location = "single_location"
    multi_location = "multi_location"
    franchise = "franchise"
    chain = "chain"


class Business(Base):
    """A business of an organization, optionally grouped under a brand."""

    __tablename__ = "businesses"

    id = Column(String(36), primary_key=True, index=True)
    organization_id = Column(String(36), ForeignKey("organizations.id"), nullable=False, index=True)
    brand_id = Column(String(36), ForeignKey("brands.id"), nullable=True, index=True)
    owner_id = Column(String(64), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    industry = Column(String(32), nullable=False)
    business_type = Column(String(32), nullable=False, default=BusinessType.single_location.value)

    contact = Column(DocumentJSON, nullable=False, default=dict)
    settings = Column(DocumentJSON, nullable=False, default=dict)
    subscription = Column(DocumentJSON, nullable=False, default=dict)

    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<Business {self.id}: {self.name} ({self.industry})>"
