import enum
from sqlalchemy import Column, String, Boolean, DateTime, Text
from org_hierarchy.database import Base, DocumentJSON


class SubscriptionPlan(str, enum.Enum):
    basic = "basic"
    professional = "professional"
    enterprise = "enterprise"


class SubscriptionStatus(str, enum.Enum):
    active = "active"
    suspended = "suspended"
    cancelled = "cancelled"
    trial = "trial"


class BillingCycle(str, enum.Enum):
    monthly = "monthly"
    yearly = "yearly"


class Organization(Base):
    """Top-level tenant. Owns brands and businesses."""

    __tablename__ = "organizations"

    id = Column(String(36), primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    domain = Column(String(255), unique=True, index=True)
    logo = Column(String(500))

    settings = Column(DocumentJSON, nullable=False, default=dict)
    contact = Column(DocumentJSON, nullable=False, default=dict)
    subscription = Column(DocumentJSON, nullable=False, default=dict)
    limits = Column(DocumentJSON, nullable=False, default=dict)

    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<Organization {self.id}: {self.name}>"
