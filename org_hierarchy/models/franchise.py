from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from org_hierarchy.database import Base, DocumentJSON

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class Franchise(Base):
    """A physical location of a business."""

    __tablename__ = "franchises"

    id = Column(String(36), primary_key=True, index=True)
    business_id = Column(String(36), ForeignKey("businesses.id"), nullable=False, index=True)
    manager_id = Column(String(64), nullable=True, index=True)
    name = Column(String(100), nullable=False, index=True)

    address = Column(DocumentJSON, nullable=False)
    contact = Column(DocumentJSON, nullable=False, default=dict)
    settings = Column(DocumentJSON, nullable=False, default=dict)
    capacity = Column(DocumentJSON, nullable=False, default=dict)

    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<Franchise {self.id}: {self.name}>"
