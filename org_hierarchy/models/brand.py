from sqlalchemy import Column, String, Boolean, DateTime, Text, ForeignKey
from org_hierarchy.database import Base, DocumentJSON


class Brand(Base):
    """Optional grouping of businesses inside an organization."""

    __tablename__ = "brands"

    id = Column(String(36), primary_key=True, index=True)
    organization_id = Column(String(36), ForeignKey("organizations.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(Text)
    logo = Column(String(500))

    brand_guidelines = Column(DocumentJSON, nullable=False, default=dict)
    settings = Column(DocumentJSON, nullable=False, default=dict)
    contact = Column(DocumentJSON, nullable=False, default=dict)
    limits = Column(DocumentJSON, nullable=False, default=dict)

    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<Brand {self.id}: {self.name}>"
