from typing import Dict, Optional

from org_hierarchy.schemas.common import CamelModel


class UsageResponse(CamelModel):
    """Active child counts against the configured caps of one entity."""

    entity_id: str
    limits: Dict[str, Optional[int]]
    usage: Dict[str, int]
    within_limits: Dict[str, bool]
