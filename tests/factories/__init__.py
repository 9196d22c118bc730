"""Test factories for generating request payloads."""

from tests.factories.organization import OrganizationFactory
from tests.factories.brand import BrandFactory
from tests.factories.business import BusinessFactory
from tests.factories.franchise import FranchiseFactory, open_all_week

__all__ = [
    "OrganizationFactory",
    "BrandFactory",
    "BusinessFactory",
    "FranchiseFactory",
    "open_all_week",
]
