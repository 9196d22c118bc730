"""
Business payload factory.

Usage:
    payload = BusinessFactory(organization_id=org["id"])
    payload = BusinessFactory(organization_id=org["id"], brand_id=brand["id"])
"""

import factory
from faker import Faker

fake = Faker()


class BusinessFactory(factory.Factory):
    class Meta:
        model = dict

    name = factory.LazyFunction(lambda: fake.company()[:100])
    organization_id = None
    owner_id = factory.LazyFunction(lambda: f"user-{fake.uuid4()[:8]}")
    industry = factory.LazyFunction(
        lambda: fake.random_element(["restaurant", "retail", "healthcare", "fitness"])
    )
    business_type = "multi_location"
    contact = factory.LazyFunction(
        lambda: {
            "email": fake.company_email(),
            "website": fake.url(),
            "address": {"city": fake.city(), "coordinates": [float(fake.longitude()), float(fake.latitude())]},
        }
    )