"""Brand payload factory. ``organization_id`` must be supplied."""

import factory
from faker import Faker

fake = Faker()


class BrandFactory(factory.Factory):
    class Meta:
        model = dict

    name = factory.Sequence(lambda n: f"Brand {n:03d}")
    description = factory.LazyFunction(fake.bs)
    organization_id = None
    brand_guidelines = factory.LazyFunction(
        lambda: {"primary_color": fake.hex_color(), "font_family": "Inter"}
    )
