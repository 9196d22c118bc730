"""
Validation of entity documents before they reach the store.

Each ``validate_*`` function takes a full document (a create payload, or the
stored document merged with an update) and returns a ``ValidationResult``:
either the parsed schema with defaults applied, or the reasons it was
rejected. Nothing here touches the database; parent existence checks live in
the services.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from org_hierarchy.models.business import BusinessType, Industry
from org_hierarchy.models.organization import BillingCycle, SubscriptionPlan, SubscriptionStatus
from org_hierarchy.schemas.brand import BrandDocument
from org_hierarchy.schemas.business import BusinessDocument
from org_hierarchy.schemas.franchise import FranchiseDocument
from org_hierarchy.schemas.organization import OrganizationDocument
from org_hierarchy.services.documents import camelize_keys, get_path, missing_fields

D = TypeVar("D", bound=BaseModel)

ORGANIZATION_REQUIRED = ("name", "contact.email")
BRAND_REQUIRED = ("name", "organizationId")
BUSINESS_REQUIRED = ("name", "organizationId", "ownerId", "industry", "contact.email")
FRANCHISE_REQUIRED = (
    "name",
    "businessId",
    "address.street",
    "address.city",
    "address.state",
    "address.country",
    "address.zipCode",
    "address.coordinates",
)

INDUSTRIES = tuple(item.value for item in Industry)
BUSINESS_TYPES = tuple(item.value for item in BusinessType)
PLANS = tuple(item.value for item in SubscriptionPlan)
STATUSES = tuple(item.value for item in SubscriptionStatus)
BILLING_CYCLES = tuple(item.value for item in BillingCycle)


@dataclass
class ValidationResult(Generic[D]):
    """Outcome of validating one document."""

    value: Optional[D] = None
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str:
        return "; ".join(self.errors)


def _normalize(payload: Mapping[str, Any]) -> dict:
    document = camelize_keys(dict(payload))
    if isinstance(document.get("name"), str):
        document["name"] = document["name"].strip()
    return document


def _check_choice(document: Mapping[str, Any], path: str, choices, errors: List[str]) -> None:
    value = get_path(document, path)
    if value is not None and value not in choices:
        errors.append(f"{path} must be one of: {', '.join(choices)}")


def _parse(schema: Type[D], document: Mapping[str, Any]) -> ValidationResult[D]:
    try:
        return ValidationResult(value=schema.model_validate(document))
    except SchemaValidationError as exc:
        errors = []
        for error in exc.errors():
            path = ".".join(str(part) for part in error["loc"])
            errors.append(f"{path}: {error['msg']}" if path else error["msg"])
        return ValidationResult(errors=errors)


def _required_errors(document: Mapping[str, Any], required) -> List[str]:
    return [f"{path} is required" for path in missing_fields(document, required)]


def validate_organization(payload: Mapping[str, Any]) -> ValidationResult[OrganizationDocument]:
    document = _normalize(payload)
    if isinstance(document.get("domain"), str):
        document["domain"] = document["domain"].strip().lower() or None

    errors = _required_errors(document, ORGANIZATION_REQUIRED)
    _check_choice(document, "subscription.plan", PLANS, errors)
    _check_choice(document, "subscription.status", STATUSES, errors)
    _check_choice(document, "subscription.billingCycle", BILLING_CYCLES, errors)
    if errors:
        return ValidationResult(errors=errors)
    return _parse(OrganizationDocument, document)


def validate_brand(payload: Mapping[str, Any]) -> ValidationResult[BrandDocument]:
    document = _normalize(payload)
    errors = _required_errors(document, BRAND_REQUIRED)
    if errors:
        return ValidationResult(errors=errors)
    return _parse(BrandDocument, document)


def validate_business(payload: Mapping[str, Any]) -> ValidationResult[BusinessDocument]:
    document = _normalize(payload)
    if document.get("brandId") == "":
        document["brandId"] = None

    errors = _required_errors(document, BUSINESS_REQUIRED)
    _check_choice(document, "industry", INDUSTRIES, errors)
    _check_choice(document, "businessType", BUSINESS_TYPES, errors)
    _check_choice(document, "subscription.plan", PLANS, errors)
    _check_choice(document, "subscription.status", STATUSES, errors)
    if errors:
        return ValidationResult(errors=errors)
    return _parse(BusinessDocument, document)


def validate_franchise(payload: Mapping[str, Any]) -> ValidationResult[FranchiseDocument]:
    document = _normalize(payload)
    errors = _required_errors(document, FRANCHISE_REQUIRED)

    # GeoJSON object or bare [lng, lat]; the pair itself has no default
    coordinates = get_path(document, "address.coordinates")
    if isinstance(coordinates, Mapping) and coordinates.get("coordinates") is None:
        errors.append("address.coordinates.coordinates is required")
    if errors:
        return ValidationResult(errors=errors)
    return _parse(FranchiseDocument, document)
