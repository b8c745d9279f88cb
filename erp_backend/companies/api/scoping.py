# companies/api/scoping.py

"""
Company scoping for API views.

Every ERP record is company-owned, so list and report endpoints take the owning
company as ?company=<uuid>.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter

from companies.models import Company
from core.exceptions import NotFoundError, ValidationError

COMPANY_PARAMETER = OpenApiParameter(
    name="company",
    type=OpenApiTypes.UUID,
    location=OpenApiParameter.QUERY,
    required=True,
    description="Owning company id.",
)


def resolve_company(value) -> Company:
    if value in (None, ""):
        raise ValidationError("company is required")

    try:
        return Company.objects.get(pk=str(value).strip())
    except (Company.DoesNotExist, DjangoValidationError, ValueError) as exc:
        raise NotFoundError(f"Company {value} not found") from exc


def company_from_request(request) -> Company:
    return resolve_company(request.query_params.get("company"))
