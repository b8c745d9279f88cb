# companies/api/views.py

from drf_spectacular.utils import extend_schema
from rest_framework import viewsets

from companies.api.serializers import CompanySerializer
from companies.models import Company


@extend_schema(tags=["companies"])
class CompanyViewSet(viewsets.ModelViewSet):
    """
    Company master data. Companies are deactivated, never deleted.
    """

    serializer_class = CompanySerializer
    queryset = Company.objects.all().order_by("name")
    http_method_names = ["get", "post", "patch", "head", "options"]
    filterset_fields = ["is_active"]
