# products/views/product.py

"""
PRODUCT VIEWSET

Product master data (CRUD without delete: products are deactivated).

Filtering:
    /api/products/products/?company=<uuid>&category=<uuid>&is_active=true
    /api/products/products/?search=<name or sku>
"""

from django.db.models import Q, Sum
from django.db.models.functions import Coalesce
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import viewsets

from products.models import Product
from products.serializers import ProductSerializer


@extend_schema(
    tags=["products"],
    parameters=[
        OpenApiParameter(
            name="search",
            type=str,
            required=False,
            description="Case-insensitive match on name or SKU.",
        ),
    ],
)
class ProductViewSet(viewsets.ModelViewSet):
    serializer_class = ProductSerializer
    filterset_fields = ["company", "category", "is_active"]
    http_method_names = ["get", "post", "patch", "head", "options"]

    def get_queryset(self):
        qs = (
            Product.objects.select_related("category")
            .annotate(total_stock=Coalesce(Sum("inventory_records__quantity"), 0))
            .order_by("name")
        )

        search = (self.request.query_params.get("search") or "").strip()
        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(sku__icontains=search))

        return qs
