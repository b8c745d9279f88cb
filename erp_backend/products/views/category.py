# products/views/category.py

from django.db.models import Count
from drf_spectacular.utils import extend_schema
from rest_framework import viewsets

from products.models import Category
from products.serializers import CategorySerializer


@extend_schema(tags=["products"])
class CategoryViewSet(viewsets.ModelViewSet):
    serializer_class = CategorySerializer
    queryset = Category.objects.annotate(product_count=Count("products")).order_by("name")
    filterset_fields = ["company"]
    http_method_names = ["get", "post", "patch", "head", "options"]
