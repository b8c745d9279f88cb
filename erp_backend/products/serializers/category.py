# products/serializers/category.py

from rest_framework import serializers

from products.models import Category


class CategorySerializer(serializers.ModelSerializer):
    """
    Category of a company's catalogue.

    Rules:
    - names are unique per company, ignoring case and surrounding spaces
    - a category cannot move to another company
    - product_count comes from the viewset annotation
    """

    name = serializers.CharField(required=True, allow_blank=False, max_length=255)
    product_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Category
        fields = ["id", "company", "name", "description", "product_count", "created_at"]
        read_only_fields = ["id", "product_count", "created_at"]

    def validate_name(self, value: str):
        name = (value or "").strip()
        if not name:
            raise serializers.ValidationError("name cannot be blank")
        return name

    def validate(self, attrs):
        company = attrs.get("company")
        if self.instance is not None:
            if company is not None and company.pk != self.instance.company_id:
                raise serializers.ValidationError({"company": "Category company cannot be changed"})
            company = self.instance.company

        name = attrs.get("name")
        if company is not None and name:
            clash = Category.objects.filter(company=company, name__iexact=name)
            if self.instance is not None:
                clash = clash.exclude(pk=self.instance.pk)
            if clash.exists():
                raise serializers.ValidationError({"name": f"Category {name} already exists"})

        return attrs
