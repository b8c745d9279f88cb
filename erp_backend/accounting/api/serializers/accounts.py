# accounting/api/serializers/accounts.py

from rest_framework import serializers

from accounting.models.account import Account
from companies.models import Company


class AccountSerializer(serializers.ModelSerializer):
    """
    Read serializer. signed_balance is current_balance presented debit-positive.
    """

    signed_balance = serializers.DecimalField(max_digits=16, decimal_places=2, read_only=True)
    parent_code = serializers.CharField(source="parent.code", read_only=True, default=None)

    class Meta:
        model = Account
        fields = (
            "id",
            "company",
            "code",
            "name",
            "account_type",
            "subtype",
            "parent",
            "parent_code",
            "is_active",
            "opening_balance",
            "current_balance",
            "signed_balance",
            "description",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class AccountCreateSerializer(serializers.Serializer):
    company = serializers.PrimaryKeyRelatedField(queryset=Company.objects.all())
    code = serializers.CharField(max_length=20)
    name = serializers.CharField(max_length=150)
    account_type = serializers.ChoiceField(choices=Account.ACCOUNT_TYPES)
    subtype = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    parent = serializers.PrimaryKeyRelatedField(
        queryset=Account.objects.all(), required=False, allow_null=True, default=None
    )
    opening_balance = serializers.DecimalField(
        max_digits=16, decimal_places=2, required=False, default=0
    )
    description = serializers.CharField(required=False, allow_blank=True, default="")
    entry_date = serializers.DateField(required=False, allow_null=True, default=None)
    created_by = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")


class AccountUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150, required=False)
    subtype = serializers.CharField(max_length=50, required=False, allow_blank=True)
    parent = serializers.PrimaryKeyRelatedField(
        queryset=Account.objects.all(), required=False, allow_null=True
    )
    description = serializers.CharField(required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)
