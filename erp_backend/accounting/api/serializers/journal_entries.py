# accounting/api/serializers/journal_entries.py

from rest_framework import serializers

from accounting.models import Account, JournalEntry, JournalLineItem
from companies.models import Company


class JournalLineItemSerializer(serializers.ModelSerializer):
    account_code = serializers.CharField(source="account.code", read_only=True)
    account_name = serializers.CharField(source="account.name", read_only=True)
    debit_amount = serializers.DecimalField(max_digits=16, decimal_places=2, read_only=True)
    credit_amount = serializers.DecimalField(max_digits=16, decimal_places=2, read_only=True)

    class Meta:
        model = JournalLineItem
        fields = (
            "id",
            "line_number",
            "account",
            "account_code",
            "account_name",
            "description",
            "side",
            "amount",
            "debit_amount",
            "credit_amount",
        )
        read_only_fields = fields


class JournalEntrySerializer(serializers.ModelSerializer):
    line_items = JournalLineItemSerializer(many=True, read_only=True)

    class Meta:
        model = JournalEntry
        fields = (
            "id",
            "company",
            "entry_number",
            "entry_date",
            "reference_type",
            "reference_id",
            "description",
            "total_debit",
            "total_credit",
            "status",
            "created_by",
            "posted_at",
            "reversed_by",
            "line_items",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class JournalLineInputSerializer(serializers.Serializer):
    """
    One input line: exactly one of debit_amount / credit_amount is positive.
    The one-sided rule itself is enforced by the service.
    """

    account = serializers.PrimaryKeyRelatedField(queryset=Account.objects.all())
    debit_amount = serializers.DecimalField(
        max_digits=16, decimal_places=2, required=False, default=0, min_value=0
    )
    credit_amount = serializers.DecimalField(
        max_digits=16, decimal_places=2, required=False, default=0, min_value=0
    )
    description = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


class JournalEntryCreateSerializer(serializers.Serializer):
    company = serializers.PrimaryKeyRelatedField(queryset=Company.objects.all())
    entry_date = serializers.DateField()
    description = serializers.CharField()
    reference_type = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    reference_id = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    created_by = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    line_items = JournalLineInputSerializer(many=True)


class JournalEntryReverseSerializer(serializers.Serializer):
    reverse_date = serializers.DateField()
    reason = serializers.CharField()
    created_by = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
