# accounting/api/filters.py

import django_filters

from accounting.models import JournalEntry


class JournalEntryFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name="entry_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="entry_date", lookup_expr="lte")
    account = django_filters.NumberFilter(field_name="line_items__account", distinct=True)

    class Meta:
        model = JournalEntry
        fields = ["company", "status", "reference_type", "reference_id"]
