# accounting/api/serializers/__init__.py

from accounting.api.serializers.accounts import (
    AccountCreateSerializer,
    AccountSerializer,
    AccountUpdateSerializer,
)
from accounting.api.serializers.journal_entries import (
    JournalEntryCreateSerializer,
    JournalEntryReverseSerializer,
    JournalEntrySerializer,
    JournalLineInputSerializer,
    JournalLineItemSerializer,
)

__all__ = [
    "AccountSerializer",
    "AccountCreateSerializer",
    "AccountUpdateSerializer",
    "JournalEntrySerializer",
    "JournalLineItemSerializer",
    "JournalLineInputSerializer",
    "JournalEntryCreateSerializer",
    "JournalEntryReverseSerializer",
]
