# accounting/api/views/__init__.py

"""
accounting.api.views package

Important:
- ViewSets are defined in accounting.api.view (singular) in this codebase.
- Do NOT import accounting.api.urls from here to avoid circular imports.
"""

from accounting.api.view import AccountViewSet, JournalEntryViewSet
from accounting.api.views.reports import BalanceSheetView, ProfitAndLossView, TrialBalanceView

__all__ = [
    "AccountViewSet",
    "JournalEntryViewSet",
    "TrialBalanceView",
    "BalanceSheetView",
    "ProfitAndLossView",
]
