# accounting/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

# Canonical ViewSets live in accounting/api/view.py (singular) in this project.
# We import directly to avoid circular imports through views/__init__.py.
from accounting.api.view import AccountViewSet, JournalEntryViewSet
from accounting.api.views.reports import BalanceSheetView, ProfitAndLossView, TrialBalanceView

router = DefaultRouter()
router.register("accounts", AccountViewSet, basename="account")
router.register("journal-entries", JournalEntryViewSet, basename="journal-entry")

urlpatterns = [
    # Router endpoints
    path("", include(router.urls)),
    # Reports
    path("trial-balance/", TrialBalanceView.as_view(), name="trial-balance"),
    path("balance-sheet/", BalanceSheetView.as_view(), name="balance-sheet"),
    path("profit-and-loss/", ProfitAndLossView.as_view(), name="profit-and-loss"),
]
