# PATH: accounting/api/view.py

"""
PATH: accounting/api/view.py

ACCOUNTING API VIEWSETS

- Accounts: list / retrieve / create (with opening balance) / partial update
- Journal entries: list / retrieve / create (draft) + post / reverse actions

Writes always go through accounting.services; the viewsets only translate
HTTP payloads. Service errors are mapped by core.api.exception_handler.

Filtering (django-filter):
    /api/accounting/accounts/?company=<uuid>&account_type=asset
    /api/accounting/journal-entries/?company=<uuid>&status=posted&date_from=2024-01-01
"""

from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from accounting.api.filters import JournalEntryFilter
from accounting.api.serializers import (
    AccountCreateSerializer,
    AccountSerializer,
    AccountUpdateSerializer,
    JournalEntryCreateSerializer,
    JournalEntryReverseSerializer,
    JournalEntrySerializer,
)
from accounting.models import Account, JournalEntry
from accounting.services.account_service import create_account, update_account
from accounting.services.journal_entry_service import create_journal_entry
from accounting.services.posting import post_journal_entry, reverse_journal_entry


@extend_schema(tags=["accounting"])
class AccountViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Chart of accounts. Accounts are deactivated (is_active=false), never deleted.
    """

    serializer_class = AccountSerializer
    queryset = Account.objects.select_related("parent").order_by("code")
    http_method_names = ["get", "post", "patch", "head", "options"]
    filterset_fields = ["company", "account_type", "is_active", "parent"]

    @extend_schema(request=AccountCreateSerializer, responses={201: AccountSerializer})
    def create(self, request):
        serializer = AccountCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        account = create_account(**serializer.validated_data)
        return Response(AccountSerializer(account).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=AccountUpdateSerializer, responses={200: AccountSerializer})
    def partial_update(self, request, pk=None):
        account = self.get_object()

        serializer = AccountUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        account = update_account(account, **serializer.validated_data)
        return Response(AccountSerializer(account).data, status=status.HTTP_200_OK)


@extend_schema(tags=["accounting"])
class JournalEntryViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Journal entries. Created as draft; balances move only on post.
    """

    serializer_class = JournalEntrySerializer
    queryset = (
        JournalEntry.objects.select_related("company", "reversed_by")
        .prefetch_related("line_items__account")
        .order_by("-entry_date", "-created_at")
    )
    http_method_names = ["get", "post", "head", "options"]
    filterset_class = JournalEntryFilter

    @extend_schema(request=JournalEntryCreateSerializer, responses={201: JournalEntrySerializer})
    def create(self, request):
        serializer = JournalEntryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        entry = create_journal_entry(**serializer.validated_data)
        return Response(JournalEntrySerializer(entry).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: JournalEntrySerializer})
    @action(detail=True, methods=["post"], url_path="post", url_name="post")
    def post_entry(self, request, pk=None):
        entry = post_journal_entry(self.get_object())
        return Response(JournalEntrySerializer(entry).data, status=status.HTTP_200_OK)

    @extend_schema(request=JournalEntryReverseSerializer, responses={201: JournalEntrySerializer})
    @action(detail=True, methods=["post"], url_path="reverse", url_name="reverse")
    def reverse_entry(self, request, pk=None):
        original = self.get_object()

        serializer = JournalEntryReverseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        reversal = reverse_journal_entry(original, **serializer.validated_data)
        return Response(JournalEntrySerializer(reversal).data, status=status.HTTP_201_CREATED)
