"""
PATH: accounting/api/views/reports.py

FINANCIAL REPORT API VIEWS (READ-ONLY)

- GET /api/accounting/trial-balance/?company=<uuid>[&as_of=YYYY-MM-DD]
- GET /api/accounting/balance-sheet/?company=<uuid>[&as_of=YYYY-MM-DD]
- GET /api/accounting/profit-and-loss/?company=<uuid>[&date_from=...&date_to=...]

Without dates the reports read running balances; with dates they aggregate
posted journal lines by entry_date.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.services.balance_sheet_service import get_balance_sheet
from accounting.services.profit_and_loss_service import get_profit_loss_statement
from accounting.services.trial_balance_service import get_trial_balance
from companies.api.scoping import COMPANY_PARAMETER, company_from_request


def _date_param(name: str, description: str) -> OpenApiParameter:
    return OpenApiParameter(
        name=name,
        type=str,
        location=OpenApiParameter.QUERY,
        required=False,
        description=description,
    )


AS_OF_PARAMETER = _date_param("as_of", "Inclusive snapshot date (YYYY-MM-DD).")


@extend_schema(tags=["accounting"], parameters=[COMPANY_PARAMETER, AS_OF_PARAMETER], responses={200: dict})
class TrialBalanceView(APIView):
    def get(self, request):
        company = company_from_request(request)
        data = get_trial_balance(company=company, as_of=request.query_params.get("as_of"))
        return Response(data, status=status.HTTP_200_OK)


@extend_schema(tags=["accounting"], parameters=[COMPANY_PARAMETER, AS_OF_PARAMETER], responses={200: dict})
class BalanceSheetView(APIView):
    def get(self, request):
        company = company_from_request(request)
        data = get_balance_sheet(company=company, as_of=request.query_params.get("as_of"))
        return Response(data, status=status.HTTP_200_OK)


@extend_schema(
    tags=["accounting"],
    parameters=[
        COMPANY_PARAMETER,
        _date_param("date_from", "Period start (YYYY-MM-DD, inclusive)."),
        _date_param("date_to", "Period end (YYYY-MM-DD, inclusive)."),
    ],
    responses={200: dict},
)
class ProfitAndLossView(APIView):
    def get(self, request):
        company = company_from_request(request)
        data = get_profit_loss_statement(
            company=company,
            date_from=request.query_params.get("date_from"),
            date_to=request.query_params.get("date_to"),
        )
        return Response(data, status=status.HTTP_200_OK)
