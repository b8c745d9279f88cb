"""
PATH: inventory/api/views.py

INVENTORY API

- Warehouses: list / retrieve / create / partial update / deactivate (DELETE)
- Stock: current inventory snapshot (read-only)
- Transactions: log (read-only) + create
- Adjustments / transfers: POST-only commands
- Reports: valuation, movements, low stock, out of stock

Writes always go through inventory.services. Service errors are mapped by
core.api.exception_handler (insufficient stock -> 409).
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.response import Response
from rest_framework.views import APIView

from companies.api.scoping import COMPANY_PARAMETER, company_from_request
from inventory.api.filters import InventoryTransactionFilter
from inventory.api.serializers import (
    InventoryRecordSerializer,
    InventoryTransactionCreateSerializer,
    InventoryTransactionSerializer,
    StockAdjustmentSerializer,
    StockTransferResultSerializer,
    StockTransferSerializer,
    WarehouseCreateSerializer,
    WarehouseSerializer,
    WarehouseUpdateSerializer,
)
from inventory.models import InventoryRecord, InventoryTransaction, Warehouse
from inventory.services import (
    create_inventory_transaction,
    create_stock_adjustment,
    create_stock_transfer,
    create_warehouse,
    deactivate_warehouse,
    get_inventory,
    get_inventory_valuation,
    get_low_stock_products,
    get_out_of_stock_products,
    get_stock_movement_report,
    update_warehouse,
)

TRUE_VALUES = {"1", "true", "yes", "on"}


def _flag(request, name: str) -> bool:
    return str(request.query_params.get(name, "")).strip().lower() in TRUE_VALUES


def _query_param(name: str, description: str, type_=str) -> OpenApiParameter:
    return OpenApiParameter(
        name=name,
        type=type_,
        location=OpenApiParameter.QUERY,
        required=False,
        description=description,
    )


WAREHOUSE_PARAMETER = _query_param("warehouse", "Restrict to one warehouse.", OpenApiTypes.UUID)


@extend_schema(tags=["inventory"])
class WarehouseViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Warehouses. DELETE is a soft delete, refused while the warehouse holds stock.
    """

    serializer_class = WarehouseSerializer
    queryset = Warehouse.objects.all().order_by("name")
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]
    filterset_fields = ["company", "warehouse_type", "is_active"]

    @extend_schema(request=WarehouseCreateSerializer, responses={201: WarehouseSerializer})
    def create(self, request):
        serializer = WarehouseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        warehouse = create_warehouse(**serializer.validated_data)
        return Response(WarehouseSerializer(warehouse).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=WarehouseUpdateSerializer, responses={200: WarehouseSerializer})
    def partial_update(self, request, pk=None):
        warehouse = self.get_object()

        serializer = WarehouseUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        warehouse = update_warehouse(warehouse, **serializer.validated_data)
        return Response(WarehouseSerializer(warehouse).data, status=status.HTTP_200_OK)

    @extend_schema(responses={204: None})
    def destroy(self, request, pk=None):
        deactivate_warehouse(self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=["inventory"])
class InventoryRecordViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Current inventory per (product, warehouse).

    List requires ?company=<uuid>; optional search / warehouse / category and
    the low_stock / out_of_stock / negative flags.
    """

    serializer_class = InventoryRecordSerializer
    queryset = InventoryRecord.objects.select_related("product", "warehouse")

    def get_queryset(self):
        if self.action != "list":
            return super().get_queryset()

        request = self.request
        return get_inventory(
            company=company_from_request(request),
            search=request.query_params.get("search"),
            warehouse=request.query_params.get("warehouse"),
            category=request.query_params.get("category"),
            low_stock_only=_flag(request, "low_stock"),
            out_of_stock_only=_flag(request, "out_of_stock"),
            negative_stock_only=_flag(request, "negative"),
        )

    @extend_schema(
        parameters=[
            COMPANY_PARAMETER,
            _query_param("search", "Product name or SKU contains."),
            WAREHOUSE_PARAMETER,
            _query_param("category", "Product category id.", OpenApiTypes.UUID),
            _query_param("low_stock", "Only quantity below the product minimum.", bool),
            _query_param("out_of_stock", "Only quantity <= 0.", bool),
            _query_param("negative", "Only quantity < 0.", bool),
        ]
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)


@extend_schema(tags=["inventory"])
class InventoryTransactionViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Immutable inventory log. POST records a new transaction."""

    serializer_class = InventoryTransactionSerializer
    queryset = InventoryTransaction.objects.select_related("product", "warehouse").order_by(
        "-created_at"
    )
    http_method_names = ["get", "post", "head", "options"]
    filterset_class = InventoryTransactionFilter

    @extend_schema(
        request=InventoryTransactionCreateSerializer,
        responses={201: InventoryTransactionSerializer},
    )
    def create(self, request):
        serializer = InventoryTransactionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        tx = create_inventory_transaction(**serializer.validated_data)
        return Response(InventoryTransactionSerializer(tx).data, status=status.HTTP_201_CREATED)


@extend_schema(
    tags=["inventory"],
    request=StockAdjustmentSerializer,
    responses={201: InventoryTransactionSerializer},
)
class StockAdjustmentView(APIView):
    def post(self, request):
        serializer = StockAdjustmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        tx = create_stock_adjustment(**serializer.validated_data)
        return Response(InventoryTransactionSerializer(tx).data, status=status.HTTP_201_CREATED)


@extend_schema(
    tags=["inventory"],
    request=StockTransferSerializer,
    responses={201: StockTransferResultSerializer},
)
class StockTransferView(APIView):
    def post(self, request):
        serializer = StockTransferSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = create_stock_transfer(**serializer.validated_data)
        return Response(StockTransferResultSerializer(result).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["inventory"], parameters=[COMPANY_PARAMETER, WAREHOUSE_PARAMETER], responses={200: dict})
class InventoryValuationView(APIView):
    def get(self, request):
        data = get_inventory_valuation(
            company=company_from_request(request),
            warehouse=request.query_params.get("warehouse"),
        )
        return Response(data, status=status.HTTP_200_OK)


@extend_schema(
    tags=["inventory"],
    parameters=[
        COMPANY_PARAMETER,
        _query_param("date_from", "Period start (YYYY-MM-DD, inclusive)."),
        _query_param("date_to", "Period end (YYYY-MM-DD, inclusive)."),
        WAREHOUSE_PARAMETER,
    ],
    responses={200: dict},
)
class StockMovementReportView(APIView):
    def get(self, request):
        rows = get_stock_movement_report(
            company=company_from_request(request),
            date_from=request.query_params.get("date_from"),
            date_to=request.query_params.get("date_to"),
            warehouse=request.query_params.get("warehouse"),
        )
        return Response(rows, status=status.HTTP_200_OK)


@extend_schema(tags=["inventory"], parameters=[COMPANY_PARAMETER, WAREHOUSE_PARAMETER], responses={200: dict})
class LowStockReportView(APIView):
    def get(self, request):
        rows = get_low_stock_products(
            company=company_from_request(request),
            warehouse=request.query_params.get("warehouse"),
        )
        return Response(rows, status=status.HTTP_200_OK)


@extend_schema(tags=["inventory"], parameters=[COMPANY_PARAMETER, WAREHOUSE_PARAMETER], responses={200: dict})
class OutOfStockReportView(APIView):
    def get(self, request):
        rows = get_out_of_stock_products(
            company=company_from_request(request),
            warehouse=request.query_params.get("warehouse"),
        )
        return Response(rows, status=status.HTTP_200_OK)
