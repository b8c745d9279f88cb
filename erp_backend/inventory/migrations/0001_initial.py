import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("companies", "0001_initial"),
        ("products", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Warehouse",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("warehouse_code", models.CharField(max_length=32)),
                ("name", models.CharField(max_length=255)),
                ("address", models.JSONField(blank=True, default=dict)),
                ("manager_name", models.CharField(blank=True, default="", max_length=255)),
                ("contact_phone", models.CharField(blank=True, default="", max_length=32)),
                ("contact_email", models.EmailField(blank=True, default="", max_length=254)),
                ("capacity", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "warehouse_type",
                    models.CharField(
                        choices=[
                            ("main", "Main"),
                            ("branch", "Branch"),
                            ("virtual", "Virtual"),
                            ("consignment", "Consignment"),
                        ],
                        default="main",
                        max_length=16,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="warehouses",
                        to="companies.company",
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("company", "warehouse_code"),
                        name="uniq_warehouse_company_code",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="InventoryRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.IntegerField(default=0)),
                ("reserved_quantity", models.PositiveIntegerField(default=0)),
                ("last_updated", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="inventory_records",
                        to="companies.company",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="inventory_records",
                        to="products.product",
                    ),
                ),
                (
                    "warehouse",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="inventory_records",
                        to="inventory.warehouse",
                    ),
                ),
            ],
            options={
                "ordering": ["-last_updated"],
                "indexes": [
                    models.Index(fields=["company", "warehouse"], name="inv_company_warehouse_idx"),
                    models.Index(fields=["company", "quantity"], name="inv_company_quantity_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("product", "warehouse"),
                        name="uniq_inventory_product_warehouse",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="InventoryTransaction",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "transaction_type",
                    models.CharField(
                        choices=[
                            ("in", "Stock In"),
                            ("out", "Stock Out"),
                            ("transfer", "Transfer Out"),
                            ("adjustment", "Adjustment"),
                        ],
                        max_length=16,
                    ),
                ),
                ("quantity", models.IntegerField()),
                ("quantity_delta", models.IntegerField()),
                ("resulting_quantity", models.IntegerField()),
                ("unit_cost", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("reference_type", models.CharField(blank=True, default="", max_length=50)),
                ("reference_id", models.CharField(blank=True, default="", max_length=100)),
                ("batch_number", models.CharField(blank=True, default="", max_length=100)),
                ("expiry_date", models.DateField(blank=True, null=True)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_by", models.CharField(blank=True, default="", max_length=150)),
                ("transaction_date", models.DateField(default=django.utils.timezone.localdate)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="inventory_transactions",
                        to="companies.company",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="inventory_transactions",
                        to="products.product",
                    ),
                ),
                (
                    "warehouse",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="inventory_transactions",
                        to="inventory.warehouse",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(fields=["company", "created_at"], name="invtx_company_created_idx"),
                    models.Index(fields=["company", "transaction_date"], name="invtx_company_date_idx"),
                    models.Index(fields=["product", "warehouse", "created_at"], name="invtx_pair_created_idx"),
                    models.Index(fields=["transaction_type"], name="invtx_type_idx"),
                    models.Index(fields=["reference_type", "reference_id"], name="invtx_reference_idx"),
                ],
            },
        ),
    ]
