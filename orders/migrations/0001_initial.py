import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("core", "0001_initial"),
        ("sourcing", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PurchaseOrder",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("buyer_company_name", models.CharField(blank=True, default="", max_length=255)),
                ("buyer_contact_name", models.CharField(blank=True, default="", max_length=255)),
                ("buyer_email", models.CharField(blank=True, default="", max_length=254)),
                ("buyer_phone", models.CharField(blank=True, default="", max_length=64)),
                ("buyer_address_type", models.CharField(blank=True, default="", max_length=64)),
                ("buyer_country", models.CharField(blank=True, default="", max_length=128)),
                ("buyer_state", models.CharField(blank=True, default="", max_length=128)),
                ("buyer_city", models.CharField(blank=True, default="", max_length=128)),
                ("buyer_address", models.TextField(blank=True, default="")),
                ("seller_company_name", models.CharField(blank=True, default="", max_length=255)),
                ("seller_contact_name", models.CharField(blank=True, default="", max_length=255)),
                ("seller_email", models.CharField(blank=True, default="", max_length=254)),
                ("seller_phone", models.CharField(blank=True, default="", max_length=64)),
                ("seller_address_type", models.CharField(blank=True, default="", max_length=64)),
                ("seller_country", models.CharField(blank=True, default="", max_length=128)),
                ("seller_state", models.CharField(blank=True, default="", max_length=128)),
                ("seller_city", models.CharField(blank=True, default="", max_length=128)),
                ("seller_address", models.TextField(blank=True, default="")),
                ("delivery_contact_name", models.CharField(blank=True, default="", max_length=255)),
                ("delivery_phone", models.CharField(blank=True, default="", max_length=64)),
                ("delivery_address_type", models.CharField(blank=True, default="", max_length=64)),
                ("delivery_country", models.CharField(blank=True, default="", max_length=128)),
                ("delivery_state", models.CharField(blank=True, default="", max_length=128)),
                ("delivery_city", models.CharField(blank=True, default="", max_length=128)),
                ("delivery_address", models.TextField(blank=True, default="")),
                ("discount_percentage", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("additional_charges", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("tax_percentage", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("sum_of_sub_total", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("discount_amount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("tax_amount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("total_amount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("po_number", models.CharField(max_length=32)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("DRAFT", "Draft"),
                            ("PENDING", "Pending"),
                            ("APPROVED", "Approved"),
                            ("REJECTED", "Rejected"),
                        ],
                        default="DRAFT",
                        max_length=16,
                    ),
                ),
                ("po_issued_date", models.DateField()),
                ("expected_delivery_date", models.DateField()),
                ("currency", models.CharField(default="USD", max_length=8)),
                ("payment_terms", models.TextField(blank=True, default="")),
                ("notes", models.TextField(blank=True, default="")),
                (
                    "buyer_company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="core.company",
                    ),
                ),
                (
                    "seller_company",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="core.company",
                    ),
                ),
                (
                    "contract",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="purchase_orders",
                        to="sourcing.contract",
                    ),
                ),
                (
                    "quotation",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="purchase_orders",
                        to="sourcing.quotation",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(fields=["buyer_company", "status"], name="orders_po_buyer_idx"),
                    models.Index(fields=["seller_company", "status"], name="orders_po_seller_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PurchaseOrderItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("serial_number", models.PositiveIntegerField()),
                ("product_name", models.CharField(max_length=255)),
                ("product_description", models.TextField(blank=True, default="")),
                ("sku", models.CharField(blank=True, default="", max_length=128)),
                ("hsn_code", models.CharField(blank=True, default="", max_length=64)),
                ("uom", models.CharField(blank=True, default="", max_length=32)),
                ("quantity", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("unit_price", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("sub_total", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                (
                    "purchase_order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="orders.purchaseorder",
                    ),
                ),
            ],
            options={
                "ordering": ["serial_number"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="SalesOrder",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("buyer_company_name", models.CharField(blank=True, default="", max_length=255)),
                ("buyer_contact_name", models.CharField(blank=True, default="", max_length=255)),
                ("buyer_email", models.CharField(blank=True, default="", max_length=254)),
                ("buyer_phone", models.CharField(blank=True, default="", max_length=64)),
                ("buyer_address_type", models.CharField(blank=True, default="", max_length=64)),
                ("buyer_country", models.CharField(blank=True, default="", max_length=128)),
                ("buyer_state", models.CharField(blank=True, default="", max_length=128)),
                ("buyer_city", models.CharField(blank=True, default="", max_length=128)),
                ("buyer_address", models.TextField(blank=True, default="")),
                ("seller_company_name", models.CharField(blank=True, default="", max_length=255)),
                ("seller_contact_name", models.CharField(blank=True, default="", max_length=255)),
                ("seller_email", models.CharField(blank=True, default="", max_length=254)),
                ("seller_phone", models.CharField(blank=True, default="", max_length=64)),
                ("seller_address_type", models.CharField(blank=True, default="", max_length=64)),
                ("seller_country", models.CharField(blank=True, default="", max_length=128)),
                ("seller_state", models.CharField(blank=True, default="", max_length=128)),
                ("seller_city", models.CharField(blank=True, default="", max_length=128)),
                ("seller_address", models.TextField(blank=True, default="")),
                ("delivery_contact_name", models.CharField(blank=True, default="", max_length=255)),
                ("delivery_phone", models.CharField(blank=True, default="", max_length=64)),
                ("delivery_address_type", models.CharField(blank=True, default="", max_length=64)),
                ("delivery_country", models.CharField(blank=True, default="", max_length=128)),
                ("delivery_state", models.CharField(blank=True, default="", max_length=128)),
                ("delivery_city", models.CharField(blank=True, default="", max_length=128)),
                ("delivery_address", models.TextField(blank=True, default="")),
                ("discount_percentage", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("additional_charges", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("tax_percentage", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("sum_of_sub_total", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("discount_amount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("tax_amount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("total_amount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("so_number", models.CharField(max_length=32)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("PROCESSING", "Processing"),
                            ("SHIPPED", "Shipped"),
                            ("DELIVERED", "Delivered"),
                            ("CANCELLED", "Cancelled"),
                        ],
                        default="PENDING",
                        max_length=16,
                    ),
                ),
                ("so_created_date", models.DateField()),
                ("planned_ship_date", models.DateField()),
                ("currency", models.CharField(default="USD", max_length=8)),
                ("payment_terms", models.TextField(blank=True, default="")),
                ("notes", models.TextField(blank=True, default="")),
                (
                    "seller_company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="core.company",
                    ),
                ),
                (
                    "buyer_company",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="core.company",
                    ),
                ),
                (
                    "purchase_order",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="sales_orders",
                        to="orders.purchaseorder",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(fields=["seller_company", "status"], name="orders_so_seller_idx"),
                    models.Index(fields=["buyer_company", "status"], name="orders_so_buyer_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="SalesOrderItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("serial_number", models.PositiveIntegerField()),
                ("product_name", models.CharField(max_length=255)),
                ("product_description", models.TextField(blank=True, default="")),
                ("sku", models.CharField(blank=True, default="", max_length=128)),
                ("hsn_code", models.CharField(blank=True, default="", max_length=64)),
                ("uom", models.CharField(blank=True, default="", max_length=32)),
                ("quantity", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("unit_price", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("sub_total", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                (
                    "sales_order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="orders.salesorder",
                    ),
                ),
            ],
            options={
                "ordering": ["serial_number"],
                "abstract": False,
            },
        ),
    ]
