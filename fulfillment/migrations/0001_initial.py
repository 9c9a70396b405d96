import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("core", "0001_initial"),
        ("orders", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="DeliveryNote",
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
                ("dn_number", models.CharField(max_length=32)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("IN_TRANSIT", "In transit"),
                            ("ACKNOWLEDGED", "Acknowledged"),
                            ("DISPUTED", "Disputed"),
                            ("COMPLETED", "Completed"),
                            ("CANCELLED", "Cancelled"),
                        ],
                        default="PENDING",
                        max_length=16,
                    ),
                ),
                ("del_date", models.DateField()),
                ("shipping_method", models.CharField(blank=True, default="", max_length=128)),
                ("shipping_date", models.DateField(blank=True, null=True)),
                ("carrier_name", models.CharField(blank=True, default="", max_length=255)),
                ("notes", models.TextField(blank=True, default="")),
                ("buyer_remarks", models.TextField(blank=True, default="")),
                ("buyer_response_date", models.DateTimeField(blank=True, null=True)),
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
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="delivery_notes",
                        to="orders.purchaseorder",
                    ),
                ),
                (
                    "sales_order",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="delivery_notes",
                        to="orders.salesorder",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(fields=["seller_company", "status"], name="fulfil_dn_seller_idx"),
                    models.Index(fields=["buyer_company", "status"], name="fulfil_dn_buyer_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="DeliveryNoteItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("serial_number", models.PositiveIntegerField()),
                ("product_name", models.CharField(max_length=255)),
                ("product_description", models.TextField(blank=True, default="")),
                ("sku", models.CharField(blank=True, default="", max_length=128)),
                ("hsn_code", models.CharField(blank=True, default="", max_length=64)),
                ("uom", models.CharField(blank=True, default="", max_length=32)),
                ("quantity", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("quantity_delivered", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                (
                    "delivery_note",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="fulfillment.deliverynote",
                    ),
                ),
                (
                    "purchase_order_item",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="delivery_note_items",
                        to="orders.purchaseorderitem",
                    ),
                ),
            ],
            options={
                "ordering": ["serial_number"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="PackingList",
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
                ("pl_number", models.CharField(max_length=32)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("RECEIVED", "Received"),
                            ("PENDING", "Pending"),
                            ("APPROVED", "Approved"),
                            ("ACKNOWLEDGED", "Acknowledged"),
                            ("REJECTED", "Rejected"),
                        ],
                        default="PENDING",
                        max_length=16,
                    ),
                ),
                ("packing_date", models.DateField()),
                ("shipment_tracking_id", models.CharField(blank=True, default="", max_length=128)),
                ("carrier_name", models.CharField(blank=True, default="", max_length=255)),
                ("total_gross_weight", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("total_net_weight", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("total_no_of_packages", models.PositiveIntegerField(blank=True, null=True)),
                ("notes", models.TextField(blank=True, default="")),
                ("buyer_remarks", models.TextField(blank=True, default="")),
                ("buyer_response_date", models.DateTimeField(blank=True, null=True)),
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
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="packing_lists",
                        to="orders.purchaseorder",
                    ),
                ),
                (
                    "delivery_note",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="packing_lists",
                        to="fulfillment.deliverynote",
                    ),
                ),
                (
                    "sales_order",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="packing_lists",
                        to="orders.salesorder",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(fields=["seller_company", "status"], name="fulfil_pl_seller_idx"),
                    models.Index(fields=["buyer_company", "status"], name="fulfil_pl_buyer_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PackingListItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("serial_number", models.PositiveIntegerField()),
                ("product_name", models.CharField(max_length=255)),
                ("product_description", models.TextField(blank=True, default="")),
                ("sku", models.CharField(blank=True, default="", max_length=128)),
                ("hsn_code", models.CharField(blank=True, default="", max_length=64)),
                ("uom", models.CharField(blank=True, default="", max_length=32)),
                ("quantity", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("package_type", models.CharField(blank=True, default="", max_length=64)),
                ("gross_weight", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("net_weight", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("no_of_packages", models.PositiveIntegerField(default=0)),
                ("dimensions", models.CharField(blank=True, default="", max_length=128)),
                (
                    "packing_list",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="fulfillment.packinglist",
                    ),
                ),
            ],
            options={
                "ordering": ["serial_number"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Invoice",
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
                ("discount_percentage", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("additional_charges", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("tax_percentage", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("sum_of_sub_total", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("discount_amount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("tax_amount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("total_amount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("invoice_number", models.CharField(max_length=32)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("DRAFT", "Draft"),
                            ("PENDING", "Pending"),
                            ("PAID", "Paid"),
                            ("OVERDUE", "Overdue"),
                        ],
                        default="DRAFT",
                        max_length=16,
                    ),
                ),
                ("invoice_date", models.DateField()),
                ("due_date", models.DateField(blank=True, null=True)),
                ("currency", models.CharField(default="USD", max_length=8)),
                ("paid_amount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("remaining_amount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("payment_reference", models.CharField(blank=True, default="", max_length=255)),
                ("payment_terms", models.TextField(blank=True, default="")),
                ("notes", models.TextField(blank=True, default="")),
                ("ship_to_contact_name", models.CharField(blank=True, default="", max_length=255)),
                ("ship_to_phone", models.CharField(blank=True, default="", max_length=64)),
                ("ship_to_address_type", models.CharField(blank=True, default="", max_length=64)),
                ("ship_to_country", models.CharField(blank=True, default="", max_length=128)),
                ("ship_to_state", models.CharField(blank=True, default="", max_length=128)),
                ("ship_to_city", models.CharField(blank=True, default="", max_length=128)),
                ("ship_to_address", models.TextField(blank=True, default="")),
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
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="invoices",
                        to="orders.purchaseorder",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(fields=["seller_company", "status"], name="fulfil_inv_seller_idx"),
                    models.Index(fields=["buyer_company", "status"], name="fulfil_inv_buyer_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="InvoiceItem",
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
                    "invoice",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="fulfillment.invoice",
                    ),
                ),
            ],
            options={
                "ordering": ["serial_number"],
                "abstract": False,
            },
        ),
    ]
