import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("core", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="RFQ",
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
                ("rfq_number", models.CharField(max_length=32)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("DRAFT", "Draft"),
                            ("PENDING", "Pending"),
                            ("APPROVED", "Approved"),
                            ("REJECTED", "Rejected"),
                            ("COMPLETED", "Completed"),
                        ],
                        default="DRAFT",
                        max_length=16,
                    ),
                ),
                ("date_issued", models.DateField()),
                ("due_date", models.DateField()),
                ("currency", models.CharField(default="USD", max_length=8)),
                ("project_name", models.CharField(blank=True, default="", max_length=255)),
                ("project_description", models.TextField(blank=True, default="")),
                ("technical_requirements", models.TextField(blank=True, default="")),
                ("delivery_requirements", models.TextField(blank=True, default="")),
                ("terms_and_conditions", models.TextField(blank=True, default="")),
                ("notes", models.TextField(blank=True, default="")),
                ("signature_by_name", models.CharField(blank=True, default="", max_length=255)),
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
            ],
            options={
                "verbose_name": "RFQ",
                "indexes": [
                    models.Index(fields=["buyer_company", "status"], name="sourcing_rfq_buyer_idx"),
                    models.Index(fields=["seller_company", "status"], name="sourcing_rfq_seller_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="RFQItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("serial_number", models.PositiveIntegerField()),
                ("product_name", models.CharField(max_length=255)),
                ("product_description", models.TextField(blank=True, default="")),
                ("sku", models.CharField(blank=True, default="", max_length=128)),
                ("hsn_code", models.CharField(blank=True, default="", max_length=64)),
                ("uom", models.CharField(blank=True, default="", max_length=32)),
                ("quantity", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                (
                    "rfq",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="sourcing.rfq",
                    ),
                ),
            ],
            options={
                "ordering": ["serial_number"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Quotation",
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
                ("quote_number", models.CharField(max_length=32)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("DRAFT", "Draft"),
                            ("SENT", "Sent"),
                            ("PENDING", "Pending"),
                            ("ACCEPTED", "Accepted"),
                            ("REJECTED", "Rejected"),
                        ],
                        default="SENT",
                        max_length=16,
                    ),
                ),
                ("quote_date_issued", models.DateField()),
                ("quote_validity_date", models.DateField()),
                ("currency", models.CharField(default="USD", max_length=8)),
                ("payment_terms", models.TextField(blank=True, default="")),
                ("delivery_terms", models.TextField(blank=True, default="")),
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
                    "rfq",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="quotations",
                        to="sourcing.rfq",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(fields=["seller_company", "status"], name="sourcing_quo_seller_idx"),
                    models.Index(fields=["buyer_company", "status"], name="sourcing_quo_buyer_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="QuotationItem",
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
                    "quotation",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="sourcing.quotation",
                    ),
                ),
            ],
            options={
                "ordering": ["serial_number"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Contract",
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
                ("contract_number", models.CharField(max_length=32)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("DRAFT", "Draft"),
                            ("SENT", "Sent"),
                            ("PENDING_CHANGES", "Pending changes"),
                            ("APPROVED", "Approved"),
                            ("REJECTED", "Rejected"),
                            ("SIGNED", "Signed"),
                        ],
                        default="DRAFT",
                        max_length=16,
                    ),
                ),
                ("effective_date", models.DateField()),
                ("end_date", models.DateField()),
                ("currency", models.CharField(default="USD", max_length=8)),
                ("agreed_total_value", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("pricing_terms", models.TextField(blank=True, default="")),
                ("payment_terms", models.TextField(blank=True, default="")),
                ("delivery_terms", models.TextField(blank=True, default="")),
                ("confidentiality", models.TextField(blank=True, default="")),
                ("indemnity", models.TextField(blank=True, default="")),
                ("termination_conditions", models.TextField(blank=True, default="")),
                ("dispute_resolution", models.TextField(blank=True, default="")),
                ("governing_law", models.CharField(blank=True, default="", max_length=255)),
                ("buyer_suggestions", models.TextField(blank=True, default="")),
                ("buyer_response_date", models.DateTimeField(blank=True, null=True)),
                ("seller_response", models.TextField(blank=True, default="")),
                ("seller_response_date", models.DateTimeField(blank=True, null=True)),
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
                    "quotation",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="contracts",
                        to="sourcing.quotation",
                    ),
                ),
                (
                    "rfq",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="contracts",
                        to="sourcing.rfq",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(fields=["seller_company", "status"], name="sourcing_con_seller_idx"),
                    models.Index(fields=["buyer_company", "status"], name="sourcing_con_buyer_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ContractItem",
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
                    "contract",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="sourcing.contract",
                    ),
                ),
            ],
            options={
                "ordering": ["serial_number"],
                "abstract": False,
            },
        ),
    ]
