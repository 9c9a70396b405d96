"""Fixture builders shared by the app test suites."""

import datetime
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.utils import timezone

from core.models import Company
from orders.models import PurchaseOrder, PurchaseOrderItem
from sourcing.models import Contract, ContractItem


def create_company_user(name, company_type, username, **company_fields):
    company = Company.objects.create(name=name, type=company_type, **company_fields)
    user = get_user_model().objects.create_user(username=username, password="pass1234", company=company)
    return company, user


def days_from_today(days):
    return (timezone.localdate() + datetime.timedelta(days=days)).isoformat()


def create_contract(seller, buyer, status=Contract.Status.APPROVED, quantity="100", unit_price="10"):
    today = timezone.localdate()
    contract = Contract.objects.create(
        contract_number="ZSXCON-001",
        seller_company=seller,
        seller_company_name=seller.name,
        buyer_company=buyer,
        buyer_company_name=buyer.name,
        status=status,
        effective_date=today,
        end_date=today + datetime.timedelta(days=365),
        payment_terms="Net 30",
    )
    ContractItem.objects.create(
        contract=contract,
        serial_number=1,
        product_name="Steel Pipe",
        sku="SP-1",
        quantity=Decimal(quantity),
        unit_price=Decimal(unit_price),
        sub_total=Decimal(quantity) * Decimal(unit_price),
    )
    return contract


def create_purchase_order(buyer, seller, status=PurchaseOrder.Status.APPROVED, quantity="100", unit_price="10", **fields):
    today = timezone.localdate()
    purchase_order = PurchaseOrder.objects.create(
        po_number=fields.pop("po_number", "ABXPO-001"),
        buyer_company=buyer,
        buyer_company_name=buyer.name,
        seller_company=seller,
        seller_company_name=seller.name if seller else fields.pop("seller_company_name", ""),
        status=status,
        po_issued_date=today,
        expected_delivery_date=today + datetime.timedelta(days=30),
        delivery_city="Rotterdam",
        **fields,
    )
    PurchaseOrderItem.objects.create(
        purchase_order=purchase_order,
        serial_number=1,
        product_name="Steel Pipe",
        sku="SP-1",
        quantity=Decimal(quantity),
        unit_price=Decimal(unit_price),
        sub_total=Decimal(quantity) * Decimal(unit_price),
    )
    return purchase_order
