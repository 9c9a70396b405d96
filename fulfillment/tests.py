from decimal import Decimal

from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from common.testing import create_company_user, create_purchase_order, days_from_today
from core.models import AuditLog, Company
from fulfillment.models import DeliveryNote, DeliveryNoteItem, Invoice
from fulfillment.services import remaining_quantities
from orders.models import SalesOrder


class FulfillmentTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.buyer, self.buyer_user = create_company_user("Acme Buyers", Company.Type.BUYER, "ful-buyer")
        self.seller, self.seller_user = create_company_user("Zen Supplies", Company.Type.SELLER, "ful-seller")
        self.other_seller, self.other_seller_user = create_company_user("Other Seller", Company.Type.SELLER, "ful-other")
        self.purchase_order = create_purchase_order(
            self.buyer, self.seller, discount_percentage="10", tax_percentage="5", additional_charges="20"
        )
        self.po_item = self.purchase_order.items.get()

    def dn_payload(self, quantity_delivered, purchase_order=None, **overrides):
        payload = {
            "purchase_order_id": str((purchase_order or self.purchase_order).id),
            "del_date": days_from_today(2),
            "shipping_date": days_from_today(1),
            "carrier_name": "Blue Freight",
            "items": [
                {"product_name": "Steel Pipe", "sku": "SP-1", "quantity": 100, "quantity_delivered": quantity_delivered}
            ],
        }
        payload.update(overrides)
        return payload

    def create_delivery_note(self, quantity_delivered):
        self.client.force_authenticate(user=self.seller_user)
        response = self.client.post("/api/v1/seller/delivery-notes/", self.dn_payload(quantity_delivered), format="json")
        self.assertEqual(response.status_code, 201)
        return response.json()


class DeliveryNoteTests(FulfillmentTestCase):
    def test_delivery_note_links_purchase_order_line(self):
        payload = self.create_delivery_note(70)

        self.assertEqual(payload["dn_number"], "ZSXDN001")
        self.assertEqual(payload["buyer_company"], str(self.buyer.id))
        self.assertEqual(payload["delivery_city"], "Rotterdam")
        self.assertEqual(payload["items"][0]["purchase_order_item"], str(self.po_item.id))
        self.assertEqual(payload["items"][0]["quantity_delivered"], 70.0)

    def test_over_delivery_is_rejected_with_remaining_quantity(self):
        self.create_delivery_note(70)

        rejected = self.client.post("/api/v1/seller/delivery-notes/", self.dn_payload(31), format="json")
        accepted = self.client.post("/api/v1/seller/delivery-notes/", self.dn_payload(30), format="json")

        self.assertEqual(rejected.status_code, 400)
        self.assertEqual(
            rejected.json()["errors"],
            {"items": ["Quantity delivered (31.00) cannot exceed remaining quantity (30.00) for Steel Pipe"]},
        )
        self.assertEqual(accepted.status_code, 201)
        self.assertEqual(DeliveryNote.objects.count(), 2)
        self.assertEqual(remaining_quantities(self.purchase_order)[0].remaining, Decimal("0.00"))

    def test_lines_in_one_request_share_the_remaining_balance(self):
        self.client.force_authenticate(user=self.seller_user)
        payload = self.dn_payload(60)
        payload["items"].append(
            {"product_name": "Steel Pipe", "sku": "SP-1", "quantity": 100, "quantity_delivered": 50}
        )

        response = self.client.post("/api/v1/seller/delivery-notes/", payload, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["errors"],
            {"items": ["Quantity delivered (50.00) cannot exceed remaining quantity (40.00) for Steel Pipe"]},
        )

    def test_cancelled_delivery_notes_do_not_count(self):
        created = self.create_delivery_note(70)

        cancelled = self.client.patch(
            f"/api/v1/seller/delivery-notes/{created['id']}/", {"action": "cancel"}, format="json"
        )

        self.assertEqual(cancelled.json()["status"], "CANCELLED")
        self.assertEqual(remaining_quantities(self.purchase_order)[0].remaining, Decimal("100.00"))

    def test_unlinked_lines_match_by_product_name(self):
        delivery_note = DeliveryNote.objects.create(
            dn_number="ZSXDN001",
            seller_company=self.seller,
            purchase_order=self.purchase_order,
            del_date=timezone.localdate(),
        )
        DeliveryNoteItem.objects.create(
            delivery_note=delivery_note,
            serial_number=1,
            product_name="steel pipe",
            sku="sp-1",
            quantity="100",
            quantity_delivered="25",
        )

        line = remaining_quantities(self.purchase_order)[0]

        self.assertEqual(line.delivered, Decimal("25.00"))
        self.assertEqual(line.remaining, Decimal("75.00"))

    def test_zero_quantity_delivered_is_rejected(self):
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post("/api/v1/seller/delivery-notes/", self.dn_payload(0), format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["errors"], {"items": ["Quantity delivered must be greater than zero for Steel Pipe"]}
        )

    def test_items_default_to_what_is_left_to_ship(self):
        self.create_delivery_note(40)

        response = self.client.post("/api/v1/seller/delivery-notes/", self.dn_payload(0, items=[]), format="json")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["items"][0]["quantity_delivered"], 60.0)
        self.assertEqual(response.json()["items"][0]["quantity"], 100.0)

    def test_editing_a_delivery_note_excludes_its_own_quantities(self):
        created = self.create_delivery_note(70)

        response = self.client.patch(
            f"/api/v1/seller/delivery-notes/{created['id']}/",
            {"items": [{"product_name": "Steel Pipe", "sku": "SP-1", "quantity": 100, "quantity_delivered": 100}]},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["items"][0]["quantity_delivered"], 100.0)

    def test_purchase_order_is_required(self):
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post(
            "/api/v1/seller/delivery-notes/", self.dn_payload(10, purchase_order_id=None), format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"], {"purchase_order_id": ["This field is required."]})

    def test_purchase_order_for_another_seller_is_forbidden(self):
        self.client.force_authenticate(user=self.other_seller_user)

        response = self.client.post("/api/v1/seller/delivery-notes/", self.dn_payload(10), format="json")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Forbidden: This purchase order was not sent to your company")

    def test_sales_order_must_reference_the_same_purchase_order(self):
        other_po = create_purchase_order(self.buyer, self.seller, po_number="ABXPO-002")
        sales_order = SalesOrder.objects.create(
            so_number="ZSXSO-001",
            seller_company=self.seller,
            buyer_company=self.buyer,
            purchase_order=other_po,
            so_created_date=timezone.localdate(),
            planned_ship_date=timezone.localdate(),
        )
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post(
            "/api/v1/seller/delivery-notes/", self.dn_payload(10, sales_order_id=str(sales_order.id)), format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["errors"],
            {"sales_order_id": ["This sales order does not reference purchase order ABXPO-001."]},
        )

    def test_sales_order_of_another_seller_is_forbidden(self):
        sales_order = SalesOrder.objects.create(
            so_number="OSXSO-001",
            seller_company=self.other_seller,
            buyer_company=self.buyer,
            purchase_order=self.purchase_order,
            so_created_date=timezone.localdate(),
            planned_ship_date=timezone.localdate(),
        )
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post(
            "/api/v1/seller/delivery-notes/", self.dn_payload(10, sales_order_id=str(sales_order.id)), format="json"
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Forbidden: This sales order does not belong to your company")
        self.assertFalse(DeliveryNote.objects.exists())

    def test_buyer_acknowledges_with_remarks(self):
        created = self.create_delivery_note(70)
        self.client.force_authenticate(user=self.buyer_user)

        listed = self.client.get(f"/api/v1/buyer/delivery-notes/?purchase_order={self.purchase_order.id}")
        response = self.client.patch(
            f"/api/v1/buyer/delivery-notes/{created['id']}/",
            {"action": "acknowledge", "remarks": "Two pipes scratched"},
            format="json",
        )

        self.assertEqual(listed.json()["count"], 1)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ACKNOWLEDGED")
        self.assertEqual(response.json()["buyer_remarks"], "Two pipes scratched")
        self.assertIsNotNone(response.json()["buyer_response_date"])
        self.assertTrue(AuditLog.objects.filter(action="delivery_note.acknowledge", company=self.buyer).exists())

    def test_seller_completes_after_acknowledgement(self):
        created = self.create_delivery_note(70)
        self.client.force_authenticate(user=self.buyer_user)
        self.client.patch(f"/api/v1/buyer/delivery-notes/{created['id']}/", {"action": "dispute"}, format="json")
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.patch(
            f"/api/v1/seller/delivery-notes/{created['id']}/", {"action": "complete"}, format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["errors"], {"action": ["Cannot complete delivery note with status DISPUTED."]}
        )


class PackingListTests(FulfillmentTestCase):
    def pl_payload(self, **overrides):
        payload = {
            "purchase_order_id": str(self.purchase_order.id),
            "packing_date": days_from_today(0),
            "shipment_tracking_id": "TRK-1",
            "items": [
                {"product_name": "Steel Pipe", "quantity": 60, "package_type": "Crate", "gross_weight": "10.5", "net_weight": 9, "no_of_packages": 3},
                {"product_name": "Steel Pipe", "quantity": 40, "package_type": "Crate", "gross_weight": "4.5", "net_weight": 4, "no_of_packages": 2},
            ],
        }
        payload.update(overrides)
        return payload

    def test_totals_are_computed_from_items(self):
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post("/api/v1/seller/packing-lists/", self.pl_payload(), format="json")

        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload["pl_number"], "ZSXPL0001")
        self.assertEqual(payload["total_gross_weight"], 15.0)
        self.assertEqual(payload["total_net_weight"], 13.0)
        self.assertEqual(payload["total_no_of_packages"], 5)

    def test_totals_are_empty_without_weights(self):
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post(
            "/api/v1/seller/packing-lists/",
            self.pl_payload(items=[{"product_name": "Steel Pipe", "quantity": 100}]),
            format="json",
        )

        self.assertIsNone(response.json()["total_gross_weight"])
        self.assertIsNone(response.json()["total_no_of_packages"])

    def test_items_are_carried_from_delivery_note(self):
        delivery_note = self.create_delivery_note(70)

        response = self.client.post(
            "/api/v1/seller/packing-lists/",
            self.pl_payload(delivery_note_id=delivery_note["id"], items=[]),
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["delivery_note"], delivery_note["id"])
        self.assertEqual(response.json()["items"][0]["quantity"], 70.0)

    def test_delivery_note_for_another_purchase_order_is_rejected(self):
        other_po = create_purchase_order(self.buyer, self.seller, po_number="ABXPO-002")
        self.client.force_authenticate(user=self.seller_user)
        delivery_note = self.client.post(
            "/api/v1/seller/delivery-notes/", self.dn_payload(10, purchase_order=other_po), format="json"
        ).json()

        response = self.client.post(
            "/api/v1/seller/packing-lists/", self.pl_payload(delivery_note_id=delivery_note["id"]), format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["errors"],
            {"delivery_note_id": ["This delivery note does not reference purchase order ABXPO-001."]},
        )

    def test_delivery_note_of_another_seller_is_forbidden(self):
        delivery_note = DeliveryNote.objects.create(
            dn_number="OSXDN001",
            seller_company=self.other_seller,
            buyer_company=self.buyer,
            purchase_order=self.purchase_order,
            del_date=timezone.localdate(),
        )
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post(
            "/api/v1/seller/packing-lists/", self.pl_payload(delivery_note_id=str(delivery_note.id)), format="json"
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Forbidden: This delivery note does not belong to your company")

    def test_buyer_rejects_packing_list(self):
        self.client.force_authenticate(user=self.seller_user)
        packing_list = self.client.post("/api/v1/seller/packing-lists/", self.pl_payload(), format="json").json()
        self.client.force_authenticate(user=self.buyer_user)

        rejected = self.client.patch(
            f"/api/v1/buyer/packing-lists/{packing_list['id']}/",
            {"action": "reject", "remarks": "Wrong crates"},
            format="json",
        )
        again = self.client.patch(
            f"/api/v1/buyer/packing-lists/{packing_list['id']}/", {"action": "acknowledge"}, format="json"
        )

        self.assertEqual(rejected.json()["status"], "REJECTED")
        self.assertEqual(rejected.json()["buyer_remarks"], "Wrong crates")
        self.assertEqual(again.status_code, 400)


class InvoiceTests(FulfillmentTestCase):
    def create_invoice(self, **overrides):
        payload = {
            "purchase_order_id": str(self.purchase_order.id),
            "invoice_date": days_from_today(0),
            "due_date": days_from_today(30),
        }
        payload.update(overrides)
        self.client.force_authenticate(user=self.seller_user)
        response = self.client.post("/api/v1/seller/invoices/", payload, format="json")
        self.assertEqual(response.status_code, 201)
        return response.json()

    def invoice_action(self, invoice, user, side, body):
        self.client.force_authenticate(user=user)
        return self.client.patch(f"/api/v1/{side}/invoices/{invoice['id']}/", body, format="json")

    def test_invoice_from_purchase_order(self):
        invoice = self.create_invoice()

        self.assertEqual(invoice["invoice_number"], "ZSXINV0001")
        self.assertEqual(invoice["status"], "DRAFT")
        self.assertEqual(invoice["buyer_company"], str(self.buyer.id))
        self.assertEqual(invoice["ship_to_city"], "Rotterdam")
        self.assertEqual(invoice["total_amount"], 965.0)
        self.assertEqual(invoice["paid_amount"], 0.0)
        self.assertEqual(invoice["remaining_amount"], 965.0)

    def test_due_date_cannot_precede_invoice_date(self):
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post(
            "/api/v1/seller/invoices/",
            {
                "purchase_order_id": str(self.purchase_order.id),
                "invoice_date": days_from_today(0),
                "due_date": days_from_today(-1),
            },
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertFalse(Invoice.objects.exists())

    def test_partial_payments_until_paid(self):
        invoice = self.create_invoice()
        self.invoice_action(invoice, self.seller_user, "seller", {"action": "send"})

        first = self.invoice_action(
            invoice, self.buyer_user, "buyer", {"action": "partial_pay", "payment_amount": "500", "payment_reference": "TX-1"}
        )
        too_much = self.invoice_action(invoice, self.buyer_user, "buyer", {"action": "partial_pay", "payment_amount": "465.01"})
        second = self.invoice_action(invoice, self.buyer_user, "buyer", {"action": "partial_pay", "payment_amount": "465"})

        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json()["status"], "PENDING")
        self.assertEqual(first.json()["paid_amount"], 500.0)
        self.assertEqual(first.json()["remaining_amount"], 465.0)
        self.assertEqual(first.json()["payment_reference"], "TX-1")
        self.assertEqual(too_much.status_code, 400)
        self.assertEqual(second.json()["status"], "PAID")
        self.assertEqual(second.json()["remaining_amount"], 0.0)
        self.assertEqual(AuditLog.objects.filter(action="invoice.partial_pay", entity_id=invoice["id"]).count(), 2)

    def test_partial_payment_must_be_positive(self):
        invoice = self.create_invoice(status="PENDING")

        response = self.invoice_action(invoice, self.buyer_user, "buyer", {"action": "partial_pay", "payment_amount": "0"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"], {"payment_amount": ["Payment amount must be greater than zero."]})

    def test_items_cannot_drop_total_below_paid_amount(self):
        invoice = self.create_invoice(status="PENDING")
        self.invoice_action(invoice, self.buyer_user, "buyer", {"action": "partial_pay", "payment_amount": "800"})

        shrunk = self.invoice_action(
            invoice,
            self.seller_user,
            "seller",
            {"items": [{"product_name": "Steel Pipe", "quantity": 1, "unit_price": 10}]},
        )
        grown = self.invoice_action(
            invoice,
            self.seller_user,
            "seller",
            {"items": [{"product_name": "Steel Pipe", "quantity": 200, "unit_price": 10}]},
        )

        self.assertEqual(shrunk.status_code, 400)
        self.assertEqual(
            shrunk.json()["errors"],
            {"items": ["Invoice total (29.45) cannot be lower than the amount already paid (800.00)."]},
        )
        self.assertEqual(grown.status_code, 200)
        self.assertEqual(grown.json()["total_amount"], 1910.0)
        self.assertEqual(grown.json()["paid_amount"], 800.0)
        self.assertEqual(grown.json()["remaining_amount"], 1110.0)

    def test_full_payment_of_overdue_invoice(self):
        invoice = self.create_invoice(status="PENDING")
        overdue = self.invoice_action(invoice, self.seller_user, "seller", {"action": "mark_overdue"})
        paid = self.invoice_action(invoice, self.buyer_user, "buyer", {"action": "pay"})
        again = self.invoice_action(invoice, self.buyer_user, "buyer", {"action": "pay"})

        self.assertEqual(overdue.json()["status"], "OVERDUE")
        self.assertEqual(paid.json()["status"], "PAID")
        self.assertEqual(paid.json()["paid_amount"], 965.0)
        self.assertEqual(again.status_code, 400)
        self.assertEqual(again.json()["errors"], {"action": ["Cannot pay invoice with status PAID."]})

    def test_buyer_rejection_returns_invoice_to_draft(self):
        invoice = self.create_invoice(status="PENDING")

        rejected = self.invoice_action(invoice, self.buyer_user, "buyer", {"action": "reject"})
        edited = self.invoice_action(invoice, self.seller_user, "seller", {"notes": "Corrected"})

        self.assertEqual(rejected.json()["status"], "DRAFT")
        self.assertEqual(edited.status_code, 200)
        self.assertEqual(edited.json()["notes"], "Corrected")

    def test_other_seller_cannot_read_invoice(self):
        invoice = self.create_invoice()
        self.client.force_authenticate(user=self.other_seller_user)

        response = self.client.get(f"/api/v1/seller/invoices/{invoice['id']}/")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Forbidden: This invoice does not belong to your company")
