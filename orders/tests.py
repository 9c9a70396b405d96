import uuid

from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from common.testing import create_company_user, create_contract, create_purchase_order, days_from_today
from core.models import AuditLog, Company
from fulfillment.models import DeliveryNote, DeliveryNoteItem
from orders.models import PurchaseOrder, SalesOrder
from sourcing.models import Contract


class OrdersTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.buyer, self.buyer_user = create_company_user("Acme Buyers", Company.Type.BUYER, "ord-buyer")
        self.seller, self.seller_user = create_company_user(
            "Zen Supplies", Company.Type.SELLER, "ord-seller", contact_name="Zed Seller"
        )
        self.other_seller, self.other_seller_user = create_company_user("Other Seller", Company.Type.SELLER, "ord-other")

    def po_payload(self, **overrides):
        payload = {
            "po_issued_date": days_from_today(0),
            "expected_delivery_date": days_from_today(30),
            "delivery_city": "Rotterdam",
            "discount_percentage": 10,
            "additional_charges": 20,
            "tax_percentage": 5,
        }
        payload.update(overrides)
        return payload


class PurchaseOrderTests(OrdersTestCase):
    def test_purchase_order_from_approved_contract(self):
        contract = create_contract(self.seller, self.buyer)
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.post(
            "/api/v1/buyer/purchase-orders/", self.po_payload(contract_id=str(contract.id)), format="json"
        )

        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload["po_number"], "ABXPO-001")
        self.assertEqual(payload["contract"], str(contract.id))
        self.assertEqual(payload["seller_company"], str(self.seller.id))
        self.assertEqual(payload["seller_company_name"], "Zen Supplies")
        self.assertEqual(payload["payment_terms"], "Net 30")
        self.assertEqual(payload["items"][0]["product_name"], "Steel Pipe")
        self.assertEqual(payload["items"][0]["sub_total"], 1000.0)
        self.assertEqual(payload["total_amount"], 965.0)
        self.assertEqual(payload["status"], "DRAFT")

    def test_signed_contract_is_orderable(self):
        contract = create_contract(self.seller, self.buyer, status=Contract.Status.SIGNED)
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.post(
            "/api/v1/buyer/purchase-orders/", self.po_payload(contract_id=str(contract.id)), format="json"
        )

        self.assertEqual(response.status_code, 201)

    def test_purchase_order_from_unapproved_contract_is_rejected(self):
        contract = create_contract(self.seller, self.buyer, status=Contract.Status.SENT)
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.post(
            "/api/v1/buyer/purchase-orders/", self.po_payload(contract_id=str(contract.id)), format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["errors"],
            {"status": ["Purchase orders can only be raised against approved or signed contracts."]},
        )
        self.assertFalse(PurchaseOrder.objects.exists())

    def test_purchase_order_from_another_buyers_contract_is_forbidden(self):
        other_buyer, _ = create_company_user("Other Buyers", Company.Type.BUYER, "ord-other-buyer")
        contract = create_contract(self.seller, other_buyer)
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.post(
            "/api/v1/buyer/purchase-orders/", self.po_payload(contract_id=str(contract.id)), format="json"
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Forbidden: This contract was not sent to your company")

    def test_expected_delivery_must_follow_issue_date(self):
        contract = create_contract(self.seller, self.buyer)
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.post(
            "/api/v1/buyer/purchase-orders/",
            self.po_payload(contract_id=str(contract.id), expected_delivery_date=days_from_today(0)),
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("expected_delivery_date", response.json()["errors"])

    def test_standalone_purchase_order_with_selected_seller(self):
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.post(
            "/api/v1/buyer/purchase-orders/",
            self.po_payload(
                selected_seller_id=str(self.other_seller.id),
                items=[{"product_name": "Valve", "quantity": 2, "unit_price": "49.995"}],
            ),
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload["seller_company"], str(self.other_seller.id))
        self.assertEqual(payload["seller_company_name"], "Other Seller")
        self.assertEqual(payload["items"][0]["unit_price"], 50.0)

    def test_snapshot_survives_counterpart_rename(self):
        contract = create_contract(self.seller, self.buyer)
        self.client.force_authenticate(user=self.buyer_user)
        created = self.client.post(
            "/api/v1/buyer/purchase-orders/", self.po_payload(contract_id=str(contract.id)), format="json"
        ).json()

        self.client.force_authenticate(user=self.seller_user)
        self.client.patch("/api/v1/company/", {"name": "Zen Global"}, format="json")
        seller_view = self.client.get(f"/api/v1/seller/purchase-orders/{created['id']}/")

        self.assertEqual(seller_view.status_code, 200)
        self.assertEqual(seller_view.json()["seller_company_name"], "Zen Supplies")

    def test_seller_of_contract_order_cannot_be_swapped(self):
        contract = create_contract(self.seller, self.buyer)
        self.client.force_authenticate(user=self.buyer_user)
        created = self.client.post(
            "/api/v1/buyer/purchase-orders/", self.po_payload(contract_id=str(contract.id)), format="json"
        ).json()

        response = self.client.patch(
            f"/api/v1/buyer/purchase-orders/{created['id']}/", {"seller_company_name": "Other Seller"}, format="json"
        )
        self.client.force_authenticate(user=self.seller_user)
        seller_view = self.client.get(f"/api/v1/seller/purchase-orders/{created['id']}/")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["errors"], {"seller_company_name": ["The seller of this document cannot be changed."]}
        )
        self.assertEqual(seller_view.status_code, 200)
        self.assertEqual(seller_view.json()["seller_company"], str(self.seller.id))

    def test_unlinked_seller_name_can_be_corrected(self):
        purchase_order = create_purchase_order(
            self.buyer, None, status=PurchaseOrder.Status.DRAFT, seller_company_name="Zen Suplies"
        )
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.patch(
            f"/api/v1/buyer/purchase-orders/{purchase_order.id}/", {"seller_company_name": "zen supplies"}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["seller_company"], str(self.seller.id))

    def test_submit_accept_flow(self):
        purchase_order = create_purchase_order(self.buyer, self.seller, status=PurchaseOrder.Status.DRAFT)
        self.client.force_authenticate(user=self.buyer_user)
        submitted = self.client.patch(
            f"/api/v1/buyer/purchase-orders/{purchase_order.id}/", {"action": "submit"}, format="json"
        )
        self.client.force_authenticate(user=self.seller_user)
        accepted = self.client.patch(
            f"/api/v1/seller/purchase-orders/{purchase_order.id}/", {"action": "accept"}, format="json"
        )
        again = self.client.patch(
            f"/api/v1/seller/purchase-orders/{purchase_order.id}/", {"action": "reject"}, format="json"
        )

        self.assertEqual(submitted.json()["status"], "PENDING")
        self.assertEqual(accepted.json()["status"], "APPROVED")
        self.assertEqual(again.status_code, 400)
        self.assertTrue(AuditLog.objects.filter(action="purchase_order.accept", company=self.seller).exists())

    def test_seller_list_excludes_other_sellers(self):
        own = create_purchase_order(self.buyer, self.seller)
        other = create_purchase_order(self.buyer, self.other_seller, po_number="ABXPO-002")
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.get("/api/v1/seller/purchase-orders/")

        ids = {item["id"] for item in response.json()["results"]}
        self.assertEqual(ids, {str(own.id)})
        self.assertNotIn(str(other.id), ids)

    def test_approved_purchase_order_is_locked_for_buyer(self):
        purchase_order = create_purchase_order(self.buyer, self.seller)
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.patch(
            f"/api/v1/buyer/purchase-orders/{purchase_order.id}/", {"notes": "Late change"}, format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["errors"], {"status": ["Purchase order with status APPROVED can no longer be edited."]}
        )

    def test_draft_purchase_order_edit_recomputes_totals_and_delete(self):
        purchase_order = create_purchase_order(self.buyer, self.seller, status=PurchaseOrder.Status.DRAFT)
        self.client.force_authenticate(user=self.buyer_user)

        edited = self.client.patch(
            f"/api/v1/buyer/purchase-orders/{purchase_order.id}/",
            {"tax_percentage": 10, "items": [{"product_name": "Steel Pipe", "quantity": 10, "unit_price": 10}]},
            format="json",
        )
        deleted = self.client.delete(f"/api/v1/buyer/purchase-orders/{purchase_order.id}/")

        self.assertEqual(edited.status_code, 200)
        self.assertEqual(edited.json()["total_amount"], 110.0)
        self.assertEqual(deleted.status_code, 204)
        self.assertFalse(PurchaseOrder.objects.filter(id=purchase_order.id).exists())

    def test_remaining_quantities_endpoint(self):
        purchase_order = create_purchase_order(self.buyer, self.seller)
        po_item = purchase_order.items.get()
        delivery_note = DeliveryNote.objects.create(
            dn_number="ZSXDN001",
            seller_company=self.seller,
            buyer_company=self.buyer,
            purchase_order=purchase_order,
            del_date=timezone.localdate(),
        )
        DeliveryNoteItem.objects.create(
            delivery_note=delivery_note,
            purchase_order_item=po_item,
            serial_number=1,
            product_name="Steel Pipe",
            quantity="100",
            quantity_delivered="70",
        )
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.get(f"/api/v1/seller/purchase-orders/{purchase_order.id}/remaining/")

        self.assertEqual(response.status_code, 200)
        line = response.json()["items"][0]
        self.assertEqual(line["purchase_order_item"], str(po_item.id))
        self.assertEqual(line["ordered"], 100.0)
        self.assertEqual(line["delivered"], 70.0)
        self.assertEqual(line["remaining"], 30.0)

    def test_remaining_quantities_for_unknown_order(self):
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.get(f"/api/v1/seller/purchase-orders/{uuid.uuid4()}/remaining/")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Purchase order not found.")


class SalesOrderTests(OrdersTestCase):
    def so_payload(self, purchase_order, **overrides):
        payload = {
            "purchase_order_id": str(purchase_order.id),
            "so_created_date": days_from_today(0),
            "planned_ship_date": days_from_today(0),
        }
        payload.update(overrides)
        return payload

    def test_sales_order_from_approved_purchase_order(self):
        purchase_order = create_purchase_order(
            self.buyer, self.seller, discount_percentage="10", tax_percentage="5", additional_charges="20"
        )
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post("/api/v1/seller/sales-orders/", self.so_payload(purchase_order), format="json")

        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload["so_number"], "ZSXSO-001")
        self.assertEqual(payload["status"], "PENDING")
        self.assertEqual(payload["purchase_order"], str(purchase_order.id))
        self.assertEqual(payload["buyer_company"], str(self.buyer.id))
        self.assertEqual(payload["seller_contact_name"], "Zed Seller")
        self.assertEqual(payload["delivery_city"], "Rotterdam")
        self.assertEqual(payload["total_amount"], 965.0)

    def test_sales_order_requires_approved_purchase_order(self):
        purchase_order = create_purchase_order(self.buyer, self.seller, status=PurchaseOrder.Status.PENDING)
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post("/api/v1/seller/sales-orders/", self.so_payload(purchase_order), format="json")

        self.assertEqual(response.status_code, 400)
        self.assertFalse(SalesOrder.objects.exists())

    def test_sales_order_from_someone_elses_purchase_order_is_forbidden(self):
        purchase_order = create_purchase_order(self.buyer, self.other_seller)
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post("/api/v1/seller/sales-orders/", self.so_payload(purchase_order), format="json")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Forbidden: This purchase order was not sent to your company")

    def test_planned_ship_date_cannot_precede_order_date(self):
        purchase_order = create_purchase_order(self.buyer, self.seller)
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post(
            "/api/v1/seller/sales-orders/",
            self.so_payload(purchase_order, planned_ship_date=days_from_today(-1)),
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("planned_ship_date", response.json()["errors"])

    def test_sales_order_lifecycle(self):
        purchase_order = create_purchase_order(self.buyer, self.seller)
        self.client.force_authenticate(user=self.seller_user)
        sales_order = self.client.post(
            "/api/v1/seller/sales-orders/", self.so_payload(purchase_order), format="json"
        ).json()
        url = f"/api/v1/seller/sales-orders/{sales_order['id']}/"

        processing = self.client.patch(url, {"action": "process"}, format="json")
        shipped = self.client.patch(url, {"action": "ship"}, format="json")
        cancelled = self.client.patch(url, {"action": "cancel"}, format="json")
        delivered = self.client.patch(url, {"action": "deliver"}, format="json")

        self.assertEqual(processing.json()["status"], "PROCESSING")
        self.assertEqual(shipped.json()["status"], "SHIPPED")
        self.assertEqual(cancelled.status_code, 400)
        self.assertEqual(delivered.json()["status"], "DELIVERED")

    def test_sales_orders_filter_by_purchase_order(self):
        first = create_purchase_order(self.buyer, self.seller)
        second = create_purchase_order(self.buyer, self.seller, po_number="ABXPO-002")
        self.client.force_authenticate(user=self.seller_user)
        self.client.post("/api/v1/seller/sales-orders/", self.so_payload(first), format="json")
        self.client.post("/api/v1/seller/sales-orders/", self.so_payload(second), format="json")

        response = self.client.get(f"/api/v1/seller/sales-orders/?purchase_order={second.id}")
        invalid = self.client.get("/api/v1/seller/sales-orders/?purchase_order=not-a-uuid")

        self.assertEqual([item["purchase_order"] for item in response.json()["results"]], [str(second.id)])
        self.assertEqual(invalid.status_code, 400)
