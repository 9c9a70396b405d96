import uuid

from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from common.testing import create_company_user, days_from_today
from core.models import AuditLog, Company
from sourcing.models import RFQ, Contract, Quotation, RFQItem


def rfq_payload(**overrides):
    payload = {
        "seller_company_name": "Zen Supplies",
        "date_issued": days_from_today(0),
        "due_date": days_from_today(14),
        "project_name": "Harbour Expansion",
        "items": [
            {"product_name": "Steel Pipe", "sku": "SP-1", "uom": "m", "quantity": "100"},
            {"product_name": "Flange", "quantity": 20},
        ],
    }
    payload.update(overrides)
    return payload


class SourcingTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.buyer, self.buyer_user = create_company_user(
            "Acme Buyers", Company.Type.BUYER, "src-buyer", contact_name="Ada Buyer", city="Rotterdam"
        )
        self.seller, self.seller_user = create_company_user("Zen Supplies", Company.Type.SELLER, "src-seller")
        self.other_seller, self.other_seller_user = create_company_user("Other Seller", Company.Type.SELLER, "src-other")

    def create_rfq(self, **fields):
        today = timezone.localdate()
        defaults = {
            "rfq_number": "RFQ-0001",
            "buyer_company": self.buyer,
            "buyer_company_name": self.buyer.name,
            "seller_company": self.seller,
            "seller_company_name": self.seller.name,
            "status": RFQ.Status.PENDING,
            "date_issued": today,
            "due_date": today,
        }
        defaults.update(fields)
        rfq = RFQ.objects.create(**defaults)
        RFQItem.objects.create(rfq=rfq, serial_number=1, product_name="Steel Pipe", sku="SP-1", quantity="100")
        return rfq


class RFQTests(SourcingTestCase):
    def test_buyer_creates_rfq_with_numbered_items(self):
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.post("/api/v1/buyer/rfqs/", rfq_payload(), format="json")

        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload["rfq_number"], "RFQ-0001")
        self.assertEqual(payload["buyer_company"], str(self.buyer.id))
        self.assertEqual(payload["seller_company"], str(self.seller.id))
        self.assertEqual(payload["buyer_contact_name"], "Ada Buyer")
        self.assertEqual([item["serial_number"] for item in payload["items"]], [1, 2])
        self.assertEqual(payload["items"][0]["quantity"], 100.0)
        self.assertTrue(AuditLog.objects.filter(action="rfq.create", company=self.buyer).exists())

    def test_second_rfq_gets_next_number(self):
        self.client.force_authenticate(user=self.buyer_user)

        self.client.post("/api/v1/buyer/rfqs/", rfq_payload(), format="json")
        response = self.client.post("/api/v1/buyer/rfqs/", rfq_payload(), format="json")

        self.assertEqual(response.json()["rfq_number"], "RFQ-0002")

    def test_rfq_may_have_no_items(self):
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.post("/api/v1/buyer/rfqs/", rfq_payload(items=[]), format="json")

        self.assertEqual(response.status_code, 201)

    def test_quantity_beyond_column_precision_is_rejected(self):
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.post(
            "/api/v1/buyer/rfqs/", rfq_payload(items=[{"product_name": "X", "quantity": "1e30"}]), format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["errors"], {"items": [{"quantity": ["Ensure that there are no more than 12 digits in total."]}]}
        )
        self.assertFalse(RFQ.objects.exists())

    def test_future_issue_date_is_rejected(self):
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.post(
            "/api/v1/buyer/rfqs/",
            rfq_payload(date_issued=days_from_today(1), due_date=days_from_today(10)),
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"], {"date_issued": ["Date issued cannot be in the future."]})
        self.assertFalse(RFQ.objects.exists())

    def test_due_date_must_follow_issue_date(self):
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.post("/api/v1/buyer/rfqs/", rfq_payload(due_date=days_from_today(0)), format="json")

        self.assertEqual(response.status_code, 400)
        self.assertIn("due_date", response.json()["errors"])

    def test_unregistered_seller_is_kept_by_name(self):
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.post("/api/v1/buyer/rfqs/", rfq_payload(seller_company_name="Future Seller"), format="json")

        self.assertEqual(response.status_code, 201)
        self.assertIsNone(response.json()["seller_company"])
        self.assertEqual(response.json()["seller_company_name"], "Future Seller")

    def test_seller_list_is_scoped_with_name_fallback(self):
        addressed = self.create_rfq()
        by_name = self.create_rfq(rfq_number="RFQ-0002", seller_company=None, seller_company_name="zen supplies")
        other = self.create_rfq(rfq_number="RFQ-0003", seller_company=self.other_seller, seller_company_name="Other Seller")
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.get("/api/v1/seller/rfqs/")

        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(sorted(payload.keys()), ["count", "next", "previous", "results"])
        ids = {item["id"] for item in payload["results"]}
        self.assertIn(str(addressed.id), ids)
        self.assertIn(str(by_name.id), ids)
        self.assertNotIn(str(other.id), ids)

    def test_list_filters_by_status_and_search(self):
        self.create_rfq(project_name="Harbour")
        self.create_rfq(rfq_number="RFQ-0002", status=RFQ.Status.APPROVED, project_name="Bridge")
        self.client.force_authenticate(user=self.buyer_user)

        approved = self.client.get("/api/v1/buyer/rfqs/?status=approved")
        everything = self.client.get("/api/v1/buyer/rfqs/?status=ALL")
        searched = self.client.get("/api/v1/buyer/rfqs/?search=harb")

        self.assertEqual([item["rfq_number"] for item in approved.json()["results"]], ["RFQ-0002"])
        self.assertEqual(everything.json()["count"], 2)
        self.assertEqual([item["rfq_number"] for item in searched.json()["results"]], ["RFQ-0001"])

    def test_missing_rfq_is_not_found_and_foreign_rfq_is_forbidden(self):
        other = self.create_rfq(seller_company=self.other_seller, seller_company_name="Other Seller")
        self.client.force_authenticate(user=self.seller_user)

        missing = self.client.get(f"/api/v1/seller/rfqs/{uuid.uuid4()}/")
        forbidden = self.client.get(f"/api/v1/seller/rfqs/{other.id}/")

        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json()["message"], "RFQ not found.")
        self.assertEqual(forbidden.status_code, 403)
        self.assertEqual(forbidden.json()["message"], "Forbidden: This RFQ was not sent to your company")

    def test_seller_accepts_rfq_once(self):
        rfq = self.create_rfq()
        self.client.force_authenticate(user=self.seller_user)

        accepted = self.client.patch(f"/api/v1/seller/rfqs/{rfq.id}/", {"action": "accept"}, format="json")
        again = self.client.patch(f"/api/v1/seller/rfqs/{rfq.id}/", {"action": "accept"}, format="json")

        self.assertEqual(accepted.status_code, 200)
        self.assertEqual(accepted.json()["status"], "APPROVED")
        self.assertEqual(accepted.json()["available_actions"], [])
        self.assertEqual(again.status_code, 400)
        self.assertEqual(again.json()["errors"], {"action": ["Cannot accept RFQ with status APPROVED."]})
        self.assertTrue(AuditLog.objects.filter(action="rfq.accept", entity_id=rfq.id).exists())

    def test_unknown_action_lists_valid_ones(self):
        rfq = self.create_rfq()
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.patch(f"/api/v1/seller/rfqs/{rfq.id}/", {"action": "sign"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"], {"action": ["Invalid action 'sign'. Valid actions: accept, reject."]})
        rfq.refresh_from_db()
        self.assertEqual(rfq.status, RFQ.Status.PENDING)

    def test_seller_cannot_edit_or_delete_rfq(self):
        rfq = self.create_rfq()
        self.client.force_authenticate(user=self.seller_user)

        patch_res = self.client.patch(f"/api/v1/seller/rfqs/{rfq.id}/", {"project_name": "Changed"}, format="json")
        delete_res = self.client.delete(f"/api/v1/seller/rfqs/{rfq.id}/")

        self.assertEqual(patch_res.status_code, 400)
        self.assertEqual(delete_res.status_code, 405)

    def test_buyer_edits_open_rfq_and_replaces_items(self):
        rfq = self.create_rfq()
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.patch(
            f"/api/v1/buyer/rfqs/{rfq.id}/",
            {"project_name": "Phase 2", "items": [{"product_name": "Valve", "quantity": 4}]},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["project_name"], "Phase 2")
        self.assertEqual([item["product_name"] for item in response.json()["items"]], ["Valve"])
        self.assertEqual(rfq.items.count(), 1)

    def test_closed_rfq_cannot_be_edited_or_deleted(self):
        rfq = self.create_rfq(status=RFQ.Status.APPROVED)
        self.client.force_authenticate(user=self.buyer_user)

        patch_res = self.client.patch(f"/api/v1/buyer/rfqs/{rfq.id}/", {"project_name": "Late"}, format="json")
        delete_res = self.client.delete(f"/api/v1/buyer/rfqs/{rfq.id}/")

        self.assertEqual(patch_res.status_code, 400)
        self.assertEqual(delete_res.status_code, 400)
        self.assertTrue(RFQ.objects.filter(id=rfq.id).exists())

    def test_status_cannot_be_forced_through_an_edit(self):
        rfq = self.create_rfq()
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.patch(f"/api/v1/buyer/rfqs/{rfq.id}/", {"status": "COMPLETED"}, format="json")

        self.assertEqual(response.status_code, 400)
        rfq.refresh_from_db()
        self.assertEqual(rfq.status, RFQ.Status.PENDING)


class QuotationTests(SourcingTestCase):
    def quotation_payload(self, rfq, **overrides):
        payload = {
            "rfq_id": str(rfq.id),
            "quote_date_issued": days_from_today(0),
            "quote_validity_date": days_from_today(30),
            "discount_percentage": 10,
            "additional_charges": 20,
            "tax_percentage": 5,
            "items": [{"product_name": "Steel Pipe", "quantity": 100, "unit_price": 10}],
        }
        payload.update(overrides)
        return payload

    def test_quotation_from_rfq_carries_buyer_and_rolls_up(self):
        rfq = self.create_rfq()
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post("/api/v1/seller/quotations/", self.quotation_payload(rfq), format="json")

        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload["quote_number"], "ZSXQUO-001")
        self.assertEqual(payload["status"], "SENT")
        self.assertEqual(payload["rfq"], str(rfq.id))
        self.assertEqual(payload["buyer_company"], str(self.buyer.id))
        self.assertEqual(payload["buyer_company_name"], "Acme Buyers")
        self.assertEqual(payload["sum_of_sub_total"], 1000.0)
        self.assertEqual(payload["discount_amount"], 100.0)
        self.assertEqual(payload["tax_amount"], 45.0)
        self.assertEqual(payload["total_amount"], 965.0)

    def test_client_totals_are_ignored(self):
        rfq = self.create_rfq()
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post(
            "/api/v1/seller/quotations/",
            self.quotation_payload(rfq, total_amount=1, sum_of_sub_total=1),
            format="json",
        )

        self.assertEqual(response.json()["total_amount"], 965.0)

    def test_line_total_beyond_amount_precision_is_rejected(self):
        rfq = self.create_rfq()
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post(
            "/api/v1/seller/quotations/",
            self.quotation_payload(
                rfq, items=[{"product_name": "Steel Pipe", "quantity": "9999999999", "unit_price": "9999999999"}]
            ),
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"], {"items": ["Item totals cannot exceed 999999999999.99."]})
        self.assertFalse(Quotation.objects.exists())

    def test_items_are_carried_from_rfq_when_omitted(self):
        rfq = self.create_rfq()
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post("/api/v1/seller/quotations/", self.quotation_payload(rfq, items=[]), format="json")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["items"][0]["product_name"], "Steel Pipe")
        self.assertEqual(response.json()["items"][0]["quantity"], 100.0)

    def test_quotation_requires_items(self):
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post(
            "/api/v1/seller/quotations/",
            {
                "buyer_company_name": "Acme Buyers",
                "quote_date_issued": days_from_today(0),
                "quote_validity_date": days_from_today(30),
                "items": [],
            },
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"], {"items": ["At least one item is required."]})

    def test_quotation_from_rfq_sent_elsewhere_is_forbidden(self):
        rfq = self.create_rfq(seller_company=self.other_seller, seller_company_name="Other Seller")
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post("/api/v1/seller/quotations/", self.quotation_payload(rfq), format="json")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Forbidden: This RFQ was not sent to your company")
        self.assertFalse(Quotation.objects.exists())

    def test_quotation_from_missing_rfq_is_not_found(self):
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post(
            "/api/v1/seller/quotations/",
            {**self.quotation_payload(self.create_rfq()), "rfq_id": str(uuid.uuid4())},
            format="json",
        )

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "RFQ not found.")

    def test_buyer_accepts_sent_quotation(self):
        rfq = self.create_rfq()
        self.client.force_authenticate(user=self.seller_user)
        quotation_id = self.client.post("/api/v1/seller/quotations/", self.quotation_payload(rfq), format="json").json()["id"]
        self.client.force_authenticate(user=self.buyer_user)

        listed = self.client.get("/api/v1/buyer/quotations/")
        accepted = self.client.patch(f"/api/v1/buyer/quotations/{quotation_id}/", {"action": "ACCEPT"}, format="json")

        self.assertEqual(listed.json()["results"][0]["available_actions"], ["accept", "reject"])
        self.assertEqual(accepted.status_code, 200)
        self.assertEqual(accepted.json()["status"], "ACCEPTED")

    def test_draft_quotation_is_hidden_from_buyer_actions_until_sent(self):
        rfq = self.create_rfq()
        self.client.force_authenticate(user=self.seller_user)
        quotation_id = self.client.post(
            "/api/v1/seller/quotations/", self.quotation_payload(rfq, status="DRAFT"), format="json"
        ).json()["id"]
        self.client.force_authenticate(user=self.buyer_user)

        early = self.client.patch(f"/api/v1/buyer/quotations/{quotation_id}/", {"action": "accept"}, format="json")
        self.client.force_authenticate(user=self.seller_user)
        sent = self.client.patch(f"/api/v1/seller/quotations/{quotation_id}/", {"action": "send"}, format="json")

        self.assertEqual(early.status_code, 400)
        self.assertEqual(sent.json()["status"], "SENT")


class ContractTests(SourcingTestCase):
    def contract_payload(self, **overrides):
        payload = {
            "buyer_company_name": "acme buyers",
            "effective_date": days_from_today(0),
            "end_date": days_from_today(365),
            "governing_law": "Dutch law",
            "items": [
                {"product_name": "Steel Pipe", "quantity": 100, "unit_price": 10},
                {"product_name": "Flange", "quantity": 20, "unit_price": "2.50"},
            ],
        }
        payload.update(overrides)
        return payload

    def create_contract_as_seller(self, **overrides):
        self.client.force_authenticate(user=self.seller_user)
        response = self.client.post("/api/v1/seller/contracts/", self.contract_payload(**overrides), format="json")
        self.assertEqual(response.status_code, 201)
        return response.json()

    def test_contract_resolves_buyer_and_defaults_agreed_value(self):
        payload = self.create_contract_as_seller()

        self.assertEqual(payload["contract_number"], "ZSXCON-001")
        self.assertEqual(payload["buyer_company"], str(self.buyer.id))
        self.assertEqual(payload["agreed_total_value"], 1050.0)
        self.assertEqual(payload["status"], "DRAFT")

    def test_explicit_agreed_value_is_kept(self):
        payload = self.create_contract_as_seller(agreed_total_value="999.99")

        self.assertEqual(payload["agreed_total_value"], 999.99)

    def test_defaulted_agreed_value_follows_item_edits(self):
        defaulted = self.create_contract_as_seller()
        negotiated = self.client.post(
            "/api/v1/seller/contracts/", self.contract_payload(agreed_total_value="999.99"), format="json"
        ).json()
        items = [{"product_name": "Steel Pipe", "quantity": 50, "unit_price": 10}]

        recomputed = self.client.patch(f"/api/v1/seller/contracts/{defaulted['id']}/", {"items": items}, format="json")
        kept = self.client.patch(f"/api/v1/seller/contracts/{negotiated['id']}/", {"items": items}, format="json")

        self.assertEqual(recomputed.status_code, 200)
        self.assertEqual(recomputed.json()["agreed_total_value"], 500.0)
        self.assertEqual(kept.status_code, 200)
        self.assertEqual(kept.json()["agreed_total_value"], 999.99)

    def test_end_date_equal_to_effective_date_is_rejected(self):
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.post(
            "/api/v1/seller/contracts/",
            self.contract_payload(end_date=days_from_today(0)),
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"], {"end_date": ["End date must be after the effective date."]})
        self.assertFalse(Contract.objects.exists())

    def test_contract_from_quotation_copies_items(self):
        rfq = self.create_rfq()
        self.client.force_authenticate(user=self.seller_user)
        quotation = self.client.post(
            "/api/v1/seller/quotations/",
            {
                "rfq_id": str(rfq.id),
                "quote_date_issued": days_from_today(0),
                "quote_validity_date": days_from_today(30),
                "items": [{"product_name": "Steel Pipe", "quantity": 100, "unit_price": 12}],
            },
            format="json",
        ).json()

        response = self.client.post(
            "/api/v1/seller/contracts/",
            self.contract_payload(quotation_id=quotation["id"], buyer_company_name="", items=[]),
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload["quotation"], quotation["id"])
        self.assertEqual(payload["rfq"], str(rfq.id))
        self.assertEqual(payload["buyer_company_name"], "Acme Buyers")
        self.assertEqual(payload["items"][0]["unit_price"], 12.0)
        self.assertEqual(payload["agreed_total_value"], 1200.0)

    def test_negotiation_round_trip(self):
        contract = self.create_contract_as_seller(status="SENT")
        url_buyer = f"/api/v1/buyer/contracts/{contract['id']}/"
        url_seller = f"/api/v1/seller/contracts/{contract['id']}/"
        self.client.force_authenticate(user=self.buyer_user)

        first = self.client.patch(url_buyer, {"action": "suggest_changes", "suggestions": "Lower the price"}, format="json")
        second = self.client.patch(url_buyer, {"action": "suggest_changes", "suggestions": "Net 60 please"}, format="json")

        self.assertEqual(first.status_code, 200)
        self.assertEqual(second.json()["status"], "PENDING_CHANGES")
        self.assertEqual(second.json()["buyer_suggestions"], "Net 60 please")
        self.assertIsNotNone(second.json()["buyer_response_date"])
        self.assertEqual(second.json()["available_actions"], ["suggest_changes"])

        self.client.force_authenticate(user=self.seller_user)
        responded = self.client.patch(url_seller, {"action": "respond", "response": "Net 45 agreed"}, format="json")

        self.assertEqual(responded.json()["status"], "SENT")
        self.assertEqual(responded.json()["seller_response"], "Net 45 agreed")
        self.assertIsNotNone(responded.json()["seller_response_date"])

        self.client.force_authenticate(user=self.buyer_user)
        accepted = self.client.patch(url_buyer, {"action": "accept"}, format="json")
        rejected = self.client.patch(url_buyer, {"action": "reject"}, format="json")

        self.assertEqual(accepted.json()["status"], "APPROVED")
        self.assertEqual(rejected.status_code, 400)
        self.assertEqual(rejected.json()["errors"], {"action": ["Cannot reject contract with status APPROVED."]})

    def test_suggestions_are_required(self):
        contract = self.create_contract_as_seller(status="SENT")
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.patch(
            f"/api/v1/buyer/contracts/{contract['id']}/", {"action": "suggest_changes", "suggestions": "  "}, format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"], {"suggestions": ["This field is required."]})
        self.assertEqual(Contract.objects.get(id=contract["id"]).status, Contract.Status.SENT)

    def test_seller_response_through_edit_reopens_contract(self):
        contract = self.create_contract_as_seller(status="SENT")
        self.client.force_authenticate(user=self.buyer_user)
        self.client.patch(
            f"/api/v1/buyer/contracts/{contract['id']}/", {"action": "suggest_changes", "suggestions": "Add warranty"}, format="json"
        )
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.patch(
            f"/api/v1/seller/contracts/{contract['id']}/", {"seller_response": "Warranty added"}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "SENT")
        self.assertIsNotNone(response.json()["seller_response_date"])

    def test_seller_signs_approved_contract(self):
        contract = self.create_contract_as_seller(status="SENT")
        self.client.force_authenticate(user=self.buyer_user)
        self.client.patch(f"/api/v1/buyer/contracts/{contract['id']}/", {"action": "accept"}, format="json")
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.patch(f"/api/v1/seller/contracts/{contract['id']}/", {"action": "sign"}, format="json")

        self.assertEqual(response.json()["status"], "SIGNED")
