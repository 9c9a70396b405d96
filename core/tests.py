from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from common.testing import create_company_user, create_purchase_order
from core.models import AuditLog, Company
from fulfillment.models import Invoice
from sourcing.models import RFQ


def registration_payload(**overrides):
    payload = {
        "username": "new-seller",
        "email": "Sales@NewSeller.example",
        "password": "pass12345",
        "first_name": "Nia",
        "last_name": "Seller",
        "company_name": "New Seller",
        "company_type": "SELLER",
        "company_city": "Hamburg",
    }
    payload.update(overrides)
    return payload


class RegistrationTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.buyer, self.buyer_user = create_company_user("Acme Buyers", Company.Type.BUYER, "reg-buyer")

    def test_registration_creates_company_and_user(self):
        response = self.client.post("/api/v1/register/", registration_payload(), format="json", HTTP_X_REQUEST_ID="req-reg")

        self.assertEqual(response.status_code, 201)
        user = get_user_model().objects.get(username="new-seller")
        self.assertEqual(user.email, "sales@newseller.example")
        self.assertEqual(user.company.name, "New Seller")
        self.assertEqual(user.company.type, Company.Type.SELLER)
        self.assertEqual(user.company.city, "Hamburg")
        self.assertTrue(AuditLog.objects.filter(action="company.register", request_id="req-reg").exists())

    def test_registration_links_documents_that_named_the_company(self):
        today = timezone.localdate()
        rfq = RFQ.objects.create(
            rfq_number="RFQ-0001",
            buyer_company=self.buyer,
            buyer_company_name=self.buyer.name,
            seller_company_name="new seller",
            date_issued=today,
            due_date=today,
        )

        response = self.client.post("/api/v1/register/", registration_payload(), format="json")

        self.assertEqual(response.status_code, 201)
        rfq.refresh_from_db()
        self.assertEqual(str(rfq.seller_company_id), response.json()["company"]["id"])

    def test_registration_rejects_duplicate_company_name_case_insensitively(self):
        response = self.client.post(
            "/api/v1/register/",
            registration_payload(company_name="ACME buyers", company_type="BUYER"),
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"], {"company_name": ["A company with this name is already registered."]})

    def test_same_name_may_register_on_the_other_side(self):
        response = self.client.post("/api/v1/register/", registration_payload(company_name="Acme Buyers"), format="json")

        self.assertEqual(response.status_code, 201)

    def test_registration_rejects_case_insensitive_duplicate_email(self):
        self.client.post("/api/v1/register/", registration_payload(), format="json")
        response = self.client.post(
            "/api/v1/register/",
            registration_payload(username="other", email="SALES@newseller.example", company_name="Other Seller"),
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"], {"email": ["A user with this email already exists."]})


class TokenTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.company, self.user = create_company_user("Zen Supplies", Company.Type.SELLER, "token-seller")
        self.user.email = "token@zen.example"
        self.user.save()

    def test_token_carries_company_claims_and_accepts_email_login(self):
        response = self.client.post(
            "/api/v1/token/",
            {"username": "TOKEN@zen.example", "password": "pass1234"},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        token = AccessToken(response.json()["access"])
        self.assertEqual(token["company_id"], str(self.company.id))
        self.assertEqual(token["company_type"], "SELLER")
        self.assertEqual(token["company_name"], "Zen Supplies")


class CompanyAccessTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.buyer, self.buyer_user = create_company_user("Acme Buyers", Company.Type.BUYER, "access-buyer")
        self.seller, self.seller_user = create_company_user("Zen Supplies", Company.Type.SELLER, "access-seller")
        self.orphan = get_user_model().objects.create_user(username="orphan", password="pass1234")

    def test_seller_cannot_use_buyer_routes_and_denial_is_logged(self):
        self.client.force_authenticate(user=self.seller_user)
        with self.assertLogs("security.authorization", level="WARNING") as cm:
            response = self.client.get("/api/v1/buyer/rfqs/")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Forbidden: Only buyer companies can access this resource.")
        self.assertTrue(any("permission_denied" in message for message in cm.output))

    def test_buyer_cannot_use_seller_routes(self):
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.get("/api/v1/seller/sales-orders/")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Forbidden: Only seller companies can access this resource.")

    def test_error_envelope_carries_request_id(self):
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.get("/api/v1/buyer/rfqs/00000000-0000-0000-0000-000000000000/", HTTP_X_REQUEST_ID="req-404")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            response.json(),
            {"code": "not_found", "message": "RFQ not found.", "errors": None, "status": 404, "request_id": "req-404"},
        )

    def test_user_without_company_is_rejected(self):
        self.client.force_authenticate(user=self.orphan)

        response = self.client.get("/api/v1/buyer/dashboard/")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Authenticated user must belong to a company.")

    def test_unauthenticated_requests_are_rejected(self):
        response = self.client.get("/api/v1/seller/rfqs/")

        self.assertEqual(response.status_code, 401)


class CompanyProfileTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.buyer, self.buyer_user = create_company_user("Acme Buyers", Company.Type.BUYER, "profile-buyer")
        self.seller, self.seller_user = create_company_user("Zen Supplies", Company.Type.SELLER, "profile-seller")

    def test_rename_keeps_document_snapshots_and_audits(self):
        purchase_order = create_purchase_order(self.buyer, self.seller)
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.patch("/api/v1/company/", {"name": "Zen Global"}, format="json")

        self.assertEqual(response.status_code, 200)
        purchase_order.refresh_from_db()
        self.assertEqual(purchase_order.seller_company_name, "Zen Supplies")
        self.assertTrue(AuditLog.objects.filter(action="company.update", company=self.seller).exists())

    def test_company_type_cannot_be_changed(self):
        self.client.force_authenticate(user=self.seller_user)

        response = self.client.patch("/api/v1/company/", {"type": "BUYER"}, format="json")

        self.assertEqual(response.status_code, 200)
        self.seller.refresh_from_db()
        self.assertEqual(self.seller.type, Company.Type.SELLER)


class DashboardTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.buyer, self.buyer_user = create_company_user("Acme Buyers", Company.Type.BUYER, "dash-buyer")
        self.seller, self.seller_user = create_company_user("Zen Supplies", Company.Type.SELLER, "dash-seller")
        self.other_buyer, _ = create_company_user("Other Buyers", Company.Type.BUYER, "dash-other")

    def test_buyer_dashboard_counts_only_own_documents(self):
        purchase_order = create_purchase_order(self.buyer, self.seller, total_amount="965.00")
        create_purchase_order(self.buyer, self.seller, status="DRAFT", po_number="ABXPO-002", total_amount="100.00")
        create_purchase_order(self.other_buyer, self.seller, po_number="OBXPO-001", total_amount="500.00")
        Invoice.objects.create(
            invoice_number="ZSXINV0001",
            seller_company=self.seller,
            seller_company_name=self.seller.name,
            buyer_company=self.buyer,
            buyer_company_name=self.buyer.name,
            purchase_order=purchase_order,
            status=Invoice.Status.PENDING,
            invoice_date=timezone.localdate(),
            total_amount="965.00",
            paid_amount="500.00",
            remaining_amount="465.00",
        )
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.get("/api/v1/buyer/dashboard/")

        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["documents"]["purchase_orders"], {"total": 2, "by_status": {"APPROVED": 1, "DRAFT": 1}})
        self.assertEqual(payload["documents"]["invoices"]["by_status"], {"PENDING": 1})
        self.assertEqual(payload["purchase_order_value"], 1065.0)
        self.assertEqual(payload["invoice_outstanding"], 465.0)
        self.assertNotIn("sales_orders", payload["documents"])

    def test_seller_dashboard_route_rejects_buyers(self):
        self.client.force_authenticate(user=self.buyer_user)

        response = self.client.get("/api/v1/seller/dashboard/")

        self.assertEqual(response.status_code, 403)


class AuditLogTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.buyer, self.buyer_user = create_company_user("Acme Buyers", Company.Type.BUYER, "audit-buyer")
        self.seller, self.seller_user = create_company_user("Zen Supplies", Company.Type.SELLER, "audit-seller")

    def test_audit_logs_are_company_scoped_and_read_only(self):
        own = AuditLog.objects.create(action="rfq.create", entity="rfq", company=self.buyer, actor=self.buyer_user)
        AuditLog.objects.create(action="quotation.create", entity="quotation", company=self.seller, actor=self.seller_user)
        self.client.force_authenticate(user=self.buyer_user)

        list_res = self.client.get("/api/v1/audit-logs/")
        patch_res = self.client.patch(f"/api/v1/audit-logs/{own.id}/", {"action": "changed"}, format="json")

        self.assertEqual(list_res.status_code, 200)
        self.assertEqual([item["id"] for item in list_res.json()["results"]], [str(own.id)])
        self.assertEqual(patch_res.status_code, 405)


class HealthTests(TestCase):
    def test_health_endpoints_echo_request_id(self):
        client = APIClient()

        health = client.get("/api/v1/healthz/", HTTP_X_REQUEST_ID="req-health")
        ready = client.get("/api/v1/readyz/")

        self.assertEqual(health.status_code, 200)
        self.assertEqual(health.json()["request_id"], "req-health")
        self.assertEqual(health["X-Request-ID"], "req-health")
        self.assertEqual(ready.json()["status"], "ready")
