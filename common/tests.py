from decimal import Decimal

from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from common.lifecycle import apply_transition
from common.money import build_line_items, compute_rollup
from common.numbering import company_initials, format_document_number
from common.ownership import company_matches
from common.serializers import LenientDecimalField
from common.testing import create_company_user
from core.models import Company
from sourcing.models import RFQ
from sourcing.workflows import CONTRACT_WORKFLOW, RFQ_WORKFLOW


class LineItemLedgerTests(SimpleTestCase):
    def test_serial_numbers_are_reassigned_in_order(self):
        lines = build_line_items(
            [
                {"serial_number": 7, "product_name": "Bolt", "quantity": "2", "unit_price": "1.005"},
                {"serial_number": 3, "product_name": "Nut", "quantity": 3, "unit_price": 4},
            ],
            priced=True,
        )

        self.assertEqual([line["serial_number"] for line in lines], [1, 2])
        self.assertEqual(lines[0]["unit_price"], Decimal("1.01"))
        self.assertEqual(lines[0]["sub_total"], Decimal("2.02"))
        self.assertEqual(lines[1]["sub_total"], Decimal("12.00"))

    def test_invalid_numbers_count_as_zero(self):
        lines = build_line_items([{"product_name": "Washer", "quantity": "abc", "unit_price": None}], priced=True)

        self.assertEqual(lines[0]["quantity"], Decimal("0.00"))
        self.assertEqual(lines[0]["sub_total"], Decimal("0.00"))

    def test_unpriced_items_drop_price_fields(self):
        lines = build_line_items([{"product_name": "Bolt", "quantity": "5", "unit_price": "3"}])

        self.assertNotIn("unit_price", lines[0])
        self.assertNotIn("sub_total", lines[0])


class LenientDecimalFieldTests(SimpleTestCase):
    def test_garbage_is_zero_but_oversized_values_are_rejected(self):
        field = LenientDecimalField()

        self.assertEqual(field.run_validation("n/a"), Decimal("0.00"))
        self.assertEqual(field.run_validation("9999999999.99"), Decimal("9999999999.99"))
        for value in ("1e30", "9999999999.995", -10000000000):
            with self.assertRaises(ValidationError):
                field.run_validation(value)


class FinancialRollupTests(SimpleTestCase):
    def test_discount_then_charges_then_tax_on_discounted_amount(self):
        rollup = compute_rollup(
            [Decimal("600"), Decimal("400")],
            discount_percentage=Decimal("10"),
            additional_charges=Decimal("20"),
            tax_percentage=Decimal("5"),
        )

        self.assertEqual(rollup.sum_of_sub_total, Decimal("1000.00"))
        self.assertEqual(rollup.discount_amount, Decimal("100.00"))
        self.assertEqual(rollup.amount_after_discount, Decimal("900.00"))
        self.assertEqual(rollup.tax_amount, Decimal("45.00"))
        self.assertEqual(rollup.total_amount, Decimal("965.00"))

    def test_missing_inputs_have_no_effect(self):
        rollup = compute_rollup(["12.345", "0.005"])

        self.assertEqual(rollup.sum_of_sub_total, Decimal("12.35"))
        self.assertEqual(rollup.total_amount, Decimal("12.35"))

    def test_amounts_round_half_up(self):
        rollup = compute_rollup([Decimal("0.10")], tax_percentage=Decimal("25"))

        self.assertEqual(rollup.tax_amount, Decimal("0.03"))


class DocumentNumberTests(SimpleTestCase):
    def test_initials_are_fitted_to_three_characters(self):
        self.assertEqual(company_initials("Marine Supplies"), "MSX")
        self.assertEqual(company_initials("acme bolt and nut works"), "ABA")
        self.assertEqual(company_initials(""), "XXX")

    def test_formats_per_document_type(self):
        self.assertEqual(format_document_number("rfq", 1, "Acme Buyers"), "RFQ-0001")
        self.assertEqual(format_document_number("quotation", 12, "Acme Corp Holdings"), "ACHQUO-012")
        self.assertEqual(format_document_number("delivery_note", 3, "Marine Supplies"), "MSXDN003")
        self.assertEqual(format_document_number("packing_list", 1, "Marine Alpha Rig"), "MARPL0001")
        self.assertEqual(format_document_number("invoice", 42, "Marine Alpha Rig"), "MARINV0042")

    def test_unknown_document_type_is_rejected(self):
        with self.assertRaises(ValueError):
            format_document_number("receipt", 1, "Acme")


class DocumentLifecycleTests(TestCase):
    def setUp(self):
        self.buyer, _ = create_company_user("Acme Buyers", Company.Type.BUYER, "lifecycle-buyer")
        today = timezone.localdate()
        self.rfq = RFQ.objects.create(
            rfq_number="RFQ-0001",
            buyer_company=self.buyer,
            buyer_company_name=self.buyer.name,
            seller_company_name="Unregistered Seller",
            date_issued=today,
            due_date=today,
        )

    def test_allowed_transition_updates_status(self):
        with self.assertLogs("common.lifecycle", level="INFO") as logs:
            transition = apply_transition(self.rfq, RFQ_WORKFLOW, action="accept", actor=Company.Type.SELLER)

        self.rfq.refresh_from_db()
        self.assertEqual(transition.target, RFQ.Status.APPROVED)
        self.assertEqual(self.rfq.status, RFQ.Status.APPROVED)
        self.assertTrue(any("document_transition" in entry for entry in logs.output))

    def test_transition_from_wrong_status_leaves_document_untouched(self):
        self.rfq.status = RFQ.Status.REJECTED
        self.rfq.save()

        with self.assertRaises(ValidationError) as ctx:
            apply_transition(self.rfq, RFQ_WORKFLOW, action="accept", actor=Company.Type.SELLER)

        self.assertEqual(ctx.exception.detail["action"][0], "Cannot accept RFQ with status REJECTED.")
        self.rfq.refresh_from_db()
        self.assertEqual(self.rfq.status, RFQ.Status.REJECTED)

    def test_action_reserved_for_the_other_side_is_invalid(self):
        with self.assertRaises(ValidationError) as ctx:
            apply_transition(self.rfq, RFQ_WORKFLOW, action="accept", actor=Company.Type.BUYER)

        self.assertEqual(ctx.exception.detail["action"][0], "Invalid action 'accept'. Valid actions: reject, complete.")

    def test_available_actions_follow_status_and_side(self):
        self.assertEqual(RFQ_WORKFLOW.available_actions(RFQ.Status.PENDING, Company.Type.SELLER), ["accept", "reject"])
        self.assertEqual(RFQ_WORKFLOW.available_actions(RFQ.Status.COMPLETED, Company.Type.BUYER), [])
        self.assertEqual(
            CONTRACT_WORKFLOW.available_actions("PENDING_CHANGES", Company.Type.SELLER),
            ["respond"],
        )


class CompanyMatchTests(TestCase):
    def setUp(self):
        self.buyer, _ = create_company_user("Acme Buyers", Company.Type.BUYER, "match-buyer")
        self.seller, _ = create_company_user("Zen Supplies", Company.Type.SELLER, "match-seller")
        today = timezone.localdate()
        self.rfq = RFQ.objects.create(
            rfq_number="RFQ-0001",
            buyer_company=self.buyer,
            seller_company_name="  zen SUPPLIES ",
            date_issued=today,
            due_date=today,
        )

    def test_name_fallback_when_counterpart_key_is_empty(self):
        self.assertTrue(company_matches(self.rfq, self.seller, "seller"))

    def test_foreign_key_wins_over_name(self):
        other, _ = create_company_user("Other Seller", Company.Type.SELLER, "match-other")
        self.rfq.seller_company = other
        self.rfq.save()

        self.assertFalse(company_matches(self.rfq, self.seller, "seller"))
        self.assertTrue(company_matches(self.rfq, other, "seller"))
