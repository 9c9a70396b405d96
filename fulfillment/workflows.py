from common.lifecycle import Transition, Workflow
from core.models import Company
from fulfillment.models import DeliveryNote, Invoice, PackingList

BUYER = Company.Type.BUYER
SELLER = Company.Type.SELLER

DN_OPEN = (DeliveryNote.Status.PENDING, DeliveryNote.Status.IN_TRANSIT)

DELIVERY_NOTE_WORKFLOW = Workflow(
    "delivery note",
    [
        Transition("dispatch", (DeliveryNote.Status.PENDING,), DeliveryNote.Status.IN_TRANSIT, (SELLER,)),
        Transition(
            "acknowledge",
            DN_OPEN,
            DeliveryNote.Status.ACKNOWLEDGED,
            (BUYER,),
            note_param="remarks",
            note_field="buyer_remarks",
            note_date_field="buyer_response_date",
        ),
        Transition(
            "dispute",
            DN_OPEN,
            DeliveryNote.Status.DISPUTED,
            (BUYER,),
            note_param="remarks",
            note_field="buyer_remarks",
            note_date_field="buyer_response_date",
        ),
        Transition("complete", (*DN_OPEN, DeliveryNote.Status.ACKNOWLEDGED), DeliveryNote.Status.COMPLETED, (SELLER,)),
        Transition("cancel", DN_OPEN, DeliveryNote.Status.CANCELLED, (SELLER,)),
    ],
)

PL_OPEN = (PackingList.Status.RECEIVED, PackingList.Status.PENDING, PackingList.Status.APPROVED)

PACKING_LIST_WORKFLOW = Workflow(
    "packing list",
    [
        Transition(
            "acknowledge",
            PL_OPEN,
            PackingList.Status.ACKNOWLEDGED,
            (BUYER,),
            note_param="remarks",
            note_field="buyer_remarks",
            note_date_field="buyer_response_date",
        ),
        Transition(
            "reject",
            PL_OPEN,
            PackingList.Status.REJECTED,
            (BUYER,),
            note_param="remarks",
            note_field="buyer_remarks",
            note_date_field="buyer_response_date",
        ),
    ],
)

INVOICE_PAYABLE = (Invoice.Status.PENDING, Invoice.Status.OVERDUE)

INVOICE_WORKFLOW = Workflow(
    "invoice",
    [
        Transition("accept", (Invoice.Status.DRAFT,), Invoice.Status.PENDING, (BUYER,)),
        Transition("reject", (Invoice.Status.DRAFT, Invoice.Status.PENDING), Invoice.Status.DRAFT, (BUYER,)),
        Transition("send", (Invoice.Status.DRAFT,), Invoice.Status.PENDING, (SELLER,)),
        Transition("mark_overdue", (Invoice.Status.PENDING,), Invoice.Status.OVERDUE, (SELLER,)),
        Transition("pay", INVOICE_PAYABLE, Invoice.Status.PAID, (BUYER,)),
        # Status follows the balance once the payment is recorded.
        Transition("partial_pay", INVOICE_PAYABLE, None, (BUYER,)),
    ],
)

SETTLEMENT_ACTIONS = ("pay", "partial_pay")
