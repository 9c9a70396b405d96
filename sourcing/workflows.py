from common.lifecycle import Transition, Workflow
from core.models import Company
from sourcing.models import RFQ, Contract, Quotation

BUYER = Company.Type.BUYER
SELLER = Company.Type.SELLER

RFQ_OPEN = (RFQ.Status.DRAFT, RFQ.Status.PENDING)

RFQ_WORKFLOW = Workflow(
    "RFQ",
    [
        Transition("accept", RFQ_OPEN, RFQ.Status.APPROVED, (SELLER,)),
        Transition("reject", RFQ_OPEN, RFQ.Status.REJECTED, (SELLER, BUYER)),
        Transition("complete", (RFQ.Status.APPROVED,), RFQ.Status.COMPLETED, (BUYER,)),
    ],
)

QUOTATION_OPEN = (Quotation.Status.SENT, Quotation.Status.PENDING)

QUOTATION_WORKFLOW = Workflow(
    "quotation",
    [
        Transition("send", (Quotation.Status.DRAFT,), Quotation.Status.SENT, (SELLER,)),
        Transition("accept", QUOTATION_OPEN, Quotation.Status.ACCEPTED, (BUYER,)),
        Transition("reject", QUOTATION_OPEN, Quotation.Status.REJECTED, (BUYER,)),
    ],
)

CONTRACT_DECIDABLE = (Contract.Status.DRAFT, Contract.Status.SENT)

CONTRACT_WORKFLOW = Workflow(
    "contract",
    [
        Transition("send", (Contract.Status.DRAFT,), Contract.Status.SENT, (SELLER,)),
        Transition("accept", CONTRACT_DECIDABLE, Contract.Status.APPROVED, (BUYER,)),
        Transition("reject", CONTRACT_DECIDABLE, Contract.Status.REJECTED, (BUYER,)),
        Transition(
            "suggest_changes",
            (Contract.Status.DRAFT, Contract.Status.SENT, Contract.Status.PENDING_CHANGES),
            Contract.Status.PENDING_CHANGES,
            (BUYER,),
            note_param="suggestions",
            note_field="buyer_suggestions",
            note_date_field="buyer_response_date",
            note_required=True,
        ),
        Transition(
            "respond",
            (Contract.Status.PENDING_CHANGES,),
            Contract.Status.SENT,
            (SELLER,),
            note_param="response",
            note_field="seller_response",
            note_date_field="seller_response_date",
            note_required=True,
        ),
        Transition("sign", (Contract.Status.APPROVED,), Contract.Status.SIGNED, (SELLER,)),
    ],
)

# Contracts a purchase order may be raised against.
CONTRACT_ORDERABLE = (Contract.Status.APPROVED, Contract.Status.SIGNED)
