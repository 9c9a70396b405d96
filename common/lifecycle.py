from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    action: str
    sources: tuple[str, ...]
    target: str | None
    actors: tuple[str, ...]
    note_param: str | None = None
    note_field: str | None = None
    note_date_field: str | None = None
    note_required: bool = False


class Workflow:
    """Closed transition table for one document type.

    A ``target`` of ``None`` means the action keeps the current status and
    the caller decides the outcome (partial payments).
    """

    def __init__(self, document_label: str, transitions: Iterable[Transition]):
        self.document_label = document_label
        self.transitions = tuple(transitions)

    def actions_for(self, actor: str) -> list[str]:
        names = []
        for transition in self.transitions:
            if actor in transition.actors and transition.action not in names:
                names.append(transition.action)
        return names

    def available_actions(self, status: str, actor: str | None) -> list[str]:
        if actor is None:
            return []
        return [
            transition.action
            for transition in self.transitions
            if actor in transition.actors and status in transition.sources
        ]

    def resolve(self, status: str, action: str, actor: str) -> Transition:
        valid_actions = self.actions_for(actor)
        if action not in valid_actions:
            raise ValidationError(
                {"action": [f"Invalid action '{action}'. Valid actions: {', '.join(valid_actions) or 'none'}."]}
            )

        for transition in self.transitions:
            if transition.action == action and actor in transition.actors and status in transition.sources:
                return transition

        raise ValidationError({"action": [f"Cannot {action} {self.document_label} with status {status}."]})


@transaction.atomic
def apply_transition(document, workflow: Workflow, *, action: str, actor: str, payload: Mapping[str, Any] | None = None) -> Transition:
    payload = payload or {}
    transition = workflow.resolve(document.status, action, actor)
    previous_status = document.status
    update_fields = ["updated_at"]

    if transition.note_field:
        note = (payload.get(transition.note_param) or "").strip() if transition.note_param else ""
        if transition.note_required and not note:
            raise ValidationError({transition.note_param: ["This field is required."]})
        if note:
            # Repeated notes overwrite the previous one.
            setattr(document, transition.note_field, note)
            update_fields.append(transition.note_field)
            if transition.note_date_field:
                setattr(document, transition.note_date_field, timezone.now())
                update_fields.append(transition.note_date_field)

    if transition.target is not None:
        document.status = transition.target
        update_fields.append("status")

    document.save(update_fields=update_fields)
    logger.info(
        "document_transition",
        extra={
            "document": workflow.document_label,
            "document_id": str(document.pk),
            "action": action,
            "from_status": previous_status,
            "to_status": document.status,
        },
    )
    return transition
