"""
Appointment lifecycle state machine

    Pending ──> Confirmed ──> Completed
       │            │
       └──> Canceled <┘

Canceled and Completed are terminal. Requesting the current status again is
an idempotent no-op.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import InvalidTransition
from ...models import Appointment, AppointmentStatus
from ..access.policy import PolicyEngine, Principal, ResourceSnapshot, action_for_status
from .repository import AppointmentRepository

logger = logging.getLogger(__name__)

TRANSITIONS: dict[AppointmentStatus, frozenset] = {
    AppointmentStatus.PENDING: frozenset({AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELED}),
    AppointmentStatus.CONFIRMED: frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELED}),
    AppointmentStatus.CANCELED: frozenset(),
    AppointmentStatus.COMPLETED: frozenset(),
}

TERMINAL_STATES = frozenset(status for status, targets in TRANSITIONS.items() if not targets)


def is_legal_transition(current: AppointmentStatus, requested: AppointmentStatus) -> bool:
    """True for edges of the graph above and for self-loops"""
    current = AppointmentStatus(current)
    requested = AppointmentStatus(requested)
    return requested == current or requested in TRANSITIONS[current]


def validate_transition(current: AppointmentStatus, requested: AppointmentStatus) -> None:
    if not is_legal_transition(current, requested):
        raise InvalidTransition(
            f"Cannot change appointment status from {AppointmentStatus(current).value} "
            f"to {AppointmentStatus(requested).value}"
        )


class AppointmentLifecycle:
    """Validates and applies status transitions on behalf of a principal"""

    def __init__(self, db: Session, policy: PolicyEngine):
        self.db = db
        self.policy = policy
        self.repo = AppointmentRepository()

    def transition(
        self,
        appointment: Appointment,
        requested: AppointmentStatus,
        principal: Optional[Principal],
    ) -> Appointment:
        """
        Move ``appointment`` to ``requested``.

        Authorization for the class of transition (cancel / confirm / complete)
        is checked before graph legality, so a customer asking for Completed is
        refused as Forbidden rather than told the edge does not exist.
        Only the status column changes.
        """
        requested = AppointmentStatus(requested)
        current = appointment.status

        # Authorization before legality: a customer cancelling a Completed
        # appointment is Forbidden, not InvalidTransition.
        decision = self.policy.authorize(
            principal, action_for_status(requested), ResourceSnapshot.of(appointment)
        )
        decision.raise_for_denial()

        if requested == current:
            logger.info(f"↩️ Appointment {appointment.id} already {current.value}; nothing to do")
            return appointment

        validate_transition(current, requested)

        updated = self.repo.update_status(self.db, appointment, requested)
        logger.info(
            f"✅ Appointment {appointment.id} transitioned: {current.value} → {requested.value} "
            f"(by user {principal.user_id})"
        )
        return updated
