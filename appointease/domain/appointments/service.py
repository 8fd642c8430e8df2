"""Appointment service - Business logic for booking and status changes"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import Forbidden, NotFound
from ...models import Appointment, AppointmentStatus, UserRole
from ...utils.sanitization import sanitize_string
from ..access.ownership import OwnershipResolver
from ..access.policy import Action, PolicyEngine, Principal, ResourceSnapshot
from .booking import BookingValidator
from .lifecycle import AppointmentLifecycle
from .repository import AppointmentRepository
from .schemas import AppointmentCreate

logger = logging.getLogger(__name__)


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session, policy: Optional[PolicyEngine] = None):
        self.db = db
        self.repo = AppointmentRepository()
        self.resolver = OwnershipResolver(db)
        self.policy = policy or PolicyEngine(self.resolver)
        self.validator = BookingValidator(db, self.policy)
        self.lifecycle = AppointmentLifecycle(db, self.policy)

    def list_appointments(
        self,
        principal: Principal,
        status: Optional[AppointmentStatus] = None,
        customer_id: Optional[int] = None,
        provider_id: Optional[int] = None,
    ) -> list[Appointment]:
        """
        Appointments visible to the caller: own bookings, own provider's, or all for admins.

        Admins may filter by any customer or provider. Other roles may only
        narrow within their own scope; asking for someone else's is Forbidden.
        """
        self.policy.authorize(principal, Action.LIST_APPOINTMENTS).raise_for_denial()

        if principal.role == UserRole.CUSTOMER:
            if customer_id is not None and customer_id != principal.user_id:
                raise Forbidden("You can only view your own appointments")
            customer_id = principal.user_id

        elif principal.role == UserRole.PROVIDER:
            own_provider_id = self.resolver.resolve_provider_for_user(principal.user_id).id
            if provider_id is not None and provider_id != own_provider_id:
                raise Forbidden("You can only view your own provider's appointments")
            provider_id = own_provider_id

        return self.repo.get_appointments(
            self.db, customer_id=customer_id, provider_id=provider_id, status=status
        )

    def get_appointment(self, appointment_id: int, principal: Principal) -> Appointment:
        """Get a specific appointment; existence is checked before permission"""
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise NotFound("Appointment not found")

        self.policy.authorize(
            principal, Action.VIEW_APPOINTMENT, ResourceSnapshot.of(appointment)
        ).raise_for_denial()
        return appointment

    def create_appointment(self, data: AppointmentCreate, principal: Principal) -> Appointment:
        """Validate and book a new appointment in Pending"""
        logger.info(
            f"📥 Booking request from user {principal.user_id}: provider {data.providerId}, "
            f"service {data.serviceId}"
        )
        draft = self.validator.validate(data, principal)

        appointment_data = draft.as_dict()
        appointment_data["notes"] = sanitize_string(draft.notes)
        appointment = self.repo.create_appointment(self.db, **appointment_data)

        logger.info(f"✅ Appointment {appointment.id} created for customer {appointment.customer_id}")
        return appointment

    def update_status(
        self, appointment_id: int, status: AppointmentStatus, principal: Principal
    ) -> Appointment:
        """Apply a status transition under a row lock"""
        appointment = self.repo.get_appointment_for_update(self.db, appointment_id)
        if not appointment:
            raise NotFound("Appointment not found")

        return self.lifecycle.transition(appointment, status, principal)
