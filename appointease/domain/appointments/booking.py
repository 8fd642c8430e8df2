"""Booking validator - referential checks for new appointments"""

import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import InvalidService, NotFound, ServiceProviderMismatch, ValidationError
from ...models import AppointmentStatus, UserRole
from ..access.policy import Action, PolicyEngine, Principal, ResourceSnapshot
from ..employees.repository import EmployeeRepository
from ..services.repository import ServiceRepository
from ..users.repository import UserRepository
from .schemas import AppointmentCreate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppointmentDraft:
    """A booking that passed validation and is ready to be persisted"""

    customer_id: int
    provider_id: int
    service_id: int
    employee_id: Optional[int]
    date: datetime
    duration: int
    status: AppointmentStatus
    created_at: datetime
    notes: Optional[str] = None

    def as_dict(self) -> dict:
        return asdict(self)


def to_utc_naive(value: datetime) -> datetime:
    """Store every appointment time as naive UTC"""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class BookingValidator:
    """
    Checks, in order:

    1. a customer books only for themselves;
    2. a provider books only against their own provider;
    3. the service exists (InvalidService);
    4. the service belongs to the requested provider (ServiceProviderMismatch);
    5. the employee, when given, exists and works for that provider;
    6. the customer exists (admins and providers book for others).

    No overlap or double-booking detection is performed.
    """

    def __init__(self, db: Session, policy: PolicyEngine):
        self.db = db
        self.policy = policy
        self.service_repo = ServiceRepository()
        self.employee_repo = EmployeeRepository()
        self.user_repo = UserRepository()

    def validate(self, request: AppointmentCreate, principal: Optional[Principal]) -> AppointmentDraft:
        snapshot = ResourceSnapshot(
            kind="Appointment",
            customer_id=request.customerId,
            provider_id=request.providerId,
        )
        self.policy.authorize(principal, Action.CREATE_APPOINTMENT, snapshot).raise_for_denial()

        service = self.service_repo.get_service_by_id(self.db, request.serviceId)
        if not service:
            logger.warning(f"⚠️ Booking rejected: service {request.serviceId} does not exist")
            raise InvalidService(f"Service {request.serviceId} does not exist")

        if service.provider_id != request.providerId:
            logger.warning(
                f"⚠️ Booking rejected: service {service.id} belongs to provider "
                f"{service.provider_id}, not {request.providerId}"
            )
            raise ServiceProviderMismatch()

        if request.employeeId is not None:
            employee = self.employee_repo.get_employee_by_id(self.db, request.employeeId)
            if not employee:
                raise NotFound(f"Employee {request.employeeId} does not exist")
            if employee.provider_id != request.providerId:
                logger.warning(
                    f"⚠️ Booking rejected: employee {employee.id} works for provider "
                    f"{employee.provider_id}, not {request.providerId}"
                )
                raise ValidationError("Employee does not work for the selected provider")

        if principal.role != UserRole.CUSTOMER:
            if not self.user_repo.get_user_by_id(self.db, request.customerId):
                raise NotFound(f"Customer {request.customerId} does not exist")

        return AppointmentDraft(
            customer_id=request.customerId,
            provider_id=request.providerId,
            service_id=request.serviceId,
            employee_id=request.employeeId,
            date=to_utc_naive(request.date),
            duration=service.duration,
            status=AppointmentStatus.PENDING,
            created_at=datetime.now(timezone.utc).replace(tzinfo=None),
            notes=request.notes,
        )
