"""Appointment router - FastAPI endpoints for booking and lifecycle"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_principal
from ...database import get_db
from ...models import AppointmentStatus
from ..access.policy import Principal
from .schemas import (
    AppointmentCreate,
    AppointmentListItem,
    AppointmentResponse,
    AppointmentStatusUpdate,
)
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


@router.get("", response_model=list[AppointmentListItem])
async def list_appointments(
    status: Optional[AppointmentStatus] = Query(None, description="Filter by status"),
    customerId: Optional[int] = Query(None, description="Filter by customer (admin, or yourself)"),
    providerId: Optional[int] = Query(None, description="Filter by provider (admin, or your own)"),
    principal: Principal = Depends(get_current_principal),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Appointments for the caller, scoped by role"""
    appointments = service.list_appointments(
        principal, status, customer_id=customerId, provider_id=providerId
    )
    return [AppointmentListItem.from_model(a) for a in appointments]


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: int,
    principal: Principal = Depends(get_current_principal),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Get a specific appointment"""
    return AppointmentResponse.from_model(service.get_appointment(appointment_id, principal))


@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    principal: Principal = Depends(get_current_principal),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book a new appointment (starts in Pending)"""
    return AppointmentResponse.from_model(service.create_appointment(data, principal))


@router.patch("/{appointment_id}/status", response_model=AppointmentResponse)
async def update_appointment_status(
    appointment_id: int,
    data: AppointmentStatusUpdate,
    principal: Principal = Depends(get_current_principal),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Confirm, cancel or complete an appointment"""
    appointment = service.update_status(appointment_id, data.status, principal)
    return AppointmentResponse.from_model(appointment)
