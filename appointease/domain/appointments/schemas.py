"""Appointment domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ...models import Appointment, AppointmentStatus, ServiceCategory


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment"""

    customerId: int
    providerId: int
    serviceId: int
    employeeId: Optional[int] = None
    date: datetime
    notes: Optional[str] = Field(None, max_length=2000)


class AppointmentStatusUpdate(BaseModel):
    """Schema for a status change request"""

    status: AppointmentStatus


class AppointmentResponse(BaseModel):
    """Schema for appointment response"""

    id: int
    customerId: int
    providerId: int
    serviceId: int
    employeeId: Optional[int] = None
    date: datetime
    duration: int
    status: AppointmentStatus
    notes: Optional[str] = None
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, appointment: Appointment) -> "AppointmentResponse":
        return cls(
            id=appointment.id,
            customerId=appointment.customer_id,
            providerId=appointment.provider_id,
            serviceId=appointment.service_id,
            employeeId=appointment.employee_id,
            date=appointment.date,
            duration=appointment.duration,
            status=appointment.status,
            notes=appointment.notes,
            createdAt=appointment.created_at,
        )


class AppointmentListItem(AppointmentResponse):
    """Appointment enriched with display names for dashboards"""

    serviceName: Optional[str] = None
    serviceCategory: Optional[ServiceCategory] = None
    customerName: str = "Unknown"
    employeeName: Optional[str] = None

    @classmethod
    def from_model(cls, appointment: Appointment) -> "AppointmentListItem":
        base = AppointmentResponse.from_model(appointment).model_dump()
        service = appointment.service
        customer = appointment.customer
        employee = appointment.employee
        return cls(
            **base,
            serviceName=service.name if service else None,
            serviceCategory=service.category if service else None,
            customerName=customer.full_name if customer else "Unknown",
            employeeName=employee.full_name if employee else None,
        )
