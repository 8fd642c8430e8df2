"""Appointment repository - Database operations for appointments"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Appointment, AppointmentStatus


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def get_appointments(
        db: Session,
        customer_id: Optional[int] = None,
        provider_id: Optional[int] = None,
        status: Optional[AppointmentStatus] = None,
    ) -> list[Appointment]:
        """List appointments with the related rows needed for enrichment"""
        query = db.query(Appointment).options(
            joinedload(Appointment.service),
            joinedload(Appointment.customer),
            joinedload(Appointment.employee),
        )

        if customer_id is not None:
            query = query.filter(Appointment.customer_id == customer_id)

        if provider_id is not None:
            query = query.filter(Appointment.provider_id == provider_id)

        if status is not None:
            query = query.filter(Appointment.status == status)

        return query.order_by(Appointment.date.desc(), Appointment.id.desc()).all()

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: int) -> Optional[Appointment]:
        return db.query(Appointment).filter(Appointment.id == appointment_id).first()

    @staticmethod
    def get_appointment_for_update(db: Session, appointment_id: int) -> Optional[Appointment]:
        """Load an appointment with a row lock (ignored by SQLite) for read-modify-write"""
        return (
            db.query(Appointment)
            .filter(Appointment.id == appointment_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    @staticmethod
    def create_appointment(db: Session, **appointment_data) -> Appointment:
        """Create a new appointment"""
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def update_status(
        db: Session, appointment: Appointment, status: AppointmentStatus
    ) -> Appointment:
        """Persist a status change; no other column is touched"""
        appointment.status = status
        db.commit()
        db.refresh(appointment)
        return appointment
