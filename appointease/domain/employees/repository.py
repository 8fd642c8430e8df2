"""Employee repository - Database operations for provider staff"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Employee


class EmployeeRepository:
    """Repository for employee database operations"""

    @staticmethod
    def get_employees(db: Session, provider_id: Optional[int] = None) -> list[Employee]:
        """List active employees, optionally for one provider"""
        query = db.query(Employee).filter(Employee.is_active.is_(True))

        if provider_id is not None:
            query = query.filter(Employee.provider_id == provider_id)

        return query.order_by(Employee.last_name, Employee.first_name).all()

    @staticmethod
    def get_employee_by_id(db: Session, employee_id: int) -> Optional[Employee]:
        """Get an employee by ID, including deactivated ones"""
        return db.query(Employee).filter(Employee.id == employee_id).first()

    @staticmethod
    def create_employee(db: Session, provider_id: int, **employee_data) -> Employee:
        """Create a new employee"""
        employee = Employee(provider_id=provider_id, **employee_data)
        db.add(employee)
        db.commit()
        db.refresh(employee)
        return employee

    @staticmethod
    def update_employee(db: Session, employee: Employee, **updates) -> Employee:
        """Update an employee with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(employee, key):
                setattr(employee, key, value)

        db.commit()
        db.refresh(employee)
        return employee

    @staticmethod
    def soft_delete_employee(db: Session, employee: Employee) -> Employee:
        """Deactivate an employee instead of removing the row"""
        employee.is_active = False
        db.commit()
        db.refresh(employee)
        return employee
