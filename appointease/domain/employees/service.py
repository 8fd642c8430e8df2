"""Employee service - Business logic for provider staff"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import NotFound
from ...models import Employee
from ...utils.sanitization import sanitize_string
from ..access.ownership import OwnershipResolver
from ..access.policy import Action, PolicyEngine, Principal, ResourceSnapshot
from ..providers.repository import ProviderRepository
from .repository import EmployeeRepository
from .schemas import EmployeeCreate, EmployeeUpdate

logger = logging.getLogger(__name__)

# request field -> column
UPDATABLE_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "phone": "phone",
    "position": "position",
    "department": "department",
    "workingHours": "working_hours",
    "isActive": "is_active",
}

# free-text columns escaped before storage
TEXT_FIELDS = frozenset({"first_name", "last_name", "position", "department"})


class EmployeeService:
    """Service layer for employee management"""

    def __init__(self, db: Session, policy: Optional[PolicyEngine] = None):
        self.db = db
        self.repo = EmployeeRepository()
        self.provider_repo = ProviderRepository()
        self.policy = policy or PolicyEngine(OwnershipResolver(db))

    def list_employees(self, provider_id: Optional[int] = None) -> list[Employee]:
        return self.repo.get_employees(self.db, provider_id)

    def get_employee(self, employee_id: int) -> Employee:
        employee = self.repo.get_employee_by_id(self.db, employee_id)
        if not employee:
            raise NotFound("Employee not found")
        return employee

    def create_employee(self, data: EmployeeCreate, principal: Principal) -> Employee:
        self.policy.authorize(
            principal,
            Action.CREATE_EMPLOYEE,
            ResourceSnapshot(kind="Employee", provider_id=data.providerId),
        ).raise_for_denial()

        if not self.provider_repo.get_provider_by_id(self.db, data.providerId):
            raise NotFound("Provider not found")

        employee = self.repo.create_employee(
            self.db,
            data.providerId,
            first_name=sanitize_string(data.firstName),
            last_name=sanitize_string(data.lastName),
            email=data.email,
            phone=data.phone,
            position=sanitize_string(data.position),
            department=sanitize_string(data.department),
            working_hours=data.workingHours,
        )
        logger.info(f"✅ Employee {employee.id} added to provider {employee.provider_id}")
        return employee

    def update_employee(
        self, employee_id: int, data: EmployeeUpdate, principal: Principal
    ) -> Employee:
        employee = self.get_employee(employee_id)
        self.policy.authorize(
            principal, Action.UPDATE_EMPLOYEE, ResourceSnapshot.of(employee)
        ).raise_for_denial()

        provided = data.model_dump(exclude_unset=True)
        updates = {}
        for key, value in provided.items():
            column = UPDATABLE_FIELDS[key]
            updates[column] = sanitize_string(value) if column in TEXT_FIELDS else value
        return self.repo.update_employee(self.db, employee, **updates)

    def delete_employee(self, employee_id: int, principal: Principal) -> dict:
        """Soft delete: deactivate the employee, keep history intact"""
        employee = self.get_employee(employee_id)
        self.policy.authorize(
            principal, Action.DELETE_EMPLOYEE, ResourceSnapshot.of(employee)
        ).raise_for_denial()

        self.repo.soft_delete_employee(self.db, employee)
        logger.info(f"🗑️ Employee {employee.id} deactivated by user {principal.user_id}")
        return {"message": "Employee deleted successfully"}
