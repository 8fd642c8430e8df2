"""Employee router - FastAPI endpoints for provider staff"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_principal
from ...database import get_db
from ..access.policy import Principal
from .schemas import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from .service import EmployeeService

router = APIRouter(prefix="/employees", tags=["Employees"])


def get_employee_service(db: Session = Depends(get_db)) -> EmployeeService:
    """Dependency injection for EmployeeService"""
    return EmployeeService(db)


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    providerId: Optional[int] = Query(None),
    service: EmployeeService = Depends(get_employee_service),
):
    """Active employees, optionally for one provider"""
    return [EmployeeResponse.from_model(e) for e in service.list_employees(providerId)]


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
):
    return EmployeeResponse.from_model(service.get_employee(employee_id))


@router.post("", response_model=EmployeeResponse, status_code=201)
async def create_employee(
    data: EmployeeCreate,
    principal: Principal = Depends(get_current_principal),
    service: EmployeeService = Depends(get_employee_service),
):
    return EmployeeResponse.from_model(service.create_employee(data, principal))


@router.patch("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    data: EmployeeUpdate,
    principal: Principal = Depends(get_current_principal),
    service: EmployeeService = Depends(get_employee_service),
):
    return EmployeeResponse.from_model(service.update_employee(employee_id, data, principal))


@router.delete("/{employee_id}")
async def delete_employee(
    employee_id: int,
    principal: Principal = Depends(get_current_principal),
    service: EmployeeService = Depends(get_employee_service),
):
    """Soft delete an employee"""
    return service.delete_employee(employee_id, principal)
