import enum

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import TypeDecorator

from .database import Base
from .errors import StorageError


class _LenientEnum(str, enum.Enum):
    """String enum that also accepts case/spacing variants ("personal care", "PENDING")"""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            wanted = value.replace(" ", "").replace("_", "").lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        return None


class UserRole(_LenientEnum):
    CUSTOMER = "Customer"
    PROVIDER = "Provider"
    ADMIN = "Admin"


class ServiceCategory(_LenientEnum):
    HEALTHCARE = "Healthcare"
    SPORTS = "Sports"
    PERSONAL_CARE = "PersonalCare"


class AppointmentStatus(_LenientEnum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELED = "Canceled"
    COMPLETED = "Completed"


class EnumText(TypeDecorator):
    """
    Persist a closed enum as its string value.

    Values are validated on the way in and on the way out; a stored value that
    no longer maps to a member is reported as a StorageError instead of
    leaking a ValueError from deep inside the ORM.
    """

    impl = String
    cache_ok = True

    def __init__(self, enum_cls, length: int = 32):
        super().__init__(length=length)
        self.enum_cls = enum_cls

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return self.enum_cls(value).value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        try:
            return self.enum_cls(value)
        except ValueError as e:
            raise StorageError(
                f"Unknown {self.enum_cls.__name__} value in storage: {value!r}"
            ) from e


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(150), unique=True, index=True, nullable=False)  # stored lowercased
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    city = Column(String(255), nullable=True)
    role = Column(EnumText(UserRole), nullable=False, default=UserRole.CUSTOMER)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    provider = relationship("Provider", back_populates="user", uselist=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Provider(Base):
    __tablename__ = "providers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, index=True, nullable=False)
    company_name = Column(String(255), nullable=True)
    address = Column(String(500), nullable=True)
    category = Column(EnumText(ServiceCategory), nullable=False)
    description = Column(Text, nullable=True)
    working_hours = Column(JSON, nullable=True)  # opaque schedule blob
    is_verified = Column(Boolean, default=False, nullable=False)

    user = relationship("User", back_populates="provider")
    services = relationship("Service", back_populates="provider")
    employees = relationship("Employee", back_populates="provider")


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    provider_id = Column(Integer, ForeignKey("providers.id"), index=True, nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(EnumText(ServiceCategory), nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    price = Column(Integer, nullable=False, default=0)  # minor currency unit
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    provider = relationship("Provider", back_populates="services")


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    provider_id = Column(Integer, ForeignKey("providers.id"), index=True, nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    position = Column(String(255), nullable=True)
    department = Column(String(255), nullable=False)
    working_hours = Column(JSON, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    provider = relationship("Provider", back_populates="employees")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    provider_id = Column(Integer, ForeignKey("providers.id"), index=True, nullable=False)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=True)
    date = Column(DateTime, nullable=False)  # UTC, naive
    duration = Column(Integer, nullable=False)  # copied from the service at booking time
    status = Column(
        EnumText(AppointmentStatus), nullable=False, default=AppointmentStatus.PENDING, index=True
    )
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False)

    customer = relationship("User")
    service = relationship("Service")
    employee = relationship("Employee")
