import os

# Must be set before the application modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"
os.environ["ALLOW_ADMIN_REGISTRATION"] = "false"
os.environ["SECURITY_HEADERS_ENABLED"] = "true"

from datetime import datetime  # noqa: E402
from itertools import count  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from appointease.database import Base, get_db  # noqa: E402
from appointease.main import app  # noqa: E402
from appointease.models import (  # noqa: E402
    Appointment,
    AppointmentStatus,
    Employee,
    Provider,
    Service,
    ServiceCategory,
    User,
    UserRole,
)
from appointease.security_utils import create_access_token, hash_password  # noqa: E402

TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _save(db, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@pytest.fixture
def make_user(db):
    sequence = count(1)

    def factory(role=UserRole.CUSTOMER, username=None, first_name="Jane", last_name="Doe", is_active=True):
        n = next(sequence)
        return _save(
            db,
            User(
                username=username or f"{role.value.lower()}{n}",
                password_hash=hash_password(TEST_PASSWORD),
                first_name=first_name,
                last_name=last_name,
                email=f"user{n}@example.com",
                phone="+15555550100",
                city="Springfield",
                role=role,
                is_active=is_active,
            ),
        )

    return factory


@pytest.fixture
def make_provider(db, make_user):
    def factory(user=None, category=ServiceCategory.HEALTHCARE, company_name="Acme Clinic"):
        owner = user or make_user(role=UserRole.PROVIDER, first_name="Pat", last_name="Owner")
        return _save(
            db,
            Provider(user_id=owner.id, company_name=company_name, category=category),
        )

    return factory


@pytest.fixture
def make_service(db):
    def factory(provider, name="Check-up", duration=45, price=5000, is_active=True):
        return _save(
            db,
            Service(
                provider_id=provider.id,
                name=name,
                category=provider.category,
                duration=duration,
                price=price,
                is_active=is_active,
            ),
        )

    return factory


@pytest.fixture
def make_employee(db):
    def factory(provider, first_name="Sam", last_name="Staff"):
        return _save(
            db,
            Employee(
                provider_id=provider.id,
                first_name=first_name,
                last_name=last_name,
                email="sam@example.com",
                department="Front desk",
            ),
        )

    return factory


@pytest.fixture
def make_appointment(db):
    def factory(customer, service, status=AppointmentStatus.PENDING, employee=None, date=None):
        return _save(
            db,
            Appointment(
                customer_id=customer.id,
                provider_id=service.provider_id,
                service_id=service.id,
                employee_id=employee.id if employee else None,
                date=date or datetime(2030, 6, 1, 10, 0),
                duration=service.duration,
                status=status,
                created_at=datetime(2030, 5, 1, 9, 0),
            ),
        )

    return factory


def auth_headers(user) -> dict:
    token = create_access_token(user.id, UserRole(user.role).value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers():
    return auth_headers
