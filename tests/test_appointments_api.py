from sqlalchemy import text

from appointease.models import Appointment, AppointmentStatus, UserRole


def booking_payload(customer, provider, service, **overrides):
    payload = {
        "customerId": customer.id,
        "providerId": provider.id,
        "serviceId": service.id,
        "date": "2030-06-01T10:00:00Z",
    }
    payload.update(overrides)
    return payload


def set_status(client, headers, user, appointment_id, status):
    return client.patch(
        f"/appointments/{appointment_id}/status", json={"status": status}, headers=headers(user)
    )


def test_customer_books_appointment(client, headers, make_user, make_provider, make_service):
    customer = make_user()
    provider = make_provider()
    service = make_service(provider, duration=40)

    response = client.post(
        "/appointments",
        json=booking_payload(customer, provider, service, notes="<b>hi</b>"),
        headers=headers(customer),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "Pending"
    assert body["duration"] == 40
    assert body["customerId"] == customer.id
    assert body["date"].startswith("2030-06-01T10:00:00")
    assert body["notes"] == "&lt;b&gt;hi&lt;/b&gt;"


def test_mismatched_service_creates_nothing(client, db, headers, make_user, make_provider, make_service):
    customer = make_user()
    provider = make_provider()
    other_provider = make_provider(company_name="Elsewhere")
    service = make_service(other_provider)

    response = client.post(
        "/appointments", json=booking_payload(customer, provider, service), headers=headers(customer)
    )

    assert response.status_code == 400
    assert response.json()["kind"] == "ServiceProviderMismatch"
    assert db.query(Appointment).count() == 0


def test_unknown_service_is_rejected(client, headers, make_user, make_provider, make_service):
    customer = make_user()
    provider = make_provider()
    service = make_service(provider)

    response = client.post(
        "/appointments",
        json=booking_payload(customer, provider, service, serviceId=4242),
        headers=headers(customer),
    )

    assert response.status_code == 400
    assert response.json()["kind"] == "InvalidService"


def test_customer_cannot_book_for_another_customer(client, db, headers, make_user, make_provider, make_service):
    customer = make_user()
    other = make_user()
    provider = make_provider()
    service = make_service(provider)

    response = client.post(
        "/appointments", json=booking_payload(other, provider, service), headers=headers(customer)
    )

    assert response.status_code == 403
    assert response.json()["kind"] == "Forbidden"
    assert db.query(Appointment).count() == 0


def test_booking_requires_authentication(client, make_user, make_provider, make_service):
    customer = make_user()
    provider = make_provider()
    service = make_service(provider)

    response = client.post("/appointments", json=booking_payload(customer, provider, service))

    assert response.status_code == 401
    assert response.json()["kind"] == "Unauthenticated"


def test_invalid_token_is_unauthenticated(client):
    response = client.get("/appointments", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401

    response = client.get("/appointments", headers={"Authorization": "Bearer a.b.c"})
    assert response.status_code == 401


def test_malformed_body_is_validation_error(client, headers, make_user):
    customer = make_user()
    response = client.post("/appointments", json={"customerId": customer.id}, headers=headers(customer))
    assert response.status_code == 400
    assert response.json()["kind"] == "ValidationError"


def test_provider_confirms_own_appointment(
    client, headers, make_user, make_provider, make_service, make_appointment
):
    provider = make_provider()
    appointment = make_appointment(make_user(), make_service(provider))

    response = set_status(client, headers, provider.user, appointment.id, "Confirmed")

    assert response.status_code == 200
    assert response.json()["status"] == "Confirmed"


def test_provider_cannot_touch_other_providers_appointment(
    client, db, headers, make_user, make_provider, make_service, make_appointment
):
    own = make_provider()
    foreign = make_provider(company_name="Rival")
    appointment = make_appointment(make_user(), make_service(foreign))

    response = set_status(client, headers, own.user, appointment.id, "Confirmed")

    assert response.status_code == 403
    db.expire_all()
    assert db.get(Appointment, appointment.id).status == AppointmentStatus.PENDING


def test_customer_cannot_complete_or_confirm_own_appointment(
    client, headers, make_user, make_provider, make_service, make_appointment
):
    customer = make_user()
    appointment = make_appointment(customer, make_service(make_provider()))

    assert set_status(client, headers, customer, appointment.id, "Completed").status_code == 403
    assert set_status(client, headers, customer, appointment.id, "Confirmed").status_code == 403


def test_customer_cancel_is_idempotent(
    client, headers, make_user, make_provider, make_service, make_appointment
):
    customer = make_user()
    appointment = make_appointment(customer, make_service(make_provider()))

    first = set_status(client, headers, customer, appointment.id, "Canceled")
    second = set_status(client, headers, customer, appointment.id, "Canceled")

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json() == second.json()
    assert second.json()["status"] == "Canceled"


def test_customer_cannot_cancel_completed_appointment(
    client, headers, make_user, make_provider, make_service, make_appointment
):
    customer = make_user()
    appointment = make_appointment(
        customer, make_service(make_provider()), status=AppointmentStatus.COMPLETED
    )

    response = set_status(client, headers, customer, appointment.id, "Canceled")

    assert response.status_code == 403


def test_illegal_transitions_are_rejected(
    client, headers, make_user, make_provider, make_service, make_appointment
):
    admin = make_user(role=UserRole.ADMIN)
    provider = make_provider()
    service = make_service(provider)
    pending = make_appointment(make_user(), service)
    canceled = make_appointment(make_user(), service, status=AppointmentStatus.CANCELED)

    skip = set_status(client, headers, provider.user, pending.id, "Completed")
    revive = set_status(client, headers, admin, canceled.id, "Confirmed")

    assert skip.status_code == 400
    assert skip.json()["kind"] == "InvalidTransition"
    assert revive.status_code == 400
    assert revive.json()["kind"] == "InvalidTransition"


def test_full_lifecycle_by_provider(
    client, headers, make_user, make_provider, make_service, make_appointment
):
    provider = make_provider()
    appointment = make_appointment(make_user(), make_service(provider))

    assert set_status(client, headers, provider.user, appointment.id, "Confirmed").status_code == 200
    completed = set_status(client, headers, provider.user, appointment.id, "Completed")
    assert completed.json()["status"] == "Completed"
    assert set_status(client, headers, provider.user, appointment.id, "Completed").status_code == 200


def test_status_update_of_missing_appointment(client, headers, make_user):
    response = set_status(client, headers, make_user(), 999, "Canceled")
    assert response.status_code == 404
    assert response.json()["kind"] == "NotFound"


def test_view_appointment_permissions(
    client, headers, make_user, make_provider, make_service, make_appointment
):
    customer = make_user()
    provider = make_provider()
    appointment = make_appointment(customer, make_service(provider))

    assert client.get(f"/appointments/{appointment.id}", headers=headers(customer)).status_code == 200
    assert client.get(f"/appointments/{appointment.id}", headers=headers(provider.user)).status_code == 200
    assert client.get(f"/appointments/{appointment.id}", headers=headers(make_user())).status_code == 403
    assert client.get("/appointments/999", headers=headers(customer)).status_code == 404


def test_listing_is_scoped_by_role_and_enriched(
    client, headers, make_user, make_provider, make_service, make_employee, make_appointment
):
    alice = make_user(first_name="Alice", last_name="Smith")
    bob = make_user(first_name="Bob", last_name="Jones")
    clinic = make_provider()
    gym = make_provider(company_name="Gym")
    checkup = make_service(clinic, name="Check-up")
    training = make_service(gym, name="Training")
    employee = make_employee(clinic, first_name="Sam", last_name="Staff")
    make_appointment(alice, checkup, employee=employee)
    make_appointment(bob, training)
    admin = make_user(role=UserRole.ADMIN)

    mine = client.get("/appointments", headers=headers(alice)).json()
    assert len(mine) == 1
    assert mine[0]["serviceName"] == "Check-up"
    assert mine[0]["serviceCategory"] == "Healthcare"
    assert mine[0]["customerName"] == "Alice Smith"
    assert mine[0]["employeeName"] == "Sam Staff"

    clinic_view = client.get("/appointments", headers=headers(clinic.user)).json()
    assert [a["customerName"] for a in clinic_view] == ["Alice Smith"]

    assert len(client.get("/appointments", headers=headers(admin)).json()) == 2


def test_listing_filters_by_status(
    client, headers, make_user, make_provider, make_service, make_appointment
):
    customer = make_user()
    service = make_service(make_provider())
    make_appointment(customer, service)
    make_appointment(customer, service, status=AppointmentStatus.CANCELED)

    response = client.get("/appointments?status=Canceled", headers=headers(customer))

    assert [a["status"] for a in response.json()] == ["Canceled"]


def test_provider_without_profile_cannot_list(client, headers, make_user):
    orphan = make_user(role=UserRole.PROVIDER)
    response = client.get("/appointments", headers=headers(orphan))
    assert response.status_code == 403


def test_admin_books_on_behalf_of_customer(client, headers, make_user, make_provider, make_service):
    admin = make_user(role=UserRole.ADMIN)
    customer = make_user()
    provider = make_provider()
    service = make_service(provider)

    response = client.post(
        "/appointments", json=booking_payload(customer, provider, service), headers=headers(admin)
    )

    assert response.status_code == 201
    assert response.json()["customerId"] == customer.id


def test_unknown_stored_status_is_storage_error(
    client, db, headers, make_user, make_provider, make_service, make_appointment
):
    admin = make_user(role=UserRole.ADMIN)
    appointment_id = make_appointment(make_user(), make_service(make_provider())).id
    admin_headers = headers(admin)
    db.execute(
        text("UPDATE appointments SET status = 'Lost' WHERE id = :id"), {"id": appointment_id}
    )
    db.commit()

    response = client.get(f"/appointments/{appointment_id}", headers=admin_headers)

    assert response.status_code == 500
    assert response.json() == {"kind": "StorageError", "detail": "Internal server error"}


def test_booking_with_foreign_employee_creates_nothing(
    client, db, headers, make_user, make_provider, make_service, make_employee
):
    customer = make_user()
    clinic = make_provider()
    gym = make_provider(company_name="Gym")
    service = make_service(clinic)
    trainer = make_employee(gym)

    response = client.post(
        "/appointments",
        json=booking_payload(customer, clinic, service, employeeId=trainer.id),
        headers=headers(customer),
    )

    assert response.status_code == 400
    assert response.json()["kind"] == "ValidationError"
    assert db.query(Appointment).count() == 0


def test_provider_booking_for_unknown_customer_is_not_found(
    client, db, headers, make_user, make_provider, make_service
):
    provider = make_provider()
    service = make_service(provider)
    payload = booking_payload(make_user(), provider, service, customerId=424242)

    response = client.post("/appointments", json=payload, headers=headers(provider.user))

    assert response.status_code == 404
    assert db.query(Appointment).count() == 0


def test_admin_filters_listing_by_customer_and_provider(
    client, headers, make_user, make_provider, make_service, make_appointment
):
    admin = make_user(role=UserRole.ADMIN)
    alice = make_user()
    bob = make_user()
    clinic = make_provider()
    gym = make_provider(company_name="Gym")
    make_appointment(alice, make_service(clinic))
    make_appointment(bob, make_service(gym))
    make_appointment(bob, make_service(clinic, name="Follow-up"))

    by_customer = client.get(f"/appointments?customerId={bob.id}", headers=headers(admin)).json()
    by_provider = client.get(f"/appointments?providerId={gym.id}", headers=headers(admin)).json()
    both = client.get(
        f"/appointments?customerId={bob.id}&providerId={clinic.id}", headers=headers(admin)
    ).json()

    assert {a["customerId"] for a in by_customer} == {bob.id}
    assert len(by_customer) == 2
    assert [a["providerId"] for a in by_provider] == [gym.id]
    assert [a["serviceName"] for a in both] == ["Follow-up"]


def test_listing_filters_outside_own_scope_are_forbidden(
    client, headers, make_user, make_provider, make_service, make_appointment
):
    alice = make_user()
    bob = make_user()
    clinic = make_provider()
    gym = make_provider(company_name="Gym")
    make_appointment(alice, make_service(clinic))

    assert client.get(f"/appointments?customerId={bob.id}", headers=headers(alice)).status_code == 403
    assert client.get(f"/appointments?providerId={gym.id}", headers=headers(clinic.user)).status_code == 403

    own = client.get(f"/appointments?customerId={alice.id}", headers=headers(alice))
    assert own.status_code == 200
    assert len(own.json()) == 1
    narrowed = client.get(f"/appointments?customerId={bob.id}", headers=headers(clinic.user))
    assert narrowed.json() == []
