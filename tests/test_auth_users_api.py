from conftest import TEST_PASSWORD

from appointease.models import UserRole


def register_payload(**overrides):
    payload = {
        "username": "Alice",
        "password": "s3cure-passw0rd",
        "firstName": "Alice",
        "lastName": "Smith",
        "email": "alice@example.com",
    }
    payload.update(overrides)
    return payload


def test_register_customer_returns_token_without_password(client):
    response = client.post("/auth/register", json=register_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["token"]
    assert body["user"]["username"] == "alice"
    assert body["user"]["role"] == "Customer"
    assert "password" not in response.text.lower()

    me = client.get("/users/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == body["user"]["id"]


def test_usernames_are_unique_case_insensitively(client):
    assert client.post("/auth/register", json=register_payload()).status_code == 201

    response = client.post("/auth/register", json=register_payload(username="ALICE"))

    assert response.status_code == 400
    assert response.json()["kind"] == "Conflict"


def test_short_password_is_rejected(client):
    response = client.post("/auth/register", json=register_payload(password="short"))
    assert response.status_code == 400
    assert response.json()["kind"] == "ValidationError"


def test_admin_self_registration_is_forbidden(client):
    response = client.post("/auth/register", json=register_payload(role="Admin"))
    assert response.status_code == 403


def test_provider_registration_creates_default_profile(client):
    response = client.post(
        "/auth/register", json=register_payload(username="pat", firstName="Pat", role="Provider")
    )
    user_id = response.json()["user"]["id"]

    providers = client.get(f"/providers?userId={user_id}").json()

    assert response.status_code == 201
    assert len(providers) == 1
    assert providers[0]["companyName"] == "Pat's Company"
    assert providers[0]["category"] == "Healthcare"


def test_provider_registration_uses_provider_info(client):
    payload = register_payload(
        username="coach",
        role="Provider",
        providerInfo={"companyName": "Coach Co", "category": "Sports", "address": "1 Main St"},
    )

    user_id = client.post("/auth/register", json=payload).json()["user"]["id"]
    provider = client.get(f"/providers?userId={user_id}").json()[0]

    assert provider["companyName"] == "Coach Co"
    assert provider["category"] == "Sports"
    assert provider["address"] == "1 Main St"


def test_login_and_bad_credentials(client, make_user):
    user = make_user(username="bob")

    ok = client.post("/auth/login", json={"username": "BOB", "password": TEST_PASSWORD})
    wrong = client.post("/auth/login", json={"username": "bob", "password": "nope-nope"})
    unknown = client.post("/auth/login", json={"username": "ghost", "password": TEST_PASSWORD})

    assert ok.status_code == 200
    assert ok.json()["user"]["id"] == user.id
    assert wrong.status_code == 401
    assert unknown.status_code == 401


def test_deactivated_account_cannot_log_in_or_use_token(client, headers, make_user):
    user = make_user(username="gone", is_active=False)

    login = client.post("/auth/login", json={"username": "gone", "password": TEST_PASSWORD})
    me = client.get("/users/me", headers=headers(user))

    assert login.status_code == 401
    assert me.status_code == 401


def test_users_see_only_themselves(client, headers, make_user):
    alice = make_user()
    bob = make_user()
    admin = make_user(role=UserRole.ADMIN)

    assert client.get(f"/users/{alice.id}", headers=headers(alice)).status_code == 200
    assert client.get(f"/users/{bob.id}", headers=headers(alice)).status_code == 403
    assert client.get(f"/users/{bob.id}", headers=headers(admin)).status_code == 200
    assert client.get("/users/999", headers=headers(admin)).status_code == 404


def test_user_updates_own_profile(client, headers, make_user):
    alice = make_user()

    response = client.patch(
        f"/users/{alice.id}", json={"city": "Shelbyville", "phone": "555 0101 22"}, headers=headers(alice)
    )

    assert response.status_code == 200
    assert response.json()["city"] == "Shelbyville"
    assert response.json()["role"] == "Customer"


def test_only_admin_toggles_active_flag(client, headers, make_user):
    alice = make_user()
    admin = make_user(role=UserRole.ADMIN)

    own = client.patch(f"/users/{alice.id}", json={"isActive": False}, headers=headers(alice))
    by_admin = client.patch(f"/users/{alice.id}", json={"isActive": False}, headers=headers(admin))

    assert own.status_code == 403
    assert by_admin.status_code == 200
    assert by_admin.json()["isActive"] is False


def test_user_cannot_update_someone_else(client, headers, make_user):
    alice = make_user()
    bob = make_user()
    response = client.patch(f"/users/{bob.id}", json={"city": "X"}, headers=headers(alice))
    assert response.status_code == 403


def test_operational_endpoints_and_security_headers(client):
    root = client.get("/")
    health = client.get("/health")

    assert root.status_code == 200
    assert health.json() == {"status": "healthy"}
    assert health.headers["X-Content-Type-Options"] == "nosniff"
    assert health.headers["X-Frame-Options"] == "DENY"
