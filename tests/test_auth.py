from app.core.security import create_access_token, get_password_hash, verify_password


def test_password_hashing():
    hashed = get_password_hash("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong-pass", hashed)


def test_register(client):
    response = client.post("/api/auth/register", json={
        "email": "wanjiru@acme-homes.co.ke",
        "full_name": "Wanjiru Kamau",
        "password": "TestPassword123"
    })
    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "wanjiru@acme-homes.co.ke"
    assert body["organization_id"] is None
    assert "hashed_password" not in body


def test_register_duplicate_email(client, manager):
    response = client.post("/api/auth/register", json={
        "email": manager.email,
        "password": "TestPassword123"
    })
    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


def test_register_with_verification_code(client, organization):
    response = client.post("/api/auth/register", json={
        "email": "caretaker@acme-homes.co.ke",
        "password": "TestPassword123",
        "role": "staff",
        "verification_code": organization.verification_code,
    })
    assert response.status_code == 201
    assert response.json()["organization_id"] == str(organization.id)


def test_register_cannot_pick_an_organization(client, organization):
    response = client.post("/api/auth/register", json={
        "email": "intruder@mail.co.ke",
        "password": "TestPassword123",
        "organization_id": str(organization.id),
    })
    assert response.status_code == 201
    assert response.json()["organization_id"] is None


def test_register_with_unknown_code(client):
    response = client.post("/api/auth/register", json={
        "email": "caretaker@acme-homes.co.ke",
        "password": "TestPassword123",
        "verification_code": "NOPE1234",
    })
    assert response.status_code == 404


def test_login_and_me(client, manager):
    response = client.post("/api/auth/login", json={
        "email": manager.email,
        "password": "s3cret-pass"
    })
    assert response.status_code == 200
    token = response.json()["access_token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["id"] == str(manager.id)


def test_login_invalid(client, manager):
    response = client.post("/api/auth/login", json={
        "email": manager.email,
        "password": "wrong"
    })
    assert response.status_code == 401


def test_protected_route_requires_token(client):
    assert client.get("/api/properties/").status_code == 401


def test_token_for_missing_user(client):
    token = create_access_token(data={"sub": "0b6d6b9a-1f52-4d6e-bb0b-2f3a8f1f0c21"})
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
