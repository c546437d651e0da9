def test_register_login_and_me(client) -> None:
    register_resp = client.post(
        "/api/v1/auth/register",
        json={"email": "ada@example.com", "password": "secret123", "first_name": "Ada"},
    )
    assert register_resp.status_code == 201
    assert register_resp.json()["token_type"] == "bearer"

    login_resp = client.post(
        "/api/v1/auth/login", data={"username": "ada@example.com", "password": "secret123"}
    )
    assert login_resp.status_code == 200
    token = login_resp.json()["access_token"]

    me_resp = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me_resp.status_code == 200
    me = me_resp.json()
    assert me["email"] == "ada@example.com"
    assert me["first_name"] == "Ada"
    assert me["roles"] == ["User"]
    assert me["last_login_at"] is not None


def test_duplicate_email_is_rejected(client, register) -> None:
    register("ada@example.com")
    resp = client.post("/api/v1/auth/register", json={"email": "ada@example.com", "password": "other123"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email already registered"


def test_wrong_password_is_unauthorized(client, register) -> None:
    register("ada@example.com")
    resp = client.post("/api/v1/auth/login", data={"username": "ada@example.com", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Incorrect email or password"


def test_deactivated_account_cannot_log_in(client, register) -> None:
    from job_tracker.db.database import SessionLocal
    from job_tracker.db.models import User

    headers = register("ada@example.com")
    with SessionLocal() as db:
        db.query(User).filter(User.email == "ada@example.com").update({User.is_active: False})
        db.commit()

    resp = client.post("/api/v1/auth/login", data={"username": "ada@example.com", "password": "secret123"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Account is deactivated"
    assert client.get("/api/v1/auth/me", headers=headers).status_code == 401


def test_protected_routes_require_a_token(client) -> None:
    assert client.get("/api/v1/companies/").status_code == 401
    bad = {"Authorization": "Bearer not-a-token"}
    assert client.get("/api/v1/companies/", headers=bad).status_code == 401
