"""HTTP tests for the auth, users, business and audit routers."""

from pyme_auth.adapters.repository.audit_repository import AuditRepository
from pyme_auth.domain.entities.audit_log_entity import AuditAction
from pyme_auth.domain.exceptions import StorageFault
from pyme_auth.infrastructure.database import SessionLocal

REGISTER_BODY = {
    "business_name": "Acme",
    "business_phone": "555-0100",
    "email": "a@x.com",
    "password": "secret123",
}


def _register(client, **overrides):
    return client.post("/auth/register", json={**REGISTER_BODY, **overrides})


def _login(client, email="a@x.com", password="secret123", **kwargs):
    return client.post("/auth/login", json={"email": email, "password": password}, **kwargs)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_register(client):
    resp = _register(client)

    assert resp.status_code == 201
    body = resp.json()
    assert body["email"] == "a@x.com"
    assert body["role"] == "PYME"
    assert set(body) == {"user_id", "email", "role", "business_id"}


def test_register_duplicate_email(client):
    _register(client)
    resp = _register(client, email="A@X.com", business_name="Other")

    assert resp.status_code == 409
    assert resp.json()["detail"]["field"] == "email"


def test_register_validation(client):
    assert _register(client, email="not-an-email").status_code == 422
    assert _register(client, password="short").status_code == 422
    assert _register(client, business_name="").status_code == 422


def test_login(client):
    user_id = _register(client).json()["user_id"]
    resp = _login(client)

    assert resp.status_code == 200
    body = resp.json()
    assert body["user_id"] == user_id
    assert body["token_type"] == "bearer"
    assert body["access_token"]


def test_login_failures_are_indistinguishable(client):
    _register(client)
    unknown = _login(client, email="ghost@x.com")
    wrong = _login(client, password="wrong-password")

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json() == {"detail": "Credenciais Inválidas"}


def test_login_records_client_ip_and_user_agent(client):
    _register(client)
    _login(client, headers={"X-Forwarded-For": "203.0.113.5, 10.0.0.1", "User-Agent": "acme-app/1.0"})

    with SessionLocal() as s:
        (entry,) = AuditRepository(s).find_entries(action=AuditAction.LOGIN_SUCCESS)
    assert entry.ip_address == "203.0.113.5"
    assert entry.user_agent == "acme-app/1.0"


def test_me(client):
    _register(client)
    token = _login(client).json()["access_token"]

    resp = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.json()["email"] == "a@x.com"
    assert resp.json()["is_active"] is True


def test_me_requires_token(client):
    assert client.get("/auth/me").status_code == 401


def test_admin_routes_reject_pyme_users(client):
    _register(client)
    token = _login(client).json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    assert client.get("/audit", headers=headers).status_code == 403
    assert client.get("/users/find_all_users", headers=headers).status_code == 403


def test_audit_listing(client, admin_headers):
    user_id = _register(client).json()["user_id"]
    _login(client, password="wrong-password")

    resp = client.get("/audit", params={"user_id": user_id}, headers=admin_headers)
    assert resp.status_code == 200
    assert [e["action"] for e in resp.json()] == ["REGISTER_SUCCESS", "LOGIN_FAILURE"]

    resp = client.get("/audit", params={"action": "LOGIN_FAILURE"}, headers=admin_headers)
    assert len(resp.json()) == 1


def test_deactivate_user_blocks_login(client, admin_headers):
    user_id = _register(client).json()["user_id"]

    resp = client.patch(f"/users/{user_id}/deactivate", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["is_active"] is False

    # idempotente
    assert client.patch(f"/users/{user_id}/deactivate", headers=admin_headers).status_code == 200
    assert _login(client).status_code == 401


def test_deactivate_unknown_user(client, admin_headers):
    assert client.patch("/users/9999/deactivate", headers=admin_headers).status_code == 404


def test_business_routes(client, admin_headers):
    business_id = _register(client).json()["business_id"]

    resp = client.get(f"/business/{business_id}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Acme"

    resp = client.patch(f"/business/{business_id}/deactivate", headers=admin_headers)
    assert resp.json()["is_active"] is False
    assert _login(client).status_code == 401

    names = [b["name"] for b in client.get("/business/find_all_business", headers=admin_headers).json()]
    assert "Acme" in names

    assert client.get("/business/9999", headers=admin_headers).status_code == 404


def test_token_rejected_after_business_deactivation(client, admin_headers):
    business_id = _register(client).json()["business_id"]
    headers = {"Authorization": f"Bearer {_login(client).json()['access_token']}"}
    assert client.get("/auth/me", headers=headers).status_code == 200

    client.patch(f"/business/{business_id}/deactivate", headers=admin_headers)

    assert client.get("/auth/me", headers=headers).status_code == 401


def test_admin_token_rejected_after_own_business_deactivation(client, admin_headers):
    admin_business_id = client.get("/auth/me", headers=admin_headers).json()["business_id"]

    resp = client.patch(f"/business/{admin_business_id}/deactivate", headers=admin_headers)
    assert resp.status_code == 200

    assert client.get("/audit", headers=admin_headers).status_code == 401


def test_deactivation_records_acting_admin(client, admin_headers):
    admin_id = client.get("/auth/me", headers=admin_headers).json()["id"]
    created = _register(client).json()

    client.patch(f"/users/{created['user_id']}/deactivate", headers=admin_headers)
    client.patch(f"/business/{created['business_id']}/deactivate", headers=admin_headers)

    for action in ("USER_DEACTIVATED", "BUSINESS_DEACTIVATED"):
        (entry,) = client.get("/audit", params={"action": action}, headers=admin_headers).json()
        assert entry["actor_id"] == admin_id

    resp = client.get("/audit", params={"actor_id": admin_id}, headers=admin_headers)
    assert len(resp.json()) == 2


def test_promote_user(client, admin_headers):
    admin_id = client.get("/auth/me", headers=admin_headers).json()["id"]
    user_id = _register(client).json()["user_id"]

    resp = client.patch(f"/users/{user_id}/promote", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["role"] == "ADMIN"

    # idempotente
    assert client.patch(f"/users/{user_id}/promote", headers=admin_headers).status_code == 200

    entries = client.get(
        "/audit", params={"action": "ROLE_CHANGED", "user_id": user_id}, headers=admin_headers
    ).json()
    assert len(entries) == 1
    assert entries[0]["actor_id"] == admin_id

    assert client.patch("/users/9999/promote", headers=admin_headers).status_code == 404


def test_register_storage_failure_is_503(client, monkeypatch):
    def broken_append(self, **kwargs):
        raise StorageFault("audit store down")

    monkeypatch.setattr(AuditRepository, "append", broken_append)

    resp = _register(client)
    assert resp.status_code == 503
    assert _login(client).status_code == 503
