"""HTTP surface: paths, status codes and JSON bodies."""

import pytest
from fastapi.testclient import TestClient

from topup_store.api import dependencies
from topup_store.api.main import app
from topup_store.database.postgres import PostgresTopUpStore
from topup_store.utils.config_loader import AppConfig, AuthConfig

TOPUP = {
    "email": "qa@example.com",
    "package": "5G Max Speed",
    "phone": "0891234567",
    "amount": 1199,
    "paymentMethod": "credit_card",
}


def _topup(client, **overrides):
    return client.post("/api/topup", json={**TOPUP, **overrides})


def test_worked_example(client, sleeps):
    r = client.post("/api/register", json={"email": "qa@example.com", "password": "pass1234"})
    assert r.status_code == 201
    assert r.json() == {"status": "success", "message": "Created"}

    r = client.post("/api/login", json={"email": "qa@example.com", "password": "pass1234"})
    assert r.status_code == 200
    assert r.json() == {"token": "mock-token"}

    r = _topup(client)
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "success"
    assert body["txnId"].startswith("TXN-")
    assert body["amount"] == 1199
    assert isinstance(body["amount"], int)
    assert sleeps.calls == [1.5]

    r = client.get("/api/transactions", params={"email": "qa@example.com"})
    assert r.status_code == 200
    txns = r.json()
    assert [t["id"] for t in txns] == [body["txnId"]]
    assert txns[0] == {
        "id": body["txnId"],
        "email": "qa@example.com",
        "phone": "0891234567",
        "package": "5G Max Speed",
        "paymentMethod": "credit_card",
        "amount": 1199,
        "status": "SUCCESS",
        "createdAt": txns[0]["createdAt"],
    }
    assert isinstance(txns[0]["amount"], int)


def test_duplicate_registration_conflicts(client):
    client.post("/api/register", json={"email": "qa@example.com", "password": "pass1234"})
    r = client.post("/api/register", json={"email": " QA@example.com", "password": "other"})
    assert r.status_code == 409
    assert r.json() == {"status": "error", "message": "Email already registered"}


def test_duplicate_registration_status_follows_config(db, gateway):
    config = AppConfig(auth=AuthConfig(conflict_status_code=400))
    app.dependency_overrides[dependencies.get_store] = lambda: db
    app.dependency_overrides[dependencies.get_gateway] = lambda: gateway
    app.dependency_overrides[dependencies.get_config] = lambda: config
    try:
        client = TestClient(app)
        client.post("/api/register", json={"email": "qa@example.com", "password": "pass1234"})
        r = client.post("/api/register", json={"email": "qa@example.com", "password": "pass1234"})
        assert r.status_code == 400
    finally:
        app.dependency_overrides.clear()


@pytest.mark.parametrize(
    "path, payload",
    [
        ("/api/register", {"email": "qa@example.com"}),
        ("/api/login", {"password": "pass1234"}),
        ("/api/auth/otp/request", {}),
        ("/api/auth/otp/verify", {"email": "qa@example.com"}),
        ("/api/auth/reset-password", {"email": "qa@example.com", "newPassword": " "}),
        ("/api/topup", {**TOPUP, "amount": "lots"}),
    ],
)
def test_invalid_payloads_return_400(client, path, payload):
    r = client.post(path, json=payload)
    assert r.status_code == 400
    assert r.json() == {"status": "error", "message": "Invalid payload"}


def test_malformed_json_returns_400(client):
    r = client.post("/api/login", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["status"] == "error"


def test_missing_body_returns_400(client):
    assert client.post("/api/register").status_code == 400


def test_login_failures_return_401(client):
    client.post("/api/register", json={"email": "qa@example.com", "password": "pass1234"})
    r = client.post("/api/login", json={"email": "qa@example.com", "password": "nope"})
    assert r.status_code == 401
    assert r.json() == {"status": "error", "message": "Invalid credentials"}


def test_otp_flow(client):
    r = client.post("/api/auth/otp/request", json={"email": "qa@example.com"})
    assert r.json() == {"status": "success", "message": "OTP sent"}

    assert client.post("/api/auth/otp/verify", json={"email": "qa@example.com", "otp": "1234"}).status_code == 200
    r = client.post("/api/auth/otp/verify", json={"email": "qa@example.com", "otp": "9999"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid OTP"


def test_reset_password(client):
    r = client.post("/api/auth/reset-password", json={"email": "qa@example.com", "newPassword": "newPass123"})
    assert r.status_code == 404
    assert r.json()["message"] == "User not found"

    client.post("/api/register", json={"email": "qa@example.com", "password": "pass1234"})
    r = client.post("/api/auth/reset-password", json={"email": "qa@example.com", "newPassword": "newPass123"})
    assert r.status_code == 200
    assert client.post("/api/login", json={"email": "qa@example.com", "password": "newPass123"}).status_code == 200


def test_gateway_error_prefix_returns_500_and_stores_nothing(client, sleeps):
    r = _topup(client, phone="0991234567")
    assert r.status_code == 500
    assert r.json() == {"status": "error", "message": "Gateway error"}
    assert sleeps.calls == []
    assert client.get("/api/transactions", params={"email": "qa@example.com"}).json() == []


def test_slow_prefix_returns_success(client, sleeps):
    r = _topup(client, phone="0881234567")
    assert r.status_code == 200
    assert sleeps.calls == [5.0]


def test_transactions_listing_requires_email(client):
    for params in ({}, {"email": ""}):
        r = client.get("/api/transactions", params=params)
        assert r.status_code == 400
        assert r.json() == {"status": "error", "message": "Email query required"}


def test_listing_is_newest_first_and_per_owner(client):
    first = _topup(client).json()["txnId"]
    _topup(client, email="other@example.com")
    second = _topup(client, email="QA@example.com").json()["txnId"]

    ids = [t["id"] for t in client.get("/api/transactions", params={"email": "qa@example.com"}).json()]
    assert ids == [second, first]


def test_transaction_lifecycle(client):
    txn_id = _topup(client).json()["txnId"]

    r = client.get(f"/api/transactions/{txn_id}")
    assert r.status_code == 200
    assert r.json()["status"] == "SUCCESS"

    r = client.put(f"/api/transactions/{txn_id}", json={"status": "refunded"})
    assert r.status_code == 200
    assert r.json()["status"] == "REFUNDED"

    r = client.delete(f"/api/transactions/{txn_id}")
    assert r.status_code == 200
    assert r.json()["id"] == txn_id

    assert client.get(f"/api/transactions/{txn_id}").status_code == 404


@pytest.mark.parametrize("payload", [{}, {"status": ""}, {"status": "  "}, {"status": 3}])
def test_status_update_rejects_invalid_status(client, payload):
    txn_id = _topup(client).json()["txnId"]
    r = client.put(f"/api/transactions/{txn_id}", json=payload)
    assert r.status_code == 400


def test_unknown_transaction_returns_404(client):
    for r in (
        client.get("/api/transactions/TXN-404"),
        client.put("/api/transactions/TXN-404", json={"status": "REFUNDED"}),
        client.delete("/api/transactions/TXN-404"),
    ):
        assert r.status_code == 404
        assert r.json() == {"status": "error", "message": "Transaction not found"}


def test_health_endpoints(client):
    assert client.get("/").json()["status"] == "healthy"
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["store"] == "InMemoryTopUpStore"


def test_fractional_amount_is_kept(client):
    r = _topup(client, amount=49.5)
    assert r.status_code == 200
    assert r.json()["amount"] == 49.5


def test_database_failure_returns_500(tmp_path, gateway, app_config):
    broken = PostgresTopUpStore(connection_string=f"sqlite:///{tmp_path / 'empty.db'}")
    app.dependency_overrides[dependencies.get_store] = lambda: broken
    app.dependency_overrides[dependencies.get_gateway] = lambda: gateway
    app.dependency_overrides[dependencies.get_config] = lambda: app_config
    try:
        client = TestClient(app)
        for r in (
            client.post("/api/register", json={"email": "qa@example.com", "password": "pass1234"}),
            _topup(client),
            client.get("/api/transactions", params={"email": "qa@example.com"}),
        ):
            assert r.status_code == 500
            assert r.json() == {"status": "error", "message": "Database error"}
    finally:
        app.dependency_overrides.clear()


def test_api_docs_are_served(client):
    assert client.get("/api-docs").status_code == 200
