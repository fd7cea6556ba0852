"""
HTTP-level tests for /api/auth — the register → login → protected-request flow.
"""

from auth.jwt import verify_token
from core.exceptions import DuplicateCredentialError

ANN = {"full_name": "Ann Lee", "email": "ann@example.com", "password": "secret1"}


class TestRegisterRoute:
    def test_register_created_and_wrapped(self, client):
        res = client.post("/api/auth/register", json=ANN)
        assert res.status_code == 201, res.text
        body = res.json()["data"]
        assert body["token_type"] == "bearer"
        assert body["user"]["email"] == "ann@example.com"
        assert body["user"]["role"] == "user"
        assert "password" not in body["user"]
        assert "password_hash" not in body["user"]

    def test_duplicate_is_conflict(self, client):
        assert client.post("/api/auth/register", json=ANN).status_code == 201
        res = client.post("/api/auth/register", json={**ANN, "email": "ANN@example.com"})
        assert res.status_code == 409
        assert res.json() == {"detail": "Email already registered"}

    def test_validation_errors(self, client):
        assert client.post("/api/auth/register", json={**ANN, "email": "nope"}).status_code == 422
        assert client.post("/api/auth/register", json={**ANN, "password": "123"}).status_code == 422
        assert client.post("/api/auth/register", json={**ANN, "full_name": "  "}).status_code == 422

    def test_password_over_bcrypt_limit_rejected(self, client, credential_store):
        too_long = client.post("/api/auth/register", json={**ANN, "password": "x" * 100})
        assert too_long.status_code == 422
        # 20 characters but 80 UTF-8 bytes
        wide = client.post("/api/auth/register", json={**ANN, "password": "\U0001F600" * 20})
        assert wide.status_code == 422
        assert credential_store.inserts == 0

    def test_concurrent_duplicate_is_conflict(self, client, credential_store):
        async def taken(**fields):
            raise DuplicateCredentialError()

        credential_store.insert = taken
        res = client.post("/api/auth/register", json=ANN)
        assert res.status_code == 409
        assert res.json() == {"detail": "Email already registered"}


class TestLoginRoute:
    def test_scenario(self, client):
        """Register, login, bad login, protected call with and without a token."""
        reg = client.post("/api/auth/register", json=ANN)
        assert reg.status_code == 201
        user_id = reg.json()["data"]["user"]["id"]

        login = client.post("/api/auth/login", json={"email": ANN["email"], "password": "secret1"})
        assert login.status_code == 200, login.text
        token = login.json()["data"]["access_token"]
        claims = verify_token(token)
        assert claims.sub == user_id
        assert claims.role.value == "user"

        bad = client.post("/api/auth/login", json={"email": ANN["email"], "password": "wrong"})
        assert bad.status_code == 401

        anon = client.get("/api/auth/me")
        assert anon.status_code == 401
        assert anon.json()["detail"] == "Missing Bearer token"
        assert anon.headers["WWW-Authenticate"] == "Bearer"

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["data"]["role"] == "user"
        assert me.json()["data"]["sub"] == user_id

    def test_unknown_email_and_wrong_password_identical(self, client):
        client.post("/api/auth/register", json=ANN)
        wrong = client.post("/api/auth/login", json={"email": ANN["email"], "password": "wrong"})
        ghost = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "secret1"})
        assert wrong.status_code == ghost.status_code == 401
        assert wrong.json() == ghost.json() == {"detail": "Invalid email or password"}

    def test_overlong_password_login_is_unauthorized(self, client):
        client.post("/api/auth/register", json=ANN)
        res = client.post("/api/auth/login", json={"email": ANN["email"], "password": "x" * 100})
        assert res.status_code == 401

    def test_invalid_token_on_me(self, client):
        res = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid or expired token"


class TestAppSurface:
    def test_health(self, client):
        res = client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "ok"}
        assert "X-Process-Time" in res.headers
