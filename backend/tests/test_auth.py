"""Tests for logins, bearer tokens and admin account management."""

from datetime import timedelta

import pytest

from dineops.core.auth import PrincipalRole, verify_token
from dineops.core.exceptions import UnauthorizedError, ValidationError
from dineops.core.security import create_access_token, get_password_hash, verify_password
from dineops.models.restaurant import Restaurant
from dineops.models.user import User


class TestLogin:
    """Test the three login endpoints."""

    def test_admin_login(self, client, test_admin):
        res = client.post("/api/admin/login", json={"email": "admin@example.com", "password": "adminpass123"})
        assert res.status_code == 200
        body = res.json()
        assert body["admin"]["role"] == "SUPER_ADMIN"
        assert "password_hash" not in body["admin"]

        principal = verify_token(body["token"])
        assert principal.id == test_admin.id
        assert principal.role == PrincipalRole.SUPER_ADMIN
        assert principal.is_admin

    def test_restaurant_login(self, client, test_restaurant):
        res = client.post(
            "/api/restaurant/login",
            json={"email": "bistro@example.com", "password": "bistropass123"},
        )
        assert res.status_code == 200
        body = res.json()
        assert body["restaurant"] == {
            "id": test_restaurant.id,
            "name": "Test Bistro",
            "email": "bistro@example.com",
        }
        assert verify_token(body["token"]).role == PrincipalRole.RESTAURANT

    def test_user_login(self, client, test_user):
        res = client.post("/api/users/login", json={"email": "test@example.com", "password": "testpass123"})
        assert res.status_code == 200
        assert res.json()["user"]["id"] == test_user.id
        assert not verify_token(res.json()["token"]).is_admin

    @pytest.mark.parametrize(
        "path, email",
        [
            ("/api/admin/login", "admin@example.com"),
            ("/api/restaurant/login", "bistro@example.com"),
            ("/api/users/login", "test@example.com"),
        ],
    )
    def test_wrong_password(self, client, test_admin, test_restaurant, test_user, path, email):
        res = client.post(path, json={"email": email, "password": "wrong-password"})
        assert res.status_code == 401
        assert res.json()["error"] == "Invalid email or password"

    def test_unknown_email(self, client):
        res = client.post("/api/users/login", json={"email": "nobody@example.com", "password": "whatever1"})
        assert res.status_code == 401
        assert res.json()["error"] == "Invalid email or password"

    def test_missing_credentials(self, client):
        res = client.post("/api/restaurant/login", json={"email": "bistro@example.com"})
        assert res.status_code == 400
        assert res.json()["error"] == "Email and password are required"

    def test_malformed_email(self, client):
        res = client.post("/api/users/login", json={"email": "not-an-email", "password": "testpass123"})
        assert res.status_code == 400
        assert res.json()["error"] == "Invalid email format"


class TestTokens:
    """Test token issue and verification."""

    def test_password_hashing(self):
        hashed = get_password_hash("s3cret-pass")
        assert hashed != "s3cret-pass"
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("other-pass", hashed)

    def test_garbage_token(self):
        with pytest.raises(UnauthorizedError):
            verify_token("not.a.token")

    def test_expired_token(self):
        token = create_access_token(
            {"sub": "1", "email": "a@example.com", "role": "ADMIN"},
            expires_delta=timedelta(seconds=-10),
        )
        with pytest.raises(UnauthorizedError):
            verify_token(token)

    def test_unknown_role(self):
        token = create_access_token({"sub": "1", "email": "a@example.com", "role": "OWNER"})
        with pytest.raises(UnauthorizedError):
            verify_token(token)

    def test_missing_header(self, client):
        res = client.get("/api/admin")
        assert res.status_code == 401
        assert res.json()["error"] == "Missing or invalid Authorization header"

    def test_bad_bearer(self, client):
        res = client.get("/api/admin", headers={"Authorization": "Bearer nonsense"})
        assert res.status_code == 401
        assert res.json()["error"] == "Invalid or expired token"

    def test_non_admin_forbidden(self, client, user_headers):
        res = client.get("/api/admin", headers=user_headers)
        assert res.status_code == 403
        assert res.json()["error"] == "Admin privileges required"


class TestAdminCRUD:
    """Test admin account management."""

    def test_bootstrap_admin(self, client):
        res = client.post(
            "/api/admin",
            json={"name": "First", "email": "first@example.com", "password": "firstpass123"},
        )
        assert res.status_code == 201
        assert res.json()["role"] == "ADMIN"

    def test_duplicate_and_bad_role(self, client, test_admin):
        res = client.post(
            "/api/admin",
            json={"name": "Dup", "email": test_admin.email, "password": "duppass123"},
        )
        assert res.status_code == 409
        assert res.json()["error"] == "Admin with this email already exists"

        res = client.post(
            "/api/admin",
            json={"name": "X", "email": "x@example.com", "password": "xpass12345", "role": "OWNER"},
        )
        assert res.status_code == 400
        assert res.json()["error"] == "role must be one of ADMIN, SUPER_ADMIN"

    def test_list_and_get(self, client, test_admin, admin_headers):
        res = client.get("/api/admin", headers=admin_headers)
        assert res.status_code == 200
        assert [a["email"] for a in res.json()] == ["admin@example.com"]

        res = client.get(f"/api/admin/{test_admin.id}", headers=admin_headers)
        assert res.json()["name"] == "Root Admin"

        res = client.get("/api/admin/9999", headers=admin_headers)
        assert res.status_code == 404

    def test_update_password(self, client, db_session, test_admin, admin_headers):
        res = client.put(
            f"/api/admin/{test_admin.id}",
            json={"password": "rotated-pass-1"},
            headers=admin_headers,
        )
        assert res.status_code == 200

        res = client.post("/api/admin/login", json={"email": test_admin.email, "password": "rotated-pass-1"})
        assert res.status_code == 200

    def test_update_requires_a_field(self, client, test_admin, admin_headers):
        res = client.put(f"/api/admin/{test_admin.id}", json={}, headers=admin_headers)
        assert res.status_code == 400

    def test_delete(self, client, db_session, admin_headers):
        res = client.post(
            "/api/admin",
            json={"name": "Temp", "email": "temp@example.com", "password": "temppass123"},
        )
        temp_id = res.json()["id"]

        res = client.delete(f"/api/admin/{temp_id}", headers=admin_headers)
        assert res.status_code == 200
        assert client.get(f"/api/admin/{temp_id}", headers=admin_headers).status_code == 404


class TestPasswordLength:
    """bcrypt caps passwords at 72 bytes; longer ones are rejected up front."""

    LONG = "x" * 100

    def test_restaurant_registration(self, client, db_session):
        res = client.post(
            "/api/restaurants",
            json={
                "name": "Long Pass Diner",
                "email": "long@example.com",
                "password": self.LONG,
                "phone": "+920000000",
                "address": "1 Long Road",
                "latitude": 31.5,
                "longitude": 74.3,
            },
        )
        assert res.status_code == 400
        assert res.json()["error"] == "Password must be at most 72 bytes long"
        assert db_session.query(Restaurant).count() == 0

    def test_restaurant_password_change(self, client, test_restaurant):
        res = client.put(f"/api/restaurants/{test_restaurant.id}", json={"password": self.LONG})
        assert res.status_code == 400

    def test_user_sign_up(self, client, db_session):
        res = client.post(
            "/api/users",
            json={
                "email": "long@example.com",
                "password": self.LONG,
                "name": "Long",
                "city": "Lahore",
                "address": "1 Long Road",
            },
        )
        assert res.status_code == 400
        assert res.json()["error"] == "Password must be at most 72 bytes long"
        assert db_session.query(User).count() == 0

    def test_admin_create_and_update(self, client, test_admin, admin_headers):
        res = client.post(
            "/api/admin",
            json={"name": "Long", "email": "long@example.com", "password": self.LONG},
        )
        assert res.status_code == 400

        res = client.put(f"/api/admin/{test_admin.id}", json={"password": self.LONG}, headers=admin_headers)
        assert res.status_code == 400

    def test_multibyte_limit_counts_bytes(self):
        # 25 three-byte characters are 75 bytes
        with pytest.raises(ValidationError):
            get_password_hash("€" * 25)
        assert verify_password("x" * 72, get_password_hash("x" * 72))

    def test_login_with_long_password_is_rejected(self, client, test_user):
        res = client.post("/api/users/login", json={"email": test_user.email, "password": self.LONG})
        assert res.status_code == 401
