import unittest
from datetime import timedelta

from fastapi import HTTPException
from jose import jwt

from app.config import settings
from app.services.auth_service import (
    create_access_token,
    decode_access_token,
    extract_bearer_token,
)
from tests.helpers import ApiTestCase


class TestTokens(unittest.TestCase):
    def test_round_trip_claims(self):
        token = create_access_token("abc123", "a@esrent.com", "admin")
        payload = decode_access_token(token)
        self.assertEqual(payload["sub"], "abc123")
        self.assertEqual(payload["email"], "a@esrent.com")
        self.assertEqual(payload["role"], "admin")
        self.assertEqual(payload["type"], "access")

    def test_expired_token_is_rejected(self):
        token = create_access_token("abc123", "a@esrent.com", "admin",
                                    expires_delta=timedelta(seconds=-5))
        with self.assertRaises(HTTPException) as ctx:
            decode_access_token(token)
        self.assertEqual(ctx.exception.status_code, 401)

    def test_wrong_signature_is_rejected(self):
        token = jwt.encode({"sub": "abc", "type": "access"}, "other-secret",
                           algorithm=settings.ALGORITHM)
        with self.assertRaises(HTTPException):
            decode_access_token(token)

    def test_extract_bearer_token(self):
        self.assertEqual(extract_bearer_token("Bearer abc"), "abc")
        self.assertIsNone(extract_bearer_token("Basic abc"))
        self.assertIsNone(extract_bearer_token("Bearer "))
        self.assertIsNone(extract_bearer_token(None))


class TestRoleGate(ApiTestCase):
    def test_mutation_without_token_is_401(self):
        response = self.client.post("/api/brands", json={"name": "Ferrari", "slug": "ferrari"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Access token required"})

    def test_garbage_token_is_401(self):
        response = self.client.delete(
            "/api/cars/64b000000000000000000000",
            headers={"Authorization": "Bearer not-a-jwt"},
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "Invalid or expired token")

    def test_deleted_user_token_is_401(self):
        user = self.create_user()
        headers = self.auth_headers(user)
        self.db.users.delete_one({"_id": user["_id"]})
        response = self.client.get("/api/auth/verify", headers=headers)
        self.assertEqual(response.status_code, 401)

    def test_inactive_user_token_is_401(self):
        headers = self.auth_headers(self.create_user(is_active=False))
        self.assertEqual(self.client.get("/api/auth/verify", headers=headers).status_code, 401)

    def test_non_admin_role_is_403(self):
        headers = self.auth_headers(self.create_user(email="guest@esrent.com", role="user"))
        response = self.client.post(
            "/api/categories",
            json={"name": "SUV", "slug": "suv", "type": "carType"},
            headers=headers,
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), {"error": "Admin access required"})

    def test_legacy_role_logs_in_then_is_refused(self):
        self.create_user(email="old@esrent.com", role="user", password="hunter22")
        response = self.client.post(
            "/api/auth/login", json={"email": "old@esrent.com", "password": "hunter22"}
        )
        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body["user"]["role"], "user")

        headers = {"Authorization": f"Bearer {body['token']}"}
        self.assertEqual(self.client.get("/api/auth/verify", headers=headers).status_code, 200)
        response = self.client.get("/api/brands/stats", headers=headers)
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), {"error": "Admin access required"})

    def test_admin_cannot_register_users(self):
        response = self.client.post(
            "/api/auth/register",
            json={"email": "new@esrent.com", "password": "secret123", "name": "New",
                  "role": "admin"},
            headers=self.admin_headers("admin"),
        )
        self.assertEqual(response.status_code, 403)


class TestAuthEndpoints(ApiTestCase):
    def test_login_returns_token_and_user(self):
        self.create_user(email="boss@esrent.com", password="hunter22")
        response = self.client.post(
            "/api/auth/login", json={"email": "boss@esrent.com", "password": "hunter22"}
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["message"], "Login successful")
        self.assertEqual(body["user"]["email"], "boss@esrent.com")
        self.assertNotIn("passwordHash", body["user"])
        self.assertEqual(decode_access_token(body["token"])["email"], "boss@esrent.com")
        self.assertIsNotNone(self.db.users.find_one({"email": "boss@esrent.com"})["last_login"])

    def test_login_with_bad_password_is_401(self):
        self.create_user(email="boss@esrent.com", password="hunter22")
        response = self.client.post(
            "/api/auth/login", json={"email": "boss@esrent.com", "password": "wrong"}
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Invalid email or password"})

    def test_login_missing_password_is_400(self):
        response = self.client.post("/api/auth/login", json={"email": "boss@esrent.com"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Missing required field: password"})

    def test_verify(self):
        user = self.create_user()
        response = self.client.get("/api/auth/verify", headers=self.auth_headers(user))
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["valid"])
        self.assertEqual(body["user"]["id"], str(user["_id"]))
        self.assertEqual(body["user"]["role"], "admin")

    def test_super_admin_registers_admin_once(self):
        headers = self.admin_headers("super_admin")
        payload = {"email": "New@esrent.com", "password": "secret123", "name": "New",
                   "role": "admin"}
        response = self.client.post("/api/auth/register", json=payload, headers=headers)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["user"]["email"], "new@esrent.com")

        again = self.client.post("/api/auth/register", json=payload, headers=headers)
        self.assertEqual(again.status_code, 409)

    def test_register_rejects_short_password(self):
        response = self.client.post(
            "/api/auth/register",
            json={"email": "x@esrent.com", "password": "123", "name": "X", "role": "admin"},
            headers=self.admin_headers("super_admin"),
        )
        self.assertEqual(response.status_code, 400)
        self.assertTrue(response.json()["error"].startswith("Invalid value for password"))

    def test_logout(self):
        response = self.client.post("/api/auth/logout")
        self.assertEqual(response.json(), {"message": "Logged out successfully"})

    def test_users_listing_needs_super_admin(self):
        self.assertEqual(
            self.client.get("/api/users", headers=self.admin_headers("admin")).status_code, 403
        )
        response = self.client.get("/api/users/stats", headers=self.admin_headers("super_admin"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["superAdmins"], 1)

    def test_users_listing_includes_legacy_roles(self):
        self.create_user(email="old@esrent.com", role="user")
        response = self.client.get("/api/users", headers=self.admin_headers("super_admin"))
        self.assertEqual(response.status_code, 200, response.text)
        roles = {u["email"]: u["role"] for u in response.json()}
        self.assertEqual(roles["old@esrent.com"], "user")


if __name__ == "__main__":
    unittest.main()
