import io
import os
import shutil
import tempfile
import unittest

from flask_jwt_extended import decode_token

from app import create_app


class TestAuthRoutes(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.app = create_app({
            "TESTING": True,
            "JWT_SECRET_KEY": "test-secret-key-with-enough-length",
            "POSTS_DB_PATH": os.path.join(self.tmp_dir, "posts.db.json"),
            "USERS_DB_PATH": os.path.join(self.tmp_dir, "users.db.json"),
            "UPLOAD_FOLDER": os.path.join(self.tmp_dir, "uploads"),
        })
        self.client = self.app.test_client()

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def _register(self, **payload):
        body = {"username": "alice", "password": "password123"}
        body.update(payload)
        return self.client.post("/api/v1/auth/register", json=body)

    def test_register_returns_tokens_with_identity_claims(self):
        response = self._register(name="Alice A.", imgProfile="/uploads/profile/alice.webp")
        self.assertEqual(response.status_code, 201)
        body = response.get_json()
        self.assertIn("access_token", body)
        self.assertIn("refresh_token", body)

        with self.app.app_context():
            claims = decode_token(body["access_token"])
        self.assertEqual(claims["sub"], "1")
        self.assertEqual(claims["username"], "alice")
        self.assertEqual(claims["imgProfile"], "/uploads/profile/alice.webp")

    def test_register_rejects_missing_password(self):
        response = self.client.post("/api/v1/auth/register", json={"username": "alice"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("password", response.get_json()["fields"])

    def test_register_rejects_short_password(self):
        response = self._register(password="short")
        self.assertEqual(response.status_code, 400)
        self.assertIn("password", response.get_json()["fields"])

    def test_register_rejects_blank_username(self):
        response = self._register(username="   ")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "Username is required")

    def test_register_rejects_duplicate_username(self):
        self.assertEqual(self._register().status_code, 201)

        response = self._register()
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "Username already exists")

    def test_register_rejects_invalid_json(self):
        response = self.client.post(
            "/api/v1/auth/register",
            data="not-json",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "Invalid JSON body")

    def test_login(self):
        self._register()

        ok = self.client.post("/api/v1/auth/login", json={"username": "alice", "password": "password123"})
        self.assertEqual(ok.status_code, 200)
        self.assertIn("access_token", ok.get_json())

        wrong = self.client.post("/api/v1/auth/login", json={"username": "alice", "password": "nope-nope"})
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(wrong.get_json()["error"], "Invalid credentials")

        unknown = self.client.post("/api/v1/auth/login", json={"username": "ghost", "password": "password123"})
        self.assertEqual(unknown.status_code, 401)

    def test_refresh_requires_refresh_token(self):
        tokens = self._register().get_json()

        refreshed = self.client.post(
            "/api/v1/auth/refresh",
            headers={"Authorization": f"Bearer {tokens['refresh_token']}"},
        )
        self.assertEqual(refreshed.status_code, 200)
        self.assertTrue(refreshed.get_json()["access_token"])

        with_access = self.client.post(
            "/api/v1/auth/refresh",
            headers={"Authorization": f"Bearer {tokens['access_token']}"},
        )
        self.assertEqual(with_access.status_code, 422)

    def test_profile_is_limited_to_own_id(self):
        alice = self._register().get_json()
        self._register(username="bob")
        headers = {"Authorization": f"Bearer {alice['access_token']}"}

        own = self.client.get("/api/v1/auth/profile/1", headers=headers)
        self.assertEqual(own.status_code, 200)
        self.assertEqual(
            own.get_json(),
            {"id": 1, "username": "alice", "name": "alice", "imgProfile": None},
        )

        other = self.client.get("/api/v1/auth/profile/2", headers=headers)
        self.assertEqual(other.status_code, 403)

    def _upload_profile(self, token, payload=(b"fake-webp-bytes", "me.webp", "image/webp")):
        headers = {"Authorization": f"Bearer {token}"}
        if payload is None:
            return self.client.post("/api/v1/auth/upload/profile", headers=headers)
        return self.client.post(
            "/api/v1/auth/upload/profile",
            data={"file": (io.BytesIO(payload[0]), payload[1], payload[2])},
            headers=headers,
            content_type="multipart/form-data",
        )

    def test_upload_profile_image_updates_avatar(self):
        tokens = self._register().get_json()

        response = self._upload_profile(tokens["access_token"])
        self.assertEqual(response.status_code, 201)
        body = response.get_json()
        self.assertEqual(body["message"], "Profile image uploaded")
        self.assertTrue(body["url"].startswith("/uploads/profile/"))
        self.assertTrue(body["url"].endswith(".webp"))

        with self.app.app_context():
            claims = decode_token(body["access_token"])
        self.assertEqual(claims["imgProfile"], body["url"])

        headers = {"Authorization": f"Bearer {body['access_token']}"}
        profile = self.client.get("/api/v1/auth/profile/1", headers=headers).get_json()
        self.assertEqual(profile["imgProfile"], body["url"])

        post = self.client.post("/api/v1/posts", json={"header": "Hi", "content": "there"}, headers=headers)
        self.assertEqual(post.status_code, 201)
        self.assertEqual(post.get_json()["userImg"], body["url"])

        served = self.client.get(body["url"])
        self.assertEqual(served.data, b"fake-webp-bytes")
        served.close()

    def test_upload_profile_image_rejects_bad_input(self):
        tokens = self._register().get_json()

        unsupported = self._upload_profile(tokens["access_token"], (b"text", "notes.txt", "text/plain"))
        self.assertEqual(unsupported.status_code, 400)
        self.assertEqual(unsupported.get_json()["error"], "Unsupported media type: text/plain")

        missing = self._upload_profile(tokens["access_token"], None)
        self.assertEqual(missing.status_code, 400)
        self.assertEqual(missing.get_json()["error"], "No file uploaded")

        profile = self.client.get(
            "/api/v1/auth/profile/1",
            headers={"Authorization": f"Bearer {tokens['access_token']}"},
        ).get_json()
        self.assertIsNone(profile["imgProfile"])

    def test_upload_profile_image_requires_auth(self):
        response = self.client.post("/api/v1/auth/upload/profile")
        self.assertEqual(response.status_code, 401)


if __name__ == "__main__":
    unittest.main()
