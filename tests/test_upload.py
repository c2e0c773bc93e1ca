import unittest
from unittest.mock import MagicMock, patch

from botocore.exceptions import ClientError

from app.services.media_service import MediaStorage, get_media_storage
from app.main import app
from tests.helpers import ApiTestCase

PNG = b"\x89PNG\r\n\x1a\n" + b"0" * 64


class TestUploadEndpoints(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.storage = MagicMock()
        self.storage.enabled = True
        self.storage.bucket_name = "esrent-media"
        self.storage.endpoint_url = None
        app.dependency_overrides[get_media_storage] = lambda: self.storage
        self.headers = self.admin_headers()

    def test_upload_requires_admin(self):
        response = self.client.post("/api/upload", files={"files": ("a.png", PNG, "image/png")})
        self.assertEqual(response.status_code, 401)

    def test_upload_stores_each_file(self):
        self.storage.upload.side_effect = [
            {"url": "https://cdn/esrent/1.png", "public_id": "esrent/1.png",
             "format": "png", "size": len(PNG)},
            {"url": "https://cdn/cars/2.jpg", "public_id": "cars/2.jpg",
             "format": "jpg", "size": 3},
        ]
        response = self.client.post(
            "/api/upload",
            files=[("files", ("a.png", PNG, "image/png")),
                   ("files", ("b.jpg", b"abc", "image/jpeg"))],
            data={"folder": "cars"},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body["message"], "Files uploaded successfully")
        self.assertEqual(body["files"][0]["publicId"], "esrent/1.png")
        self.assertEqual(self.storage.upload.call_count, 2)
        self.assertEqual(self.storage.upload.call_args.args[3], "cars")

    def test_rejects_unsupported_type(self):
        response = self.client.post(
            "/api/upload",
            files={"files": ("doc.pdf", b"%PDF", "application/pdf")},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("Invalid file type", response.json()["error"])
        self.storage.upload.assert_not_called()

    @patch("app.services.media_service.settings")
    def test_rejects_oversized_file(self, mock_settings):
        mock_settings.UPLOAD_ALLOWED_TYPES = ["image/png"]
        mock_settings.UPLOAD_MAX_BYTES = 10
        response = self.client.post(
            "/api/upload", files={"files": ("a.png", PNG, "image/png")}, headers=self.headers
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("File too large: a.png", response.json()["error"])

    def test_unconfigured_storage_is_500(self):
        self.storage.enabled = False
        response = self.client.post(
            "/api/upload", files={"files": ("a.png", PNG, "image/png")}, headers=self.headers
        )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Media storage is not configured"})

    def test_storage_failure_names_file(self):
        self.storage.upload.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
        )
        response = self.client.post(
            "/api/upload", files={"files": ("a.png", PNG, "image/png")}, headers=self.headers
        )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Failed to upload a.png"})

    def test_delete(self):
        self.storage.delete_many.return_value = [{"publicId": "esrent/1.png", "result": "ok"}]
        response = self.client.request(
            "DELETE", "/api/upload", json={"publicIds": ["esrent/1.png"]}, headers=self.headers
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["results"][0]["result"], "ok")
        self.storage.delete_many.assert_called_once_with(["esrent/1.png"])

    def test_delete_needs_ids(self):
        response = self.client.request(
            "DELETE", "/api/upload", json={"publicIds": []}, headers=self.headers
        )
        self.assertEqual(response.status_code, 400)

    def test_config(self):
        response = self.client.get("/api/upload", headers=self.headers)
        self.assertEqual(response.json()["isConfigured"], True)
        self.assertEqual(response.json()["bucket"], "esrent-media")


class TestMediaStorage(unittest.TestCase):
    def test_disabled_without_bucket(self):
        self.assertFalse(MediaStorage().enabled)

    @patch("app.services.media_service.boto3")
    def test_upload_builds_key_and_url(self, mock_boto3):
        storage = MediaStorage(bucket="esrent-media", region="eu-west-1")
        result = storage.upload(b"abc", "car.png", "image/png", "cars/")

        key = result["public_id"]
        self.assertTrue(key.startswith("cars/"))
        self.assertTrue(key.endswith(".png"))
        self.assertEqual(result["url"],
                         f"https://esrent-media.s3.eu-west-1.amazonaws.com/{key}")
        self.assertEqual(result["size"], 3)
        s3 = mock_boto3.Session.return_value.client.return_value
        s3.put_object.assert_called_once()
        self.assertEqual(s3.put_object.call_args.kwargs["ContentType"], "image/png")

    @patch("app.services.media_service.boto3")
    def test_public_base_url_wins(self, mock_boto3):
        storage = MediaStorage(bucket="b", public_base_url="https://media.esrent.test/")
        self.assertEqual(storage.public_url("x/y.jpg"), "https://media.esrent.test/x/y.jpg")

    @patch("app.services.media_service.boto3")
    def test_delete_many_reports_failures(self, mock_boto3):
        storage = MediaStorage(bucket="b")
        storage.s3_client.delete_object.side_effect = [
            None,
            ClientError({"Error": {"Code": "NoSuchKey", "Message": "missing"}}, "DeleteObject"),
        ]
        results = storage.delete_many(["a", "b"])
        self.assertEqual(results[0], {"publicId": "a", "result": "ok"})
        self.assertEqual(results[1]["result"], "error")


if __name__ == "__main__":
    unittest.main()
