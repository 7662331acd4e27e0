# tests/test_uploads.py
import httpx
import pytest
from storage3.utils import StorageException

from app.core.storage_utils import (
    UploadGateway,
    UploadRejectedError,
    UploadTransportError,
    resource_kind_for,
)

PDF = ("circular.pdf", b"%PDF-1.4 test", "application/pdf")
PNG = ("logo.png", b"\x89PNG\r\n", "image/png")


class TestUploadGateway:
    def test_upload_returns_public_url(self, gateway, bucket):
        result = gateway.upload(b"data", folder="vargo-agro", content_type="image/png", original_name="a.png")
        assert result.storage_id.startswith("vargo-agro/image/")
        assert result.storage_id.endswith(".png")
        assert result.url.endswith(result.storage_id)
        assert result.byte_size == 4
        assert bucket.objects[result.storage_id] == b"data"

    def test_transport_failure(self, gateway, bucket):
        bucket.fail_with = httpx.ConnectError("connection refused")
        with pytest.raises(UploadTransportError):
            gateway.upload(b"data", content_type="image/png")

    def test_rejected_upload(self, gateway, bucket):
        bucket.fail_with = StorageException({"statusCode": 413, "message": "Payload too large"})
        with pytest.raises(UploadRejectedError):
            gateway.upload(b"data", content_type="image/png")

    def test_delete_never_raises(self, bucket):
        class FailingBucket:
            def remove(self, paths):
                raise httpx.ReadTimeout("timed out")

        gateway = UploadGateway(bucket=FailingBucket(), bucket_name="assets")
        assert gateway.delete("vargo-agro/image/a.png") is False

    def test_delete_public_url_outside_bucket(self, gateway, bucket):
        assert gateway.delete_public_url("https://elsewhere.example.com/a.png") is False
        assert gateway.delete_public_url(None) is False
        assert bucket.remove_calls == []

    def test_extract_path(self, gateway, public_url):
        url = public_url("vargo-agro/raw/a.pdf") + "?"
        assert gateway.extract_path_from_public_url(url) == "vargo-agro/raw/a.pdf"

    def test_resource_kind(self):
        assert resource_kind_for("image/jpeg") == "image"
        assert resource_kind_for("video/mp4") == "video"
        assert resource_kind_for("application/pdf") == "raw"
        assert resource_kind_for(None) == "raw"


class TestUploadEndpoint:
    def test_document_upload(self, client, bucket):
        response = client.post(
            "/api/upload",
            files={"file": PDF},
            data={"uploadType": "document"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["fileType"] == "pdf"
        assert body["resourceType"] == "raw"
        assert body["size"] == len(PDF[1])
        assert body["originalFilename"] == "circular.pdf"
        assert body["publicId"] in bucket.objects

    def test_word_document_label(self, client):
        response = client.post(
            "/api/upload",
            files={"file": ("report.doc", b"\xd0\xcf\x11\xe0", "application/octet-stream")},
            data={"uploadType": "document"},
        )
        assert response.json()["fileType"] == "word"

    def test_oversized_file(self, client, bucket):
        big = b"0" * (10 * 1024 * 1024 + 1)
        response = client.post(
            "/api/upload",
            files={"file": ("big.pdf", big, "application/pdf")},
            data={"uploadType": "notice"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "File size must be less than 10MB"
        assert bucket.objects == {}

    def test_file_at_the_limit_is_accepted(self, client, bucket):
        exact = b"0" * (10 * 1024 * 1024)
        response = client.post(
            "/api/upload",
            files={"file": ("max.pdf", exact, "application/pdf")},
            data={"uploadType": "document"},
        )
        assert response.status_code == 200
        assert response.json()["size"] == len(exact)
        assert len(bucket.objects[response.json()["publicId"]]) == len(exact)

    def test_notice_rejects_word_files(self, client):
        response = client.post(
            "/api/upload",
            files={"file": ("a.doc", b"doc", "application/msword")},
            data={"uploadType": "notice"},
        )
        assert response.status_code == 400
        assert "File type not supported" in response.json()["error"]

    def test_unknown_upload_type(self, client):
        response = client.post("/api/upload", files={"file": PNG}, data={"uploadType": "avatar"})
        assert response.status_code == 400

    def test_host_unreachable(self, client, bucket):
        bucket.fail_with = httpx.ConnectError("connection refused")
        response = client.post("/api/upload", files={"file": PNG})
        assert response.status_code == 503
        assert response.json()["success"] is False

    def test_host_rejects(self, client, bucket):
        bucket.fail_with = StorageException("bucket not found")
        response = client.post("/api/upload", files={"file": PNG})
        assert response.status_code == 502
        assert response.json() == {"success": False, "error": "Upload failed"}
