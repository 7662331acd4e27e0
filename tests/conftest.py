# tests/conftest.py
import httpx
import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from app.client.admin_data import AdminData
from app.core.storage_utils import UploadGateway, get_upload_gateway
from app.database import build_engine, create_db_and_tables, get_session
from app.main import app

PUBLIC_BASE = "https://demo.supabase.co/storage/v1/object/public/assets/"


class FakeBucket:
    """In-memory stand-in for a Supabase Storage bucket."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.fail_with: Exception | None = None
        self.remove_calls: list[list[str]] = []

    def upload(self, path, file, file_options=None):
        if self.fail_with is not None:
            raise self.fail_with
        self.objects[path] = file
        return {"Key": f"assets/{path}"}

    def get_public_url(self, path):
        return f"{PUBLIC_BASE}{path}"

    def remove(self, paths):
        self.remove_calls.append(list(paths))
        removed = []
        for path in paths:
            if self.objects.pop(path, None) is not None:
                removed.append({"name": path})
        return removed


class TestDataFactory:
    """Valid request payloads, overridable per test."""

    @staticmethod
    def product(**overrides) -> dict:
        data = {
            "name": "Sona Monsuli Rice",
            "description": "Aged premium grain",
            "price": "Rs. 2,400 / 25kg",
            "category": "manasuli-premium-rice",
            "subcategory": "sona-monsuli",
            "inStock": True,
        }
        data.update(overrides)
        return data

    @staticmethod
    def document(**overrides) -> dict:
        data = {
            "name": "PAN Certificate",
            "description": "Permanent Account Number certificate",
            "fileType": "pdf",
            "category": "Tax",
        }
        data.update(overrides)
        return data

    @staticmethod
    def notice(**overrides) -> dict:
        data = {
            "title": "Holiday",
            "content": "Office closed on Friday",
        }
        data.update(overrides)
        return data


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def bucket():
    return FakeBucket()


@pytest.fixture
def gateway(bucket):
    return UploadGateway(bucket=bucket, bucket_name="assets")


@pytest.fixture
def client(engine, gateway):
    def override_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_upload_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def factory():
    return TestDataFactory


@pytest.fixture
def public_url():
    """Public URL of an object path in the fake bucket."""
    return lambda path: f"{PUBLIC_BASE}{path}"


@pytest.fixture
def admin(client, tmp_path):
    """Client data layer talking to the in-process API."""
    data = AdminData(http=client, cache_dir=tmp_path / "cache")
    yield data
    data.close()


@pytest.fixture
def offline_calls():
    return []


@pytest.fixture
def offline_http(offline_calls):
    """httpx client whose every request fails to connect."""

    def handler(request):
        offline_calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(base_url="http://api.test", transport=httpx.MockTransport(handler))
    yield http
    http.close()


@pytest.fixture
def offline_admin(offline_http, tmp_path):
    data = AdminData(http=offline_http, cache_dir=tmp_path / "cache")
    yield data
    data.close()
