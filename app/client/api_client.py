# app/client/api_client.py
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.core.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


class ApiError(Exception):
    """
    The API answered with {success: false} or a non-2xx status.

    Transport failures are not wrapped: they surface as httpx.TransportError.
    """

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


@dataclass(frozen=True)
class ResourceEndpoint:
    """
    Where a resource kind lives on the API and in the local mirror.
    """

    kind: str
    path: str
    singular_key: str
    plural_key: str
    storage_key: str


RESOURCE_ENDPOINTS: dict[str, ResourceEndpoint] = {
    "products": ResourceEndpoint("products", "/products", "product", "products", "products"),
    "documents": ResourceEndpoint("documents", "/documents", "document", "documents", "documents"),
    "notices": ResourceEndpoint("notices", "/notices", "notice", "notices", "notices"),
    "factories": ResourceEndpoint("factories", "/factories", "factory", "factories", "factories"),
    "teamMembers": ResourceEndpoint(
        "teamMembers", "/team-members", "teamMember", "teamMembers", "teamMembers"
    ),
    "mediaItems": ResourceEndpoint(
        "mediaItems", "/media-items", "mediaItem", "mediaItems", "mediaItems"
    ),
    "carousel": ResourceEndpoint("carousel", "/carousel", "slide", "carousel", "carousel"),
    "mailSubmissions": ResourceEndpoint(
        "mailSubmissions",
        "/mail-submissions",
        "mailSubmission",
        "mailSubmissions",
        "mailSubmissions",
    ),
}

# Client-only bookkeeping keys, never sent to the API.
LOCAL_FIELDS = ("localId",)


class ApiClient:
    """
    Thin synchronous client for the content API.

    The httpx.Client is injectable so tests can pass FastAPI's TestClient
    or a client mounted on httpx.MockTransport.
    """

    def __init__(
        self,
        http: httpx.Client | None = None,
        actor: str | None = None,
        api_prefix: str | None = None,
    ):
        self.owns_http = http is None
        self.http = http or httpx.Client(
            base_url=settings.API_BASE_URL,
            timeout=settings.CLIENT_TIMEOUT,
        )
        self.prefix = settings.API_PREFIX if api_prefix is None else api_prefix
        self.headers = {"X-Admin-User": actor or settings.DEFAULT_ACTOR}

    def _request(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        url = f"{self.prefix}{path}"
        logger.debug("API call: %s %s", method, url)
        response = self.http.request(method, url, headers=self.headers, **kwargs)

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_error or body.get("success") is False:
            message = body.get("error") or f"HTTP {response.status_code}"
            logger.error("API %s %s returned %s: %s", method, url, response.status_code, message)
            raise ApiError(response.status_code, message)
        return body

    @staticmethod
    def _outgoing(record: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in record.items() if k not in LOCAL_FIELDS}

    # ---- resources ----

    def fetch_all(self, endpoint: ResourceEndpoint) -> list[dict[str, Any]]:
        body = self._request("GET", endpoint.path)
        return body.get(endpoint.plural_key, [])

    def create(self, endpoint: ResourceEndpoint, record: dict[str, Any]) -> dict[str, Any]:
        body = self._request("POST", endpoint.path, json=self._outgoing(record))
        return body[endpoint.singular_key]

    def update(self, endpoint: ResourceEndpoint, record: dict[str, Any]) -> dict[str, Any]:
        body = self._request("PUT", endpoint.path, json=self._outgoing(record))
        return body[endpoint.singular_key]

    def delete(self, endpoint: ResourceEndpoint, record_id: str) -> None:
        self._request("DELETE", endpoint.path, params={"id": record_id})

    # ---- activity ----

    def record_activity(self, action: str, module: str, details: str) -> dict[str, Any]:
        body = self._request(
            "POST",
            "/activity-logs",
            json={"action": action, "module": module, "details": details},
        )
        return body["activityLog"]

    # ---- uploads ----

    def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str | None,
        upload_type: str,
        folder: str | None = None,
    ) -> dict[str, Any]:
        data = {"uploadType": upload_type}
        if folder:
            data["folder"] = folder
        return self._request(
            "POST",
            "/upload",
            files={"file": (filename, content, content_type or "application/octet-stream")},
            data=data,
        )

    def close(self) -> None:
        self.http.close()
