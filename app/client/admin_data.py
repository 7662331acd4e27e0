# app/client/admin_data.py
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import httpx

from app.client.api_client import RESOURCE_ENDPOINTS, ApiClient, ApiError
from app.client.events import ChangeBus, ChangeEvent
from app.client.local_store import LocalStore, load_seed
from app.client.resource_cache import LoadSource, ResourceCache
from app.client.uploads import UploadClient
from app.core.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

ACTIVITY_KEY = "activityLogs"


class AdminData:
    """
    Shared client-side data layer for admin tools.

    One ResourceCache per resource kind, a change bus the caches publish on,
    a capped local activity log and an upload client. Build one per process
    and pass it around.
    """

    def __init__(
        self,
        http: httpx.Client | None = None,
        cache_dir: str | Path | None = None,
        actor: str | None = None,
        seed_dir: Path | None = None,
        activity_limit: int | None = None,
    ):
        self.api = ApiClient(http, actor=actor)
        self.store = LocalStore(cache_dir or settings.CLIENT_CACHE_DIR)
        self.bus = ChangeBus()
        self.uploads = UploadClient(self.api)
        self.activity_limit = activity_limit or settings.ACTIVITY_LOG_LIMIT
        self.caches: dict[str, ResourceCache] = {
            kind: ResourceCache(
                endpoint,
                self.api,
                self.store,
                self.bus,
                seed=load_seed(endpoint.storage_key, seed_dir),
            )
            for kind, endpoint in RESOURCE_ENDPOINTS.items()
        }
        self._closed = False

    def cache(self, kind: str) -> ResourceCache:
        try:
            return self.caches[kind]
        except KeyError:
            raise KeyError(f"Unknown resource kind: {kind}") from None

    @property
    def products(self) -> ResourceCache:
        return self.cache("products")

    @property
    def documents(self) -> ResourceCache:
        return self.cache("documents")

    @property
    def notices(self) -> ResourceCache:
        return self.cache("notices")

    def subscribe(self, kind: str, listener):
        return self.bus.subscribe(kind, listener)

    def load_all(self) -> dict[str, LoadSource]:
        return {kind: cache.load() for kind, cache in self.caches.items()}

    # ----- derived views -----

    def active_notices(self) -> list[dict[str, Any]]:
        """
        Notices to show publicly: only an explicit isActive=false hides one.
        """
        return [n for n in self.notices.records if n.get("isActive") is not False]

    def popup_notices(self) -> list[dict[str, Any]]:
        return [n for n in self.active_notices() if n.get("showAsPopup")]

    def in_stock_products(self) -> list[dict[str, Any]]:
        return [p for p in self.products.records if p.get("inStock")]

    # ----- activity log -----

    @property
    def activity_logs(self) -> list[dict[str, Any]]:
        return self.store.get(ACTIVITY_KEY) or []

    def log_activity(self, action: str, module: str, details: str = "") -> dict[str, Any]:
        """
        Record an admin action locally (newest first, capped) and send it to
        the API. Never raises: a failed send is only logged.
        """
        entry = {
            "id": f"local-{uuid.uuid4().hex}",
            "action": action,
            "module": module,
            "details": details,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "user": self.api.headers["X-Admin-User"],
        }
        logs = [entry, *self.activity_logs][: self.activity_limit]
        try:
            self.store.set(ACTIVITY_KEY, logs)
        except OSError as e:
            logger.warning("Could not store activity log locally: %s", e)
        self.bus.publish(ChangeEvent(kind=ACTIVITY_KEY, action="created", record_id=entry["id"]))

        if self._closed:
            return entry
        try:
            self.api.record_activity(action, module, details)
        except (httpx.TransportError, ApiError) as e:
            logger.warning("Activity log not sent to API (%s %s): %s", action, module, e)
        return entry

    def close(self) -> None:
        """
        Stop applying API results; later responses are ignored. Closes the
        HTTP client when this instance created it.
        """
        self._closed = True
        for cache in self.caches.values():
            cache.close()
        if self.api.owns_http:
            self.api.close()
