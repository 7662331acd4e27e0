# app/client/resource_cache.py
import logging
import uuid
from enum import Enum
from typing import Any

import httpx

from app.client.api_client import ApiClient, ApiError, ResourceEndpoint
from app.client.events import ChangeBus, ChangeEvent
from app.client.local_store import LocalStore

logger = logging.getLogger(__name__)

LOCAL_ID_PREFIX = "local-"


class SyncState(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class LoadSource(str, Enum):
    API = "api"
    LOCAL = "local"
    SEED = "seed"


def record_key(record: dict[str, Any]) -> str | None:
    """
    Server id when the record has been stored, else its client-side localId.
    """
    return record.get("id") or record.get("localId")


class ResourceCache:
    """
    In-memory collection of one resource kind, mirrored to the local store.

    Reads fall back API -> local mirror -> bundled seed. Writes apply locally
    first (optimistic), then go to the API; the outcome is tracked per record
    as a SyncState. Every mutation publishes exactly one ChangeEvent, right
    after the local change; the server result is folded in silently.
    """

    def __init__(
        self,
        endpoint: ResourceEndpoint,
        api: ApiClient,
        store: LocalStore,
        bus: ChangeBus,
        seed: list[dict[str, Any]] | None = None,
    ):
        self.endpoint = endpoint
        self.api = api
        self.store = store
        self.bus = bus
        self.seed = seed or []
        self._records: list[dict[str, Any]] = []
        self._states: dict[str, SyncState] = {}
        self._closed = False

    @property
    def kind(self) -> str:
        return self.endpoint.kind

    @property
    def records(self) -> list[dict[str, Any]]:
        return [dict(r) for r in self._records]

    def get(self, key: str) -> dict[str, Any] | None:
        for record in self._records:
            if record_key(record) == key:
                return dict(record)
        return None

    def sync_state(self, key: str) -> SyncState | None:
        """
        None means the record has not been written through this cache.
        """
        return self._states.get(key)

    # ----- persistence -----

    def _persist(self) -> None:
        try:
            self.store.set(self.endpoint.storage_key, self._records)
        except OSError as e:
            logger.warning("Could not mirror %s locally: %s", self.kind, e)

    def _publish(self, action: str, key: str | None) -> None:
        self.bus.publish(ChangeEvent(kind=self.kind, action=action, record_id=key))

    def _unsynced(self) -> list[dict[str, Any]]:
        """
        Locally created records without a server id, from the mirror and
        memory (memory wins). Seed records are not included.
        """
        found: dict[str, dict[str, Any]] = {}
        for record in [*(self.store.get(self.endpoint.storage_key) or []), *self._records]:
            local_id = record.get("localId") or ""
            if not record.get("id") and local_id.startswith(LOCAL_ID_PREFIX):
                found[local_id] = dict(record)
        return list(found.values())

    def _index(self, key: str) -> int | None:
        for i, record in enumerate(self._records):
            if record_key(record) == key:
                return i
        return None

    # ----- operations -----

    def load(self) -> LoadSource:
        """
        Populate the collection.

        API success replaces the collection and refreshes the mirror; records
        created locally that never reached the API are kept and stay out of
        sync (FAILED unless already tracked). On an outage the mirror is used;
        with no mirror, the bundled seed is used and written to the mirror so
        later reads agree.
        """
        try:
            records = self.api.fetch_all(self.endpoint)
        except (httpx.TransportError, ApiError) as e:
            logger.warning("Loading %s from API failed, using local data: %s", self.kind, e)
        else:
            unsynced = self._unsynced()
            states = {r["id"]: SyncState.CONFIRMED for r in records if r.get("id")}
            for record in unsynced:
                local_id = record["localId"]
                states[local_id] = self._states.get(local_id, SyncState.FAILED)
            self._records = records + unsynced
            self._states = states
            self._persist()
            return LoadSource.API

        cached = self.store.get(self.endpoint.storage_key)
        if cached is not None:
            self._records = cached
            return LoadSource.LOCAL

        self._records = [dict(r) for r in self.seed]
        self._persist()
        return LoadSource.SEED

    def save(self, record: dict[str, Any]) -> dict[str, Any]:
        """
        Create (no id) or update (has id) a record.

        Returns the record as it stands after the API call: the stored
        version when confirmed, the local version when the write failed.
        API failures are logged and leave the record marked FAILED.
        """
        record = dict(record)
        if record.get("id"):
            return self._write(record, "updated", self.api.update)

        record.setdefault("localId", f"{LOCAL_ID_PREFIX}{uuid.uuid4().hex}")
        return self._write(record, "created", self.api.create)

    def _write(self, record: dict[str, Any], action: str, send) -> dict[str, Any]:
        key = record_key(record)
        index = self._index(key)
        if index is None:
            self._records.append(record)
        else:
            self._records[index] = record
        self._states[key] = SyncState.PENDING
        self._persist()
        self._publish(action, key)

        try:
            stored = send(self.endpoint, record)
        except (httpx.TransportError, ApiError) as e:
            logger.error("Syncing %s %s %s failed: %s", action, self.kind, key, e)
            if not self._closed:
                self._states[key] = SyncState.FAILED
            return record

        if self._closed:
            logger.debug("Ignoring %s result for %s after close", self.kind, key)
            return stored

        # Server copy replaces the optimistic one (new id / version).
        index = self._index(key)
        if index is None:
            self._records.append(stored)
        else:
            self._records[index] = stored
        self._states.pop(key, None)
        self._states[stored["id"]] = SyncState.CONFIRMED
        self._persist()
        return stored

    def remove(self, key: str) -> bool:
        """
        Delete a record by id (or localId for records never stored).

        The record leaves the local collection before the API call. If the
        API call fails the record stays removed locally and `key` is marked
        FAILED. Returns True iff the record is gone on both sides.
        """
        index = self._index(key)
        record = self._records.pop(index) if index is not None else None
        self._persist()
        self._publish("deleted", key)

        if record is not None and not record.get("id"):
            # Never reached the API
            self._states.pop(key, None)
            return True

        try:
            self.api.delete(self.endpoint, key)
        except ApiError as e:
            if e.status_code == 404:
                logger.info("%s %s was already deleted", self.kind, key)
                self._states.pop(key, None)
                return False
            logger.error("Deleting %s %s failed: %s", self.kind, key, e)
        except httpx.TransportError as e:
            logger.error("Deleting %s %s failed: %s", self.kind, key, e)
        else:
            self._states.pop(key, None)
            return True

        if not self._closed:
            self._states[key] = SyncState.FAILED
        return False

    def close(self) -> None:
        self._closed = True
