# app/client/local_store.py
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Keys shared by every page / tool reading the local mirror.
STORAGE_KEYS = (
    "products",
    "documents",
    "notices",
    "factories",
    "mailSubmissions",
    "mediaItems",
    "carousel",
    "teamMembers",
    "activityLogs",
)

SEED_DIR = Path(__file__).parent / "seed"


class LocalStore:
    """
    File-backed key/value mirror: one JSON array per key.

    Reads and writes are plain read-modify-write with no locking; two writers
    racing on the same key can lose one side's change.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if key not in STORAGE_KEYS:
            raise KeyError(f"Unknown storage key: {key}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> list[dict[str, Any]] | None:
        """
        Return the stored array, or None when nothing usable is stored.
        """
        path = self._path(key)
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable local cache %s: %s", path, e)
            return None
        if not isinstance(data, list):
            logger.warning("Ignoring local cache %s: expected a JSON array", path)
            return None
        return data

    def set(self, key: str, records: list[dict[str, Any]]) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(records, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


def load_seed(key: str, seed_dir: Path | None = None) -> list[dict[str, Any]]:
    """
    Bundled first-run data for a storage key ([] when none ships).
    """
    path = (seed_dir or SEED_DIR) / f"{key}.json"
    if not path.exists():
        return []
    return json.loads(path.read_text(encoding="utf-8"))
