"""Key-value stores for saved booking drafts.

A draft is stored as the JSON string produced by the form engine. Stores may
raise on I/O problems; the engine treats persistence as best effort and
swallows those failures.
"""

import datetime as dt
import re
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from booking_form.models import DraftStoreBackend

if TYPE_CHECKING:
    from booking_form.config import FormConfig

    from .dynamodb import DynamoDBService


class DraftStore(Protocol):
    """Storage capability used by the form engine for drafts."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryDraftStore:
    """Draft store backed by a dict, for tests and single-process use."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def delete(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)


class FileDraftStore:
    """Draft store writing one JSON file per key into a directory."""

    _UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        safe_key = self._UNSAFE_CHARS.sub("_", key) or "_"
        return self.directory / f"{safe_key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class DynamoDBDraftStore:
    """Draft store keeping one item per key in the ``drafts`` table.

    Items carry an ``expires_at`` epoch attribute so abandoned drafts are
    removed by DynamoDB TTL.
    """

    DRAFTS_TABLE = "drafts"

    def __init__(self, db: "DynamoDBService", ttl_seconds: int = 7 * 24 * 3600) -> None:
        """Initialize the store.

        Args:
            db: DynamoDB service instance
            ttl_seconds: Lifetime of a saved draft
        """
        self.db = db
        self.ttl_seconds = ttl_seconds

    def get(self, key: str) -> str | None:
        item = self.db.get_item(self.DRAFTS_TABLE, {"draft_key": key})
        if not item:
            return None
        return str(item["draft"])

    def set(self, key: str, value: str) -> None:
        now = dt.datetime.now(dt.UTC)
        self.db.put_item(
            self.DRAFTS_TABLE,
            {
                "draft_key": key,
                "draft": value,
                "updated_at": now.isoformat(),
                "expires_at": int(now.timestamp()) + self.ttl_seconds,
            },
        )

    def delete(self, key: str) -> None:
        self.db.delete_item(self.DRAFTS_TABLE, {"draft_key": key})

    def ensure_table(self) -> bool:
        """Create the drafts table (with TTL on expires_at) if it is missing."""
        return self.db.ensure_table(self.DRAFTS_TABLE, "draft_key", ttl_attribute="expires_at")


def create_draft_store(config: "FormConfig") -> DraftStore:
    """Build the draft store selected by configuration."""
    if config.draft_store == DraftStoreBackend.FILE:
        return FileDraftStore(config.draft_dir)
    if config.draft_store == DraftStoreBackend.DYNAMODB:
        from .dynamodb import get_dynamodb_service

        return DynamoDBDraftStore(
            get_dynamodb_service(config.environment),
            ttl_seconds=config.draft_ttl_seconds,
        )
    return InMemoryDraftStore()
