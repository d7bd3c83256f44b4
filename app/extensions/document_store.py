import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from threading import RLock

from app.errors import StorageDegradedError


logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    records: list = field(default_factory=list)
    last_id: int = 0


class DocumentStore:
    """A whole collection persisted as a single JSON document.

    The file holds either a bare array of records or an object with the
    records under ``collection`` and the id counter under ``lastId``.
    Writes always produce the object form.
    """

    def __init__(self, path, collection: str):
        self.path = Path(path)
        self.collection = collection
        self._lock = RLock()

    def read(self) -> list[dict]:
        return self.load().records

    def load(self, strict: bool = False) -> Snapshot:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return Snapshot()
        except OSError as e:
            return self._degraded(f"unreadable: {e}", strict)

        if not raw.strip():
            return Snapshot()

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            return self._degraded(f"invalid JSON: {e}", strict)

        last_id = 0
        if isinstance(payload, list):
            records = payload
        elif isinstance(payload, dict) and isinstance(payload.get(self.collection), list):
            records = payload[self.collection]
            last_id = payload.get("lastId") or 0
            if not isinstance(last_id, int):
                last_id = 0
        else:
            return self._degraded(
                f"expected an array or an object with '{self.collection}'",
                strict,
            )

        valid = [record for record in records if isinstance(record, dict)]
        if len(valid) != len(records):
            logger.warning(
                "Dropped %d malformed %s record(s) from %s",
                len(records) - len(valid),
                self.collection,
                self.path,
            )
        return Snapshot(records=valid, last_id=last_id)

    def write(self, records, last_id: int = 0) -> None:
        payload = {self.collection: list(records), "lastId": last_id}
        serialized = json.dumps(payload, indent=2, ensure_ascii=False)

        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            tmp_path.write_text(serialized, encoding="utf-8")
            tmp_path.replace(self.path)

    @contextmanager
    def transaction(self):
        """Load, yield and write back a snapshot while holding the store lock.

        Nothing is written when the block raises. A corrupt document raises
        ``StorageDegradedError`` before the block runs so it is never
        overwritten by a mutation.
        """
        with self._lock:
            snapshot = self.load(strict=True)
            yield snapshot
            self.write(snapshot.records, snapshot.last_id)

    def _degraded(self, reason: str, strict: bool) -> Snapshot:
        if strict:
            raise StorageDegradedError(f"{self.path}: {reason}")
        logger.warning(
            "Document store %s is degraded (%s); serving an empty %s collection",
            self.path,
            reason,
            self.collection,
        )
        return Snapshot()
