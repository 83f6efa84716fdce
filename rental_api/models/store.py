import logging
import os
import pickle
import threading
import uuid
from contextlib import contextmanager
from typing import Callable, Iterable, Optional

from rental_api.exceptions import ConflictError, StoreError
from rental_api.utils.dates import utc_now_iso

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "cars", "bikes", "helmets", "bookings")


class Store:
    """
    File-backed document store. Each collection is a dict of `_id -> document`;
    every mutation rewrites the pickle file through an atomic replace.

    One instance is created per application by `create_app` and closed on
    shutdown. `path=None` keeps everything in memory (used by service tests).
    """

    def __init__(self, path: str | os.PathLike | None = None):
        self.path = str(path) if path else None
        self.collections: dict[str, dict[str, dict]] = {name: {} for name in COLLECTIONS}
        self._rw = threading.RLock()
        self._closed = False

        if self.path:
            logger.info("[Store] Using file: %s", self.path)
            self._load()

    # ---------- Collections ----------
    def collection(self, name: str) -> dict[str, dict]:
        try:
            return self.collections[name]
        except KeyError:
            raise StoreError(f"Unknown collection '{name}'")

    @property
    def users(self) -> dict[str, dict]:
        return self.collections["users"]

    @property
    def bookings(self) -> dict[str, dict]:
        return self.collections["bookings"]

    # ---------- Persistence ----------
    def _load(self):
        """Load data from the pickle file, or start empty if unavailable or invalid."""
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, "rb") as f:
                data = pickle.load(f)
        except Exception as e:
            logger.warning("[Store] Load failed (%s); starting empty.", e)
            return

        if isinstance(data, dict):
            for name in COLLECTIONS:
                self.collections[name] = data.get(name, {}) or {}
            logger.info("[Store] Loaded: %s",
                        ", ".join(f"{n}={len(self.collections[n])}" for n in COLLECTIONS))
        else:
            # Handle incompatible data format: backup the old file and start empty
            bak = self.path + ".bak"
            try:
                os.replace(self.path, bak)
            except OSError as e:
                raise StoreError(f"Incompatible store file and backup failed: {e}")
            logger.warning("[Store] Incompatible store (%s); backed up to %s. Starting empty.",
                           type(data).__name__, bak)

    def _dump(self):
        """Write the in-memory data to the pickle file safely (atomic replace)."""
        if not self.path:
            return
        tmp = self.path + ".tmp"
        try:
            os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
            with open(tmp, "wb") as f:
                pickle.dump(self.collections, f, protocol=pickle.HIGHEST_PROTOCOL)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except (OSError, pickle.PicklingError) as e:
            logger.error("[Store] Save to %s failed: %s", self.path, e)
            raise StoreError(f"Error: could not save data ({e})")

    def save(self):
        """Thread-safe save method."""
        with self._rw:
            self._dump()

    def close(self):
        """Flush to disk once at shutdown; later calls are no-ops."""
        with self._rw:
            if self._closed:
                return
            if self.path:
                logger.info("[Store] Saving to %s before shutdown", self.path)
            self._dump()
            self._closed = True

    @contextmanager
    def locked(self):
        """Hold the store lock across several reads and writes."""
        with self._rw:
            yield self

    # ---------- Generic document operations ----------
    def _new_doc(self, doc: dict) -> dict:
        now = utc_now_iso()
        doc = dict(doc)
        doc["_id"] = uuid.uuid4().hex
        doc.setdefault("createdAt", now)
        doc["updatedAt"] = now
        return doc

    def insert(self, name: str, doc: dict) -> dict:
        """Insert a document and return the stored copy (with `_id` and timestamps)."""
        with self._rw:
            coll = self.collection(name)
            doc = self._new_doc(doc)
            coll[doc["_id"]] = doc
            try:
                self._dump()
            except StoreError:
                coll.pop(doc["_id"], None)
                raise
            return doc

    def insert_unless(self, name: str, doc: dict, clashes: Callable[[dict], bool]) -> dict:
        """
        Insert `doc` only if no existing document in the collection clashes with it.
        The scan and the write happen under one lock hold, so two callers can
        never both pass the check for clashing documents.
        """
        with self._rw:
            coll = self.collection(name)
            for existing in coll.values():
                if clashes(existing):
                    raise ConflictError()
            return self.insert(name, doc)

    def get(self, name: str, doc_id) -> Optional[dict]:
        if doc_id is None:
            return None
        return self.collection(name).get(str(doc_id))

    def find(self, name: str, where: Optional[Callable[[dict], bool]] = None, **equals) -> list[dict]:
        """
        Return documents matching every keyword. A list/set/tuple value matches
        membership (like `$in`); `where` adds an arbitrary predicate.
        """
        out = []
        with self._rw:
            docs = list(self.collection(name).values())
        for d in docs:
            if not all(_field_matches(d.get(k), v) for k, v in equals.items()):
                continue
            if where is not None and not where(d):
                continue
            out.append(d)
        return out

    def find_one(self, name: str, **equals) -> Optional[dict]:
        found = self.find(name, **equals)
        return found[0] if found else None

    def update(self, name: str, doc_id, updates: dict) -> Optional[dict]:
        """Apply `updates` to one document; return it, or None if it does not exist."""
        with self._rw:
            doc = self.get(name, doc_id)
            if doc is None:
                return None
            before = dict(doc)
            doc.update(updates)
            doc["updatedAt"] = utc_now_iso()
            try:
                self._dump()
            except StoreError:
                # restore in place, callers may hold this dict
                doc.clear()
                doc.update(before)
                raise
            return doc

    def delete(self, name: str, doc_id) -> bool:
        with self._rw:
            coll = self.collection(name)
            if str(doc_id) not in coll:
                return False
            removed = coll.pop(str(doc_id))
            try:
                self._dump()
            except StoreError:
                coll[str(doc_id)] = removed
                raise
            return True

    def clear(self):
        """Drop every document in every collection."""
        with self._rw:
            before = {n: dict(c) for n, c in self.collections.items()}
            for coll in self.collections.values():
                coll.clear()
            try:
                self._dump()
            except StoreError:
                for n, docs in before.items():
                    self.collections[n].update(docs)
                raise


def _field_matches(actual, expected) -> bool:
    if isinstance(expected, (list, set, tuple, frozenset)):
        return actual in expected
    return actual == expected


def newest_first(docs: Iterable[dict]) -> list[dict]:
    """Sort by createdAt descending; ties keep the later-inserted document first."""
    return sorted(reversed(list(docs)), key=lambda d: d.get("createdAt") or "", reverse=True)
