"""Document persistence for fetched requests, scan results and org records.

Documents are plain dicts. Filters are keyword equality matches on
top-level keys. Every inserted document gets an ``_id`` (UUID4 hex) unless
it already carries one.
"""
import copy
import json
import os
import threading
from typing import Dict, List, Optional

from hub_scanner.errors import StorageError
from hub_scanner.logging_utils import log
from hub_scanner.models import new_id

REQUESTS = "requests"
SCAN_RESULTS = "scan_results"
ORG_RESOURCES = "org_resources"
COLLECTIONS = (REQUESTS, SCAN_RESULTS, ORG_RESOURCES)


def _matches(doc: dict, filters: dict) -> bool:
    return all(doc.get(key) == value for key, value in filters.items())


class DocumentStore:
    def insert(self, collection: str, doc: dict) -> str:
        raise NotImplementedError

    def find_one(self, collection: str, **filters) -> Optional[dict]:
        for doc in self.find_all(collection, **filters):
            return doc
        return None

    def count(self, collection: str, **filters) -> int:
        return len(self.find_all(collection, **filters))

    def find_all(self, collection: str, **filters) -> List[dict]:
        raise NotImplementedError


class MemoryStore(DocumentStore):
    def __init__(self):
        self._data: Dict[str, List[dict]] = {}
        self._lock = threading.Lock()

    def insert(self, collection, doc):
        doc = copy.deepcopy(doc)
        doc.setdefault("_id", new_id())
        with self._lock:
            self._data.setdefault(collection, []).append(doc)
        return doc["_id"]

    def find_all(self, collection, **filters):
        with self._lock:
            docs = self._data.get(collection, [])
            return [copy.deepcopy(d) for d in docs if _matches(d, filters)]


class JsonFileStore(DocumentStore):
    """One ``<collection>.json`` file per collection under ``directory``.

    Reads and writes go through one lock, and each write replaces the file
    atomically.
    """

    def __init__(self, directory: str):
        self.directory = directory
        self._lock = threading.Lock()

    def _path(self, collection):
        if collection not in COLLECTIONS:
            raise StorageError(f"Unknown collection: {collection}", collection=collection)
        return os.path.join(self.directory, f"{collection}.json")

    def _load(self, collection) -> List[dict]:
        path = self._path(collection)
        if not os.path.isfile(path):
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Could not read {path}: {e}", collection=collection) from e
        if not isinstance(data, list):
            raise StorageError(f"Corrupt collection file {path}", collection=collection)
        return data

    def _save(self, collection, docs):
        path = self._path(collection)
        tmp_path = path + ".tmp"
        try:
            os.makedirs(self.directory, mode=0o700, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(docs, f, ensure_ascii=False)
            os.replace(tmp_path, path)
            if os.name != "nt":
                os.chmod(path, 0o600)
        except OSError as e:
            log(f"op=store_save stage=write_error path={path} error={e}")
            raise StorageError(f"Could not write {path}: {e}", collection=collection) from e

    def insert(self, collection, doc):
        doc = dict(doc)
        doc.setdefault("_id", new_id())
        with self._lock:
            docs = self._load(collection)
            docs.append(doc)
            self._save(collection, docs)
        return doc["_id"]

    def find_all(self, collection, **filters):
        with self._lock:
            docs = self._load(collection)
        return [d for d in docs if _matches(d, filters)]
