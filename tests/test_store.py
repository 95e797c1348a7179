import json
import pytest
from hub_scanner.errors import StorageError
from hub_scanner.store import JsonFileStore, MemoryStore
@pytest.fixture(params=["memory", "json"])
def any_store(request, tmp_path):
    if request.param == "memory":
        return MemoryStore()
    return JsonFileStore(str(tmp_path / "store"))
def test_insert_find_and_count(any_store):
    first = any_store.insert("org_resources", {"org": "acme", "kind": "models"})
    any_store.insert("org_resources", {"org": "acme", "kind": "spaces"})
    any_store.insert("org_resources", {"org": "other", "kind": "models"})
    assert len(first) == 32
    assert any_store.count("org_resources", org="acme") == 2
    assert any_store.count("org_resources", org="acme", kind="models") == 1
    assert any_store.find_one("org_resources", _id=first)["kind"] == "models"
    assert any_store.find_one("org_resources", org="nobody") is None
    assert any_store.count("requests") == 0
def test_explicit_id_is_kept(any_store):
    assert any_store.insert("requests", {"_id": "abc", "request_id": "abc"}) == "abc"
    assert any_store.find_one("requests", request_id="abc")["_id"] == "abc"
def test_memory_store_returns_copies():
    store = MemoryStore()
    store.insert("requests", {"request_id": "r", "siblings": []})
    store.find_one("requests")["siblings"].append("mutated")
    assert store.find_one("requests")["siblings"] == []
def test_json_store_persists_across_instances(tmp_path):
    directory = str(tmp_path / "store")
    JsonFileStore(directory).insert("scan_results", {"scan_id": "s1"})
    assert JsonFileStore(directory).find_one("scan_results", scan_id="s1") is not None
    with open(tmp_path / "store" / "scan_results.json", encoding="utf-8") as f:
        assert json.load(f)[0]["scan_id"] == "s1"
def test_json_store_rejects_unknown_collection(tmp_path):
    with pytest.raises(StorageError):
        JsonFileStore(str(tmp_path)).insert("users", {})
def test_json_store_corrupt_file(tmp_path):
    (tmp_path / "requests.json").write_text("{broken", encoding="utf-8")
    with pytest.raises(StorageError):
        JsonFileStore(str(tmp_path)).find_all("requests")
