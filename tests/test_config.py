import os
import pytest
from hub_scanner import config, constants
from hub_scanner.errors import ValidationError
class DummyKeyring:
    def __init__(self):
        self.stored = {}
    def set_password(self, service, user, value):
        self.stored[(service, user)] = value
    def get_password(self, service, user):
        return self.stored.get((service, user))
    def delete_password(self, service, user):
        del self.stored[(service, user)]
class BrokenKeyring:
    @staticmethod
    def get_password(service, user):
        raise RuntimeError("backend unavailable")
    @staticmethod
    def set_password(service, user, value):
        raise RuntimeError("backend unavailable")
    @staticmethod
    def delete_password(service, user):
        raise RuntimeError("backend unavailable")
@pytest.fixture
def dummy_keyring(monkeypatch):
    backend = DummyKeyring()
    monkeypatch.setattr(config, "KEYRING_AVAILABLE", True)
    monkeypatch.setattr(config, "keyring", backend, raising=False)
    return backend
def test_save_tokens_requires_os_keyring(monkeypatch):
    monkeypatch.setattr(config, "KEYRING_AVAILABLE", False)
    with pytest.raises(ValidationError):
        config.save_tokens("hf_aaa")
def test_save_tokens_rejects_empty(dummy_keyring):
    with pytest.raises(ValidationError):
        config.save_tokens(" , ")
def test_save_and_load_round_trip(dummy_keyring):
    assert config.save_tokens("t1, t2") == ["t1", "t2"]
    assert dummy_keyring.stored[(config.KEYRING_SERVICE, config.KEYRING_USER)] == "t1,t2"
    assert config.load_tokens() == ["t1", "t2"]
def test_environment_overrides_keyring(dummy_keyring, monkeypatch):
    config.save_tokens(["stored"])
    monkeypatch.setenv(constants.TOKENS_ENV_VAR, "env1,env2")
    assert config.load_tokens() == ["env1", "env2"]
def test_load_tokens_empty_when_keyring_backend_broken(monkeypatch):
    monkeypatch.setattr(config, "KEYRING_AVAILABLE", True)
    monkeypatch.setattr(config, "keyring", BrokenKeyring, raising=False)
    assert config.load_tokens() == []
def test_delete_tokens(dummy_keyring):
    config.save_tokens("t1")
    assert config.delete_tokens() is True
    assert config.load_tokens() == []
    assert config.delete_tokens() is False
def test_delete_tokens_broken_backend(monkeypatch):
    monkeypatch.setattr(config, "KEYRING_AVAILABLE", True)
    monkeypatch.setattr(config, "keyring", BrokenKeyring, raising=False)
    assert config.delete_tokens() is False
@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
def test_ensure_config_dir_is_private(tmp_path):
    path = config.ensure_config_dir(str(tmp_path / "cfg"))
    assert os.stat(path).st_mode & 0o777 == 0o700
def test_load_settings_from_environment(monkeypatch):
    monkeypatch.setenv("HUBSCAN_BASE_URL", "https://mirror.test/")
    monkeypatch.setenv("HUBSCAN_SCAN_WORKERS", "8")
    monkeypatch.setenv("HUBSCAN_MAX_RETRIES", "not-a-number")
    monkeypatch.setenv("HUBSCAN_FILE_WORKERS", "-3")
    settings = config.load_settings()
    assert settings.hub_base_url == "https://mirror.test"
    assert settings.scan_concurrency == 8
    assert settings.max_retries == constants.DEFAULT_MAX_RETRIES
    assert settings.file_fetch_concurrency == constants.FILE_FETCH_CONCURRENCY
    assert settings.org_scan_concurrency == constants.ORG_SCAN_CONCURRENCY
