#!/usr/bin/env python3
import os
from dataclasses import dataclass
from hub_scanner import constants
from hub_scanner.errors import ValidationError
from hub_scanner.utils import split_csv
KEYRING_SERVICE = "hub-scanner"
KEYRING_USER = "hub_tokens"
try:
    import keyring
    KEYRING_AVAILABLE = True
except Exception:
    KEYRING_AVAILABLE = False


def _ensure_secure_store_available() -> None:
    if not KEYRING_AVAILABLE:
        raise ValidationError("An OS keyring backend is required to store tokens. Use HUBSCAN_TOKENS instead.")


def ensure_config_dir(path=None):
    path = path or constants.CONFIG_DIR
    if os.path.isdir(path):
        return path
    os.makedirs(path, mode=0o700, exist_ok=True)
    if os.name != 'nt':
        try:
            os.chmod(path, 0o700)
        except OSError as e:
            from hub_scanner.logging_utils import log
            log(f"op=ensure_config_dir stage=chmod_error path={path} error={e}")
    return path


def save_tokens(tokens):
    """Store the token list in the OS keyring as one comma-separated value."""
    if isinstance(tokens, str):
        tokens = split_csv(tokens)
    if not tokens:
        raise ValidationError("At least one token is required")
    _ensure_secure_store_available()
    ensure_config_dir()
    keyring.set_password(KEYRING_SERVICE, KEYRING_USER, ",".join(tokens))
    return tokens


def load_tokens():
    """Return the configured tokens; the environment variable wins over the keyring."""
    env_value = os.environ.get(constants.TOKENS_ENV_VAR)
    if env_value:
        return split_csv(env_value)
    if not KEYRING_AVAILABLE:
        return []
    try:
        return split_csv(keyring.get_password(KEYRING_SERVICE, KEYRING_USER))
    except Exception as e:
        from hub_scanner.logging_utils import log
        log(f"op=load_tokens stage=keyring_error error={e}")
        return []


def delete_tokens():
    _ensure_secure_store_available()
    try:
        if keyring.get_password(KEYRING_SERVICE, KEYRING_USER):
            keyring.delete_password(KEYRING_SERVICE, KEYRING_USER)
            return True
    except Exception as e:
        from hub_scanner.logging_utils import log
        log(f"op=delete_tokens stage=keyring_error error={e}")
    return False


def secure_store_available() -> bool:
    return KEYRING_AVAILABLE


def _env_int(name, default):
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value <= 0:
        from hub_scanner.logging_utils import log
        log(f"op=load_settings stage=invalid_value name={name} value={raw!r} default={default}")
        return default
    return value


@dataclass
class Settings:
    hub_base_url: str = constants.HUB_BASE_URL
    store_dir: str = constants.STORE_DIR
    request_timeout: int = constants.DEFAULT_TIMEOUT
    max_retries: int = constants.DEFAULT_MAX_RETRIES
    file_fetch_concurrency: int = constants.FILE_FETCH_CONCURRENCY
    org_fetch_concurrency: int = constants.ORG_FETCH_CONCURRENCY
    scan_concurrency: int = constants.SCAN_CONCURRENCY
    org_scan_concurrency: int = constants.ORG_SCAN_CONCURRENCY
    http_pool_size: int = constants.HTTP_POOL_SIZE


def load_settings() -> Settings:
    """Build settings from ``HUBSCAN_*`` environment variables."""
    return Settings(
        hub_base_url=os.environ.get("HUBSCAN_BASE_URL", constants.HUB_BASE_URL).rstrip("/"),
        store_dir=os.environ.get("HUBSCAN_STORE_DIR", constants.STORE_DIR),
        request_timeout=_env_int("HUBSCAN_TIMEOUT", constants.DEFAULT_TIMEOUT),
        max_retries=_env_int("HUBSCAN_MAX_RETRIES", constants.DEFAULT_MAX_RETRIES),
        file_fetch_concurrency=_env_int("HUBSCAN_FILE_WORKERS", constants.FILE_FETCH_CONCURRENCY),
        org_fetch_concurrency=_env_int("HUBSCAN_ORG_FETCH_WORKERS", constants.ORG_FETCH_CONCURRENCY),
        scan_concurrency=_env_int("HUBSCAN_SCAN_WORKERS", constants.SCAN_CONCURRENCY),
        org_scan_concurrency=_env_int("HUBSCAN_ORG_SCAN_WORKERS", constants.ORG_SCAN_CONCURRENCY),
        http_pool_size=_env_int("HUBSCAN_HTTP_POOL", constants.HTTP_POOL_SIZE),
    )
