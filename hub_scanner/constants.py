import os
HOME_DIR = os.path.expanduser("~")
CONFIG_DIR = os.path.join(HOME_DIR, ".hubscan")
LOG_FILE = os.path.join(CONFIG_DIR, "hubscan.log")
STORE_DIR = os.path.join(CONFIG_DIR, "store")
HUB_BASE_URL = "https://huggingface.co"
TOKENS_ENV_VAR = "HUBSCAN_TOKENS"
DEFAULT_TIMEOUT = 30
DEFAULT_MAX_RETRIES = 5
ROTATION_BACKOFF_SECONDS = 2
FILE_FETCH_CONCURRENCY = 20
ORG_FETCH_CONCURRENCY = 20
SCAN_CONCURRENCY = 50
ORG_SCAN_CONCURRENCY = 10
HTTP_POOL_SIZE = 50
