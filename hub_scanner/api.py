import json
import time
import requests
from typing import List, Optional
from urllib.parse import quote
from requests.adapters import HTTPAdapter
from hub_scanner import constants
from hub_scanner.errors import HubAPIError, ParseError, RateLimitExhaustedError, TransportError
from hub_scanner.logging_utils import log
from hub_scanner.models import DiscussionItem, ResourceKind, ResourceMetadata
from hub_scanner.tokens import TokenRotator
THROTTLE_STATUSES = (401, 429)
DISCUSSION_TYPES = ("pr", "discussion")
def make_session(pool_size: int = constants.HTTP_POOL_SIZE) -> requests.Session:
    """Build the pooled session shared by every worker thread."""
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({"Accept": "application/json", "User-Agent": "hub-scanner"})
    return session
def file_blob_url(base_url: str, resource_id: str, filename: str, line: int = 0) -> str:
    """Browse link to a file, pointing at ``line`` when it is positive."""
    url = f"{base_url.rstrip('/')}/{resource_id}/blob/main/{filename}"
    if line and line > 0:
        url += f"?line={line}"
    return url
def discussion_url(base_url: str, kind, resource_id: str, number: int) -> str:
    return f"{base_url.rstrip('/')}/{ResourceKind.parse(kind).value}/{resource_id}/discussions/{number}"
def _read_body(resp) -> bytes:
    try:
        return b"".join(chunk for chunk in resp.iter_content(8192) if chunk)
    finally:
        resp.close()
class HubClient:
    """HTTP access to the hub API with token rotation on throttling.

    A single session is reused for every call. Responses with status 429 or
    401 rotate to the next token and retry; after ``max_retries`` attempts
    the call fails with ``RateLimitExhaustedError``. Any other non-2xx
    status fails at once with ``HubAPIError``. Network failures are raised
    as ``TransportError`` without retrying.
    """
    def __init__(self, rotator: Optional[TokenRotator] = None, base_url: str = constants.HUB_BASE_URL,
                 timeout: int = constants.DEFAULT_TIMEOUT, max_retries: int = constants.DEFAULT_MAX_RETRIES,
                 pool_size: int = constants.HTTP_POOL_SIZE, session=None, sleep=time.sleep):
        self.rotator = rotator or TokenRotator()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = session if session is not None else make_session(pool_size)
        self._sleep = sleep
    @classmethod
    def from_settings(cls, settings, rotator: TokenRotator) -> "HubClient":
        return cls(
            rotator=rotator,
            base_url=settings.hub_base_url,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
            pool_size=settings.http_pool_size,
        )
    def close(self):
        self.session.close()
    def __enter__(self):
        return self
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
    def request(self, url: str, method: str = "GET", body=None, max_retries: Optional[int] = None) -> bytes:
        retries = self.max_retries if max_retries is None else max_retries
        token_count = max(self.rotator.count(), 1)
        for attempt in range(retries):
            token = self.rotator.current()
            headers = {"Authorization": f"Bearer {token}"} if token else {}
            try:
                resp = self.session.request(method, url, headers=headers, json=body, stream=True, timeout=self.timeout)
                status = resp.status_code
                if status in THROTTLE_STATUSES:
                    resp.close()
                    self.rotator.rotate()
                    log(f"op=request stage=rotate status={status} attempt={attempt + 1}/{retries} "
                        f"token_index={self.rotator.index()} url={url}")
                    if attempt == token_count - 1:
                        self._sleep(constants.ROTATION_BACKOFF_SECONDS)
                    continue
                content = _read_body(resp)
            except requests.RequestException as e:
                log(f"op=request stage=transport_error url={url} error={e}")
                raise TransportError(f"Request to {url} failed: {e}", url=url) from e
            if 200 <= status < 300:
                return content
            log(f"op=request stage=http_error status={status} url={url}")
            raise HubAPIError(status, content.decode("utf-8", errors="replace"), url=url)
        log(f"op=request stage=exhausted attempts={retries} url={url}")
        raise RateLimitExhaustedError(f"All tokens exhausted after {retries} attempts", url=url)
    def get_text(self, url: str) -> str:
        return self.request(url).decode("utf-8", errors="replace")
    def get_json(self, url: str):
        content = self.request(url)
        try:
            return json.loads(content.decode("utf-8", errors="replace"))
        except ValueError as e:
            raise ParseError(f"Malformed JSON from {url}: {e}", url=url) from e
    # Hub endpoints
    def resource_url(self, kind, resource_id: str) -> str:
        return f"{self.base_url}/api/{ResourceKind.parse(kind).value}/{resource_id}"
    def discussions_url(self, kind, resource_id: str, discussion_type: str) -> str:
        return f"{self.resource_url(kind, resource_id)}/discussions?types={discussion_type}&status=all"
    def raw_file_url(self, resource_id: str, filename: str) -> str:
        return f"{self.base_url}/{resource_id}/resolve/main/{quote(filename)}"
    def org_listing_url(self, kind, org: str) -> str:
        return f"{self.base_url}/api/{ResourceKind.parse(kind).value}?author={quote(org)}&full=true"
    def file_blob_url(self, resource_id: str, filename: str, line: int = 0) -> str:
        return file_blob_url(self.base_url, resource_id, filename, line)
    def discussion_url(self, kind, resource_id: str, number: int) -> str:
        return discussion_url(self.base_url, kind, resource_id, number)
    # Typed fetches
    def fetch_metadata(self, kind, resource_id: str) -> ResourceMetadata:
        payload = self.get_json(self.resource_url(kind, resource_id))
        if not isinstance(payload, dict):
            raise ParseError(f"Unexpected metadata payload for {resource_id}", resource=resource_id)
        return ResourceMetadata.from_api(payload)
    def fetch_discussions(self, kind, resource_id: str, discussion_type: str) -> List[DiscussionItem]:
        url = self.discussions_url(kind, resource_id, discussion_type)
        payload = self.get_json(url)
        if isinstance(payload, dict):
            payload = payload.get("discussions")
        if not isinstance(payload, list):
            raise ParseError(f"Unexpected discussions payload from {url}", url=url)
        return [DiscussionItem.from_api(entry) for entry in payload]
    def fetch_file(self, resource_id: str, filename: str) -> str:
        return self.get_text(self.raw_file_url(resource_id, filename))
    def list_org_resources(self, kind, org: str) -> List[str]:
        url = self.org_listing_url(kind, org)
        payload = self.get_json(url)
        if not isinstance(payload, list):
            raise ParseError(f"Unexpected listing payload from {url}", url=url)
        ids = []
        for entry in payload:
            if isinstance(entry, dict) and isinstance(entry.get("id"), str) and entry["id"]:
                ids.append(entry["id"])
        return ids
