import threading
from typing import List, Optional, Tuple
from hub_scanner import constants
from hub_scanner.errors import NotFoundError
from hub_scanner.logging_utils import log
from hub_scanner.models import Finding, ResourceKind, ScanRequest
from hub_scanner.scanner import scan_request
from hub_scanner.store import ORG_RESOURCES, REQUESTS, DocumentStore
from hub_scanner.workers import run_bounded
def scan_organization(store: DocumentStore, org: str, kind, patterns=None,
                      max_workers: int = constants.ORG_SCAN_CONCURRENCY,
                      scan_workers: int = constants.SCAN_CONCURRENCY,
                      cancel: Optional[threading.Event] = None,
                      base_url: str = constants.HUB_BASE_URL) -> Tuple[List[Finding], int]:
    """Scan every stored request of ``org`` for ``kind`` without re-fetching.

    Raises ``NotFoundError`` when no org resource records exist, before any
    request is loaded. Returns the merged findings and how many stored
    requests were scanned.
    """
    kind = ResourceKind.parse(kind)
    known = store.count(ORG_RESOURCES, org=org, kind=kind.value)
    if known == 0:
        log(f"op=scan_organization stage=not_found org={org} kind={kind.value}")
        raise NotFoundError(f"No {kind.value} recorded for organization {org}", org=org, kind=kind.value)
    requests = [ScanRequest.from_dict(doc) for doc in store.find_all(REQUESTS, org=org, resource_kind=kind.value)]
    log(f"op=scan_organization stage=start org={org} kind={kind.value} records={known} requests={len(requests)}")
    def _scan(request):
        return scan_request(request, patterns, max_workers=scan_workers, cancel=cancel, base_url=base_url)
    findings: List[Finding] = []
    scanned = 0
    for batch in run_bounded(_scan, requests, max_workers, cancel):
        findings.extend(batch)
        scanned += 1
    log(f"op=scan_organization stage=done org={org} kind={kind.value} scanned={scanned} findings={len(findings)}")
    return findings, scanned
