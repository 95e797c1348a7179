"""Caller-facing operations: fetch, scan, results and dashboard.

Every public method raises only ``HubScannerError`` subclasses so the CLI
can map failures to a stable category.
"""
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from hub_scanner import config
from hub_scanner.api import HubClient
from hub_scanner.collector import collect_discussions, collect_files
from hub_scanner.errors import CancelledError, HubAPIError, HubScannerError, NotFoundError, ValidationError
from hub_scanner.findings import count_by_source, count_by_type, count_total, group_by_resource
from hub_scanner.logging_utils import log
from hub_scanner.models import (
    Finding, OrgResourceRecord, RemoteResource, ResourceKind, ResourceMetadata, ScanRequest, ScanResult,
)
from hub_scanner.org import scan_organization
from hub_scanner.patterns import HIGH_RISK_PATTERNS, default_patterns
from hub_scanner.scanner import scan_request
from hub_scanner.store import ORG_RESOURCES, REQUESTS, SCAN_RESULTS, DocumentStore, JsonFileStore
from hub_scanner.tokens import TokenRotator
from hub_scanner.utils import mask_secret
from hub_scanner.workers import run_bounded

RECENT_SCANS_LIMIT = 10


@dataclass
class FetchReport:
    request: ScanRequest
    metadata: ResourceMetadata
    candidates: int = 0


@dataclass
class OrgFetchReport:
    org: str
    kind: str
    resource_ids: List[str] = field(default_factory=list)
    record_ids: List[str] = field(default_factory=list)
    request_ids: List[str] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)


@dataclass
class ScanReport:
    result: ScanResult
    findings: List[Finding]
    by_type: Dict[str, int]
    by_source: Dict[str, int]
    scanned_requests: int = 1

    @property
    def total(self) -> int:
        return len(self.findings)


def _required(value, name):
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{name} is required", field=name)
    return value


def _check_cancelled(cancel: threading.Event, op: str, **context):
    if cancel.is_set():
        log(f"op={op} stage=cancelled")
        raise CancelledError(f"{op} cancelled before completion", **context)


class ScannerService:
    def __init__(self, client: HubClient, store: DocumentStore, patterns=None,
                 settings: Optional[config.Settings] = None):
        self.client = client
        self.store = store
        self.settings = settings or config.Settings()
        self.patterns = default_patterns() if patterns is None else patterns

    @classmethod
    def from_environment(cls) -> "ScannerService":
        settings = config.load_settings()
        rotator = TokenRotator(config.load_tokens())
        client = HubClient.from_settings(settings, rotator)
        return cls(client, JsonFileStore(settings.store_dir), settings=settings)

    def close(self):
        self.client.close()

    # Fetching

    def fetch_resource(self, kind, resource_id: str, include_prs: bool = False,
                       include_discussions: bool = False, cancel: Optional[threading.Event] = None) -> FetchReport:
        """Fetch one resource and store it as a scan request.

        Nothing is stored when ``cancel`` is set before the fetch completes.
        """
        cancel = cancel if cancel is not None else threading.Event()
        resource = RemoteResource(ResourceKind.parse(kind), _required(resource_id, "resource id"))
        log(f"op=fetch_resource stage=start kind={resource.kind.value} id={resource.id} "
            f"prs={include_prs} discussions={include_discussions}")
        try:
            metadata = self.client.fetch_metadata(resource.kind, resource.id)
        except HubAPIError as e:
            log(f"op=fetch_resource stage=metadata_error id={resource.id} status={e.status}")
            if e.status == 404:
                raise NotFoundError(f"{resource.kind.singular} {resource.id} not found", id=resource.id) from e
            raise
        names = [ref.name for ref in metadata.siblings]
        files = collect_files(self.client, resource.id, names,
                              max_workers=self.settings.file_fetch_concurrency, cancel=cancel)
        discussions = collect_discussions(self.client, resource.id, resource.kind, include_prs,
                                          include_discussions, cancel=cancel)
        _check_cancelled(cancel, "fetch_resource", id=resource.id)
        request = ScanRequest(
            resource_kind=resource.kind.value,
            resource_id=resource.id,
            org=resource.org,
            files=files,
            discussions=discussions,
        )
        doc = request.to_dict()
        doc["_id"] = request.request_id
        self.store.insert(REQUESTS, doc)
        log(f"op=fetch_resource stage=stored id={resource.id} request={request.request_id} "
            f"files={len(files)} discussions={len(discussions)}")
        return FetchReport(request=request, metadata=metadata, candidates=len(names))

    def fetch_organization(self, org: str, kind, include_prs: bool = False, include_discussions: bool = False,
                           fetch_contents: bool = True, cancel: Optional[threading.Event] = None) -> OrgFetchReport:
        cancel = cancel if cancel is not None else threading.Event()
        org = _required(org, "organization")
        kind = ResourceKind.parse(kind)
        try:
            resource_ids = self.client.list_org_resources(kind, org)
        except HubAPIError as e:
            if e.status == 404:
                raise NotFoundError(f"Organization {org} not found", org=org) from e
            raise
        if not resource_ids:
            raise NotFoundError(f"No {kind.value} found for organization {org}", org=org, kind=kind.value)
        report = OrgFetchReport(org=org, kind=kind.value, resource_ids=resource_ids)
        log(f"op=fetch_organization stage=listed org={org} kind={kind.value} count={len(resource_ids)}")

        def _record(resource_id):
            record = OrgResourceRecord(org=org, kind=kind.value, resource_id=resource_id,
                                       include_prs=include_prs, include_discussions=include_discussions)
            return self.store.insert(ORG_RESOURCES, record.to_dict())

        report.record_ids = run_bounded(_record, resource_ids, self.settings.org_fetch_concurrency, cancel)
        _check_cancelled(cancel, "fetch_organization", org=org)
        if not fetch_contents:
            return report

        def _fetch(resource_id):
            try:
                return resource_id, self.fetch_resource(kind, resource_id, include_prs, include_discussions,
                                                        cancel), None
            except CancelledError:
                raise
            except HubScannerError as e:
                log(f"op=fetch_organization stage=resource_error org={org} id={resource_id} "
                    f"category={e.category} error={e}")
                return resource_id, None, e

        for resource_id, fetched, error in run_bounded(_fetch, resource_ids,
                                                       self.settings.org_fetch_concurrency, cancel):
            if error is not None:
                report.failures[resource_id] = f"{error.category}: {error}"
            else:
                report.request_ids.append(fetched.request.request_id)
        _check_cancelled(cancel, "fetch_organization", org=org)
        log(f"op=fetch_organization stage=done org={org} kind={kind.value} fetched={len(report.request_ids)} "
            f"failed={len(report.failures)}")
        return report

    # Scanning

    def _persist(self, request_id: str, findings: List[Finding]) -> ScanResult:
        result = ScanResult(request_id=request_id, scanned_resources=group_by_resource(findings))
        doc = result.to_dict()
        doc["_id"] = result.scan_id
        self.store.insert(SCAN_RESULTS, doc)
        return result

    def scan_request(self, request_id: str, progress=None, cancel: Optional[threading.Event] = None) -> ScanReport:
        cancel = cancel if cancel is not None else threading.Event()
        request_id = _required(request_id, "request id")
        doc = self.store.find_one(REQUESTS, request_id=request_id)
        if doc is None:
            raise NotFoundError(f"Request {request_id} not found", request_id=request_id)
        request = ScanRequest.from_dict(doc)
        findings = scan_request(request, self.patterns, max_workers=self.settings.scan_concurrency,
                                cancel=cancel, base_url=self.settings.hub_base_url, progress=progress)
        _check_cancelled(cancel, "scan_request", request_id=request_id)
        result = self._persist(request_id, findings)
        log(f"op=scan_request stage=stored request={request_id} scan={result.scan_id} findings={len(findings)}")
        return ScanReport(result, findings, count_by_type(findings), count_by_source(findings))

    def scan_organization(self, org: str, kind, cancel: Optional[threading.Event] = None) -> ScanReport:
        cancel = cancel if cancel is not None else threading.Event()
        org = _required(org, "organization")
        kind = ResourceKind.parse(kind)
        findings, scanned = scan_organization(
            self.store, org, kind, self.patterns,
            max_workers=self.settings.org_scan_concurrency,
            scan_workers=self.settings.scan_concurrency,
            cancel=cancel,
            base_url=self.settings.hub_base_url,
        )
        _check_cancelled(cancel, "scan_organization", org=org, kind=kind.value)
        result = self._persist(f"org-scan-{org}-{kind.value}", findings)
        return ScanReport(result, findings, count_by_type(findings), count_by_source(findings), scanned)

    # Results

    def get_result(self, scan_id: str) -> dict:
        scan_id = _required(scan_id, "scan id")
        doc = self.store.find_one(SCAN_RESULTS, scan_id=scan_id)
        if doc is None:
            raise NotFoundError(f"Scan result {scan_id} not found", scan_id=scan_id)
        result = ScanResult.from_dict(doc)
        findings = [f for r in result.scanned_resources for f in r.findings]
        by_resource = {f"{r.kind}_{r.id}": len(r.findings) for r in result.scanned_resources}
        data = result.to_dict()
        data.update({
            "total_findings": count_total(result.scanned_resources),
            "findings_by_type": count_by_type(findings),
            "findings_by_resource": by_resource,
        })
        return data

    def _results_newest_first(self) -> List[ScanResult]:
        results = [ScanResult.from_dict(doc) for doc in self.store.find_all(SCAN_RESULTS)]
        results.sort(key=lambda r: r.created_at, reverse=True)
        return results

    @staticmethod
    def _summary(result: ScanResult) -> dict:
        return {
            "scan_id": result.scan_id,
            "request_id": result.request_id,
            "findings": count_total(result.scanned_resources),
            "resources": len(result.scanned_resources),
            "created_at": result.created_at,
        }

    def list_results(self, page: int = 1, limit: int = 10) -> dict:
        page = max(page, 1)
        if limit < 1 or limit > 100:
            limit = 10
        results = self._results_newest_first()
        total = len(results)
        start = (page - 1) * limit
        return {
            "results": [self._summary(r) for r in results[start:start + limit]],
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": (total + limit - 1) // limit,
        }

    def dashboard(self) -> dict:
        results = self._results_newest_first()
        by_resource_type: Dict[str, int] = {}
        by_secret_type: Dict[str, int] = {}
        by_source_type: Dict[str, int] = {}
        high_risk: List[Finding] = []
        total = 0
        with_issues = 0
        for result in results:
            for resource in result.scanned_resources:
                if resource.findings:
                    with_issues += 1
                by_resource_type[resource.kind] = by_resource_type.get(resource.kind, 0) + len(resource.findings)
                for finding in resource.findings:
                    total += 1
                    by_secret_type[finding.secret_type] = by_secret_type.get(finding.secret_type, 0) + 1
                    by_source_type[finding.source_kind] = by_source_type.get(finding.source_kind, 0) + 1
                    if finding.secret_type in HIGH_RISK_PATTERNS:
                        high_risk.append(finding)
        return {
            "total_scans": len(results),
            "total_findings": total,
            "by_resource_type": by_resource_type,
            "by_secret_type": by_secret_type,
            "by_source_type": by_source_type,
            "resources_with_issues": with_issues,
            "high_risk_findings": high_risk,
            "high_risk_count": len(high_risk),
            "recent_scans": [self._summary(r) for r in results[:RECENT_SCANS_LIMIT]],
        }

    # Tokens

    def token_status(self) -> dict:
        rotator = self.client.rotator
        return {
            "count": rotator.count(),
            "index": rotator.index(),
            "current": mask_secret(rotator.current()),
        }

    def rotate_token(self) -> dict:
        self.client.rotator.rotate()
        log(f"op=rotate_token stage=manual index={self.client.rotator.index()}")
        return self.token_status()
