from typing import Dict, Iterable, List
from hub_scanner.models import Finding, ScannedResource, SourceKind
def group_by_resource(findings: Iterable[Finding]) -> List[ScannedResource]:
    """Bucket findings by ``source_kind:identifier``; one bucket per file or discussion.

    Callers must not rely on the order of the returned list.
    """
    buckets: Dict[str, ScannedResource] = {}
    for finding in findings:
        key = finding.group_key
        if key not in buckets:
            buckets[key] = ScannedResource(kind=finding.source_kind, id=finding.source_id)
        buckets[key].findings.append(finding)
    return list(buckets.values())
def count_by_type(findings: Iterable[Finding]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for finding in findings:
        if finding.secret_type:
            counts[finding.secret_type] = counts.get(finding.secret_type, 0) + 1
    return counts
def count_by_source(findings: Iterable[Finding]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for finding in findings:
        counts[finding.source_kind] = counts.get(finding.source_kind, 0) + 1
    return counts
def count_total(scanned_resources: Iterable[ScannedResource]) -> int:
    return sum(len(resource.findings) for resource in scanned_resources)
def format_findings(findings: Iterable[Finding]) -> List[dict]:
    """Flatten findings for display or export."""
    formatted = []
    for finding in findings:
        item = {"secret_type": finding.secret_type, "secret": finding.secret, "url": finding.url}
        if finding.source_kind == SourceKind.FILE.value:
            item["file"] = finding.file_name
            item["line"] = finding.line
        elif finding.source_kind == SourceKind.DISCUSSION.value:
            item["discussion"] = finding.discussion_title
            item["discussion_num"] = finding.discussion_number
        formatted.append(item)
    return formatted
