"""Regex secret detection over fetched files and discussion threads.

``scan_file`` and ``scan_discussion`` are pure functions of their inputs.
``scan_request`` fans both out over a bounded pool and drains the results
into one list once every task has finished. The order of that list depends
on completion order and carries no meaning.
"""
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from hub_scanner import constants
from hub_scanner.api import discussion_url, file_blob_url
from hub_scanner.logging_utils import log
from hub_scanner.models import DiscussionItem, FetchedFile, Finding, ScanRequest, SecretPattern, SourceKind
from hub_scanner.patterns import compile_patterns, default_patterns, is_text_file
from hub_scanner.workers import run_bounded


@dataclass(frozen=True)
class SourceContext:
    """Where scanned text came from; copied onto every finding."""
    organization: str = ""
    resource_id: str = ""
    resource_kind: str = ""
    base_url: str = constants.HUB_BASE_URL

    @classmethod
    def for_request(cls, request: ScanRequest, base_url: str = constants.HUB_BASE_URL) -> "SourceContext":
        org = request.org or request.resource_id.split("/", 1)[0]
        return cls(org, request.resource_id, request.resource_kind, base_url)

    def file_link(self, filename: str, line: int) -> str:
        if not self.resource_id:
            return ""
        return file_blob_url(self.base_url, self.resource_id, filename, line)

    def discussion_link(self, number: int) -> str:
        if not (self.resource_id and self.resource_kind):
            return ""
        return discussion_url(self.base_url, self.resource_kind, self.resource_id, number)


def _compiled(patterns):
    if patterns is None:
        return default_patterns()
    patterns = list(patterns)
    if patterns and isinstance(patterns[0], SecretPattern):
        return compile_patterns(patterns)
    return patterns


def scan_file(file: FetchedFile, patterns=None, context: Optional[SourceContext] = None) -> List[Finding]:
    if not is_text_file(file.name):
        return []
    context = context or SourceContext()
    compiled = _compiled(patterns)
    findings = []
    for line_no, line in enumerate(file.content.split("\n"), start=1):
        for pattern, regex in compiled:
            for match in regex.finditer(line):
                findings.append(Finding(
                    secret_type=pattern.name,
                    pattern=pattern.regex,
                    secret=match.group(0),
                    source_kind=SourceKind.FILE.value,
                    organization=context.organization,
                    resource_id=context.resource_id,
                    resource_kind=context.resource_kind,
                    url=context.file_link(file.name, line_no),
                    file_name=file.name,
                    line=line_no,
                ))
    return findings


def scan_discussion(item: DiscussionItem, patterns=None, context: Optional[SourceContext] = None) -> List[Finding]:
    # Only the title and repo name are available; bodies are never fetched.
    context = context or SourceContext()
    text = f"{item.title} {item.repo_name}"
    findings = []
    for pattern, regex in _compiled(patterns):
        for match in regex.finditer(text):
            findings.append(Finding(
                secret_type=pattern.name,
                pattern=pattern.regex,
                secret=match.group(0),
                source_kind=SourceKind.DISCUSSION.value,
                organization=context.organization,
                resource_id=context.resource_id,
                resource_kind=context.resource_kind,
                url=context.discussion_link(item.number),
                discussion_number=item.number,
                discussion_title=item.title,
                discussion_repo=item.repo_name,
            ))
    return findings


def scan_request(request: ScanRequest, patterns=None, max_workers: int = constants.SCAN_CONCURRENCY,
                 cancel: Optional[threading.Event] = None, base_url: str = constants.HUB_BASE_URL,
                 progress: Optional[Callable[[int, int], None]] = None) -> List[Finding]:
    """Scan every file and discussion of ``request`` concurrently.

    Files with empty content are still scanned and counted as processed.
    ``progress`` receives ``(processed, total)`` after each item.
    """
    compiled = _compiled(patterns)
    context = SourceContext.for_request(request, base_url)
    tasks: Sequence = [("file", f) for f in request.files] + [("discussion", d) for d in request.discussions]
    total = len(tasks)
    processed = 0
    lock = threading.Lock()

    def _scan(task):
        nonlocal processed
        kind, item = task
        if kind == "file":
            found = scan_file(item, compiled, context)
        else:
            found = scan_discussion(item, compiled, context)
        with lock:
            processed += 1
            done = processed
        if progress:
            progress(done, total)
        return found

    findings: List[Finding] = []
    for batch in run_bounded(_scan, tasks, max_workers, cancel):
        findings.extend(batch)
    log(f"op=scan_request stage=done request={request.request_id} files={len(request.files)} "
        f"discussions={len(request.discussions)} processed={processed}/{total} findings={len(findings)}")
    return findings
