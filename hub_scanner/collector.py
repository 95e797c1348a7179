"""Concurrent retrieval of one resource's files and discussion threads."""
import threading
from typing import Iterable, List, Optional
from hub_scanner import constants
from hub_scanner.api import DISCUSSION_TYPES, HubClient
from hub_scanner.errors import HubScannerError
from hub_scanner.logging_utils import log
from hub_scanner.models import DiscussionItem, FetchedFile
from hub_scanner.patterns import is_text_file
from hub_scanner.workers import run_bounded
def collect_files(client: HubClient, resource_id: str, candidate_names: Iterable[str],
                  max_workers: int = constants.FILE_FETCH_CONCURRENCY,
                  cancel: Optional[threading.Event] = None) -> List[FetchedFile]:
    """Fetch every text-like candidate file of ``resource_id`` in parallel.

    Names with a non-text extension are dropped before any request is made.
    A file whose fetch fails is kept with empty content. Output order
    follows completion, not input.
    """
    names = [name for name in candidate_names if name]
    wanted = [name for name in names if is_text_file(name)]
    skipped = len(names) - len(wanted)
    log(f"op=collect_files stage=start resource={resource_id} candidates={len(names)} "
        f"fetching={len(wanted)} skipped={skipped}")
    files: List[FetchedFile] = []
    lock = threading.Lock()
    def _fetch(name):
        try:
            content = client.fetch_file(resource_id, name)
        except HubScannerError as e:
            log(f"op=collect_files stage=fetch_error resource={resource_id} file={name} "
                f"category={e.category} error={e}")
            content = ""
        with lock:
            files.append(FetchedFile(name=name, content=content))
    run_bounded(_fetch, wanted, max_workers, cancel)
    log(f"op=collect_files stage=done resource={resource_id} files={len(files)}")
    return files
def collect_discussions(client: HubClient, resource_id: str, kind, include_prs: bool,
                        include_discussions: bool,
                        cancel: Optional[threading.Event] = None) -> List[DiscussionItem]:
    """Fetch pull requests and/or discussions concurrently and merge them.

    A branch that fails contributes no items; the other branch is unaffected.
    """
    branches = []
    if include_prs:
        branches.append("pr")
    if include_discussions:
        branches.append("discussion")
    if not branches:
        return []
    items: List[DiscussionItem] = []
    lock = threading.Lock()
    def _fetch(discussion_type):
        try:
            fetched = client.fetch_discussions(kind, resource_id, discussion_type)
        except HubScannerError as e:
            log(f"op=collect_discussions stage=branch_error resource={resource_id} type={discussion_type} "
                f"category={e.category} error={e}")
            return
        with lock:
            items.extend(fetched)
    run_bounded(_fetch, branches, len(DISCUSSION_TYPES), cancel)
    log(f"op=collect_discussions stage=done resource={resource_id} types={','.join(branches)} items={len(items)}")
    return items
