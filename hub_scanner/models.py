"""Typed records exchanged between the fetch, scan and storage layers.

Hub payloads are parsed into these dataclasses field by field. A field that
is missing or has the wrong JSON type keeps its zero value; it is never an
error.
"""
import uuid
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from hub_scanner.errors import ValidationError


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def new_id() -> str:
    return uuid.uuid4().hex


def _str(value) -> str:
    return value if isinstance(value, str) else ""


def _int(value) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    return 0


def _bool(value) -> bool:
    return value if isinstance(value, bool) else False


class ResourceKind(str, Enum):
    MODEL = "models"
    DATASET = "datasets"
    SPACE = "spaces"

    @classmethod
    def parse(cls, value) -> "ResourceKind":
        if isinstance(value, cls):
            return value
        text = (value or "").strip().lower()
        for kind in cls:
            if text in (kind.value, kind.value[:-1]):
                return kind
        raise ValidationError(f"Unknown resource kind: {value!r}", kind=value)

    @property
    def singular(self) -> str:
        return self.value[:-1]


class SourceKind(str, Enum):
    FILE = "file"
    DISCUSSION = "discussion"


@dataclass(frozen=True)
class RemoteResource:
    kind: ResourceKind
    id: str

    @property
    def org(self) -> str:
        return self.id.split("/", 1)[0]


@dataclass
class FileReference:
    name: str


@dataclass
class FetchedFile:
    name: str
    content: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"rfilename": self.name, "file_content": self.content}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FetchedFile":
        return cls(name=_str(data.get("rfilename")), content=_str(data.get("file_content")))


@dataclass
class DiscussionItem:
    number: int = 0
    title: str = ""
    status: str = ""
    is_pull_request: bool = False
    created_at: str = ""
    author_name: str = ""
    repo_name: str = ""
    num_comments: int = 0
    pinned: bool = False

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "DiscussionItem":
        if not isinstance(raw, dict):
            return cls()
        author = raw.get("author")
        repo = raw.get("repo")
        return cls(
            number=_int(raw.get("num")),
            title=_str(raw.get("title")),
            status=_str(raw.get("status")),
            is_pull_request=_bool(raw.get("isPullRequest")),
            created_at=_str(raw.get("createdAt")),
            author_name=_str(author.get("name")) if isinstance(author, dict) else "",
            repo_name=_str(repo.get("name")) if isinstance(repo, dict) else "",
            num_comments=_int(raw.get("numComments")),
            pinned=_bool(raw.get("pinned")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiscussionItem":
        return cls(
            number=_int(data.get("number")),
            title=_str(data.get("title")),
            status=_str(data.get("status")),
            is_pull_request=_bool(data.get("is_pull_request")),
            created_at=_str(data.get("created_at")),
            author_name=_str(data.get("author_name")),
            repo_name=_str(data.get("repo_name")),
            num_comments=_int(data.get("num_comments")),
            pinned=_bool(data.get("pinned")),
        )


@dataclass
class ResourceMetadata:
    id: str = ""
    siblings: List[FileReference] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "ResourceMetadata":
        if not isinstance(raw, dict):
            return cls()
        siblings = []
        for entry in raw.get("siblings") or []:
            if isinstance(entry, dict) and isinstance(entry.get("rfilename"), str):
                siblings.append(FileReference(entry["rfilename"]))
        return cls(id=_str(raw.get("id")), siblings=siblings, raw=raw)


@dataclass
class ScanRequest:
    """Files and discussions fetched for one hub resource."""
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    resource_kind: str = ""
    resource_id: str = ""
    org: str = ""
    files: List[FetchedFile] = field(default_factory=list)
    discussions: List[DiscussionItem] = field(default_factory=list)
    created_at: str = field(default_factory=_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "request_id": self.request_id,
            "resource_kind": self.resource_kind,
            "resource_id": self.resource_id,
            "org": self.org,
            "siblings": [f.to_dict() for f in self.files],
            "discussions": [d.to_dict() for d in self.discussions],
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScanRequest":
        return cls(
            request_id=_str(data.get("request_id")),
            resource_kind=_str(data.get("resource_kind")),
            resource_id=_str(data.get("resource_id")),
            org=_str(data.get("org")),
            files=[FetchedFile.from_dict(f) for f in data.get("siblings") or [] if isinstance(f, dict)],
            discussions=[DiscussionItem.from_dict(d) for d in data.get("discussions") or [] if isinstance(d, dict)],
            created_at=_str(data.get("created_at")),
        )


@dataclass(frozen=True)
class SecretPattern:
    name: str
    regex: str


@dataclass(frozen=True)
class Finding:
    secret_type: str
    pattern: str
    secret: str
    source_kind: str
    organization: str = ""
    resource_id: str = ""
    resource_kind: str = ""
    url: str = ""
    file_name: Optional[str] = None
    line: Optional[int] = None
    discussion_number: Optional[int] = None
    discussion_title: Optional[str] = None
    discussion_repo: Optional[str] = None

    @property
    def source_id(self) -> str:
        if self.source_kind == SourceKind.FILE.value:
            return self.file_name or ""
        return self.discussion_title or ""

    @property
    def group_key(self) -> str:
        return f"{self.source_kind}:{self.source_id}"

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Finding":
        return cls(
            secret_type=_str(data.get("secret_type")),
            pattern=_str(data.get("pattern")),
            secret=_str(data.get("secret")),
            source_kind=_str(data.get("source_kind")),
            organization=_str(data.get("organization")),
            resource_id=_str(data.get("resource_id")),
            resource_kind=_str(data.get("resource_kind")),
            url=_str(data.get("url")),
            file_name=data.get("file_name"),
            line=data.get("line"),
            discussion_number=data.get("discussion_number"),
            discussion_title=data.get("discussion_title"),
            discussion_repo=data.get("discussion_repo"),
        )


@dataclass
class ScannedResource:
    kind: str
    id: str
    findings: List[Finding] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, "id": self.id, "findings": [f.to_dict() for f in self.findings]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScannedResource":
        return cls(
            kind=_str(data.get("type")),
            id=_str(data.get("id")),
            findings=[Finding.from_dict(f) for f in data.get("findings") or [] if isinstance(f, dict)],
        )


@dataclass
class ScanResult:
    request_id: str
    scanned_resources: List[ScannedResource] = field(default_factory=list)
    scan_id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=_now_iso)
    updated_at: str = field(default_factory=_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scan_id": self.scan_id,
            "request_id": self.request_id,
            "scanned_resources": [r.to_dict() for r in self.scanned_resources],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScanResult":
        return cls(
            scan_id=_str(data.get("scan_id")),
            request_id=_str(data.get("request_id")),
            scanned_resources=[
                ScannedResource.from_dict(r) for r in data.get("scanned_resources") or [] if isinstance(r, dict)
            ],
            created_at=_str(data.get("created_at")),
            updated_at=_str(data.get("updated_at")),
        )


@dataclass
class OrgResourceRecord:
    org: str
    kind: str
    resource_id: str
    include_prs: bool = False
    include_discussions: bool = False
    created_at: str = field(default_factory=_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
