import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote_plus

DEFAULT_AUTHOR = "네이버뉴스"
DEFAULT_MAX_ITEMS = 20
MAX_ITEMS_LIMIT = 100

TITLE_MAX_LENGTH = 500
SUMMARY_MAX_LENGTH = 300
AUTHOR_MAX_LENGTH = 100

NAVER_NEWS_SEARCH_URL = "https://search.naver.com/search.naver?where=news&query={query}&sort=1&start={start}"


@dataclass(frozen=True)
class SearchTarget:
    query: str
    start: int = 1
    keyword: str = "나는 솔로"
    url_template: str = NAVER_NEWS_SEARCH_URL

    @property
    def url(self) -> str:
        return self.url_template.format(query=quote_plus(self.query), start=self.start)

    @property
    def source_id(self) -> str:
        return f"naver:{self.query}:{self.start}"


@dataclass
class Article:
    title: str
    summary: str
    original_url: str
    canonical_url: str
    author: str
    published_at: datetime  # Collection time, the search page has no reliable publish date
    fetched_at: datetime
    hash: str  # fingerprint(original_url, title)
    raw_meta: Dict[str, Any] = field(default_factory=dict)  # Diagnostics only
    status: str = "pending"

    def to_record(self) -> Dict[str, Any]:
        """Row as stored in the articles table"""
        return {
            "hash": self.hash,
            "title": self.title,
            "summary": self.summary,
            "original_url": self.original_url,
            "canonical_url": self.canonical_url,
            "author": self.author,
            "published_at": self.published_at.isoformat(),
            "fetched_at": self.fetched_at.isoformat(),
            "status": self.status,
            "raw_meta": self.raw_meta,
        }


@dataclass
class PageFailure:
    source_id: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"source_id": self.source_id, "message": self.message}


@dataclass
class CollectionResult:
    candidates: List[Article] = field(default_factory=list)
    errors: List[PageFailure] = field(default_factory=list)


@dataclass
class InsertResult:
    inserted: int = 0
    skipped: int = 0  # Duplicates and failed inserts
    failed: int = 0  # Failed inserts only, already counted in skipped
    failures: List[PageFailure] = field(default_factory=list)


@dataclass
class CollectionRequest:
    """
    Validated collection request, built once from an untrusted payload.
    max_items is None when the payload does not carry a usable value,
    in which case the configured default applies.
    """
    max_items: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]]) -> "CollectionRequest":
        if not isinstance(payload, Mapping):
            return cls()

        value = payload.get("maxItems", payload.get("maxPerSource"))
        # bool is an int subclass but never a valid count
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            return cls()

        return cls(max_items=min(max(int(value), 1), MAX_ITEMS_LIMIT))


@dataclass
class RunSummary:
    inserted: int = 0
    total: int = 0
    skipped: int = 0
    errors: List[PageFailure] = field(default_factory=list)
    error: Optional[str] = None  # Set only when the run could not complete

    @classmethod
    def failed(cls, message: str) -> "RunSummary":
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "inserted": self.inserted,
            "total": self.total,
            "skipped": self.skipped,
            "errors": [e.to_dict() for e in self.errors],
        }
        if self.error is not None:
            result["error"] = self.error
        return result
