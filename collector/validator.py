import logging
from typing import Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

TOPIC_MARKERS: Tuple[str, ...] = ("나는솔로", "나는 솔로")
EXCLUDED_KEYWORDS: Tuple[str, ...] = ("검색결과", "더보기", "광고")
BLOCKED_URL_PARTS: Tuple[str, ...] = ("search.naver.com",)

MIN_TITLE_LENGTH = 5
MAX_TITLE_LENGTH = 500


class RelevanceValidator:
    """
    Decides whether an extracted (title, summary, url) triple is an in-scope article.
    Rejection is the common case and is never an error.
    """

    def __init__(
        self,
        topic_markers: Iterable[str] = TOPIC_MARKERS,
        excluded_keywords: Iterable[str] = EXCLUDED_KEYWORDS,
        blocked_url_parts: Iterable[str] = BLOCKED_URL_PARTS,
    ):
        self.topic_markers = tuple(topic_markers)
        self.excluded_keywords = tuple(excluded_keywords)
        self.blocked_url_parts = tuple(blocked_url_parts)

    def mentions_topic(self, text: Optional[str]) -> bool:
        if not text:
            return False
        return any(marker in text for marker in self.topic_markers)

    def is_valid(self, title: Optional[str], summary: Optional[str], url: Optional[str]) -> bool:
        reason = self.rejection_reason(title, summary, url)
        if reason:
            logger.debug(f"Rejected {title!r} ({reason})")
            return False
        return True

    def rejection_reason(self, title, summary, url) -> Optional[str]:
        if not title or not isinstance(title, str) or not url or not isinstance(url, str):
            return "missing title or url"

        if len(title) <= MIN_TITLE_LENGTH or len(title) >= MAX_TITLE_LENGTH:
            return "title length"

        if not (self.mentions_topic(title) or self.mentions_topic(summary)):
            return "off topic"

        if any(keyword in title for keyword in self.excluded_keywords):
            return "excluded keyword"

        if not url.startswith("http") or any(part in url for part in self.blocked_url_parts):
            return "url"

        return None


_default_validator = RelevanceValidator()


def is_valid_article(title: Optional[str], summary: Optional[str], url: Optional[str]) -> bool:
    return _default_validator.is_valid(title, summary, url)
