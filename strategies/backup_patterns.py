import re
from typing import Iterator, Pattern

from collector.strategy_base import BaseStrategy, ParsedItem
from collector.text import extract_text

BACKUP_SUMMARY_LENGTH = 200


class AnchorPatternStrategy(BaseStrategy):
    """
    Loose fallback: a single regex whose first group is the href
    and second group the anchor (headline) markup.
    """
    fallback = True
    max_text_length = BACKUP_SUMMARY_LENGTH

    def __init__(self, name: str, pattern: Pattern):
        self.name = name
        self.pattern = pattern

    def parse(self, html: str) -> Iterator[ParsedItem]:
        for match in self.pattern.finditer(html or ""):
            url = match.group(1)
            title = extract_text(match.group(2))
            if not url or not title:
                continue
            yield ParsedItem(url=url, title=title, summary=title[:BACKUP_SUMMARY_LENGTH])


# Older Naver layout, headline anchors carry the news_tit class hook
NEWS_TIT_RE = re.compile(
    r'<a[^>]*class="[^"]*news_tit[^"]*"[^>]*href="([^"]*)"[^>]*>(.*?)</a>',
    re.IGNORECASE | re.DOTALL,
)
# Matches stay inside one anchor (or one span) so neighbouring links are never merged
_IN_ANCHOR = r"(?:(?!</a>).)*?"
_IN_SPAN = r"(?:(?!</span>).)*?"

SDS_ANCHOR_RE = re.compile(
    r'<a[^>]*href="([^"]*)"[^>]*target="_blank"[^>]*>' + _IN_ANCHOR
    + r"<span[^>]*>(" + _IN_SPAN + "나는" + _IN_SPAN + "솔로" + _IN_SPAN + ")</span>",
    re.IGNORECASE | re.DOTALL,
)
TOPIC_LINK_RE = re.compile(
    r'<a[^>]*href="(https?://[^"]*)"[^>]*>(' + _IN_ANCHOR + "나는" + _IN_ANCHOR + "솔로" + _IN_ANCHOR + ")</a>",
    re.IGNORECASE | re.DOTALL,
)


def backup_strategies():
    """Ranked from most to least specific"""
    return [
        AnchorPatternStrategy("backup_news_tit", NEWS_TIT_RE),
        AnchorPatternStrategy("backup_sds_anchor", SDS_ANCHOR_RE),
        AnchorPatternStrategy("backup_topic_link", TOPIC_LINK_RE),
    ]
