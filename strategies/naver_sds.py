import re
import logging
from typing import Iterator

from collector.models import DEFAULT_AUTHOR, SUMMARY_MAX_LENGTH
from collector.strategy_base import BaseStrategy, ParsedItem
from collector.text import extract_text

logger = logging.getLogger(__name__)

# Every news item in the SDS search layout is wrapped in a div with this class
ITEM_CLASS = "JYgn_vFQHubpClbvwVL_"

ITEM_RE = re.compile(
    r'<div[^>]*class="[^"]*' + ITEM_CLASS + r'[^"]*"[^>]*>(.*?)'
    r'(?=<div[^>]*class="[^"]*' + ITEM_CLASS + r'[^"]*"|</div>\s*</div>\s*</div>)',
    re.IGNORECASE | re.DOTALL,
)
HEADLINE_RE = re.compile(
    r'<a[^>]*nocr="1"[^>]*href="([^"]*)"[^>]*target="_blank"[^>]*>.*?'
    r'<span[^>]*class="[^"]*sds-comps-text-type-headline1[^"]*"[^>]*>(.*?)</span>',
    re.IGNORECASE | re.DOTALL,
)
SUMMARY_RE = re.compile(
    r'<span[^>]*class="[^"]*sds-comps-text-type-body1[^"]*"[^>]*>(.*?)</span>',
    re.IGNORECASE | re.DOTALL,
)
PRESS_RE = re.compile(
    r'<span[^>]*class="[^"]*sds-comps-text-type-body2[^"]*sds-comps-text-weight-sm[^"]*"[^>]*>([^<]+)</span>',
    re.IGNORECASE,
)
THUMBNAIL_RE = re.compile(r'<img[^>]*width="104"[^>]*src="([^"]*)"[^>]*>', re.IGNORECASE)

# Summaries this short are usually labels, not article text
MIN_SUMMARY_LENGTH = 10


class NaverSdsStrategy(BaseStrategy):
    """
    Primary strategy for the Naver news search page (SDS component layout).
    Precise, but tied to generated class names that change with front-end releases.
    """
    name = "naver_sds_structure_v2"

    def parse(self, html: str) -> Iterator[ParsedItem]:
        blocks = ITEM_RE.findall(html or "")
        logger.info(f"Found {len(blocks)} potential SDS news items")

        for block in blocks:
            headline = HEADLINE_RE.search(block)
            if not headline:
                continue

            url = headline.group(1)
            title = extract_text(headline.group(2))

            summary = title
            summary_match = SUMMARY_RE.search(block)
            if summary_match:
                summary_text = extract_text(summary_match.group(1))
                if len(summary_text) > MIN_SUMMARY_LENGTH:
                    summary = summary_text[:SUMMARY_MAX_LENGTH]

            author = DEFAULT_AUTHOR
            press_match = PRESS_RE.search(block)
            if press_match:
                author = extract_text(press_match.group(1)) or DEFAULT_AUTHOR

            thumbnail_match = THUMBNAIL_RE.search(block)

            yield ParsedItem(
                url=url,
                title=title,
                summary=summary,
                author=author,
                press=author,
                thumbnail_url=thumbnail_match.group(1) if thumbnail_match else "",
            )
