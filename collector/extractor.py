import logging
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Sequence, Set

from collector.errors import FingerprintError
from collector.hashing import fingerprint
from collector.models import (
    AUTHOR_MAX_LENGTH,
    SUMMARY_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Article,
    SearchTarget,
)
from collector.strategy_base import BaseStrategy, ParsedItem
from collector.validator import RelevanceValidator
from strategies.backup_patterns import backup_strategies
from strategies.naver_sds import NaverSdsStrategy

logger = logging.getLogger(__name__)

DEFAULT_BACKUP_THRESHOLD = 3


def default_strategies() -> List[BaseStrategy]:
    return [NaverSdsStrategy(), *backup_strategies()]


class Extractor:
    """
    Turns one fetched search page into candidate articles.

    Strategies are tried in ranked order. Primary strategies always run;
    fallback strategies run only while the whole run has accepted fewer
    than `backup_threshold` articles.
    """

    def __init__(
        self,
        strategies: Optional[Sequence[BaseStrategy]] = None,
        validator: Optional[RelevanceValidator] = None,
        backup_threshold: int = DEFAULT_BACKUP_THRESHOLD,
    ):
        self.strategies = list(strategies) if strategies is not None else default_strategies()
        self.validator = validator or RelevanceValidator()
        self.backup_threshold = backup_threshold

    @property
    def primary(self) -> List[BaseStrategy]:
        return [s for s in self.strategies if not s.fallback]

    @property
    def fallbacks(self) -> List[BaseStrategy]:
        return [s for s in self.strategies if s.fallback]

    def extract(
        self,
        html: str,
        target: SearchTarget,
        page: int,
        budget: int,
        accepted_so_far: int = 0,
        seen: Optional[Set[str]] = None,
    ) -> Iterator[Article]:
        """
        Lazily yields at most `budget` articles from one page.
        `seen` holds hashes already emitted this run and is updated in place.
        """
        if budget <= 0:
            return
        if seen is None:
            seen = set()

        emitted = 0
        for strategy in self.primary:
            for article in self._run_strategy(strategy, html, target, page, seen):
                yield article
                emitted += 1
                if emitted >= budget:
                    return

        if accepted_so_far + emitted >= self.backup_threshold:
            return

        logger.info(f"Only {accepted_so_far + emitted} articles so far, trying backup patterns on page {page}")
        for strategy in self.fallbacks:
            for article in self._run_strategy(strategy, html, target, page, seen):
                yield article
                emitted += 1
                if emitted >= budget:
                    return

    def _run_strategy(self, strategy, html, target, page, seen) -> Iterator[Article]:
        for item in strategy.parse(html):
            if not strategy.accepts_length(item):
                continue
            if not self.validator.is_valid(item.title, item.summary, item.url):
                continue

            try:
                article = self.build_article(item, strategy, target, page)
            except FingerprintError as e:
                logger.error(f"Error processing {strategy.name} item {item.url}: {e}")
                continue

            if article.hash in seen:
                logger.debug(f"Already collected this run: {article.title[:50]}")
                continue
            seen.add(article.hash)

            logger.info(f"Added {strategy.name} article: {article.title[:60]} [{article.author}]")
            yield article

    def build_article(self, item: ParsedItem, strategy: BaseStrategy, target: SearchTarget, page: int) -> Article:
        now = datetime.now(timezone.utc)

        raw_meta = {
            "scrape_method": strategy.name,
            "search_keyword": target.keyword,
            "page": page,
        }
        if item.press:
            raw_meta["press"] = item.press
        if item.thumbnail_url is not None:
            raw_meta["thumbnail_url"] = item.thumbnail_url

        return Article(
            title=item.title[:TITLE_MAX_LENGTH],
            summary=(item.summary or item.title)[:SUMMARY_MAX_LENGTH],
            original_url=item.url,
            canonical_url=item.url,
            author=(item.author or "")[:AUTHOR_MAX_LENGTH],
            published_at=now,
            fetched_at=now,
            raw_meta=raw_meta,
            hash=fingerprint(item.url, item.title),
        )
