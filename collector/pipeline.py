import time
import logging
from typing import Any, Mapping, Optional

from collector.config import CollectorConfig
from collector.db import Database
from collector.errors import CollectorError, ConfigError, FetchFailure
from collector.extractor import Extractor
from collector.http_client import HTTPClient
from collector.models import CollectionRequest, CollectionResult, PageFailure, RunSummary

logger = logging.getLogger(__name__)


class CollectionPipeline:
    """
    Drives fetch -> extract -> insert over the configured search pages.
    Pages are processed one at a time, in order.
    """

    def __init__(
        self,
        config: CollectorConfig,
        http_client: HTTPClient,
        database: Optional[Database] = None,
        extractor: Optional[Extractor] = None,
    ):
        config.validate()
        self.config = config
        self.http = http_client
        self.db = database
        self.extractor = extractor or Extractor(backup_threshold=config.backup_threshold)

    async def collect(self, max_items: Optional[int] = None) -> CollectionResult:
        """
        Fetch and extract candidates until max_items is reached or pages run out.
        A failed page is recorded and skipped, it never aborts the run.
        """
        max_items = self.config.max_items if max_items is None else max_items
        if max_items <= 0:
            raise ConfigError(f"max_items must be positive, got {max_items}")

        result = CollectionResult()
        seen = set()
        started = time.monotonic()

        for page, target in enumerate(self.config.search_targets, 1):
            if len(result.candidates) >= max_items:
                break

            if self._deadline_passed(started):
                remaining = len(self.config.search_targets) - page + 1
                logger.warning(f"Run deadline reached, skipping {remaining} remaining page(s)")
                break

            logger.info(f"📄 Fetching page {page}: {target.url}")
            try:
                html = await self.http.fetch(target.url, source_id=target.source_id)
            except FetchFailure as e:
                logger.error(f"Page {page} failed: {e}")
                result.errors.append(PageFailure(e.source_id, e.message))
                continue

            before = len(result.candidates)
            budget = max_items - before
            try:
                for article in self.extractor.extract(
                    html, target, page, budget, accepted_so_far=before, seen=seen
                ):
                    result.candidates.append(article)
            except Exception as e:
                # Articles already taken from this page are kept
                logger.exception(f"Page {page} extraction failed: {e}")
                result.errors.append(PageFailure(target.source_id, f"{type(e).__name__}: {e}"))
                continue

            logger.info(f"Page {page} contributed {len(result.candidates) - before} article(s)")

        logger.info(f"Collected {len(result.candidates)} valid articles, {len(result.errors)} page error(s)")
        return result

    async def run(self, max_items: Optional[int] = None) -> RunSummary:
        """Collect, then store. Returns the run summary."""
        try:
            collected = await self.collect(max_items)
        except CollectorError as e:
            logger.error(f"Collection could not run: {e}")
            return RunSummary.failed(str(e))

        summary = RunSummary(total=len(collected.candidates), errors=list(collected.errors))
        if not collected.candidates:
            logger.warning("⚠️ No valid articles found")
            return summary

        if self.db is None:
            return RunSummary.failed("No database configured for inserts")

        stored = self.db.insert_all(collected.candidates)
        summary.inserted = stored.inserted
        summary.skipped = stored.skipped
        summary.errors.extend(stored.failures)

        logger.info(f"🏁 Collection completed: inserted={summary.inserted} total={summary.total} skipped={summary.skipped}")
        return summary

    def _deadline_passed(self, started: float) -> bool:
        if self.config.run_deadline_s is None:
            return False
        return time.monotonic() - started >= self.config.run_deadline_s


async def run_collection(
    payload: Optional[Mapping[str, Any]] = None,
    config: Optional[CollectorConfig] = None,
    database: Optional[Database] = None,
    http_client: Optional[HTTPClient] = None,
) -> RunSummary:
    """
    Entry point for one collection run.
    Always returns a RunSummary; setup failures come back with `error` set.
    """
    request = CollectionRequest.from_payload(payload)
    owns_client = http_client is None
    owns_database = database is None

    try:
        config = config or CollectorConfig.from_env()
        config.validate()
        if database is None:
            database = Database(config.db_path, enabled=config.enable_database)
        if http_client is None:
            http_client = HTTPClient(timeout_ms=config.timeout_ms)
    except Exception as e:
        logger.error(f"💥 Collector setup failed: {e}")
        if owns_database and database is not None:
            database.close()
        return RunSummary.failed(str(e))

    max_items = request.max_items or config.max_items
    logger.info(f"🚀 Starting news collection (max_items={max_items})")
    try:
        pipeline = CollectionPipeline(config, http_client, database)
        return await pipeline.run(max_items)
    except Exception as e:
        logger.exception(f"💥 Collection run failed: {e}")
        return RunSummary.failed(str(e))
    finally:
        if owns_client:
            await http_client.close()
        if owns_database:
            database.close()
