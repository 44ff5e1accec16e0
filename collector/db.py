import json
import sqlite3
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

import sqlite_utils

from collector.errors import DuplicateArticleError
from collector.models import Article, InsertResult, PageFailure, MAX_ITEMS_LIMIT

logger = logging.getLogger(__name__)

STORAGE_SOURCE_ID = "storage"


class Database:
    def __init__(self, db_path: Optional[str] = "articles.db", enabled: bool = True):
        """
        Initialize database with optional disable mode.

        Args:
            db_path: Path to SQLite database file, None for an in-memory database
            enabled: If False, inserts only track hashes in memory for this run
        """
        self.enabled = enabled
        self.db_path = db_path

        if self.enabled:
            self.db = sqlite_utils.Database(db_path) if db_path else sqlite_utils.Database(memory=True)
            self.init_db()
            self._memory_hashes = None
            logger.info(f"Database enabled: {db_path or ':memory:'}")
        else:
            self.db = None
            self._memory_hashes = set()
            logger.info("Database disabled - using in-memory deduplication for this run only")

    def init_db(self):
        """Create the articles table and the unique index on hash"""
        if not self.enabled:
            return

        self.db["articles"].create({
            "id": int,
            "hash": str,
            "title": str,
            "summary": str,
            "original_url": str,
            "canonical_url": str,
            "author": str,
            "published_at": str,  # ISO-8601
            "fetched_at": str,
            "status": str,
            "raw_meta": str,  # JSON
            "created_at": str,
        }, pk="id", not_null={"hash", "title", "original_url", "status"}, if_not_exists=True)
        self.db["articles"].create_index(["hash"], unique=True, if_not_exists=True)

    def article_exists(self, article_hash: str) -> bool:
        if not self.enabled:
            return article_hash in self._memory_hashes
        return self.db["articles"].count_where("hash = ?", [article_hash]) > 0

    def insert_article(self, article: Article):
        """
        Insert one article.
        Raises DuplicateArticleError when the hash is already stored;
        any other storage error propagates unchanged.
        """
        if not self.enabled:
            if article.hash in self._memory_hashes:
                raise DuplicateArticleError(article.hash)
            self._memory_hashes.add(article.hash)
            return

        record = article.to_record()
        record["created_at"] = datetime.now(timezone.utc).isoformat()
        try:
            self.db["articles"].insert(record)
        except sqlite3.IntegrityError as e:
            if "UNIQUE" in str(e).upper():
                raise DuplicateArticleError(article.hash) from e
            raise

    def insert_all(self, articles: Iterable[Article]) -> InsertResult:
        """
        Insert articles one by one. Duplicates are the normal outcome on re-runs
        and count as skipped; other failures are logged and also count as skipped.
        """
        result = InsertResult()

        for article in articles:
            try:
                self.insert_article(article)
            except DuplicateArticleError:
                result.skipped += 1
                logger.info(f"⏭️ Skipped duplicate: {article.title[:50]}")
            except Exception as e:
                result.skipped += 1
                result.failed += 1
                result.failures.append(PageFailure(STORAGE_SOURCE_ID, f"{article.hash[:12]}: {e}"))
                logger.error(f"Insert failed: {article.title[:50]}: {e}")
            else:
                result.inserted += 1
                logger.info(f"✅ Inserted: {article.title[:50]}")

        return result

    def recent_articles(self, limit: int = 20, offset: int = 0) -> List[Dict[str, Any]]:
        """Stored articles for display, newest first"""
        if not self.enabled:
            return []

        limit = min(max(int(limit), 1), MAX_ITEMS_LIMIT)
        offset = max(int(offset), 0)

        rows = []
        for row in self.db["articles"].rows_where(
            order_by="published_at desc, created_at desc", limit=limit, offset=offset
        ):
            if row.get("raw_meta"):
                row["raw_meta"] = json.loads(row["raw_meta"])
            rows.append(row)
        return rows

    def count(self) -> int:
        if not self.enabled:
            return len(self._memory_hashes)
        return self.db["articles"].count

    def close(self):
        if self.enabled:
            self.db.close()
