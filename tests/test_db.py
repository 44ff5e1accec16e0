import sqlite3
from datetime import datetime, timezone

import pytest

from collector.db import Database
from collector.errors import DuplicateArticleError
from collector.hashing import fingerprint
from collector.models import Article


def make_article(n, published_at=None):
    url = f"https://news.example.com/article/{n}"
    title = f"나는솔로 {n}기 출연자 근황 공개"
    now = published_at or datetime(2026, 10, 18, 9, 0, n, tzinfo=timezone.utc)
    return Article(
        title=title,
        summary=title,
        original_url=url,
        canonical_url=url,
        author="뉴스1",
        published_at=now,
        fetched_at=now,
        raw_meta={"scrape_method": "naver_sds_structure_v2", "search_keyword": "나는 솔로", "page": 1},
        hash=fingerprint(url, title),
    )


@pytest.fixture
def db():
    return Database(db_path=None)


def test_insert_and_read_back(db):
    db.insert_article(make_article(1))

    assert db.count() == 1
    assert db.article_exists(make_article(1).hash)
    [row] = db.recent_articles()
    assert row["title"] == "나는솔로 1기 출연자 근황 공개"
    assert row["status"] == "pending"
    assert row["raw_meta"]["scrape_method"] == "naver_sds_structure_v2"
    assert row["published_at"] == "2026-10-18T09:00:01+00:00"


def test_duplicate_hash_raises(db):
    db.insert_article(make_article(1))
    with pytest.raises(DuplicateArticleError):
        db.insert_article(make_article(1))


def test_insert_all_counts_duplicates_as_skipped(db):
    first = db.insert_all([make_article(1), make_article(2)])
    assert (first.inserted, first.skipped, first.failed) == (2, 0, 0)

    second = db.insert_all([make_article(1), make_article(2), make_article(3)])
    assert (second.inserted, second.skipped, second.failed) == (1, 2, 0)
    assert second.failures == []


def test_insert_all_keeps_going_after_other_failures(db, monkeypatch):
    original = db.insert_article

    def flaky(article):
        if article.hash == make_article(2).hash:
            raise sqlite3.OperationalError("database is locked")
        return original(article)

    monkeypatch.setattr(db, "insert_article", flaky)
    result = db.insert_all([make_article(1), make_article(2), make_article(3)])

    assert result.inserted == 2
    assert result.skipped == 1
    assert result.failed == 1
    assert result.failures[0].source_id == "storage"
    assert "database is locked" in result.failures[0].message


def test_recent_articles_newest_first_with_paging(db):
    for n in range(1, 6):
        db.insert_article(make_article(n))

    rows = db.recent_articles(limit=2)
    assert [r["title"] for r in rows] == ["나는솔로 5기 출연자 근황 공개", "나는솔로 4기 출연자 근황 공개"]

    rows = db.recent_articles(limit=2, offset=4)
    assert [r["title"] for r in rows] == ["나는솔로 1기 출연자 근황 공개"]


def test_file_database_persists(tmp_path):
    path = str(tmp_path / "articles.db")
    Database(path).insert_article(make_article(1))

    reopened = Database(path)
    assert reopened.count() == 1
    assert reopened.insert_all([make_article(1)]).skipped == 1


def test_disabled_database_tracks_hashes_in_memory():
    db = Database(enabled=False)

    result = db.insert_all([make_article(1), make_article(1), make_article(2)])

    assert (result.inserted, result.skipped) == (2, 1)
    assert db.article_exists(make_article(1).hash)
    assert db.recent_articles() == []
    assert db.count() == 2
