import hashlib

import pytest

from collector.errors import FingerprintError
from collector.hashing import fingerprint
from collector.text import extract_text


def test_extract_text_strips_tags_and_collapses_whitespace():
    html = '<span class="x">  나는솔로 <mark>25기</mark>\n\n  영숙 </span>'
    assert extract_text(html) == "나는솔로 25기 영숙"


def test_extract_text_replaces_entities_with_space():
    assert extract_text("나는솔로&nbsp;&quot;근황&quot;") == "나는솔로 근황"
    assert extract_text("A&amp;B") == "A B"


@pytest.mark.parametrize("fragment", ["", None, "<br/>", "   "])
def test_extract_text_empty(fragment):
    assert extract_text(fragment) == ""


def test_fingerprint_is_sha256_of_url_and_title():
    url = "https://example.com/a"
    title = "나는솔로 출연자 근황 공개"
    expected = hashlib.sha256(f"{url}::{title}".encode("utf-8")).hexdigest()

    assert fingerprint(url, title) == expected
    assert fingerprint(url, title) == fingerprint(url, title)
    assert len(expected) == 64
    assert expected == expected.lower()


def test_fingerprint_changes_with_either_input():
    base = fingerprint("https://example.com/a", "나는솔로 출연자 근황 공개")
    assert fingerprint("https://example.com/b", "나는솔로 출연자 근황 공개") != base
    assert fingerprint("https://example.com/a", "나는솔로 출연자 근황 공개!") != base


def test_fingerprint_rejects_non_strings():
    with pytest.raises(FingerprintError):
        fingerprint(None, "title")
