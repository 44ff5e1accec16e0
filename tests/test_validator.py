import pytest

from collector.validator import RelevanceValidator, is_valid_article

URL = "https://news.example.com/article/1"


def test_title_of_length_five_is_rejected():
    title = "나는솔로!"
    assert len(title) == 5
    assert is_valid_article(title, None, URL) is False


def test_title_of_length_six_with_marker_is_accepted():
    title = "나는솔로 뉴"
    assert len(title) == 6
    assert is_valid_article(title, None, URL) is True


def test_title_too_long_is_rejected():
    title = "나는솔로 " + "가" * 495
    assert len(title) == 500
    assert is_valid_article(title, None, URL) is False


@pytest.mark.parametrize("title", [
    "나는 솔로 출연자 근황",
    "나는솔로 출연자 근황",
])
def test_both_marker_variants_are_accepted(title):
    assert is_valid_article(title, None, URL) is True


def test_marker_in_summary_only_is_enough():
    assert is_valid_article("25기 영숙 결혼 발표", "나는솔로 출신 영숙이", URL) is True


def test_off_topic_is_rejected():
    assert is_valid_article("오늘의 날씨 맑음", "전국이 맑겠다", URL) is False


@pytest.mark.parametrize("keyword", ["검색결과", "더보기", "광고"])
def test_excluded_keyword_rejects_even_on_topic(keyword):
    assert is_valid_article(f"나는솔로 {keyword} 모음", "나는솔로", URL) is False


@pytest.mark.parametrize("url", [
    "https://search.naver.com/search.naver?where=news&query=나솔",
    "/relative/article",
    "javascript:void(0)",
    "",
    None,
])
def test_bad_urls_are_rejected(url):
    assert is_valid_article("나는솔로 출연자 근황", None, url) is False


def test_missing_title_is_rejected():
    assert is_valid_article("", "나는솔로", URL) is False
    assert is_valid_article(None, "나는솔로", URL) is False


def test_custom_markers():
    validator = RelevanceValidator(topic_markers=["돌싱글즈"])
    assert validator.is_valid("돌싱글즈 출연자 근황", None, URL) is True
    assert validator.is_valid("나는솔로 출연자 근황", None, URL) is False
    assert validator.rejection_reason("나는솔로 출연자 근황", None, URL) == "off topic"
