import pytest

from stress_detector.keyword_highlighter import HighlightSegment, highlight, intensity_tier
from stress_detector.response_contract import StressfulKeyword


def kw(phrase, intensity=5):
    return StressfulKeyword(phrase=phrase, intensity=intensity)


def test_no_keywords_returns_whole_text():
    segments = highlight("I feel fine today", [])
    assert segments == [HighlightSegment("I feel fine today")]
    assert segments[0].keyword is None
    assert segments[0].tier is None


def test_single_keyword_at_end():
    segments = highlight("I feel very stressed", [kw("stressed", 9)])
    assert [s.text for s in segments] == ["I feel very ", "stressed"]
    assert segments[0].keyword is None
    assert segments[1].keyword.phrase == "stressed"
    assert segments[1].tier == 5


def test_matching_is_case_insensitive():
    segments = highlight("STRESSED now", [kw("stressed", 3)])
    assert [s.text for s in segments] == ["STRESSED", " now"]
    assert segments[0].keyword.intensity == 3
    assert segments[0].tier == 2


def test_segments_follow_text_order_not_keyword_order():
    keywords = [kw("deadline", 7), kw("tired", 2)]
    segments = highlight("So tired, the deadline is close", keywords)
    assert [s.text for s in segments] == ["So ", "tired", ", the ", "deadline", " is close"]
    assert [s.tier for s in segments] == [None, 1, None, 4, None]


def test_punctuation_matches_literally():
    segments = highlight("Why me?! (again)", [kw("me?!"), kw("(again)")])
    assert [s.text for s in segments if s.keyword] == ["me?!", "(again)"]


def test_dot_in_phrase_is_not_a_wildcard():
    segments = highlight("a.b and axb", [kw("a.b")])
    assert [s.text for s in segments if s.keyword] == ["a.b"]


def test_overlapping_phrases_do_not_double_match():
    segments = highlight("stressed out again", [kw("stressed", 4), kw("stressed out", 8)])
    matched = [s for s in segments if s.keyword]
    assert [s.text for s in matched] == ["stressed out"]
    assert matched[0].tier == 4
    assert "".join(s.text for s in segments) == "stressed out again"


def test_repeated_occurrences_all_match():
    segments = highlight("worry, worry, Worry", [kw("worry", 6)])
    assert [s.text for s in segments if s.keyword] == ["worry", "worry", "Worry"]


def test_hallucinated_keyword_is_skipped():
    segments = highlight("All calm here", [kw("panic", 10)])
    assert segments == [HighlightSegment("All calm here")]


def test_blank_phrases_are_ignored():
    assert highlight("text", [kw("   ")]) == [HighlightSegment("text")]


def test_concatenation_reproduces_text():
    text = "Exams, exams and more EXAMS; I'm anxious."
    segments = highlight(text, [kw("exams", 6), kw("anxious", 8)])
    assert "".join(s.text for s in segments) == text
    assert all(s.text for s in segments)


@pytest.mark.parametrize("intensity, tier", [
    (10, 5), (9, 5), (8, 4), (7, 4), (6, 3), (5, 3), (4, 2), (3, 2), (2, 1), (1, 1), (0, 1),
])
def test_intensity_tiers(intensity, tier):
    assert intensity_tier(intensity) == tier


def test_unicode_case_variants_are_tagged():
    segments = highlight("ΣΤΡΕΣ today", [kw("στρεσ", 9)])
    assert [s.text for s in segments] == ["ΣΤΡΕΣ", " today"]
    assert segments[0].keyword.phrase == "στρεσ"
    assert segments[0].tier == 5
