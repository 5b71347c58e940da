from __future__ import annotations

from task_insights.services.fuzzy import RapidFuzzMatcher


def test_exact_substring_is_a_perfect_match() -> None:
    found = RapidFuzzMatcher().match("design", "New Design homepage")

    assert found is not None
    assert found.distance == 0.0
    assert (found.start, found.end) == (4, 10)


def test_typo_is_close_but_not_perfect() -> None:
    found = RapidFuzzMatcher().match("design", "desgin")

    assert found is not None
    assert 0.0 < found.distance < 0.2


def test_no_overlap_or_empty_text_is_no_match() -> None:
    matcher = RapidFuzzMatcher()

    assert matcher.match("xyz", "abc") is None
    assert matcher.match("design", "") is None
    assert matcher.match("", "design") is None
