"""
Tests for CriterionMatcher match modes and special attributes.
"""

import logging

import pytest

from axlocator.exceptions import ProviderUnavailableError
from axlocator.schemas.locator import Criterion, MatchType
from axlocator.search.criterion_matcher import CriterionMatcher, compare_text
from axlocator.utils.logging.search_trace import SearchTrace
from fake_tree import FakeElement, StaleElement


def crit(attribute, value, match_type="exact"):
    return Criterion(attribute=attribute, value=value, match_type=match_type)


@pytest.fixture
def sign_in():
    return FakeElement("AXButton", "Sign In Button", actions=["AXPress"])


class TestMatchModes:
    """String comparison rules for each match type."""

    def test_contains_is_case_insensitive(self, matcher, sign_in):
        assert matcher.matches(sign_in, crit("title", "sign in", "contains"))

    def test_exact_is_case_sensitive(self, matcher, sign_in):
        assert not matcher.matches(sign_in, crit("title", "sign in", "exact"))
        assert matcher.matches(sign_in, crit("title", "Sign In Button", "exact"))

    def test_prefix_and_suffix(self, matcher, sign_in):
        assert matcher.matches(sign_in, crit("title", "Sign", "prefix"))
        assert matcher.matches(sign_in, crit("title", "Button", "suffix"))
        assert not matcher.matches(sign_in, crit("title", "sign", "prefix"))

    def test_contains_any_splits_on_commas(self, matcher, sign_in):
        assert matcher.matches(sign_in, crit("title", "logout, SIGN IN", "containsAny"))
        assert not matcher.matches(sign_in, crit("title", "logout, register", "containsAny"))

    def test_contains_any_ignores_empty_fragments(self, matcher, sign_in):
        assert not matcher.matches(sign_in, crit("title", " , ,", "containsAny"))

    def test_regex_searches_anywhere(self, matcher, sign_in):
        assert matcher.matches(sign_in, crit("title", r"In\s+But", "regex"))
        assert matcher.matches(sign_in, crit("title", r"(?i)^sign", "regex"))
        assert not matcher.matches(sign_in, crit("title", r"^In", "regex"))

    def test_invalid_regex_is_a_non_match(self, sign_in, caplog):
        matcher = CriterionMatcher()
        with caplog.at_level(logging.WARNING, logger="axlocator.search"):
            assert not matcher.matches(sign_in, crit("title", "([unclosed", "regex"))
        assert "Invalid regex" in caplog.text

    def test_compare_text_directly(self):
        assert compare_text("abc", "B", MatchType.CONTAINS)
        assert not compare_text("abc", "B", MatchType.EXACT)


class TestSpecialAttributes:
    """Role, PID, flags and computed names have bespoke rules."""

    def test_role_alias_and_prefix_equivalence(self, matcher, sign_in):
        assert matcher.matches(sign_in, crit("role", "Button"))
        assert matcher.matches(sign_in, crit("AXRole", "AXButton"))
        assert not matcher.matches(sign_in, crit("role", "button"))

    def test_role_non_exact_modes_see_unprefixed_role(self, matcher, sign_in):
        assert matcher.matches(sign_in, crit("role", "Butt", "prefix"))
        assert matcher.matches(sign_in, crit("role", "AXBut", "prefix"))
        assert matcher.matches(sign_in, crit("role", "^Button$", "regex"))
        assert not matcher.matches(sign_in, crit("role", "Text", "prefix"))

    def test_role_wildcard(self, matcher):
        element = FakeElement("AXAnything")
        assert matcher.matches(element, crit("role", "*"))

    def test_pid_compares_integers(self, matcher):
        element = FakeElement("AXButton", pid=321)
        assert matcher.matches(element, crit("pid", "321"))
        assert matcher.matches(element, crit("PID", " 321 ", "contains"))
        assert not matcher.matches(element, crit("pid", "32"))
        assert not matcher.matches(element, crit("pid", "abc"))

    def test_pid_satisfied_by_application_context(self, matcher):
        app = FakeElement("AXApplication", pid=None)
        assert matcher.matches(app, crit("pid", "999"))

    def test_missing_pid_is_no_match(self, matcher):
        element = FakeElement("AXButton", pid=None)
        assert not matcher.matches(element, crit("pid", "1"))

    def test_is_ignored_normalizes_booleans(self, matcher):
        hidden = FakeElement("AXGroup", hidden=True)
        shown = FakeElement("AXGroup")
        assert matcher.matches(hidden, crit("isIgnored", "true"))
        assert matcher.matches(hidden, crit("ignored", "1"))
        assert matcher.matches(shown, crit("IsIgnored", "no"))
        assert not matcher.matches(shown, crit("ignored", "yes"))
        assert not matcher.matches(shown, crit("ignored", "sometimes"))

    def test_is_clickable_follows_press_support(self, matcher, sign_in):
        label = FakeElement("AXStaticText", "Hello")
        assert matcher.matches(sign_in, crit("isClickable", "true"))
        assert matcher.matches(label, crit("clickable", "false"))

    def test_press_without_prefix_still_counts(self, matcher):
        element = FakeElement("AXButton", actions=["Press"])
        assert matcher.matches(element, crit("IsClickable", "true"))

    def test_computed_name_exact_is_case_insensitive_and_trimmed(self, matcher):
        element = FakeElement("AXButton", AXDescription="Close Window")
        assert matcher.matches(element, crit("name", "  close window "))
        assert matcher.matches(element, crit("computedName", "Close", "prefix"))

    def test_computed_name_with_value(self, matcher):
        field = FakeElement("AXTextField", AXDescription="Search", AXValue="kittens")
        assert matcher.matches(field, crit("nameWithValue", "search kittens"))
        assert not matcher.matches(field, crit("name", "search kittens"))

    def test_class_list_entry_semantics(self, matcher):
        element = FakeElement("AXGroup", AXDOMClassList=["btn", "btn-primary"])
        assert matcher.matches(element, crit("classlist", "btn-primary"))
        assert not matcher.matches(element, crit("dom", "primary"))
        assert matcher.matches(element, crit("domclasslist", "PRIMARY", "contains"))

    def test_sequence_values_match_per_entry(self, matcher):
        element = FakeElement("AXGroup", AXKeywords=("alpha", "beta"))
        assert matcher.matches(element, crit("AXKeywords", "beta"))
        assert not matcher.matches(element, crit("AXKeywords", "alpha, beta"))

    def test_non_string_values_compare_by_text(self, matcher):
        element = FakeElement("AXCheckBox", AXValue=1, AXEnabled=True)
        assert matcher.matches(element, crit("value", "1"))
        assert matcher.matches(element, crit("AXEnabled", "true"))


class TestMissingAttributes:
    """Missing attributes are non-matches, never errors."""

    def test_missing_generic_attribute(self, matcher):
        assert not matcher.matches(FakeElement("AXButton"), crit("title", "Save"))

    def test_missing_role_is_logged_at_info(self, caplog):
        element = FakeElement("AXButton")
        del element.attributes["AXRole"]
        matcher = CriterionMatcher(trace=SearchTrace())
        with caplog.at_level(logging.INFO, logger="axlocator.search"):
            assert not matcher.matches(element, crit("role", "Button"))
        assert any(
            r.levelno == logging.INFO and "Structural attribute AXRole" in r.getMessage()
            for r in caplog.records
        )

    def test_stale_element_raises_provider_unavailable(self, matcher):
        with pytest.raises(ProviderUnavailableError):
            matcher.matches(StaleElement("AXButton"), crit("title", "Save"))


class TestCombinators:
    """matches_all / matches_any over criteria sets."""

    def test_empty_set_asymmetry(self, matcher, sign_in):
        assert matcher.matches_all(sign_in, []) is True
        assert matcher.matches_any(sign_in, []) is False

    def test_all_and_any(self, matcher, sign_in):
        criteria = [crit("role", "Button"), crit("title", "Cancel")]
        assert not matcher.matches_all(sign_in, criteria)
        assert matcher.matches_any(sign_in, criteria)
        assert matcher.matches_criteria(sign_in, criteria, match_all=False)

    def test_failed_criteria_lists_the_misses(self, matcher, sign_in):
        criteria = [crit("role", "Button"), crit("title", "Cancel")]
        assert matcher.failed_criteria(sign_in, criteria) == [criteria[1]]
