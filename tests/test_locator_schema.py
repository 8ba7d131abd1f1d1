"""
Tests for the locator wire schema.
"""

import pytest
from pydantic import ValidationError

from axlocator.schemas.locator import Criterion, Locator, MatchType, PathStep, parse_path_segment


class TestCriterion:
    def test_defaults_to_exact(self):
        assert Criterion(attribute="role", value="Button").match_type is MatchType.EXACT

    def test_accepts_both_match_type_spellings(self):
        snake = Criterion.model_validate({"attribute": "title", "value": "x", "match_type": "contains"})
        camel = Criterion.model_validate({"attribute": "title", "value": "x", "matchType": "prefix"})
        assert snake.match_type is MatchType.CONTAINS
        assert camel.match_type is MatchType.PREFIX

    def test_match_type_spellings_are_lenient(self):
        for raw in ("containsAny", "contains_any", "CONTAINSANY"):
            assert MatchType(raw) is MatchType.CONTAINS_ANY

    def test_unknown_match_type_is_rejected(self):
        with pytest.raises(ValidationError):
            Criterion.model_validate({"attribute": "title", "value": "x", "match_type": "fuzzy"})

    def test_null_match_type_means_exact(self):
        criterion = Criterion.model_validate({"attribute": "title", "value": "x", "match_type": None})
        assert criterion.match_type is MatchType.EXACT

    def test_key_resolves_aliases(self):
        assert Criterion(attribute="id", value="x").key == "AXIdentifier"
        assert Criterion(attribute="AXCustom", value="x").key == "AXCustom"

    def test_scalar_values_are_stringified(self):
        assert Criterion.model_validate({"attribute": "pid", "value": 42}).value == "42"
        assert Criterion.model_validate({"attribute": "ignored", "value": False}).value == "false"

    def test_blank_attribute_is_rejected(self):
        with pytest.raises(ValidationError):
            Criterion(attribute="  ", value="x")


class TestPathStep:
    def test_flat_form(self):
        step = PathStep.model_validate({"attribute": "role", "value": "Window", "depth": 1})
        assert step.depth == 1
        assert step.criteria == (Criterion(attribute="role", value="Window"),)
        assert step.match_all is True

    def test_grouped_form_with_max_depth_for_step(self):
        step = PathStep.model_validate(
            {
                "criteria": [{"attribute": "role", "value": "Button"}, {"attribute": "title", "value": "OK"}],
                "matchAll": False,
                "max_depth_for_step": 4,
            }
        )
        assert step.match_all is False
        assert step.depth == 4
        assert len(step.criteria) == 2

    def test_step_match_type_fills_criteria_defaults(self):
        step = PathStep.model_validate(
            {
                "criteria": [
                    {"attribute": "title", "value": "Doc"},
                    {"attribute": "role", "value": "Window", "match_type": "exact"},
                ],
                "matchType": "prefix",
            }
        )
        assert [c.match_type for c in step.criteria] == [MatchType.PREFIX, MatchType.EXACT]

    def test_legacy_segment_string(self):
        step = PathStep.model_validate("AXRole=AXWindow, AXTitle=Doc")
        assert [(c.attribute, c.value) for c in step.criteria] == [("AXRole", "AXWindow"), ("AXTitle", "Doc")]
        assert step.depth is None

    def test_inspector_style_segment(self):
        criteria = parse_path_segment("Role:Window,Title:Untitled 2")
        assert [(c.key, c.value) for c in criteria] == [("AXRole", "Window"), ("AXTitle", "Untitled 2")]

    def test_segment_value_may_contain_the_other_delimiter(self):
        criteria = parse_path_segment("AXTitle=Time: 10:30")
        assert criteria[0].value == "Time: 10:30"

    def test_unusable_segment_is_rejected(self):
        with pytest.raises(ValueError):
            parse_path_segment("nonsense")
        with pytest.raises(ValidationError):
            PathStep.model_validate("nonsense")

    def test_empty_criteria_are_rejected(self):
        with pytest.raises(ValidationError):
            PathStep.model_validate({"criteria": []})

    def test_negative_depth_is_rejected(self):
        with pytest.raises(ValidationError):
            PathStep.model_validate({"attribute": "role", "value": "Window", "depth": -1})


class TestLocator:
    def test_wire_example(self):
        locator = Locator.model_validate(
            {
                "criteria": [{"attribute": "role", "value": "Button", "match_type": "exact"}],
                "matchAll": True,
                "rootElementPathHint": [{"attribute": "role", "value": "Window", "depth": 1}],
            }
        )
        assert locator.match_all is True
        assert locator.has_path_hint
        assert locator.root_path_hint[0].depth == 1
        assert locator.require_action is None

    def test_original_key_names(self):
        locator = Locator.model_validate(
            {
                "criteria": [{"attribute": "title", "value": "Save"}],
                "path_from_root": ["Role:Window"],
                "requireAction": "AXPress",
                "match_all": False,
            }
        )
        assert locator.require_action == "AXPress"
        assert locator.match_all is False
        assert locator.root_path_hint[0].criteria[0].key == "AXRole"

    def test_dict_criteria_shorthand(self):
        locator = Locator.model_validate({"criteria": {"role": "AXButton", "title": "Save"}})
        assert [(c.attribute, c.value) for c in locator.criteria] == [("role", "AXButton"), ("title", "Save")]

    def test_computed_name_contains(self):
        locator = Locator.model_validate({"computedNameContains": "save"})
        assert locator.criteria[0].key == "ComputedName"
        assert locator.criteria[0].match_type is MatchType.CONTAINS

    def test_null_sections_are_defaults(self):
        locator = Locator.model_validate({"criteria": None, "path_from_root": None, "requireAction": "  "})
        assert locator.criteria == ()
        assert not locator.has_path_hint
        assert locator.require_action is None

    def test_describe(self):
        locator = Locator(
            criteria=[Criterion(attribute="role", value="Button")], require_action="AXPress"
        )
        assert locator.describe() == "role exact 'Button' requiring AXPress"
