"""Tests for compatibility scoring"""

import pytest
from tether.matching import SensoryProfile, Schedule, calculate_compatibility_score
from tether.matching.scoring import (
    WEIGHTS,
    score_breakdown,
    score_energy_alignment,
    score_group_size_match,
    score_interaction_style_match,
    score_interest_alignment,
    score_sensory_compatibility,
)


def test_weights_sum_to_one():
    assert sum(WEIGHTS.values()) == pytest.approx(1.0)


class TestGroupSize:

    @pytest.mark.parametrize("resource_size,preferred,expected", [
        ("small", "small", 1.0),
        ("small", "medium", 0.6),
        ("medium", "individual", 0.3),
        ("small", "large", 0.3),
        ("individual", "large", 0.1),
        ("large", "individual", 0.1),
    ])
    def test_ordinal_distance(self, resource_size, preferred, expected):
        assert score_group_size_match(resource_size, preferred) == expected

    def test_unknown_size_gets_worst_score(self):
        assert score_group_size_match("huge", "small") == 0.1


class TestInteractionStyle:

    @pytest.mark.parametrize("resource_style,preferred,expected", [
        ("side_by_side", "side_by_side", 1.0),
        ("face_to_face", "side_by_side", 0.7),
        ("online_sync", "online_async", 0.7),
        ("face_to_face", "online_sync", 0.3),
        ("online_async", "side_by_side", 0.3),
    ])
    def test_style_families(self, resource_style, preferred, expected):
        assert score_interaction_style_match(resource_style, preferred) == expected

    def test_unknown_style_gets_worst_score(self):
        assert score_interaction_style_match("telepathy", "face_to_face") == 0.3


class TestInterestAlignment:

    @pytest.mark.parametrize("keywords,expected", [
        ([], 0.1),
        (["chess"], 0.1),
        (["hiking"], 0.4),
        (["hiking", "art"], 0.7),
        (["hiking", "art", "gardening"], 1.0),
        (["hiking", "art", "gardening", "cooking"], 1.0),
    ])
    def test_match_count_thresholds(self, keywords, expected):
        interests = ["hiking", "art", "gardening", "cooking"]

        assert score_interest_alignment(keywords, interests) == expected

    def test_keyword_inside_interest(self):
        assert score_interest_alignment(["art"], ["art therapy"]) == 0.4

    def test_interest_inside_keyword(self):
        assert score_interest_alignment(["trail hiking"], ["hiking"]) == 0.4

    def test_keywords_are_case_folded(self, make_resource, make_assessment):
        resource = make_resource(keywords=["Hiking", "NATURE"])
        assessment = make_assessment(interest_categories=["Outdoors"], past_interests=["hiking", "nature walks"])

        assert score_breakdown(resource, assessment)["interest_alignment"] == 0.7


class TestSensory:

    def test_calmest_profile_caps_at_one(self):
        score = score_sensory_compatibility(SensoryProfile("quiet", "normal", "spacious"))

        assert score == pytest.approx(1.0)
        assert score <= 1.0

    def test_busiest_profile_is_baseline(self):
        assert score_sensory_compatibility(SensoryProfile("loud", "dim", "crowded")) == 0.5

    def test_partial_profile(self):
        assert score_sensory_compatibility(SensoryProfile("quiet", "bright", "moderate")) == pytest.approx(0.7)
        assert score_sensory_compatibility(SensoryProfile("moderate", "normal", "crowded")) == pytest.approx(0.6)


class TestEnergy:

    def test_varies_is_flat(self):
        assert score_energy_alignment([], "varies") == 0.7
        assert score_energy_alignment(["morning"], "varies") == 0.7

    def test_matching_slot(self):
        assert score_energy_alignment(["morning", "evening"], "evening") == 1.0

    def test_no_matching_slot(self):
        assert score_energy_alignment(["morning"], "afternoon") == 0.4


class TestCompatibilityScore:

    def test_exact_match_on_all_dimensions_scores_100(self, make_resource, make_assessment):
        resource = make_resource(
            keywords=["hiking", "nature", "walking"],
            sensory_profile=SensoryProfile("quiet", "normal", "spacious"),
        )
        assessment = make_assessment(interest_categories=["hiking", "nature", "walking"])

        assert calculate_compatibility_score(resource, assessment) == 100

    def test_no_interest_overlap(self, make_resource, make_assessment):
        resource = make_resource(keywords=["chess"])
        assessment = make_assessment(interest_categories=["hiking"])

        # 0.25 + 0.25 + 0.2 * 0.1 + 0.15 + 0.15
        assert calculate_compatibility_score(resource, assessment) == 82

    def test_single_interest_match(self, make_resource, make_assessment):
        resource = make_resource(keywords=["hiking", "nature"])
        assessment = make_assessment(interest_categories=["hiking"])

        assert calculate_compatibility_score(resource, assessment) == 88

    def test_returns_int_in_range(self, make_resource, make_assessment):
        resource = make_resource(
            group_size="large",
            interaction_style="online_async",
            sensory_profile=SensoryProfile("loud", "dim", "crowded"),
            schedule=Schedule(time_slots=["morning"]),
            keywords=["chess"],
        )
        assessment = make_assessment(
            group_size_preference="individual",
            interaction_style="face_to_face",
            energy_pattern="evening",
            interest_categories=["hiking"],
        )

        score = calculate_compatibility_score(resource, assessment)

        assert isinstance(score, int)
        assert 0 <= score <= 100
        assert score < 30

    def test_unknown_enum_values_do_not_raise(self, make_resource, make_assessment):
        resource = make_resource(
            group_size="enormous",
            interaction_style="carrier_pigeon",
            sensory_profile=SensoryProfile("deafening", "strobe", "packed"),
        )
        assessment = make_assessment(energy_pattern="midnight")

        score = calculate_compatibility_score(resource, assessment)

        assert 0 <= score <= 100

    def test_breakdown_keys_match_weights(self, make_resource, make_assessment):
        breakdown = score_breakdown(make_resource(), make_assessment())

        assert set(breakdown) == set(WEIGHTS)
        assert all(0.0 <= v <= 1.0 for v in breakdown.values())
