"""Tests for patient logistics filters"""

import pytest
from tether.matching import Availability, Cost, Location, Schedule
from tether.matching import filter_logistics, passes_logistics_filters
from tether.matching.logistics_filter import schedule_compatible


class TestSchedule:

    @pytest.mark.parametrize("slot,availability", [
        ("morning", Availability(weekday_mornings=True)),
        ("afternoon", Availability(weekday_afternoons=True)),
        ("evening", Availability(weekday_evenings=True)),
    ])
    def test_slot_matches_available_block(self, make_resource, make_assessment, slot, availability):
        resource = make_resource(schedule=Schedule(time_slots=[slot]))
        assessment = make_assessment(availability=availability)

        assert schedule_compatible(resource, assessment) is True

    def test_no_matching_slot_rejected(self, make_resource, make_assessment):
        resource = make_resource(schedule=Schedule(time_slots=["morning", "afternoon"]))
        assessment = make_assessment(availability=Availability(weekday_evenings=True))

        assert passes_logistics_filters(resource, assessment) is False

    def test_one_matching_slot_is_enough(self, make_resource, make_assessment):
        resource = make_resource(schedule=Schedule(time_slots=["morning", "evening"]))
        assessment = make_assessment(availability=Availability(weekday_evenings=True))

        assert passes_logistics_filters(resource, assessment) is True

    def test_no_availability_rejected(self, make_resource, make_assessment):
        resource = make_resource(schedule=Schedule(time_slots=["morning", "afternoon", "evening"]))
        assessment = make_assessment(availability=Availability())

        assert passes_logistics_filters(resource, assessment) is False

    def test_weekends_override_without_weekday_slots(self, make_resource, make_assessment):
        """Weekend availability passes a resource with no weekday slots at all"""
        resource = make_resource(schedule=Schedule(days_offered=["Tuesday"], time_slots=[]))
        assessment = make_assessment(availability=Availability(weekends=True))

        assert schedule_compatible(resource, assessment) is True

    def test_weekends_override_unmatched_slots(self, make_resource, make_assessment):
        resource = make_resource(schedule=Schedule(time_slots=["morning"]))
        assessment = make_assessment(
            availability=Availability(weekday_evenings=True, weekends=True)
        )

        assert passes_logistics_filters(resource, assessment) is True


class TestTransportation:

    def test_walking_only_requires_transit_access(self, make_resource, make_assessment):
        resource = make_resource(location=Location(transit_accessible=False))
        assessment = make_assessment(transport_access="walking_only")

        assert passes_logistics_filters(resource, assessment) is False

    def test_walking_only_with_transit_access(self, make_resource, make_assessment):
        resource = make_resource(location=Location(transit_accessible=True))
        assessment = make_assessment(transport_access="walking_only")

        assert passes_logistics_filters(resource, assessment) is True

    @pytest.mark.parametrize("transport", ["drives", "public_transit", "needs_rides"])
    def test_other_transport_passes(self, make_resource, make_assessment, transport):
        resource = make_resource(location=Location(transit_accessible=False))
        assessment = make_assessment(transport_access=transport)

        assert passes_logistics_filters(resource, assessment) is True

    def test_max_distance_not_consulted(self, make_resource, make_assessment):
        resource = make_resource()
        assessment = make_assessment(max_distance_miles=0)

        assert passes_logistics_filters(resource, assessment) is True


class TestCost:

    def test_free_only_excludes_sliding_scale(self, make_resource, make_assessment):
        resource = make_resource(cost=Cost("sliding_scale", amount=10.0))
        assessment = make_assessment(cost_constraint="free_only")

        assert passes_logistics_filters(resource, assessment) is False

    def test_free_only_accepts_free(self, make_resource, make_assessment):
        resource = make_resource(cost=Cost("free"))
        assessment = make_assessment(cost_constraint="free_only")

        assert passes_logistics_filters(resource, assessment) is True

    @pytest.mark.parametrize("constraint", ["low_cost", "cost_flexible"])
    def test_other_constraints_accept_any_cost(self, make_resource, make_assessment, constraint):
        resource = make_resource(cost=Cost("fixed", amount=80.0))
        assessment = make_assessment(cost_constraint=constraint)

        assert passes_logistics_filters(resource, assessment) is True


def test_filter_logistics_preserves_order(make_resource, make_assessment):
    resources = [
        make_resource(id="a"),
        make_resource(id="b", cost=Cost("fixed", amount=20.0)),
        make_resource(id="c"),
    ]
    assessment = make_assessment(cost_constraint="free_only")

    result = filter_logistics(resources, assessment)

    assert [r.id for r in result] == ["a", "c"]
