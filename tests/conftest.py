"""Shared fixtures for matching tests"""

import pytest

from tether.matching.models import (
    Availability,
    ClinicalConstraints,
    Cost,
    Location,
    PatientAssessment,
    Resource,
    Schedule,
    SensoryProfile,
)


@pytest.fixture
def make_resource():
    """Factory for resources that pass every filter for the default patient"""
    def _make(**overrides):
        fields = dict(
            id="resource_1",
            name="Test Resource",
            description="Test description",
            tier="lifestyle",
            diagnoses_served="general",
            age_groups=["young_adult"],
            group_size="small",
            interaction_style="side_by_side",
            structure_level="drop_in",
            sensory_profile=SensoryProfile("quiet", "normal", "spacious"),
            atmosphere=[],
            schedule=Schedule(["Wednesday"], ["evening"], "90 minutes"),
            location=Location("1 Main Street", transit_accessible=True),
            cost=Cost("free"),
            alcohol_served=False,
            keywords=[],
            verified=True,
        )
        fields.update(overrides)
        return Resource(**fields)
    return _make


@pytest.fixture
def make_constraints():
    def _make(**overrides):
        fields = dict(
            patient_id="patient_1",
            primary_diagnosis="depression",
            age_group="young_adult",
            treatment_phase="stable",
            approved_tiers=["clinical", "structured_community", "lifestyle"],
            comorbidities=[],
            contraindicated_environments=[],
        )
        fields.update(overrides)
        return ClinicalConstraints(**fields)
    return _make


@pytest.fixture
def make_assessment():
    def _make(**overrides):
        fields = dict(
            availability=Availability(weekday_evenings=True),
            transport_access="drives",
            max_distance_miles=10,
            cost_constraint="cost_flexible",
            energy_pattern="evening",
            group_size_preference="small",
            interaction_style="side_by_side",
            commitment_level="drop_in",
            interest_categories=[],
            past_interests=[],
        )
        fields.update(overrides)
        return PatientAssessment(**fields)
    return _make
