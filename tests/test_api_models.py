"""Tests for request schemas and their conversion into domain records"""

import pytest
from pydantic import ValidationError

from tether.api.models import (
    ClinicalConstraintsSchema,
    MatchRequest,
    PatientAssessmentSchema,
    ResourceSchema,
)
from tether.matching import GENERAL_POPULATION, ResourceTier
from tether.matching.models import ClinicalConstraints, PatientAssessment, Resource


def constraints_data(**overrides):
    data = {
        "patient_id": "p-1",
        "primary_diagnosis": "bipolar",
        "age_group": "older_adult",
        "treatment_phase": "early_recovery",
        "approved_tiers": ["clinical"],
    }
    data.update(overrides)
    return data


def assessment_data(**overrides):
    data = {
        "transport_access": "public_transit",
        "cost_constraint": "low_cost",
        "energy_pattern": "varies",
        "group_size_preference": "individual",
        "interaction_style": "online_async",
        "commitment_level": "ongoing",
    }
    data.update(overrides)
    return data


def resource_data(**overrides):
    data = {
        "id": "r1",
        "name": "Resource One",
        "tier": "structured_community",
        "diagnoses_served": ["bipolar", "depression"],
        "age_groups": ["older_adult"],
        "group_size": "medium",
        "interaction_style": "face_to_face",
        "structure_level": "ongoing",
    }
    data.update(overrides)
    return data


class TestClinicalConstraintsSchema:

    def test_valid_constraints(self):
        constraints = ClinicalConstraintsSchema(**constraints_data()).to_domain()

        assert isinstance(constraints, ClinicalConstraints)
        assert constraints.approved_tiers == [ResourceTier.CLINICAL]
        assert constraints.comorbidities == []

    def test_empty_approved_tiers(self):
        with pytest.raises(ValidationError):
            ClinicalConstraintsSchema(**constraints_data(approved_tiers=[]))

    def test_unknown_diagnosis(self):
        with pytest.raises(ValidationError):
            ClinicalConstraintsSchema(**constraints_data(primary_diagnosis="flu"))

    def test_patient_id_is_trimmed(self):
        schema = ClinicalConstraintsSchema(**constraints_data(patient_id="  p-9 "))

        assert schema.patient_id == "p-9"

    def test_blank_patient_id(self):
        with pytest.raises(ValidationError):
            ClinicalConstraintsSchema(**constraints_data(patient_id="   "))


class TestPatientAssessmentSchema:

    def test_valid_assessment(self):
        assessment = PatientAssessmentSchema(**assessment_data()).to_domain()

        assert isinstance(assessment, PatientAssessment)
        assert assessment.availability.weekends is False
        assert assessment.max_distance_miles is None
        assert assessment.interest_categories == []

    def test_negative_distance(self):
        with pytest.raises(ValidationError):
            PatientAssessmentSchema(**assessment_data(max_distance_miles=-1))

    def test_unknown_energy_pattern(self):
        with pytest.raises(ValidationError):
            PatientAssessmentSchema(**assessment_data(energy_pattern="midnight"))


class TestResourceSchema:

    def test_valid_resource(self):
        resource = ResourceSchema(**resource_data()).to_domain()

        assert isinstance(resource, Resource)
        assert resource.diagnoses_served == ["bipolar", "depression"]
        assert resource.cost.type == "free"
        assert resource.verified is False

    def test_general_population(self):
        resource = ResourceSchema(**resource_data(diagnoses_served="general")).to_domain()

        assert resource.diagnoses_served == GENERAL_POPULATION
        assert resource.serves_general_population

    def test_empty_diagnoses(self):
        with pytest.raises(ValidationError):
            ResourceSchema(**resource_data(diagnoses_served=[]))

    def test_empty_age_groups(self):
        with pytest.raises(ValidationError):
            ResourceSchema(**resource_data(age_groups=[]))

    def test_negative_cost(self):
        with pytest.raises(ValidationError):
            ResourceSchema(**resource_data(cost={"type": "fixed", "amount": -5}))


class TestMatchRequest:

    def test_resources_optional(self):
        request = MatchRequest(constraints=constraints_data(), assessment=assessment_data())

        assert request.resources is None
        assert request.limit is None

    def test_duplicate_resource_ids(self):
        with pytest.raises(ValidationError):
            MatchRequest(
                constraints=constraints_data(),
                assessment=assessment_data(),
                resources=[resource_data(), resource_data()],
            )

    def test_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            MatchRequest(constraints=constraints_data(), assessment=assessment_data(), limit=0)
