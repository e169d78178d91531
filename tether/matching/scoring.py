"""
Compatibility scoring for resources that survived both filter stages.

The score is a weighted sum of five sub-scores, each normalized to [0, 1],
reported on a 0-100 integer scale.
"""

import math
from typing import Dict, List

from tether.matching.models import (
    Crowding,
    Lighting,
    NoiseLevel,
    PatientAssessment,
    Resource,
    SensoryProfile,
    TimeOfDay,
)
from tether.matching.predicates import (
    group_size_distance,
    keyword_matches_interest,
    patient_interest_terms,
    same_interaction_family,
)

WEIGHTS = {
    "group_size": 0.25,
    "interaction_style": 0.25,
    "interest_alignment": 0.20,
    "sensory_compatibility": 0.15,
    "motivation_alignment": 0.15,
}


def score_group_size_match(resource_size: str, preferred_size: str) -> float:
    if resource_size == preferred_size:
        return 1.0

    # Adjacent sizes get partial credit
    distance = group_size_distance(resource_size, preferred_size)
    if distance == 1:
        return 0.6
    if distance == 2:
        return 0.3
    return 0.1


def score_interaction_style_match(resource_style: str, preferred_style: str) -> float:
    if resource_style == preferred_style:
        return 1.0
    if same_interaction_family(resource_style, preferred_style):
        return 0.7
    return 0.3


def score_interest_alignment(resource_keywords: List[str], interests: List[str]) -> float:
    """
    Score keyword overlap with the patient's interests.

    Args:
        resource_keywords: Keywords describing the resource
        interests: Case-folded patient interest terms

    Returns:
        1.0 for three or more matching keywords, down to 0.1 for none
    """
    matches = sum(1 for k in resource_keywords if keyword_matches_interest(k, interests))

    if matches >= 3:
        return 1.0
    if matches == 2:
        return 0.7
    if matches == 1:
        return 0.4
    return 0.1


def score_sensory_compatibility(sensory: SensoryProfile) -> float:
    # Calmer environments are assumed preferable for every patient
    score = 0.5

    if sensory.noise_level == NoiseLevel.QUIET:
        score += 0.2
    if sensory.crowding == Crowding.SPACIOUS:
        score += 0.2
    if sensory.lighting == Lighting.NORMAL:
        score += 0.1

    return min(score, 1.0)


def score_energy_alignment(resource_time_slots: List[str], energy_pattern: str) -> float:
    if energy_pattern == TimeOfDay.VARIES:
        return 0.7
    if energy_pattern in resource_time_slots:
        return 1.0
    return 0.4


def score_breakdown(resource: Resource, assessment: PatientAssessment) -> Dict[str, float]:
    """Normalized sub-scores keyed by the names used in WEIGHTS"""
    return {
        "group_size": score_group_size_match(
            resource.group_size,
            assessment.group_size_preference
        ),
        "interaction_style": score_interaction_style_match(
            resource.interaction_style,
            assessment.interaction_style
        ),
        "interest_alignment": score_interest_alignment(
            resource.keywords,
            patient_interest_terms(assessment)
        ),
        "sensory_compatibility": score_sensory_compatibility(resource.sensory_profile),
        "motivation_alignment": score_energy_alignment(
            resource.schedule.time_slots,
            assessment.energy_pattern
        ),
    }


def calculate_compatibility_score(resource: Resource, assessment: PatientAssessment) -> int:
    """
    Weighted compatibility of a resource with a patient's preferences.

    Returns:
        Integer score in [0, 100]; halves round up
    """
    breakdown = score_breakdown(resource, assessment)
    total = sum(WEIGHTS[name] * value for name, value in breakdown.items())
    return int(math.floor(total * 100 + 0.5))
