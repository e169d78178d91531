"""
Per-dimension match predicates.

Both the compatibility scorer and the rationale generator decide "does this
dimension match" through these functions, so the number and the explanation
cannot drift apart.
"""

from typing import Iterable, List, Optional

from tether.matching.models import (
    GroupSize,
    InteractionStyle,
    PatientAssessment,
    Resource,
)

GROUP_SIZE_ORDER = [
    GroupSize.INDIVIDUAL,
    GroupSize.SMALL,
    GroupSize.MEDIUM,
    GroupSize.LARGE,
]

IN_PERSON_STYLES = (InteractionStyle.FACE_TO_FACE, InteractionStyle.SIDE_BY_SIDE)
ONLINE_STYLES = (InteractionStyle.ONLINE_SYNC, InteractionStyle.ONLINE_ASYNC)


def group_size_matches(resource: Resource, assessment: PatientAssessment) -> bool:
    return resource.group_size == assessment.group_size_preference


def group_size_distance(resource_size: str, preferred_size: str) -> Optional[int]:
    """
    Ordinal distance between two group sizes.

    Returns None when either size is not a known category.
    """
    if resource_size not in GROUP_SIZE_ORDER or preferred_size not in GROUP_SIZE_ORDER:
        return None
    return abs(GROUP_SIZE_ORDER.index(resource_size) - GROUP_SIZE_ORDER.index(preferred_size))


def interaction_style_matches(resource: Resource, assessment: PatientAssessment) -> bool:
    return resource.interaction_style == assessment.interaction_style


def same_interaction_family(resource_style: str, preferred_style: str) -> bool:
    """True when both styles are in-person, or both are online"""
    if resource_style in IN_PERSON_STYLES and preferred_style in IN_PERSON_STYLES:
        return True
    if resource_style in ONLINE_STYLES and preferred_style in ONLINE_STYLES:
        return True
    return False


def offers_energy_slot(resource: Resource, assessment: PatientAssessment) -> bool:
    """True when the resource runs at the time of day the patient has most energy"""
    return assessment.energy_pattern in resource.schedule.time_slots


def patient_interest_terms(assessment: PatientAssessment) -> List[str]:
    """Case-folded interest categories followed by past interests"""
    return [
        term.lower()
        for term in list(assessment.interest_categories) + list(assessment.past_interests)
    ]


def keyword_matches_interest(keyword: str, interests: Iterable[str]) -> bool:
    """Substring containment in either direction, case-insensitive"""
    keyword = keyword.lower()
    return any(interest in keyword or keyword in interest for interest in interests)


def matching_keywords(resource: Resource, assessment: PatientAssessment) -> List[str]:
    """
    Resource keywords that match any patient interest, in resource order.

    Keywords are returned as written on the resource.
    """
    interests = patient_interest_terms(assessment)
    return [k for k in resource.keywords if keyword_matches_interest(k, interests)]
