"""
Human-readable explanations for matched resources.
"""

from tether.matching.models import (
    ClinicalConstraints,
    Contribution,
    InteractionStyle,
    MatchRationale,
    PatientAssessment,
    RationaleFactor,
    Resource,
)
from tether.matching.predicates import (
    group_size_matches,
    interaction_style_matches,
    matching_keywords,
    offers_energy_slot,
)

FALLBACK_SUMMARY = "This resource meets your basic requirements and may be worth exploring."


def _value(member) -> str:
    return getattr(member, "value", member)


def generate_rationale(
    resource: Resource,
    assessment: PatientAssessment,
    constraints: ClinicalConstraints
) -> MatchRationale:
    """
    Explain which preferences a resource satisfies.

    Factors are listed in a fixed order (group size, interaction style,
    schedule, interests) and only when the dimension matches.

    Args:
        resource: Matched resource
        assessment: Patient's preferences
        constraints: Clinician's constraints for the patient

    Returns:
        MatchRationale with a one-sentence summary and its factors
    """
    factors = []

    if group_size_matches(resource, assessment):
        factors.append(RationaleFactor(
            factor="Group size",
            contribution=Contribution.POSITIVE,
            explanation=f"{_value(resource.group_size)} group matches your preference",
        ))

    if interaction_style_matches(resource, assessment):
        if resource.interaction_style == InteractionStyle.SIDE_BY_SIDE:
            explanation = "Activity-based format reduces conversation pressure"
        else:
            explanation = "Direct engagement style matches your preference"
        factors.append(RationaleFactor(
            factor="Interaction style",
            contribution=Contribution.POSITIVE,
            explanation=explanation,
        ))

    if offers_energy_slot(resource, assessment):
        factors.append(RationaleFactor(
            factor="Schedule",
            contribution=Contribution.POSITIVE,
            explanation=f"{_value(assessment.energy_pattern)} time slot aligns with your energy pattern",
        ))

    interest_matches = matching_keywords(resource, assessment)
    if interest_matches:
        factors.append(RationaleFactor(
            factor="Interests",
            contribution=Contribution.POSITIVE,
            explanation=f"Connects to your interest in {' and '.join(interest_matches[:2])}",
        ))

    positive = [f for f in factors if f.contribution == Contribution.POSITIVE]
    if positive:
        names = ", ".join(f.factor.lower() for f in positive)
        summary = f"This {_value(resource.tier)} resource fits your {names} preferences."
    else:
        summary = FALLBACK_SUMMARY

    return MatchRationale(summary=summary, factors=factors)
