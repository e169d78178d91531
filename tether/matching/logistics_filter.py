"""
Logistics filters: can the patient practically attend?
"""

from typing import List, Sequence

from tether.matching.models import (
    CostConstraint,
    CostType,
    PatientAssessment,
    Resource,
    TimeOfDay,
    TransportAccess,
)


def schedule_compatible(resource: Resource, assessment: PatientAssessment) -> bool:
    """
    True if the patient can make at least one of the resource's sessions.

    Weekend availability passes every resource, whether or not it actually
    meets on weekends.
    """
    availability = assessment.availability
    if availability.weekends:
        return True

    for slot in resource.schedule.time_slots:
        if slot == TimeOfDay.MORNING and availability.weekday_mornings:
            return True
        if slot == TimeOfDay.AFTERNOON and availability.weekday_afternoons:
            return True
        if slot == TimeOfDay.EVENING and availability.weekday_evenings:
            return True
    return False


def transport_compatible(resource: Resource, assessment: PatientAssessment) -> bool:
    # max_distance_miles is not consulted; walking-only patients need transit access
    if assessment.transport_access == TransportAccess.WALKING_ONLY:
        return resource.location.transit_accessible
    return True


def cost_compatible(resource: Resource, assessment: PatientAssessment) -> bool:
    if assessment.cost_constraint == CostConstraint.FREE_ONLY:
        return resource.cost.type == CostType.FREE
    return True


def passes_logistics_filters(resource: Resource, assessment: PatientAssessment) -> bool:
    """Schedule, transportation and cost checks; all must pass"""
    return (
        schedule_compatible(resource, assessment)
        and transport_compatible(resource, assessment)
        and cost_compatible(resource, assessment)
    )


def filter_logistics(
    resources: Sequence[Resource],
    assessment: PatientAssessment
) -> List[Resource]:
    """Keep the resources the patient can attend, preserving order"""
    return [r for r in resources if passes_logistics_filters(r, assessment)]
