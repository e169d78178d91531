"""
Hard filters: clinician-set guardrails applied before any patient preference.
"""

from typing import List, Sequence

from tether.matching.models import (
    ALCOHOL_CONTRAINDICATION,
    ClinicalConstraints,
    Resource,
)


def passes_hard_filters(resource: Resource, constraints: ClinicalConstraints) -> bool:
    """
    Check a resource against the clinician's constraints.

    All checks must pass:
    - resource tier is one of the approved tiers
    - resource serves the primary diagnosis, or serves the general population
    - resource serves the patient's age group
    - no contraindicated environment is present: "alcohol" also rejects
      resources that serve alcohol, and no tag may appear verbatim in the
      atmosphere list

    Comorbidities are not checked.
    """
    if resource.tier not in constraints.approved_tiers:
        return False

    if not resource.serves_general_population:
        if constraints.primary_diagnosis not in resource.diagnoses_served:
            return False

    if constraints.age_group not in resource.age_groups:
        return False

    for contraindication in constraints.contraindicated_environments:
        if contraindication == ALCOHOL_CONTRAINDICATION and resource.alcohol_served:
            return False
        if contraindication in resource.atmosphere:
            return False

    return True


def filter_hard(
    resources: Sequence[Resource],
    constraints: ClinicalConstraints
) -> List[Resource]:
    """Keep the resources the clinician has cleared, preserving order"""
    return [r for r in resources if passes_hard_filters(r, constraints)]
