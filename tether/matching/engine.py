"""
Matching engine: hard filters, logistics filters, then scoring and ranking.
"""

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from tether.config import settings
from tether.matching.hard_filter import filter_hard
from tether.matching.logistics_filter import filter_logistics
from tether.matching.models import (
    ClinicalConstraints,
    MatchedResource,
    PatientAssessment,
    Resource,
)
from tether.matching.rationale import generate_rationale
from tether.matching.scoring import calculate_compatibility_score

if TYPE_CHECKING:
    from tether.catalog.resource_catalog import ResourceCatalog

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5


def match_resources(
    resources: Sequence[Resource],
    constraints: ClinicalConstraints,
    assessment: PatientAssessment,
    limit: int = DEFAULT_LIMIT
) -> List[MatchedResource]:
    """
    Rank the resources a patient is cleared for and can attend.

    Args:
        resources: Candidate resources
        constraints: Clinician's guardrails for the patient
        assessment: Patient's self-reported preferences
        limit: Maximum number of matches to return

    Returns:
        Matches sorted by descending compatibility score; equal scores keep
        their input order
    """
    # Stage 1: clinician constraints
    clinically_appropriate = filter_hard(resources, constraints)

    # Stage 2: patient logistics
    feasible = filter_logistics(clinically_appropriate, assessment)

    # Stage 3: score and explain
    scored = [
        MatchedResource(
            resource=resource,
            compatibility_score=calculate_compatibility_score(resource, assessment),
            match_rationale=generate_rationale(resource, assessment, constraints),
        )
        for resource in feasible
    ]

    # list.sort is stable
    scored.sort(key=lambda m: m.compatibility_score, reverse=True)

    logger.debug(
        f"Matched {len(resources)} candidates: {len(clinically_appropriate)} "
        f"passed hard filters, {len(feasible)} passed logistics filters"
    )

    return scored[:max(limit, 0)]


class MatchingEngine:
    """
    Runs the matching pipeline against a resource catalog.

    Each call works on an immutable snapshot of the catalog, so concurrent
    requests never observe a partially updated catalog.
    """

    def __init__(
        self,
        catalog: Optional["ResourceCatalog"] = None,
        verified_only: Optional[bool] = None
    ):
        """
        Initialize matching engine.

        Args:
            catalog: Resource catalog (creates the seed catalog if not provided)
            verified_only: Restrict matching to verified resources
                (defaults to MATCHING_VERIFIED_ONLY)
        """
        # Imported here: the catalog module depends on this package
        from tether.catalog.resource_catalog import ResourceCatalog

        self.catalog = catalog if catalog is not None else ResourceCatalog()
        self.verified_only = (
            settings.matching.verified_only if verified_only is None else verified_only
        )
        logger.info("MatchingEngine initialized")

    def candidates(self) -> List[Resource]:
        snapshot = self.catalog.snapshot()
        if self.verified_only:
            return [r for r in snapshot if r.verified]
        return list(snapshot)

    def match(
        self,
        constraints: ClinicalConstraints,
        assessment: PatientAssessment,
        limit: Optional[int] = None
    ) -> List[MatchedResource]:
        """
        Match a patient against the catalog.

        Args:
            constraints: Clinician's guardrails for the patient
            assessment: Patient's self-reported preferences
            limit: Maximum number of matches (defaults to MATCHING_DEFAULT_LIMIT)

        Returns:
            Ranked matches
        """
        if limit is None:
            limit = settings.matching.default_limit

        matches = match_resources(self.candidates(), constraints, assessment, limit)

        logger.info(
            f"Generated {len(matches)} matches for patient_id={constraints.patient_id}"
        )

        return matches
