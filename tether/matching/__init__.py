"""
Matching pipeline for community mental-health resources.
"""

from tether.matching.models import (
    GENERAL_POPULATION,
    ALCOHOL_CONTRAINDICATION,
    Availability,
    ClinicalConstraints,
    Contribution,
    Cost,
    Intake,
    Location,
    MatchedResource,
    MatchRationale,
    PatientAssessment,
    RationaleFactor,
    Resource,
    ResourceTier,
    Schedule,
    SensoryProfile,
)
from tether.matching.hard_filter import filter_hard, passes_hard_filters
from tether.matching.logistics_filter import filter_logistics, passes_logistics_filters
from tether.matching.scoring import calculate_compatibility_score, score_breakdown
from tether.matching.rationale import generate_rationale
from tether.matching.engine import MatchingEngine, match_resources

__all__ = [
    'GENERAL_POPULATION',
    'ALCOHOL_CONTRAINDICATION',
    'Availability',
    'ClinicalConstraints',
    'Contribution',
    'Cost',
    'Intake',
    'Location',
    'MatchedResource',
    'MatchRationale',
    'PatientAssessment',
    'RationaleFactor',
    'Resource',
    'ResourceTier',
    'Schedule',
    'SensoryProfile',
    'filter_hard',
    'passes_hard_filters',
    'filter_logistics',
    'passes_logistics_filters',
    'calculate_compatibility_score',
    'score_breakdown',
    'generate_rationale',
    'MatchingEngine',
    'match_resources',
]
