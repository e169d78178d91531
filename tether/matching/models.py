"""
Domain records for resource matching.

Records are frozen dataclasses handed to the pipeline by value. Enumerations
are str-valued so raw strings compare equal to members; the pipeline compares
by value and never rejects an unrecognized literal.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union


GENERAL_POPULATION = "general"
ALCOHOL_CONTRAINDICATION = "alcohol"


class DiagnosisCategory(str, Enum):
    """Primary diagnosis categories"""
    ANXIETY = "anxiety"
    DEPRESSION = "depression"
    BIPOLAR = "bipolar"
    ADHD = "adhd"
    AUTISM = "autism"
    ALCOHOL_USE = "alcohol_use"
    OPIOID_USE = "opioid_use"
    OTHER_SUBSTANCE_USE = "other_substance_use"
    SCHIZOPHRENIA = "schizophrenia"
    PTSD = "ptsd"
    EATING_DISORDER = "eating_disorder"
    PERSONALITY_DISORDER = "personality_disorder"


class AgeGroup(str, Enum):
    """Age groups served"""
    ADOLESCENT = "adolescent"  # 13-17
    YOUNG_ADULT = "young_adult"  # 18-25
    MATURE_ADULT = "mature_adult"  # 26-54
    OLDER_ADULT = "older_adult"  # 55-69
    ELDER = "elder"  # 70+


class TreatmentPhase(str, Enum):
    ACUTE = "acute"
    EARLY_RECOVERY = "early_recovery"
    STABLE = "stable"


class ResourceTier(str, Enum):
    """Intensity of a resource"""
    CLINICAL = "clinical"  # IOP, PHP, group therapy, specialty clinics
    STRUCTURED_COMMUNITY = "structured_community"  # AA/NA, NAMI, clubhouse
    LIFESTYLE = "lifestyle"  # fitness, hobbies, volunteering, faith


class TreatmentGoal(str, Enum):
    REDUCE_ISOLATION = "reduce_isolation"
    BUILD_ROUTINE = "build_routine"
    DEVELOP_SKILLS = "develop_skills"
    EXPAND_SUPPORT = "expand_support"
    MAINTAIN_SOBRIETY = "maintain_sobriety"
    INCREASE_ACTIVITY = "increase_activity"


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    VARIES = "varies"


class GroupSize(str, Enum):
    """Group sizes, declared smallest first"""
    INDIVIDUAL = "individual"  # 1-on-1
    SMALL = "small"  # 2-6
    MEDIUM = "medium"  # 7-15
    LARGE = "large"  # 15+


class InteractionStyle(str, Enum):
    FACE_TO_FACE = "face_to_face"  # direct conversation
    SIDE_BY_SIDE = "side_by_side"  # activity-based, less talking
    ONLINE_SYNC = "online_sync"  # video calls
    ONLINE_ASYNC = "online_async"  # forums, messaging


class CommitmentLevel(str, Enum):
    DROP_IN = "drop_in"
    SHORT_SERIES = "short_series"  # 4-8 weeks
    ONGOING = "ongoing"


class TransportAccess(str, Enum):
    DRIVES = "drives"
    PUBLIC_TRANSIT = "public_transit"
    NEEDS_RIDES = "needs_rides"
    WALKING_ONLY = "walking_only"


class CostConstraint(str, Enum):
    FREE_ONLY = "free_only"
    LOW_COST = "low_cost"  # sliding scale acceptable
    COST_FLEXIBLE = "cost_flexible"


class NoiseLevel(str, Enum):
    QUIET = "quiet"
    MODERATE = "moderate"
    LOUD = "loud"


class Lighting(str, Enum):
    DIM = "dim"
    NORMAL = "normal"
    BRIGHT = "bright"


class Crowding(str, Enum):
    SPACIOUS = "spacious"
    MODERATE = "moderate"
    CROWDED = "crowded"


class CostType(str, Enum):
    FREE = "free"
    SLIDING_SCALE = "sliding_scale"
    FIXED = "fixed"


class IntakeType(str, Enum):
    WALK_IN = "walk_in"
    REGISTRATION = "registration"
    REFERRAL = "referral"
    WAITLIST = "waitlist"


class FacilitatorCredentials(str, Enum):
    LICENSED = "licensed"
    CERTIFIED_PEER = "certified_peer"
    TRAINED_VOLUNTEER = "trained_volunteer"
    NONE = "none"


class Contribution(str, Enum):
    """How a rationale factor bears on the match"""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    SLIGHT_CONCERN = "slight_concern"


@dataclass(frozen=True)
class SensoryProfile:
    noise_level: str = NoiseLevel.MODERATE
    lighting: str = Lighting.NORMAL
    crowding: str = Crowding.MODERATE


@dataclass(frozen=True)
class Schedule:
    days_offered: List[str] = field(default_factory=list)
    time_slots: List[str] = field(default_factory=list)
    session_duration: str = ""


@dataclass(frozen=True)
class Location:
    address: str = ""
    transit_accessible: bool = False
    parking_available: bool = False


@dataclass(frozen=True)
class Cost:
    type: str = CostType.FREE
    amount: Optional[float] = None
    insurance_accepted: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Intake:
    type: str = IntakeType.WALK_IN
    process: Optional[str] = None


@dataclass(frozen=True)
class Resource:
    """Community organization that can be recommended to a patient"""
    id: str
    name: str
    description: str
    tier: str
    diagnoses_served: Union[List[str], str]  # or GENERAL_POPULATION
    age_groups: List[str]
    group_size: str
    interaction_style: str
    structure_level: str
    sensory_profile: SensoryProfile = field(default_factory=SensoryProfile)
    atmosphere: List[str] = field(default_factory=list)
    schedule: Schedule = field(default_factory=Schedule)
    location: Location = field(default_factory=Location)
    cost: Cost = field(default_factory=Cost)
    intake: Intake = field(default_factory=Intake)
    alcohol_served: bool = False
    facilitator_credentials: str = FacilitatorCredentials.NONE
    keywords: List[str] = field(default_factory=list)
    verified: bool = False
    last_verified: Optional[datetime] = None

    @property
    def serves_general_population(self) -> bool:
        return self.diagnoses_served == GENERAL_POPULATION


@dataclass(frozen=True)
class ClinicalConstraints:
    """A clinician's guardrails for one patient"""
    patient_id: str
    primary_diagnosis: str
    age_group: str
    treatment_phase: str
    approved_tiers: List[str]
    comorbidities: List[str] = field(default_factory=list)
    treatment_goals: List[str] = field(default_factory=list)
    contraindicated_environments: List[str] = field(default_factory=list)
    diagnosis_specific: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class Availability:
    weekday_mornings: bool = False
    weekday_afternoons: bool = False
    weekday_evenings: bool = False
    weekends: bool = False


@dataclass(frozen=True)
class PatientAssessment:
    """A patient's self-reported preferences"""
    availability: Availability
    transport_access: str
    cost_constraint: str
    energy_pattern: str
    group_size_preference: str
    interaction_style: str
    commitment_level: str
    max_distance_miles: Optional[float] = None  # not consulted by filtering
    interest_categories: List[str] = field(default_factory=list)
    past_interests: List[str] = field(default_factory=list)
    diagnosis_specific: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class RationaleFactor:
    factor: str
    contribution: Contribution
    explanation: str


@dataclass(frozen=True)
class MatchRationale:
    """Explanation shown alongside a recommendation"""
    summary: str
    factors: List[RationaleFactor] = field(default_factory=list)


@dataclass(frozen=True)
class MatchedResource:
    """A resource with its compatibility score (0-100) and rationale"""
    resource: Resource
    compatibility_score: int
    match_rationale: MatchRationale
