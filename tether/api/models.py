"""Pydantic models for API request/response validation

The record schemas double as the construction-time validators for catalog
files and CLI input: they enforce enum membership and the non-empty
invariants, then convert into the frozen domain records via ``to_domain``.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field, field_validator, model_validator

from tether.matching import models as domain
from tether.matching.models import (
    AgeGroup,
    CommitmentLevel,
    Contribution,
    CostConstraint,
    CostType,
    Crowding,
    DiagnosisCategory,
    FacilitatorCredentials,
    GroupSize,
    IntakeType,
    InteractionStyle,
    Lighting,
    NoiseLevel,
    ResourceTier,
    TimeOfDay,
    TransportAccess,
    TreatmentGoal,
    TreatmentPhase,
)


class SensoryProfileSchema(BaseModel):
    noise_level: NoiseLevel = NoiseLevel.MODERATE
    lighting: Lighting = Lighting.NORMAL
    crowding: Crowding = Crowding.MODERATE


class ScheduleSchema(BaseModel):
    days_offered: List[str] = Field(default_factory=list)
    time_slots: List[TimeOfDay] = Field(default_factory=list)
    session_duration: str = Field(default="", description="e.g. '90 minutes'")


class LocationSchema(BaseModel):
    address: str = ""
    transit_accessible: bool = False
    parking_available: bool = False


class CostSchema(BaseModel):
    type: CostType = CostType.FREE
    amount: Optional[float] = Field(None, ge=0)
    insurance_accepted: List[str] = Field(default_factory=list)


class IntakeSchema(BaseModel):
    type: IntakeType = IntakeType.WALK_IN
    process: Optional[str] = None


class ResourceSchema(BaseModel):
    """Community resource as curated by administrators"""
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = ""
    tier: ResourceTier
    diagnoses_served: Union[Literal["general"], List[DiagnosisCategory]] = Field(
        ...,
        description="Diagnoses served, or 'general' for the general population"
    )
    age_groups: List[AgeGroup] = Field(..., min_length=1)
    group_size: GroupSize
    interaction_style: InteractionStyle
    structure_level: CommitmentLevel
    sensory_profile: SensoryProfileSchema = Field(default_factory=SensoryProfileSchema)
    atmosphere: List[str] = Field(default_factory=list)
    schedule: ScheduleSchema = Field(default_factory=ScheduleSchema)
    location: LocationSchema = Field(default_factory=LocationSchema)
    cost: CostSchema = Field(default_factory=CostSchema)
    intake: IntakeSchema = Field(default_factory=IntakeSchema)
    alcohol_served: bool = False
    facilitator_credentials: FacilitatorCredentials = FacilitatorCredentials.NONE
    keywords: List[str] = Field(default_factory=list)
    verified: bool = False
    last_verified: Optional[datetime] = None

    @field_validator('diagnoses_served')
    @classmethod
    def validate_diagnoses_served(cls, v):
        """Diagnosis list must be non-empty unless serving the general population"""
        if isinstance(v, list) and not v:
            raise ValueError("diagnoses_served cannot be empty; use 'general' instead")
        return v

    def to_domain(self) -> domain.Resource:
        return domain.Resource(
            id=self.id,
            name=self.name,
            description=self.description,
            tier=self.tier,
            diagnoses_served=(
                domain.GENERAL_POPULATION
                if self.diagnoses_served == domain.GENERAL_POPULATION
                else list(self.diagnoses_served)
            ),
            age_groups=list(self.age_groups),
            group_size=self.group_size,
            interaction_style=self.interaction_style,
            structure_level=self.structure_level,
            sensory_profile=domain.SensoryProfile(**self.sensory_profile.model_dump()),
            atmosphere=list(self.atmosphere),
            schedule=domain.Schedule(**self.schedule.model_dump()),
            location=domain.Location(**self.location.model_dump()),
            cost=domain.Cost(**self.cost.model_dump()),
            intake=domain.Intake(**self.intake.model_dump()),
            alcohol_served=self.alcohol_served,
            facilitator_credentials=self.facilitator_credentials,
            keywords=list(self.keywords),
            verified=self.verified,
            last_verified=self.last_verified,
        )


class ClinicalConstraintsSchema(BaseModel):
    """Clinician intake: guardrails for one patient"""
    patient_id: str = Field(..., min_length=1, max_length=64)
    primary_diagnosis: DiagnosisCategory
    comorbidities: List[DiagnosisCategory] = Field(default_factory=list)
    age_group: AgeGroup
    treatment_phase: TreatmentPhase
    approved_tiers: List[ResourceTier] = Field(..., min_length=1)
    treatment_goals: List[TreatmentGoal] = Field(default_factory=list)
    contraindicated_environments: List[str] = Field(
        default_factory=list,
        description="Atmosphere tags to avoid; 'alcohol' excludes venues serving alcohol"
    )
    diagnosis_specific: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None

    @field_validator('patient_id')
    @classmethod
    def validate_patient_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("patient_id cannot be empty")
        return v.strip()

    def to_domain(self) -> domain.ClinicalConstraints:
        return domain.ClinicalConstraints(
            patient_id=self.patient_id,
            primary_diagnosis=self.primary_diagnosis,
            age_group=self.age_group,
            treatment_phase=self.treatment_phase,
            approved_tiers=list(self.approved_tiers),
            comorbidities=list(self.comorbidities),
            treatment_goals=list(self.treatment_goals),
            contraindicated_environments=list(self.contraindicated_environments),
            diagnosis_specific=self.diagnosis_specific,
            notes=self.notes,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "patient_id": "p-1001",
                "primary_diagnosis": "depression",
                "comorbidities": ["anxiety"],
                "age_group": "young_adult",
                "treatment_phase": "stable",
                "approved_tiers": ["structured_community", "lifestyle"],
                "treatment_goals": ["reduce_isolation"],
                "contraindicated_environments": ["alcohol"]
            }
        }


class AvailabilitySchema(BaseModel):
    weekday_mornings: bool = False
    weekday_afternoons: bool = False
    weekday_evenings: bool = False
    weekends: bool = False


class PatientAssessmentSchema(BaseModel):
    """Patient self-assessment of logistics and social preferences"""
    availability: AvailabilitySchema = Field(default_factory=AvailabilitySchema)
    transport_access: TransportAccess
    max_distance_miles: Optional[float] = Field(None, ge=0)
    cost_constraint: CostConstraint
    energy_pattern: TimeOfDay
    group_size_preference: GroupSize
    interaction_style: InteractionStyle
    commitment_level: CommitmentLevel
    interest_categories: List[str] = Field(default_factory=list)
    past_interests: List[str] = Field(default_factory=list)
    diagnosis_specific: Optional[Dict[str, Any]] = None

    def to_domain(self) -> domain.PatientAssessment:
        return domain.PatientAssessment(
            availability=domain.Availability(**self.availability.model_dump()),
            transport_access=self.transport_access,
            max_distance_miles=self.max_distance_miles,
            cost_constraint=self.cost_constraint,
            energy_pattern=self.energy_pattern,
            group_size_preference=self.group_size_preference,
            interaction_style=self.interaction_style,
            commitment_level=self.commitment_level,
            interest_categories=list(self.interest_categories),
            past_interests=list(self.past_interests),
            diagnosis_specific=self.diagnosis_specific,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "availability": {"weekday_evenings": True},
                "transport_access": "public_transit",
                "max_distance_miles": 10,
                "cost_constraint": "low_cost",
                "energy_pattern": "evening",
                "group_size_preference": "small",
                "interaction_style": "side_by_side",
                "commitment_level": "drop_in",
                "interest_categories": ["outdoors"],
                "past_interests": ["hiking"]
            }
        }


class MatchRequest(BaseModel):
    """Request model for the match endpoint"""
    constraints: ClinicalConstraintsSchema
    assessment: PatientAssessmentSchema
    limit: Optional[int] = Field(None, ge=1, description="Maximum matches (server default if omitted)")
    resources: Optional[List[ResourceSchema]] = Field(
        None,
        description="Candidate resources; the server catalog is used if omitted"
    )

    @model_validator(mode="after")
    def validate_unique_resource_ids(self) -> "MatchRequest":
        if self.resources:
            ids = [r.id for r in self.resources]
            if len(ids) != len(set(ids)):
                raise ValueError("resource ids must be unique")
        return self


class RationaleFactorResponse(BaseModel):
    factor: str
    contribution: Contribution
    explanation: str


class MatchRationaleResponse(BaseModel):
    summary: str
    factors: List[RationaleFactorResponse] = Field(default_factory=list)


class MatchedResourceResponse(BaseModel):
    """One ranked recommendation"""
    rank: int = Field(..., ge=1)
    resource: Dict[str, Any]
    compatibility_score: int = Field(..., ge=0, le=100)
    match_rationale: MatchRationaleResponse


class MatchResponse(BaseModel):
    """Response model for the match endpoint"""
    patient_id: str
    matches: List[MatchedResourceResponse]
    total_candidates: int = Field(..., ge=0)
    count: int = Field(..., ge=0)
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ErrorResponse(BaseModel):
    """Error response model"""
    error: str = Field(
        ...,
        description="Error type"
    )
    message: str = Field(
        ...,
        description="Error message"
    )
    details: Optional[Dict] = Field(
        None,
        description="Additional error details"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Error timestamp"
    )
