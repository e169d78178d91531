"""
Resource catalog for community mental-health resources.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from tether.api.models import ResourceSchema
from tether.exceptions import CatalogError
from tether.matching.models import (
    GENERAL_POPULATION,
    AgeGroup,
    CommitmentLevel,
    Cost,
    CostType,
    Crowding,
    DiagnosisCategory,
    FacilitatorCredentials,
    GroupSize,
    Intake,
    IntakeType,
    InteractionStyle,
    Lighting,
    Location,
    NoiseLevel,
    Resource,
    ResourceTier,
    Schedule,
    SensoryProfile,
    TimeOfDay,
)

logger = logging.getLogger(__name__)

ADULT_AGE_GROUPS = [
    AgeGroup.YOUNG_ADULT,
    AgeGroup.MATURE_ADULT,
    AgeGroup.OLDER_ADULT,
    AgeGroup.ELDER,
]


class ResourceCatalog:
    """
    Catalog of community resources with filtering and retrieval capabilities.

    The pipeline never reads the catalog directly; callers take a snapshot
    and hand it over by value.
    """

    def __init__(
        self,
        resources: Optional[Iterable[Resource]] = None,
        load_defaults: bool = True
    ):
        """
        Initialize resource catalog.

        Args:
            resources: Resources to add after the defaults
            load_defaults: Seed the catalog with the default resources
        """
        self.resources: Dict[str, Resource] = {}
        if load_defaults:
            self._initialize_default_resources()
        for resource in resources or []:
            self.add_resource(resource)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "ResourceCatalog":
        """
        Load a catalog from a JSON file.

        The file holds either a list of resources or an object with a
        "resources" list. Every record is validated before the catalog is
        built; the seed resources are not loaded.

        Raises:
            CatalogError: If the file cannot be read or a record is invalid
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(
                f"Could not read resource catalog {path}",
                {"path": str(path), "error": str(e)}
            ) from e

        records = data.get("resources") if isinstance(data, dict) else data
        if not isinstance(records, list):
            raise CatalogError(
                f"Resource catalog {path} must contain a list of resources",
                {"path": str(path)}
            )

        resources = []
        for index, record in enumerate(records):
            try:
                resources.append(ResourceSchema.model_validate(record).to_domain())
            except PydanticValidationError as e:
                raise CatalogError(
                    f"Invalid resource at index {index} in {path}",
                    {"path": str(path), "index": index, "errors": json.loads(e.json(include_url=False))}
                ) from e

        logger.info(f"Loaded {len(resources)} resources from {path}")
        return cls(resources, load_defaults=False)

    def _initialize_default_resources(self):
        """Initialize catalog with default community resources"""

        # Clinical
        self.add_resource(Resource(
            id="iop_evening_program",
            name="Evening Intensive Outpatient Program",
            description="Structured group therapy three evenings a week for adults stepping down from inpatient care",
            tier=ResourceTier.CLINICAL,
            diagnoses_served=[
                DiagnosisCategory.DEPRESSION,
                DiagnosisCategory.ANXIETY,
                DiagnosisCategory.BIPOLAR,
                DiagnosisCategory.PTSD,
            ],
            age_groups=[AgeGroup.YOUNG_ADULT, AgeGroup.MATURE_ADULT, AgeGroup.OLDER_ADULT],
            group_size=GroupSize.MEDIUM,
            interaction_style=InteractionStyle.FACE_TO_FACE,
            structure_level=CommitmentLevel.SHORT_SERIES,
            sensory_profile=SensoryProfile(NoiseLevel.QUIET, Lighting.NORMAL, Crowding.MODERATE),
            atmosphere=["structured", "clinical"],
            schedule=Schedule(["Monday", "Wednesday", "Thursday"], [TimeOfDay.EVENING], "3 hours"),
            location=Location("200 Health Center Way", transit_accessible=True, parking_available=True),
            cost=Cost(CostType.FIXED, amount=40.0, insurance_accepted=["Medicaid", "Medicare", "Aetna"]),
            intake=Intake(IntakeType.REFERRAL, "Clinician referral and phone screening"),
            facilitator_credentials=FacilitatorCredentials.LICENSED,
            keywords=["therapy", "skills", "coping"],
            verified=True,
        ))

        self.add_resource(Resource(
            id="dbt_skills_group",
            name="DBT Skills Group",
            description="Weekly dialectical behavior therapy skills training",
            tier=ResourceTier.CLINICAL,
            diagnoses_served=[
                DiagnosisCategory.PERSONALITY_DISORDER,
                DiagnosisCategory.DEPRESSION,
                DiagnosisCategory.EATING_DISORDER,
            ],
            age_groups=[AgeGroup.ADOLESCENT, AgeGroup.YOUNG_ADULT, AgeGroup.MATURE_ADULT],
            group_size=GroupSize.SMALL,
            interaction_style=InteractionStyle.FACE_TO_FACE,
            structure_level=CommitmentLevel.SHORT_SERIES,
            sensory_profile=SensoryProfile(NoiseLevel.QUIET, Lighting.NORMAL, Crowding.SPACIOUS),
            atmosphere=["structured", "supportive"],
            schedule=Schedule(["Tuesday"], [TimeOfDay.AFTERNOON], "2 hours"),
            location=Location("45 Elm Street, Suite 3", transit_accessible=True),
            cost=Cost(CostType.SLIDING_SCALE, amount=25.0, insurance_accepted=["Medicaid"]),
            intake=Intake(IntakeType.WAITLIST, "Intake interview required"),
            facilitator_credentials=FacilitatorCredentials.LICENSED,
            keywords=["dbt", "emotional regulation", "mindfulness"],
            verified=True,
        ))

        # Structured community
        self.add_resource(Resource(
            id="nami_connection",
            name="NAMI Connection Recovery Support Group",
            description="Free peer-led recovery support group for adults living with mental health conditions",
            tier=ResourceTier.STRUCTURED_COMMUNITY,
            diagnoses_served=GENERAL_POPULATION,
            age_groups=ADULT_AGE_GROUPS,
            group_size=GroupSize.SMALL,
            interaction_style=InteractionStyle.FACE_TO_FACE,
            structure_level=CommitmentLevel.DROP_IN,
            sensory_profile=SensoryProfile(NoiseLevel.QUIET, Lighting.NORMAL, Crowding.SPACIOUS),
            atmosphere=["welcoming", "peer-led"],
            schedule=Schedule(["Thursday"], [TimeOfDay.EVENING], "90 minutes"),
            location=Location("Community Library, Room B", transit_accessible=True, parking_available=True),
            cost=Cost(CostType.FREE),
            intake=Intake(IntakeType.WALK_IN),
            facilitator_credentials=FacilitatorCredentials.CERTIFIED_PEER,
            keywords=["peer support", "recovery", "conversation"],
            verified=True,
        ))

        self.add_resource(Resource(
            id="aa_morning_meeting",
            name="Sunrise AA Meeting",
            description="Open Alcoholics Anonymous meeting before the workday",
            tier=ResourceTier.STRUCTURED_COMMUNITY,
            diagnoses_served=[DiagnosisCategory.ALCOHOL_USE, DiagnosisCategory.OTHER_SUBSTANCE_USE],
            age_groups=ADULT_AGE_GROUPS,
            group_size=GroupSize.MEDIUM,
            interaction_style=InteractionStyle.FACE_TO_FACE,
            structure_level=CommitmentLevel.ONGOING,
            sensory_profile=SensoryProfile(NoiseLevel.MODERATE, Lighting.NORMAL, Crowding.MODERATE),
            atmosphere=["welcoming", "spiritual"],
            schedule=Schedule(["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"], [TimeOfDay.MORNING], "1 hour"),
            location=Location("St. Mark's Church Hall", transit_accessible=True, parking_available=True),
            cost=Cost(CostType.FREE),
            intake=Intake(IntakeType.WALK_IN),
            facilitator_credentials=FacilitatorCredentials.TRAINED_VOLUNTEER,
            keywords=["sobriety", "twelve steps", "fellowship"],
            verified=True,
        ))

        self.add_resource(Resource(
            id="clubhouse_program",
            name="Harbor Clubhouse",
            description="Work-ordered day clubhouse offering vocational support and community",
            tier=ResourceTier.STRUCTURED_COMMUNITY,
            diagnoses_served=[
                DiagnosisCategory.SCHIZOPHRENIA,
                DiagnosisCategory.BIPOLAR,
                DiagnosisCategory.DEPRESSION,
            ],
            age_groups=ADULT_AGE_GROUPS,
            group_size=GroupSize.LARGE,
            interaction_style=InteractionStyle.SIDE_BY_SIDE,
            structure_level=CommitmentLevel.ONGOING,
            sensory_profile=SensoryProfile(NoiseLevel.MODERATE, Lighting.BRIGHT, Crowding.MODERATE),
            atmosphere=["structured", "welcoming"],
            schedule=Schedule(["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"], [TimeOfDay.MORNING, TimeOfDay.AFTERNOON], "6 hours"),
            location=Location("18 Harbor Road", transit_accessible=True),
            cost=Cost(CostType.FREE),
            intake=Intake(IntakeType.REGISTRATION, "Orientation tour then membership form"),
            facilitator_credentials=FacilitatorCredentials.CERTIFIED_PEER,
            keywords=["vocational", "cooking", "gardening", "routine"],
            verified=True,
        ))

        self.add_resource(Resource(
            id="online_peer_forum",
            name="Anxiety Peer Forum",
            description="Moderated online forum for sharing coping strategies",
            tier=ResourceTier.STRUCTURED_COMMUNITY,
            diagnoses_served=[DiagnosisCategory.ANXIETY, DiagnosisCategory.PTSD],
            age_groups=[AgeGroup.ADOLESCENT] + ADULT_AGE_GROUPS,
            group_size=GroupSize.LARGE,
            interaction_style=InteractionStyle.ONLINE_ASYNC,
            structure_level=CommitmentLevel.DROP_IN,
            sensory_profile=SensoryProfile(NoiseLevel.QUIET, Lighting.NORMAL, Crowding.SPACIOUS),
            atmosphere=["anonymous", "supportive"],
            schedule=Schedule([], [TimeOfDay.MORNING, TimeOfDay.AFTERNOON, TimeOfDay.EVENING], "self-paced"),
            location=Location("online", transit_accessible=True),
            cost=Cost(CostType.FREE),
            intake=Intake(IntakeType.REGISTRATION, "Create an account"),
            facilitator_credentials=FacilitatorCredentials.TRAINED_VOLUNTEER,
            keywords=["writing", "coping", "peer support"],
            verified=False,
        ))

        # Lifestyle
        self.add_resource(Resource(
            id="community_hiking_club",
            name="Trailblazers Hiking Club",
            description="Beginner-friendly group hikes on local trails",
            tier=ResourceTier.LIFESTYLE,
            diagnoses_served=GENERAL_POPULATION,
            age_groups=ADULT_AGE_GROUPS,
            group_size=GroupSize.SMALL,
            interaction_style=InteractionStyle.SIDE_BY_SIDE,
            structure_level=CommitmentLevel.DROP_IN,
            sensory_profile=SensoryProfile(NoiseLevel.QUIET, Lighting.NORMAL, Crowding.SPACIOUS),
            atmosphere=["outdoors", "welcoming"],
            schedule=Schedule(["Saturday"], [TimeOfDay.MORNING], "3 hours"),
            location=Location("Riverside Park trailhead", transit_accessible=False, parking_available=True),
            cost=Cost(CostType.FREE),
            intake=Intake(IntakeType.WALK_IN),
            facilitator_credentials=FacilitatorCredentials.TRAINED_VOLUNTEER,
            keywords=["hiking", "nature", "walking", "outdoors"],
            verified=True,
        ))

        self.add_resource(Resource(
            id="pottery_studio",
            name="Open Studio Pottery Nights",
            description="Hands-on wheel and hand-building sessions with a small group",
            tier=ResourceTier.LIFESTYLE,
            diagnoses_served=GENERAL_POPULATION,
            age_groups=ADULT_AGE_GROUPS,
            group_size=GroupSize.SMALL,
            interaction_style=InteractionStyle.SIDE_BY_SIDE,
            structure_level=CommitmentLevel.SHORT_SERIES,
            sensory_profile=SensoryProfile(NoiseLevel.MODERATE, Lighting.BRIGHT, Crowding.MODERATE),
            atmosphere=["creative", "relaxed"],
            schedule=Schedule(["Wednesday"], [TimeOfDay.EVENING], "2 hours"),
            location=Location("12 Clay Street", transit_accessible=True),
            cost=Cost(CostType.SLIDING_SCALE, amount=15.0),
            intake=Intake(IntakeType.REGISTRATION),
            facilitator_credentials=FacilitatorCredentials.NONE,
            keywords=["pottery", "art", "crafts"],
            verified=True,
        ))

        self.add_resource(Resource(
            id="trivia_pub_night",
            name="Tuesday Trivia League",
            description="Team trivia at a neighborhood pub",
            tier=ResourceTier.LIFESTYLE,
            diagnoses_served=GENERAL_POPULATION,
            age_groups=[AgeGroup.YOUNG_ADULT, AgeGroup.MATURE_ADULT],
            group_size=GroupSize.MEDIUM,
            interaction_style=InteractionStyle.FACE_TO_FACE,
            structure_level=CommitmentLevel.DROP_IN,
            sensory_profile=SensoryProfile(NoiseLevel.LOUD, Lighting.DIM, Crowding.CROWDED),
            atmosphere=["competitive", "loud music"],
            schedule=Schedule(["Tuesday"], [TimeOfDay.EVENING], "2 hours"),
            location=Location("The Anchor Pub", transit_accessible=True),
            cost=Cost(CostType.FREE),
            intake=Intake(IntakeType.WALK_IN),
            alcohol_served=True,
            facilitator_credentials=FacilitatorCredentials.NONE,
            keywords=["trivia", "games", "social"],
            verified=True,
        ))

    def add_resource(self, resource: Resource):
        """Add a resource to the catalog, replacing any with the same id"""
        self.resources[resource.id] = resource

    def get_resource(self, resource_id: str) -> Optional[Resource]:
        """Get a specific resource by ID"""
        return self.resources.get(resource_id)

    def filter_by_tier(self, tier: str) -> List[Resource]:
        """Filter resources by tier"""
        return [
            resource for resource in self.resources.values()
            if resource.tier == tier
        ]

    def get_all_resources(self, verified_only: bool = False) -> List[Resource]:
        """Get all resources in insertion order"""
        return [
            resource for resource in self.resources.values()
            if resource.verified or not verified_only
        ]

    def snapshot(self) -> Tuple[Resource, ...]:
        """Immutable view of the current resources for one matching call"""
        return tuple(self.resources.values())

    def __len__(self) -> int:
        return len(self.resources)
