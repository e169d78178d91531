"""
Community care plans: the recommendations sent to a patient and the
patient's responses to them.

Patient responses are recorded here only; they do not influence scoring.
"""

import uuid
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from tether.exceptions import ValidationError
from tether.matching.engine import DEFAULT_LIMIT, match_resources
from tether.matching.models import (
    ClinicalConstraints,
    MatchedResource,
    PatientAssessment,
    Resource,
)
from tether.matching.serialization import rationale_to_json

logger = logging.getLogger(__name__)


class CarePlanStatus(str, Enum):
    """Status of a care plan"""
    DRAFT = "draft"
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    SENT = "sent"
    VIEWED = "viewed"


ALLOWED_TRANSITIONS = {
    CarePlanStatus.DRAFT: [CarePlanStatus.PENDING_REVIEW, CarePlanStatus.APPROVED],
    CarePlanStatus.PENDING_REVIEW: [CarePlanStatus.APPROVED],
    CarePlanStatus.APPROVED: [CarePlanStatus.SENT],
    CarePlanStatus.SENT: [CarePlanStatus.VIEWED],
    CarePlanStatus.VIEWED: [],
}


@dataclass
class PatientInterest:
    """A patient's response to one recommended resource"""
    resource_id: str
    interested: bool
    dismissal_reason: Optional[str] = None
    responded_at: datetime = field(default_factory=datetime.utcnow)


class CarePlan:
    """Represents the recommendations prepared for one patient."""

    def __init__(
        self,
        patient_id: str,
        clinician_id: str,
        constraints: ClinicalConstraints,
        assessment: PatientAssessment,
        recommendations: Optional[List[MatchedResource]] = None,
        plan_id: Optional[str] = None,
        created_at: Optional[datetime] = None
    ):
        self.id = plan_id or str(uuid.uuid4())
        self.patient_id = patient_id
        self.clinician_id = clinician_id
        self.constraints = constraints
        self.assessment = assessment
        self.recommendations = list(recommendations or [])
        self.status = CarePlanStatus.DRAFT
        self.created_at = created_at or datetime.utcnow()
        self.sent_at: Optional[datetime] = None
        self.viewed_at: Optional[datetime] = None
        self.patient_interest: List[PatientInterest] = []

    @classmethod
    def create(
        cls,
        clinician_id: str,
        resources: Sequence[Resource],
        constraints: ClinicalConstraints,
        assessment: PatientAssessment,
        limit: int = DEFAULT_LIMIT
    ) -> "CarePlan":
        """
        Build a draft care plan by matching the patient against resources.

        Args:
            clinician_id: Clinician preparing the plan
            resources: Candidate resources (a catalog snapshot)
            constraints: Clinician's guardrails for the patient
            assessment: Patient's self-reported preferences
            limit: Maximum number of recommendations

        Returns:
            Draft CarePlan holding the ranked recommendations
        """
        recommendations = match_resources(resources, constraints, assessment, limit)
        plan = cls(
            patient_id=constraints.patient_id,
            clinician_id=clinician_id,
            constraints=constraints,
            assessment=assessment,
            recommendations=recommendations,
        )
        logger.info(
            f"Created care plan {plan.id} for patient {plan.patient_id} "
            f"with {len(recommendations)} recommendations"
        )
        return plan

    def transition_to(self, status: CarePlanStatus) -> None:
        """
        Move the plan to a new status.

        Raises:
            ValidationError: If the status is unknown or the transition is
                not allowed
        """
        try:
            status = CarePlanStatus(status)
        except ValueError as e:
            raise ValidationError(
                f"Unknown care plan status: {status}",
                {"care_plan_id": self.id, "to": status}
            ) from e

        if status not in ALLOWED_TRANSITIONS[self.status]:
            raise ValidationError(
                f"Cannot move care plan from {self.status.value} to {status.value}",
                {"care_plan_id": self.id, "from": self.status.value, "to": status.value}
            )

        self.status = status
        if status == CarePlanStatus.SENT:
            self.sent_at = datetime.utcnow()
        elif status == CarePlanStatus.VIEWED:
            self.viewed_at = datetime.utcnow()

        logger.info(f"Care plan {self.id} moved to {status.value}")

    def mark_sent(self) -> None:
        self.transition_to(CarePlanStatus.SENT)

    def mark_viewed(self) -> None:
        self.transition_to(CarePlanStatus.VIEWED)

    def record_patient_interest(
        self,
        resource_id: str,
        interested: bool,
        dismissal_reason: Optional[str] = None
    ) -> PatientInterest:
        """
        Record the patient's response to a recommendation.

        A later response for the same resource replaces the earlier one.

        Raises:
            ValidationError: If the resource was not recommended in this plan
        """
        if resource_id not in [m.resource.id for m in self.recommendations]:
            raise ValidationError(
                f"Resource {resource_id} is not part of care plan {self.id}",
                {"care_plan_id": self.id, "resource_id": resource_id}
            )

        response = PatientInterest(
            resource_id=resource_id,
            interested=interested,
            dismissal_reason=None if interested else dismissal_reason,
        )
        self.patient_interest = [
            p for p in self.patient_interest if p.resource_id != resource_id
        ]
        self.patient_interest.append(response)

        logger.info(
            f"Recorded patient response for care plan {self.id}, "
            f"resource={resource_id}, interested={interested}"
        )
        return response

    def get_patient_interest(self, resource_id: str) -> Optional[PatientInterest]:
        for response in self.patient_interest:
            if response.resource_id == resource_id:
                return response
        return None

    def to_recommendation_records(self) -> List[Dict[str, Any]]:
        """
        One record per recommendation, ranked from 1, with the rationale
        serialized as JSON and any patient response attached.
        """
        records = []
        for rank, match in enumerate(self.recommendations, start=1):
            response = self.get_patient_interest(match.resource.id)
            records.append({
                "care_plan_id": self.id,
                "resource_id": match.resource.id,
                "rank": rank,
                "compatibility_score": match.compatibility_score,
                "match_rationale": rationale_to_json(match.match_rationale),
                "patient_interested": response.interested if response else None,
                "dismissal_reason": response.dismissal_reason if response else None,
                "responded_at": response.responded_at.isoformat() if response else None,
            })
        return records

    def to_dict(self) -> Dict[str, Any]:
        """Convert care plan to dictionary."""
        return {
            "id": self.id,
            "patient_id": self.patient_id,
            "clinician_id": self.clinician_id,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "sent_at": self.sent_at.isoformat() if self.sent_at else None,
            "viewed_at": self.viewed_at.isoformat() if self.viewed_at else None,
            "recommendations": self.to_recommendation_records(),
        }
