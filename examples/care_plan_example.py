"""
Example usage of the matching engine and care plans.

This example demonstrates:
1. Matching a patient against the seed catalog
2. Reading scores and rationales
3. Building a care plan and moving it through review
"""

from tether.care_plans import CarePlan, CarePlanStatus
from tether.catalog import ResourceCatalog
from tether.matching import (
    Availability,
    ClinicalConstraints,
    MatchingEngine,
    PatientAssessment,
)


def build_patient():
    constraints = ClinicalConstraints(
        patient_id="example_patient_001",
        primary_diagnosis="depression",
        age_group="young_adult",
        treatment_phase="stable",
        approved_tiers=["structured_community", "lifestyle"],
        contraindicated_environments=["alcohol"],
    )
    assessment = PatientAssessment(
        availability=Availability(weekday_evenings=True, weekends=True),
        transport_access="public_transit",
        cost_constraint="low_cost",
        energy_pattern="evening",
        group_size_preference="small",
        interaction_style="side_by_side",
        commitment_level="drop_in",
        interest_categories=["art", "outdoors"],
        past_interests=["hiking"],
    )
    return constraints, assessment


def example_matching():
    """Match one patient and print the ranked recommendations."""
    print("=" * 60)
    print("Example 1: Matching")
    print("=" * 60)

    constraints, assessment = build_patient()
    engine = MatchingEngine()

    for rank, match in enumerate(engine.match(constraints, assessment), start=1):
        print(f"{rank}. {match.resource.name} ({match.compatibility_score})")
        print(f"   {match.match_rationale.summary}")
        for factor in match.match_rationale.factors:
            print(f"   - {factor.factor}: {factor.explanation}")


def example_care_plan():
    """Create a care plan, send it and record patient feedback."""
    print("\n" + "=" * 60)
    print("Example 2: Care Plan Lifecycle")
    print("=" * 60)

    constraints, assessment = build_patient()
    plan = CarePlan.create(
        clinician_id="clinician_001",
        resources=ResourceCatalog().get_all_resources(verified_only=True),
        constraints=constraints,
        assessment=assessment,
        limit=3,
    )

    plan.transition_to(CarePlanStatus.APPROVED)
    plan.mark_sent()
    plan.mark_viewed()

    first, *rest = plan.recommendations
    plan.record_patient_interest(first.resource.id, interested=True)
    for match in rest:
        plan.record_patient_interest(match.resource.id, interested=False, dismissal_reason="Schedule conflict")

    print(f"Care plan {plan.id} is {plan.status.value}")
    for record in plan.to_recommendation_records():
        print(f"  #{record['rank']} {record['resource_id']}: interested={record['patient_interested']}")


if __name__ == "__main__":
    example_matching()
    example_care_plan()
