"""
Care plans: recommendations delivered to a patient and their responses.
"""

from tether.care_plans.care_plan import (
    CarePlan,
    CarePlanStatus,
    PatientInterest
)

__all__ = [
    'CarePlan',
    'CarePlanStatus',
    'PatientInterest'
]
