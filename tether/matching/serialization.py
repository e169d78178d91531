"""
Dictionary forms of matching records, ready for JSON encoding.
"""

import json
from dataclasses import asdict
from enum import Enum
from datetime import datetime
from typing import Any, Dict, List

from tether.matching.models import MatchedResource, MatchRationale, Resource


def _plain(value: Any) -> Any:
    """Replace enum members and timestamps with JSON-friendly values"""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def resource_to_dict(resource: Resource) -> Dict[str, Any]:
    """
    Convert Resource object to a dictionary.

    Args:
        resource: Resource object

    Returns:
        Dictionary with nested sensory, schedule, location, cost and intake data
    """
    return _plain(asdict(resource))


def rationale_to_dict(rationale: MatchRationale) -> Dict[str, Any]:
    return {
        "summary": rationale.summary,
        "factors": [
            {
                "factor": f.factor,
                "contribution": _plain(f.contribution),
                "explanation": f.explanation,
            }
            for f in rationale.factors
        ],
    }


def rationale_to_json(rationale: MatchRationale) -> str:
    return json.dumps(rationale_to_dict(rationale))


def matched_resource_to_dict(match: MatchedResource) -> Dict[str, Any]:
    return {
        "resource": resource_to_dict(match.resource),
        "compatibility_score": match.compatibility_score,
        "match_rationale": rationale_to_dict(match.match_rationale),
    }


def matches_to_dicts(matches: List[MatchedResource]) -> List[Dict[str, Any]]:
    return [matched_resource_to_dict(m) for m in matches]
