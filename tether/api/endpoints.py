"""Core API endpoints for Tether"""

import logging
import time
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from tether import __version__
from tether.api.metrics import MATCH_COUNT, MATCH_DURATION
from tether.api.models import (
    ErrorResponse,
    MatchedResourceResponse,
    MatchRequest,
    MatchResponse,
)
from tether.catalog.resource_catalog import ResourceCatalog
from tether.config import settings
from tether.exceptions import ValidationError
from tether.matching.engine import MatchingEngine, match_resources
from tether.matching.models import ResourceTier
from tether.matching.serialization import (
    matched_resource_to_dict,
    resource_to_dict,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Global engine (in production, use dependency injection)
_matching_engine: Optional[MatchingEngine] = None


def initialize_engine() -> MatchingEngine:
    """Build the matching engine from the configured catalog"""
    global _matching_engine

    if settings.matching.catalog_path:
        catalog = ResourceCatalog.from_json_file(settings.matching.catalog_path)
    else:
        catalog = ResourceCatalog()

    _matching_engine = MatchingEngine(catalog)
    logger.info(f"Matching engine ready with {len(catalog)} resources")
    return _matching_engine


def get_matching_engine() -> MatchingEngine:
    if _matching_engine is None:
        return initialize_engine()
    return _matching_engine


@router.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Tether Resource Matching",
        "version": __version__,
        "status": "operational",
        "docs": "/docs"
    }


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": time.time()
    }


@router.get("/resources")
async def list_resources(
    tier: Optional[ResourceTier] = Query(None, description="Only resources of this tier"),
    verified_only: bool = Query(False, description="Only verified resources"),
    engine: MatchingEngine = Depends(get_matching_engine)
) -> List[Dict[str, Any]]:
    """List catalog resources"""
    resources = engine.catalog.get_all_resources(verified_only=verified_only)
    if tier is not None:
        resources = [r for r in resources if r.tier == tier]
    return [resource_to_dict(r) for r in resources]


@router.get(
    "/resources/{resource_id}",
    responses={404: {"model": ErrorResponse, "description": "Unknown resource"}}
)
async def get_resource(
    resource_id: str,
    engine: MatchingEngine = Depends(get_matching_engine)
) -> Dict[str, Any]:
    """Get one catalog resource"""
    resource = engine.catalog.get_resource(resource_id)
    if resource is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Resource {resource_id} not found"
        )
    return resource_to_dict(resource)


@router.post(
    "/match",
    response_model=MatchResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
    }
)
async def match(
    request: MatchRequest,
    engine: MatchingEngine = Depends(get_matching_engine)
) -> MatchResponse:
    """
    Recommend resources for a patient.

    Runs the clinician's hard filters, the patient's logistics filters and
    compatibility scoring, then returns the top matches with rationales.
    Candidates come from the request when given, otherwise from the catalog.
    """
    limit = request.limit or settings.matching.default_limit
    if limit > settings.matching.max_limit:
        raise ValidationError(
            f"limit must not exceed {settings.matching.max_limit}",
            {"limit": limit, "max_limit": settings.matching.max_limit}
        )

    if request.resources is not None:
        candidates = [r.to_domain() for r in request.resources]
        source = "request"
    else:
        candidates = engine.candidates()
        source = "catalog"

    constraints = request.constraints.to_domain()
    assessment = request.assessment.to_domain()

    start_time = time.time()
    matches = match_resources(candidates, constraints, assessment, limit)
    MATCH_DURATION.observe(time.time() - start_time)
    MATCH_COUNT.labels(source=source).inc()

    logger.info(
        f"Matched patient {constraints.patient_id}: "
        f"{len(matches)} of {len(candidates)} candidates returned"
    )

    return MatchResponse(
        patient_id=constraints.patient_id,
        matches=[
            MatchedResourceResponse(rank=rank, **matched_resource_to_dict(m))
            for rank, m in enumerate(matches, start=1)
        ],
        total_candidates=len(candidates),
        count=len(matches),
    )
