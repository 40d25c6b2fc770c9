from fastapi import APIRouter, Request

from homefinder.api.deps import CurrentUser, DiagnosticsUser, Personalization
from homefinder.api.limiter import DEFAULT_RATE_LIMIT, limiter
from homefinder.api.responses import create_success_response
from homefinder.schemas.property import (
    ListingDiagnosticResponse,
    PersonalizedPropertiesResponse,
    PropertySummaryResponse,
)

router = APIRouter(prefix="/properties", tags=["Properties"])

@router.get("/personalized")
@limiter.limit(DEFAULT_RATE_LIMIT)
async def get_personalized_properties(
    request: Request,
    current_user: CurrentUser,
    service: Personalization,
) -> dict:
    """
    Listings matching the current user's saved preference.

    Users without a preference get the configured fallback with
    ``is_personalized`` set to false.
    """
    result = await service.get_personalized(current_user.id)

    response = PersonalizedPropertiesResponse(
        properties=[PropertySummaryResponse.from_property(p) for p in result.properties],
        is_personalized=result.is_personalized,
        is_near_match=result.is_near_match,
        message=result.message,
    )

    return create_success_response(data=response.model_dump(mode="json"))

@router.get("/personalized/diagnostics")
async def get_personalized_diagnostics(
    current_user: DiagnosticsUser,
    service: Personalization,
) -> dict:
    """Every candidate listing with the reasons it did or did not match."""
    evaluations = await service.explain(current_user.id)

    if evaluations is None:
        return create_success_response(data={"has_preference": False, "listings": []})

    listings = [
        ListingDiagnosticResponse.from_evaluation(e).model_dump(mode="json")
        for e in evaluations
    ]
    return create_success_response(data={
        "has_preference": True,
        "matched": sum(1 for item in listings if item["is_match"]),
        "listings": listings,
    })
