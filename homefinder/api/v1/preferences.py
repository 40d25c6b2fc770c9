from fastapi import APIRouter

from homefinder.api.deps import CurrentUser, Personalization
from homefinder.api.responses import create_success_response
from homefinder.schemas.preference import PreferenceResponse, PreferenceUpdate

router = APIRouter(prefix="/user-preferences", tags=["Preferences"])

@router.get("")
async def get_preferences(
    current_user: CurrentUser,
    service: Personalization,
) -> dict:

    preference = await service.get_preference(current_user.id)
    if preference is None:
        return create_success_response(data=None)

    return create_success_response(
        data=PreferenceResponse.model_validate(preference).model_dump(mode="json")
    )

@router.post("")
async def save_preferences(
    update_data: PreferenceUpdate,
    current_user: CurrentUser,
    service: Personalization,
) -> dict:
    """Create or replace the current user's preference."""
    preference = await service.save_preference(
        current_user.id,
        update_data.model_dump(),
    )

    return create_success_response(
        data=PreferenceResponse.model_validate(preference).model_dump(mode="json")
    )
