from fastapi import APIRouter, HTTPException, status

from app.core.exceptions import ExtractionError
from app.models.language import Language
from app.models.location import GeoCoordinate
from app.models.regional_resources import SubsidiesAndMarkets
from app.services.regional_resources_service import request_regional_resources

router = APIRouter(prefix="/regional-resources", tags=["Subsidies & Markets"])


class RegionalResourcesRequest(GeoCoordinate):
    language: Language = Language.ENGLISH


@router.post("", response_model=SubsidiesAndMarkets)
async def get_regional_resources(request: RegionalResourcesRequest):
    """
    Get central and state subsidies plus nearby markets for a location.
    """
    coordinate = GeoCoordinate(latitude=request.latitude, longitude=request.longitude)
    try:
        return await request_regional_resources(coordinate, request.language)
    except ExtractionError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to get subsidies and markets. Please try again.",
        )
