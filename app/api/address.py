"""Address autocomplete endpoint for delivery details."""

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_address_client, get_current_user
from app.schemas.address import AddressSearchResponse
from app.services.address import AddressClient, parse_suggestion

router = APIRouter(prefix="/api/address", tags=["address"])


@router.get(
    "/search",
    response_model=AddressSearchResponse,
    dependencies=[Depends(get_current_user)],
)
async def search(
    q: str = Query(default="", max_length=200, description="Partial address"),
    client: AddressClient = Depends(get_address_client),
) -> AddressSearchResponse:
    suggestions = await client.search_addresses(q)
    return AddressSearchResponse(
        suggestions=suggestions,
        details=[parse_suggestion(s) for s in suggestions],
    )
