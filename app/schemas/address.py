from typing import Any

from pydantic import BaseModel, Field


class AddressSuggestion(BaseModel):
    """One autocomplete suggestion from the geocoder."""

    id: str
    place_name: str
    main_text: str
    secondary_text: str = ""
    context: list[dict[str, Any]] = Field(default_factory=list)


class AddressDetails(BaseModel):
    """Street address split into its components."""

    street: str
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = "United States"
    formatted_address: str


class AddressSearchResponse(BaseModel):
    suggestions: list[AddressSuggestion] = Field(default_factory=list)
    details: list[AddressDetails] = Field(default_factory=list)
