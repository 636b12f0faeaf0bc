from typing import Optional
from fastapi import APIRouter, Depends, Query

from reunion.core import geo
from reunion.core.exceptions import ValidationError
from reunion.core.policy import Action, require
from reunion.schemas.common import CitiesResponse, CountriesResponse, StatesResponse

router = APIRouter(
    prefix="/locations",
    tags=["Locations"],
    dependencies=[Depends(require(Action.LOOKUP_LOCATIONS))]
)

@router.get("/countries", response_model=CountriesResponse, summary="List countries")
async def list_countries() -> CountriesResponse:
    return CountriesResponse(countries=geo.list_countries())

@router.get(
    "/states",
    response_model=StatesResponse,
    summary="List states of a country",
    description="Exact, case-sensitive match on the country name. Unknown countries give an empty list."
)
async def list_states(
    country: Optional[str] = Query(None, description="Country name")
) -> StatesResponse:
    if not country:
        raise ValidationError("Country name is required")
    return StatesResponse(states=geo.list_states(country))

@router.get(
    "/cities",
    response_model=CitiesResponse,
    summary="List cities of a state",
    description="Both names are matched exactly. Unknown names give an empty list."
)
async def list_cities(
    country: Optional[str] = Query(None, description="Country name"),
    state: Optional[str] = Query(None, description="State name")
) -> CitiesResponse:
    if not country or not state:
        raise ValidationError("Country and state names are required")
    return CitiesResponse(cities=geo.list_cities(country, state))
