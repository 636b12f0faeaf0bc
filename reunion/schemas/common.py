from .base import BaseSchema

class DeleteResponse(BaseSchema):
    success: bool = True
    message: str

class UploadResponse(BaseSchema):
    success: bool = True
    url: str

class CountriesResponse(BaseSchema):
    countries: list[str]

class StatesResponse(BaseSchema):
    states: list[str]

class CitiesResponse(BaseSchema):
    cities: list[str]
