from pydantic import BaseModel, Field
from typing import Optional

class LocationRecord(BaseModel):
    search_query: str
    formatted_query: str
    latitude: float
    longitude: float

class Coordinates(BaseModel):
    latitude: float
    longitude: float

class MovieQuery(BaseModel):
    city: str = Field(..., min_length=1)

class WeatherDay(BaseModel):
    forecast: str
    time: str

class Business(BaseModel):
    name: str
    image_url: Optional[str] = None
    price: Optional[str] = None
    rating: Optional[float] = None
    url: Optional[str] = None

class Movie(BaseModel):
    title: str
    overview: Optional[str] = None
    average_votes: Optional[float] = None
    total_votes: Optional[int] = None
    popularity: Optional[float] = None
    image_url: Optional[str] = None
    released_on: Optional[str] = None

class ErrorBody(BaseModel):
    error: str
