from typing import List
from fastapi import APIRouter, Depends, Request
from ..dependencies import (
    get_location_service,
    get_movie_service,
    get_weather_service,
    get_yelp_service,
)
from ..models.schemas import Business, Coordinates, LocationRecord, Movie, MovieQuery, WeatherDay
from ..services.location_service import LocationService
from ..services.search_services import MovieService, WeatherService, YelpService
from ..utils.query_params import read_model, read_text

explorer_router = APIRouter()

@explorer_router.get("/location", response_model=LocationRecord)
async def get_location(
    request: Request,
    location_service: LocationService = Depends(get_location_service),
):
    search_query = read_text(request.query_params)
    return await location_service.resolve_location(search_query)

@explorer_router.get("/weather", response_model=List[WeatherDay])
async def get_weather(
    request: Request,
    weather_service: WeatherService = Depends(get_weather_service),
):
    coordinates = read_model(request.query_params, Coordinates)
    return await weather_service.search(coordinates)

@explorer_router.get("/yelp", response_model=List[Business])
async def get_yelp(
    request: Request,
    yelp_service: YelpService = Depends(get_yelp_service),
):
    coordinates = read_model(request.query_params, Coordinates)
    return await yelp_service.search(coordinates)

@explorer_router.get("/movies", response_model=List[Movie])
async def get_movies(
    request: Request,
    movie_service: MovieService = Depends(get_movie_service),
):
    movie_query = read_model(request.query_params, MovieQuery)
    return await movie_service.search(movie_query.city)
