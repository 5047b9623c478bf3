from fastapi import Request

from .services.location_service import LocationService
from .services.search_services import MovieService, WeatherService, YelpService

# サービスは create_app で組み立てて app.state に置く

def get_location_service(request: Request) -> LocationService:
    return request.app.state.location_service

def get_weather_service(request: Request) -> WeatherService:
    return request.app.state.weather_service

def get_yelp_service(request: Request) -> YelpService:
    return request.app.state.yelp_service

def get_movie_service(request: Request) -> MovieService:
    return request.app.state.movie_service
