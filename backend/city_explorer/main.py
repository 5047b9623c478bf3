import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, settings as default_settings
from .errors import GENERIC_MESSAGE, CityExplorerError
from .repositories.location_repository import LocationRepository
from .routers.explorer_router import explorer_router
from .services.google_maps_service import GoogleMapsService
from .services.location_service import LocationService
from .services.provider_client import ProviderClient
from .services.search_services import MovieService, WeatherService, YelpService

logger = logging.getLogger(__name__)

WRONG_PLACE_MESSAGE = "You are in the wrong place"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def create_app(
    settings: Optional[Settings] = None,
    maps_service: Optional[GoogleMapsService] = None,
    provider_client: Optional[ProviderClient] = None,
) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(title="City Explorer API", version="1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # サービスの初期化
    location_repository = LocationRepository(settings.DATABASE_URL)
    maps_service = maps_service or GoogleMapsService(api_key=settings.GEOCODE_API_KEY)
    provider_client = provider_client or ProviderClient()

    app.state.settings = settings
    app.state.location_repository = location_repository
    app.state.provider_client = provider_client
    app.state.location_service = LocationService(maps_service, location_repository)
    app.state.weather_service = WeatherService(provider_client, settings)
    app.state.yelp_service = YelpService(provider_client, settings)
    app.state.movie_service = MovieService(provider_client, settings)

    @app.on_event("startup")
    async def startup():
        await location_repository.connect()
        await location_repository.create_schema()
        await provider_client.connect()
        logger.info("City Explorer services started")

    @app.on_event("shutdown")
    async def shutdown():
        await provider_client.close()
        await location_repository.disconnect()

    @app.exception_handler(CityExplorerError)
    async def city_explorer_error_handler(request: Request, exc: CityExplorerError):
        if exc.status_code >= 500:
            logger.error(f"{request.url.path} failed with {type(exc).__name__}: {exc}")
        else:
            logger.warning(f"{request.url.path} rejected with {type(exc).__name__}: {exc}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return PlainTextResponse(WRONG_PLACE_MESSAGE, status_code=404)
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(f"An unexpected error occurred on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": GENERIC_MESSAGE})

    @app.get("/")
    async def root():
        return {"message": "City Explorer API", "version": "1.0"}

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    app.include_router(explorer_router)
    return app


configure_logging(default_settings.LOG_LEVEL)
app = create_app()


def run():
    # 実際の待ち受け開始は uvicorn が "Uvicorn running on ..." としてログに出す
    logger.info(f"Starting City Explorer on port: {default_settings.PORT}")
    uvicorn.run(app, host="0.0.0.0", port=default_settings.PORT)


if __name__ == "__main__":
    run()
