import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tripmock.backend.data_processing import TripData
from tripmock.backend.exceptions import MalformedFixtureError
from tripmock.utils.config import Settings, load_settings

logger = logging.getLogger(__name__)


async def malformed_fixture_handler(request: Request, exc: MalformedFixtureError) -> JSONResponse:
    logger.error(f"Malformed fixture field '{exc.field}': {exc.message}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Malformed fixture",
            "message": exc.message,
            "field": exc.field,
        },
    )


def setup_routes(app: FastAPI, trip_data: TripData) -> bool:
    """Registers GET / on the app, serving the reshaped fixture."""

    async def read_trip():
        return trip_data.get_updated_json()

    app.add_api_route("/", read_trip, methods=["GET"])
    app.add_exception_handler(MalformedFixtureError, malformed_fixture_handler)
    return True


def create_app(trip_data: TripData = None, settings: Settings = None) -> FastAPI:
    settings = settings or load_settings()
    if trip_data is None:
        trip_data = TripData(settings.fixture_path, fare_fields=settings.fare_fields)

    app = FastAPI(title="Trip Mock API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    setup_routes(app, trip_data)
    app.state.trip_data = trip_data
    app.state.settings = settings
    return app


_app = None


def __getattr__(name):
    # built on first access so importing the package never reads the fixture
    global _app
    if name == "app":
        if _app is None:
            _app = create_app()
        return _app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
