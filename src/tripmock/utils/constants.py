from pathlib import Path
DATA_PATH = Path(__file__).parents[1] / "data"
FIXTURE_PATH = DATA_PATH / "original.json"

TRIP_KEY = "trip"
TRIP_COLUMNS = {
    "ARRIVAL": "estimated_arrival",
    "ARRIVAL_POSIX": "estimated_arrival_posix",
    "FARE_MIN": "estimated_fare_min",
    "FARE_MAX": "estimated_fare_max",
}
FARE_FIELDS = (
    TRIP_COLUMNS["FARE_MIN"],
    TRIP_COLUMNS["FARE_MAX"],
)

CURRENCY_SYMBOL = "$"
MINOR_UNITS_PER_MAJOR = 100

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "info"
DEFAULT_CORS_ORIGINS = ["*"]
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
