import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    APP_NAME: str = "CabinStay"
    # Core settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development").lower()
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./cabinstay.db")

    # Country list (restcountries)
    COUNTRIES_API_URL: str = os.getenv("COUNTRIES_API_URL", "https://restcountries.com/v2/all?fields=name,flag")
    COUNTRIES_TIMEOUT_SECONDS: float = float(os.getenv("COUNTRIES_TIMEOUT_SECONDS", "10"))

    # Seed values for the singleton settings row (only used when the row is missing)
    DEFAULT_MIN_BOOKING_LENGTH: int = int(os.getenv("DEFAULT_MIN_BOOKING_LENGTH", "3"))
    DEFAULT_MAX_BOOKING_LENGTH: int = int(os.getenv("DEFAULT_MAX_BOOKING_LENGTH", "90"))
    DEFAULT_MAX_GUESTS_PER_BOOKING: int = int(os.getenv("DEFAULT_MAX_GUESTS_PER_BOOKING", "8"))
    DEFAULT_BREAKFAST_PRICE: float = float(os.getenv("DEFAULT_BREAKFAST_PRICE", "15"))

settings = Settings()
