import os
from dotenv import load_dotenv
import secrets

# Load environment variables from .env file
load_dotenv()


def _optional_int(value):
    if value is None or value.strip() == "":
        return None
    return int(value)


class Config:
    """Configuration class for Wardrobe Planner application"""

    # App Configuration
    APP_NAME: str = os.getenv("APP_NAME", "Wardrobe Planner")
    APP_VERSION: str = os.getenv("APP_VERSION", "0.1.0")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # JWT Configuration
    SECRET_KEY: str = os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 24 * 60))

    # Server Configuration
    HOST_URL: str = os.getenv("HOST_URL", "127.0.0.1")
    HOST_PORT: int = int(os.getenv("HOST_PORT", "3000"))

    # Database Configuration
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./data/wardrobe.db")
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "false").lower() in ("1", "true", "yes")

    # CORS Configuration
    CORS_ORIGINS: list = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")

    # Image storage
    MEDIA_ROOT: str = os.getenv("MEDIA_ROOT", "data/media")
    IMAGE_MAX_BYTES: int = int(os.getenv("IMAGE_MAX_BYTES", 5 * 1024 * 1024))
    SIGNED_URL_EXPIRE_SECONDS: int = int(os.getenv("SIGNED_URL_EXPIRE_SECONDS", 60 * 60 * 24 * 365))

    # Outfit generation
    # Leave unset for a fresh random jitter on every request
    OUTFIT_RANDOM_SEED = _optional_int(os.getenv("OUTFIT_RANDOM_SEED"))

    # Calendar
    UPCOMING_EVENTS_LIMIT: int = int(os.getenv("UPCOMING_EVENTS_LIMIT", "5"))

    # Display names of wardrobe categories
    CATEGORY_NAMES: dict = {
        "top": "Tops",
        "bottom": "Bottoms",
        "traditional": "Traditional Wear",
        "footwear": "Footwear",
        "bags": "Bags",
        "watch": "Watches",
        "shoes": "Shoes",
        "accessories": "Accessories",
    }


# Create global config instance
config = Config()
