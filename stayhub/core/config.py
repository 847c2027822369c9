import os
from dotenv import load_dotenv
from pydantic import BaseModel

# Load variables from .env
load_dotenv()


class Settings(BaseModel):
    database_url: str = "sqlite+aiosqlite:///./stayhub.db"

    # Calendar days are evaluated in this zone; empty means the host's local zone
    local_timezone: str = ""

    # Pricing
    service_fee_rate: float = 0.05
    default_max_guests: int = 10

    # Telegram date picker (optional)
    telegram_bot_token: str = ""

    # Logging settings
    log_format: str = "console"  # Options: "console", "json"
    log_slow_request_threshold_ms: int = 500  # Log timing only if duration > threshold


settings = Settings(
    database_url=os.environ.get("DATABASE_URL", "sqlite+aiosqlite:///./stayhub.db"),
    local_timezone=os.environ.get("LOCAL_TIMEZONE", ""),
    service_fee_rate=float(os.environ.get("SERVICE_FEE_RATE", "0.05")),
    default_max_guests=int(os.environ.get("DEFAULT_MAX_GUESTS", "10")),
    telegram_bot_token=os.environ.get("TELEGRAM_BOT_TOKEN", ""),
    log_format=os.environ.get("LOG_FORMAT", "console"),
    log_slow_request_threshold_ms=int(
        os.environ.get("LOG_SLOW_REQUEST_THRESHOLD_MS", "500")
    ),
)
