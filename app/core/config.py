from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Identity ---
    PROJECT_NAME: str = "Anandamoyee_Storefront"
    STORE_NAME: str = "Anandamoyee India"

    # --- Database ---
    DATABASE_URL: str = "sqlite:///./storefront.db"
    DB_CONNECT_RETRIES: int = 10
    DB_RETRY_WAIT_SECONDS: int = 3

    # Only needed when DATABASE_URL points at the docker-compose Postgres
    POSTGRES_USER: str | None = None
    POSTGRES_PASSWORD: str | None = None
    POSTGRES_DB: str | None = None

    # --- WhatsApp (NextSMS) ---
    # The API token and owner phone are NOT here: they live in the settings
    # table so the admin panel can change them at runtime.
    NEXTSMS_API_URL: str = "https://nextsms.co.in/api/whatsapp/send"
    DEFAULT_COUNTRY_CODE: str = "91"
    WHATSAPP_TIMEOUT_SECONDS: float = 15.0

    # --- OTP ---
    OTP_TTL_SECONDS: int = 5 * 60
    OTP_RESEND_COOLDOWN_SECONDS: int = 30
    OTP_MAX_ATTEMPTS: int = 3
    OTP_SWEEP_INTERVAL_SECONDS: int = 10 * 60

    # --- Misc ---
    UPLOAD_DIR: str = "uploads"
    TIMEZONE: str = "Asia/Kolkata"
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
