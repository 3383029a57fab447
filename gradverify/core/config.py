from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # ─────────── APP ───────────
    app_name: str = "GradVerify - Graduation Verification"
    environment: str = "dev"
    log_level: str = "INFO"

    # ─────────── API ───────────
    api_prefix: str = "/api/v1"
    request_id_header: str = "X-Request-Id"

    # ─────────── DATABASE ───────────
    database_url: str

    # ─────────── JWT / AUTH ───────────
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_access_token_minutes: int = 1440  # 24 hours

    # ─────────── UPLOADS ───────────
    max_upload_bytes: int = 10 * 1024 * 1024

    # ─────────── VERIFICATION ───────────
    recompute_max_attempts: int = 3
    default_psa_rejection_feedback: str = (
        "Details don't match. Please upload a valid PSA certificate."
    )
    default_photo_rejection_feedback: str = (
        "Photo doesn't meet the guidelines. Please upload a clear graduation "
        "photo with proper attire."
    )
    default_award_rejection_feedback: str = (
        "Award could not be verified. Please provide valid proof of the award."
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
