"""
Centralized configuration for the Chirp backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced by prefix (e.g., RAZORPAY_*, TWILIO_*).
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Chirp API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Storage: "supabase" for production, "memory" for local development
    storage_backend: Literal["supabase", "memory"] = "supabase"

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""

    # Access tokens
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 7

    # Time-windowed policies, all evaluated in one timezone
    policy_timezone: str = "Asia/Kolkata"
    mobile_access_start_hour: int = 10
    mobile_access_end_hour: int = 13
    payment_window_start_hour: int = 10
    payment_window_end_hour: int = 11
    audio_upload_start_hour: int = 14
    audio_upload_end_hour: int = 19

    # Security ledger and one-time codes
    otp_ttl_minutes: int = 10
    login_history_limit: int = 50
    password_reset_ttl_hours: int = 24

    # Email (Resend)
    resend_api_key: str = ""
    email_from: str = "Chirp <onboarding@resend.dev>"

    # SMS (Twilio)
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_phone_number: str = ""

    # Payments (Razorpay)
    razorpay_key_id: str = ""
    razorpay_key_secret: str = ""
    payment_currency: str = "INR"

    # Media hosting
    imgbb_api_key: str = ""
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""

    # GeoLite2 City database; empty disables IP geolocation
    geoip_database_path: str = ""

    # Frontend URLs (for links in emails)
    frontend_url: str = "http://localhost:5173"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
