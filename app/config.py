import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_bool(name: str, default: bool = False) -> bool:
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw_value = os.getenv(name, default)
    return tuple(item.strip() for item in raw_value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    app_env: str = os.getenv("APP_ENV", "development").strip().lower()
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./crossfit_tracker.db")
    jwt_secret: str = os.getenv("JWT_SECRET", "")
    jwt_algorithm: str = os.getenv("ALGORITHM", "HS256")
    access_token_expire_days: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", "30"))
    otp_length: int = int(os.getenv("OTP_LENGTH", "6"))
    otp_ttl_seconds: int = int(os.getenv("OTP_TTL_SECONDS", "600"))
    otp_rate_limit_count: int = int(os.getenv("OTP_RATE_LIMIT_COUNT", "3"))
    otp_rate_limit_window_seconds: int = int(
        os.getenv("OTP_RATE_LIMIT_WINDOW_SECONDS", "300")
    )
    otp_sweep_interval_seconds: int = int(
        os.getenv("OTP_SWEEP_INTERVAL_SECONDS", "3600")
    )
    otp_debug: bool = _env_bool("OTP_DEBUG", False)
    otp_email_sender: str = os.getenv("OTP_EMAIL_SENDER", "")
    otp_email_subject: str = os.getenv("OTP_EMAIL_SUBJECT", "Your Login Code")
    smtp_host: str = os.getenv("SMTP_HOST", "")
    smtp_port: int = int(os.getenv("SMTP_PORT", "587"))
    smtp_username: str = os.getenv("SMTP_USERNAME", "")
    smtp_password: str = os.getenv("SMTP_PASSWORD", "")
    smtp_use_tls: bool = _env_bool("SMTP_USE_TLS", True)
    twilio_account_sid: str = os.getenv("TWILIO_ACCOUNT_SID", "")
    twilio_auth_token: str = os.getenv("TWILIO_AUTH_TOKEN", "")
    twilio_phone_number: str = os.getenv("TWILIO_PHONE_NUMBER", "")
    default_country_code: str = os.getenv("DEFAULT_COUNTRY_CODE", "+1")
    cors_origins: tuple[str, ...] = _env_list(
        "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    )

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def echo_otp_codes(self) -> bool:
        # Never echo codes back to clients in production, even with OTP_DEBUG set.
        return self.otp_debug and not self.is_production


settings = Settings()
