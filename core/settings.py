from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

SUPPORTED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


def _split_csv(value: str | None) -> tuple[str, ...]:
    if not value:
        return tuple()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _env(name: str) -> str | None:
    raw_value = os.getenv(name)
    if raw_value is None:
        return None
    normalized = raw_value.strip()
    return normalized or None


def collect_missing_required_env_vars() -> list[str]:
    missing: list[str] = []

    always_required = (
        "STRIPE_SECRET_KEY",
        "STRIPE_PUBLISHABLE_KEY",
    )
    for var_name in always_required:
        if _env(var_name) is None:
            missing.append(var_name)

    if (_env("ENV") or "development").lower() == "production" and _env("SESSION_SECRET_KEY") is None:
        missing.append("SESSION_SECRET_KEY")

    return sorted(set(missing))


def collect_invalid_env_values() -> list[str]:
    invalid_values: list[str] = []

    currency = _env("CHECKOUT_CURRENCY")
    if currency is not None and (len(currency) != 3 or not currency.isalpha()):
        invalid_values.append("CHECKOUT_CURRENCY must be a 3-letter ISO currency code")

    amount = _env("CHECKOUT_AMOUNT_MINOR")
    if amount is not None:
        try:
            parsed_amount = int(amount)
            if parsed_amount <= 0:
                raise ValueError("must be positive")
        except ValueError:
            invalid_values.append("CHECKOUT_AMOUNT_MINOR must be a positive integer")

    log_level = (_env("LOG_LEVEL") or "INFO").upper()
    if log_level not in SUPPORTED_LOG_LEVELS:
        invalid_values.append("LOG_LEVEL must be one of: DEBUG, INFO, WARNING, ERROR")

    publishable_key = _env("STRIPE_PUBLISHABLE_KEY")
    if publishable_key is not None and not publishable_key.startswith("pk_"):
        invalid_values.append("STRIPE_PUBLISHABLE_KEY must be a publishable key (pk_...)")

    return invalid_values


def validate_required_environment() -> None:
    missing_vars = collect_missing_required_env_vars()
    invalid_values = collect_invalid_env_values()
    if not missing_vars and not invalid_values:
        return

    message_lines = ["Application startup blocked by invalid environment configuration."]
    if missing_vars:
        message_lines.append("")
        message_lines.append("Missing required environment variables:")
        message_lines.extend(f"- {name}" for name in missing_vars)
    if invalid_values:
        message_lines.append("")
        message_lines.append("Invalid environment values:")
        message_lines.extend(f"- {message}" for message in invalid_values)
    raise RuntimeError("\n".join(message_lines))


@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str
    session_secret_key: str
    cors_origins: tuple[str, ...]
    debug_include_error_details: bool
    stripe_secret_key: str
    stripe_publishable_key: str
    stripe_api_version: str
    checkout_currency: str
    checkout_amount_minor: int
    checkout_rate_limit: str
    rate_limit_storage_uri: str

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    validate_required_environment()

    return Settings(
        env=os.getenv("ENV", "development"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        session_secret_key=os.getenv("SESSION_SECRET_KEY", ""),
        cors_origins=_split_csv(os.getenv("CORS_ORIGINS")),
        debug_include_error_details=os.getenv("DEBUG_INCLUDE_ERROR_DETAILS", "false").lower()
        in {"1", "true", "yes"},
        stripe_secret_key=os.getenv("STRIPE_SECRET_KEY", "").strip(),
        stripe_publishable_key=os.getenv("STRIPE_PUBLISHABLE_KEY", "").strip(),
        stripe_api_version=os.getenv("STRIPE_API_VERSION", "2022-11-15"),
        checkout_currency=os.getenv("CHECKOUT_CURRENCY", "eur").strip().lower(),
        checkout_amount_minor=int(os.getenv("CHECKOUT_AMOUNT_MINOR", "999")),
        checkout_rate_limit=os.getenv("CHECKOUT_RATE_LIMIT", "30/minute"),
        rate_limit_storage_uri=os.getenv("RATE_LIMIT_STORAGE_URI", "memory://"),
    )
