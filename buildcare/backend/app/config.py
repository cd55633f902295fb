from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


DEV_JWT_SECRET = "dev-change-me"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ---- App ----
    app_env: str = "local"  # local|dev|prod
    app_version: str = "2026-10-19.v1"
    database_url: str = "sqlite:///./buildcare.db"
    auto_create_tables: bool = True  # prod runs alembic instead

    # ---- CORS (used by main.py) ----
    cors_allow_origins: list[str] | str = ["*"]

    # ---- Bearer credential ----
    jwt_secret: str = DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_exp_days: int = 10

    # ---- Payment authorization provider (Stripe-compatible) ----
    payments_api_key: str | None = None
    payments_base_url: str = "https://api.stripe.com/v1"
    payments_currency: str = "usd"
    payments_timeout_seconds: float = 20.0

    # ---- Inventory paging ----
    default_page_size: int = 6
    max_page_size: int = 100

    def model_post_init(self, __context) -> None:
        env = (self.app_env or "local").strip().lower()
        is_prod = env in ("prod", "production")

        # Hard fail: prod must not sign credentials with the dev secret
        if is_prod:
            if self.jwt_secret == DEV_JWT_SECRET:
                raise ValueError("SECURITY: jwt_secret must be set in prod")

            origins = self.cors_allow_origins
            if origins == "*" or origins == ["*"] or (isinstance(origins, str) and "*" in origins):
                raise ValueError("SECURITY: cors_allow_origins wildcard is not allowed in prod")


settings = Settings()
