from pydantic import AliasChoices, Field, PrivateAttr
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "SME Financing API"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = Field(
        "sqlite+aiosqlite:///./sme_financing.db",
        validation_alias=AliasChoices(
            "database_url",
            "DATABASE_URL",
            "POSTGRES_URL",
            "POSTGRES_PRISMA_URL",
            "POSTGRES_URL_NON_POOLING",
        ),
    )
    cors_origins: str = "*"

    # Session credentials
    jwt_secret: str = "default-secret-key-change-in-production"
    jwt_expiry_hours: int = 24
    jwt_issuer: str = "sme-financing-api"

    # OTP challenges (codes are not delivered yet, so a fixed dev code is issued)
    default_otp: str = "123456"
    otp_ttl_minutes: int = 10

    # Trade license uploads
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_anon_key: str = ""
    supabase_bucket_name: str = "trade-licenses"
    upload_timeout_seconds: float = 30.0
    max_upload_mb: int = 10

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    _is_sqlite: bool = PrivateAttr(default=False)
    _is_postgresql: bool = PrivateAttr(default=False)

    def model_post_init(self, __context: object) -> None:
        # Hosted Postgres providers hand out driverless URLs; the engine is async.
        for prefix in ("postgres://", "postgresql://"):
            if self.database_url.startswith(prefix):
                object.__setattr__(
                    self, "database_url", "postgresql+asyncpg://" + self.database_url[len(prefix):]
                )
                break
        _scheme = self.database_url.split(":")[0].lower()
        object.__setattr__(self, "_is_sqlite", "sqlite" in _scheme)
        object.__setattr__(self, "_is_postgresql", "postgresql" in _scheme)

    @property
    def is_sqlite(self) -> bool:
        return self._is_sqlite

    @property
    def is_postgresql(self) -> bool:
        return self._is_postgresql

    @property
    def storage_key(self) -> str:
        """Service role key for server-side uploads, falling back to the anon key."""
        return self.supabase_service_role_key or self.supabase_anon_key


settings = Settings()
